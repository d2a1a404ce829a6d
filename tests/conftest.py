"""Pytest configuration and shared fixtures.

Every test runs against a private install database, system root and
repository inside its tmp_path, so nothing touches /var/db or /usr.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest

DEFAULT_INSTALL_SCRIPT = """#!/bin/sh
mkdir -p "$1/usr/bin" "$1/usr/lib/{name}"
echo "{name}" > "$1/usr/bin/{name}"
echo "lib" > "$1/usr/lib/{name}/lib{name}.so"
echo "build {name}" >> "{log}"
"""


@dataclass
class PurEnv:
    """Locations of the isolated pur environment for one test."""

    base: Path
    db_dir: Path
    root: Path
    repo: Path
    config_path: Path

    @property
    def build_log(self) -> Path:
        """File that default install scripts append "build <name>" lines to."""
        return self.base / "build.log"

    def build_order(self) -> list[str]:
        """Package names in the order their install scripts ran."""
        if not self.build_log.exists():
            return []
        return [line.split(" ", 1)[1] for line in self.build_log.read_text().splitlines()]


MakePackage = Callable[..., Path]


@pytest.fixture(autouse=True)
def pur_env(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> PurEnv:
    """Point pur's database, root, repositories and config into a private temp dir."""
    tmp_path = tmp_path_factory.mktemp("pur_env")
    env = PurEnv(
        base=tmp_path,
        db_dir=tmp_path / "db",
        root=tmp_path / "root",
        repo=tmp_path / "repo",
        config_path=tmp_path / "etc" / "config.toml",
    )
    env.root.mkdir()
    env.repo.mkdir()

    monkeypatch.setenv("PUR_DB_DIR", str(env.db_dir))
    monkeypatch.setenv("PUR_ROOT", str(env.root))
    monkeypatch.setenv("PUR_PATH", str(env.repo))
    monkeypatch.setenv("PUR_CONFIG", str(env.config_path))
    monkeypatch.delenv("PUR_REPOS", raising=False)
    return env


@pytest.fixture
def make_package(pur_env: PurEnv) -> MakePackage:
    """Factory writing a package recipe into a repository directory.

    Args (of the returned callable):
        name: Package name.
        version: Contents of the version file.
        depends: Dependency names, one per line.
        script: Install script body; defaults to one that writes a binary
            and a library and logs the build.
        repo: Repository directory; defaults to the test repository.

    Returns:
        Path to the recipe directory.
    """

    def _make(
        name: str,
        version: str = "1.0",
        depends: Sequence[str] = (),
        script: str | None = None,
        repo: Path | None = None,
    ) -> Path:
        recipe = (repo or pur_env.repo) / name
        recipe.mkdir(parents=True)
        (recipe / "version").write_text(f"{version}\n")
        (recipe / "depends").write_text("".join(f"{dep}\n" for dep in depends))
        install = recipe / "install"
        install.write_text(
            script
            if script is not None
            else DEFAULT_INSTALL_SCRIPT.format(name=name, log=pur_env.build_log)
        )
        install.chmod(0o755)
        return recipe

    return _make


@pytest.fixture
def make_update_script(pur_env: PurEnv) -> Callable[..., Path]:
    """Factory writing an executable ``update`` script into a repository."""

    def _make(body: str = "exit 0\n", repo: Path | None = None) -> Path:
        script = (repo or pur_env.repo) / "update"
        script.write_text(f"#!/bin/sh\n{body}")
        script.chmod(0o755)
        return script

    return _make
