"""Unit tests for the Package entity.

Tests recipe parsing, install record status, and the build, install,
uninstall and update lifecycle against real sandboxes in tmp_path.
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pur.core.errors import (
    NoDependsError,
    NoInstallScriptError,
    NotInstalledError,
    NoVersionError,
    ParseError,
)
from pur.core.package import Package
from pur.models.package import PackageStatus


class TestFromDir:
    """Tests for Package.from_dir()."""

    def test_parses_recipe(self, make_package, pur_env) -> None:
        """Name, version, depends and directories are read from the recipe."""
        recipe = make_package("pfetch", version="0.6.0", depends=["sh", "coreutils"])

        package = Package.from_dir(recipe)

        assert package.name == "pfetch"
        assert package.version == "0.6.0"
        assert package.depends == ["sh", "coreutils"]
        assert package.dir == recipe
        assert package.db_dir == pur_env.db_dir
        assert package.files_dir == pur_env.db_dir / "pfetch" / "files"

    def test_version_whitespace_is_stripped(self, make_package) -> None:
        """All whitespace is removed from the version string."""
        recipe = make_package("pfetch", version=" 1. 2\t\n")

        assert Package.from_dir(recipe).version == "1.2"

    def test_blank_depends_lines_are_skipped(self, make_package) -> None:
        """Empty lines in the depends file are ignored."""
        recipe = make_package("pfetch")
        (recipe / "depends").write_text("a\n\nb\n\n")

        assert Package.from_dir(recipe).depends == ["a", "b"]

    def test_empty_depends(self, make_package) -> None:
        """An empty depends file yields no dependencies."""
        recipe = make_package("pfetch")

        assert Package.from_dir(recipe).depends == []

    def test_missing_version(self, make_package) -> None:
        """A recipe without a version file raises NoVersionError."""
        recipe = make_package("pfetch")
        (recipe / "version").unlink()

        with pytest.raises(NoVersionError):
            Package.from_dir(recipe)

    def test_empty_version(self, make_package) -> None:
        """A whitespace-only version file raises NoVersionError."""
        recipe = make_package("pfetch", version="  ")

        with pytest.raises(NoVersionError):
            Package.from_dir(recipe)

    def test_missing_depends(self, make_package) -> None:
        """A recipe without a depends file raises NoDependsError."""
        recipe = make_package("pfetch")
        (recipe / "depends").unlink()

        with pytest.raises(NoDependsError):
            Package.from_dir(recipe)

    def test_explicit_db_dir(self, make_package, tmp_path: Path) -> None:
        """An explicit database directory overrides the configured one."""
        recipe = make_package("pfetch")

        package = Package.from_dir(recipe, db_dir=tmp_path / "other-db")

        assert package.install_dir == tmp_path / "other-db" / "pfetch"


class TestStatus:
    """Tests for install record inspection."""

    def test_available_when_never_built(self, make_package, pur_env) -> None:
        """A fresh package is neither built nor installed."""
        package = Package.from_dir(make_package("pfetch"))

        assert package.get_install_data() is None
        assert not package.is_built()
        assert not package.is_installed()
        assert package.status() == PackageStatus.AVAILABLE

    def test_status_lookup_creates_db_dir(self, make_package, pur_env) -> None:
        """Reading status creates the database directory on demand."""
        package = Package.from_dir(make_package("pfetch"))

        package.is_built()

        assert pur_env.db_dir.is_dir()

    def test_built_without_marker(self, make_package, pur_env) -> None:
        """A version record without the marker means built, not installed."""
        package = Package.from_dir(make_package("pfetch"))
        record = pur_env.db_dir / "pfetch"
        record.mkdir(parents=True)
        (record / "version").write_text("1.0")

        data = package.get_install_data()

        assert data is not None
        assert data.version == "1.0"
        assert package.is_built()
        assert not package.is_installed()
        assert package.status() == PackageStatus.BUILT

    def test_installed_with_marker(self, make_package, pur_env) -> None:
        """The installed marker makes the package installed."""
        package = Package.from_dir(make_package("pfetch"))
        record = pur_env.db_dir / "pfetch"
        record.mkdir(parents=True)
        (record / "version").write_text("1.0")
        (record / "installed").touch()

        assert package.is_installed()
        assert package.status() == PackageStatus.INSTALLED

    def test_empty_version_record_is_not_built(self, make_package, pur_env) -> None:
        """An install record with an empty version file is ignored."""
        package = Package.from_dir(make_package("pfetch"))
        record = pur_env.db_dir / "pfetch"
        record.mkdir(parents=True)
        (record / "version").write_text("")
        (record / "installed").touch()

        assert not package.is_built()
        assert not package.is_installed()

    def test_unusable_db_dir(self, make_package) -> None:
        """If the database cannot be created the package reads as not built."""
        package = Package.from_dir(make_package("pfetch"))

        with patch("pur.core.package.ensure_db_dir", side_effect=RuntimeError("denied")):
            assert package.get_install_data() is None


class TestBuild:
    """Tests for Package.build()."""

    def test_build_writes_sandbox_and_version(self, make_package, pur_env) -> None:
        """The install script populates files/ and the version is recorded."""
        package = Package.from_dir(make_package("pfetch", version="0.6.0"))

        package.build()

        assert (package.files_dir / "usr/bin/pfetch").read_text() == "pfetch\n"
        assert (package.install_dir / "version").read_text() == "0.6.0"
        assert package.is_built()
        assert not package.is_installed()
        assert pur_env.build_order() == ["pfetch"]

    def test_build_script_arguments_and_cwd(self, make_package) -> None:
        """The script gets files_dir and the recipe dir, and runs in files_dir."""
        script = '#!/bin/sh\npwd > "$1/cwd"\necho "$2" > "$1/recipe"\n'
        recipe = make_package("pfetch", script=script)
        package = Package.from_dir(recipe)
        before = Path.cwd()

        package.build()

        cwd = Path((package.files_dir / "cwd").read_text().strip())
        assert cwd.resolve() == package.files_dir.resolve()
        assert (package.files_dir / "recipe").read_text().strip() == str(recipe)
        assert Path.cwd() == before

    def test_build_replaces_old_version_record(self, make_package) -> None:
        """Rebuilding overwrites the previous version record."""
        package = Package.from_dir(make_package("pfetch"))
        package.install_dir.mkdir(parents=True)
        (package.install_dir / "version").write_text("0.1-old-and-longer")

        package.build()

        assert (package.install_dir / "version").read_text() == "1.0"

    def test_nonzero_exit_is_only_a_warning(
        self, make_package, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failing install script still leaves a built package."""
        package = Package.from_dir(make_package("pfetch", script="#!/bin/sh\nexit 3\n"))

        with caplog.at_level(logging.WARNING, logger="pur.core.package"):
            package.build()

        assert package.is_built()
        assert "exited with status 3" in caplog.text

    def test_missing_install_script(self, make_package) -> None:
        """A recipe without an install script raises NoInstallScriptError."""
        recipe = make_package("pfetch")
        (recipe / "install").unlink()
        package = Package.from_dir(recipe)

        with pytest.raises(NoInstallScriptError):
            package.build()

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can execute any file")
    def test_non_executable_install_script(self, make_package) -> None:
        """An install script without the executable bit cannot be spawned."""
        recipe = make_package("pfetch")
        (recipe / "install").chmod(0o644)
        package = Package.from_dir(recipe)

        with pytest.raises(NoInstallScriptError):
            package.build()


class TestInstall:
    """Tests for Package.install()."""

    def test_install_projects_and_marks(self, make_package, pur_env) -> None:
        """Installing creates the marker and the projection symlinks."""
        package = Package.from_dir(make_package("pfetch"))
        package.build()

        package.install()

        assert (package.install_dir / "installed").exists()
        link = pur_env.root / "usr/bin/pfetch/pfetch"
        assert link.is_symlink()
        assert link.resolve() == (package.files_dir / "usr/bin/pfetch").resolve()
        assert (pur_env.root / "usr/lib/pfetch/pfetch/libpfetch.so").is_symlink()
        assert package.status() == PackageStatus.INSTALLED

    def test_install_twice_is_idempotent(self, make_package, pur_env) -> None:
        """Re-projecting an installed package succeeds."""
        package = Package.from_dir(make_package("pfetch"))
        package.build()
        package.install()

        package.install()

        assert (pur_env.root / "usr/bin/pfetch/pfetch").is_symlink()


class TestUninstall:
    """Tests for Package.uninstall()."""

    def test_uninstall_not_built(self, make_package) -> None:
        """Removing a package that was never built raises NotInstalledError."""
        package = Package.from_dir(make_package("pfetch"))

        with pytest.raises(NotInstalledError):
            package.uninstall()

    def test_uninstall_removes_links_then_record(self, make_package, pur_env) -> None:
        """Uninstalling withdraws the projection and deletes the record."""
        package = Package.from_dir(make_package("pfetch"))
        package.build()
        package.install()

        package.uninstall()

        assert not package.install_dir.exists()
        assert not (pur_env.root / "usr/bin/pfetch").exists()
        assert not (pur_env.root / "usr/lib/pfetch").exists()
        assert package.status() == PackageStatus.AVAILABLE

    def test_uninstall_withdraws_before_deleting(self, make_package) -> None:
        """Symlinks are withdrawn while the sandbox they point at still exists."""
        package = Package.from_dir(make_package("pfetch"))
        package.build()
        package.install()
        calls: list[str] = []
        structure = package.structure
        remove = structure.remove_symlinks
        delete = structure.delete_all

        def _remove() -> None:
            calls.append("remove_symlinks")
            remove()

        def _delete() -> None:
            calls.append("delete_all")
            delete()

        with (
            patch.object(structure, "remove_symlinks", side_effect=_remove),
            patch.object(structure, "delete_all", side_effect=_delete),
        ):
            package.uninstall()

        assert calls[0] == "remove_symlinks"
        assert "delete_all" in calls

    def test_uninstall_built_only(self, make_package) -> None:
        """A built but not installed package can still be removed."""
        package = Package.from_dir(make_package("pfetch"))
        package.build()

        package.uninstall()

        assert not package.install_dir.exists()


class TestUpdate:
    """Tests for Package.update()."""

    def test_update_rebuilds_newer_version(self, make_package, pur_env) -> None:
        """Updating rebuilds from the recipe and reprojects."""
        recipe = make_package("pfetch", version="1.0")
        Package.from_dir(recipe).build()
        Package.from_dir(recipe).install()
        (recipe / "version").write_text("1.1\n")
        package = Package.from_dir(recipe)

        package.update()

        assert (package.install_dir / "version").read_text() == "1.1"
        assert (pur_env.root / "usr/bin/pfetch/pfetch").is_symlink()
        assert pur_env.build_order() == ["pfetch", "pfetch"]

    def test_update_stops_at_failed_build(self, make_package, pur_env) -> None:
        """A failed rebuild raises and no projection is recreated."""
        recipe = make_package("pfetch")
        package = Package.from_dir(recipe)
        package.build()
        package.install()
        (recipe / "install").unlink()

        with pytest.raises(ParseError):
            package.update()

        assert not (pur_env.root / "usr/bin/pfetch").exists()
