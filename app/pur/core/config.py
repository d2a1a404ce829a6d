"""Configuration model and I/O for pur.

Settings are resolved in three layers, later layers winning:

1. Built-in defaults (the paths used by a stock installation).
2. The TOML file at /etc/pur/config.toml (or $PUR_CONFIG).
3. Environment overrides: PUR_PATH (or the older PUR_REPOS), PUR_DB_DIR,
   PUR_ROOT.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pur.core.errors import ConfigError, ConfigParseError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("/etc/pur/config.toml")
DEFAULT_DB_DIR = Path("/var/db/installed")
DEFAULT_ROOT = Path("/")
DEFAULT_REPOS: tuple[Path, ...] = (
    Path("/usr/repo/pur"),
    Path("/usr/repo/pur-community"),
    Path("/usr/repo/unofficial"),
)


class PurConfig(BaseModel):
    """Effective configuration for pur.

    Attributes:
        db_dir: Directory holding one install record per built package.
        root: System root the projection symlinks are written under.
        repos: Repository directories, searched in order.
    """

    model_config = ConfigDict(extra="forbid")

    db_dir: Annotated[
        Path,
        Field(description="Install database directory"),
    ] = DEFAULT_DB_DIR
    root: Annotated[
        Path,
        Field(description="System root for symlink projection"),
    ] = DEFAULT_ROOT
    repos: Annotated[
        list[Path],
        Field(default_factory=lambda: list(DEFAULT_REPOS), description="Repository directories"),
    ]

    @field_validator("db_dir", "root")
    @classmethod
    def validate_absolute(cls, v: Path) -> Path:
        """Require absolute directories so sandbox symlinks stay valid."""
        if not v.is_absolute():
            msg = f"path must be absolute, got '{v}'"
            raise ValueError(msg)
        return v


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        $PUR_CONFIG if set, otherwise /etc/pur/config.toml.
    """
    override = os.environ.get("PUR_CONFIG")
    if override:
        return Path(override)
    return DEFAULT_CONFIG_PATH


def parse_repo_list(value: str) -> list[Path]:
    """Split a colon-separated repository list, dropping empty segments."""
    return [Path(part) for part in value.split(":") if part]


def _env_overrides() -> dict[str, object]:
    """Collect configuration overrides from the environment."""
    overrides: dict[str, object] = {}

    repos = os.environ.get("PUR_PATH")
    if repos is None:
        repos = os.environ.get("PUR_REPOS")
    if repos is not None:
        overrides["repos"] = parse_repo_list(repos)

    db_dir = os.environ.get("PUR_DB_DIR")
    if db_dir:
        overrides["db_dir"] = db_dir

    root = os.environ.get("PUR_ROOT")
    if root:
        overrides["root"] = root

    return overrides


def _load_file(path: Path) -> dict[str, object]:
    """Read the raw TOML table from a config file, or {} if absent."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e


def load_config(path: Path | None = None) -> PurConfig:
    """Load the effective configuration.

    Args:
        path: Config file to read. If None, uses get_config_path().

    Returns:
        Validated PurConfig with environment overrides applied.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()
    data = _load_file(config_path)
    if data:
        logger.debug("Loaded configuration from %s", config_path)

    data.update(_env_overrides())

    try:
        return PurConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _config_to_dict(config: PurConfig) -> dict[str, object]:
    """Convert PurConfig to a TOML-serialisable dictionary."""
    return {
        "db_dir": str(config.db_dir),
        "root": str(config.root),
        "repos": [str(repo) for repo in config.repos],
    }


def save_config(config: PurConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary sibling first and moved into place
    with os.replace().

    Args:
        config: The configuration to save.
        path: Destination. If None, uses get_config_path().

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
