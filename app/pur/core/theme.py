"""Colour theme for pur's console output.

Every style used in markup (``[installed]``, ``[error]``, ...) is defined
here. Users may override individual colours in
``~/.config/pur/theme.toml``::

    [colors]
    installed = "#00ff00"
    error = "#ff5555"
"""

import logging
import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class ThemeColors(BaseModel):
    """Hex colours for every semantic style.

    Attributes:
        muted: Secondary text such as versions and paths.
        header: Table headers.
        border: Table borders.
        success: Completed actions.
        warning: Skipped repositories and other non-fatal problems.
        error: Failures.
        info: Progress messages.
        installed: Packages that are built and linked.
        built: Packages with a sandbox but no links.
        available: Packages only present in a repository.
    """

    model_config = ConfigDict(extra="forbid")

    muted: str = "#8a939b"
    header: str = "#5fafd7"
    border: str = "#3a4a5a"

    success: str = "#5fd787"
    warning: str = "#ffaf5f"
    error: str = "#ff5f5f"
    info: str = "#5fd7d7"

    installed: str = "#87d75f"
    built: str = "#d7d75f"
    available: str = "#8a939b"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex(cls, v: object) -> str:
        """Accept only #RGB or #RRGGBB strings."""
        if not isinstance(v, str):
            msg = f"expected a colour string, got {type(v).__name__}"
            raise ValueError(msg)
        color = v.strip()
        if not _HEX_COLOR.fullmatch(color):
            msg = f"'{color}' is not a #RGB or #RRGGBB colour"
            raise ValueError(msg)
        return color


def get_user_theme_path() -> Path:
    """Get the user theme file, ~/.config/pur/theme.toml."""
    return Path.home() / ".config" / "pur" / "theme.toml"


def _read_overrides(path: Path) -> dict[str, object]:
    """Read the ``[colors]`` table of a theme file.

    A missing or unreadable file yields no overrides.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colours with user overrides applied.

    Args:
        path: Theme file to read. If None, uses get_user_theme_path().

    Returns:
        ThemeColors; the defaults if the overrides are invalid.
    """
    overrides = _read_overrides(path or get_user_theme_path())
    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid theme colours, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme from a set of colours.

    Args:
        colors: Colours to use. If None, loads them with load_theme().

    Returns:
        Theme defining one style per colour plus derived styles.
    """
    colors = colors or load_theme()
    styles = colors.model_dump()
    styles.update(
        {
            "error": f"bold {colors.error}",
            "installed": f"bold {colors.installed}",
            "bold_header": f"bold {colors.header}",
        }
    )
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, building it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
