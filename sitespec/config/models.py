"""Typed dataclasses describing sitespec site configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from sitespec._constants import STYLE_FILENAME
from sitespec.errors import SiteConfigError

Mode = typ.Literal["development", "production"]
MODES: tuple[str, ...] = typ.get_args(Mode)

DEFAULT_SITE_NAME = "Website"
DEFAULT_THEME = "default"


def parse_mode(value: object) -> Mode:
    """Validate ``value`` as a run mode, accepting the ``dev``/``prod`` aliases."""
    text = str(value).strip().lower()
    aliases = {"dev": "development", "prod": "production"}
    text = aliases.get(text, text)
    if text not in MODES:
        msg = f"Unknown mode '{value}'. Expected one of: {', '.join(MODES)}"
        raise SiteConfigError(msg)
    return typ.cast("Mode", text)


@dc.dataclass(slots=True)
class SiteConfig:
    """Filesystem layout and run mode for one site."""

    content_dir: Path
    modules_dir: Path
    themes_dir: Path
    name: str = DEFAULT_SITE_NAME
    theme: str = DEFAULT_THEME
    mode: Mode = "production"

    @classmethod
    def from_root(cls, root: Path, *, mode: Mode = "production") -> SiteConfig:
        """Return the conventional layout rooted at ``root``."""
        return cls(
            content_dir=root / "content",
            modules_dir=root / "modules",
            themes_dir=root / "themes",
            mode=mode,
        )

    @property
    def theme_style_path(self) -> Path:
        """Location of the active theme's style tree."""
        return self.themes_dir / self.theme / STYLE_FILENAME

    @property
    def user_style_path(self) -> Path:
        """Location of the project's style overrides."""
        return self.content_dir / STYLE_FILENAME


__all__ = [
    "DEFAULT_SITE_NAME",
    "DEFAULT_THEME",
    "MODES",
    "Mode",
    "SiteConfig",
    "SiteConfigError",
    "parse_mode",
]
