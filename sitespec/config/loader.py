"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import (
    DEFAULT_SITE_NAME,
    DEFAULT_THEME,
    SiteConfig,
    SiteConfigError,
    parse_mode,
)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site layout.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config.yaml``). Relative directories inside the file resolve against
        the directory that holds it.

    Returns
    -------
    SiteConfig
        Parsed configuration with content, modules, and themes directories,
        the active theme, and the run mode.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level YAML structure is not a mapping, a section has the
        wrong shape, or ``mode`` is not a known run mode.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sitespec.config import load_site_config
    >>> config = load_site_config(Path("config.yaml"))  # doctest: +SKIP
    >>> config.theme  # doctest: +SKIP
    'default'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    site = _section(raw, "site")
    ui = _section(raw, "ui")
    base_dir = path.parent

    return SiteConfig(
        content_dir=_resolve_dir(base_dir, site.get("content_dir", "content")),
        modules_dir=_resolve_dir(base_dir, site.get("modules_dir", "modules")),
        themes_dir=_resolve_dir(base_dir, site.get("themes_dir", "themes")),
        name=str(site.get("name") or DEFAULT_SITE_NAME),
        theme=str(ui.get("theme") or DEFAULT_THEME),
        mode=parse_mode(raw.get("mode", "production")),
    )


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty mapping."""
    match raw.get(key):
        case None:
            return {}
        case dict() as section:
            return section
        case _:
            msg = f"Configuration section '{key}' must be a mapping."
            raise SiteConfigError(msg)


def _resolve_dir(base_dir: Path, value: object) -> Path:
    directory = Path(str(value))
    if directory.is_absolute():
        return directory
    return base_dir / directory


__all__ = ["load_site_config"]
