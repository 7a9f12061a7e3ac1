"""Resolve themed class maps with ``@group`` references.

Styles come from two YAML files: the active theme's ``style.yaml`` and the
project's own ``content/style.yaml``, deep-merged with the project winning.
Root-level string entries act as named groups that any class string can pull
in with ``@name``; entries keyed by a component identifier hold that
component's per-element class map.

Examples
--------
>>> from sitespec.styles.resolver import resolve_class_string
>>> styles = {"g1": "text-sm", "g2": "@g1 font-bold"}
>>> resolve_class_string("@g2 text-lg", styles)
'font-bold text-lg'
"""

from __future__ import annotations

import logging
import re
import typing as typ

from sitespec.cache import ResolutionCache
from sitespec.content.merge import deep_merge
from sitespec.content.scanner import load_yaml_file
from sitespec.errors import ContentLoadError

from .reconcile import reconcile_classes

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from sitespec.config import SiteConfig

logger = logging.getLogger(__name__)

STYLES_CACHE_KEY = "styles"
GROUP_REFERENCE_PATTERN = re.compile(r"(@[A-Za-z0-9_-]+)")

StyleTree = dict[str, typ.Any]


def load_style_file(path: Path) -> StyleTree:
    """Return the style mapping stored at ``path``.

    Styling is cosmetic, so a missing file yields ``{}`` silently and a
    malformed one is logged and also yields ``{}``.
    """
    if not path.is_file():
        return {}
    try:
        loaded = load_yaml_file(path)
    except (ContentLoadError, OSError):
        logger.exception("Error loading style file: %s", path)
        return {}
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.error("Style file %s must contain a mapping; ignoring it", path)
        return {}
    return loaded


def resolve_class_string(
    value: str,
    styles: cabc.Mapping[str, typ.Any],
    *,
    _active: frozenset[str] = frozenset(),
) -> str:
    """Expand ``@group`` tokens in ``value`` and reconcile the result.

    Parameters
    ----------
    value : str
        Whitespace-separated classes, optionally containing ``@group`` tokens.
    styles : Mapping
        Merged style tree; root-level string entries are the groups.

    Returns
    -------
    str
        Reconciled class string. Unknown groups, non-string groups, and a
        group that refers back to itself expand to nothing.
    """
    if not value:
        return ""
    fragments: list[str] = []
    for raw in GROUP_REFERENCE_PATTERN.split(value):
        part = raw.strip()
        if not part:
            continue
        if not part.startswith("@"):
            fragments.append(part)
            continue
        name = part[1:]
        group = styles.get(name)
        if not isinstance(group, str):
            continue
        if name in _active:
            logger.warning("Style group '@%s' references itself; skipping", name)
            continue
        fragments.append(
            resolve_class_string(group, styles, _active=_active | {name})
        )
    return reconcile_classes(*fragments)


def resolve_component_classes(
    classes: cabc.Mapping[str, typ.Any] | None, styles: cabc.Mapping[str, typ.Any]
) -> dict[str, typ.Any]:
    """Resolve every class string in a (possibly nested) class map."""
    resolved: dict[str, typ.Any] = {}
    for key, value in (classes or {}).items():
        match value:
            case str():
                resolved[key] = resolve_class_string(value, styles)
            case dict():
                resolved[key] = resolve_component_classes(value, styles)
            case _:
                resolved[key] = value
    return resolved


class StyleResolver:
    """Serve resolved class maps for styled identifiers."""

    def __init__(
        self, config: SiteConfig, *, cache: ResolutionCache | None = None
    ) -> None:
        self.config = config
        self.cache = cache or ResolutionCache(config.mode)

    def load_styles(self) -> StyleTree:
        """Return the merged theme and user style tree."""
        return self.cache.get_or_compute(STYLES_CACHE_KEY, self._load)

    def _load(self) -> StyleTree:
        theme_styles = load_style_file(self.config.theme_style_path)
        user_styles = load_style_file(self.config.user_style_path)
        return deep_merge(theme_styles, user_styles)

    def component_classes(
        self, classes: cabc.Mapping[str, typ.Any] | None
    ) -> dict[str, typ.Any]:
        """Resolve ``classes`` against the merged style tree."""
        if not classes:
            return {}
        return resolve_component_classes(classes, self.load_styles())

    def get_classes(
        self,
        identifier: str,
        overrides: cabc.Mapping[str, typ.Any] | None = None,
    ) -> dict[str, typ.Any]:
        """Return the final class map for ``identifier``.

        Parameters
        ----------
        identifier : str
            Style tree key, for example ``"Component+Button"``.
        overrides : Mapping, optional
            Per-use class map supplied by content; resolved the same way and
            merged over the theme defaults field by field.

        Returns
        -------
        dict
            Class strings ready to apply to output elements.
        """
        defaults = self.load_styles().get(identifier)
        if not isinstance(defaults, dict):
            defaults = {}
        resolved_defaults = self.component_classes(defaults)
        resolved_overrides = self.component_classes(overrides)
        return deep_merge(resolved_defaults, resolved_overrides)


__all__ = [
    "GROUP_REFERENCE_PATTERN",
    "STYLES_CACHE_KEY",
    "StyleResolver",
    "StyleTree",
    "load_style_file",
    "resolve_class_string",
    "resolve_component_classes",
]
