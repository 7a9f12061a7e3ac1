"""Deep-merge helpers and the module/project source merger.

Content from installed modules is layered underneath the project's own
content. Mappings merge key by key; every other value (scalars and lists) from
the higher-priority side replaces the lower one wholesale.

Examples
--------
>>> from sitespec.content.merge import deep_merge
>>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
{'a': 1, 'b': {'c': 2, 'd': 3}}
>>> deep_merge({"items": [1, 2]}, {"items": [3]})
{'items': [3]}
"""

from __future__ import annotations

import copy
import logging
import typing as typ

from sitespec._constants import MENUS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .scanner import ContentTree

logger = logging.getLogger(__name__)


def deep_merge(
    base: cabc.Mapping[str, typ.Any], override: cabc.Mapping[str, typ.Any] | None
) -> dict[str, typ.Any]:
    """Recursively merge ``override`` onto ``base`` without mutating either.

    Parameters
    ----------
    base : Mapping
        Lower-priority mapping.
    override : Mapping or None
        Higher-priority mapping; its scalars and lists win on collision.

    Returns
    -------
    dict
        A new mapping. Values taken from ``override`` are deep-copied; values
        that only exist in ``base`` are shared with it.
    """
    result: dict[str, typ.Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def merge_sources(
    module_trees: cabc.Iterable[ContentTree], project_tree: ContentTree
) -> ContentTree:
    """Layer module content trees underneath the project tree.

    Module trees merge together in enumeration order and the project tree is
    merged last so its values win. Each module's ``menus`` namespace is
    discarded first: navigation is owned by the project alone.
    """
    merged: dict[str, typ.Any] = {}
    for tree in module_trees:
        contribution = {key: value for key, value in tree.items() if key != MENUS}
        if MENUS in tree:
            logger.debug(
                "Discarding %d module menu entries", len(tree[MENUS] or {})
            )
        merged = deep_merge(merged, contribution)
    merged = deep_merge(merged, project_tree)
    return typ.cast("ContentTree", merged)


__all__ = ["deep_merge", "merge_sources"]
