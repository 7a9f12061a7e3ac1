"""Theme style loading, ``@group`` expansion, and class reconciliation.

Examples
--------
>>> from sitespec.styles import resolve_component_classes
>>> resolve_component_classes({"title": "@heading"}, {"heading": "font-bold"})
{'title': 'font-bold'}
"""

from .reconcile import class_group, reconcile_classes
from .resolver import (
    StyleResolver,
    StyleTree,
    load_style_file,
    resolve_class_string,
    resolve_component_classes,
)

__all__ = [
    "StyleResolver",
    "StyleTree",
    "class_group",
    "load_style_file",
    "reconcile_classes",
    "resolve_class_string",
    "resolve_component_classes",
]
