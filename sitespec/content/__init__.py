"""Load, merge, and resolve YAML content trees.

The pipeline runs leaves first: :func:`scan` parses each content root,
:func:`merge_sources` layers installed modules under the project, and
:func:`resolve` expands shared component references. :class:`ContentStore`
bundles the three behind a mode-aware cache.

Examples
--------
>>> from sitespec.content import deep_merge
>>> deep_merge({"a": {"b": 1}}, {"a": {"c": 2}})
{'a': {'b': 1, 'c': 2}}
"""

from .merge import deep_merge, merge_sources
from .resolver import FormIndex, ReferenceResolver, find_missing_references, resolve
from .scanner import (
    ContentTree,
    discover_module_roots,
    load_module_trees,
    load_yaml_file,
    scan,
    spec_key,
)
from .store import ContentStore, load_content_tree, resolve_content

__all__ = [
    "ContentStore",
    "ContentTree",
    "FormIndex",
    "ReferenceResolver",
    "deep_merge",
    "discover_module_roots",
    "find_missing_references",
    "load_content_tree",
    "load_module_trees",
    "load_yaml_file",
    "merge_sources",
    "resolve",
    "resolve_content",
    "scan",
    "spec_key",
]
