"""Cached access to the fully resolved content tree.

:class:`ContentStore` wires the pipeline together: it scans module and project
content roots, merges them with project precedence, resolves shared component
references in ``pages``, attaches the ``forms`` index, and memoises the result
in a :class:`~sitespec.cache.ResolutionCache`. Namespaces are served as deep
copies so callers never mutate the cached tree.

Examples
--------
>>> from pathlib import Path
>>> from sitespec.config import SiteConfig
>>> from sitespec.content import ContentStore
>>> store = ContentStore(SiteConfig.from_root(Path("site")))  # doctest: +SKIP
>>> store.get_specs("pages")["home"]["sections"][0]  # doctest: +SKIP
{'layout': 'SingleColumn', ...}
"""

from __future__ import annotations

import copy
import typing as typ

from sitespec._constants import FORMS, PAGES, SHARED
from sitespec.cache import ResolutionCache
from sitespec.errors import UnknownNamespaceError

from .merge import merge_sources
from .resolver import find_missing_references, resolve
from .scanner import ContentTree, load_module_trees, scan

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sitespec.config import SiteConfig

CONTENT_CACHE_KEY = "content"

Loader = typ.Callable[["SiteConfig"], ContentTree]


def load_content_tree(config: SiteConfig) -> ContentTree:
    """Scan module roots and the project root, returning the merged tree."""
    module_trees = load_module_trees(config.modules_dir)
    project_tree = scan(config.content_dir)
    return merge_sources(module_trees, project_tree)


def resolve_content(tree: ContentTree) -> ContentTree:
    """Return ``tree`` with pages resolved and the ``forms`` index attached."""
    content: ContentTree = dict(tree)
    pages = tree.get(PAGES) or {}
    shared = tree.get(SHARED) or {}
    resolved_pages, forms = resolve(pages, shared)
    if PAGES in tree:
        content[PAGES] = resolved_pages
    content[FORMS] = forms
    return content


class ContentStore:
    """Serve resolved content namespaces for one site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        cache: ResolutionCache | None = None,
        loader: Loader | None = None,
    ) -> None:
        """Bind the store to a site configuration.

        Parameters
        ----------
        config : SiteConfig
            Site layout; supplies the content and modules directories.
        cache : ResolutionCache, optional
            Shared cache. Defaults to a new cache using ``config.mode``.
        loader : callable, optional
            Function returning the merged, unresolved content tree. Defaults
            to :func:`load_content_tree`.
        """
        self.config = config
        self.cache = cache or ResolutionCache(config.mode)
        self._loader = loader or load_content_tree

    def content(self) -> ContentTree:
        """Return the resolved content tree, shared by reference with the cache."""
        return self.cache.get_or_compute(CONTENT_CACHE_KEY, self._build)

    def _build(self) -> ContentTree:
        return resolve_content(self._loader(self.config))

    def namespaces(self) -> list[str]:
        """Return the names of every available namespace."""
        return list(self.content())

    def get_specs(self, spec_type: str) -> dict[str, typ.Any]:
        """Return a deep copy of the ``spec_type`` namespace.

        Raises
        ------
        UnknownNamespaceError
            If the resolved content has no such namespace.
        """
        content = self.content()
        if spec_type not in content:
            raise UnknownNamespaceError(spec_type, known=content)
        return copy.deepcopy(content[spec_type])

    def get_spec(self, spec_type: str, spec_path: str) -> typ.Any:  # noqa: ANN401 - YAML nodes are untyped
        """Return one entry, or ``None`` when the namespace lacks ``spec_path``."""
        return self.get_specs(spec_type).get(spec_path)

    def missing_references(self) -> list[tuple[str, str]]:
        """Report unresolved shared references in the unresolved page tree."""
        tree = self._loader(self.config)
        pages: cabc.Mapping[str, typ.Any] = tree.get(PAGES) or {}
        return find_missing_references(pages, tree.get(SHARED) or {})


__all__ = [
    "CONTENT_CACHE_KEY",
    "ContentStore",
    "load_content_tree",
    "resolve_content",
]
