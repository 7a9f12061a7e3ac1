"""Expand shared-component references inside page trees.

Any mapping carrying a ``component`` key points at an entry in the ``shared``
namespace. Resolution deep-copies that entry, merges the mapping's sibling keys
on top, and resolves the result again so shared fragments can reference other
fragments. Unknown references are left in place so a page still renders its
own fields; :func:`find_missing_references` reports them for validation.

Examples
--------
>>> from sitespec.content.resolver import resolve
>>> pages = {"home": {"hero": {"component": "cta", "title": "Click me"}}}
>>> shared = {"cta": {"type": "CallToAction", "title": "Default"}}
>>> resolved, forms = resolve(pages, shared)
>>> resolved["home"]["hero"]
{'type': 'CallToAction', 'title': 'Click me'}
"""

from __future__ import annotations

import copy
import logging
import typing as typ

from sitespec._constants import COMPONENT_KEY, FORM_TYPE, NAME_KEY, TYPE_KEY
from sitespec.errors import ReferenceCycleError

from .merge import deep_merge

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

FormIndex = dict[str, typ.Any]


class ReferenceResolver:
    """Resolve ``component`` references against a fixed shared namespace.

    A resolver instance accumulates the form index across every node it
    resolves, so one instance corresponds to one resolution pass.
    """

    def __init__(self, shared: cabc.Mapping[str, typ.Any]) -> None:
        self.shared = shared
        self.forms: FormIndex = {}
        self._expanding: list[str] = []

    def resolve_node(self, node: typ.Any) -> typ.Any:  # noqa: ANN401 - YAML nodes are untyped
        """Return ``node`` with every resolvable reference expanded."""
        match node:
            case list():
                return [self.resolve_node(item) for item in node]
            case dict():
                reference = node.get(COMPONENT_KEY)
                if self._is_known(reference):
                    return self._expand(typ.cast("str", reference), node)
                if COMPONENT_KEY in node:
                    logger.debug("Unresolved shared component '%s'", reference)
                return self._resolve_mapping(node)
            case _:
                return node

    def _is_known(self, reference: object) -> bool:
        return isinstance(reference, str) and self.shared.get(reference) is not None

    def _expand(self, reference: str, node: cabc.Mapping[str, typ.Any]) -> typ.Any:  # noqa: ANN401
        if reference in self._expanding:
            raise ReferenceCycleError([*self._expanding, reference])
        base = copy.deepcopy(self.shared[reference])
        overrides = {key: value for key, value in node.items() if key != COMPONENT_KEY}
        if not isinstance(base, dict):
            if overrides:
                return self.resolve_node(overrides)
            return self._resolve_within(reference, base)
        merged = deep_merge(base, overrides)
        if COMPONENT_KEY in merged:
            return self._resolve_within(reference, merged)
        # Only values that came from the shared fragment extend the cycle chain.
        resolved = {
            key: self.resolve_node(value)
            if key in overrides
            else self._resolve_within(reference, value)
            for key, value in merged.items()
        }
        self._index_form(resolved)
        return resolved

    def _resolve_within(self, reference: str, node: typ.Any) -> typ.Any:  # noqa: ANN401
        self._expanding.append(reference)
        try:
            return self.resolve_node(node)
        finally:
            self._expanding.pop()

    def _resolve_mapping(self, node: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
        resolved = {key: self.resolve_node(value) for key, value in node.items()}
        self._index_form(resolved)
        return resolved

    def _index_form(self, node: cabc.Mapping[str, typ.Any]) -> None:
        name = node.get(NAME_KEY)
        if node.get(TYPE_KEY) == FORM_TYPE and isinstance(name, str):
            self.forms[name] = node


def resolve(
    pages: cabc.Mapping[str, typ.Any], shared: cabc.Mapping[str, typ.Any]
) -> tuple[dict[str, typ.Any], FormIndex]:
    """Resolve every page against ``shared``.

    Parameters
    ----------
    pages : Mapping
        ``spec_path -> page tree`` from the ``pages`` namespace.
    shared : Mapping
        ``spec_path -> fragment`` from the ``shared`` namespace.

    Returns
    -------
    tuple[dict, dict]
        The resolved pages (same keys, same order) and the form index keyed by
        form name.

    Raises
    ------
    ReferenceCycleError
        If a shared fragment references itself directly or transitively.
    """
    resolver = ReferenceResolver(shared)
    resolved = {path: resolver.resolve_node(page) for path, page in pages.items()}
    return resolved, resolver.forms


def find_missing_references(
    pages: cabc.Mapping[str, typ.Any], shared: cabc.Mapping[str, typ.Any]
) -> list[tuple[str, str]]:
    """Return ``(page_path, component)`` pairs whose reference cannot resolve.

    Shared fragments are followed so a broken reference inside a fragment is
    reported against every page that uses it. Cycles are not followed twice.
    """
    missing: list[tuple[str, str]] = []

    def _walk(node: object, page_path: str, seen: tuple[str, ...]) -> None:
        match node:
            case list():
                for item in node:
                    _walk(item, page_path, seen)
            case dict():
                reference = node.get(COMPONENT_KEY)
                if COMPONENT_KEY in node:
                    known = isinstance(reference, str) and shared.get(reference) is not None
                    if not known:
                        missing.append((page_path, str(reference)))
                    elif reference not in seen:
                        _walk(shared[reference], page_path, (*seen, reference))
                for key, value in node.items():
                    if key != COMPONENT_KEY:
                        _walk(value, page_path, seen)
            case _:
                return

    for page_path, page in pages.items():
        _walk(page, page_path, ())
    return missing


__all__ = ["FormIndex", "ReferenceResolver", "find_missing_references", "resolve"]
