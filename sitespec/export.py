"""Public, access-filtered projection of resolved content.

Resolved pages carry styling hooks (``bg``, ``classes``), access lists, and
the raw section/component tree. The public export drops those fields at every
nesting level and replaces the section tree with a flat, ordered list of
:class:`Widget` entries, keeping only pages, sections, and components whose
``access`` list is empty or grants the ``public`` role.

Examples
--------
>>> from sitespec.export import is_public, project_page
>>> is_public(None), is_public(["admin"]), is_public(["admin", "public"])
(True, False, True)
>>> page = {
...     "metadata": {"title": "Home"},
...     "sections": [{"components": {"main": [{"type": "Hero", "bg": "dark"}]}}],
... }
>>> project_page("home", page).widgets[0].data
{'type': 'Hero'}
"""

from __future__ import annotations

import io
import typing as typ

import msgspec
import msgspec.json as msgspec_json
from ruamel.yaml import YAML

from sitespec._constants import (
    ACCESS_KEY,
    COMPONENTS_KEY,
    MENUS,
    PAGES,
    PUBLIC_ROLE,
    SECTIONS_KEY,
    TYPE_KEY,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sitespec.content import ContentStore

DEFAULT_RESERVED_FIELDS: frozenset[str] = frozenset(
    {"bg", "classes", ACCESS_KEY, SECTIONS_KEY}
)


class Widget(msgspec.Struct, frozen=True):
    """One public component lifted out of a page's section tree."""

    section: int
    slot: str
    type: str | None
    data: dict[str, typ.Any]


class PublicPage(msgspec.Struct):
    """A page with internal fields removed and components flattened."""

    path: str
    fields: dict[str, typ.Any]
    widgets: list[Widget]


class PublicSite(msgspec.Struct):
    """Every public page plus the site menus."""

    menus: dict[str, typ.Any]
    pages: dict[str, PublicPage]


def is_public(access: object) -> bool:
    """Return ``True`` when ``access`` admits anonymous consumers."""
    match access:
        case None | "":
            return True
        case str():
            return access == PUBLIC_ROLE
        case list() | tuple() | set() | frozenset():
            return not access or PUBLIC_ROLE in access
        case _:
            return False


def strip_fields(
    node: typ.Any,  # noqa: ANN401 - YAML nodes are untyped
    reserved: cabc.Collection[str] = DEFAULT_RESERVED_FIELDS,
) -> typ.Any:  # noqa: ANN401
    """Return a copy of ``node`` without ``reserved`` keys at any depth."""
    match node:
        case list():
            return [strip_fields(item, reserved) for item in node]
        case dict():
            return {
                key: strip_fields(value, reserved)
                for key, value in node.items()
                if key not in reserved
            }
        case _:
            return node


def flatten_widgets(
    page: cabc.Mapping[str, typ.Any],
    reserved: cabc.Collection[str] = DEFAULT_RESERVED_FIELDS,
) -> list[Widget]:
    """Collect the public components of ``page`` in section and slot order."""
    widgets: list[Widget] = []
    sections = page.get(SECTIONS_KEY) or []
    if not isinstance(sections, list):
        return widgets
    for index, section in enumerate(sections):
        if not isinstance(section, dict) or not is_public(section.get(ACCESS_KEY)):
            continue
        slots = section.get(COMPONENTS_KEY) or {}
        if not isinstance(slots, dict):
            continue
        for slot, components in slots.items():
            for component in components or []:
                if not isinstance(component, dict):
                    continue
                if not is_public(component.get(ACCESS_KEY)):
                    continue
                kind = component.get(TYPE_KEY)
                widgets.append(
                    Widget(
                        section=index,
                        slot=str(slot),
                        type=kind if isinstance(kind, str) else None,
                        data=strip_fields(component, reserved),
                    )
                )
    return widgets


def project_page(
    path: str,
    page: typ.Any,  # noqa: ANN401 - YAML nodes are untyped
    *,
    reserved: cabc.Collection[str] = DEFAULT_RESERVED_FIELDS,
) -> PublicPage | None:
    """Project one resolved page, or return ``None`` when it is not public."""
    if not isinstance(page, dict):
        return PublicPage(path=path, fields={}, widgets=[])
    if not is_public(page.get(ACCESS_KEY)):
        return None
    return PublicPage(
        path=path,
        fields=strip_fields(page, reserved),
        widgets=flatten_widgets(page, reserved),
    )


def project(
    resolved_pages: cabc.Mapping[str, typ.Any],
    *,
    menus: cabc.Mapping[str, typ.Any] | None = None,
    reserved: cabc.Collection[str] = DEFAULT_RESERVED_FIELDS,
) -> PublicSite:
    """Build the public export for ``resolved_pages``.

    Parameters
    ----------
    resolved_pages : Mapping
        Page trees with shared references already expanded.
    menus : Mapping, optional
        The ``menus`` namespace; stripped of reserved fields and included
        verbatim otherwise.
    reserved : Collection[str], optional
        Field names removed at every level. Defaults to
        :data:`DEFAULT_RESERVED_FIELDS`.

    Returns
    -------
    PublicSite
        Public pages keyed by path (non-public pages omitted) and menus.
    """
    pages: dict[str, PublicPage] = {}
    for path, page in resolved_pages.items():
        projected = project_page(path, page, reserved=reserved)
        if projected is not None:
            pages[path] = projected
    return PublicSite(menus=strip_fields(dict(menus or {}), reserved), pages=pages)


def generate_data(store: ContentStore, page: str) -> PublicPage | None:
    """Project a single page from ``store``; ``None`` if absent or not public."""
    pages = store.get_specs(PAGES)
    if page not in pages:
        return None
    return project_page(page, pages[page])


def generate_site(store: ContentStore) -> PublicSite:
    """Project every page and the menus held by ``store``."""
    menus = store.get_specs(MENUS) if MENUS in store.namespaces() else {}
    return project(store.get_specs(PAGES), menus=menus)


def to_builtins(value: PublicSite | PublicPage) -> dict[str, typ.Any]:
    """Convert an export struct into plain dictionaries and lists."""
    return typ.cast("dict[str, typ.Any]", msgspec.to_builtins(value))


def encode_json(value: object) -> bytes:
    """Serialise an export struct (or builtins) to JSON."""
    return msgspec_json.encode(value)


def encode_yaml(value: PublicSite | PublicPage | cabc.Mapping[str, typ.Any]) -> str:
    """Serialise an export struct (or mapping) to block-style YAML."""
    data = value if isinstance(value, dict) else msgspec.to_builtins(value)
    yaml = YAML(typ="safe", pure=True)
    yaml.default_flow_style = False
    buffer = io.StringIO()
    yaml.dump(data, buffer)
    return buffer.getvalue()


__all__ = [
    "DEFAULT_RESERVED_FIELDS",
    "PublicPage",
    "PublicSite",
    "Widget",
    "encode_json",
    "encode_yaml",
    "flatten_widgets",
    "generate_data",
    "generate_site",
    "is_public",
    "project",
    "project_page",
    "strip_fields",
    "to_builtins",
]
