"""Page enumeration, layout extraction, and menu accessors.

These helpers sit between the content store and whatever renders pages: they
list routable pages, split page metadata into the pieces the page layout
consumes, and read the project's navigation menus.

Examples
--------
>>> from sitespec.routes import split_layout
>>> split_layout({"metadata": {"title": "About", "header": {"sticky": True}}})
{'header': {'sticky': True}, 'metadata': {'title': 'About'}}
"""

from __future__ import annotations

import copy
import dataclasses as dc
import typing as typ

from sitespec._constants import HOME_PAGE, MENUS, PAGES

if typ.TYPE_CHECKING:
    from sitespec.content import ContentStore

LAYOUT_KEYS: tuple[str, ...] = ("announcement", "header", "footer")


@dc.dataclass(slots=True)
class Route:
    """A routable page and the resolved data it renders from."""

    name: str
    props: dict[str, typ.Any]


def routes(store: ContentStore) -> list[Route]:
    """Return a :class:`Route` for every resolved page, in load order."""
    return [
        Route(name=name, props=props if isinstance(props, dict) else {})
        for name, props in store.get_specs(PAGES).items()
    ]


def generate_links(store: ContentStore) -> list[str]:
    """Return every page path except the home page."""
    return [route.name for route in routes(store) if route.name != HOME_PAGE]


def split_layout(page: typ.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Split a page's ``metadata`` into layout blocks and remaining metadata."""
    metadata = page.get("metadata")
    if not isinstance(metadata, dict):
        return {}
    remaining = copy.deepcopy(metadata)
    props: dict[str, typ.Any] = {}
    for key in LAYOUT_KEYS:
        if key in remaining:
            props[key] = remaining.pop(key)
    props["metadata"] = remaining
    return props


def get_layout(store: ContentStore, name: str | None) -> dict[str, typ.Any]:
    """Return the layout props for page ``name`` (empty when unknown)."""
    if not name:
        return {}
    page = store.get_specs(PAGES).get(name)
    if not isinstance(page, dict):
        return {}
    return split_layout(page)


def get_menu(store: ContentStore, key: str) -> typ.Any:  # noqa: ANN401 - YAML nodes are untyped
    """Return ``menus[key]``, or ``None`` when the site defines no such menu."""
    if MENUS not in store.namespaces():
        return None
    return store.get_specs(MENUS).get(key)


def header_menu(store: ContentStore) -> typ.Any:  # noqa: ANN401
    """Main navigation links."""
    return get_menu(store, "header")


def actions(store: ContentStore) -> typ.Any:  # noqa: ANN401
    """Header call-to-action buttons."""
    return get_menu(store, "actions")


def footer_menu(store: ContentStore) -> typ.Any:  # noqa: ANN401
    """Footer link groups."""
    return get_menu(store, "footer")


def aux_menu(store: ContentStore) -> typ.Any:  # noqa: ANN401
    """Auxiliary links below the footer, stored under ``menus.auxillary``."""
    return get_menu(store, "auxillary")


def social_menu(store: ContentStore) -> typ.Any:  # noqa: ANN401
    """Social profile links."""
    return get_menu(store, "social")


__all__ = [
    "LAYOUT_KEYS",
    "Route",
    "actions",
    "aux_menu",
    "footer_menu",
    "generate_links",
    "get_layout",
    "get_menu",
    "header_menu",
    "routes",
    "social_menu",
    "split_layout",
]
