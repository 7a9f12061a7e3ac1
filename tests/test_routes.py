"""Tests for page enumeration, layout splitting, and menu accessors."""

from __future__ import annotations

from sitespec.config import SiteConfig
from sitespec.content import ContentStore
from sitespec.routes import (
    Route,
    actions,
    aux_menu,
    footer_menu,
    generate_links,
    get_layout,
    get_menu,
    header_menu,
    routes,
    social_menu,
    split_layout,
)


def _store(site_config: SiteConfig, *, menus: bool = True) -> ContentStore:
    tree: dict[str, dict[str, object]] = {
        "pages": {
            "home": {"metadata": {"title": "Home", "footer": {"compact": True}}},
            "about": {"metadata": {"title": "About"}},
            "blog/intro": None,
        },
    }
    if menus:
        tree["menus"] = {
            "header": [{"label": "About", "href": "/about"}],
            "actions": [{"label": "Sign up"}],
            "footer": [{"title": "Company"}],
            "auxillary": [{"label": "Privacy"}],
            "social": [{"icon": "github"}],
        }
    return ContentStore(site_config, loader=lambda _config: tree)


def test_routes_follow_load_order(site_config: SiteConfig) -> None:
    result = routes(_store(site_config))

    assert [route.name for route in result] == ["home", "about", "blog/intro"]
    assert result[2] == Route(name="blog/intro", props={}), (
        "pages without a mapping body should route with empty props"
    )


def test_generate_links_excludes_home(site_config: SiteConfig) -> None:
    assert generate_links(_store(site_config)) == ["about", "blog/intro"]


def test_split_layout_lifts_layout_blocks() -> None:
    page = {
        "metadata": {
            "title": "Pricing",
            "announcement": {"text": "Sale"},
            "header": {"sticky": True},
        }
    }

    assert split_layout(page) == {
        "announcement": {"text": "Sale"},
        "header": {"sticky": True},
        "metadata": {"title": "Pricing"},
    }
    assert "header" in page["metadata"], "split_layout must not mutate the page"


def test_split_layout_without_metadata() -> None:
    assert split_layout({"title": "x"}) == {}


def test_get_layout(site_config: SiteConfig) -> None:
    store = _store(site_config)

    assert get_layout(store, "home") == {
        "footer": {"compact": True},
        "metadata": {"title": "Home"},
    }
    assert get_layout(store, "missing") == {}
    assert get_layout(store, None) == {}


def test_menu_accessors(site_config: SiteConfig) -> None:
    store = _store(site_config)

    assert header_menu(store) == [{"label": "About", "href": "/about"}]
    assert actions(store) == [{"label": "Sign up"}]
    assert footer_menu(store) == [{"title": "Company"}]
    assert aux_menu(store) == [{"label": "Privacy"}]
    assert social_menu(store) == [{"icon": "github"}]
    assert get_menu(store, "sidebar") is None


def test_menus_absent(site_config: SiteConfig) -> None:
    assert header_menu(_store(site_config, menus=False)) is None
