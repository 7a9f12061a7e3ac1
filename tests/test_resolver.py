"""Unit tests for shared-component reference resolution."""

from __future__ import annotations

import pytest

from sitespec.content.resolver import (
    ReferenceResolver,
    find_missing_references,
    resolve,
)
from sitespec.errors import ReferenceCycleError


def test_local_fields_override_shared_fields() -> None:
    pages = {"home": {"hero": {"component": "cta", "title": "Local"}}}
    shared = {"cta": {"type": "CallToAction", "title": "Shared", "href": "/go"}}

    resolved, _ = resolve(pages, shared)

    assert resolved["home"]["hero"] == {
        "type": "CallToAction",
        "title": "Local",
        "href": "/go",
    }, f"unexpected expansion: {resolved['home']['hero']!r}"


def test_nested_overrides_merge_into_shared_mappings() -> None:
    pages = {"p": {"block": {"component": "card", "style": {"color": "red"}}}}
    shared = {"card": {"style": {"color": "blue", "size": "lg"}}}

    resolved, _ = resolve(pages, shared)

    assert resolved["p"]["block"] == {"style": {"color": "red", "size": "lg"}}


def test_references_inside_shared_fragments_are_followed() -> None:
    pages = {"home": {"sections": [{"component": "hero"}]}}
    shared = {
        "hero": {"type": "Hero", "button": {"component": "button"}},
        "button": {"type": "Button", "label": "Go"},
    }

    resolved, _ = resolve(pages, shared)

    assert resolved["home"]["sections"][0] == {
        "type": "Hero",
        "button": {"type": "Button", "label": "Go"},
    }


def test_unknown_reference_is_left_in_place() -> None:
    pages = {"home": {"hero": {"component": "missing", "title": "Still here"}}}

    resolved, _ = resolve(pages, {})

    assert resolved["home"]["hero"] == {"component": "missing", "title": "Still here"}


def test_null_shared_entry_counts_as_missing() -> None:
    pages = {"home": {"hero": {"component": "empty"}}}

    resolved, _ = resolve(pages, {"empty": None})

    assert resolved["home"]["hero"] == {"component": "empty"}


def test_shared_entries_are_not_mutated() -> None:
    shared = {"cta": {"type": "CallToAction", "meta": {"a": 1}}}
    pages = {
        "one": {"x": {"component": "cta", "meta": {"b": 2}}},
        "two": {"x": {"component": "cta"}},
    }

    resolved, _ = resolve(pages, shared)

    assert shared == {"cta": {"type": "CallToAction", "meta": {"a": 1}}}
    assert resolved["two"]["x"] == {"type": "CallToAction", "meta": {"a": 1}}, (
        "an override on one page must not leak into another page"
    )


def test_resolution_is_idempotent() -> None:
    pages = {"home": {"hero": {"component": "cta"}, "items": [1, {"k": "v"}]}}
    shared = {"cta": {"type": "CallToAction"}}

    once, _ = resolve(pages, shared)
    twice, _ = resolve(once, shared)

    assert twice == once, "resolving an already resolved tree should change nothing"


def test_page_order_is_preserved() -> None:
    pages = {"b": {}, "a": {}, "c": {}}
    resolved, _ = resolve(pages, {})
    assert list(resolved) == ["b", "a", "c"]


def test_cycle_raises_with_the_chain() -> None:
    shared = {"a": {"child": {"component": "b"}}, "b": {"child": {"component": "a"}}}
    pages = {"home": {"component": "a"}}

    with pytest.raises(ReferenceCycleError) as excinfo:
        resolve(pages, shared)

    assert excinfo.value.chain == ("a", "b", "a"), (
        f"unexpected cycle chain: {excinfo.value.chain!r}"
    )


def test_repeated_non_cyclic_references_are_allowed() -> None:
    shared = {
        "icon": {"type": "Icon"},
        "row": {"left": {"component": "icon"}, "right": {"component": "icon"}},
    }

    resolved, _ = resolve({"p": {"component": "row"}}, shared)

    assert resolved["p"] == {"left": {"type": "Icon"}, "right": {"type": "Icon"}}


def test_page_overrides_may_nest_the_same_component() -> None:
    """A wrapper placed inside a wrapper by the page is not a cycle."""
    pages = {
        "home": {"component": "wrapper", "child": {"component": "wrapper", "pad": 2}}
    }
    shared = {"wrapper": {"type": "Wrapper", "pad": 1}}

    resolved, _ = resolve(pages, shared)

    assert resolved["home"] == {
        "type": "Wrapper",
        "pad": 1,
        "child": {"type": "Wrapper", "pad": 2},
    }, f"unexpected nested expansion: {resolved['home']!r}"


def test_self_reference_merged_into_an_override_still_raises() -> None:
    pages = {"home": {"component": "wrapper", "child": {"pad": 2}}}
    shared = {"wrapper": {"child": {"component": "wrapper"}}}

    with pytest.raises(ReferenceCycleError):
        resolve(pages, shared)


def test_forms_from_shared_fragments_keep_page_overrides() -> None:
    pages = {"contact": {"form": {"component": "signup", "recipients": ["x@y.z"]}}}
    shared = {"signup": {"type": "Form", "name": "signup"}}

    _, forms = resolve(pages, shared)

    assert forms["signup"]["recipients"] == ["x@y.z"]


def test_forms_are_indexed_by_name() -> None:
    pages = {
        "contact": {
            "sections": [
                {"type": "Form", "name": "contact", "recipients": ["a@example.com"]},
                {"component": "newsletter"},
                {"type": "Form", "name": 42},
            ]
        }
    }
    shared = {"newsletter": {"type": "Form", "name": "newsletter"}}

    _, forms = resolve(pages, shared)

    assert set(forms) == {"contact", "newsletter"}, f"unexpected forms: {set(forms)!r}"
    assert forms["contact"]["recipients"] == ["a@example.com"]


def test_resolver_instance_accumulates_forms() -> None:
    resolver = ReferenceResolver({})
    resolver.resolve_node({"type": "Form", "name": "one"})
    resolver.resolve_node([{"type": "Form", "name": "two"}])
    assert sorted(resolver.forms) == ["one", "two"]


def test_find_missing_references_follows_shared_fragments() -> None:
    pages = {
        "home": {"hero": {"component": "hero"}, "cta": {"component": "nope"}},
        "about": {"body": {"component": "hero"}},
    }
    shared = {"hero": {"button": {"component": "ghost"}}}

    missing = find_missing_references(pages, shared)

    assert missing == [
        ("home", "ghost"),
        ("home", "nope"),
        ("about", "ghost"),
    ], f"unexpected missing references: {missing!r}"


def test_find_missing_references_terminates_on_cycles() -> None:
    shared = {"a": {"x": {"component": "a"}}}
    assert find_missing_references({"p": {"component": "a"}}, shared) == []
