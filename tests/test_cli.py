"""Tests for the ``sitespec`` command line interface."""

from __future__ import annotations

import json
import typing as typ

import pytest

from sitespec import cli

if typ.TYPE_CHECKING:
    from pathlib import Path

    WriteYaml = typ.Callable[[Path, str], Path]


@pytest.fixture
def site(tmp_path: Path, write_yaml: WriteYaml) -> Path:
    """Write a small site and return the path of its ``config.yaml``."""
    write_yaml(
        tmp_path / "content" / "pages" / "home.yaml",
        """
        sections:
          - components:
              main:
                - component: cta
                  title: Start here
        """,
    )
    write_yaml(
        tmp_path / "content" / "pages" / "about.yaml",
        """
        metadata:
          title: About
        """,
    )
    write_yaml(
        tmp_path / "content" / "shared" / "cta.yaml",
        """
        type: CallToAction
        title: Default
        classes:
          root: p-4
        """,
    )
    write_yaml(
        tmp_path / "themes" / "default" / "style.yaml",
        """
        btn: px-2 p-4
        Component+Button:
          root: "@btn text-sm"
        """,
    )
    return write_yaml(tmp_path / "config.yaml", "site:\n  name: Test")


def test_resolve_prints_namespace_as_json(
    site: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.resolve("pages", config=site, fmt="json")

    pages = json.loads(capsys.readouterr().out)
    component = pages["home"]["sections"][0]["components"]["main"][0]
    assert component == {
        "type": "CallToAction",
        "title": "Start here",
        "classes": {"root": "p-4"},
    }, f"unexpected resolved component: {component!r}"


def test_resolve_prints_yaml_by_default(
    site: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.resolve("forms", config=site)
    assert capsys.readouterr().out.strip() == "{}"


def test_export_writes_artefacts(
    site: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output_dir = tmp_path / "public"

    cli.export(config=site, output_dir=output_dir)

    data = json.loads((output_dir / "data.json").read_text(encoding="utf-8"))
    widget = data["pages"]["home"]["widgets"][0]
    assert widget["data"] == {"type": "CallToAction", "title": "Start here"}, (
        "exported widgets should drop styling fields"
    )
    links = json.loads((output_dir / "links.json").read_text(encoding="utf-8"))
    assert links == ["about"], f"home must not appear in links, got {links!r}"
    assert (output_dir / "data.yaml").is_file()
    assert capsys.readouterr().out.count("wrote ") == 3


def test_classes_prints_resolved_map(
    site: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.classes("Component+Button", config=site)
    assert json.loads(capsys.readouterr().out) == {"root": "p-4 text-sm"}


def test_validate_passes_for_complete_content(
    site: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.validate(config=site)
    assert "all shared component references resolve" in capsys.readouterr().out


def test_validate_fails_on_missing_reference(
    site: Path, write_yaml: WriteYaml, capsys: pytest.CaptureFixture[str]
) -> None:
    write_yaml(
        site.parent / "content" / "pages" / "pricing.yaml",
        "hero:\n  component: ghost",
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.app(["validate", "--config", str(site)])

    assert excinfo.value.code == 1
    assert "pricing: missing shared component 'ghost'" in capsys.readouterr().out


def test_mode_override_from_environment(
    site: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(cli.MODE_ENV_VAR, "dev")
    assert cli._load_config(site).mode == "development"
