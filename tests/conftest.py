"""Shared fixtures for building throwaway site trees on disk."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from sitespec.config import SiteConfig

if typ.TYPE_CHECKING:
    from pathlib import Path


WriteYaml = typ.Callable[["Path", str], "Path"]


@pytest.fixture
def write_yaml() -> WriteYaml:
    """Return a helper writing dedented YAML text, creating parent folders."""

    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).strip() + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Return an empty site root with ``content``/``modules``/``themes`` folders."""
    for name in ("content", "modules", "themes"):
        (tmp_path / name).mkdir()
    return tmp_path


@pytest.fixture
def site_config(site_root: Path) -> SiteConfig:
    """Return a production-mode configuration for ``site_root``."""
    return SiteConfig.from_root(site_root)
