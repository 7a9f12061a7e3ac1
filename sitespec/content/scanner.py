"""Discover and parse YAML content trees.

A content root is a directory of YAML files whose first path segment names the
namespace (``pages``, ``shared``, ``menus`` ...) and whose remaining segments
form the identifier within that namespace::

    content/
      pages/home.yaml          -> tree["pages"]["home"]
      pages/blog/intro.yaml    -> tree["pages"]["blog/intro"]
      shared/cta.yaml          -> tree["shared"]["cta"]

Installed modules contribute additional roots at
``<modules_dir>/<module>/content``.

Examples
--------
>>> from pathlib import Path
>>> from sitespec.content.scanner import scan
>>> scan(Path("does-not-exist"))
{}
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from sitespec._constants import DATA_SUFFIXES, MODULE_CONTENT_DIR
from sitespec.errors import ContentLoadError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

ContentTree = dict[str, dict[str, typ.Any]]


def _build_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def load_yaml_file(path: Path, *, loader: YAML | None = None) -> typ.Any:  # noqa: ANN401 - YAML documents are untyped
    """Parse one YAML file, wrapping parser failures in :class:`ContentLoadError`."""
    yaml = loader or _build_loader()
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.load(handle)
    except (YAMLError, UnicodeDecodeError) as exc:
        raise ContentLoadError(path, str(exc)) from exc


def spec_key(root: Path, path: Path) -> tuple[str, str]:
    """Return the ``(spec_type, spec_path)`` pair for ``path`` under ``root``.

    >>> spec_key(Path("content"), Path("content/pages/blog/intro.yaml"))
    ('pages', 'blog/intro')
    >>> spec_key(Path("content"), Path("content/style.yaml"))
    ('style', '')
    """
    parts = path.relative_to(root).with_suffix("").parts
    return parts[0], "/".join(parts[1:])


def _iter_data_files(directory: Path) -> cabc.Iterator[Path]:
    for entry in sorted(directory.iterdir()):
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            yield from _iter_data_files(entry)
        elif entry.suffix.lower() in DATA_SUFFIXES:
            yield entry


def scan(root: Path) -> ContentTree:
    """Recursively load every YAML file below ``root``.

    Parameters
    ----------
    root : Path
        Content directory to scan. A missing directory yields an empty tree.

    Returns
    -------
    ContentTree
        Mapping of ``spec_type -> spec_path -> parsed document``.

    Raises
    ------
    ContentLoadError
        If a file cannot be parsed, or two files in ``root`` map to the same
        ``(spec_type, spec_path)`` key (for example ``a.yaml`` and ``a.yml``).
    """
    tree: ContentTree = {}
    if not root.is_dir():
        logger.debug("Content root '%s' not found; treating as empty", root)
        return tree

    loader = _build_loader()
    count = 0
    for path in _iter_data_files(root):
        spec_type, spec_path = spec_key(root, path)
        namespace = tree.setdefault(spec_type, {})
        if spec_path in namespace:
            msg = f"duplicate entry for '{spec_type}/{spec_path}'"
            raise ContentLoadError(path, msg)
        namespace[spec_path] = load_yaml_file(path, loader=loader)
        count += 1
    logger.debug("Scanned %d content files from '%s'", count, root)
    return tree


def discover_module_roots(modules_dir: Path) -> list[Path]:
    """Return each installed module's content directory in name order."""
    if not modules_dir.is_dir():
        return []
    roots: list[Path] = []
    for module in sorted(modules_dir.iterdir()):
        content_dir = module / MODULE_CONTENT_DIR
        if module.is_dir() and content_dir.is_dir():
            roots.append(content_dir)
    return roots


def load_module_trees(modules_dir: Path) -> list[ContentTree]:
    """Scan every module content root found under ``modules_dir``."""
    return [scan(root) for root in discover_module_roots(modules_dir)]


__all__ = [
    "ContentTree",
    "discover_module_roots",
    "load_module_trees",
    "load_yaml_file",
    "scan",
    "spec_key",
]
