"""Content resolution engine for a YAML-driven site generator.

This package loads page, shared-fragment, and menu YAML from a project and its
installed modules, expands shared component references, resolves themed class
maps, and produces an access-filtered public export. The CLI entry points are
used by build scripts and CI.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``ContentStore``: Cached access to resolved content namespaces.
- ``StyleResolver``: Cached access to resolved class maps.

Examples
--------
>>> from sitespec import main
>>> main()  # doctest: +SKIP
>>> from sitespec import ContentStore, StyleResolver  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .content import ContentStore
from .styles import StyleResolver

__all__ = ["ContentStore", "StyleResolver", "app", "main"]
