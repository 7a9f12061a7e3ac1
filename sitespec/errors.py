"""Exception hierarchy raised by the sitespec content resolution engine.

Content-authoring failures (malformed YAML, reference cycles) abort a
resolution pass, while programming errors (unknown namespaces or registry
names) surface as ``KeyError`` subclasses so callers can treat them like any
other failed lookup.

Examples
--------
>>> from sitespec.errors import UnknownNamespaceError
>>> err = UnknownNamespaceError("widgets", known=["pages", "shared"])
>>> isinstance(err, KeyError)
True
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class SiteSpecError(Exception):
    """Base class for all sitespec errors."""


class SiteConfigError(SiteSpecError, ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class ContentLoadError(SiteSpecError):
    """Raised when a content file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load content file '{path}': {reason}")


class ReferenceCycleError(SiteSpecError):
    """Raised when shared components reference each other in a loop."""

    def __init__(self, chain: cabc.Sequence[str]) -> None:
        self.chain = tuple(chain)
        joined = " -> ".join(self.chain)
        super().__init__(f"Shared component reference cycle detected: {joined}")


class UnknownNamespaceError(SiteSpecError, KeyError):
    """Raised when a caller requests a namespace the content tree lacks."""

    def __init__(
        self, namespace: str, *, known: cabc.Iterable[str] = ()
    ) -> None:
        self.namespace = namespace
        self.known = sorted(known)
        available = ", ".join(self.known) or "none"
        super().__init__(
            f"Data specifications are missing requested type: {namespace} "
            f"(available: {available})"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownTypeError(SiteSpecError, KeyError):
    """Raised when a registry lookup names an unregistered type."""

    def __str__(self) -> str:
        return str(self.args[0])


class FormProcessingError(SiteSpecError):
    """Raised when every attempted form handler failed."""


__all__ = [
    "ContentLoadError",
    "FormProcessingError",
    "ReferenceCycleError",
    "SiteConfigError",
    "SiteSpecError",
    "UnknownNamespaceError",
    "UnknownTypeError",
]
