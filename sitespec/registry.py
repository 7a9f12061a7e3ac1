"""Explicit registration tables for component types and form handlers.

Renderers look up a content node's ``type`` to find the implementation that
draws it, and the form subsystem looks up handlers by name. Both tables are
built at startup from a fixed, enumerable set of entries; nothing is
discovered by inspecting module exports at runtime.

Examples
--------
>>> from sitespec.registry import TypeRegistry
>>> widgets = TypeRegistry[str]("widget")
>>> widgets.register("Hero", "hero.jinja")
>>> widgets.require("Hero")
'hero.jinja'
>>> "Footer" in widgets
False
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from sitespec._constants import NAME_KEY, TYPE_KEY
from sitespec.errors import FormProcessingError, UnknownTypeError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")


class TypeRegistry(typ.Generic[T]):
    """Name-to-implementation table for one kind of entry."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._entries: dict[str, T] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, name: str, entry: T) -> None:
        """Add ``entry`` under ``name``, replacing (with a warning) any existing one."""
        if name in self._entries:
            logger.warning("Overwriting existing %s '%s'", self.kind, name)
        self._entries[name] = entry

    def get(self, name: str) -> T | None:
        return self._entries.get(name)

    def require(self, name: str) -> T:
        """Return the entry for ``name`` or raise :class:`UnknownTypeError`."""
        try:
            return self._entries[name]
        except KeyError as exc:
            known = ", ".join(sorted(self._entries)) or "none"
            msg = f"Unsupported {self.kind} type '{name}'. Known types: {known}"
            raise UnknownTypeError(msg) from exc

    def names(self) -> list[str]:
        return sorted(self._entries)

    def clear(self) -> None:
        self._entries.clear()


def build_registry(
    kind: str, entries: cabc.Iterable[tuple[str, T]]
) -> TypeRegistry[T]:
    """Return a registry populated from ``(name, entry)`` pairs."""
    registry = TypeRegistry[T](kind)
    for name, entry in entries:
        registry.register(name, entry)
    return registry


class FormHandler(typ.Protocol):
    """Delivery backend for submitted forms."""

    name: str

    def handle(
        self,
        form_name: str,
        values: cabc.Mapping[str, typ.Any],
        config: cabc.Mapping[str, typ.Any],
    ) -> None: ...


@dc.dataclass(slots=True)
class FormField:
    """A form field ready for rendering, with a form-qualified name."""

    name: str
    type: str | None
    props: dict[str, typ.Any]


def form_field(form_name: str, item: cabc.Mapping[str, typ.Any]) -> FormField:
    """Qualify ``item``'s name with ``form_name`` and split out its type.

    >>> form_field("contact", {"name": "email", "type": "Email", "required": True})
    FormField(name='contact-email', type='Email', props={'name': 'contact-email', 'required': True})
    """
    name = f"{form_name}-{item.get(NAME_KEY)}"
    props = {key: value for key, value in item.items() if key != TYPE_KEY}
    props[NAME_KEY] = name
    kind = item.get(TYPE_KEY)
    return FormField(
        name=name, type=kind if isinstance(kind, str) else None, props=props
    )


def process_form(
    form_name: str,
    values: cabc.Mapping[str, typ.Any],
    *,
    forms: cabc.Mapping[str, typ.Any],
    handlers: TypeRegistry[FormHandler],
    handler_names: cabc.Sequence[str],
    handler_config: cabc.Mapping[str, cabc.Mapping[str, typ.Any]] | None = None,
) -> int:
    """Run the configured handlers for one form submission.

    Parameters
    ----------
    form_name : str
        Key into the ``forms`` index produced by reference resolution.
    values : Mapping
        Submitted field values.
    forms : Mapping
        The ``forms`` namespace; the form's ``recipients`` are passed on to
        every handler.
    handlers : TypeRegistry[FormHandler]
        Registered delivery backends.
    handler_names : Sequence[str]
        Handlers to run, in order. Unknown names are skipped with a warning.
    handler_config : Mapping, optional
        Per-handler settings; ``enabled: false`` skips a handler.

    Returns
    -------
    int
        Number of handlers that completed successfully.

    Raises
    ------
    FormProcessingError
        If at least one handler ran and every one that ran failed.
    """
    form = forms.get(form_name)
    recipients = form.get("recipients") if isinstance(form, dict) else None
    errors: list[str] = []
    succeeded = 0
    for handler_name in handler_names:
        handler = handlers.get(handler_name)
        if handler is None:
            logger.warning("Form handler '%s' not found in registry", handler_name)
            continue
        settings = dict((handler_config or {}).get(handler_name) or {})
        if settings.get("enabled") is False:
            continue
        settings["recipients"] = recipients
        try:
            handler.handle(form_name, values, settings)
        except Exception as exc:  # noqa: BLE001 - handler errors are collected
            logger.exception("Form handler '%s' failed", handler_name)
            errors.append(f"{handler_name}: {exc}")
        else:
            succeeded += 1
    if errors and succeeded == 0:
        msg = f"Form processing failed: {'; '.join(errors)}"
        raise FormProcessingError(msg)
    if succeeded == 0:
        logger.warning("No handlers executed for form '%s'", form_name)
    return succeeded


__all__ = [
    "FormField",
    "FormHandler",
    "TypeRegistry",
    "build_registry",
    "form_field",
    "process_form",
]
