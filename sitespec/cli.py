"""Cyclopts CLI entrypoint for resolving and exporting sitespec content.

The ``sitespec`` console script loads ``config.yaml``, runs the content
resolution pipeline, and either prints a resolved namespace, writes the public
data export (``data.json``, ``data.yaml``, ``links.json``), prints the
resolved classes for a styled identifier, or reports unresolved shared
component references so CI can block a deploy.

Examples
--------
Print the resolved pages namespace as YAML:

>>> from sitespec.cli import app
>>> app(["resolve", "pages"])  # doctest: +SKIP

Write the public export into ``dist``:

>>> app(["export", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfig, load_site_config, parse_mode
from .content import ContentStore
from .export import encode_json, encode_yaml, generate_site
from .routes import generate_links
from .styles import StyleResolver

DEFAULT_CONFIG = Path("config.yaml")
MODE_ENV_VAR = "SITESPEC_MODE"

Format = typ.Literal["yaml", "json"]

app = App(name="sitespec", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
VerboseOption = typ.Annotated[
    bool, Parameter(help="Enable debug logging", env_var="INPUT_VERBOSE")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(path: Path) -> SiteConfig:
    """Load ``path`` and apply the ``SITESPEC_MODE`` override when set."""
    site_config = load_site_config(path)
    override = os.getenv(MODE_ENV_VAR)
    if override:
        site_config.mode = parse_mode(override)
    return site_config


def _dump(data: object, fmt: Format) -> str:
    if fmt == "json":
        return encode_json(data).decode("utf-8")
    return encode_yaml(typ.cast("dict[str, typ.Any]", data))


@app.command(help="Print one resolved content namespace.")
def resolve(
    namespace: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    fmt: typ.Annotated[
        Format, Parameter(name="--format", help="Output format")
    ] = "yaml",
    verbose: VerboseOption = False,
) -> None:
    """Print the resolved ``namespace`` (``pages``, ``shared``, ``forms`` ...).

    Parameters
    ----------
    namespace : str
        Top-level namespace to print.
    config : Path, optional
        Path to ``config.yaml`` (overridable via ``INPUT_CONFIG``).
    fmt : {"yaml", "json"}, optional
        Serialisation used for stdout.
    verbose : bool, optional
        Emit debug logging from the loader and resolver.

    Raises
    ------
    UnknownNamespaceError
        If the resolved content has no such namespace.
    """
    _configure_logging(verbose=verbose)
    store = ContentStore(_load_config(config))
    print(_dump(store.get_specs(namespace), fmt), end="")


@app.command(help="Write the public data export and page links.")
def export(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path,
        Parameter(help="Folder receiving the export", env_var="INPUT_OUTPUT_DIR"),
    ] = Path("public"),
    verbose: VerboseOption = False,
) -> None:
    """Write ``data.json``, ``data.yaml`` and ``links.json`` into ``output_dir``."""
    _configure_logging(verbose=verbose)
    store = ContentStore(_load_config(config))
    site = generate_site(store)
    output_dir.mkdir(parents=True, exist_ok=True)

    artefacts = {
        output_dir / "data.json": encode_json(site),
        output_dir / "data.yaml": encode_yaml(site).encode("utf-8"),
        output_dir / "links.json": encode_json(generate_links(store)),
    }
    for path, payload in artefacts.items():
        path.write_bytes(payload)
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the resolved classes for a styled identifier.")
def classes(
    identifier: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print ``identifier``'s theme classes, fully resolved, as JSON."""
    _configure_logging(verbose=verbose)
    resolver = StyleResolver(_load_config(config))
    print(encode_json(resolver.get_classes(identifier)).decode("utf-8"))


@app.command(help="Report shared component references that do not resolve.")
def validate(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Exit with status 1 when any page references a missing shared component."""
    _configure_logging(verbose=verbose)
    store = ContentStore(_load_config(config))
    store.content()
    missing = store.missing_references()
    for page, component in missing:
        print(f"{page}: missing shared component '{component}'")
    if missing:
        raise SystemExit(1)
    print("all shared component references resolve")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``sitespec`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
