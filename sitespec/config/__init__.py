"""Load and validate the sitespec site configuration.

This subpackage parses the project's ``config.yaml``, resolves the content,
modules, and themes directories relative to the file, and produces a
:class:`SiteConfig` that the content store and style resolver consume. The
primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from sitespec.config import load_site_config
>>> site = load_site_config(Path("config.yaml"))  # doctest: +SKIP
>>> site.content_dir  # doctest: +SKIP
PosixPath('content')
"""

from .loader import load_site_config
from .models import MODES, Mode, SiteConfig, SiteConfigError, parse_mode

__all__ = [
    "MODES",
    "Mode",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
    "parse_mode",
]
