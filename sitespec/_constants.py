"""Common literal values used across sitespec.

Reserved namespace names, marker keys, and file names live here so the
loader, resolver, projector, and tests import the same values without
drifting. Intended for internal use within the sitespec package.

Examples
--------
>>> from sitespec import _constants
>>> _constants.COMPONENT_KEY
'component'
>>> ".yml" in _constants.DATA_SUFFIXES
True
"""

PAGES = "pages"
SHARED = "shared"
MENUS = "menus"
FORMS = "forms"

COMPONENT_KEY = "component"
TYPE_KEY = "type"
NAME_KEY = "name"
FORM_TYPE = "Form"

ACCESS_KEY = "access"
PUBLIC_ROLE = "public"
SECTIONS_KEY = "sections"
COMPONENTS_KEY = "components"

DATA_SUFFIXES = frozenset({".yaml", ".yml"})
MODULE_CONTENT_DIR = "content"
STYLE_FILENAME = "style.yaml"

HOME_PAGE = "home"
