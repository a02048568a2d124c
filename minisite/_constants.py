"""Common literal values used across minisite.

These constants keep delimiters, reserved template names, and file
conventions centralized so the generator, templates, and tests import the
same values without drifting. Intended for internal use within the minisite
package.

Examples
--------
>>> from minisite import _constants
>>> _constants.FRONTMATTER_DELIMITER
'+++'
>>> "png" in _constants.ASSET_EXTENSIONS
True
"""

FRONTMATTER_DELIMITER = "+++"
SHORTCODE_OPEN = "{{"
SHORTCODE_CLOSE = "}}"
SHORTCODE_NAMESPACE = "shortcodes/"
SUMMARY_MARKER = "more"
DEFAULT_TEMPLATE = "page.html"
INDEX_FILENAME = "index.html"
TAXONOMY_TEMPLATE = "{taxonomy}/single.html"
LOCAL_BASE_URL = "http://127.0.0.1:1111/"
ASSET_EXTENSIONS = frozenset({"png", "webp", "jpg", "jpeg", "gif"})
CONTENT_DIR = "content"
TEMPLATES_DIR = "templates"
STATIC_DIR = "static"
DEFAULT_OUTPUT_DIR = "public"
CONFIG_FILENAMES = ("config.toml", "config.yaml", "config.yml")
