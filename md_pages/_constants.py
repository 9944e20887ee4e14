"""Common literal values used across md_pages.

These constants keep placeholder markers, fallback titles, and file names
centralized so the scanner, renderer, exporter, and tests can import the same
values without drifting. Intended for internal use within the md_pages package.

Examples
--------
>>> from md_pages import _constants
>>> _constants.IMAGE_PLACEHOLDER_TEMPLATE.format(src="img/a.png")
'./TOBE_BASE64_IMGPATH_img/a.png_TO_BE_BASE64_IMGPATH'
>>> _constants.FALLBACK_TITLE
'Untitled'
"""

IMAGE_PLACEHOLDER_PREFIX = "./TOBE_BASE64_IMGPATH_"
IMAGE_PLACEHOLDER_SUFFIX = "_TO_BE_BASE64_IMGPATH"
IMAGE_PLACEHOLDER_TEMPLATE = IMAGE_PLACEHOLDER_PREFIX + "{src}" + IMAGE_PLACEHOLDER_SUFFIX

FALLBACK_TITLE = "Untitled"
HTML_SUFFIX = ".html"
MARKDOWN_SUFFIX = ".md"
CONFIG_FILENAME = "md-pages.yaml"
