"""
Find the human-viewable parts of a MIME email.

Mimics the decisions a mail client makes about which parts of a parsed
``email.message.Message`` tree to display, including which rendition of a
multipart/alternative block to show.

    >>> from viewable_parts import get_viewable_parts, parse_eml_bytes
    >>> msg = parse_eml_bytes(raw)
    >>> parts = get_viewable_parts(msg)
"""

from .exceptions import (
    DuplicateTypeConflict,
    InvalidInput,
    MalformedContentType,
    ViewablePartsError,
)
from .parsing import parse_eml_bytes, parse_eml_file
from .selection import (
    RETURN_PART,
    Selector,
    get_default_selector,
    get_html_parts,
    get_text_parts,
    get_viewable_parts,
    normalize_content_type,
)
from .version import __version__

__all__ = [
    "__version__",
    "Selector",
    "RETURN_PART",
    "get_default_selector",
    "get_viewable_parts",
    "get_html_parts",
    "get_text_parts",
    "normalize_content_type",
    "parse_eml_bytes",
    "parse_eml_file",
    "ViewablePartsError",
    "InvalidInput",
    "MalformedContentType",
    "DuplicateTypeConflict",
]
