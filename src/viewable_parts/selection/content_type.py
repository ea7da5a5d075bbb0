"""
Content type parsing and normalization.

Registry lookups are keyed on the lowercase ``type/subtype`` pair, so
``Text/HTML; charset="utf-8"`` and ``text/html`` select the same handler.
"""

import re
from email.message import Message
from typing import NamedTuple

from ..exceptions import MalformedContentType


# RFC 2045 token: any printable ASCII except SPACE and tspecials
_TOKEN = r"[!#$%&'*+\-.^_`{|}~0-9A-Za-z]+"

CONTENT_TYPE_PATTERN = re.compile(
    rf"^\s*(?P<discrete>{_TOKEN})\s*/\s*(?P<composite>{_TOKEN})\s*(?:;.*)?$",
    re.DOTALL,
)


class ContentType(NamedTuple):
    """Lowercased discrete (top-level) and composite (subtype) tokens."""

    discrete: str
    composite: str

    def __str__(self) -> str:
        return f"{self.discrete}/{self.composite}"


def parse_content_type(content_type: str) -> ContentType:
    """
    Split a raw content type into its discrete and composite tokens.

    Parameters after the first ``;`` are ignored.

    Args:
        content_type: Raw header value, e.g. 'text/plain; charset="utf-8"'

    Returns:
        ContentType with both tokens lowercased

    Raises:
        MalformedContentType: If the value has no ``type/subtype`` pair
    """
    if not isinstance(content_type, str):
        raise MalformedContentType(content_type)

    match = CONTENT_TYPE_PATTERN.match(content_type)
    if match is None:
        raise MalformedContentType(content_type)

    return ContentType(
        discrete=match.group("discrete").lower(),
        composite=match.group("composite").lower(),
    )


def normalize_content_type(content_type: str) -> str:
    """
    Normalize a raw content type to ``discrete/composite``.

    Examples:
        >>> normalize_content_type('Text/HTML; charset="utf-8"')
        'text/html'
    """
    return str(parse_content_type(content_type))


def raw_content_type(part: Message) -> str:
    """
    Get the raw Content-Type of a MIME part.

    Parts without a Content-Type header fall back to their default type
    (text/plain, or message/rfc822 inside multipart/digest).
    """
    value = part.get("Content-Type")
    if value is None:
        return part.get_default_type()
    return str(value)


def part_content_type(part: Message) -> str:
    """Get the normalized content type of a MIME part."""
    return normalize_content_type(raw_content_type(part))
