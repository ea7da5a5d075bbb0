# Viewable part selection

from functools import lru_cache
from email.message import Message
from typing import Iterable, List, Optional

from ..config import settings
from .content_type import (
    ContentType,
    normalize_content_type,
    parse_content_type,
    part_content_type,
)
from .handlers import (
    ALTERNATIVE,
    FLATTEN,
    RETURN_PART,
    AlternativeHandler,
    BaseHandler,
    FlattenHandler,
    LeafHandler,
    PartHandler,
    Preference,
    child_parts,
)
from .selector import DEFAULT_HTML_TYPES, DEFAULT_TEXT_TYPES, Parts, Selector


@lru_cache(maxsize=1)
def get_default_selector() -> Selector:
    """Get the process-wide selector, seeded from settings on first use."""
    return Selector.from_settings(settings)


def get_viewable_parts(
    parts: Parts,
    preferred: Optional[Iterable[str]] = None,
    acceptable: Optional[Iterable[str]] = None,
) -> List[Message]:
    """Get the viewable parts using the default selector."""
    return get_default_selector().get_viewable_parts(parts, preferred, acceptable)


def get_html_parts(*parts: Message) -> List[Message]:
    """Get the HTML parts using the default selector."""
    return get_default_selector().get_html_parts(*parts)


def get_text_parts(*parts: Message) -> List[Message]:
    """Get the text parts using the default selector."""
    return get_default_selector().get_text_parts(*parts)


__all__ = [
    "Selector",
    "Preference",
    "PartHandler",
    "BaseHandler",
    "LeafHandler",
    "FlattenHandler",
    "AlternativeHandler",
    "RETURN_PART",
    "FLATTEN",
    "ALTERNATIVE",
    "DEFAULT_HTML_TYPES",
    "DEFAULT_TEXT_TYPES",
    "ContentType",
    "parse_content_type",
    "normalize_content_type",
    "part_content_type",
    "child_parts",
    "get_default_selector",
    "get_viewable_parts",
    "get_html_parts",
    "get_text_parts",
]
