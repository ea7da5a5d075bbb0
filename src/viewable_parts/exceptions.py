"""
Typed exceptions raised by the part selector.

Every error carries a stable ``code`` so callers can map failures without
matching on messages.
"""

from typing import Any


class ViewablePartsError(Exception):
    """Base class for all selector errors."""

    code: str = "VIEWABLE_PARTS_ERROR"


class InvalidInput(ViewablePartsError, TypeError):
    """Raised when traversal or registration receives an unusable argument."""

    code = "INVALID_INPUT"

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class MalformedContentType(ViewablePartsError, ValueError):
    """Raised when a content type cannot be split into type and subtype tokens."""

    code = "MALFORMED_CONTENT_TYPE"

    def __init__(self, content_type: Any) -> None:
        super().__init__(f"Malformed content type: {content_type!r}")
        self.content_type = content_type


class DuplicateTypeConflict(ViewablePartsError):
    """Raised when a content type is already bound to a different handler."""

    code = "DUPLICATE_TYPE_CONFLICT"

    def __init__(self, content_type: str) -> None:
        super().__init__(
            f"Cannot add {content_type}, already registered with a different handler"
        )
        self.content_type = content_type
