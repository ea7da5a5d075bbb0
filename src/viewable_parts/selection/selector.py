"""
Selection of the human-viewable parts of a MIME tree.

The Selector mimics the decisions a mail client makes about which MIME parts
to display. It dispatches every part on its normalized content type through a
registry of handlers. Unregistered types (images, archives, ...) are invisible
to it.

Registration publishes new copies of the registry and preference lists under
a lock, so traversals always read a consistent snapshot without locking.
"""

import threading
from email.message import Message
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import structlog

from ..config import Settings, parse_type_list
from ..exceptions import DuplicateTypeConflict, InvalidInput
from .content_type import normalize_content_type, part_content_type
from .handlers import (
    ALTERNATIVE,
    FLATTEN,
    RETURN_PART,
    PartHandler,
    Preference,
)


logger = structlog.get_logger(__name__)

Parts = Union[Message, Sequence[Message]]

DEFAULT_HTML_TYPES: Tuple[str, ...] = ("text/html",)
DEFAULT_TEXT_TYPES: Tuple[str, ...] = ("text/plain", "message/delivery-status")

DEFAULT_HANDLERS: Dict[str, PartHandler] = {
    "text/html": RETURN_PART,
    "text/plain": RETURN_PART,
    "message/delivery-status": RETURN_PART,
    "multipart/mixed": FLATTEN,
    "multipart/alternative": ALTERNATIVE,
    "multipart/related": FLATTEN,
}


class Selector:
    """
    Finds the parts of a MIME message that can be displayed to a user.

    Each instance owns its registry and its HTML/text preference lists;
    registering a type on one selector never affects another.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: Dict[str, PartHandler] = dict(DEFAULT_HANDLERS)
        self._html_types: Tuple[str, ...] = DEFAULT_HTML_TYPES
        self._text_types: Tuple[str, ...] = DEFAULT_TEXT_TYPES

    @classmethod
    def from_settings(cls, config: Settings) -> "Selector":
        """
        Build a selector seeded with the extra types named in settings.

        Args:
            config: Settings with comma-separated extra_html_types / extra_text_types

        Returns:
            Selector with the extra types registered as leaf HTML/text types
        """
        selector = cls()
        for content_type in parse_type_list(config.extra_html_types):
            selector.register_html_type(content_type)
        for content_type in parse_type_list(config.extra_text_types):
            selector.register_text_type(content_type)
        return selector

    @property
    def html_types(self) -> Tuple[str, ...]:
        return self._html_types

    @property
    def text_types(self) -> Tuple[str, ...]:
        return self._text_types

    @property
    def viewable_types(self) -> Tuple[str, ...]:
        """Every HTML type followed by every text type."""
        return self._html_types + self._text_types

    def handler_for(self, content_type: str) -> Optional[PartHandler]:
        """Get the handler registered for a content type, if any."""
        return self._handlers.get(normalize_content_type(content_type))

    def is_registered(self, content_type: str) -> bool:
        return self.handler_for(content_type) is not None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_type(
        self, content_type: str, handler: PartHandler = RETURN_PART
    ) -> bool:
        """
        Teach the selector a new content type.

        Args:
            content_type: Content type to handle (normalized before storing)
            handler: Callable ``handler(selector, part, preference)``
                (default: return the part as is)

        Returns:
            True if the type was added, False if it was already registered
            with this very handler

        Raises:
            InvalidInput: If handler is not callable
            DuplicateTypeConflict: If the type is bound to a different handler
        """
        if not callable(handler):
            raise InvalidInput("handler must be callable", value=handler)

        normalized = normalize_content_type(content_type)

        with self._lock:
            existing = self._handlers.get(normalized)
            if existing is not None:
                if existing is handler:
                    return False
                logger.warning("viewable_type_conflict", content_type=normalized)
                raise DuplicateTypeConflict(normalized)

            handlers = dict(self._handlers)
            handlers[normalized] = handler
            self._handlers = handlers

        logger.info(
            "viewable_type_registered",
            content_type=normalized,
            handler=repr(handler),
        )
        return True

    def register_html_type(
        self, content_type: str, handler: PartHandler = RETURN_PART
    ) -> Tuple[str, ...]:
        """
        Register a type and add it to the HTML types.

        Returns:
            The HTML types after the addition
        """
        self.register_type(content_type, handler)
        normalized = normalize_content_type(content_type)
        with self._lock:
            if normalized not in self._html_types:
                self._html_types = self._html_types + (normalized,)
            return self._html_types

    def register_text_type(
        self, content_type: str, handler: PartHandler = RETURN_PART
    ) -> Tuple[str, ...]:
        """
        Register a type and add it to the text types.

        Returns:
            The text types after the addition
        """
        self.register_type(content_type, handler)
        normalized = normalize_content_type(content_type)
        with self._lock:
            if normalized not in self._text_types:
                self._text_types = self._text_types + (normalized,)
            return self._text_types

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def traverse(self, parts: Parts, preference: Preference) -> List[Message]:
        """
        Collect the viewable parts of a message or list of parts.

        A single message contributes its sub-parts; a single-part message is
        its own only part. Results come out in depth-first, left-to-right
        tree order.

        Raises:
            InvalidInput: If parts is not a Message or a list/tuple of Messages
            MalformedContentType: If any visited part has a broken content type
        """
        if isinstance(parts, Message):
            parts = parts.get_payload() if parts.is_multipart() else [parts]

        if not isinstance(parts, (list, tuple)):
            raise InvalidInput(
                "An email.message.Message or a list of Message objects must be "
                "passed to the selector",
                value=parts,
            )

        handlers = self._handlers
        result: List[Message] = []

        for part in parts:
            if not isinstance(part, Message):
                raise InvalidInput(
                    "All parts given to the selector must be Message objects",
                    value=part,
                )

            content_type = part_content_type(part)
            handler = handlers.get(content_type)
            if handler is None:
                logger.debug("part_type_skipped", content_type=content_type)
                continue

            result.extend(handler(self, part, preference))

        return result

    def select_all(
        self,
        parts: Parts,
        preferred: Optional[Iterable[str]] = None,
        acceptable: Optional[Iterable[str]] = None,
    ) -> List[Message]:
        """
        Get every viewable part, resolving alternatives with the given lists.

        Unlike get_viewable_parts, missing lists are not defaulted: with no
        preferred and no acceptable types every multipart/alternative block
        is dropped.
        """
        return self.traverse(parts, Preference.build(preferred, acceptable))

    # Traversal primitive under its historical name
    get_parts = select_all

    def select_first(
        self,
        parts: Parts,
        preferred: Optional[Iterable[str]] = None,
        acceptable: Optional[Iterable[str]] = None,
    ) -> Optional[Message]:
        """Get the first part select_all would return, or None."""
        selected = self.select_all(parts, preferred, acceptable)
        return selected[0] if selected else None

    # ------------------------------------------------------------------
    # Public selections
    # ------------------------------------------------------------------

    def get_viewable_parts(
        self,
        parts: Parts,
        preferred: Optional[Iterable[str]] = None,
        acceptable: Optional[Iterable[str]] = None,
    ) -> List[Message]:
        """
        Get any and all parts that are viewable.

        Args:
            parts: A Message (its sub-parts are used) or a list of Messages
            preferred: Types preferred inside multipart/alternative
            acceptable: Types accepted when no preferred rendition exists

        When neither list is given both default to every HTML and text type,
        so every viewable rendition of each alternative block is returned.
        """
        if preferred is None and acceptable is None:
            preferred = acceptable = self.viewable_types
        return self.select_all(parts, preferred, acceptable)

    def get_html_parts(self, *parts: Message) -> List[Message]:
        """
        Get the HTML parts.

        The given parts are dispatched themselves, so a multipart/alternative
        root is resolved as a block. Alternatives without an HTML rendition
        contribute nothing: their text fallback is removed by the final
        restriction to HTML types.
        """
        html_types = self.html_types
        selected = self.get_viewable_parts(
            _as_part_list(parts), html_types, self.text_types
        )
        return _restrict(selected, html_types)

    def get_text_parts(self, *parts: Message) -> List[Message]:
        """Get the text parts. See get_html_parts about alternatives."""
        text_types = self.text_types
        selected = self.get_viewable_parts(
            _as_part_list(parts), text_types, self.html_types
        )
        return _restrict(selected, text_types)


def _as_part_list(parts: tuple) -> list:
    # get_html_parts([a, b]) and get_html_parts(a, b) are equivalent
    if len(parts) == 1 and isinstance(parts[0], (list, tuple)):
        return list(parts[0])
    return list(parts)


def _restrict(parts: List[Message], valid_types: Tuple[str, ...]) -> List[Message]:
    return [part for part in parts if part_content_type(part) in valid_types]
