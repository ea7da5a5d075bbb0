"""
Part handlers registered against content types.

A handler is any callable ``handler(selector, part, preference)`` returning
the list of viewable parts found at ``part``. Two kinds ship with the library:

- Leaf handlers return the part itself (``RETURN_PART``).
- Composite handlers recurse into child parts through the selector:
  ``FLATTEN`` for multipart/mixed and multipart/related, ``ALTERNATIVE``
  for multipart/alternative.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.message import Message
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Tuple

import structlog

from .content_type import normalize_content_type, part_content_type

if TYPE_CHECKING:
    from .selector import Selector


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Preference:
    """
    Preferred and acceptable types for multipart/alternative resolution.

    Both tuples hold normalized content types. Empty tuples mean the caller
    has no interest in any rendition, which drops alternative blocks.
    """

    preferred: Tuple[str, ...] = ()
    acceptable: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        preferred: Optional[Iterable[str]] = None,
        acceptable: Optional[Iterable[str]] = None,
    ) -> "Preference":
        """Build a Preference from raw type lists, treating None as empty."""
        return cls(
            preferred=tuple(normalize_content_type(ct) for ct in preferred or ()),
            acceptable=tuple(normalize_content_type(ct) for ct in acceptable or ()),
        )


PartHandler = Callable[["Selector", Message, Preference], List[Message]]


def child_parts(part: Message) -> List[Message]:
    """Get the direct children of a part (empty for single-part nodes)."""
    if part.is_multipart():
        return list(part.get_payload())
    return []


class BaseHandler(ABC):
    """Common interface of the built-in handler variants."""

    kind: str = ""

    @abstractmethod
    def __call__(
        self, selector: "Selector", part: Message, preference: Preference
    ) -> List[Message]:
        """Return the viewable parts found at ``part``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LeafHandler(BaseHandler):
    """Selects the part itself, unchanged."""

    kind = "leaf"

    def __call__(self, selector, part, preference):
        return [part]


class FlattenHandler(BaseHandler):
    """
    Selects every viewable descendant of a container.

    Children of multipart/mixed and multipart/related are independent pieces
    of content, so nothing is filtered.
    """

    kind = "composite"

    def __call__(self, selector, part, preference):
        return selector.traverse(child_parts(part), preference)


class AlternativeHandler(BaseHandler):
    """
    Picks among equivalent renditions of a multipart/alternative block.

    Children are resolved recursively first, so nested alternatives collapse
    before this block chooses. Then:

    1. Every candidate whose type is preferred is returned, if any.
    2. Otherwise every candidate whose type is acceptable is returned.
    3. Otherwise the whole block is dropped.

    Original child order is preserved within each pass.
    """

    kind = "composite"

    def __call__(self, selector, part, preference):
        candidates = selector.traverse(child_parts(part), preference)

        for pass_name, wanted in (
            ("preferred", preference.preferred),
            ("acceptable", preference.acceptable),
        ):
            chosen = [c for c in candidates if part_content_type(c) in wanted]
            if chosen:
                logger.debug(
                    "alternative_resolved",
                    pass_used=pass_name,
                    candidates=len(candidates),
                    chosen=len(chosen),
                )
                return chosen

        logger.debug("alternative_dropped", candidates=len(candidates))
        return []


RETURN_PART = LeafHandler()
FLATTEN = FlattenHandler()
ALTERNATIVE = AlternativeHandler()
