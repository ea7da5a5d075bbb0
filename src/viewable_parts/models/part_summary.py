"""
Part summary models - serializable description of selected parts.

Selected parts are plain ``email.message.Message`` objects; these models
describe them by section number so results can be printed or stored.
"""

from email.message import Message
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..parsing.eml_parser import walk_message_parts
from ..selection.content_type import part_content_type
from ..version import SELECTOR_VERSION


class PartSummary(BaseModel):
    """Description of one selected MIME part (content not included)."""

    part_id: str = Field(description="IMAP-style section number, '' for the root")
    content_type: str = Field(description="Normalized MIME type")
    filename: Optional[str] = Field(None, description="Filename parameter, if any")
    content_id: Optional[str] = Field(None, description="Content-ID header, if any")
    size_bytes: int = Field(description="Size of the undecoded payload in bytes")


class SelectionReport(BaseModel):
    """Viewable parts selected from one message."""

    source: str = Field(description="Where the message was read from")
    mode: str = Field(description="Selection performed (viewable, html, text, first)")
    selector_version: str = Field(default=SELECTOR_VERSION)
    parts: List[PartSummary] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "source": "inbox/newsletter.eml",
                "mode": "html",
                "selector_version": SELECTOR_VERSION,
                "parts": [
                    {
                        "part_id": "2",
                        "content_type": "text/html",
                        "filename": None,
                        "content_id": None,
                        "size_bytes": 1834,
                    }
                ],
            }
        }
    }


def _payload_size(part: Message) -> int:
    if part.is_multipart():
        return 0
    payload = part.get_payload(decode=False)
    return len(str(payload).encode()) if payload else 0


def summarize_part(part: Message, part_id: str) -> PartSummary:
    """
    Describe a single part.

    Args:
        part: MIME part
        part_id: Section number of the part in its message

    Returns:
        PartSummary for the part
    """
    content_id = part.get("Content-ID")
    return PartSummary(
        part_id=part_id,
        content_type=part_content_type(part),
        filename=part.get_filename(),
        content_id=str(content_id) if content_id is not None else None,
        size_bytes=_payload_size(part),
    )


def build_part_summaries(root: Message, parts: List[Message]) -> List[PartSummary]:
    """
    Describe selected parts by their position in the root message.

    Args:
        root: Message the parts were selected from
        parts: Selected parts (must belong to root's tree)

    Returns:
        One PartSummary per selected part, in selection order

    Raises:
        ValueError: If a part does not belong to root
    """
    section_numbers: Dict[int, str] = {
        id(part): part_id for part_id, part in walk_message_parts(root)
    }

    summaries = []
    for part in parts:
        part_id = section_numbers.get(id(part))
        if part_id is None:
            raise ValueError("Selected part does not belong to the given message")
        summaries.append(summarize_part(part, part_id))

    return summaries
