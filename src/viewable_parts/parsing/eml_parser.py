"""
Email parser for .eml files (RFC5322/MIME format).

This module turns raw .eml data into the ``email.message.Message`` tree the
selector works on, using Python's standard library email module. Payloads are
left undecoded.
"""

from email import message_from_bytes
from email.message import Message
from typing import Iterator, Tuple


def parse_eml_bytes(eml_bytes: bytes) -> Message:
    """
    Parse .eml bytes into email.Message object.

    Args:
        eml_bytes: Raw .eml file bytes

    Returns:
        Parsed email.Message object

    Raises:
        ValueError: If bytes are not valid RFC5322 format
    """
    try:
        msg = message_from_bytes(eml_bytes)
        return msg
    except Exception as e:
        raise ValueError(f"Failed to parse .eml file: {str(e)}") from e


def parse_eml_file(eml_path: str) -> Message:
    """
    Parse .eml file into email.Message object.

    Args:
        eml_path: Path to .eml file

    Returns:
        Parsed email.Message object

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is not valid RFC5322 format
    """
    with open(eml_path, "rb") as f:
        eml_bytes = f.read()
    return parse_eml_bytes(eml_bytes)


def walk_message_parts(msg: Message, prefix: str = "") -> Iterator[Tuple[str, Message]]:
    """
    Walk through all parts of a message, depth-first.

    Each part is paired with its IMAP-style section number ("1", "1.2", ...).
    The root is numbered "".

    Args:
        msg: Email message (potentially multipart)
        prefix: Section number of msg

    Yields:
        (section number, part) tuples
    """
    yield prefix, msg
    if msg.is_multipart():
        for index, part in enumerate(msg.get_payload(), 1):
            part_id = f"{prefix}.{index}" if prefix else str(index)
            yield from walk_message_parts(part, part_id)
