# Email parsing module

from .eml_parser import parse_eml_bytes, parse_eml_file, walk_message_parts

__all__ = [
    "parse_eml_bytes",
    "parse_eml_file",
    "walk_message_parts",
]
