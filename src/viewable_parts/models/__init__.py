# Data models for selection reports

from .part_summary import (
    PartSummary,
    SelectionReport,
    build_part_summaries,
    summarize_part,
)

__all__ = [
    "PartSummary",
    "SelectionReport",
    "build_part_summaries",
    "summarize_part",
]
