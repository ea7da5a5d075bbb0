"""
CLI module for viewable part selection.

Provides command-line tools for inspecting .eml files.
"""

from viewable_parts.cli.inspect import main as inspect_main

__all__ = ["inspect_main"]
