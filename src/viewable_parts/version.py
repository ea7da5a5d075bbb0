"""
Version constants for the part selector.

Recorded in every selection report so results can be traced to the exact
selection rules that produced them.
"""

__version__ = "0.1.0"

SELECTOR_VERSION = "viewable-parts-0.1.0"
PARSER_VERSION = "eml-parser-1.0.0"
