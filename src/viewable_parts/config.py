"""
Library configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Extra viewable types for the default selector (comma-separated)
    extra_html_types: str = ""
    extra_text_types: str = ""

    # CLI limits
    max_email_size_mb: int = 25

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


def parse_type_list(value: str) -> List[str]:
    """
    Split a comma-separated content type list.

    Args:
        value: Raw setting value, e.g. "text/enriched, text/markdown"

    Returns:
        Non-empty, stripped entries in their original order
    """
    return [item.strip() for item in value.split(",") if item.strip()]


# Global settings instance
settings = Settings()
