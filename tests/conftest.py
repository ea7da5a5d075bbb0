"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Fresh selectors
- In-memory MIME trees
- Sample email data
- Temporary .eml files
"""

import logging
import os
from email.message import Message
from typing import Generator, List, Optional

import pytest
import structlog

from viewable_parts.config import Settings
from viewable_parts.parsing.eml_parser import parse_eml_bytes
from viewable_parts.selection import Selector, get_default_selector
from .fixtures.emails import SAMPLE_EMAILS


def make_part(
    content_type: Optional[str],
    body: str = "",
    children: Optional[List[Message]] = None,
) -> Message:
    """
    Build an in-memory MIME node.

    Args:
        content_type: Raw Content-Type header (None leaves the header out)
        body: Payload for leaf parts
        children: Child parts; makes the node multipart

    Returns:
        email.message.Message
    """
    part = Message()
    if content_type is not None:
        part["Content-Type"] = content_type
    if children is not None:
        part.set_payload(list(children))
    else:
        part.set_payload(body)
    return part


def configure_test_logging() -> None:
    """
    Route structlog output nowhere during tests.

    structlog.testing.capture_logs still sees every event.
    """
    structlog.configure(
        processors=[structlog.processors.add_log_level],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        logger_factory=structlog.testing.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True, scope="session")
def quiet_structlog():
    configure_test_logging()
    yield
    structlog.reset_defaults()


@pytest.fixture
def selector() -> Selector:
    """
    Create a selector with only the built-in types.

    Returns:
        New Selector instance, isolated from every other test
    """
    return Selector()


@pytest.fixture
def default_selector_reset() -> Generator[None, None, None]:
    """Drop the cached process-wide selector before and after the test."""
    get_default_selector.cache_clear()
    yield
    get_default_selector.cache_clear()


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,  # Easier to read in tests
        extra_html_types="",
        extra_text_types="",
        max_email_size_mb=25,
    )


@pytest.fixture
def sample_eml_bytes() -> bytes:
    """
    Get simple plain text email bytes for basic tests.

    Returns:
        bytes of a simple .eml file
    """
    return SAMPLE_EMAILS["simple_plain_text"]


@pytest.fixture
def multipart_html_msg() -> Message:
    """
    Get parsed multipart/alternative email with both HTML and plain text.

    Returns:
        Message with children [text/plain, text/html]
    """
    return parse_eml_bytes(SAMPLE_EMAILS["multipart_html"])


@pytest.fixture
def newsletter_msg() -> Message:
    """
    Get parsed newsletter: mixed[alternative[plain, related[html, png]], pdf].

    Returns:
        Message of the nested newsletter email
    """
    return parse_eml_bytes(SAMPLE_EMAILS["related_newsletter"])


@pytest.fixture
def bounce_msg() -> Message:
    """
    Get parsed delivery status notification.

    Returns:
        Message with children [text/plain, message/delivery-status, message/rfc822]
    """
    return parse_eml_bytes(SAMPLE_EMAILS["bounce"])


@pytest.fixture
def tmp_eml_file(tmp_path) -> Generator[str, None, None]:
    """
    Create temporary .eml file for file-based tests.

    Args:
        tmp_path: pytest's temporary directory fixture

    Yields:
        Path to temporary .eml file
    """
    eml_path = tmp_path / "test_email.eml"
    eml_path.write_bytes(SAMPLE_EMAILS["simple_plain_text"])
    yield str(eml_path)
    # Cleanup is automatic with tmp_path


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (CLI, end-to-end)"
    )
