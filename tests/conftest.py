"""Shared test fixtures for the drive2notion test suite."""

from __future__ import annotations

import pytest

from drive2notion.config import Drive2NotionConfig
from drive2notion.converter.md_to_notion import MarkdownToNotionConverter


@pytest.fixture
def config() -> Drive2NotionConfig:
    """Default test configuration with a dummy token."""
    return Drive2NotionConfig(token="test_token_1234")


@pytest.fixture
def converter(config: Drive2NotionConfig) -> MarkdownToNotionConverter:
    """Markdown-to-Notion converter using the default test config."""
    return MarkdownToNotionConverter(config)
