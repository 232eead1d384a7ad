# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for environment key formatting."""

import pytest
from hypothesis import given, settings, strategies as st

from copilot_envbind import format_key


@pytest.mark.parametrize(
    "name,expected",
    [
        ("DBName", "DB_NAME"),
        ("DB", "DB"),
        ("Name", "NAME"),
        ("AllowedOrigins", "ALLOWED_ORIGINS"),
        ("TestA", "TEST_A"),
        ("UserID", "USER_ID"),
        ("HTTPServer", "HTTP_SERVER"),
        ("user_id", "USER_ID"),
        ("port", "PORT"),
        ("", ""),
    ],
)
def test_format_key(name, expected):
    """Test formatting of identifiers into key segments."""
    assert format_key(name) == expected


@given(st.from_regex(r"[A-Za-z0-9]+", fullmatch=True))
@settings(max_examples=200)
def test_format_key_is_idempotent(name: str) -> None:
    """Test that formatting an already formatted key changes nothing."""
    formatted = format_key(name)
    assert format_key(formatted) == formatted


@given(st.from_regex(r"[A-Za-z0-9]+", fullmatch=True))
@settings(max_examples=200)
def test_format_key_only_inserts_separators(name: str) -> None:
    """Test that formatting only upper-cases and inserts underscores."""
    assert format_key(name).replace("_", "") == name.upper()
