"""Tests for the revert reference parser."""

import pytest

from commitcheck.revert import parse_revert_reference


@pytest.mark.parametrize(
    "message, expected",
    [
        ("something else", None),
        (
            "This reverts commit 397747d22bd12cce4bc6bd0aa979a4f8eed3d29a",
            "397747d22bd12cce4bc6bd0aa979a4f8eed3d29a",
        ),
        ("REVERT change 397747d", "397747d"),
        ("Revert: undo   abcdef0123", "abcdef0123"),
        ("revert 39774", None),
        ("revert 397747D22BD", None),
        ("revert 397747dxyz", None),
        ("fixes 397747d22bd, nothing reverted", None),
    ],
)
def test_parse_revert_reference(message, expected):
    assert parse_revert_reference(message) == expected


def test_git_revert_message():
    message = (
        'Revert "Add time handler"\n'
        "\n"
        "This reverts commit 0123456789abcdef0123456789abcdef01234567.\n"
    )
    assert parse_revert_reference(message) == "0123456789abcdef0123456789abcdef01234567"


def test_first_reference_wins():
    message = "Reverts aaaaaaa and bbbbbbb"
    assert parse_revert_reference(message) == "aaaaaaa"


def test_long_token_is_not_truncated():
    assert parse_revert_reference("revert " + "a" * 41) is None
