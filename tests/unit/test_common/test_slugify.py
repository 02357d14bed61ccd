"""
Test slug normalization
"""

import pytest

from content_store.common.slugify import MAX_SLUG_LENGTH, slugify


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Hello World", "hello-world"),
        ("  Trim me  ", "trim-me"),
        ("It's \"quoted\"", "its-quoted"),
        ("a -- b __ c", "a-b-c"),
        ("---edge---", "edge"),
        ("Ünïcode café", "n-code-caf"),
        ("", ""),
        (None, ""),
    ],
)
def test_slugify(value, expected):
    assert slugify(value) == expected


def test_slugify_truncates():
    assert len(slugify("a" * 500)) == MAX_SLUG_LENGTH
