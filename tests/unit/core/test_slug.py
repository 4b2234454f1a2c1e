"""Unit tests for core/utils/slug.py"""

import pytest

from mdsite.core.utils.slug import breadcrumbs, slugify


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify converts text to lowercase hyphenated slug."""
    assert slugify(text) == expected


@pytest.mark.parametrize("source,expected", [
    ("post.md", []),
    ("blog/post.md", ["blog"]),
    ("blog/2025/post.md", ["blog", "2025"]),
])
def test_breadcrumbs(source, expected):
    """breadcrumbs lists the parent directories of a relative source path."""
    assert breadcrumbs(source) == expected
