"""
Resource name helper tests.
"""
import os

import pytest

from pathindex import names


@pytest.mark.index
def test_from_relpath_marks_directories():
    assert names.from_relpath("pkg/sub", is_dir=True) == "pkg/sub/"
    assert names.from_relpath("pkg/sub/", is_dir=True) == "pkg/sub/"
    assert names.from_relpath("pkg/a.txt") == "pkg/a.txt"


@pytest.mark.index
def test_normalize_converts_backslashes():
    assert names.normalize("pkg\\sub\\a.txt") == "pkg/sub/a.txt"


@pytest.mark.index
@pytest.mark.parametrize("name, stripped", [
    ("pkg/", "pkg"),
    ("pkg//", "pkg/"),
    ("pkg", "pkg"),
])
def test_strip_separator_removes_one_separator(name, stripped):
    assert names.strip_separator(name) == stripped
    assert names.is_directory_name(name) == (name != "pkg")


@pytest.mark.index
@pytest.mark.skipif(os.sep != "/", reason="backslash is a separator on this platform")
def test_from_relpath_keeps_backslashes_on_posix():
    """
    Given: A POSIX relative path whose file name contains a backslash
    When: Building its resource name
    Then: The backslash is kept, since only os.sep separates path parts
    """
    assert names.from_relpath("dir/a\\b.txt") == "dir/a\\b.txt"
    assert names.from_relpath("a\\b", is_dir=True) == "a\\b/"
