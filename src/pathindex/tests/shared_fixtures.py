"""
Shared fixtures for pathindex tests.

Provides builders for directory and zip archive roots.

Layouts are dicts of resource name -> content. Names ending in "/" are
created as (empty) directories or directory entries.
"""
import zipfile
from pathlib import Path
from typing import Callable, Dict

import pytest


Layout = Dict[str, str]


@pytest.fixture
def make_dir_root(tmp_path) -> Callable[..., Path]:
    """Factory fixture: build a directory root from a layout."""
    def _builder(name: str, layout: Layout) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True)
        for rel, content in layout.items():
            target = root / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
        return root
    return _builder


@pytest.fixture
def make_archive_root(tmp_path) -> Callable[..., Path]:
    """Factory fixture: build a zip archive root from a layout, in layout order."""
    def _builder(name: str, layout: Layout) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for entry, content in layout.items():
                archive.writestr(entry, "" if entry.endswith("/") else content)
        return path
    return _builder


@pytest.fixture
def dir_a(make_dir_root) -> Path:
    """dirA: foo.txt = "A" plus a nested package directory."""
    return make_dir_root("dirA", {"foo.txt": "A", "pkg/sub/a.txt": "a"})


@pytest.fixture
def archive_b(make_archive_root) -> Path:
    """archiveB: foo.txt = "B" plus a bar/ directory entry."""
    return make_archive_root("archiveB.jar", {"foo.txt": "B", "bar/": ""})
