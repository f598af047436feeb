"""Shared fixtures for finddupes tests."""

import logging
import pathlib

import pytest


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo configure_logging() calls made by a test."""
    yield
    logger = logging.getLogger("finddupes")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def tmp_source(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a temporary source directory."""
    source = tmp_path / "source"
    source.mkdir()
    return source


@pytest.fixture
def make_file(tmp_source: pathlib.Path):
    """Return a helper that writes bytes to a path relative to tmp_source."""

    def _make(rel: str, content: bytes) -> pathlib.Path:
        p = tmp_source / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
        return p

    return _make


@pytest.fixture
def xyz_tree(make_file) -> dict[str, pathlib.Path]:
    """a/x.txt and b/x.txt share content; c/y.txt has the same size but other content."""
    return {
        "a": make_file("a/x.txt", b"AAAAAAAAAA"),
        "b": make_file("b/x.txt", b"AAAAAAAAAA"),
        "c": make_file("c/y.txt", b"BBBBBBBBBB"),
    }
