"""Shared fixtures for the test suite"""

import pytest
from PyQt6.QtCore import QCoreApplication

from spotdiff.core.diff.text_diff import TextDiffEngine, TextCompareOptions


@pytest.fixture(scope="session")
def qapp():
    """A Qt core application for worker tests (no GUI needed)."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def engine():
    return TextDiffEngine()


@pytest.fixture
def ws_engine():
    """Engine that ignores whitespace differences."""
    return TextDiffEngine(TextCompareOptions(ignore_whitespace=True))


@pytest.fixture
def write_file(tmp_path):
    """Write text (or bytes) to a file under tmp_path and return its path."""
    def _write(name, content, encoding="utf-8"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode(encoding))
        return path
    return _write
