"""
Pytest configuration and fixtures.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a config file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging() between tests."""
    yield
    root = logging.getLogger("cosy")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("cosy."):
            logging.getLogger(name).setLevel(logging.NOTSET)
