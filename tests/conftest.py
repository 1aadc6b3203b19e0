from __future__ import annotations

import logging

import pytest

from typed_options.observability.logging import JsonFormatter


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() so JSON handlers do not leak between tests."""

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
