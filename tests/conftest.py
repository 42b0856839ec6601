from __future__ import annotations

import logging

import pytest

from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder() -> SourceBuilder:
    """Provide a fresh builder for a `widget.el` style source file."""
    return SourceBuilder()


@pytest.fixture(autouse=True)
def _propagate_elreadme_logs():
    """Let caplog see elreadme records even after the CLI configured logging."""
    logger = logging.getLogger("elreadme")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    yield
