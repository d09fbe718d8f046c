from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from sftgen.config import ExclusionRules
from sftgen.models import RunStatistics
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def rules() -> ExclusionRules:
    return ExclusionRules()


@pytest.fixture
def stats() -> RunStatistics:
    return RunStatistics()


@pytest.fixture(autouse=True)
def _reset_sftgen_logger() -> Iterator[None]:
    """Undo configure_logging() so later tests see records through caplog."""
    yield
    logger = logging.getLogger("sftgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
