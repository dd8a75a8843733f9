from __future__ import annotations

import logging

import pytest

from scmrev.config import TRACKED_FILES
from tests._fixtures.fake_oracle import FakeOracle, commit_lines


@pytest.fixture
def oracle() -> FakeOracle:
    """Provide an oracle where every tracked file has history."""
    return FakeOracle(commits=commit_lines(TRACKED_FILES))


@pytest.fixture(autouse=True)
def _reset_scmrev_logger():
    """Undo configure_logging() so caplog sees scmrev records."""
    yield
    logger = logging.getLogger("scmrev")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
