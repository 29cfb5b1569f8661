"""Root conftest: test environment and structlog routing for caplog."""

from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

from shared.logging import configure_structlog

load_dotenv(Path(__file__).resolve().parent.parent / ".env.tests")

configure_structlog()


@pytest.fixture(autouse=True)
def _clear_log_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
