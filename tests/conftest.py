"""Shared fixtures for path store tests."""

import sys
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture
def store_path(tmp_path) -> Path:
    """Location of a store file that does not exist yet."""
    return tmp_path / "data" / ".z"


@pytest.fixture
def populated_store(store_path) -> Path:
    """A store with a handful of entries, all last seen at t=1_000_000."""
    store_path.parent.mkdir(parents=True, exist_ok=True)
    store_path.write_text(
        "/home/alex|10|1000000\n"
        "/home/alex/public_html|3|1000000\n"
        "/home/john|5|1000000\n"
        "/etc/nginx|2|1000000\n"
    )
    return store_path


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _reset_logging():
    """The CLI reconfigures loguru; put the default stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
