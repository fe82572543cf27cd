"""Test fixtures."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest
import structlog

from compactjwt.codec import TokenCodec
from compactjwt.config import Config
from compactjwt.constants import ENV_PREFIX, LOGGER_NAME

from .support.constants import TEST_NOW


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear any configuration from the environment."""
    for variable in list(os.environ):
        if variable.startswith(ENV_PREFIX):
            monkeypatch.delenv(variable)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo any logging configuration done by the command-line interface."""
    yield
    structlog.reset_defaults()
    logging.getLogger(LOGGER_NAME).handlers = []


@pytest.fixture
def codec() -> TokenCodec:
    """Return a codec whose clock is fixed at ``TEST_NOW``."""
    return TokenCodec(Config(), clock=lambda: TEST_NOW)


@pytest.fixture
def unsecured_codec() -> TokenCodec:
    """Return a codec that accepts unsigned tokens without expiration."""
    config = Config(allow_unsecured=True, require_expiration=False)
    return TokenCodec(config, clock=lambda: TEST_NOW)
