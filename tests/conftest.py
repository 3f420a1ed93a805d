from __future__ import annotations

import logging
from typing import Iterator

import pytest

from cargo_fund.config import ClientSettings
from tests._fixtures.workspace import WorkspaceBuilder


@pytest.fixture
def workspace() -> WorkspaceBuilder:
    """Provide a fake workspace with a single member crate."""
    builder = WorkspaceBuilder()
    builder.member("client-package")
    return builder


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(api_token="test-token", endpoint="https://api.github.test/graphql")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CARGO_FUND_GITHUB_API_TOKEN", raising=False)
    monkeypatch.delenv("CARGO", raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    # configure_logging() detaches the package logger from the root; undo that so caplog works.
    _detach_handlers()
    yield
    _detach_handlers()


def _detach_handlers() -> None:
    logger = logging.getLogger("cargo_fund")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
