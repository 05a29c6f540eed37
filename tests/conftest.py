"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from literun.bridge import DisplaySettings
from literun.evaluator import Evaluator
from literun.formatting import ResultFormatter
from literun.presenters import HtmlChain, PlainTextChain
from literun.session import Session


@pytest.fixture
def session() -> Session:
    """Create a fresh interpreter session for testing."""
    return Session()


@pytest.fixture
def evaluator() -> Evaluator:
    """Create a lenient evaluator with its own session."""
    return Evaluator()


@pytest.fixture
def plain_text() -> PlainTextChain:
    return PlainTextChain(DisplaySettings())


@pytest.fixture
def html() -> HtmlChain:
    return HtmlChain()


@pytest.fixture
def formatter(plain_text: PlainTextChain, html: HtmlChain) -> ResultFormatter:
    return ResultFormatter(plain_text, html)
