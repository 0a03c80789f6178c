# File: tests/conftest.py
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Dict, List, Union

import pytest
from aiohttp import web

from image_scout.config import CrawlerConfig
from image_scout.logger import LOGGER_NAME


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


# --------------------------------------------------------------------------- #
#                              Fake HTTP session                              #
# --------------------------------------------------------------------------- #


class FakeResponse:
    """Just enough of aiohttp.ClientResponse for the fetcher."""

    def __init__(self, status: int = 200, headers: Dict[str, str] | None = None, body: bytes = b"") -> None:
        self.status = status
        self.headers = dict(headers or {})
        self._body = body

    async def read(self) -> bytes:
        return self._body


def html(markup: str, status: int = 200) -> FakeResponse:
    return FakeResponse(status, {"Content-Type": "text/html; charset=utf-8"}, markup.encode("utf-8"))


def png(body: bytes = b"\x89PNG\r\n\x1a\n") -> FakeResponse:
    return FakeResponse(200, {"Content-Type": "image/png"}, body)


Outcome = Union[FakeResponse, BaseException]


class _RequestContext:
    def __init__(self, outcome: Outcome) -> None:
        self._outcome = outcome

    async def __aenter__(self) -> FakeResponse:
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, *exc) -> bool:
        return False


class FakeSession:
    """
    Routes URLs to canned outcomes. A list is consumed one entry per request,
    its last entry repeating; unknown URLs get a plain-text 404.
    """

    closed = False

    def __init__(self, routes: Dict[str, Union[Outcome, List[Outcome]]]) -> None:
        self.routes = {url: list(v) if isinstance(v, list) else [v] for url, v in routes.items()}
        self.calls: List[str] = []

    def get(self, url: str, **kwargs) -> _RequestContext:
        self.calls.append(url)
        outcomes = self.routes.get(url)
        if outcomes is None:
            outcome: Outcome = FakeResponse(404, {"Content-Type": "text/plain"}, b"not found")
        elif len(outcomes) > 1:
            outcome = outcomes.pop(0)
        else:
            outcome = outcomes[0]
        return _RequestContext(outcome)


# --------------------------------------------------------------------------- #
#                                  Fixtures                                   #
# --------------------------------------------------------------------------- #


@pytest.fixture()
def images_dir(tmp_path: Path) -> Path:
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture()
def config(images_dir: Path) -> CrawlerConfig:
    """Fast config: short timeout and no real backoff sleeps."""
    return CrawlerConfig(timeout=2.0, backoff_base=0.0, output_dir=images_dir)


@pytest.fixture()
def scout_log(caplog):
    """The project logger does not propagate, so hook caplog in directly."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    yield caplog
    lg.removeHandler(caplog.handler)


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()
