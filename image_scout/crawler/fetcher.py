# image_scout/crawler/fetcher.py
"""
Fetcher module: HTTP GET with a fixed timeout, bounded concurrency and
linear retry backoff.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from image_scout.config import CrawlerConfig
from image_scout.crawler.models import FetchFailure, FetchOutcome, FetchSuccess
from image_scout.logger import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class Fetcher:
    """Handles HTTP fetching with a request limit, retries/backoff and timeout."""

    def __init__(
        self,
        session: ClientSession,
        config: CrawlerConfig,
        semaphore: Optional[asyncio.Semaphore] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.session = session
        self.config = config
        self._semaphore = semaphore or asyncio.Semaphore(config.concurrency)
        self._sleep = sleep

    def backoff(self, attempt: int) -> float:
        """Delay after failed attempt number *attempt* (1-based)."""
        return attempt * self.config.backoff_base

    async def fetch(
        self,
        url: str,
        *,
        max_attempts: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> FetchOutcome:
        """
        GET *url* up to *max_attempts* times.

        Only transport-level errors (connection problems, timeouts) are
        retried; any HTTP status that reaches the client is a success.
        """
        attempts = max_attempts or self.config.max_attempts
        client_timeout = ClientTimeout(total=timeout or self.config.timeout)
        reason = "no attempt made"
        for attempt in range(1, attempts + 1):
            try:
                async with self._semaphore:
                    async with self.session.get(url, timeout=client_timeout) as resp:
                        body = await resp.read()
                        logger.debug(
                            "GET %s -> %d (attempt %d/%d)", url, resp.status, attempt, attempts
                        )
                        return FetchSuccess(
                            url=url,
                            status=resp.status,
                            headers=resp.headers.copy(),
                            body=body,
                            attempts=attempt,
                        )
            except (ClientError, asyncio.TimeoutError) as exc:
                reason = str(exc) or type(exc).__name__
                logger.warning("Attempt %d/%d failed to fetch %s: %s", attempt, attempts, url, reason)
                if attempt < attempts:
                    await self._sleep(self.backoff(attempt))
        return FetchFailure(url=url, reason=reason, attempts=attempts)
