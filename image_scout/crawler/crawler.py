# === FILE: image_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Awaitable, Iterable, List, Optional
from urllib.parse import urldefrag

from aiohttp import ClientSession, ClientTimeout

from image_scout.config import CrawlerConfig
from image_scout.crawler.downloader import ImageDownloader
from image_scout.crawler.fetcher import Fetcher
from image_scout.crawler.models import (
    CrawlResult,
    CrawlState,
    CrawlTask,
    FetchFailure,
    FetchSuccess,
)
from image_scout.crawler.urls import InvalidURL, is_followable, resolve, visit_key
from image_scout.logger import LOGGER_NAME
from image_scout.parser.html_parser import parse_html

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Depth-bounded async crawler that downloads every image it meets."""

    def __init__(
        self,
        config: CrawlerConfig,
        *,
        session: Optional[ClientSession] = None,
        output_dir: Optional[Path] = None,
    ) -> None:
        self.config = config
        self.output_dir = Path(output_dir if output_dir is not None else config.output_dir)
        self.session: Optional[ClientSession] = session
        self._owns_session = session is None
        self.logger = logging.getLogger(LOGGER_NAME)
        self._semaphore = asyncio.Semaphore(config.concurrency)
        self.fetcher: Optional[Fetcher] = None
        self.downloader: Optional[ImageDownloader] = None
        if session is not None:
            self._wire(session)

    async def __aenter__(self) -> AsyncCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._wire(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _wire(self, session: ClientSession) -> None:
        self.fetcher = Fetcher(session, self.config, self._semaphore)
        self.downloader = ImageDownloader(
            self.fetcher, self.output_dir, self.config.default_image_name
        )

    async def crawl(self, start_url: str, max_depth: int) -> CrawlResult:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        self.logger.info("Crawl started: %s (max depth %d)", start_url, max_depth)
        start = time.monotonic()
        state = CrawlState(max_depth=max_depth)
        await self.crawl_page(state, CrawlTask(start_url, 1))
        result = CrawlResult.from_state(state)
        duration = time.monotonic() - start
        self.logger.info(
            "Finished: %d pages, %d images in %.2f s (%d failures)",
            len(result.pages), len(result.images), duration, len(result.failures),
        )
        return result

    async def crawl_page(self, state: CrawlState, task: CrawlTask) -> None:
        """
        Visit one page: download its images, then recurse into its links.

        Returns only after every image of this page and every subtree it
        spawned has finished.
        """
        if task.depth > state.max_depth:
            return
        try:
            key = visit_key(task.url)
        except InvalidURL:
            key = task.url
        if not state.visited.claim(key):
            return

        self.logger.info("Crawling (depth %d): %s", task.depth, task.url)
        outcome = await self.fetcher.fetch(task.url, max_attempts=self.config.max_attempts)
        if isinstance(outcome, FetchFailure):
            self.logger.error("Giving up on %s after %d attempts", task.url, outcome.attempts)
            state.failures.append(outcome)
            return
        state.pages.append(task.url)

        if not self._is_html(outcome):
            self.logger.debug("Skipping non-HTML page %s (%s)", task.url, outcome.content_type)
            return

        parsed = parse_html(outcome.body)

        downloads = [
            self.downloader.download(state.manifest, img_url, task.url, task.depth)
            for img_url in self._resolve_all(parsed.images, task.url, "image")
        ]
        await self._join(state, task.url, downloads)

        if task.depth < state.max_depth:
            children = [
                self.crawl_page(state, task.child(urldefrag(link).url))
                for link in self._resolve_all(parsed.links, task.url, "link")
                if is_followable(link)
            ]
            await self._join(state, task.url, children)

    def _resolve_all(self, references: Iterable[str], page_url: str, kind: str) -> List[str]:
        resolved: List[str] = []
        for ref in references:
            try:
                resolved.append(resolve(ref, page_url))
            except InvalidURL as exc:
                self.logger.warning("Invalid %s URL: %s on page %s (%s)", kind, ref, page_url, exc.reason)
        return resolved

    async def _join(self, state: CrawlState, page_url: str, coros: List[Awaitable[None]]) -> None:
        if not coros:
            return
        results = await asyncio.gather(*coros, return_exceptions=True)
        for res in results:
            if isinstance(res, Exception):
                self.logger.error(
                    "Unexpected error below %s: %r", page_url, res, exc_info=res
                )
                state.failures.append(
                    FetchFailure(url=page_url, reason=f"{type(res).__name__}: {res}")
                )
            elif isinstance(res, BaseException):
                raise res

    @staticmethod
    def _is_html(outcome: FetchSuccess) -> bool:
        ctype = outcome.content_type
        return bool(ctype) and "text/html" in ctype.lower()
