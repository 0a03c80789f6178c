# image_scout/crawler/downloader.py
"""
Image downloading: fetch, derive a stable file name, write, record.
"""
from __future__ import annotations

import hashlib
import logging
import posixpath
from pathlib import Path
from urllib.parse import urlsplit

import aiofiles

from image_scout.crawler.fetcher import Fetcher
from image_scout.crawler.models import FetchFailure, ImageManifest, ImageRecord
from image_scout.logger import LOGGER_NAME

__all__ = ("image_filename", "ImageDownloader")

logger = logging.getLogger(LOGGER_NAME)


def image_filename(img_url: str, default: str = "image.jpg") -> str:
    """
    ``<md5 hex of img_url>_<last path segment>``.

    The same URL always yields the same name, and distinct URLs sharing a
    base name do not collide.
    """
    try:
        path = urlsplit(img_url).path
    except ValueError:
        path = ""
    name = posixpath.basename(path) or default
    digest = hashlib.md5(img_url.encode("utf-8")).hexdigest()
    return f"{digest}_{name}"


class ImageDownloader:
    """Downloads images into *output_dir* and appends them to a manifest."""

    def __init__(self, fetcher: Fetcher, output_dir: Path, default_name: str = "image.jpg") -> None:
        self.fetcher = fetcher
        self.output_dir = Path(output_dir)
        self.default_name = default_name

    def target_path(self, img_url: str) -> Path:
        return self.output_dir / image_filename(img_url, self.default_name)

    async def download(self, manifest: ImageManifest, img_url: str, page_url: str, depth: int) -> None:
        """Failures are logged here and never reach the caller."""
        try:
            outcome = await self.fetcher.fetch(
                img_url, max_attempts=self.fetcher.config.image_attempts
            )
        except ValueError as exc:
            logger.error("Failed to download image %s: %s", img_url, exc)
            return
        if isinstance(outcome, FetchFailure):
            logger.error("Failed to download image %s: %s", img_url, outcome.reason)
            return
        if not 200 <= outcome.status < 300:
            # body is kept whatever the status
            logger.warning("Image %s answered HTTP %d; saving body anyway", img_url, outcome.status)

        file_path = self.target_path(img_url)
        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(outcome.body)
        except OSError as exc:
            logger.error("Failed to write image %s to %s: %s", img_url, file_path, exc)
            return

        logger.info("Downloaded: %s -> %s", img_url, file_path)
        manifest.append(ImageRecord(url=img_url, page=page_url, depth=depth))
