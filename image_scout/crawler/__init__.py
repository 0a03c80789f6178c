# File: image_scout/crawler/__init__.py
"""image_scout.crawler: traversal, fetching and image downloads."""

from .crawler import AsyncCrawler
from .downloader import ImageDownloader, image_filename
from .fetcher import Fetcher
from .models import CrawlResult, CrawlState, CrawlTask, FetchFailure, FetchSuccess, ImageRecord
from .urls import InvalidURL, resolve

__all__ = [
    "AsyncCrawler",
    "CrawlResult",
    "CrawlState",
    "CrawlTask",
    "FetchFailure",
    "FetchSuccess",
    "Fetcher",
    "ImageDownloader",
    "ImageRecord",
    "InvalidURL",
    "image_filename",
    "resolve",
]
