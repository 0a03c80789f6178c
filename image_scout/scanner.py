# === FILE: image_scout/scanner.py ===
"""
Wrapper that runs one complete crawl and writes the manifest.
"""
from pathlib import Path

from image_scout.config import CrawlerConfig
from image_scout.crawler.crawler import AsyncCrawler
from image_scout.crawler.models import CrawlResult
from image_scout.report.json_report import render_json


async def start_scan(cfg: CrawlerConfig, start_url: str, max_depth: int) -> CrawlResult:
    """
    Crawl from *start_url* and save the manifest once everything has joined.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl settings; ``cfg.output_dir`` is created if missing.
    start_url : str
        Seed page, crawled at depth 1.
    max_depth : int
        Deepest level whose pages are fetched.

    Returns
    -------
    CrawlResult
        Downloaded images, visited pages, failures and the manifest path.
    """
    output_dir = Path(cfg.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    async with AsyncCrawler(cfg, output_dir=output_dir) as crawler:
        result = await crawler.crawl(start_url, max_depth)
    result.manifest_path = render_json(result.images, output_dir / cfg.manifest_name)
    return result


__all__ = ["start_scan"]
