# === FILE: image_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the ImageScout crawler.

Usage:
  image_scout <start_url> <depth>

Crawls from START_URL down to DEPTH link hops (the start page is depth 1),
saves every image found into ``images/`` and writes ``images/index.json``.

Settings other than the seed and depth come from the config file named by
``IMAGE_SCOUT_CONFIG`` or ``configs/default.yaml`` (see image_scout.config).

Example:
  image_scout https://example.com 2
"""
import asyncio
import sys

import click
from pydantic import ValidationError

from image_scout.config import load_config
from image_scout.logger import init_logging
from image_scout.scanner import start_scan

USAGE = "Usage: image_scout <start_url> <depth>"

CONTEXT_SETTINGS = dict(help_option_names=["--help"], ignore_unknown_options=True)


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument('args', nargs=-1, metavar='START_URL DEPTH')
def cli(args):
    """Crawl START_URL to DEPTH and download every image found."""
    if len(args) != 2:
        click.echo(USAGE)
        sys.exit(1)
    start_url, raw_depth = args
    try:
        depth = int(raw_depth)
    except ValueError:
        print_error('Depth must be an integer')

    try:
        cfg = load_config()
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Failed to load configuration: {e}')

    init_logging(level=cfg.log_level, log_file=cfg.log_file)

    result = asyncio.run(start_scan(cfg, start_url, depth))

    click.echo(
        f"\nSaved {result.manifest_path.name} with {len(result.images)} images "
        f"in the '{result.manifest_path.parent}' folder."
    )


if __name__ == "__main__":
    cli()
