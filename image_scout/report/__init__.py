# File: image_scout/report/__init__.py
"""image_scout.report: writing the image manifest."""

from .json_report import render_json

__all__ = ["render_json"]
