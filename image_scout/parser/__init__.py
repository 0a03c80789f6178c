# File: image_scout/parser/__init__.py
"""image_scout.parser: extracting references from HTML."""

from .html_parser import ParsedPage, extract_attributes, parse_html

__all__ = ["ParsedPage", "extract_attributes", "parse_html"]
