# === FILE: image_scout/parser/html_parser.py ===
"""HTML parsing helpers for ImageScout.

The crawler only needs two things out of a page:

* images — raw ``src`` values of every ``<img>`` tag;
* links  — raw ``href`` values of every ``<a>`` tag.

Values are returned exactly as written in the markup (resolution against the
page URL is the crawler's job), in document order, without empty values.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("ParsedPage", "extract_attributes", "parse_html")

Document = Union[str, bytes, BeautifulSoup]


@dataclass(slots=True)
class ParsedPage:
    """References found on one HTML page."""

    images: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)


def _soup(document: Document) -> BeautifulSoup:
    if isinstance(document, BeautifulSoup):
        return document
    return BeautifulSoup(document, "html.parser")


def extract_attributes(document: Document, tag: str, attribute: str) -> list[str]:
    """Return the non-empty values of *attribute* on every *tag* element."""
    values: list[str] = []
    for element in _soup(document).find_all(tag):
        if not isinstance(element, Tag):
            continue
        value = element.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        if value:
            values.append(value)
    return values


def parse_html(document: Document) -> ParsedPage:
    """Parse markup (text or raw bytes) once and pull out image and link references."""
    soup = _soup(document)
    return ParsedPage(
        images=extract_attributes(soup, "img", "src"),
        links=extract_attributes(soup, "a", "href"),
    )
