# image_scout/crawler/models.py
"""
Data models and shared crawl state for the ImageScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Union


@dataclass(slots=True, frozen=True)
class ImageRecord:
    """One downloaded image: where it came from and at which depth."""

    url: str
    page: str
    depth: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class CrawlTask:
    """A page to visit. The seed is depth 1; each hop adds exactly one."""

    url: str
    depth: int

    def child(self, url: str) -> CrawlTask:
        return CrawlTask(url, self.depth + 1)


@dataclass(slots=True, frozen=True)
class FetchSuccess:
    """A response reached the client (any status code)."""

    url: str
    status: int
    headers: Mapping[str, str]
    body: bytes
    attempts: int = 1

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")


@dataclass(slots=True, frozen=True)
class FetchFailure:
    """No response after all attempts, or a failure recorded during traversal."""

    url: str
    reason: str
    attempts: int = 0


FetchOutcome = Union[FetchSuccess, FetchFailure]


class VisitedSet:
    """
    Set of page keys already claimed by a traversal task.

    :meth:`claim` performs check-and-insert without an ``await`` in between,
    so on one event loop exactly one task wins for a given key.
    """

    __slots__ = ("_urls",)

    def __init__(self) -> None:
        self._urls: Set[str] = set()

    def claim(self, url: str) -> bool:
        if url in self._urls:
            return False
        self._urls.add(url)
        return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)


class ImageManifest:
    """Append-only list of ImageRecord in completion order."""

    __slots__ = ("_records",)

    def __init__(self) -> None:
        self._records: List[ImageRecord] = []

    def append(self, record: ImageRecord) -> None:
        self._records.append(record)

    def records(self) -> List[ImageRecord]:
        return list(self._records)

    def __iter__(self) -> Iterator[ImageRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)


@dataclass(slots=True)
class CrawlState:
    """Everything the traversal of one crawl run shares between tasks."""

    max_depth: int
    visited: VisitedSet = field(default_factory=VisitedSet)
    manifest: ImageManifest = field(default_factory=ImageManifest)
    pages: List[str] = field(default_factory=list)
    failures: List[FetchFailure] = field(default_factory=list)


@dataclass(slots=True)
class CrawlResult:
    """Outcome of a finished crawl."""

    images: List[ImageRecord]
    pages: List[str]
    failures: List[FetchFailure]
    manifest_path: Optional[Path] = None

    @classmethod
    def from_state(cls, state: CrawlState) -> CrawlResult:
        return cls(
            images=state.manifest.records(),
            pages=list(state.pages),
            failures=list(state.failures),
        )
