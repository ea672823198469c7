# butler/crawler/models.py
"""
Data models for the Butler crawler.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(order=True, frozen=True, slots=True)
class Task:
    """One URL waiting to be fetched; shorter URLs are dequeued first."""

    priority: int
    url: str = field(compare=False)

    @classmethod
    def for_url(cls, url: str) -> Task:
        return cls(priority=len(url), url=url)


class Admission(enum.Enum):
    """Outcome of :meth:`Frontier.admit`."""

    ENQUEUED = "enqueued"
    IGNORED = "ignored"
    DUPLICATE = "duplicate"


@dataclass(slots=True)
class PageData:
    """Response of a single GET. ``content`` is only read for 200 text/html."""

    url: str
    status: int
    content_type: str
    content: Optional[bytes] = None

    @property
    def is_html(self) -> bool:
        return self.content_type.startswith("text/html")


@dataclass(frozen=True, slots=True)
class Outcome:
    """What happened to one fetched task: ``success``, ``ignored`` or ``error``."""

    kind: str
    status: int
    reason: Any = None


@dataclass(slots=True)
class CrawlStats:
    """Counters collected over one crawl run."""

    succeeded: int = 0
    ignored: int = 0
    errors: int = 0
    known: int = 0
    elapsed: float = 0.0
