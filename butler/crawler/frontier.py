# butler/crawler/frontier.py
"""
Frontier: the set of every URL seen during a run plus the queue of pending
fetch tasks.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Optional, Set
from urllib.parse import SplitResult, urljoin, urlsplit

from butler.crawler.models import Admission, Task
from butler.crawler.policy import AdmissionPolicy
from butler.crawler.tracker import CompletionTracker
from butler.logger import LOGGER_NAME

if TYPE_CHECKING:
    from butler.report import ReporterGroup

__all__ = ("Frontier", "InvalidLinkError", "parse_link")


class InvalidLinkError(ValueError):
    """A discovered link that cannot be parsed as a URL."""


def parse_link(raw: str) -> SplitResult:
    """Split *raw* into URL parts, raising :class:`InvalidLinkError` if malformed."""
    try:
        parts = urlsplit(raw)
        parts.port  # validates the port component
    except ValueError as exc:
        raise InvalidLinkError(f"invalid url {raw!r}: {exc}") from exc
    return parts


class Frontier:
    """Deduplicating admission point in front of the task queue.

    :meth:`admit` is the only way work enters the queue. It resolves and
    normalizes the link, drops URLs already seen, and either enqueues a
    :class:`Task` (counting it in the tracker) or reports the link as ignored.
    """

    def __init__(
        self,
        policy: AdmissionPolicy,
        tracker: CompletionTracker,
        reporters: ReporterGroup,
    ) -> None:
        self.policy = policy
        self.tracker = tracker
        self.reporters = reporters
        self.logger = logging.getLogger(LOGGER_NAME)
        self._known: Set[str] = set()
        self._lock = threading.Lock()
        self._queue: asyncio.PriorityQueue[Task] = asyncio.PriorityQueue()

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return self.normalize(url) in self._known

    def __len__(self) -> int:
        with self._lock:
            return len(self._known)

    @property
    def pending(self) -> int:
        """Tasks queued but not yet picked up by a worker."""
        return self._queue.qsize()

    def normalize(self, link: str, base: Optional[str] = None) -> str:
        """Return the dedup key of *link* (resolved against *base* if given)."""
        return self._canonicalize(link, base).geturl()

    def _canonicalize(self, link: str, base: Optional[str]) -> SplitResult:
        if base:
            try:
                link = urljoin(base, link)
            except ValueError as exc:
                raise InvalidLinkError(f"cannot resolve {link!r} against {base!r}: {exc}") from exc
        parts = parse_link(link)
        netloc = parts.netloc
        if netloc:
            userinfo, at, host = netloc.rpartition("@")
            netloc = userinfo + at + self.policy.normalize_host(host)
        return parts._replace(netloc=netloc, path=parts.path or "/", fragment="")

    def admit(self, link: str, base: Optional[str] = None) -> Admission:
        """Offer *link* to the crawl.

        Returns which of the three things happened: the URL was enqueued, it
        was reported as ignored, or it had been seen before and nothing
        happened. Raises :class:`InvalidLinkError` for unparsable links.
        Call it from the event loop thread: the queue and tracker wake waiting
        coroutines and are not thread-safe.
        """
        parts = self._canonicalize(link, base)
        key = parts.geturl()
        host = parts.netloc.rpartition("@")[2]

        with self._lock:
            if key in self._known:
                return Admission.DUPLICATE
            self._known.add(key)
            reason = self.policy.check(parts.scheme, host)
            if reason is None:
                self.tracker.add()
                self._queue.put_nowait(Task.for_url(key))

        if reason is not None:
            self.logger.debug("Ignored %s: %s", key, reason)
            self.reporters.ignored(key, 0, reason)
            return Admission.IGNORED

        self.logger.debug("Enqueued %s", key)
        return Admission.ENQUEUED

    async def get(self) -> Task:
        """Wait for the next task."""
        return await self._queue.get()
