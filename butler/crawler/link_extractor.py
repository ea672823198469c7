# butler/crawler/link_extractor.py
"""
Pattern-based href extraction for Butler.

No DOM is built: anchors are found with a single regular expression over the
raw response body. The compiled pattern is immutable, so one extractor can be
shared by every worker.
"""
from __future__ import annotations

import re
from typing import Iterable, Iterator, Protocol

LINK_PATTERN = re.compile(rb"""<a[^>]+href=["']([^"']+)["']""", re.IGNORECASE)
NON_ASCII = re.compile(rb"[\x80-\xff]")


class LinkExtractor(Protocol):
    """Anything that turns an HTML body into raw href strings."""

    def extract(self, body: bytes) -> Iterable[str]:
        ...


def escape_non_ascii(raw: bytes) -> str:
    """Percent-encode every byte above 0x7F, e.g. ``b"/caf\\xe9"`` -> ``"/caf%E9"``.

    The document encoding is unknown, so bytes are kept as they are instead of
    being decoded.
    """
    return NON_ASCII.sub(lambda m: b"%%%02X" % m.group()[0], raw).decode("ascii")


class RegexLinkExtractor:
    """Yield the raw ``href`` value of every ``<a>`` tag matched in *body*.

    Values are returned as written in the document: not unescaped, not
    resolved, not validated. Non-ASCII bytes come back percent-encoded.
    """

    def __init__(self, pattern: re.Pattern[bytes] = LINK_PATTERN) -> None:
        self.pattern = pattern

    def extract(self, body: bytes) -> Iterator[str]:
        for match in self.pattern.finditer(body):
            yield escape_non_ascii(match.group(1))


__all__ = ["LINK_PATTERN", "LinkExtractor", "RegexLinkExtractor", "escape_non_ascii"]
