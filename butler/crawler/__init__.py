"""Crawl engine: frontier, admission policy, workers and completion tracking."""

from butler.crawler.crawler import Crawler
from butler.crawler.frontier import Frontier, InvalidLinkError, parse_link
from butler.crawler.models import Admission, CrawlStats, PageData, Task
from butler.crawler.policy import AdmissionPolicy, canonical_host
from butler.crawler.tracker import CompletionTracker

__all__ = [
    "Admission",
    "AdmissionPolicy",
    "CompletionTracker",
    "CrawlStats",
    "Crawler",
    "Frontier",
    "InvalidLinkError",
    "PageData",
    "Task",
    "canonical_host",
    "parse_link",
]
