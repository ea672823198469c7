# File: butler/report/__init__.py
"""butler.report: репортёры событий обхода (консоль, sitemap, JSON- и HTML-отчёты)."""

from __future__ import annotations

from typing import List

from butler.report.base import Reporter, ReporterGroup, describe, reset_report_dir
from butler.report.console import ConsoleReporter
from butler.report.html_report import HtmlReporter
from butler.report.json_report import ErrorReporter, IgnoreReporter
from butler.report.sitemap import SitemapReporter


def default_reporters() -> List[Reporter]:
    """Набор репортёров, который CLI подключает к каждому обходу."""
    return [
        SitemapReporter(),
        ConsoleReporter(),
        ErrorReporter(),
        IgnoreReporter(),
        HtmlReporter(),
    ]


__all__ = [
    "Reporter",
    "ReporterGroup",
    "ConsoleReporter",
    "SitemapReporter",
    "ErrorReporter",
    "IgnoreReporter",
    "HtmlReporter",
    "default_reporters",
    "describe",
    "reset_report_dir",
]
