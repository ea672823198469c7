# butler/report/console.py
"""Console reporter: one log line per crawl event."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from butler.logger import logger
from butler.report.base import Reporter, describe


class ConsoleReporter(Reporter):
    def start(self) -> None:
        logger.info("Crawl started")

    def success(self, url: str, status: int) -> None:
        logger.info("[%d] %s", status, url)

    def ignored(self, url: str, status: int, reason: Any) -> None:
        logger.info("[ignored] %s (%s)", url, describe(reason))

    def error(self, url: str, status: int, reason: Any) -> None:
        if reason is None:
            logger.warning("[%d] %s", status, url)
        else:
            logger.warning("[%d] %s (%s)", status, url, describe(reason))

    def finish(self, report_dir: Path) -> None:
        logger.info("Crawl finished, reports in %s", report_dir)
