from __future__ import annotations

import asyncio
import html
import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from aiohttp import ClientSession, ClientTimeout

from butler.config import CrawlerConfig
from butler.crawler.fetcher import FetchError, Fetcher
from butler.crawler.frontier import Frontier, InvalidLinkError
from butler.crawler.link_extractor import LinkExtractor, RegexLinkExtractor
from butler.crawler.models import Admission, CrawlStats, Outcome
from butler.crawler.policy import AdmissionPolicy
from butler.crawler.tracker import CompletionTracker
from butler.logger import LOGGER_NAME
from butler.report import Reporter, ReporterGroup, reset_report_dir

__all__ = ("Crawler",)


class Crawler:
    """Асинхронный краулер, ограниченный списком разрешённых доменов.

    Каждый URL загружается не более одного раза. Обход завершается, когда
    счётчик незавершённых задач опускается до нуля.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        report_dir: Union[str, Path] = "report",
        *,
        extractor: Optional[LinkExtractor] = None,
        reporters: Iterable[Reporter] = (),
    ) -> None:
        self.config = config
        self.report_dir = Path(report_dir).expanduser().resolve()
        self.extractor: LinkExtractor = extractor or RegexLinkExtractor()
        self.reporters = ReporterGroup(reporters)
        self.policy = AdmissionPolicy(config.allow_www, config.schemes)
        self.tracker = CompletionTracker()
        self.frontier = Frontier(self.policy, self.tracker, self.reporters)
        self.logger = logging.getLogger(LOGGER_NAME)
        self._stop = asyncio.Event()
        self._started = False

    def register_reporter(self, reporter: Reporter) -> None:
        self.reporters.register(reporter)

    def allow(self, domain: str) -> str:
        """Permit crawling *domain*; returns its canonical host."""
        return self.policy.allow(domain)

    def seed(self, domains: Optional[Iterable[str]] = None) -> List[Admission]:
        """Allow every domain and admit its root page ``http://<domain>/``."""
        if domains is None:
            domains = self.config.domains
        results = []
        for domain in domains:
            host = self.allow(domain)
            results.append(self.frontier.admit(f"http://{host}/"))
        return results

    def stop(self) -> None:
        """Ask the workers to stop; :meth:`run` returns without draining the queue."""
        self._stop.set()

    async def run(self, pool_size: Optional[int] = None) -> CrawlStats:
        if self._started:
            raise RuntimeError("Crawler.run() can only be called once")
        self._started = True
        size = self.config.pool_size if pool_size is None else pool_size
        if size < 1:
            raise ValueError("pool_size must be >= 1")

        reset_report_dir(self.report_dir)
        self.reporters.start()
        self.logger.info(
            "Старт обхода: %s, воркеров: %d, в очереди: %d",
            ", ".join(sorted(self.policy.domains)), size, self.tracker.pending,
        )
        start = time.monotonic()

        timeout = ClientTimeout(total=self.config.timeout)
        async with ClientSession(timeout=timeout, headers={"User-Agent": self.config.user_agent}) as session:
            fetcher = Fetcher(session)
            workers = [
                asyncio.create_task(self._worker(fetcher), name=f"butler-worker-{i}")
                for i in range(size)
            ]
            try:
                await self._wait_for_completion()
            finally:
                for w in workers:
                    w.cancel()
                await asyncio.gather(*workers, return_exceptions=True)

        counts = self.reporters.counts
        stats = CrawlStats(
            succeeded=counts["success"],
            ignored=counts["ignored"],
            errors=counts["error"],
            known=len(self.frontier),
            elapsed=time.monotonic() - start,
        )
        self.reporters.finish(self.report_dir)
        self.logger.info(
            "Завершено: %d страниц, %d ошибок, %d пропущено за %.2f с",
            stats.succeeded, stats.errors, stats.ignored, stats.elapsed,
        )
        return stats

    async def _wait_for_completion(self) -> None:
        drained = asyncio.create_task(self.tracker.wait())
        stopped = asyncio.create_task(self._stop.wait())
        try:
            await asyncio.wait({drained, stopped}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            drained.cancel()
            stopped.cancel()
        if self._stop.is_set() and self.tracker.pending:
            self.logger.warning("Обход остановлен, незавершённых задач: %d", self.tracker.pending)

    async def _worker(self, fetcher: Fetcher) -> None:
        while True:
            task = await self.frontier.get()
            try:
                if self._stop.is_set():
                    continue
                try:
                    outcome = await self._process(fetcher, task.url)
                except Exception as exc:
                    self.logger.exception("Unexpected failure while processing %s", task.url)
                    outcome = Outcome("error", 0, exc)
                self._report(task.url, outcome)
            finally:
                self.tracker.done()

    def _report(self, url: str, outcome: Outcome) -> None:
        """Send the single outcome of a task; a failing reporter is logged, not retried."""
        try:
            if outcome.kind == "success":
                self.reporters.success(url, outcome.status)
            elif outcome.kind == "ignored":
                self.reporters.ignored(url, outcome.status, outcome.reason)
            else:
                self.reporters.error(url, outcome.status, outcome.reason)
        except Exception:
            self.logger.exception("Reporter failed on %s event for %s", outcome.kind, url)

    async def _process(self, fetcher: Fetcher, url: str) -> Outcome:
        try:
            page = await fetcher.fetch(url)
        except FetchError as exc:
            return Outcome("error", 0, exc.cause)

        if page.status != 200:
            return Outcome("error", page.status)
        if not page.is_html:
            return Outcome("ignored", 0, f"content-type: {page.content_type}")

        for raw in self.extractor.extract(page.content or b""):
            link = html.unescape(raw).strip()
            if not link or link.startswith("#"):
                continue
            try:
                self.frontier.admit(link, base=url)
            except InvalidLinkError as exc:
                self.logger.warning("Invalid url: %s (%s)", link, exc)

        return Outcome("success", page.status)
