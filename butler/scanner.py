# === FILE: butler/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
from pathlib import Path
from typing import Iterable, Optional, Union

from butler.config import CrawlerConfig
from butler.crawler.crawler import Crawler
from butler.crawler.models import CrawlStats
from butler.report import Reporter, default_reporters


async def start_crawl(
    cfg: CrawlerConfig,
    report_dir: Union[str, Path] = "report",
    pool_size: Optional[int] = None,
    reporters: Optional[Iterable[Reporter]] = None,
) -> CrawlStats:
    """
    Создаёт краулер, засевает домены из конфига и запускает обход.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    report_dir : str | Path
        Каталог отчётов; пересоздаётся перед стартом.
    pool_size : int, optional
        Число воркеров (по умолчанию ``cfg.pool_size``).
    reporters : iterable of Reporter, optional
        Репортёры; по умолчанию :func:`butler.report.default_reporters`.

    Returns
    -------
    CrawlStats
        Итоговые счётчики обхода.
    """
    crawler = Crawler(
        cfg,
        report_dir,
        reporters=default_reporters() if reporters is None else reporters,
    )
    crawler.seed()
    return await crawler.run(pool_size)

__all__ = ["start_crawl"]
