# butler/report/base.py
"""butler.report.base: интерфейс репортёров и их упорядоченная рассылка."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class Reporter:
    """Receives crawl outcomes. Every hook is a no-op; override what you need.

    ``status`` is ``0`` whenever no HTTP response was involved: links rejected
    by policy, pages ignored by content type and transport failures.
    """

    def start(self) -> None:
        pass

    def success(self, url: str, status: int) -> None:
        pass

    def ignored(self, url: str, status: int, reason: Any) -> None:
        pass

    def error(self, url: str, status: int, reason: Any) -> None:
        pass

    def finish(self, report_dir: Path) -> None:
        pass


class ReporterGroup:
    """Forwards each event to all registered reporters in registration order."""

    def __init__(self, reporters: Iterable[Reporter] = ()) -> None:
        self._reporters: List[Reporter] = list(reporters)
        self.counts: Dict[str, int] = {"success": 0, "ignored": 0, "error": 0}

    def register(self, reporter: Reporter) -> None:
        self._reporters.append(reporter)

    def __iter__(self) -> Iterator[Reporter]:
        return iter(self._reporters)

    def __len__(self) -> int:
        return len(self._reporters)

    def start(self) -> None:
        for reporter in self._reporters:
            reporter.start()

    def success(self, url: str, status: int) -> None:
        self.counts["success"] += 1
        for reporter in self._reporters:
            reporter.success(url, status)

    def ignored(self, url: str, status: int, reason: Any) -> None:
        self.counts["ignored"] += 1
        for reporter in self._reporters:
            reporter.ignored(url, status, reason)

    def error(self, url: str, status: int, reason: Any) -> None:
        self.counts["error"] += 1
        for reporter in self._reporters:
            reporter.error(url, status, reason)

    def finish(self, report_dir: Path) -> None:
        for reporter in self._reporters:
            reporter.finish(report_dir)


def describe(reason: Any) -> Optional[str]:
    """Человекочитаемая причина: исключения без текста заменяются именем класса."""
    if reason is None:
        return None
    if isinstance(reason, BaseException):
        text = str(reason)
        return f"{type(reason).__name__}: {text}" if text else type(reason).__name__
    return str(reason)


def reset_report_dir(path: Union[str, Path]) -> Path:
    """Удаляет каталог отчётов со всем содержимым и создаёт его заново."""
    p = Path(path)
    if p.exists():
        shutil.rmtree(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def template_environment(template_dir: Union[str, Path, None] = None) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
