"""butler.report.html_report: Генерация HTML-сводки обхода с помощью Jinja2."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Union

from butler.report.base import Reporter, describe, template_environment

INDEX_FILE = "index.html"


@dataclass(slots=True)
class ReportEntry:
    kind: str
    url: str
    status: int
    reason: Optional[str] = None


class HtmlReporter(Reporter):
    """Collects all events and renders ``index.html`` when the crawl finishes."""

    def __init__(self, template_dir: Union[str, Path, None] = None) -> None:
        self.template_dir = template_dir
        self.entries: List[ReportEntry] = []

    def start(self) -> None:
        self.entries.clear()

    def success(self, url: str, status: int) -> None:
        self.entries.append(ReportEntry("success", url, status))

    def ignored(self, url: str, status: int, reason: Any) -> None:
        self.entries.append(ReportEntry("ignored", url, status, describe(reason)))

    def error(self, url: str, status: int, reason: Any) -> None:
        self.entries.append(ReportEntry("error", url, status, describe(reason)))

    def finish(self, report_dir: Path) -> None:
        render_html(self.entries, self.template_dir, Path(report_dir) / INDEX_FILE)


def render_html(
    entries: List[ReportEntry],
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        entries: события обхода в порядке поступления.
        template_dir: директория с Jinja2-шаблонами (None: встроенные шаблоны).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = template_environment(template_dir).get_template("report.html.j2")

    context: dict[str, Any] = {
        "pages": sorted((e for e in entries if e.kind == "success"), key=lambda e: e.url),
        "errors": [e for e in entries if e.kind == "error"],
        "ignored": [e for e in entries if e.kind == "ignored"],
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
