# butler/report/json_report.py

"""
JSON-журналы ошибок и проигнорированных ссылок для проекта Butler.

Каждый журнал: список записей ``{"url", "status", "reason"}``,
который записывается в каталог отчётов по завершении обхода.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from butler.report.base import Reporter, describe

EventEntry = Dict[str, Any]


def render_json(entries: List[EventEntry], output_path: Union[Path, str]) -> Path:
    """
    Сохраняет записи в формате JSON по указанному пути.

    :param entries: список записей журнала
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(entries, f, ensure_ascii=False, indent=2)

    return output


class _EventLogReporter(Reporter):
    filename: str = ""

    def __init__(self) -> None:
        self.entries: List[EventEntry] = []

    def start(self) -> None:
        self.entries.clear()

    def _record(self, url: str, status: int, reason: Any) -> None:
        reason_text: Optional[str] = describe(reason)
        self.entries.append({'url': url, 'status': status, 'reason': reason_text})

    def finish(self, report_dir: Path) -> None:
        render_json(self.entries, Path(report_dir) / self.filename)


class ErrorReporter(_EventLogReporter):
    """Пишет ``errors.json``: сбои транспорта и ответы со статусом, отличным от 200."""
    filename = 'errors.json'

    def error(self, url: str, status: int, reason: Any) -> None:
        self._record(url, status, reason)


class IgnoreReporter(_EventLogReporter):
    """Пишет ``ignored.json``: ссылки, отклонённые политикой или по content-type."""
    filename = 'ignored.json'

    def ignored(self, url: str, status: int, reason: Any) -> None:
        self._record(url, status, reason)
