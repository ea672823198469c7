# butler/report/sitemap.py
"""
Генерация sitemap.xml (протокол sitemaps.org 0.9) по успешно загруженным страницам.
"""
from __future__ import annotations

from pathlib import Path
from typing import Set, Union

from butler.report.base import Reporter, template_environment

SITEMAP_FILE = "sitemap.xml"


class SitemapReporter(Reporter):
    """Collects every successfully crawled URL and writes ``sitemap.xml``."""

    def __init__(self, template_dir: Union[str, Path, None] = None) -> None:
        self.template_dir = template_dir
        self.urls: Set[str] = set()

    def start(self) -> None:
        self.urls.clear()

    def success(self, url: str, status: int) -> None:
        self.urls.add(url)

    def finish(self, report_dir: Path) -> None:
        render_sitemap(sorted(self.urls), Path(report_dir) / SITEMAP_FILE, self.template_dir)


def render_sitemap(
    urls: list[str],
    output_path: Union[Path, str],
    template_dir: Union[Path, str, None] = None,
) -> Path:
    """Рендерит sitemap из шаблона и сохраняет его по указанному пути.

    Пример:
    ```python
    from butler.report.sitemap import render_sitemap
    path = render_sitemap(["http://example.com/"], "report/sitemap.xml")
    ```
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = template_environment(template_dir).get_template("sitemap.xml.j2")
    output_path.write_text(template.render(urls=urls), encoding="utf-8")
    return output_path
