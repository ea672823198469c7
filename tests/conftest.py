# File: tests/conftest.py
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from butler.config import CrawlerConfig
from butler.logger import configure
from butler.report import Reporter


class RecordingReporter(Reporter):
    """Keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: List[Tuple[Any, ...]] = []

    def start(self) -> None:
        self.events.append(("start",))

    def success(self, url: str, status: int) -> None:
        self.events.append(("success", url, status))

    def ignored(self, url: str, status: int, reason: Any) -> None:
        self.events.append(("ignored", url, status, reason))

    def error(self, url: str, status: int, reason: Any) -> None:
        self.events.append(("error", url, status, reason))

    def finish(self, report_dir: Path) -> None:
        self.events.append(("finish", report_dir))

    def of(self, kind: str) -> List[Tuple[Any, ...]]:
        return [e for e in self.events if e[0] == kind]

    def successes(self) -> Dict[str, int]:
        return {e[1]: e[2] for e in self.of("success")}

    def ignored_reasons(self) -> Dict[str, Any]:
        return {e[1]: e[3] for e in self.of("ignored")}

    def urls(self) -> List[str]:
        return [e[1] for e in self.events if e[0] in ("success", "ignored", "error")]


@pytest.fixture()
def recorder() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def make_config():
    """
    Return a factory building a CrawlerConfig for the given domains.
    """
    def _make(*domains: str, **overrides: Any) -> CrawlerConfig:
        return CrawlerConfig(domains=list(domains), **overrides)

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests rebind the project logger to CliRunner streams; restore it afterwards."""
    yield
    configure(level="INFO")
