# butler/crawler/fetcher.py
"""
Fetcher module: a single HTTP GET per URL, no redirects, no retries.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from butler.crawler.models import PageData


class FetchError(Exception):
    """Transport-level failure: no HTTP response was obtained."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"{url}: {cause!r}")
        self.url = url
        self.cause = cause


class Fetcher:
    """Performs GET requests over a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its status and content type.

        The body is read only for ``200`` responses whose content type is
        HTML. Raises :class:`FetchError` when the request itself fails.
        """
        try:
            async with self.session.get(url, allow_redirects=False) as resp:
                page = PageData(url, resp.status, resp.headers.get("Content-Type", ""))
                if page.status == 200 and page.is_html:
                    page.content = await resp.read()
                return page
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, exc) from exc
