"""Remote model catalog fetcher.

Responsibility:
- Fetch the catalog page (blocking httpx call offloaded to a worker thread).
- Select every `<ul role="list">` element with BeautifulSoup.
- Return the matched markup, newline-joined in document order, inside an
  `OperationResult`.

Zero matches is a normal "nothing found" outcome (failure-flagged result),
whatever the HTTP status of the page. Network and read faults raise
`CatalogFetchError`.
"""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import CatalogFetchError
from core.domain.models import OperationResult
from core.logging import get_logger
from core.services.blocking import run_blocking

LIST_SELECTOR = 'ul[role="list"]'
NO_MATCH_ERROR = 'No <ul role="list"> elements found.'

log = get_logger(__name__)


def extract_list_markup(html: str) -> list[str]:
    """Serialized markup of every `<ul role="list">`, in document order."""

    soup = BeautifulSoup(html, "html.parser")
    return [str(element) for element in soup.select(LIST_SELECTOR)]


class CatalogFetcher:
    """Fetches the remote catalog page and extracts its model lists."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def _download(self) -> str:
        try:
            with build_client(self._settings, transport=self._transport) as client:
                response = client.get(self._settings.catalog_url)
                return response.text
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise CatalogFetchError(str(exc) or exc.__class__.__name__) from exc

    async def fetch_catalog(self) -> OperationResult:
        url = self._settings.catalog_url
        log.debug("catalog.fetch.start", url=url)
        try:
            html = await run_blocking(self._download)
        except CatalogFetchError as exc:
            log.warning("catalog.fetch.failed", url=url, error=exc.detail)
            raise

        fragments = extract_list_markup(html)
        if not fragments:
            log.info("catalog.fetch.empty", url=url, html_bytes=len(html))
            return OperationResult.fail(NO_MATCH_ERROR)

        log.info("catalog.fetch.done", url=url, lists=len(fragments))
        return OperationResult.ok("\n".join(fragments))
