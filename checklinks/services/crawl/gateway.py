from __future__ import annotations

from typing import Tuple

import httpx
from bs4 import BeautifulSoup

from checklinks.core import http
from .errors import HTTPStatusError, MalformedURL, TransportError
from .markup import empty_document, is_html, parse_document
from .models import CrawlSettings


class FetchGateway:
    """Outbound HTTP for the crawl.

    ``fetch_document`` is used for internal pages whose links are followed,
    ``check_link`` for leaves where only the status matters.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @classmethod
    def from_settings(cls, settings: CrawlSettings) -> "FetchGateway":
        return cls(
            http.async_client(
                timeout=settings.timeout,
                verify=settings.verify,
                user_agent=settings.user_agent,
            )
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "FetchGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False

    async def fetch_document(self, url: str) -> BeautifulSoup:
        try:
            async with self.client.stream("GET", url) as response:
                if not response.is_success:
                    raise HTTPStatusError("GET", response.status_code)
                if not is_html(response.headers.get("content-type")):
                    return empty_document()
                body = await response.aread()
        except httpx.InvalidURL as e:
            raise MalformedURL(url, str(e)) from e
        except httpx.HTTPError as e:
            raise TransportError("GET", url, e) from e
        return parse_document(body, url)

    async def check_link(self, url: str) -> Tuple[int, str]:
        """Return the status of ``url`` and the method that produced it.

        HEAD first; a server answering 405 gets a single streamed GET whose
        body is never read.
        """
        method = "HEAD"
        try:
            response = await self.client.head(url)
            if response.status_code == httpx.codes.METHOD_NOT_ALLOWED:
                method = "GET"
                async with self.client.stream("GET", url) as fallback:
                    response = fallback
        except httpx.InvalidURL as e:
            raise MalformedURL(url, str(e)) from e
        except httpx.HTTPError as e:
            raise TransportError(method, url, e) from e
        return response.status_code, method
