from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import httpx
from lxml.etree import ParserError
from lxml.html import HtmlElement, document_fromstring

from multichat.core.websearch.base import BaseWebSearch, SearchResult


def _has_class(name: str) -> str:
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


_RESULT_XPATH = f".//div[{_has_class('web-result')}]"
_TITLE_LINK_XPATH = f".//*[{_has_class('result__title')}]//a"
_SNIPPET_XPATH = f".//*[{_has_class('result__snippet')}]"


class DuckDuckGoSearch(BaseWebSearch):
    """Scrapes the no-JavaScript DuckDuckGo results page."""

    def __init__(
        self,
        user_agent: str,
        api_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._user_agent = user_agent
        self._api_url = api_url or "https://html.duckduckgo.com/html/"
        self._timeout = timeout
        self._transport = transport

    @staticmethod
    def _text(element: HtmlElement | None) -> str:
        if element is None:
            return ""
        return " ".join(element.text_content().split())

    @staticmethod
    def _normalize_url(raw_href: str) -> str:
        url = raw_href.strip()
        if url.startswith("//"):
            url = "https:" + url
        parsed = urlparse(url)
        # Result links go through a /l/?uddg=<target> redirect.
        if parsed.netloc.endswith("duckduckgo.com") and parsed.path.startswith("/l/"):
            target = parse_qs(parsed.query).get("uddg")
            if target and target[0]:
                return target[0]
        return url

    @classmethod
    def parse_results(cls, page: str, num_results: int) -> list[SearchResult]:
        try:
            doc = document_fromstring(page)
        except ParserError:
            return []

        results: list[SearchResult] = []
        for block in doc.xpath(_RESULT_XPATH):
            if len(results) >= num_results:
                break
            links = block.xpath(_TITLE_LINK_XPATH)
            snippets = block.xpath(_SNIPPET_XPATH)
            link = links[0] if links else None

            title = cls._text(link)
            url = cls._normalize_url(link.get("href", "")) if link is not None else ""
            snippet = cls._text(snippets[0] if snippets else None)

            if title and url and snippet:
                results.append(SearchResult(title=title, url=url, snippet=snippet))

        return results

    def search(self, query: str, num_results: int = 5) -> list[SearchResult]:
        headers = {"User-Agent": self._user_agent}
        with httpx.Client(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = client.get(self._api_url, params={"q": query}, headers=headers)
            response.raise_for_status()
            page = response.text

        return self.parse_results(page, num_results)
