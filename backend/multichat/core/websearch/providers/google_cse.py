from __future__ import annotations

import httpx

from multichat.core.errors import SearchError
from multichat.core.websearch.base import BaseWebSearch, SearchResult

MAX_RESULTS_PER_REQUEST = 10


class GoogleCustomSearch(BaseWebSearch):
    def __init__(
        self,
        api_key: str,
        engine_id: str,
        api_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key or not engine_id:
            raise SearchError("Google Search API key and Search Engine ID required")
        self._api_key = api_key
        self._engine_id = engine_id
        self._api_url = api_url or "https://www.googleapis.com/customsearch/v1"
        self._timeout = timeout
        self._transport = transport

    def search(self, query: str, num_results: int = 5) -> list[SearchResult]:
        params = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": query,
            "num": max(1, min(num_results, MAX_RESULTS_PER_REQUEST)),
        }
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            response = client.get(self._api_url, params=params)
            response.raise_for_status()
            data = response.json()

        results: list[SearchResult] = []
        for item in data.get("items", []) or []:
            title = str(item.get("title") or "")
            url = str(item.get("link") or "")
            snippet = str(item.get("snippet") or "")
            if url:
                results.append(SearchResult(title=title, url=url, snippet=snippet))
            if len(results) >= num_results:
                break
        return results
