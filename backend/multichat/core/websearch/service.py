import logging

from multichat.core.config import Settings
from multichat.core.websearch.base import BaseWebSearch, SearchResult
from multichat.core.websearch.providers.duckduckgo import DuckDuckGoSearch
from multichat.core.websearch.providers.google_cse import GoogleCustomSearch

logger = logging.getLogger(__name__)

CONTEXT_HEADER = "Context from web search:"


def create_websearch(settings: Settings) -> BaseWebSearch:
    """Custom Search API when a key and engine id are configured, DuckDuckGo otherwise."""
    if settings.search_api_configured:
        return GoogleCustomSearch(
            api_key=settings.GOOGLE_SEARCH_API_KEY.strip(),
            engine_id=settings.GOOGLE_SEARCH_ENGINE_ID.strip(),
            timeout=settings.WEB_SEARCH_TIMEOUT,
        )
    return DuckDuckGoSearch(
        user_agent=settings.WEB_SEARCH_USER_AGENT,
        timeout=settings.WEB_SEARCH_TIMEOUT,
    )


def render_context(message: str, results: list[SearchResult]) -> str:
    if not results:
        return message
    lines = "\n".join(f"{item.title}: {item.snippet}" for item in results)
    return f"{message}\n\n{CONTEXT_HEADER}\n{lines}"


class SearchEnricher:
    """Best-effort web search. Failures are logged and yield no results."""

    def __init__(self, backend: BaseWebSearch):
        self._backend = backend

    @property
    def backend_name(self) -> str:
        return type(self._backend).__name__

    def search(self, query: str, max_results: int) -> list[SearchResult]:
        if not query or not query.strip() or max_results < 1:
            return []
        try:
            results = self._backend.search(query.strip(), num_results=max_results)
        except Exception as exc:
            logger.warning("Web search via %s failed: %s", self.backend_name, exc)
            return []
        return list(results)[:max_results]
