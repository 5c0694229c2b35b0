import threading

import pytest
from fastapi.testclient import TestClient

from multichat.core.config import Settings
from multichat.core.context import build_app_context
from multichat.core.websearch import SearchEnricher
from multichat.core.websearch.base import BaseWebSearch, SearchResult
from multichat.main import create_app
from multichat.modules.chatbot.repository import InMemoryChatRepository
from multichat.modules.models.registry import ModelRegistry


class FakeGateway:
    """Stands in for LLMGateway.

    ``replies`` maps a model id to a string, an exception instance, or a
    callable taking the prompt. Unlisted models answer "reply from <id>".
    """

    def __init__(self, registry: ModelRegistry, replies: dict | None = None):
        self._registry = registry
        self.replies = replies or {}
        self.calls: list[tuple[str, str]] = []
        self.key_checks: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def resolve_provider(self, model_id):
        return self._registry.resolve_provider(model_id)

    def invoke(self, model_id, prompt):
        with self._lock:
            self.calls.append((model_id, prompt))
        reply = self.replies.get(model_id, f"reply from {model_id}")
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply

    def validate_api_key(self, provider, api_key):
        self.key_checks.append((provider, api_key))
        return api_key == "good-key"


class StaticSearch(BaseWebSearch):
    def __init__(self, results=None, error: Exception | None = None):
        self.results = results or []
        self.error = error
        self.queries: list[tuple[str, int]] = []

    def search(self, query, num_results=5):
        self.queries.append((query, num_results))
        if self.error is not None:
            raise self.error
        return self.results[:num_results]


SAMPLE_RESULTS = [
    SearchResult(title="Python", url="https://www.python.org/", snippet="The official home of Python"),
    SearchResult(title="Docs", url="https://docs.python.org/3/", snippet="Python 3 documentation"),
]


@pytest.fixture()
def test_settings():
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="",
        ANTHROPIC_API_KEY="",
        GOOGLE_API_KEY="",
        XAI_API_KEY="",
        LLM_MAX_TOKENS=2000,
        LLM_TIMEOUT_SECONDS=5.0,
        CHAT_SEARCH_MAX_RESULTS=5,
        GOOGLE_SEARCH_API_KEY="",
        GOOGLE_SEARCH_ENGINE_ID="",
        APP_DATABASE_URL="",
        CORS_ORIGINS="*",
    )


@pytest.fixture()
def registry():
    return ModelRegistry()


@pytest.fixture()
def repository():
    return InMemoryChatRepository()


@pytest.fixture()
def gateway(registry):
    return FakeGateway(registry)


@pytest.fixture()
def search_backend():
    return StaticSearch(results=list(SAMPLE_RESULTS))


@pytest.fixture()
def context(test_settings, repository, registry, gateway, search_backend):
    return build_app_context(
        test_settings,
        repository=repository,
        registry=registry,
        gateway=gateway,
        search=SearchEnricher(search_backend),
    )


@pytest.fixture()
def client(context):
    app = create_app(context)
    with TestClient(app) as c:
        yield c
