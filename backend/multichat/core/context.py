import logging
from dataclasses import dataclass

from fastapi import Request

from multichat.core.config import Settings
from multichat.core.llm import LLMGateway
from multichat.core.websearch import SearchEnricher, create_websearch
from multichat.modules.chatbot.repository import ChatRepository, build_chat_repository
from multichat.modules.chatbot.service import ChatOrchestrator
from multichat.modules.models.registry import ModelRegistry

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a request needs, built once per process (or per test)."""

    settings: Settings
    repository: ChatRepository
    registry: ModelRegistry
    gateway: LLMGateway
    search: SearchEnricher
    orchestrator: ChatOrchestrator

    def close(self) -> None:
        self.repository.close()


def build_app_context(
    settings: Settings,
    repository: ChatRepository | None = None,
    registry: ModelRegistry | None = None,
    gateway: LLMGateway | None = None,
    search: SearchEnricher | None = None,
) -> AppContext:
    repository = repository or build_chat_repository(settings)
    registry = registry or ModelRegistry()
    gateway = gateway or LLMGateway(settings, resolve_provider=registry.resolve_provider)
    search = search or SearchEnricher(create_websearch(settings))
    orchestrator = ChatOrchestrator(
        repository=repository,
        gateway=gateway,
        search=search,
        settings=settings,
    )
    logger.info(
        "App context ready (store=%s, search=%s, models=%d)",
        type(repository).__name__,
        search.backend_name,
        len(registry.list()),
    )
    return AppContext(
        settings=settings,
        repository=repository,
        registry=registry,
        gateway=gateway,
        search=search,
        orchestrator=orchestrator,
    )


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context
