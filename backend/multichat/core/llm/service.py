import logging
import threading
from collections.abc import Callable
from typing import Dict, Tuple

from multichat.core.config import Settings
from multichat.core.errors import ProviderError
from multichat.core.llm.base import BaseLLM
from multichat.core.llm.providers.anthropic import AnthropicProvider
from multichat.core.llm.providers.google import GoogleProvider
from multichat.core.llm.providers.openai import OpenAIProvider
from multichat.core.llm.providers.xai import XaiProvider
from multichat.core.llm.schemas import GenerateConfig
from multichat.core.llm.types import ProviderKind, ResolvedProvider

logger = logging.getLogger(__name__)

NO_RESPONSE_PLACEHOLDER = "No response"

LLM_REGISTRY: Dict[ProviderKind, type[BaseLLM]] = {
    ProviderKind.OPENAI: OpenAIProvider,
    ProviderKind.XAI: XaiProvider,
    ProviderKind.GOOGLE: GoogleProvider,
    ProviderKind.ANTHROPIC: AnthropicProvider,
}

PROVIDER_CONFIG: Dict[ProviderKind, dict[str, str]] = {
    ProviderKind.OPENAI: {
        "api_key_attr": "OPENAI_API_KEY",
        "check_model": "gpt-4o-mini",
    },
    ProviderKind.XAI: {
        "api_key_attr": "XAI_API_KEY",
        "check_model": "grok-3-mini",
    },
    ProviderKind.GOOGLE: {
        "api_key_attr": "GOOGLE_API_KEY",
        "check_model": "gemini-1.5-flash",
    },
    ProviderKind.ANTHROPIC: {
        "api_key_attr": "ANTHROPIC_API_KEY",
        "check_model": "claude-3-haiku-20240307",
    },
}


class LLMGateway:
    """Single entry point for model calls.

    Resolves a model id to its provider, keeps one adapter per
    ``(provider, model)`` and turns every vendor failure into ``ProviderError``.
    """

    def __init__(
        self,
        settings: Settings,
        resolve_provider: Callable[[str], ResolvedProvider],
    ):
        self._settings = settings
        self._resolve_provider = resolve_provider
        self._instances: Dict[Tuple[ProviderKind, str], BaseLLM] = {}
        self._lock = threading.Lock()

    def resolve_provider(self, model_id: str) -> ResolvedProvider:
        return self._resolve_provider(model_id)

    def _api_key(self, kind: ProviderKind) -> str:
        attr = PROVIDER_CONFIG.get(kind, {}).get("api_key_attr", "")
        return str(getattr(self._settings, attr, "") or "") if attr else ""

    def _create(self, kind: ProviderKind, model: str, api_key: str) -> BaseLLM:
        llm_class = LLM_REGISTRY[kind]
        return llm_class(
            api_key=api_key,
            model=model,
            timeout=self._settings.LLM_TIMEOUT_SECONDS,
        )

    def create_llm(self, model_id: str, provider: ResolvedProvider | None = None) -> BaseLLM:
        provider = provider or self.resolve_provider(model_id)

        if provider.kind == ProviderKind.UNKNOWN:
            raise ProviderError(
                f"Unknown provider for model: {model_id}",
                provider=provider.name,
                model_id=model_id,
            )
        if provider.kind not in LLM_REGISTRY:
            raise ProviderError(
                f"Unsupported LLM provider '{provider.name}' for model: {model_id}",
                provider=provider.name,
                model_id=model_id,
            )

        api_key = self._api_key(provider.kind)
        if not api_key:
            attr = PROVIDER_CONFIG[provider.kind]["api_key_attr"]
            raise ProviderError(
                f"Missing API key for provider '{provider.name}'. Set {attr} in env.",
                provider=provider.name,
                model_id=model_id,
            )

        key = (provider.kind, model_id)
        with self._lock:
            instance = self._instances.get(key)
            if instance is None:
                instance = self._create(provider.kind, model_id, api_key)
                self._instances[key] = instance
        return instance

    def invoke(self, model_id: str, prompt: str) -> str:
        provider = self.resolve_provider(model_id)
        llm = self.create_llm(model_id, provider)
        config = GenerateConfig(max_tokens=self._settings.LLM_MAX_TOKENS)
        try:
            response = llm.generate(prompt, config=config)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(
                str(exc) or exc.__class__.__name__,
                provider=provider.name,
                model_id=model_id,
            ) from exc
        return response.text or NO_RESPONSE_PLACEHOLDER

    def validate_api_key(self, provider: str, api_key: str) -> bool:
        resolved = ResolvedProvider.from_name(provider)
        if resolved.kind not in LLM_REGISTRY:
            logger.warning("API key validation requested for unsupported provider %s", provider)
            return False

        try:
            llm = self._create(resolved.kind, PROVIDER_CONFIG[resolved.kind]["check_model"], api_key)
            llm.check_credentials()
        except Exception as exc:
            logger.warning("API key validation failed for %s: %s", resolved.name, exc)
            return False
        return True
