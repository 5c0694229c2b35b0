from __future__ import annotations

import logging
import threading
from typing import Any

from multichat.core.errors import DuplicateModelError, ValidationError
from multichat.core.llm.types import (
    ProviderKind,
    ResolvedProvider,
    UNKNOWN_PROVIDER,
)
from multichat.modules.models.schemas import ModelDescriptor, ModelPreset
from multichat.modules.models.seed import DEFAULT_MODELS, PRESET_COMBINATIONS

logger = logging.getLogger(__name__)

# Checked before the registry so built-in families resolve without an entry.
MODEL_PREFIXES: tuple[tuple[str, ProviderKind], ...] = (
    ("gpt-", ProviderKind.OPENAI),
    ("claude-", ProviderKind.ANTHROPIC),
    ("gemini-", ProviderKind.GOOGLE),
    ("grok-", ProviderKind.XAI),
)


class ModelRegistry:
    def __init__(self, seed: list[dict] | None = None, presets: list[dict] | None = None):
        self._lock = threading.Lock()
        self._models: dict[str, ModelDescriptor] = {}
        for item in DEFAULT_MODELS if seed is None else seed:
            descriptor = ModelDescriptor(is_custom=False, **item)
            self._models[descriptor.id] = descriptor
        self._presets = [
            ModelPreset(**item) for item in (PRESET_COMBINATIONS if presets is None else presets)
        ]

    def list(self) -> list[ModelDescriptor]:
        with self._lock:
            return [model.model_copy(deep=True) for model in self._models.values()]

    def get(self, model_id: str) -> ModelDescriptor | None:
        with self._lock:
            model = self._models.get(model_id)
            return model.model_copy(deep=True) if model else None

    def add(
        self,
        model_id: str,
        name: str,
        provider: str,
        description: str | None = None,
        config: dict[str, Any] | None = None,
    ) -> ModelDescriptor:
        if not model_id.strip() or not name.strip() or not provider.strip():
            raise ValidationError("ID, name, and provider are required")
        descriptor = ModelDescriptor(
            id=model_id,
            name=name,
            provider=provider,
            is_custom=True,
            config=config,
            description=description,
        )
        with self._lock:
            if model_id in self._models:
                raise DuplicateModelError(model_id)
            self._models[model_id] = descriptor
        logger.info("Registered custom model %s (provider=%s)", model_id, provider)
        return descriptor.model_copy(deep=True)

    def remove(self, model_id: str) -> bool:
        with self._lock:
            removed = self._models.pop(model_id, None) is not None
        if removed:
            logger.info("Removed model %s", model_id)
        return removed

    def resolve_provider(self, model_id: str) -> ResolvedProvider:
        for prefix, kind in MODEL_PREFIXES:
            if model_id.startswith(prefix):
                return ResolvedProvider(kind=kind, name=kind.value)

        with self._lock:
            model = self._models.get(model_id)
        if model is None:
            return UNKNOWN_PROVIDER
        return ResolvedProvider.from_name(model.provider)

    def presets(self) -> list[ModelPreset]:
        return [preset.model_copy(deep=True) for preset in self._presets]
