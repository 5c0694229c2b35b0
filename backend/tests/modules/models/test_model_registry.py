import pytest

from multichat.core.errors import DuplicateModelError, ValidationError
from multichat.core.llm.types import UNKNOWN_PROVIDER, ProviderKind
from multichat.modules.models.registry import ModelRegistry
from multichat.modules.models.seed import DEFAULT_MODELS, PRESET_COMBINATIONS


def test_seeded_with_builtin_models():
    registry = ModelRegistry()
    models = registry.list()

    assert [model.id for model in models] == [item["id"] for item in DEFAULT_MODELS]
    assert all(not model.is_custom for model in models)
    assert len(registry.presets()) == len(PRESET_COMBINATIONS)


def test_add_registers_custom_model():
    registry = ModelRegistry(seed=[])

    model = registry.add("my-model", "My Model", "openai", description="fine-tuned")

    assert model.is_custom
    assert registry.get("my-model").description == "fine-tuned"
    assert [item.id for item in registry.list()] == ["my-model"]


def test_add_duplicate_leaves_registry_unchanged():
    registry = ModelRegistry()
    before = registry.list()

    with pytest.raises(DuplicateModelError):
        registry.add("gpt-4o", "Another GPT", "openai")

    assert registry.list() == before
    assert registry.get("gpt-4o").name == "GPT-4o"


@pytest.mark.parametrize("model_id, name, provider", [("", "n", "p"), ("id", " ", "p"), ("id", "n", "")])
def test_add_requires_all_fields(model_id, name, provider):
    registry = ModelRegistry(seed=[])

    with pytest.raises(ValidationError):
        registry.add(model_id, name, provider)
    assert registry.list() == []


def test_remove():
    registry = ModelRegistry()

    assert registry.remove("gpt-4o") is True
    assert registry.get("gpt-4o") is None
    assert registry.remove("gpt-4o") is False


def test_returned_models_are_copies():
    registry = ModelRegistry()

    registry.get("gpt-4o").name = "changed"

    assert registry.get("gpt-4o").name == "GPT-4o"


@pytest.mark.parametrize(
    "model_id, kind",
    [
        ("gpt-5-preview", ProviderKind.OPENAI),
        ("claude-next", ProviderKind.ANTHROPIC),
        ("gemini-2.0-flash", ProviderKind.GOOGLE),
        ("grok-3-mini", ProviderKind.XAI),
    ],
)
def test_resolve_provider_by_prefix(model_id, kind):
    registry = ModelRegistry(seed=[])

    assert registry.resolve_provider(model_id).kind == kind


def test_prefix_wins_over_registered_provider():
    registry = ModelRegistry(seed=[])
    registry.add("gpt-proxy", "Proxy", "anthropic")

    assert registry.resolve_provider("gpt-proxy").kind == ProviderKind.OPENAI


def test_resolve_provider_from_registry():
    registry = ModelRegistry(seed=[])
    registry.add("team-model", "Team", "Grok")
    registry.add("local-llama", "Llama", "ollama")

    assert registry.resolve_provider("team-model").kind == ProviderKind.XAI
    resolved = registry.resolve_provider("local-llama")
    assert resolved.kind == ProviderKind.CUSTOM
    assert resolved.name == "ollama"


def test_resolve_provider_unknown():
    registry = ModelRegistry()

    assert registry.resolve_provider("mystery") == UNKNOWN_PROVIDER
