from dataclasses import dataclass
from enum import Enum


class ProviderKind(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    XAI = "xai"
    CUSTOM = "custom"
    UNKNOWN = "unknown"


PROVIDER_ALIASES = {
    "grok": "xai",
    "gemini": "google",
    "claude": "anthropic",
}

BUILTIN_PROVIDERS = {
    ProviderKind.OPENAI,
    ProviderKind.ANTHROPIC,
    ProviderKind.GOOGLE,
    ProviderKind.XAI,
}


@dataclass(frozen=True)
class ResolvedProvider:
    """Provider of a model, resolved once from its id or registry entry.

    ``name`` is the wire name stored on assistant messages: the canonical
    vendor name for built-ins, the registered name for custom providers and
    ``"unknown"`` when nothing matched.
    """

    kind: ProviderKind
    name: str

    @classmethod
    def from_name(cls, name: str | None) -> "ResolvedProvider":
        normalized = str(name or "").strip().lower()
        if not normalized:
            return UNKNOWN_PROVIDER
        normalized = PROVIDER_ALIASES.get(normalized, normalized)
        for kind in BUILTIN_PROVIDERS:
            if kind.value == normalized:
                return cls(kind=kind, name=kind.value)
        if normalized == ProviderKind.UNKNOWN.value:
            return UNKNOWN_PROVIDER
        return cls(kind=ProviderKind.CUSTOM, name=normalized)

    @property
    def is_builtin(self) -> bool:
        return self.kind in BUILTIN_PROVIDERS


UNKNOWN_PROVIDER = ResolvedProvider(kind=ProviderKind.UNKNOWN, name=ProviderKind.UNKNOWN.value)
