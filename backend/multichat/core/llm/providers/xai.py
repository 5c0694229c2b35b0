from multichat.core.llm.providers.openai import OpenAIProvider


class XaiProvider(OpenAIProvider):
    """Grok models through xAI's OpenAI-compatible endpoint."""

    base_url = "https://api.x.ai/v1"
