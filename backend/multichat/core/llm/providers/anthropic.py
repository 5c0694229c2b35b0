from anthropic import Anthropic

from multichat.core.llm.base import BaseLLM
from multichat.core.llm.schemas import GenerateConfig, LLMResponse

DEFAULT_MAX_TOKENS = 1024
CREDENTIAL_CHECK_MODEL = "claude-3-haiku-20240307"


class AnthropicProvider(BaseLLM):
    def __init__(self, api_key: str, model: str, timeout: float | None = None):
        client_kwargs: dict = {"api_key": api_key, "max_retries": 0}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = Anthropic(**client_kwargs)
        self._model = model

    def generate(self, prompt: str, config: GenerateConfig | None = None) -> LLMResponse:
        config = config or GenerateConfig()
        response = self._client.messages.create(
            model=self._model,
            max_tokens=config.max_tokens or DEFAULT_MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )

        # Only text blocks carry the answer; tool_use and similar blocks are skipped.
        text_parts = [
            block.text
            for block in response.content
            if getattr(block, "type", "text") == "text" and getattr(block, "text", None)
        ]
        return LLMResponse(text="".join(text_parts))

    def check_credentials(self) -> None:
        self._client.messages.create(
            model=CREDENTIAL_CHECK_MODEL,
            max_tokens=10,
            messages=[{"role": "user", "content": "test"}],
        )
