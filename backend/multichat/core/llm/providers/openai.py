from openai import OpenAI

from multichat.core.llm.base import BaseLLM
from multichat.core.llm.schemas import GenerateConfig, LLMResponse


class OpenAIProvider(BaseLLM):
    base_url: str | None = None

    def __init__(self, api_key: str, model: str, timeout: float | None = None):
        client_kwargs: dict = {"api_key": api_key, "max_retries": 0}
        if self.base_url:
            client_kwargs["base_url"] = self.base_url
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = OpenAI(**client_kwargs)
        self._model = model

    def _build_params(self, prompt: str, config: GenerateConfig) -> dict:
        params: dict = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if config.max_tokens is not None:
            params["max_tokens"] = config.max_tokens
        return params

    def generate(self, prompt: str, config: GenerateConfig | None = None) -> LLMResponse:
        config = config or GenerateConfig()

        response = self._client.chat.completions.create(
            **self._build_params(prompt, config),
        )

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        return LLMResponse(text=text)

    def check_credentials(self) -> None:
        self._client.models.list()
