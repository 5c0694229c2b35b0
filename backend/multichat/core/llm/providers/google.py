import google.generativeai as genai

from multichat.core.llm.base import BaseLLM
from multichat.core.llm.schemas import GenerateConfig, LLMResponse

CREDENTIAL_CHECK_MODEL = "gemini-1.5-flash"


class GoogleProvider(BaseLLM):
    def __init__(self, api_key: str, model: str, timeout: float | None = None):
        self._api_key = api_key
        self._model = model
        self._timeout = timeout

    def _request_options(self) -> dict:
        return {"timeout": self._timeout} if self._timeout is not None else {}

    @staticmethod
    def _extract_text(response) -> str:
        # response.text raises when the candidate was blocked or has no parts.
        try:
            return response.text or ""
        except ValueError:
            return ""

    def generate(self, prompt: str, config: GenerateConfig | None = None) -> LLMResponse:
        config = config or GenerateConfig()
        params = {}
        if config.max_tokens is not None:
            params["max_output_tokens"] = config.max_tokens

        # genai keeps the key in module state; set it right before each call.
        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)
        response = model.generate_content(
            prompt,
            generation_config=genai.types.GenerationConfig(**params),
            request_options=self._request_options(),
        )
        return LLMResponse(text=self._extract_text(response))

    def check_credentials(self) -> None:
        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(CREDENTIAL_CHECK_MODEL)
        model.generate_content("test", request_options=self._request_options())
