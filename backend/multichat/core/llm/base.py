from abc import ABC, abstractmethod

from multichat.core.llm.schemas import GenerateConfig, LLMResponse


class BaseLLM(ABC):
    @abstractmethod
    def generate(self, prompt: str, config: GenerateConfig | None = None) -> LLMResponse:
        """Send one user prompt and return the plain-text completion."""
        pass

    @abstractmethod
    def check_credentials(self) -> None:
        """Make the cheapest live call the vendor offers; raise if the key is rejected."""
        pass
