from multichat.core.llm.service import NO_RESPONSE_PLACEHOLDER, LLMGateway

__all__ = ["LLMGateway", "NO_RESPONSE_PLACEHOLDER"]
