from pydantic import BaseModel


class GenerateConfig(BaseModel):
    max_tokens: int | None = None


class LLMResponse(BaseModel):
    text: str
