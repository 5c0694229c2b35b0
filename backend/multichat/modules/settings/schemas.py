from pydantic import Field

from multichat.core.schemas import CamelModel


class ValidateKeyRequest(CamelModel):
    provider: str = Field(min_length=1)
    api_key: str = Field(min_length=1)


class ValidateKeyResponse(CamelModel):
    valid: bool
