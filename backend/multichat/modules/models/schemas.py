from typing import Any, Optional

from pydantic import Field

from multichat.core.schemas import CamelModel


class ModelDescriptor(CamelModel):
    id: str
    name: str
    provider: str
    is_custom: bool = False
    config: Optional[dict[str, Any]] = None
    description: Optional[str] = None


class ModelPreset(CamelModel):
    name: str
    description: str
    models: list[str]


class CreateModelRequest(CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    provider: str = Field(min_length=1)
    description: Optional[str] = None


class DeleteModelResponse(CamelModel):
    success: bool
