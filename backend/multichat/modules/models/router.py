from fastapi import APIRouter, Depends

from multichat.core.context import AppContext, get_app_context
from multichat.core.errors import ModelNotFoundError
from multichat.modules.models.schemas import (
    CreateModelRequest,
    DeleteModelResponse,
    ModelDescriptor,
    ModelPreset,
)

router = APIRouter(tags=["Models"], prefix="/api/models")


@router.get("", response_model=list[ModelDescriptor])
async def list_models_endpoint(context: AppContext = Depends(get_app_context)):
    return context.registry.list()


@router.get("/presets", response_model=list[ModelPreset])
async def list_presets_endpoint(context: AppContext = Depends(get_app_context)):
    return context.registry.presets()


@router.post("", response_model=ModelDescriptor)
async def create_model_endpoint(
    request: CreateModelRequest,
    context: AppContext = Depends(get_app_context),
):
    return context.registry.add(
        request.id.strip(),
        request.name.strip(),
        request.provider.strip(),
        description=request.description,
    )


@router.delete("/{model_id}", response_model=DeleteModelResponse)
async def delete_model_endpoint(model_id: str, context: AppContext = Depends(get_app_context)):
    if not context.registry.remove(model_id):
        raise ModelNotFoundError(model_id)
    return DeleteModelResponse(success=True)
