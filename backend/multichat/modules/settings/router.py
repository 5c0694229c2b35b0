from fastapi import APIRouter, Depends

from multichat.core.context import AppContext, get_app_context
from multichat.modules.settings.schemas import ValidateKeyRequest, ValidateKeyResponse

router = APIRouter(tags=["Settings"], prefix="/api/config")


# Makes one live vendor call per request and is not rate limited.
@router.post("/keys", response_model=ValidateKeyResponse)
def validate_key_endpoint(
    request: ValidateKeyRequest,
    context: AppContext = Depends(get_app_context),
):
    valid = context.gateway.validate_api_key(request.provider.strip(), request.api_key.strip())
    return ValidateKeyResponse(valid=valid)
