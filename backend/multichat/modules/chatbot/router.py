from fastapi import APIRouter, Depends

from multichat.core.context import AppContext, get_app_context
from multichat.modules.chatbot.schemas import (
    ChatEnvelope,
    ChatRequest,
    ConversationDetail,
    ConversationSummary,
    DeleteConversationResponse,
    UpdateConversationRequest,
)
from multichat.modules.chatbot.service import (
    delete_conversation,
    get_conversation,
    list_conversations,
    rename_conversation,
)

router = APIRouter(tags=["Chatbot"], prefix="/api")


@router.post("/chat", response_model=ChatEnvelope, response_model_exclude_none=True)
def chat_endpoint(request: ChatRequest, context: AppContext = Depends(get_app_context)):
    return context.orchestrator.handle_chat(
        message=request.message,
        model_ids=request.model_ids,
        conversation_id=request.conversation_id,
        enable_web_search=request.enable_web_search,
    )


@router.get("/conversations", response_model=list[ConversationSummary])
async def list_conversations_endpoint(context: AppContext = Depends(get_app_context)):
    return list_conversations(context.repository)


@router.get("/conversations/{conversation_id}", response_model=ConversationDetail)
async def get_conversation_endpoint(
    conversation_id: int, context: AppContext = Depends(get_app_context)
):
    return get_conversation(context.repository, conversation_id)


@router.patch("/conversations/{conversation_id}", response_model=ConversationSummary)
async def update_conversation_endpoint(
    conversation_id: int,
    request: UpdateConversationRequest,
    context: AppContext = Depends(get_app_context),
):
    return rename_conversation(context.repository, conversation_id, request.title)


@router.delete("/conversations/{conversation_id}", response_model=DeleteConversationResponse)
async def delete_conversation_endpoint(
    conversation_id: int, context: AppContext = Depends(get_app_context)
):
    delete_conversation(context.repository, conversation_id)
    return DeleteConversationResponse(success=True)
