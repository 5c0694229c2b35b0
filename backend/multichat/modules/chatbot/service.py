import concurrent.futures
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from multichat.core.config import Settings
from multichat.core.errors import ConversationNotFoundError, ValidationError
from multichat.core.llm import LLMGateway
from multichat.core.websearch import SearchEnricher, render_context
from multichat.core.websearch.base import SearchResult
from multichat.modules.chatbot.repository import ROLE_ASSISTANT, ROLE_USER, ChatRepository
from multichat.modules.chatbot.schemas import (
    ChatEnvelope,
    ConversationDetail,
    ConversationSummary,
    MessageSchema,
    ModelOutcome,
    SearchResultSchema,
)

logger = logging.getLogger(__name__)

TITLE_MAX_CHARS = 50
# How often to look again for calls that have not started yet.
_START_POLL_SECONDS = 0.05


def derive_title(message: str) -> str:
    if len(message) <= TITLE_MAX_CHARS:
        return message
    return message[:TITLE_MAX_CHARS] + "..."


@dataclass
class _Dispatch:
    model_id: str
    content: str = ""
    response_time: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChatOrchestrator:
    """Sends one user message to several models and collects every outcome.

    A chat request goes through these steps:

    1. validate the request (nothing is written when this fails);
    2. resolve the conversation, or create one titled after the message;
    3. store the user turn;
    4. optionally run one web search and append its snippets to the prompt;
    5. call every requested model concurrently and wait for all of them;
    6. store an assistant turn for each model that answered, unless the
       conversation was deleted in the meantime.

    Model failures and timeouts never fail the request. They come back as
    entries with an ``error`` in the envelope, which keeps request order.
    """

    def __init__(
        self,
        repository: ChatRepository,
        gateway: LLMGateway,
        search: SearchEnricher,
        settings: Settings,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._repository = repository
        self._gateway = gateway
        self._search = search
        self._settings = settings
        self._clock = clock

    @staticmethod
    def _validate(message: str, model_ids: list[str]) -> None:
        if not isinstance(message, str) or not message:
            raise ValidationError("Message must not be empty")
        if not model_ids:
            raise ValidationError("At least one model id is required")
        for model_id in model_ids:
            if not isinstance(model_id, str) or not model_id.strip():
                raise ValidationError("Model ids must be non-empty strings")

    def _resolve_conversation(self, message: str, conversation_id: int | None):
        if conversation_id is None:
            return self._repository.create_conversation(derive_title(message))
        conversation = self._repository.get_conversation(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    def _elapsed_ms(self, started: float) -> int:
        return max(0, int(round((self._clock() - started) * 1000)))

    def _dispatch(self, model_id: str, prompt: str) -> _Dispatch:
        started = self._clock()
        try:
            content = self._gateway.invoke(model_id, prompt)
        except Exception as exc:
            elapsed = self._elapsed_ms(started)
            logger.warning("Model %s failed after %dms: %s", model_id, elapsed, exc)
            return _Dispatch(
                model_id=model_id,
                response_time=elapsed,
                error=str(exc) or exc.__class__.__name__,
            )
        return _Dispatch(model_id=model_id, content=content, response_time=self._elapsed_ms(started))

    def _fan_out(self, prompt: str, model_ids: list[str]) -> list[_Dispatch]:
        """Run every model call on its own thread and settle all of them.

        Each call gets ``LLM_TIMEOUT_SECONDS`` counted from its own start. A
        call still running past that is reported as timed out and abandoned;
        the others keep their full budget.
        """
        timeout = self._settings.LLM_TIMEOUT_SECONDS
        started_at: dict[int, float] = {}

        def run(index: int, model_id: str) -> _Dispatch:
            started_at[index] = self._clock()
            return self._dispatch(model_id, prompt)

        # One worker per model, so no call ever waits in a queue.
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=len(model_ids),
            thread_name_prefix="chat-dispatch",
        )
        try:
            futures = [
                executor.submit(run, index, model_id) for index, model_id in enumerate(model_ids)
            ]
            pending = dict(enumerate(futures))
            expired: set[int] = set()
            while pending:
                now = self._clock()
                remaining = []
                for index in list(pending):
                    if pending[index].done():
                        del pending[index]
                    elif index in started_at:
                        left = started_at[index] + timeout - now
                        if left <= 0:
                            expired.add(index)
                            del pending[index]
                        else:
                            remaining.append(left)
                    else:
                        remaining.append(_START_POLL_SECONDS)
                if not pending:
                    break
                concurrent.futures.wait(
                    pending.values(),
                    timeout=min(remaining),
                    return_when=concurrent.futures.FIRST_COMPLETED,
                )
        finally:
            # Abandoned calls finish in the background; nothing waits for them.
            executor.shutdown(wait=False)

        dispatches: list[_Dispatch] = []
        for index, (model_id, future) in enumerate(zip(model_ids, futures)):
            if index not in expired:
                try:
                    dispatches.append(future.result())
                    continue
                except Exception as exc:
                    error = str(exc) or exc.__class__.__name__
            else:
                error = f"Model call timed out after {timeout:g}s"
                logger.warning("Model %s timed out after %ss", model_id, timeout)
            dispatches.append(
                _Dispatch(
                    model_id=model_id,
                    response_time=self._elapsed_ms(started_at.get(index, self._clock())),
                    error=error,
                )
            )
        return dispatches

    def _persist_reply(self, conversation_id: int, dispatch: _Dispatch) -> None:
        provider = self._gateway.resolve_provider(dispatch.model_id)
        try:
            self._repository.append_message(
                conversation_id,
                ROLE_ASSISTANT,
                dispatch.content,
                model_id=dispatch.model_id,
                provider=provider.name,
                response_time=dispatch.response_time,
            )
        except ConversationNotFoundError:
            # Deleted while the models were answering; the reply is still returned.
            logger.warning(
                "Conversation %s disappeared; reply from %s not stored",
                conversation_id,
                dispatch.model_id,
            )

    def handle_chat(
        self,
        message: str,
        model_ids: list[str],
        conversation_id: int | None = None,
        enable_web_search: bool = False,
    ) -> ChatEnvelope:
        self._validate(message, model_ids)
        conversation = self._resolve_conversation(message, conversation_id)

        self._repository.append_message(conversation.id, ROLE_USER, message)

        search_results: list[SearchResult] = []
        if enable_web_search:
            search_results = self._search.search(message, self._settings.CHAT_SEARCH_MAX_RESULTS)
        prompt = render_context(message, search_results)
        attached = (
            [SearchResultSchema(**item.to_dict()) for item in search_results]
            if enable_web_search
            else None
        )

        responses: list[ModelOutcome] = []
        for dispatch in self._fan_out(prompt, model_ids):
            if dispatch.ok:
                self._persist_reply(conversation.id, dispatch)
            responses.append(
                ModelOutcome(
                    model_id=dispatch.model_id,
                    content=dispatch.content,
                    response_time=dispatch.response_time,
                    error=dispatch.error,
                    search_results=list(attached) if attached is not None else None,
                )
            )

        failed = sum(1 for item in responses if item.error is not None)
        logger.info(
            "Chat on conversation %s: %d model(s), %d failed, %d search result(s)",
            conversation.id,
            len(responses),
            failed,
            len(search_results),
        )
        return ChatEnvelope(conversation_id=conversation.id, responses=responses)


# Conversation services.
def list_conversations(repository: ChatRepository) -> list[ConversationSummary]:
    return [ConversationSummary.model_validate(conv) for conv in repository.list_conversations()]


def get_conversation(repository: ChatRepository, conversation_id: int) -> ConversationDetail:
    conversation = repository.get_conversation(conversation_id)
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    messages = repository.list_messages(conversation_id)
    return ConversationDetail(
        **ConversationSummary.model_validate(conversation).model_dump(),
        messages=[MessageSchema.model_validate(message) for message in messages],
    )


def rename_conversation(
    repository: ChatRepository, conversation_id: int, title: str
) -> ConversationSummary:
    if not title.strip():
        raise ValidationError("Title must not be empty")
    conversation = repository.update_conversation(conversation_id, title=title.strip())
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    return ConversationSummary.model_validate(conversation)


def delete_conversation(repository: ChatRepository, conversation_id: int) -> bool:
    if not repository.delete_conversation(conversation_id):
        raise ConversationNotFoundError(conversation_id)
    return True
