import logging
import threading
import time
from abc import ABC, abstractmethod

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from multichat.core.config import Settings
from multichat.core.database import close_app_database, create_app_engine, init_app_database
from multichat.core.errors import ConversationNotFoundError
from multichat.modules.chatbot.models import ChatMessage, Conversation

logger = logging.getLogger(__name__)

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


class ChatRepository(ABC):
    """Conversation and message store.

    Implementations assign ids (unique, strictly increasing, never reused) and
    timestamps. Every operation is atomic with respect to concurrent callers.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._last_timestamp = 0.0

    def _now(self) -> float:
        # Strictly increasing, even when the wall clock stalls or steps back.
        now = time.time()
        if now <= self._last_timestamp:
            now = self._last_timestamp + 1e-6
        self._last_timestamp = now
        return now

    @abstractmethod
    def create_conversation(self, title: str) -> Conversation:
        ...

    @abstractmethod
    def get_conversation(self, conversation_id: int) -> Conversation | None:
        ...

    @abstractmethod
    def list_conversations(self) -> list[Conversation]:
        """Most recently updated first."""
        ...

    @abstractmethod
    def update_conversation(self, conversation_id: int, title: str | None = None) -> Conversation | None:
        ...

    @abstractmethod
    def delete_conversation(self, conversation_id: int) -> bool:
        """Delete a conversation together with its messages."""
        ...

    @abstractmethod
    def append_message(
        self,
        conversation_id: int,
        role: str,
        content: str,
        model_id: str | None = None,
        provider: str | None = None,
        response_time: int | None = None,
    ) -> ChatMessage:
        ...

    @abstractmethod
    def list_messages(self, conversation_id: int) -> list[ChatMessage]:
        """Oldest first; ties on the timestamp keep insertion order."""
        ...

    def close(self) -> None:
        pass


class InMemoryChatRepository(ChatRepository):
    def __init__(self):
        super().__init__()
        self._conversations: dict[int, Conversation] = {}
        self._messages: dict[int, ChatMessage] = {}
        self._conversation_seq = 0
        self._message_seq = 0

    def create_conversation(self, title: str) -> Conversation:
        with self._lock:
            self._conversation_seq += 1
            now = self._now()
            conversation = Conversation(
                id=self._conversation_seq,
                title=title,
                created_at=now,
                updated_at=now,
            )
            self._conversations[conversation.id] = conversation
            return conversation

    def get_conversation(self, conversation_id: int) -> Conversation | None:
        with self._lock:
            return self._conversations.get(conversation_id)

    def list_conversations(self) -> list[Conversation]:
        with self._lock:
            conversations = list(self._conversations.values())
        return sorted(conversations, key=lambda conv: (conv.updated_at, conv.id), reverse=True)

    def _touch(self, existing: Conversation, title: str | None = None) -> Conversation:
        # Stored objects are replaced, never mutated, so callers can hold on to them.
        updated = Conversation(
            id=existing.id,
            title=existing.title if title is None else title,
            created_at=existing.created_at,
            updated_at=self._now(),
        )
        self._conversations[existing.id] = updated
        return updated

    def update_conversation(self, conversation_id: int, title: str | None = None) -> Conversation | None:
        with self._lock:
            existing = self._conversations.get(conversation_id)
            if existing is None:
                return None
            return self._touch(existing, title=title)

    def delete_conversation(self, conversation_id: int) -> bool:
        with self._lock:
            if self._conversations.pop(conversation_id, None) is None:
                return False
            stale_ids = [
                message_id
                for message_id, message in self._messages.items()
                if message.conversation_id == conversation_id
            ]
            for message_id in stale_ids:
                del self._messages[message_id]
            return True

    def append_message(
        self,
        conversation_id: int,
        role: str,
        content: str,
        model_id: str | None = None,
        provider: str | None = None,
        response_time: int | None = None,
    ) -> ChatMessage:
        with self._lock:
            existing = self._conversations.get(conversation_id)
            if existing is None:
                raise ConversationNotFoundError(conversation_id)

            self._message_seq += 1
            message = ChatMessage(
                id=self._message_seq,
                conversation_id=conversation_id,
                role=role,
                content=content,
                model_id=model_id,
                provider=provider,
                response_time=response_time,
                created_at=self._now(),
            )
            self._messages[message.id] = message
            self._touch(existing)
            return message

    def list_messages(self, conversation_id: int) -> list[ChatMessage]:
        with self._lock:
            messages = [
                message
                for message in self._messages.values()
                if message.conversation_id == conversation_id
            ]
        return sorted(messages, key=lambda message: (message.created_at, message.id))


class SqlChatRepository(ChatRepository):
    def __init__(self, engine: Engine):
        super().__init__()
        self.engine = engine

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    def close(self) -> None:
        close_app_database(self.engine)

    def create_conversation(self, title: str) -> Conversation:
        with self._lock, self._session() as session:
            now = self._now()
            conversation = Conversation(title=title, created_at=now, updated_at=now)
            session.add(conversation)
            session.commit()
            session.refresh(conversation)
            return conversation

    def get_conversation(self, conversation_id: int) -> Conversation | None:
        with self._lock, self._session() as session:
            return session.get(Conversation, conversation_id)

    def list_conversations(self) -> list[Conversation]:
        with self._lock, self._session() as session:
            conversations = session.exec(
                select(Conversation).order_by(
                    Conversation.updated_at.desc(), Conversation.id.desc()
                )
            ).all()
            return list(conversations)

    def update_conversation(self, conversation_id: int, title: str | None = None) -> Conversation | None:
        with self._lock, self._session() as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                return None
            if title is not None:
                conversation.title = title
            conversation.updated_at = self._now()
            session.add(conversation)
            session.commit()
            session.refresh(conversation)
            return conversation

    def delete_conversation(self, conversation_id: int) -> bool:
        with self._lock, self._session() as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                return False

            messages = session.exec(
                select(ChatMessage).where(ChatMessage.conversation_id == conversation_id)
            ).all()
            for message in messages:
                session.delete(message)
            session.delete(conversation)
            session.commit()
            return True

    def append_message(
        self,
        conversation_id: int,
        role: str,
        content: str,
        model_id: str | None = None,
        provider: str | None = None,
        response_time: int | None = None,
    ) -> ChatMessage:
        with self._lock, self._session() as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                raise ConversationNotFoundError(conversation_id)

            now = self._now()
            message = ChatMessage(
                conversation_id=conversation_id,
                role=role,
                content=content,
                model_id=model_id,
                provider=provider,
                response_time=response_time,
                created_at=now,
            )
            conversation.updated_at = now
            session.add(message)
            session.add(conversation)
            session.commit()
            session.refresh(message)
            return message

    def list_messages(self, conversation_id: int) -> list[ChatMessage]:
        with self._lock, self._session() as session:
            messages = session.exec(
                select(ChatMessage)
                .where(ChatMessage.conversation_id == conversation_id)
                .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
            ).all()
            return list(messages)


def build_chat_repository(settings: Settings) -> ChatRepository:
    database_url = (settings.APP_DATABASE_URL or "").strip()
    if not database_url:
        logger.info("Using in-memory conversation store.")
        return InMemoryChatRepository()

    engine = create_app_engine(database_url)
    init_app_database(engine)
    return SqlChatRepository(engine)
