import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

logger = logging.getLogger(__name__)

_SQLITE_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def _safe_url(value) -> str:
    return value.render_as_string(hide_password=True)


def create_app_engine(database_url: str) -> Engine:
    url = database_url.strip()
    if not url:
        raise ValueError("Database URL is empty.")

    kwargs: dict = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _SQLITE_MEMORY_URLS:
            # One shared connection, otherwise every session sees an empty database.
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def init_app_database(engine: Engine) -> None:
    logger.info("Initializing app database on %s", _safe_url(engine.url))

    from multichat.modules.chatbot.models import ChatMessage, Conversation

    _ = (Conversation, ChatMessage)
    SQLModel.metadata.create_all(engine)
    logger.info("Application tables are ready on %s", _safe_url(engine.url))


def close_app_database(engine: Engine) -> None:
    engine.dispose()
    logger.info("Database engine disposed.")
