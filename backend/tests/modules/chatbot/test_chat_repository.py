import threading

import pytest

from multichat.core.database import create_app_engine, init_app_database
from multichat.core.errors import ConversationNotFoundError
from multichat.modules.chatbot.repository import (
    ROLE_ASSISTANT,
    ROLE_USER,
    InMemoryChatRepository,
    SqlChatRepository,
    build_chat_repository,
)


@pytest.fixture(params=["memory", "sqlite"])
def repo(request):
    if request.param == "memory":
        yield InMemoryChatRepository()
        return

    engine = create_app_engine("sqlite://")
    init_app_database(engine)
    store = SqlChatRepository(engine)
    yield store
    store.close()


def test_conversation_ids_increase_and_are_not_reused(repo):
    first = repo.create_conversation("first")
    second = repo.create_conversation("second")
    assert second.id > first.id

    assert repo.delete_conversation(second.id) is True
    third = repo.create_conversation("third")
    assert third.id > second.id


def test_new_conversation_timestamps(repo):
    conversation = repo.create_conversation("hello")

    stored = repo.get_conversation(conversation.id)
    assert stored.title == "hello"
    assert stored.created_at == stored.updated_at


def test_messages_listed_in_insertion_order(repo):
    conversation = repo.create_conversation("chat")
    repo.append_message(conversation.id, ROLE_USER, "question")
    repo.append_message(
        conversation.id,
        ROLE_ASSISTANT,
        "answer",
        model_id="gpt-4o",
        provider="openai",
        response_time=120,
    )

    messages = repo.list_messages(conversation.id)

    assert [message.role for message in messages] == [ROLE_USER, ROLE_ASSISTANT]
    assert messages[0].model_id is None
    assert messages[0].provider is None
    assert messages[0].response_time is None
    assert messages[1].model_id == "gpt-4o"
    assert messages[1].provider == "openai"
    assert messages[1].response_time == 120
    assert messages[0].id < messages[1].id
    assert messages[0].created_at <= messages[1].created_at


def test_append_to_missing_conversation_raises(repo):
    with pytest.raises(ConversationNotFoundError):
        repo.append_message(999, ROLE_USER, "hello")


def test_append_bumps_updated_at_and_list_order(repo):
    older = repo.create_conversation("older")
    newer = repo.create_conversation("newer")
    assert [conv.id for conv in repo.list_conversations()] == [newer.id, older.id]

    repo.append_message(older.id, ROLE_USER, "ping")

    conversations = repo.list_conversations()
    assert [conv.id for conv in conversations] == [older.id, newer.id]
    assert conversations[0].updated_at > conversations[0].created_at


def test_update_conversation(repo):
    conversation = repo.create_conversation("draft")

    updated = repo.update_conversation(conversation.id, title="final")

    assert updated.title == "final"
    assert updated.updated_at > conversation.updated_at
    assert repo.get_conversation(conversation.id).title == "final"
    assert repo.update_conversation(12345, title="nope") is None


def test_delete_cascades_to_messages(repo):
    keep = repo.create_conversation("keep")
    drop = repo.create_conversation("drop")
    repo.append_message(keep.id, ROLE_USER, "kept")
    repo.append_message(drop.id, ROLE_USER, "dropped")

    assert repo.delete_conversation(drop.id) is True

    assert repo.get_conversation(drop.id) is None
    assert repo.list_messages(drop.id) == []
    assert [message.content for message in repo.list_messages(keep.id)] == ["kept"]
    assert repo.delete_conversation(drop.id) is False


def test_concurrent_appends_get_unique_ids(repo):
    conversation = repo.create_conversation("busy")

    def writer(worker):
        for idx in range(10):
            repo.append_message(conversation.id, ROLE_ASSISTANT, f"{worker}-{idx}")

    threads = [threading.Thread(target=writer, args=(worker,)) for worker in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    messages = repo.list_messages(conversation.id)
    assert len(messages) == 40
    assert len({message.id for message in messages}) == 40


def test_build_chat_repository_defaults_to_memory(test_settings):
    assert isinstance(build_chat_repository(test_settings), InMemoryChatRepository)


def test_build_chat_repository_with_database_url(test_settings):
    test_settings.APP_DATABASE_URL = "sqlite://"

    store = build_chat_repository(test_settings)
    try:
        assert isinstance(store, SqlChatRepository)
        conversation = store.create_conversation("persisted")
        assert store.get_conversation(conversation.id).title == "persisted"
    finally:
        store.close()


def test_create_app_engine_rejects_empty_url():
    with pytest.raises(ValueError):
        create_app_engine("  ")
