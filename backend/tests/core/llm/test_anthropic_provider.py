from types import SimpleNamespace
from unittest.mock import MagicMock

from multichat.core.llm.providers.anthropic import AnthropicProvider
from multichat.core.llm.schemas import GenerateConfig


def _provider():
    provider = AnthropicProvider(api_key="test", model="claude-3-5-haiku-20241022")
    provider._client = MagicMock()
    return provider


def test_generate_joins_text_blocks_only():
    provider = _provider()
    provider._client.messages.create.return_value = SimpleNamespace(
        content=[
            SimpleNamespace(type="text", text="Hello"),
            SimpleNamespace(type="tool_use", id="tool-1"),
            SimpleNamespace(type="text", text=" world"),
        ],
    )

    response = provider.generate("hi", GenerateConfig(max_tokens=2000))

    assert response.text == "Hello world"
    provider._client.messages.create.assert_called_once_with(
        model="claude-3-5-haiku-20241022",
        max_tokens=2000,
        messages=[{"role": "user", "content": "hi"}],
    )


def test_generate_defaults_max_tokens():
    provider = _provider()
    provider._client.messages.create.return_value = SimpleNamespace(content=[])

    response = provider.generate("hi")

    assert response.text == ""
    assert provider._client.messages.create.call_args.kwargs["max_tokens"] == 1024


def test_check_credentials_sends_minimal_request():
    provider = _provider()

    provider.check_credentials()

    kwargs = provider._client.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-3-haiku-20240307"
    assert kwargs["max_tokens"] == 10
