"""Tests for the OpenAI adapter and failure classification."""

from types import SimpleNamespace

import httpx
import openai
import pytest

from notechat.llm.base_adapter import (
    ChatBackendError,
    ErrorCategory,
    classify_error,
    user_message_for,
)
from notechat.llm.openai_adapter import OpenAIAdapter


_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class _FakeCompletions:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.response


def _client(completions: _FakeCompletions) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _response(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _status_error(cls, status: int):
    return cls("failed", response=httpx.Response(status, request=_REQUEST), body=None)


@pytest.mark.asyncio
async def test_complete_sends_fixed_request_shape() -> None:
    completions = _FakeCompletions(response=_response("Answer"))
    adapter = OpenAIAdapter(api_key="sk-test", client=_client(completions))
    messages = [{"role": "user", "content": "hi"}]

    reply = await adapter.complete(messages, "o3")

    assert reply == "Answer"
    assert completions.kwargs == {
        "model": "o3",
        "messages": messages,
        "max_tokens": 1000,
        "temperature": 0.7,
        "stream": False,
    }


@pytest.mark.asyncio
async def test_missing_content_is_empty_reply() -> None:
    adapter = OpenAIAdapter(api_key="sk-test", client=_client(_FakeCompletions(response=_response(None))))

    assert await adapter.complete([], "gpt-4o") == ""


@pytest.mark.asyncio
async def test_no_choices_is_empty_reply() -> None:
    completions = _FakeCompletions(response=SimpleNamespace(choices=[]))
    adapter = OpenAIAdapter(api_key="sk-test", client=_client(completions))

    assert await adapter.complete([], "gpt-4o") == ""


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, category, status",
    [
        (_status_error(openai.AuthenticationError, 401), ErrorCategory.UNAUTHORIZED, 401),
        (_status_error(openai.RateLimitError, 429), ErrorCategory.RATE_LIMITED, 429),
        (_status_error(openai.InternalServerError, 500), ErrorCategory.OTHER, 500),
        (openai.APIConnectionError(request=_REQUEST), ErrorCategory.CONNECTIVITY, None),
    ],
)
async def test_sdk_errors_are_classified(error, category, status) -> None:
    adapter = OpenAIAdapter(api_key="sk-test", client=_client(_FakeCompletions(error=error)))

    with pytest.raises(ChatBackendError) as excinfo:
        await adapter.complete([], "gpt-4o")

    assert excinfo.value.category is category
    assert excinfo.value.status_code == status
    assert classify_error(excinfo.value) is category


def test_api_key_is_required() -> None:
    with pytest.raises(ValueError):
        OpenAIAdapter(api_key="")


def test_provider_name() -> None:
    assert OpenAIAdapter(api_key="sk-test").provider == "openai"


@pytest.mark.parametrize(
    "message, category",
    [
        ("status 401", ErrorCategory.UNAUTHORIZED),
        ("got 429 back", ErrorCategory.RATE_LIMITED),
        ("NETWORK failure", ErrorCategory.CONNECTIVITY),
        ("something else", ErrorCategory.OTHER),
    ],
)
def test_classify_plain_exceptions(message, category) -> None:
    assert classify_error(RuntimeError(message)) is category


def test_user_messages() -> None:
    assert user_message_for(ErrorCategory.UNAUTHORIZED) == (
        "Invalid API key. Please check your OpenAI API key in settings."
    )
    assert user_message_for(ErrorCategory.RATE_LIMITED) == (
        "Rate limit exceeded. Please wait a moment and try again."
    )
    assert user_message_for(ErrorCategory.CONNECTIVITY) == (
        "Network error. Please check your internet connection."
    )
    assert user_message_for(ErrorCategory.OTHER) == (
        "Sorry, I encountered an error. Please try again."
    )
