"""Tests for request assembly."""

from notechat.config.settings import settings
from notechat.orchestrator.conversation_log import ConversationLog
from notechat.orchestrator.prompt_builder import (
    SYSTEM_PREAMBLE,
    PromptBuilder,
    build_request_messages,
)


def test_order_without_context() -> None:
    log = ConversationLog()
    log.add_assistant_message("Hello!")
    log.add_user_message("question")

    messages = PromptBuilder().build_messages(log, "", "question")

    assert messages == [
        {"role": "system", "content": SYSTEM_PREAMBLE},
        {"role": "assistant", "content": "Hello!"},
        {"role": "user", "content": "question"},
        {"role": "user", "content": "question"},
    ]


def test_context_goes_before_the_user_message() -> None:
    log = ConversationLog()
    log.add_user_message("question")

    messages = PromptBuilder().build_messages(log, "CONTEXT", "question")

    assert messages[-2] == {"role": "user", "content": "CONTEXT"}
    assert messages[-1] == {"role": "user", "content": "question"}
    assert len(messages) == 4


def test_history_is_limited_to_the_window() -> None:
    log = ConversationLog()
    for index in range(25):
        log.add_user_message(f"m{index}")

    messages = build_request_messages(log, "ctx", "now")

    assert len(messages) == 1 + 10 + 1 + 1
    assert messages[1]["content"] == "m15"
    assert messages[10]["content"] == "m24"


def test_system_preamble_text() -> None:
    assert SYSTEM_PREAMBLE == (
        "You are a helpful AI assistant integrated into Obsidian, a note-taking app. "
        "Be concise but thorough in your responses. "
        "Help users with their questions and tasks."
    )


def test_custom_system_prompt() -> None:
    builder = PromptBuilder(system_prompt="Be brief.", history_window=2)
    log = ConversationLog()
    for index in range(5):
        log.add_user_message(str(index))

    messages = builder.build_messages(log, "", "x")

    assert builder.system_prompt == "Be brief."
    assert [m["content"] for m in messages] == ["Be brief.", "3", "4", "x"]


def test_default_window_follows_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "history_window", 3)
    log = ConversationLog()
    for index in range(6):
        log.add_user_message(str(index))

    messages = PromptBuilder().build_messages(log, "", "x")

    assert [m["content"] for m in messages[1:]] == ["3", "4", "5", "x"]
