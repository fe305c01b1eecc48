"""Shared pytest fixtures."""

import asyncio
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from notechat.config.persistence import ChatPreferences
from notechat.llm.base_adapter import LLMAdapter
from notechat.orchestrator.chat_session import ChatSession
from notechat.storage.document_store import VaultDocumentStore


class FakeBackend(LLMAdapter):
    """Records requests and replies with a canned answer or error."""

    def __init__(self, reply: str = "Hi there", error: Optional[BaseException] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, object]] = []
        self.gate: Optional[asyncio.Event] = None

    @property
    def provider(self) -> str:
        return "fake"

    async def complete(self, messages, model):
        self.calls.append({"messages": messages, "model": model})
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


def write_note(vault: Path, doc_id: str, content: str) -> Path:
    path = vault / doc_id
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_openai_env(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_ORG_ID", raising=False)


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    write_note(root, "a.md", "Alpha notes")
    write_note(root, "b.md", "Beta notes")
    write_note(root, "Projects/plan.md", "The plan")
    return root


@pytest.fixture
def store(vault: Path) -> VaultDocumentStore:
    return VaultDocumentStore(vault)


@pytest.fixture
def preferences() -> ChatPreferences:
    return ChatPreferences(api_key="sk-test")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def notices() -> List[str]:
    return []


@pytest.fixture
def session(store, preferences, backend, notices) -> ChatSession:
    backend_args = []

    def factory(api_key: str, organization_id: str) -> LLMAdapter:
        backend_args.append((api_key, organization_id))
        return backend

    chat = ChatSession(
        store=store,
        preferences=preferences,
        backend_factory=factory,
        notifier=notices.append,
    )
    chat.backend_args = backend_args
    return chat
