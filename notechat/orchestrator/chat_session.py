"""Chat session: owns the conversation, the note selection and the popup.

All mutable chat state lives here and is mutated from the UI thread
only. The widgets forward input events and render what the session
reports through its listeners.

Flow:
1. Text changes run the trigger detector; a hit opens the suggestions
2. Choosing a note toggles the selection and rebuilds the context block
3. Sending appends the user message, builds the request from the log
   window and context, and appends the reply (or an error message)
"""

import logging
from pathlib import PurePosixPath
from typing import Callable, List, Optional

from ..config.models import get_model
from ..config.persistence import ChatPreferences
from ..config.settings import settings
from ..llm.base_adapter import LLMAdapter, classify_error, user_message_for
from ..llm.openai_adapter import OpenAIAdapter
from ..storage import DocumentInfo
from ..storage.document_store import DocumentStore
from .context_assembler import assemble_context, describe_selection
from .conversation_log import ConversationLog, Message
from .prompt_builder import PromptBuilder
from .reference_selection import ReferenceSelection, SelectionChange
from .suggestion_overlay import CloseReason, SuggestionOverlay, strip_trigger_character
from .trigger_detector import should_trigger


logger = logging.getLogger(__name__)


GREETING = "Hello! I'm your AI assistant. How can I help you today?"
MISSING_API_KEY_MESSAGE = "Please configure your OpenAI API key in the plugin settings first."
EMPTY_RESPONSE_MESSAGE = "I apologize, but I received an empty response. Please try again."

NO_NOTES_NOTICE = "No notes found"
CONTEXT_CLEARED_NOTICE = "Context cleared"
UNKNOWN_NOTE_NAME = "Unknown"

Notifier = Callable[[str], None]
BackendFactory = Callable[[str, str], LLMAdapter]


def _default_backend_factory(api_key: str, organization_id: str) -> LLMAdapter:
    return OpenAIAdapter(api_key=api_key, organization_id=organization_id)


class ChatSession:
    """A single chat panel session."""

    def __init__(
        self,
        store: DocumentStore,
        preferences: ChatPreferences,
        backend_factory: Optional[BackendFactory] = None,
        notifier: Optional[Notifier] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        """Initialize the session.

        Args:
            store: Source of the notes that can be referenced
            preferences: Credentials and model; read at send time
            backend_factory: Creates the chat backend from (api_key, organization_id)
            notifier: Shows transient notices to the user
            prompt_builder: Builds outbound requests
        """
        self._store = store
        self._preferences = preferences
        self._backend_factory = backend_factory or _default_backend_factory
        self._notify = notifier or (lambda message: None)
        self._prompt_builder = prompt_builder or PromptBuilder()

        self.log = ConversationLog()
        self.selection = ReferenceSelection(observer=self._on_selection_toggled)
        self.overlay = SuggestionOverlay()

        self._context_block = ""
        self._context_generation = 0
        self._busy = False

        self._message_listeners: List[Callable[[Message], None]] = []
        self._context_listeners: List[Callable[[str], None]] = []
        self._busy_listeners: List[Callable[[bool], None]] = []

    # ==================== Listeners ====================

    def add_message_listener(self, listener: Callable[[Message], None]) -> None:
        """Called with every message appended to the log."""
        self._message_listeners.append(listener)

    def add_context_listener(self, listener: Callable[[str], None]) -> None:
        """Called with the display summary whenever the context changes."""
        self._context_listeners.append(listener)

    def add_busy_listener(self, listener: Callable[[bool], None]) -> None:
        """Called when a request starts (True) or finishes (False)."""
        self._busy_listeners.append(listener)

    # ==================== Properties ====================

    @property
    def store(self) -> DocumentStore:
        return self._store

    def set_store(self, store: DocumentStore) -> None:
        """Switch to another document store (e.g. a different vault)."""
        self._store = store

    @property
    def preferences(self) -> ChatPreferences:
        return self._preferences

    @property
    def context_block(self) -> str:
        """Current assembled note context ("" when nothing is selected)."""
        return self._context_block

    @property
    def busy(self) -> bool:
        """Whether a request is in flight."""
        return self._busy

    # ==================== Lifecycle ====================

    def start(self) -> None:
        """Show the greeting."""
        self._append("assistant", GREETING)

    def teardown(self) -> None:
        """Discard all session state."""
        self.overlay.close(CloseReason.TEARDOWN)
        self.log.clear()
        self.selection.clear()
        self._context_generation += 1
        self._context_block = ""
        logger.info("Chat session torn down")

    # ==================== Input and suggestions ====================

    def on_input_changed(self, text: str, cursor_position: int) -> bool:
        """Re-evaluate the trigger after a text change.

        Args:
            text: Input text
            cursor_position: Cursor index

        Returns:
            True if the suggestion popup is open afterwards
        """
        if should_trigger(text, cursor_position):
            return self.open_suggestions()
        self.overlay.close(CloseReason.INPUT_CHANGED)
        return False

    def open_suggestions(self) -> bool:
        """Open a fresh suggestion popup listing all notes.

        With no notes a notice is shown and the popup stays closed.

        Returns:
            True if the popup opened
        """
        documents = self._store.list_documents()
        opened = self.overlay.open(documents, self.selection.ids)
        if not opened:
            self._notify(NO_NOTES_NOTICE)
        return opened

    def on_key(self, key: str) -> bool:
        """Forward a key press to the popup.

        Returns:
            True if the key was consumed
        """
        return self.overlay.handle_key(key)

    def choose_reference(self, doc_id: str, text: str) -> str:
        """Handle a click on a note in the popup.

        Toggles the note and closes the popup. The context is not rebuilt
        here; the caller schedules :meth:`refresh_context`.

        Args:
            doc_id: Chosen note
            text: Current input text

        Returns:
            Input text with the trigger character removed
        """
        self.selection.toggle(doc_id)
        return self._close_suggestions(CloseReason.SELECTION, text)

    def finish_suggestions(self, text: str) -> str:
        """Handle the popup's Done button.

        Args:
            text: Current input text

        Returns:
            Input text with the trigger character removed
        """
        return self._close_suggestions(CloseReason.DONE, text)

    def dismiss_suggestions(self, reason: CloseReason = CloseReason.DISMISSED) -> bool:
        """Close the popup without touching the selection or the input."""
        return self.overlay.close(reason)

    def _close_suggestions(self, reason: CloseReason, text: str) -> str:
        if not self.overlay.close(reason):
            return text
        if SuggestionOverlay.strips_trigger(reason):
            return strip_trigger_character(text)
        return text

    # ==================== Selection and context ====================

    async def toggle_reference(self, doc_id: str) -> SelectionChange:
        """Toggle a note and rebuild the context block.

        Args:
            doc_id: Note identifier

        Returns:
            The change applied to the selection
        """
        change = self.selection.toggle(doc_id)
        await self.refresh_context()
        return change

    async def refresh_context(self) -> str:
        """Rebuild the context block from the whole selection.

        A rebuild that finishes after a newer one started is dropped.

        Returns:
            The context block
        """
        self._context_generation += 1
        generation = self._context_generation

        block = await assemble_context(self.selection.ids, self._store)

        if generation != self._context_generation:
            logger.debug("Discarding stale context rebuild #%d", generation)
            return self._context_block

        self._context_block = block
        self._emit_context()
        return block

    def clear_context(self) -> None:
        """Drop every selected note."""
        self.selection.clear()
        self._context_generation += 1
        self._context_block = ""
        self._emit_context()
        self._notify(CONTEXT_CLEARED_NOTICE)

    def context_summary(self) -> str:
        """Short description of the selected notes for the indicator.

        Returns:
            Summary, or "" when there is no context
        """
        if not self._context_block or self.selection.is_empty():
            return ""

        listed = {info.id: info for info in self._store.list_documents()}
        names = [
            listed[doc_id].display_name if doc_id in listed else UNKNOWN_NOTE_NAME
            for doc_id in self.selection.ids
        ]
        return describe_selection(names)

    def suggestion_documents(self) -> List[DocumentInfo]:
        """Notes listed by the open popup."""
        return [item.document for item in self.overlay.items]

    # ==================== Sending ====================

    async def send_message(self, text: str) -> bool:
        """Send a user message and append the reply.

        Failures never propagate: they become one assistant message.

        Args:
            text: Raw input text

        Returns:
            True if a backend request was made
        """
        message = text.strip()
        if not message:
            return False

        if self._busy:
            logger.warning("Ignoring message while a request is in flight")
            return False

        api_key = self._preferences.effective_api_key()
        if not api_key:
            self._append("assistant", MISSING_API_KEY_MESSAGE)
            return False

        self._append("user", message)
        self._set_busy(True)

        try:
            request = self._prompt_builder.build_messages(
                self.log, self._context_block, message
            )
            backend = self._backend_factory(
                api_key, self._preferences.effective_organization_id()
            )
            reply = await backend.complete(request, self._resolve_model())
            self._append("assistant", reply or EMPTY_RESPONSE_MESSAGE)
        except Exception as e:
            category = classify_error(e)
            logger.error("Chat request failed (%s): %s", category.value, e, exc_info=True)
            self._append("assistant", user_message_for(category))
        finally:
            self._set_busy(False)

        return True

    # ==================== Internals ====================

    def _append(self, role: str, content: str) -> Message:
        msg = self.log.append(role, content)
        for listener in self._message_listeners:
            listener(msg)
        return msg

    def _resolve_model(self) -> str:
        model_id = self._preferences.model
        if get_model(model_id) is None:
            logger.warning("Unknown model %r, using %s", model_id, settings.default_model)
            return settings.default_model
        return model_id

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        for listener in self._busy_listeners:
            listener(busy)

    def _emit_context(self) -> None:
        summary = self.context_summary()
        for listener in self._context_listeners:
            listener(summary)

    def _on_selection_toggled(self, doc_id: str, change: SelectionChange) -> None:
        name = PurePosixPath(doc_id).name
        if change is SelectionChange.ADDED:
            self._notify(f"Added {name} to context")
        else:
            self._notify(f"Removed {name} from context")
