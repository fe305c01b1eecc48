"""Main application window."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Set

from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QHBoxLayout,
    QVBoxLayout,
    QLabel,
    QComboBox,
    QPushButton,
    QDialog,
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from .chat_panel import ChatPanel
from .input_panel import InputPanel
from .dialogs import NotificationToast, SettingsDialog
from .suggestion_popup import SuggestionPopup
from ..config.settings import settings
from ..config.models import get_available_models
from ..config.themes import theme, fonts, metrics
from ..config.persistence import PersistenceManager, persistence
from ..orchestrator.chat_session import ChatSession
from ..orchestrator.conversation_log import Message
from ..orchestrator.suggestion_overlay import CloseReason
from ..storage.document_store import VaultDocumentStore


logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Chat panel window: header, context indicator, messages and input."""

    def __init__(
        self,
        vault_path: Optional[Path] = None,
        persistence_manager: Optional[PersistenceManager] = None,
    ) -> None:
        """Initialize the main window.

        Args:
            vault_path: Notes folder; overrides the saved one for this run
            persistence_manager: Preference storage, defaults to the global one
        """
        super().__init__()
        self._persistence = persistence_manager or persistence
        self._active_tasks: Set[asyncio.Task] = set()
        self._popup_instance = 0

        prefs = self._persistence.preferences
        root = vault_path or Path(prefs.vault_path or settings.vault_dir).expanduser()
        self._session = ChatSession(
            store=VaultDocumentStore(root),
            preferences=prefs,
            notifier=self._show_notification,
        )

        self._setup_ui()
        self._setup_menu()
        self._connect_session()
        self._restore_window_state()

        self._session.start()
        logger.info("Chat window ready (notes folder: %s)", root)

    # ==================== Setup ====================

    def _setup_ui(self) -> None:
        self.setWindowTitle(settings.window_title)
        self.setMinimumSize(400, 500)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(
            metrics.padding_large, metrics.padding_large,
            metrics.padding_large, metrics.padding_large,
        )
        layout.setSpacing(metrics.padding_medium)

        # Header
        header = QHBoxLayout()
        title = QLabel("AI Chat Assistant")
        title.setStyleSheet(f"""
            QLabel {{
                font-size: {metrics.font_large}px;
                font-weight: 600;
                font-family: {fonts.ui};
            }}
        """)
        header.addWidget(title)
        header.addStretch()

        self.model_selector = QComboBox()
        for model in get_available_models():
            self.model_selector.addItem(model.display_name, model.model_id)
        index = self.model_selector.findData(self._session.preferences.model)
        self.model_selector.setCurrentIndex(max(index, 0))
        self.model_selector.currentIndexChanged.connect(self._on_model_changed)
        header.addWidget(self.model_selector)
        layout.addLayout(header)

        # Context indicator
        self.context_bar = QWidget()
        context_layout = QHBoxLayout(self.context_bar)
        context_layout.setContentsMargins(
            metrics.padding_medium, metrics.padding_small,
            metrics.padding_medium, metrics.padding_small,
        )
        self.context_bar.setStyleSheet(f"""
            QWidget {{
                background-color: {theme.background_elevated};
                border-radius: {metrics.radius_medium}px;
            }}
        """)
        self.context_label = QLabel()
        self.context_label.setStyleSheet(f"color: {theme.text_secondary};")
        clear_button = QPushButton("Clear")
        clear_button.setCursor(Qt.CursorShape.PointingHandCursor)
        clear_button.clicked.connect(self._session.clear_context)
        context_layout.addWidget(self.context_label)
        context_layout.addStretch()
        context_layout.addWidget(clear_button)
        self.context_bar.hide()
        layout.addWidget(self.context_bar)

        self.chat_panel = ChatPanel()
        layout.addWidget(self.chat_panel, stretch=1)

        self.input_panel = InputPanel()
        self.input_panel.message_submitted.connect(self._on_message_submitted)
        self.input_panel.text_edited.connect(self._on_text_edited)
        self.input_panel.input_field.set_key_filter(self._on_input_key)
        layout.addWidget(self.input_panel)

        self.suggestion_popup = SuggestionPopup(self.input_panel.input_field, central)
        self.suggestion_popup.item_chosen.connect(self._on_suggestion_chosen)
        self.suggestion_popup.done_clicked.connect(self._on_suggestions_done)
        self.suggestion_popup.outside_clicked.connect(self._on_outside_click)

    def _setup_menu(self) -> None:
        menu = self.menuBar().addMenu("&File")

        settings_action = QAction("&Settings...", self)
        settings_action.setShortcut("Ctrl+,")
        settings_action.triggered.connect(self._show_settings)
        menu.addAction(settings_action)

        menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    def _connect_session(self) -> None:
        self._session.add_message_listener(self._on_session_message)
        self._session.add_context_listener(self._on_context_changed)
        self._session.add_busy_listener(self.input_panel.set_busy)

    # ==================== Task Management ====================

    def _create_task(self, coro, name: str = "") -> asyncio.Task:
        """Create a tracked async task with error handling.

        Args:
            coro: Coroutine to run
            name: Optional task name for debugging

        Returns:
            The created task
        """
        task = asyncio.create_task(coro)
        if name:
            task.set_name(name)
        self._active_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        """Handle task completion and exceptions.

        Args:
            task: The completed task
        """
        self._active_tasks.discard(task)
        if task.cancelled():
            return

        exc = task.exception()
        if exc is not None:
            logger.error(
                "Background task '%s' failed", task.get_name(),
                exc_info=(type(exc), exc, exc.__traceback__),
            )
            self._show_notification(f"Error: {exc}")

    # ==================== Session events ====================

    def _on_session_message(self, message: Message) -> None:
        self.chat_panel.add_message(message.role, message.content)

    def _on_context_changed(self, summary: str) -> None:
        self.context_label.setText(summary)
        self.context_bar.setVisible(bool(summary))

    def _show_notification(self, message: str) -> None:
        NotificationToast(message, self).popup(self.menuBar().height() + metrics.padding_large)

    # ==================== Input events ====================

    def _on_message_submitted(self, text: str) -> None:
        self._create_task(self._session.send_message(text), name="send_message")

    def _on_text_edited(self, text: str, cursor_position: int) -> None:
        self._session.on_input_changed(text, cursor_position)
        self._sync_popup()

    def _on_input_key(self, key: str) -> bool:
        """Offer a key from the input to the suggestion popup.

        Returns:
            True if the key was consumed
        """
        if key == "Enter":
            item = self._session.overlay.highlighted_item()
            if item is None:
                return False
            self._on_suggestion_chosen(item.document.id)
            return True

        consumed = self._session.on_key(key)
        self._sync_popup()
        return consumed

    def _on_suggestion_chosen(self, doc_id: str) -> None:
        new_text = self._session.choose_reference(doc_id, self.input_panel.get_text())
        self._sync_popup()
        self.input_panel.set_text(new_text)
        self._create_task(self._session.refresh_context(), name="refresh_context")

    def _on_suggestions_done(self) -> None:
        new_text = self._session.finish_suggestions(self.input_panel.get_text())
        self._sync_popup()
        self.input_panel.set_text(new_text)

    def _on_outside_click(self) -> None:
        self._session.dismiss_suggestions(CloseReason.OUTSIDE)
        self._sync_popup()

    def _sync_popup(self) -> None:
        """Render the overlay state into the popup widget."""
        overlay = self._session.overlay
        if not overlay.is_open:
            if self.suggestion_popup.isVisible():
                self.suggestion_popup.close_popup()
            return

        if overlay.instance != self._popup_instance or not self.suggestion_popup.isVisible():
            self._popup_instance = overlay.instance
            self.suggestion_popup.show_items(overlay.items, overlay.selected_count)
        self.suggestion_popup.set_highlighted(overlay.highlighted_index)

    # ==================== Preferences ====================

    def _on_model_changed(self, index: int) -> None:
        model_id = self.model_selector.itemData(index)
        if model_id:
            self._persistence.update_model(model_id)
            logger.info("Model switched to %s", model_id)

    def _show_settings(self) -> None:
        dialog = SettingsDialog(self._session.preferences, self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return

        self._persistence.update_credentials(dialog.api_key(), dialog.organization_id())

        vault_path = dialog.vault_path()
        if vault_path and vault_path != self._session.preferences.vault_path:
            self._persistence.update_vault_path(vault_path)
            self._session.set_store(VaultDocumentStore(Path(vault_path).expanduser()))
            self._session.clear_context()
            logger.info("Notes folder changed to %s", vault_path)

    def _restore_window_state(self) -> None:
        window = self._persistence.preferences.window
        self.setGeometry(window.x, window.y, window.width, window.height)

    def _save_window_state(self) -> None:
        geometry = self.geometry()
        self._persistence.update_window_state(
            x=geometry.x(),
            y=geometry.y(),
            width=geometry.width(),
            height=geometry.height(),
        )

    def closeEvent(self, event) -> None:
        """Cancel pending work, tear down the session and save window state."""
        for task in list(self._active_tasks):
            task.cancel()

        self.suggestion_popup.close_popup()
        self._session.teardown()
        self._save_window_state()
        super().closeEvent(event)
