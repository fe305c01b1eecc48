"""Input panel for user message entry."""

from typing import Callable, Optional

from PySide6.QtWidgets import (
    QWidget,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
)
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeyEvent

from ..config.themes import metrics


# Qt keys forwarded to the suggestion popup, by the names it understands
_POPUP_KEYS = {
    Qt.Key.Key_Escape: "Escape",
    Qt.Key.Key_Up: "ArrowUp",
    Qt.Key.Key_Down: "ArrowDown",
    Qt.Key.Key_Space: " ",
    Qt.Key.Key_Return: "Enter",
    Qt.Key.Key_Enter: "Enter",
}

KeyFilter = Callable[[str], bool]


class MessageInput(QLineEdit):
    """Single-line input. Enter sends; popup keys are offered to a filter first."""

    submit_requested = Signal()

    def __init__(self, parent: QWidget | None = None):
        """Initialize the message input.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self.setPlaceholderText("Type your message... (use @ to add notes)")
        self._key_filter: Optional[KeyFilter] = None

    def set_key_filter(self, key_filter: Optional[KeyFilter]) -> None:
        """Set the callable that may consume popup keys.

        Args:
            key_filter: Returns True when the key was consumed
        """
        self._key_filter = key_filter

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Handle key press events.

        Args:
            event: The key event
        """
        key_name = _POPUP_KEYS.get(event.key())
        if key_name is not None and self._key_filter is not None:
            if self._key_filter(key_name):
                event.accept()
                return

        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.submit_requested.emit()
            return

        super().keyPressEvent(event)


class InputPanel(QWidget):
    """Panel containing the message input and send button."""

    message_submitted = Signal(str)
    text_edited = Signal(str, int)  # text, cursor position

    def __init__(self, parent: QWidget | None = None):
        """Initialize the input panel.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, metrics.padding_small, 0, 0)
        layout.setSpacing(metrics.padding_small)

        self.input_field = MessageInput()
        self.input_field.submit_requested.connect(self._on_submit)
        self.input_field.textEdited.connect(self._on_text_edited)
        layout.addWidget(self.input_field)

        self.send_button = QPushButton("Send")
        self.send_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.send_button.clicked.connect(self._on_submit)
        layout.addWidget(self.send_button)

    def _on_submit(self) -> None:
        """Handle message submission."""
        text = self.input_field.text().strip()
        if text and self.send_button.isEnabled():
            self.input_field.clear()
            self.message_submitted.emit(text)

    def _on_text_edited(self, text: str) -> None:
        self.text_edited.emit(text, self.input_field.cursorPosition())

    def set_busy(self, busy: bool) -> None:
        """Show or clear the busy state of the send button.

        Args:
            busy: Whether a request is in flight
        """
        self.send_button.setEnabled(not busy)
        self.send_button.setText("Thinking..." if busy else "Send")
        if not busy:
            self.focus_input()

    def focus_input(self) -> None:
        """Set focus to the input field."""
        self.input_field.setFocus()

    def get_text(self) -> str:
        """Get the current input text."""
        return self.input_field.text()

    def set_text(self, text: str) -> None:
        """Replace the input text and focus it."""
        self.input_field.setText(text)
        self.focus_input()
