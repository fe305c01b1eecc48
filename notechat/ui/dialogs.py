"""Dialogs for notechat.

Settings dialog and transient notification toast.
"""

from typing import Optional

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QFileDialog,
    QGraphicsOpacityEffect,
    QWidget,
)
from PySide6.QtCore import QPropertyAnimation, Qt, QTimer

from ..config.persistence import ChatPreferences
from ..config.themes import theme, fonts, metrics


class NotificationToast(QLabel):
    """Short-lived notice shown at the top of the window.

    Used for selection feedback such as "Added plan.md to context".
    """

    def __init__(
        self,
        message: str,
        parent: QWidget,
        duration_ms: int = 2000,
    ) -> None:
        """Create the toast; call :meth:`popup` to show it.

        Args:
            message: Notice text
            parent: Window the toast floats over
            duration_ms: Time before fading out
        """
        super().__init__(message, parent)
        self._duration_ms = duration_ms
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet(
            f"background-color: {theme.background_elevated};"
            f" border: 1px solid {theme.interactive_accent};"
            f" border-radius: {metrics.radius_medium}px;"
            f" padding: {metrics.padding_small}px {metrics.padding_large}px;"
            f" font-family: {fonts.ui};"
        )
        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(1.0)
        self.setGraphicsEffect(self._opacity)
        self._fade = QPropertyAnimation(self._opacity, b"opacity", self)
        self._fade.setDuration(300)
        self._fade.setEndValue(0.0)
        self._fade.finished.connect(self.deleteLater)

    def popup(self, top: int) -> None:
        """Show centered horizontally, ``top`` pixels below the parent's top edge."""
        self.adjustSize()
        parent = self.parentWidget()
        self.move(max(0, (parent.width() - self.width()) // 2), top)
        self.show()
        self.raise_()
        QTimer.singleShot(self._duration_ms, self._fade.start)


class SettingsDialog(QDialog):
    """Edit the API key, organization ID and notes folder."""

    def __init__(
        self,
        preferences: ChatPreferences,
        parent: Optional[QWidget] = None,
    ) -> None:
        """Initialize the dialog with current values.

        Args:
            preferences: Current preferences (not modified by the dialog)
            parent: Parent widget
        """
        super().__init__(parent)
        self.setWindowTitle("AI Chat Settings")
        self.setMinimumWidth(440)
        self._preferences = preferences
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(
            metrics.padding_large, metrics.padding_large,
            metrics.padding_large, metrics.padding_large,
        )
        layout.setSpacing(metrics.padding_medium)

        form = QFormLayout()

        self.api_key_edit = QLineEdit(self._preferences.api_key)
        self.api_key_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.api_key_edit.setPlaceholderText("sk-...")
        form.addRow("OpenAI API Key", self.api_key_edit)

        self.organization_edit = QLineEdit(self._preferences.organization_id)
        self.organization_edit.setPlaceholderText("org-... (optional)")
        form.addRow("Organization ID", self.organization_edit)

        vault_row = QHBoxLayout()
        self.vault_edit = QLineEdit(self._preferences.vault_path)
        browse_button = QPushButton("Browse...")
        browse_button.clicked.connect(self._on_browse)
        vault_row.addWidget(self.vault_edit)
        vault_row.addWidget(browse_button)
        form.addRow("Notes folder", vault_row)

        layout.addLayout(form)

        note = QLabel(
            "<b>Note:</b> API usage will be charged to your OpenAI account. "
            "If you're getting rate limited, add your organization ID."
        )
        note.setWordWrap(True)
        note.setStyleSheet(f"color: {theme.text_muted}; font-size: {metrics.font_small}px;")
        layout.addWidget(note)

        buttons = QHBoxLayout()
        buttons.addStretch()
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        save_button = QPushButton("Save")
        save_button.setDefault(True)
        save_button.clicked.connect(self.accept)
        buttons.addWidget(cancel_button)
        buttons.addWidget(save_button)
        layout.addLayout(buttons)

    def _on_browse(self) -> None:
        folder = QFileDialog.getExistingDirectory(
            self, "Select notes folder", self.vault_edit.text()
        )
        if folder:
            self.vault_edit.setText(folder)

    def api_key(self) -> str:
        return self.api_key_edit.text().strip()

    def organization_id(self) -> str:
        return self.organization_edit.text().strip()

    def vault_path(self) -> str:
        return self.vault_edit.text().strip()
