"""Message list of the chat panel."""

from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMenu,
    QScrollArea,
    QSizePolicy,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import QPoint, Qt, QTimer

from ..config.themes import theme, fonts, metrics
from ..utils.markdown_renderer import render_markdown, strip_markdown


# Bubbles leave this share of the row free on the opposite side
_SIDE_GAP_RATIO = 0.2


class MessageBubble(QFrame):
    """One message: a "You"/"AI" label above the rendered text.

    Right-clicking offers to copy the message as plain text.
    """

    def __init__(self, role: str, content: str, parent: QWidget | None = None):
        """Initialize the bubble.

        Args:
            role: "user" or "assistant"
            content: Raw message text
            parent: Parent widget
        """
        super().__init__(parent)
        self.role = role
        self._content = content

        self.setObjectName("userBubble" if self.is_user else "assistantBubble")
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)
        self._build()

    @property
    def is_user(self) -> bool:
        return self.role == "user"

    @property
    def content(self) -> str:
        return self._content

    def _build(self) -> None:
        if self.is_user:
            fill, text_color = theme.user_bubble, theme.text_on_accent
        else:
            fill, text_color = theme.assistant_bubble, theme.text_primary
        self.setStyleSheet(f"""
            #{self.objectName()} {{
                background-color: {fill};
                border-radius: {metrics.radius_large}px;
            }}
        """)

        column = QVBoxLayout(self)
        column.setContentsMargins(
            metrics.padding_medium, metrics.padding_small,
            metrics.padding_medium, metrics.padding_small,
        )
        column.setSpacing(4)

        label = QLabel("You" if self.is_user else "AI")
        label.setStyleSheet(
            f"color: {text_color}; font-size: {metrics.font_small}px;"
            f" font-weight: bold; font-family: {fonts.ui};"
        )
        if self.is_user:
            label.setAlignment(Qt.AlignmentFlag.AlignRight)
        column.addWidget(label)

        self._view = QTextBrowser()
        self._view.setOpenExternalLinks(False)
        self._view.setFrameShape(QFrame.Shape.NoFrame)
        self._view.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._view.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._view.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self._view.document().setDocumentMargin(0)
        self._view.setHtml(render_markdown(self._content, is_user=self.is_user))
        self._view.setContextMenuPolicy(Qt.ContextMenuPolicy.NoContextMenu)
        column.addWidget(self._view)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._fit_height()

    def _fit_height(self) -> None:
        document = self._view.document()
        document.setTextWidth(self._view.viewport().width())
        self._view.setFixedHeight(int(document.size().height()) + 2)

    def _show_context_menu(self, position: QPoint) -> None:
        menu = QMenu(self)
        copy_action = menu.addAction("Copy message")
        if menu.exec(self.mapToGlobal(position)) is copy_action:
            QApplication.clipboard().setText(self.plain_text())

    def plain_text(self) -> str:
        """Message text without markdown markers."""
        return self._content if self.is_user else strip_markdown(self._content)


class ChatPanel(QScrollArea):
    """Scrolling column of message bubbles, newest at the bottom."""

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)

        self.setWidgetResizable(True)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setStyleSheet(f"""
            QScrollArea {{
                background-color: {theme.background_secondary};
                border: 1px solid {theme.border_subtle};
                border-radius: {metrics.radius_large}px;
            }}
        """)

        container = QWidget()
        container.setStyleSheet("background: transparent;")
        self._column = QVBoxLayout(container)
        self._column.setContentsMargins(
            metrics.padding_medium, metrics.padding_medium,
            metrics.padding_medium, metrics.padding_medium,
        )
        self._column.setSpacing(metrics.padding_medium)
        self._column.addStretch(1)
        self.setWidget(container)

    def add_message(self, role: str, content: str) -> MessageBubble:
        """Append a bubble and scroll it into view.

        Args:
            role: "user" or "assistant"
            content: Message text

        Returns:
            The new bubble
        """
        bubble = MessageBubble(role, content)

        row = QHBoxLayout()
        row.setContentsMargins(0, 0, 0, 0)
        gap = int(_SIDE_GAP_RATIO * 100)
        bubble_share = 100 - gap
        if bubble.is_user:
            row.addStretch(gap)
            row.addWidget(bubble, bubble_share)
        else:
            row.addWidget(bubble, bubble_share)
            row.addStretch(gap)

        # Rows go above the trailing stretch
        self._column.insertLayout(self._column.count() - 1, row)
        QTimer.singleShot(0, self._scroll_to_bottom)
        return bubble

    def _scroll_to_bottom(self) -> None:
        bar = self.verticalScrollBar()
        bar.setValue(bar.maximum())
