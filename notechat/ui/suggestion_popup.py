"""Popup listing notes that can be added to the chat context."""

from typing import List, Optional

from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtGui import QColor

from ..config.themes import theme, fonts, metrics
from ..orchestrator.suggestion_overlay import SuggestionItem


DOC_ID_ROLE = Qt.ItemDataRole.UserRole


class SuggestionPopup(QFrame):
    """Renders the suggestion overlay state.

    The popup holds no state of its own beyond the rendered rows; open and
    close decisions are made by the chat session.
    """

    item_chosen = Signal(str)  # doc_id
    done_clicked = Signal()
    outside_clicked = Signal()

    def __init__(self, anchor: QWidget, parent: Optional[QWidget] = None) -> None:
        """Initialize the popup.

        Args:
            anchor: Input widget the popup is shown above; clicks on it do
                not count as outside clicks
            parent: Parent widget
        """
        super().__init__(parent)
        self._anchor = anchor
        self._setup_ui()
        self.hide()

    def _setup_ui(self) -> None:
        self.setMinimumWidth(280)
        self.setMaximumWidth(400)
        self.setMaximumHeight(300)
        self.setStyleSheet(f"""
            SuggestionPopup {{
                background-color: {theme.background_elevated};
                border: 1px solid {theme.border};
                border-radius: {metrics.radius_large}px;
            }}
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = QHBoxLayout()
        header.setContentsMargins(
            metrics.padding_large, metrics.padding_medium,
            metrics.padding_large, metrics.padding_medium,
        )
        title = QLabel("📝 Add Notes to Context")
        title.setStyleSheet(f"font-weight: 600; font-family: {fonts.ui};")
        self._count_label = QLabel("0 selected")
        self._count_label.setStyleSheet(
            f"color: {theme.text_muted}; font-size: {metrics.font_small}px;"
        )
        header.addWidget(title)
        header.addStretch()
        header.addWidget(self._count_label)
        layout.addLayout(header)

        self._list = QListWidget()
        self._list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self._list)

        footer = QHBoxLayout()
        footer.setContentsMargins(
            metrics.padding_large, metrics.padding_small,
            metrics.padding_large, metrics.padding_small,
        )
        footer.addStretch()
        done_button = QPushButton("Done")
        done_button.clicked.connect(self.done_clicked.emit)
        footer.addWidget(done_button)
        layout.addLayout(footer)

    def show_items(self, items: List[SuggestionItem], selected_count: int) -> None:
        """Render the listed notes and show the popup above the anchor.

        Args:
            items: Notes annotated with selection membership
            selected_count: Number of selected notes
        """
        self._list.clear()
        for item in items:
            doc = item.document
            label = f"{'✓' if item.selected else '☐'}  📄 {doc.display_name}"
            if doc.folder_path:
                label += f"    {doc.folder_path}"
            row = QListWidgetItem(label)
            row.setData(DOC_ID_ROLE, doc.id)
            if item.selected:
                row.setForeground(QColor(theme.text_on_accent))
                row.setBackground(QColor(theme.interactive_accent))
            self._list.addItem(row)

        self._count_label.setText(f"{selected_count} selected")
        self.adjustSize()
        self._position_above_anchor()
        self.show()
        self.raise_()
        QApplication.instance().installEventFilter(self)

    def set_highlighted(self, index: int) -> None:
        """Move the keyboard highlight."""
        self._list.setCurrentRow(index)

    def close_popup(self) -> None:
        """Hide the popup and stop watching outside clicks."""
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)
        self.hide()
        self._list.clear()

    def _position_above_anchor(self) -> None:
        parent = self.parentWidget()
        if parent is None:
            return
        top_left = self._anchor.mapTo(parent, self._anchor.rect().topLeft())
        self.move(top_left.x(), max(0, top_left.y() - self.height() - 8))

    def _on_item_clicked(self, row: QListWidgetItem) -> None:
        doc_id = row.data(DOC_ID_ROLE)
        if doc_id:
            self.item_chosen.emit(doc_id)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        """Report clicks outside both the popup and the anchor input."""
        if event.type() == QEvent.Type.MouseButtonPress and self.isVisible():
            if isinstance(watched, QWidget) and not self._is_inside(watched):
                self.outside_clicked.emit()
        return False

    def _is_inside(self, widget: QWidget) -> bool:
        return (
            widget is self
            or widget is self._anchor
            or self.isAncestorOf(widget)
            or self._anchor.isAncestorOf(widget)
        )
