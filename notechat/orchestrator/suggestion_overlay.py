"""State machine for the note suggestion popup.

The popup is either CLOSED or OPEN. At most one instance exists: opening
while already open first tears down the current instance. The widget
layer renders whatever this object says and forwards user actions to it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional

from ..storage import DocumentInfo


logger = logging.getLogger(__name__)


class OverlayState(Enum):
    """Popup state."""

    CLOSED = "closed"
    OPEN = "open"


class CloseReason(Enum):
    """Why the popup was closed."""

    DISMISSED = "dismissed"  # Escape
    SELECTION = "selection"  # An item was toggled
    DONE = "done"  # Done button
    SPACE = "space"  # Space typed, mention abandoned
    OUTSIDE = "outside"  # Click outside popup and input
    INPUT_CHANGED = "input_changed"  # Trigger no longer before the cursor
    REPLACED = "replaced"  # Torn down by a new open
    TEARDOWN = "teardown"  # Session closed


# Closing for these reasons removes the trigger character from the input
_STRIPS_TRIGGER = frozenset({CloseReason.SELECTION, CloseReason.DONE})

KEY_ESCAPE = "Escape"
KEY_UP = "ArrowUp"
KEY_DOWN = "ArrowDown"
KEY_SPACE = " "


@dataclass(frozen=True)
class SuggestionItem:
    """A listed note and whether it is currently selected."""

    document: DocumentInfo
    selected: bool


def strip_trigger_character(text: str) -> str:
    """Remove the trigger character from the input text.

    Assumes the trigger is still the last character. If the user moved
    the cursor or kept typing, this removes the wrong character.
    """
    return text[:-1]


class SuggestionOverlay:
    """Explicit open/closed state of the suggestion popup."""

    def __init__(
        self,
        on_change: Optional[Callable[["SuggestionOverlay"], None]] = None,
    ) -> None:
        """Initialize a closed overlay.

        Args:
            on_change: Called after every open and close
        """
        self._state = OverlayState.CLOSED
        self._items: List[SuggestionItem] = []
        self._instance = 0
        self._highlighted = -1
        self._last_close_reason: Optional[CloseReason] = None
        self._on_change = on_change

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is OverlayState.OPEN

    @property
    def instance(self) -> int:
        """Number of the current (or last) popup instance; 0 before the first open."""
        return self._instance

    @property
    def items(self) -> List[SuggestionItem]:
        """Listed notes of the open popup (empty when closed)."""
        return list(self._items)

    @property
    def selected_count(self) -> int:
        return sum(1 for item in self._items if item.selected)

    @property
    def highlighted_index(self) -> int:
        """Index of the keyboard-highlighted item, -1 for none."""
        return self._highlighted

    @property
    def last_close_reason(self) -> Optional[CloseReason]:
        return self._last_close_reason

    def open(self, documents: Iterable[DocumentInfo], selected_ids: Iterable[str]) -> bool:
        """Open a new popup instance listing the documents.

        Any open instance is closed first. With no documents the popup
        stays closed.

        Args:
            documents: Available notes
            selected_ids: Identifiers currently in the selection

        Returns:
            True if the popup is now open
        """
        self.close(CloseReason.REPLACED)

        documents = list(documents)
        if not documents:
            return False

        selected = set(selected_ids)
        self._items = [SuggestionItem(doc, doc.id in selected) for doc in documents]
        self._instance += 1
        self._highlighted = -1
        self._state = OverlayState.OPEN
        logger.debug("Suggestion popup #%d opened with %d notes", self._instance, len(self._items))
        self._notify()
        return True

    def close(self, reason: CloseReason) -> bool:
        """Close the popup.

        Args:
            reason: Why it is closing

        Returns:
            True if it was open
        """
        if self._state is OverlayState.CLOSED:
            return False

        self._state = OverlayState.CLOSED
        self._items = []
        self._highlighted = -1
        self._last_close_reason = reason
        logger.debug("Suggestion popup #%d closed (%s)", self._instance, reason.value)
        self._notify()
        return True

    @staticmethod
    def strips_trigger(reason: CloseReason) -> bool:
        """Whether closing for ``reason`` removes the trigger character."""
        return reason in _STRIPS_TRIGGER

    def handle_key(self, key: str) -> bool:
        """Process a key pressed in the input while the popup is open.

        Escape closes the popup, the arrow keys move the highlight and a
        space closes it without touching the selection.

        Args:
            key: Key name ("Escape", "ArrowUp", "ArrowDown", " ", ...)

        Returns:
            True if the key was consumed and must not reach the input
        """
        if not self.is_open:
            return False

        if key == KEY_ESCAPE:
            self.close(CloseReason.DISMISSED)
            return True
        if key in (KEY_UP, KEY_DOWN):
            self._move_highlight(1 if key == KEY_DOWN else -1)
            return True
        if key == KEY_SPACE:
            # The space itself is still typed
            self.close(CloseReason.SPACE)
            return False
        return False

    def highlighted_item(self) -> Optional[SuggestionItem]:
        """Item under the keyboard highlight, if any."""
        if 0 <= self._highlighted < len(self._items):
            return self._items[self._highlighted]
        return None

    def _move_highlight(self, step: int) -> None:
        if not self._items:
            return
        if self._highlighted < 0:
            self._highlighted = 0 if step > 0 else len(self._items) - 1
        else:
            self._highlighted = (self._highlighted + step) % len(self._items)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
