"""Set of notes the user has chosen to inject into the chat."""

import logging
from enum import Enum
from typing import Callable, Iterator, List, Optional


logger = logging.getLogger(__name__)


class SelectionChange(Enum):
    """What a toggle did."""

    ADDED = "added"
    REMOVED = "removed"


SelectionObserver = Callable[[str, SelectionChange], None]


class ReferenceSelection:
    """Insertion-ordered set of document identifiers with toggle semantics.

    Membership never holds duplicates. The order of insertion is kept for
    display and for context assembly.
    """

    def __init__(self, observer: Optional[SelectionObserver] = None) -> None:
        """Initialize an empty selection.

        Args:
            observer: Called with (doc_id, change) after every toggle
        """
        self._ids: List[str] = []
        self._observer = observer

    def set_observer(self, observer: Optional[SelectionObserver]) -> None:
        """Replace the toggle observer."""
        self._observer = observer

    def toggle(self, doc_id: str) -> SelectionChange:
        """Add the identifier if absent, remove it if present.

        Args:
            doc_id: Document identifier

        Returns:
            The change that was applied
        """
        if doc_id in self._ids:
            self._ids.remove(doc_id)
            change = SelectionChange.REMOVED
        else:
            self._ids.append(doc_id)
            change = SelectionChange.ADDED

        logger.debug("Reference %s %s", doc_id, change.value)
        if self._observer is not None:
            self._observer(doc_id, change)
        return change

    def clear(self) -> None:
        """Remove every identifier. Observers are not notified."""
        self._ids.clear()

    @property
    def ids(self) -> List[str]:
        """Selected identifiers in insertion order (copy)."""
        return list(self._ids)

    def is_empty(self) -> bool:
        return not self._ids

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)
