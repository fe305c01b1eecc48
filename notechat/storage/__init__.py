"""Storage module for the notes that can be referenced from chat.

This module holds the record shared by the document store, the
suggestion popup and the context summary:
- DocumentInfo: a listed note (identifier, display name, folder)
"""

from dataclasses import dataclass
from typing import Optional
from pathlib import PurePosixPath


NOTE_SUFFIX = ".md"


def display_name_for(doc_id: str) -> str:
    """Derive the display name of a note from its identifier.

    The file name with the first ".md" removed, e.g. "Projects/plan.md"
    becomes "plan".

    Args:
        doc_id: Vault-relative POSIX path

    Returns:
        Display name
    """
    return PurePosixPath(doc_id).name.replace(NOTE_SUFFIX, "", 1)


def folder_for(doc_id: str) -> Optional[str]:
    """Return the folder part of an identifier, or None at the vault root."""
    if "/" not in doc_id:
        return None
    return doc_id[: doc_id.rindex("/")]


@dataclass(frozen=True)
class DocumentInfo:
    """A note available in the document store."""

    id: str
    display_name: str
    folder_path: Optional[str] = None

    @classmethod
    def from_id(cls, doc_id: str) -> "DocumentInfo":
        """Create a DocumentInfo with names derived from the identifier.

        Args:
            doc_id: Vault-relative POSIX path

        Returns:
            New DocumentInfo instance
        """
        return cls(
            id=doc_id,
            display_name=display_name_for(doc_id),
            folder_path=folder_for(doc_id),
        )

