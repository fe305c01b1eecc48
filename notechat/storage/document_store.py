"""Read-only access to the notes that can be referenced from chat.

The chat core only needs two things from the host: a listing of the
available notes and a way to read one by identifier. VaultDocumentStore
implements both over a folder of markdown files.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from . import DocumentInfo, NOTE_SUFFIX


logger = logging.getLogger(__name__)


class DocumentStoreError(Exception):
    """Base error for document store failures."""

    def __init__(self, doc_id: str, message: str) -> None:
        super().__init__(f"{message}: {doc_id}")
        self.doc_id = doc_id


class DocumentNotFoundError(DocumentStoreError):
    """The requested document does not exist."""

    def __init__(self, doc_id: str) -> None:
        super().__init__(doc_id, "Document not found")


class DocumentReadError(DocumentStoreError):
    """The document exists but could not be read."""

    def __init__(self, doc_id: str, reason: str = "") -> None:
        message = f"Could not read document ({reason})" if reason else "Could not read document"
        super().__init__(doc_id, message)


class DocumentStore(ABC):
    """Abstract read-only document store.

    Implementations must be safe to call repeatedly; callers do not cache.
    """

    @abstractmethod
    def list_documents(self) -> List[DocumentInfo]:
        """List all currently available documents.

        Returns:
            DocumentInfo records in display order
        """
        pass

    @abstractmethod
    async def read_document(self, doc_id: str) -> str:
        """Read the full text of a document.

        Args:
            doc_id: Document identifier

        Returns:
            Document text

        Raises:
            DocumentNotFoundError: If the document does not exist
            DocumentReadError: If the document could not be read
        """
        pass

    def get_document(self, doc_id: str) -> Optional[DocumentInfo]:
        """Look up a listed document by identifier.

        Args:
            doc_id: Document identifier

        Returns:
            DocumentInfo if listed, None otherwise
        """
        for info in self.list_documents():
            if info.id == doc_id:
                return info
        return None


class VaultDocumentStore(DocumentStore):
    """Document store over a folder of markdown notes.

    Identifiers are POSIX paths relative to the vault root. Hidden
    folders (".obsidian", ".git", ...) are skipped.
    """

    def __init__(self, root: Path) -> None:
        """Initialize the store.

        Args:
            root: Vault folder
        """
        self._root = Path(root).expanduser()

    @property
    def root(self) -> Path:
        """Vault folder."""
        return self._root

    def list_documents(self) -> List[DocumentInfo]:
        """List markdown notes under the vault, sorted by identifier."""
        if not self._root.is_dir():
            logger.warning("Vault folder does not exist: %s", self._root)
            return []

        doc_ids = []
        for path in self._root.rglob(f"*{NOTE_SUFFIX}"):
            relative = path.relative_to(self._root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if not path.is_file():
                continue
            doc_ids.append(relative.as_posix())

        return [DocumentInfo.from_id(doc_id) for doc_id in sorted(doc_ids)]

    def _resolve(self, doc_id: str) -> Path:
        """Map an identifier to a file inside the vault.

        Raises:
            DocumentNotFoundError: If the path is outside the vault or missing
        """
        root = self._root.resolve()
        path = (root / doc_id).resolve()
        if root != path and root not in path.parents:
            raise DocumentNotFoundError(doc_id)
        if not path.is_file():
            raise DocumentNotFoundError(doc_id)
        return path

    async def read_document(self, doc_id: str) -> str:
        """Read a note's text.

        Args:
            doc_id: Vault-relative path

        Returns:
            Note content

        Raises:
            DocumentNotFoundError: If the note does not exist
            DocumentReadError: If the note could not be read or decoded
        """
        path = self._resolve(doc_id)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentNotFoundError(doc_id) from e
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(doc_id, str(e)) from e
