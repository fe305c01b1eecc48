"""Context assembler for selected notes.

Builds the single context block sent with every request from the notes
in the reference selection. The block is rebuilt from scratch every time
the selection changes; nothing is cached.

Block layout:
    Here are the selected notes:

    ## <name>

    <content>

    ---

    (one section per readable note, in selection order)
"""

import logging
from typing import Iterable, List, Sequence

from ..storage import display_name_for
from ..storage.document_store import DocumentStore, DocumentStoreError


logger = logging.getLogger(__name__)


CONTEXT_INTRO = "Here are the selected notes:\n\n"
SECTION_DELIMITER = "\n\n---\n\n"


def format_section(title: str, content: str) -> str:
    """Format one note as a titled context section."""
    return f"## {title}\n\n{content}{SECTION_DELIMITER}"


async def assemble_context(doc_ids: Iterable[str], store: DocumentStore) -> str:
    """Build the context block for the given notes.

    Notes that cannot be read (deleted since selection, unreadable) are
    skipped and logged; the remaining notes still make up the block.

    Args:
        doc_ids: Selected identifiers in insertion order
        store: Document store to read from

    Returns:
        Context block, or "" when no identifiers are given
    """
    doc_ids = list(doc_ids)
    if not doc_ids:
        return ""

    sections: List[str] = []
    for doc_id in doc_ids:
        try:
            content = await store.read_document(doc_id)
        except DocumentStoreError as e:
            logger.error("Error reading note %s: %s", doc_id, e)
            continue
        sections.append(format_section(display_name_for(doc_id), content))

    return CONTEXT_INTRO + "".join(sections)


def describe_selection(display_names: Sequence[str]) -> str:
    """Build the short summary shown in the context indicator.

    Presentation only; it never affects the context block.

    Args:
        display_names: Names of the selected notes, in selection order

    Returns:
        "📄 name" for one note, "📚 N notes (a, b...)" for several,
        "" for none
    """
    count = len(display_names)
    if count == 0:
        return ""
    if count == 1:
        return f"📄 {display_names[0]}"

    shown = ", ".join(display_names[:2])
    elision = "..." if count > 2 else ""
    return f"📚 {count} notes ({shown}{elision})"
