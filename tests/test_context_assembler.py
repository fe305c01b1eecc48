"""Tests for context block assembly."""

import pytest

from notechat.orchestrator.context_assembler import (
    assemble_context,
    describe_selection,
    format_section,
)


@pytest.mark.asyncio
async def test_empty_selection_gives_empty_block(store) -> None:
    assert await assemble_context([], store) == ""


@pytest.mark.asyncio
async def test_sections_follow_selection_order(store) -> None:
    block = await assemble_context(["b.md", "Projects/plan.md"], store)

    assert block == (
        "Here are the selected notes:\n\n"
        "## b\n\nBeta notes\n\n---\n\n"
        "## plan\n\nThe plan\n\n---\n\n"
    )


@pytest.mark.asyncio
async def test_unreadable_note_is_skipped(store, vault) -> None:
    (vault / "b.md").unlink()

    block = await assemble_context(["a.md", "b.md"], store)

    assert block == "Here are the selected notes:\n\n## a\n\nAlpha notes\n\n---\n\n"


@pytest.mark.asyncio
async def test_all_notes_missing_keeps_intro(store) -> None:
    block = await assemble_context(["gone.md"], store)

    assert block == "Here are the selected notes:\n\n"


def test_format_section() -> None:
    assert format_section("todo", "- x") == "## todo\n\n- x\n\n---\n\n"


def test_describe_selection() -> None:
    assert describe_selection([]) == ""
    assert describe_selection(["plan"]) == "📄 plan"
    assert describe_selection(["a", "b"]) == "📚 2 notes (a, b)"
    assert describe_selection(["a", "b", "c"]) == "📚 3 notes (a, b...)"
