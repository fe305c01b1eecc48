"""Detects when the user is starting a note mention in the input.

Typing "@" at the start of the input or after whitespace opens the note
suggestions. The check is stateless: it is re-run on every text change
and the caller decides whether to open, keep or close the popup.
"""

TRIGGER_CHAR = "@"


def should_trigger(text: str, cursor_position: int) -> bool:
    """Check whether the note suggestions should be shown.

    True iff the character right before the cursor is the trigger
    character and it sits at a word boundary (start of text or after
    whitespace).

    Args:
        text: Current input text
        cursor_position: Cursor index into ``text``

    Returns:
        Whether to show the suggestions
    """
    cursor_position = min(cursor_position, len(text))
    if cursor_position <= 0:
        return False

    at_index = text.rfind(TRIGGER_CHAR, 0, cursor_position)
    if at_index == -1:
        return False

    # Trigger must be the last character before the cursor
    if at_index != cursor_position - 1:
        return False

    if at_index == 0:
        return True
    return text[at_index - 1].isspace()
