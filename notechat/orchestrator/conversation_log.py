"""Conversation log for the chat session.

Append-only list of role-tagged messages. Supplies the trailing window
that goes into every outbound request.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List


VALID_ROLES = ("user", "assistant")


@dataclass(frozen=True)
class Message:
    """A single message in the conversation."""

    role: str  # "user" or "assistant"
    content: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to API-compatible dict format."""
        return {"role": self.role, "content": self.content}


class ConversationLog:
    """Maintains the conversation history for a session."""

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append(self, role: str, content: str) -> Message:
        """Append a message.

        Args:
            role: "user" or "assistant"
            content: Message text

        Returns:
            The stored message

        Raises:
            ValueError: If the role is not user or assistant
        """
        if role not in VALID_ROLES:
            raise ValueError(f"Unsupported message role: {role!r}")
        msg = Message(role=role, content=content)
        self._messages.append(msg)
        return msg

    def add_user_message(self, content: str) -> Message:
        """Add a user message to the log."""
        return self.append("user", content)

    def add_assistant_message(self, content: str) -> Message:
        """Add an assistant message to the log."""
        return self.append("assistant", content)

    def window(self, size: int = 10) -> List[Message]:
        """Get the last ``size`` messages, oldest first.

        Args:
            size: Maximum number of messages

        Returns:
            List of messages
        """
        if size <= 0:
            return []
        return list(self._messages[-size:])

    def to_api_format(self, size: int = 10) -> List[Dict[str, str]]:
        """Convert the trailing window to API-compatible dicts."""
        return [msg.to_dict() for msg in self.window(size)]

    @property
    def messages(self) -> List[Message]:
        """All messages (copy)."""
        return list(self._messages)

    def clear(self) -> None:
        """Clear all messages from the log."""
        self._messages.clear()

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        """Return number of messages."""
        return len(self._messages)
