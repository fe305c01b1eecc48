"""Prompt builder for assembling chat requests.

This module assembles the outbound message list. It does NOT call the
backend - it only builds prompts.

Prompt assembly order:
1. SYSTEM PREAMBLE
2. CONVERSATION HISTORY (last 10 log entries)
3. NOTE CONTEXT (as a user message, only if non-empty)
4. CURRENT USER MESSAGE
"""

from typing import Dict, List, Optional

from ..config.settings import settings
from .conversation_log import ConversationLog


SYSTEM_PREAMBLE = (
    "You are a helpful AI assistant integrated into Obsidian, a note-taking app. "
    "Be concise but thorough in your responses. "
    "Help users with their questions and tasks."
)


class PromptBuilder:
    """Builds the message list for a chat request.

    The current user message is normally already in the log when the
    request is built, so it appears both inside the history window and
    as the final message.
    """

    def __init__(
        self,
        system_prompt: Optional[str] = None,
        history_window: Optional[int] = None,
    ) -> None:
        """Initialize the prompt builder.

        Args:
            system_prompt: Custom preamble, or None for the default
            history_window: Number of log entries to include, defaults to
                the configured history window
        """
        self._system_prompt = system_prompt or SYSTEM_PREAMBLE
        self._history_window = (
            settings.history_window if history_window is None else history_window
        )

    @property
    def system_prompt(self) -> str:
        """The system preamble."""
        return self._system_prompt

    def build_messages(
        self,
        log: ConversationLog,
        context_block: str,
        user_message: str,
    ) -> List[Dict[str, str]]:
        """Build the outbound message list.

        Args:
            log: Conversation log
            context_block: Assembled note context ("" for none)
            user_message: The message being sent

        Returns:
            List of role/content dicts
        """
        messages = [{"role": "system", "content": self._system_prompt}]
        messages.extend(log.to_api_format(self._history_window))

        if context_block:
            messages.append({"role": "user", "content": context_block})

        messages.append({"role": "user", "content": user_message})
        return messages


def build_request_messages(
    log: ConversationLog,
    context_block: str,
    user_message: str,
    window: Optional[int] = None,
) -> List[Dict[str, str]]:
    """Build the outbound message list with the default preamble."""
    return PromptBuilder(history_window=window).build_messages(
        log, context_block, user_message
    )
