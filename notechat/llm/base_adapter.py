"""Base adapter interface for the chat backend."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Dict, Optional


class ErrorCategory(Enum):
    """Classification of backend failures shown to the user."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    CONNECTIVITY = "connectivity"
    OTHER = "other"


USER_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.UNAUTHORIZED: "Invalid API key. Please check your OpenAI API key in settings.",
    ErrorCategory.RATE_LIMITED: "Rate limit exceeded. Please wait a moment and try again.",
    ErrorCategory.CONNECTIVITY: "Network error. Please check your internet connection.",
    ErrorCategory.OTHER: "Sorry, I encountered an error. Please try again.",
}


class ChatBackendError(Exception):
    """A failed chat request, already classified."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.OTHER,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code


def classify_error(error: BaseException) -> ErrorCategory:
    """Classify any exception raised by a chat request.

    ChatBackendError carries its own category. Other exceptions are
    classified by their message: "401" means unauthorized, "429" rate
    limited and "network" a connectivity problem.

    Args:
        error: The raised exception

    Returns:
        ErrorCategory
    """
    if isinstance(error, ChatBackendError):
        return error.category

    text = str(error)
    if "401" in text:
        return ErrorCategory.UNAUTHORIZED
    if "429" in text:
        return ErrorCategory.RATE_LIMITED
    if "network" in text.lower():
        return ErrorCategory.CONNECTIVITY
    return ErrorCategory.OTHER


def user_message_for(category: ErrorCategory) -> str:
    """Return the chat message shown for a failure category."""
    return USER_MESSAGES[category]


class LLMAdapter(ABC):
    """Abstract base class for chat backends.

    Adapters are stateless - they receive the full message list and
    return one reply. They do not keep conversation history.
    """

    @abstractmethod
    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: str,
    ) -> str:
        """Get a complete response (non-streaming).

        Args:
            messages: List of message dicts with 'role' and 'content' keys,
                system preamble included
            model: Model identifier

        Returns:
            Response text, possibly empty

        Raises:
            ChatBackendError: If the request failed
        """
        pass

    @property
    @abstractmethod
    def provider(self) -> str:
        """Get the provider name."""
        pass
