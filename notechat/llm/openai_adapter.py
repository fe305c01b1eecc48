"""OpenAI adapter implementation."""

import logging
from typing import List, Dict, Optional

from openai import (
    AsyncOpenAI,
    APIConnectionError,
    APIError,
    APIStatusError,
    AuthenticationError,
    RateLimitError,
)

from .base_adapter import LLMAdapter, ChatBackendError, ErrorCategory
from ..config.settings import settings


logger = logging.getLogger(__name__)


class OpenAIAdapter(LLMAdapter):
    """Adapter for OpenAI chat completions.

    This adapter is stateless - it receives a prompt and returns a response.
    No retries are attempted; failures are classified and raised.
    """

    def __init__(
        self,
        api_key: str,
        organization_id: str = "",
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        """Initialize the OpenAI adapter.

        Args:
            api_key: OpenAI API key
            organization_id: Optional organization ID (sent as OpenAI-Organization)
            client: Preconfigured client, mainly for tests

        Raises:
            ValueError: If no API key is given
        """
        if not api_key and client is None:
            raise ValueError("An OpenAI API key is required.")
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            organization=organization_id or None,
            max_retries=0,
        )

    @property
    def provider(self) -> str:
        """Get the provider name."""
        return "openai"

    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: str,
    ) -> str:
        """Get a complete response from OpenAI.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            model: OpenAI model ID

        Returns:
            Complete response text ("" if the reply had no content)

        Raises:
            ChatBackendError: Classified request failure
        """
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=settings.max_tokens,
                temperature=settings.temperature,
                stream=False,
            )
        except AuthenticationError as e:
            raise ChatBackendError(
                f"OpenAI API error (401): {e}", ErrorCategory.UNAUTHORIZED, 401
            ) from e
        except RateLimitError as e:
            raise ChatBackendError(
                f"OpenAI API error (429): {e}", ErrorCategory.RATE_LIMITED, 429
            ) from e
        except APIConnectionError as e:
            # Also covers APITimeoutError
            raise ChatBackendError(
                f"OpenAI network error: {e}", ErrorCategory.CONNECTIVITY
            ) from e
        except APIStatusError as e:
            raise ChatBackendError(
                f"OpenAI API error ({e.status_code}): {e}",
                ErrorCategory.OTHER,
                e.status_code,
            ) from e
        except APIError as e:
            raise ChatBackendError(f"OpenAI API error: {e}") from e

        if not response.choices:
            logger.warning("OpenAI returned no choices for model %s", model)
            return ""
        return response.choices[0].message.content or ""
