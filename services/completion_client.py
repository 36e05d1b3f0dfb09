"""
Completion clients.

A completion client sends one prompt and returns the generated text. It
distinguishes the provider rejecting a prompt as too long (PromptTooLongError)
from every other failure (RemoteServiceError) so callers can shrink and retry.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI, BadRequestError

from core.exceptions import ConfigurationError, PromptTooLongError, RemoteServiceError

logger = logging.getLogger(__name__)


class BaseCompletionClient(ABC):
    """
    Abstract base class for completion clients.

    All provider implementations must inherit from this class and implement
    complete().
    """

    def __init__(self, model: str, **kwargs):
        """
        Initialize the completion client.

        Args:
            model: Model name/identifier
            **kwargs: Additional provider-specific configuration
        """
        self.model = model
        self.config = kwargs

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        stop: List[str]
    ) -> str:
        """
        Perform a completion request.

        Args:
            prompt: The full prompt
            max_tokens: Maximum tokens generated
            temperature: Sampling temperature
            stop: Stop sequences

        Returns:
            The completion text

        Raises:
            PromptTooLongError: If the provider rejected the prompt as too long
            RemoteServiceError: On any other failure
        """

    async def close(self):
        """Release network resources."""


class OpenAICompletionClient(BaseCompletionClient):
    """
    Completion client for the OpenAI completions endpoint.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
        **kwargs
    ):
        """
        Initialize OpenAI completion client.

        Args:
            model: Completion model name (e.g., 'davinci-002')
            api_key: OpenAI API key
            base_url: API base URL
            timeout: Request timeout in seconds
            http_client: Optional shared httpx.AsyncClient

        Raises:
            ConfigurationError: If no API key is given
        """
        super().__init__(model, **kwargs)

        if not api_key:
            raise ConfigurationError("OPENAI_KEY")

        # retries are handled by the shrink loop, never by the SDK
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client
        )

    async def complete(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        stop: List[str]
    ) -> str:
        """
        Call the completions API.

        A 400 response means the prompt exceeded the model's context.
        """
        logger.debug("Requesting completion from %s (%d chars)", self.model, len(prompt))

        try:
            response = await self.client.completions.create(
                model=self.model,
                prompt=prompt,
                max_tokens=max_tokens,
                temperature=temperature,
                stop=stop
            )
        except BadRequestError as e:
            raise PromptTooLongError(str(e)) from e
        except APIStatusError as e:
            raise RemoteServiceError('completion', e.message, status_code=e.status_code) from e
        except APIConnectionError as e:
            raise RemoteServiceError('completion', f"Could not reach completion service: {e}") from e

        if not response.choices:
            raise RemoteServiceError('completion', "Response contained no choices")

        return response.choices[0].text

    async def close(self):
        """Close the HTTP client."""
        await self.client.close()
