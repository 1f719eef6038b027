"""
OpenAI Image Provider

Generates a product photo for a medicine through OpenAI's Images API.
Used to fill in imageUrl on records returned by remote lookups.
"""

from typing import Any, Optional

import openai
from openai import AsyncOpenAI

from medinfo.logs import get_logger
from medinfo.providers.llm_provider.exceptions import (
    LLMProviderAuthenticationError,
    LLMProviderEmptyResponseError,
    LLMProviderExecutionError,
    LLMProviderInitializationError,
    LLMProviderRateLimitError,
)

logger = get_logger(__name__)


class OpenAIImageProvider:
    """
    Image generation with the OpenAI Images API (dall-e-3 by default)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = "dall-e-3",
        size: str = "1024x1024",
        timeout: float = 30.0,
        client: Optional[Any] = None,
    ):
        """
        Initialize the image provider

        Args:
            api_key: OpenAI API key
            model_name: Image model identifier
            size: Requested image size
            timeout: Request timeout in seconds
            client: Pre-built AsyncOpenAI-compatible client (skips key validation)

        Raises:
            LLMProviderInitializationError: If no client is given and the API key is missing
        """
        self.model_name = model_name
        self.size = size

        if client is None:
            api_key = (api_key or "").strip()
            if not api_key:
                raise LLMProviderInitializationError("OpenAI API key is required for image generation")
            client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.async_client = client

    async def generate(self, prompt: str) -> str:
        """
        Generate one image and return its URL

        Raises:
            LLMProviderEmptyResponseError: If the response carries no image URL
            LLMProviderError: If the API call fails
        """
        try:
            response = await self.async_client.images.generate(
                model=self.model_name, prompt=prompt, n=1, size=self.size
            )
        except openai.AuthenticationError as e:
            raise LLMProviderAuthenticationError(
                f"OpenAI authentication failed: {e}", details={"model": self.model_name}
            )
        except openai.RateLimitError as e:
            raise LLMProviderRateLimitError(
                f"OpenAI rate limit hit: {e}", details={"model": self.model_name}
            )
        except openai.APIStatusError as e:
            raise LLMProviderExecutionError(
                f"OpenAI API error: {e.status_code}",
                details={"model": self.model_name, "status": e.status_code},
            )
        except openai.OpenAIError as e:
            raise LLMProviderExecutionError(
                f"OpenAI request failed: {e}", details={"model": self.model_name}
            )

        data = getattr(response, "data", None) or []
        url = getattr(data[0], "url", None) if data else None
        if not url:
            raise LLMProviderEmptyResponseError("No image in API response")

        logger.debug(f"Generated image with {self.model_name}")
        return url
