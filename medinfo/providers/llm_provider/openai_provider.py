"""
OpenAI Provider Implementation

This module implements the LLM provider interface using OpenAI's
Chat Completions API.
"""

from typing import List, Dict, Any, Optional

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from medinfo.logs import get_logger
from .base import LLMProvider, LLMConfig, LLMResponse
from .exceptions import (
    LLMProviderAuthenticationError,
    LLMProviderEmptyResponseError,
    LLMProviderExecutionError,
    LLMProviderInitializationError,
    LLMProviderRateLimitError,
)

logger = get_logger(__name__)


class OpenAIProvider(LLMProvider):
    """
    OpenAI provider implementation using Chat Completions
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[LLMConfig] = None,
        model_name: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the OpenAI provider

        Args:
            api_key: OpenAI API key
            config: Complete LLMConfig object (takes precedence)
            model_name: Model name (used if config not provided)
            **kwargs: Additional LLMConfig parameters

        Raises:
            LLMProviderInitializationError: If API key or model name is missing
        """
        self.api_key = (api_key or "").strip()
        if not self.api_key:
            raise LLMProviderInitializationError("OpenAI API key is required")

        if config is None:
            if not model_name:
                raise LLMProviderInitializationError("OpenAI model name is required")
            config = LLMConfig(model_name=model_name, **kwargs)

        super().__init__(config)

        # Retries are disabled: the resolver moves on to the next model instead
        self.async_client = AsyncOpenAI(
            api_key=self.api_key, timeout=self.config.timeout, max_retries=0
        )

    async def execute(
        self, prompt: str, system_prompt: Optional[str] = None, **kwargs
    ) -> LLMResponse:
        """
        Execute a chat completion for the prompt

        Args:
            prompt: User input/prompt
            system_prompt: Optional system instructions
            **kwargs: Generation overrides

        Returns:
            LLMResponse with the generated text
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        return await self.execute_chat_completion(messages, **kwargs)

    async def execute_chat_completion(
        self, messages: List[Dict[str, str]], **kwargs
    ) -> LLMResponse:
        """
        Execute a Chat Completion API call

        Args:
            messages: List of message dicts with 'role' and 'content'
            **kwargs: Additional parameters (overrides config defaults)

        Returns:
            LLMResponse with the generated text
        """
        params = {
            "model": kwargs.get("model", self.model_name),
            "messages": messages,
        }
        params.update(self._get_generation_params(**kwargs))

        try:
            response: ChatCompletion = await self.async_client.chat.completions.create(
                **params
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

        if not response.choices or not response.choices[0].message:
            raise LLMProviderEmptyResponseError("No content in API response")

        content = response.choices[0].message.content or ""
        if not content.strip():
            raise LLMProviderEmptyResponseError("No content in API response")

        return LLMResponse(
            content=content,
            model=response.model,
            provider_type=self.provider_type,
            prompt_tokens=response.usage.prompt_tokens if response.usage else None,
            completion_tokens=response.usage.completion_tokens
            if response.usage
            else None,
            total_tokens=response.usage.total_tokens if response.usage else None,
            finish_reason=response.choices[0].finish_reason,
            response_id=response.id,
            metadata={"created": response.created},
        )

    def _get_generation_params(self, **kwargs) -> Dict[str, Any]:
        """
        Build generation parameters from config and kwargs

        Priority: kwargs > config > defaults
        """
        params = {}

        if "temperature" in kwargs:
            params["temperature"] = kwargs["temperature"]
        elif self.config.temperature is not None:
            params["temperature"] = self.config.temperature

        if "max_tokens" in kwargs:
            params["max_tokens"] = kwargs["max_tokens"]
        elif self.config.max_tokens is not None:
            params["max_tokens"] = self.config.max_tokens

        if "top_p" in kwargs:
            params["top_p"] = kwargs["top_p"]
        elif self.config.top_p is not None:
            params["top_p"] = self.config.top_p

        return params
