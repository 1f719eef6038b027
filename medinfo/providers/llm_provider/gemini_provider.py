"""
Gemini Provider Implementation

This module implements the LLM provider interface using Google's Gemini
generative models through the google-generativeai SDK.
"""

import asyncio
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

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


class GeminiProvider(LLMProvider):
    """
    Gemini provider implementation

    The SDK client is synchronous, so calls run in a worker thread.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[LLMConfig] = None,
        model_name: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the Gemini provider

        Args:
            api_key: Gemini API key
            config: Complete LLMConfig object (takes precedence)
            model_name: Model name (used if config not provided)
            **kwargs: Additional LLMConfig parameters

        Raises:
            LLMProviderInitializationError: If API key or model name is missing
        """
        self.api_key = (api_key or "").strip()
        if not self.api_key:
            raise LLMProviderInitializationError("Gemini API key is required")

        if config is None:
            if not model_name:
                raise LLMProviderInitializationError("Gemini model name is required")
            config = LLMConfig(model_name=model_name, **kwargs)

        super().__init__(config)

        genai.configure(api_key=self.api_key)

    async def execute(
        self, prompt: str, system_prompt: Optional[str] = None, **kwargs
    ) -> LLMResponse:
        """
        Generate text for the prompt with the configured Gemini model

        Args:
            prompt: User prompt
            system_prompt: Optional system instruction
            **kwargs: Generation overrides (temperature, max_tokens, top_p)

        Returns:
            LLMResponse with the generated text
        """
        model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=system_prompt,
            generation_config=self._generation_config(**kwargs),
        )

        try:
            response = await asyncio.to_thread(
                model.generate_content,
                prompt,
                request_options={"timeout": self.config.timeout},
            )
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as e:
            raise LLMProviderAuthenticationError(
                f"Gemini authentication failed: {e}", details={"model": self.model_name}
            )
        except google_exceptions.ResourceExhausted as e:
            raise LLMProviderRateLimitError(
                f"Gemini quota exhausted: {e}", details={"model": self.model_name}
            )
        except google_exceptions.GoogleAPIError as e:
            raise LLMProviderExecutionError(
                f"Gemini API error: {e}",
                details={"model": self.model_name, "status": getattr(e, "code", None)},
            )
        except Exception as e:
            raise LLMProviderExecutionError(
                f"Gemini request failed: {e}", details={"model": self.model_name}
            )

        content = self._extract_text(response)
        if not content.strip():
            raise LLMProviderEmptyResponseError(
                "No content received from Gemini", details={"model": self.model_name}
            )

        usage = getattr(response, "usage_metadata", None)
        candidates = getattr(response, "candidates", None) or []
        finish_reason = getattr(candidates[0], "finish_reason", None) if candidates else None

        return LLMResponse(
            content=content,
            model=self.model_name,
            provider_type=self.provider_type,
            prompt_tokens=getattr(usage, "prompt_token_count", None),
            completion_tokens=getattr(usage, "candidates_token_count", None),
            total_tokens=getattr(usage, "total_token_count", None),
            finish_reason=str(finish_reason) if finish_reason is not None else None,
        )

    def _generation_config(self, **kwargs) -> genai.GenerationConfig:
        """Build generation parameters. Priority: kwargs > config"""
        params = {"temperature": kwargs.get("temperature", self.config.temperature)}

        max_tokens = kwargs.get("max_tokens", self.config.max_tokens)
        if max_tokens is not None:
            params["max_output_tokens"] = max_tokens

        top_p = kwargs.get("top_p", self.config.top_p)
        if top_p is not None:
            params["top_p"] = top_p

        return genai.GenerationConfig(**params)

    @staticmethod
    def _extract_text(response) -> str:
        # response.text raises when the candidate has no text parts (e.g. blocked)
        try:
            return response.text or ""
        except (ValueError, AttributeError, IndexError):
            return ""
