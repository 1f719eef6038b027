"""
LLM Provider Module

This module provides a single interface for the generative-text providers
used to resolve medicine names into structured data.

Quick Start:
    from medinfo.providers.llm_provider import create_llm_provider

    provider = create_llm_provider(
        provider_type="gemini",
        api_key="...",
        model_name="gemini-1.5-flash",
    )

    response = await provider.execute(
        prompt="Provide info for: Dolo 650",
        system_prompt="System instructions"
    )
"""

# Base classes and interfaces
from .base import (
    LLMProvider,
    LLMConfig,
    LLMResponse,
)

# Factory functions
from .factory import (
    PROVIDER_REGISTRY,
    create_llm_provider,
    register_provider,
    unregister_provider,
    get_available_providers,
)

# Provider implementations
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

# Exceptions
from .exceptions import (
    LLMProviderError,
    LLMProviderInitializationError,
    LLMProviderExecutionError,
    LLMProviderAuthenticationError,
    LLMProviderRateLimitError,
    LLMProviderEmptyResponseError,
)

__all__ = [
    # Base classes
    "LLMProvider",
    "LLMConfig",
    "LLMResponse",
    # Factory functions
    "PROVIDER_REGISTRY",
    "create_llm_provider",
    "register_provider",
    "unregister_provider",
    "get_available_providers",
    # Providers
    "GeminiProvider",
    "OpenAIProvider",
    # Exceptions
    "LLMProviderError",
    "LLMProviderInitializationError",
    "LLMProviderExecutionError",
    "LLMProviderAuthenticationError",
    "LLMProviderRateLimitError",
    "LLMProviderEmptyResponseError",
]
