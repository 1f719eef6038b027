"""
LLM Provider Factory

This module provides factory functions for creating LLM provider instances.
It supports:
- Multiple provider types (Gemini, OpenAI)
- Provider registry management
- Default provider settings from config
"""

from typing import Dict, Optional, Type

from medinfo.config import get_settings
from medinfo.logs import get_logger
from .base import LLMProvider, LLMConfig
from .exceptions import LLMProviderError, LLMProviderInitializationError
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

logger = get_logger(__name__)


# Provider registry - maps provider names to their implementation classes
PROVIDER_REGISTRY: Dict[str, Type[LLMProvider]] = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
}


def register_provider(name: str, provider_class: Type[LLMProvider]) -> None:
    """
    Register a new provider implementation

    Args:
        name: Provider name/identifier (e.g., "gemini", "custom")
        provider_class: Provider class that implements LLMProvider interface
    """
    name = name.lower()
    if name in PROVIDER_REGISTRY:
        logger.warning(f"Overwriting existing provider registration: {name}")

    PROVIDER_REGISTRY[name] = provider_class
    logger.info(f"Registered provider: {name} -> {provider_class.__name__}")


def unregister_provider(name: str) -> None:
    """Remove a provider registration if present."""
    PROVIDER_REGISTRY.pop(name.lower(), None)


def get_available_providers() -> list[str]:
    """
    Get list of available provider names

    Returns:
        List of registered provider identifiers
    """
    return list(PROVIDER_REGISTRY.keys())


def create_llm_provider(
    provider_type: Optional[str] = None,
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
    config: Optional[LLMConfig] = None,
    **kwargs,
) -> LLMProvider:
    """
    Factory function to create an LLM provider instance

    Args:
        provider_type: Provider identifier (defaults to settings.llm_provider)
        api_key: Provider credential (defaults to the configured key for the provider)
        model_name: Model name (defaults to the first configured model)
        config: Complete LLMConfig object (takes precedence over model_name/kwargs)
        **kwargs: Additional LLMConfig parameters (temperature, timeout, ...)

    Returns:
        Configured LLM provider instance

    Raises:
        LLMProviderInitializationError: If the provider type is not supported or
            the credential or model is missing
        LLMProviderError: If the provider fails to initialize for another reason

    Examples:
        provider = create_llm_provider("gemini", api_key=key, model_name="gemini-1.5-flash")
        response = await provider.execute("Provide info for: Dolo 650", system_prompt=...)
    """
    settings = get_settings()

    provider_type = (provider_type or settings.llm_provider or "gemini").lower()

    if provider_type not in PROVIDER_REGISTRY:
        supported = ", ".join(get_available_providers())
        error_msg = (
            f"Unsupported LLM provider: '{provider_type}'. "
            f"Supported providers: {supported}"
        )
        logger.error(error_msg)
        raise LLMProviderInitializationError(error_msg)

    if api_key is None:
        api_key = settings.api_key_for(provider_type)
    if model_name is None and config is None:
        configured_models = settings.model_names_for(provider_type)
        model_name = configured_models[0] if configured_models else None

    provider_class = PROVIDER_REGISTRY[provider_type]

    try:
        provider = provider_class(
            api_key=api_key,
            config=config,
            model_name=model_name,
            **kwargs,
        )
    except LLMProviderInitializationError:
        raise
    except Exception as e:
        error_msg = f"Failed to initialize {provider_type} provider: {str(e)}"
        logger.error(error_msg, exc_info=True)
        raise LLMProviderError(error_msg)

    logger.debug(f"Created {provider_type} provider for model {provider.model_name}")
    return provider
