"""
Abstract LLM Provider Interface

This module provides an abstract interface for generative-text providers,
allowing the medicine resolver to switch between vendors and models through
configuration only.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from medinfo.logs import get_logger

logger = get_logger(__name__)


@dataclass
class LLMConfig:
    """
    Configuration container for LLM provider settings
    """

    # Model configuration
    model_name: str

    # Generation parameters
    temperature: float = 0.2
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None

    # API-specific settings
    timeout: float = 30.0  # Request timeout in seconds

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for logging/serialization"""
        return {
            "model_name": self.model_name,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "timeout": self.timeout,
        }


@dataclass
class LLMResponse:
    """
    Standardized response object from LLM providers
    """

    content: str
    model: str
    provider_type: str

    # Usage statistics
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    # Response metadata
    finish_reason: Optional[str] = None
    response_id: Optional[str] = None

    metadata: Dict[str, Any] = field(default_factory=dict)


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers

    Every implementation turns one (system instruction, user prompt) pair into
    generated text for a single configured model.
    """

    def __init__(self, config: LLMConfig):
        """
        Initialize the LLM provider with configuration

        Args:
            config: LLMConfig object containing provider settings
        """
        self.config = config
        self.model_name = config.model_name
        self.provider_type = self.__class__.__name__.lower().replace("provider", "")

        logger.debug(
            f"Initialized {self.provider_type} provider - Model: {self.model_name}"
        )

    @abstractmethod
    async def execute(
        self, prompt: str, system_prompt: Optional[str] = None, **kwargs
    ) -> LLMResponse:
        """
        Execute an LLM call with the given prompt

        Args:
            prompt: The user prompt/input
            system_prompt: Optional system instructions
            **kwargs: Additional provider-specific arguments

        Returns:
            LLMResponse with the generated text

        Raises:
            LLMProviderExecutionError: If the provider call fails
            LLMProviderEmptyResponseError: If no text was generated
        """
        pass

    def get_model_info(self) -> Dict[str, Any]:
        """
        Get information about the LLM provider

        Returns:
            Dictionary with provider information and current configuration
        """
        return {
            "provider_type": self.provider_type,
            "model_name": self.model_name,
            "config": self.config.to_dict(),
        }
