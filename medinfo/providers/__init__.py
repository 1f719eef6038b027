"""
Providers module for generative services

This module provides access to the LLM providers used for remote
medicine lookups and the image provider used for product photos.
"""

from .llm_provider import create_llm_provider, GeminiProvider, OpenAIProvider
from .image_provider import OpenAIImageProvider

__all__ = [
    "create_llm_provider",
    "GeminiProvider",
    "OpenAIProvider",
    "OpenAIImageProvider",
]
