"""
Configuration settings for the MedInfo medicine lookup assistant.

Simple configuration using Pydantic BaseSettings to read from .env file.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field
import os


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # Provider Selection
    # Used by: core/resolver.py (create_resolver), api/server.py
    llm_provider: str = Field(
        default="gemini",
        description="Registered generative-text provider used for remote medicine lookups (gemini or openai).",
    )

    # Gemini API Configuration
    # Used by: providers/llm_provider/gemini_provider.py
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API Key loaded from .env. Required for remote lookups with the gemini provider.",
    )
    gemini_model_names: List[str] = Field(
        default_factory=lambda: [
            "gemini-flash-latest",
            "gemini-1.5-flash",
            "gemini-1.5-flash-latest",
        ],
        description="Gemini model identifiers tried in order; the first successful one wins.",
    )

    # OpenAI API Configuration
    # Used by: providers/llm_provider/openai_provider.py
    openai_api_key: str = Field(
        default="",
        description="OpenAI API Key loaded from .env. Required for remote lookups with the openai provider.",
    )
    openai_model_names: List[str] = Field(
        default_factory=lambda: ["gpt-4-turbo", "gpt-4o-mini"],
        description="OpenAI model identifiers tried in order; the first successful one wins.",
    )

    # Generation Parameters
    llm_temperature: float = Field(
        default=0.2,
        description="Creativity vs consistency (0.0-2.0). Lower = more deterministic.",
    )

    # Lookup Configuration
    # Used by: core/resolver.py, core/router.py
    lookup_timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound for one remote lookup, including all model fallbacks.",
    )
    lookup_mode: str = Field(
        default="remote_then_local",
        description="Data sources consulted for medicine lookups: local, remote or remote_then_local.",
    )
    medicine_lookup_url: str = Field(
        default="",
        description="When set, lookups go to this deployed /api/medicine-lookup endpoint instead of in-process.",
    )
    medicine_lookup_token: str = Field(
        default="",
        description="Optional bearer token sent to medicine_lookup_url.",
    )

    # Medicine Image Generation
    # Used by: core/resolver.py (create_resolver), providers/image_provider.py
    generate_medicine_images: bool = Field(
        default=False,
        description="Generate a product photo (OpenAI Images API) for medicines found by remote lookups.",
    )
    image_model_name: str = Field(
        default="dall-e-3",
        description="OpenAI image model used for medicine product photos.",
    )
    image_size: str = Field(
        default="1024x1024",
        description="Requested size of generated medicine images.",
    )
    image_timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound for one image generation; on expiry the record is returned without an image.",
    )

    # Conversation Timing
    # Used by: core/session.py
    follow_up_delay_seconds: float = Field(
        default=0.5,
        description="Delay before the packaging follow-up message after a successful lookup.",
    )
    image_ack_delay_seconds: float = Field(
        default=0.8,
        description="Delay before acknowledging an uploaded image.",
    )

    # Local Server Configuration
    # Used by: api/server.py
    server_host: str = Field(
        default="0.0.0.0",
        description="Bind address for the local medicine lookup server.",
    )
    server_port: int = Field(
        default=3003,
        description="Port for the local medicine lookup server.",
    )

    # Application Configuration
    app_name: str = "MedInfo Medicine Assistant"
    app_version: str = "1.0.0"
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode for detailed logging.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for console and file handlers.",
    )
    log_dir: str = Field(
        default="logs",
        description="Directory (relative to project root) for rotating JSON log files.",
    )

    class Config:
        """Pydantic configuration."""

        # Get the project root directory (parent of medinfo directory)
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        env_file = os.path.join(project_root, ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def api_key_for(self, provider: Optional[str] = None) -> str:
        """Return the credential configured for a provider (defaults to llm_provider)."""
        provider = (provider or self.llm_provider).lower()
        if provider == "openai":
            return self.openai_api_key.strip()
        return self.gemini_api_key.strip()

    def model_names_for(self, provider: Optional[str] = None) -> List[str]:
        """Return the ordered model fallback list for a provider."""
        provider = (provider or self.llm_provider).lower()
        if provider == "openai":
            return list(self.openai_model_names)
        return list(self.gemini_model_names)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
