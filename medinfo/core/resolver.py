"""
Remote Medicine Resolver

Resolves a medicine name into structured data by asking a generative-text
provider for a JSON description of the medicine.

Flow:
1. Validate configuration (credential, model list)
2. Try each configured model in order; the first successful call wins
3. Extract the first JSON object from the generated text
4. Normalize the payload into a MedicineRecord
5. Optionally attach a generated product image (never fails the lookup)

Every failure ends as a negative LookupResult with an error kind; raw
provider errors and model text are logged, never returned.
"""

import asyncio
import json
import re
from typing import Any, Callable, Dict, Optional, Sequence

from medinfo.config import Settings, get_settings
from medinfo.core.exceptions import (
    LookupConfigurationError,
    LookupParseError,
    LookupTransportError,
    MedicineLookupError,
)
from medinfo.core.sources import MedicineDataSource, result_from_envelope
from medinfo.logs import get_component_logger, time_execution
from medinfo.models import LookupErrorKind, LookupResult
from medinfo.prompts import (
    DEFAULT_DISCLAIMER,
    build_image_prompt,
    build_lookup_prompt,
    get_system_prompt,
)
from medinfo.providers.image_provider import OpenAIImageProvider
from medinfo.providers.llm_provider import (
    LLMProvider,
    LLMProviderEmptyResponseError,
    LLMProviderError,
    LLMProviderInitializationError,
    create_llm_provider,
)

ProviderFactory = Callable[..., LLMProvider]

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)

PROVIDER_LABELS = {"gemini": "Gemini", "openai": "OpenAI"}


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Return the first JSON object embedded in generated text.

    Code-fence markup is stripped first; any prose around the object is ignored.

    Raises:
        LookupParseError: If no JSON object can be decoded
    """
    if not text or not text.strip():
        raise LookupParseError("No content received from provider")

    cleaned = _CODE_FENCE.sub("", text).strip()
    decoder = json.JSONDecoder()

    start = cleaned.find("{")
    while start != -1:
        try:
            payload, _ = decoder.raw_decode(cleaned, start)
        except json.JSONDecodeError:
            start = cleaned.find("{", start + 1)
            continue
        if isinstance(payload, dict):
            return payload
        start = cleaned.find("{", start + 1)

    raise LookupParseError("Failed to parse medicine information")


class RemoteMedicineResolver(MedicineDataSource):
    """
    Medicine data source backed by a generative-text provider.

    The credential and model list are passed in explicitly; use
    create_resolver() to build one from application settings.
    """

    name = "remote"

    def __init__(
        self,
        api_key: str,
        provider_type: str = "gemini",
        model_names: Sequence[str] = ("gemini-flash-latest",),
        timeout_seconds: float = 30.0,
        temperature: float = 0.2,
        provider_factory: ProviderFactory = create_llm_provider,
        system_prompt: Optional[str] = None,
        image_provider: Optional[OpenAIImageProvider] = None,
        image_timeout_seconds: float = 30.0,
    ):
        """
        Initialize the resolver.

        Args:
            api_key: Credential for the generative-text provider.
            provider_type: Registered provider name.
            model_names: Model identifiers tried in order on failure.
            timeout_seconds: Bound on one whole lookup, fallbacks included.
            temperature: Generation temperature.
            provider_factory: Callable building a provider for one model.
            system_prompt: Overrides the default lookup instruction.
            image_provider: When set, found records without an image get a
                generated product photo.
            image_timeout_seconds: Bound on one image generation.
        """
        self.api_key = (api_key or "").strip()
        self.provider_type = provider_type.lower()
        self.model_names = [m for m in model_names if m]
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature
        self.provider_factory = provider_factory
        self.system_prompt = system_prompt or get_system_prompt()
        self.image_provider = image_provider
        self.image_timeout_seconds = image_timeout_seconds
        self.logger = get_component_logger("RemoteMedicineResolver")

    @property
    def provider_label(self) -> str:
        return PROVIDER_LABELS.get(self.provider_type, self.provider_type.capitalize())

    @time_execution("RemoteMedicineResolver", "Lookup")
    async def lookup(self, medicine_name: str) -> LookupResult:
        """
        Resolve a medicine name; never raises for lookup failures.

        Args:
            medicine_name: Free-text medicine name from the user.

        Returns:
            LookupResult (hit, miss with optional suggestion, or failure)
        """
        query = (medicine_name or "").strip()
        if not query:
            return LookupResult.miss(source=self.name)

        try:
            text = await asyncio.wait_for(
                self._generate(query), timeout=self.timeout_seconds
            )
            payload = extract_json_object(text)
            if "found" not in payload and "medicine" not in payload and payload.get("name"):
                # Bare medicine object without the envelope
                payload = {"found": True, "medicine": payload}
            result = result_from_envelope(payload, source=self.name)
            if result.disclaimer is None:
                result = result.model_copy(update={"disclaimer": DEFAULT_DISCLAIMER})

        except asyncio.TimeoutError:
            self.logger.warning(
                "Medicine lookup timed out",
                component="RemoteMedicineResolver",
                subcomponent="Lookup",
                medicine_name=query,
                timeout_seconds=self.timeout_seconds,
            )
            return LookupResult.failure(
                LookupErrorKind.TRANSPORT, "Medicine lookup timed out", source=self.name
            )

        except MedicineLookupError as e:
            self.logger.warning(
                "Medicine lookup failed",
                component="RemoteMedicineResolver",
                subcomponent="Lookup",
                medicine_name=query,
                error=e.message,
                error_kind=e.kind.value,
                cause=str(e.__cause__) if e.__cause__ else None,
            )
            return LookupResult.failure(e.kind, e.message, source=self.name)

        if result.found and self.image_provider is not None and not result.medicine.image_url:
            result = await self._attach_image(result)

        self.logger.info(
            "Medicine lookup completed",
            component="RemoteMedicineResolver",
            subcomponent="Lookup",
            medicine_name=query,
            found=result.found,
        )
        return result

    async def _generate(self, query: str) -> str:
        """
        Ask each configured model in turn; return the first generated text.

        Raises:
            LookupConfigurationError: Missing credential or models
            LookupTransportError: Every model failed
            LookupParseError: A model answered but produced no text
        """
        if not self.api_key:
            raise LookupConfigurationError(
                f"Server configuration error: Missing {self.provider_label} API key"
            )
        if not self.model_names:
            raise LookupConfigurationError(
                "Server configuration error: No models configured"
            )

        prompt = build_lookup_prompt(query)
        last_error: Optional[LLMProviderError] = None

        for model_name in self.model_names:
            try:
                provider = self.provider_factory(
                    self.provider_type,
                    api_key=self.api_key,
                    model_name=model_name,
                    temperature=self.temperature,
                    timeout=self.timeout_seconds,
                )
                response = await provider.execute(prompt, system_prompt=self.system_prompt)

            except LLMProviderInitializationError as e:
                raise LookupConfigurationError(f"Server configuration error: {e}")

            except LLMProviderEmptyResponseError as e:
                self.logger.warning(
                    "Provider returned no content",
                    component="RemoteMedicineResolver",
                    subcomponent="Generate",
                    model=model_name,
                    error=str(e),
                )
                raise LookupParseError("No content received from provider")

            except LLMProviderError as e:
                last_error = e
                self.logger.warning(
                    "Model failed, trying next",
                    component="RemoteMedicineResolver",
                    subcomponent="Generate",
                    model=model_name,
                    error=str(e),
                )
                continue

            self.logger.info(
                "Model answered",
                component="RemoteMedicineResolver",
                subcomponent="Generate",
                model=model_name,
                total_tokens=response.total_tokens,
            )
            return self._checked_text(response.content)

        raise LookupTransportError(
            f"AI API error: all {len(self.model_names)} model(s) failed"
            + (f" (last: {type(last_error).__name__})" if last_error else "")
        )

    async def _attach_image(self, result: LookupResult) -> LookupResult:
        """Add a generated product image to a found record; failures leave it without one."""
        record = result.medicine
        prompt = build_image_prompt(
            record.name,
            generic_name=record.generic_name or "",
            manufacturer=record.manufacturer,
            dosage_form=record.dosage_forms[0] if record.dosage_forms else "",
        )
        try:
            image_url = await asyncio.wait_for(
                self.image_provider.generate(prompt), timeout=self.image_timeout_seconds
            )
        except asyncio.TimeoutError:
            self.logger.warning(
                "Image generation timed out, continuing without image",
                component="RemoteMedicineResolver",
                subcomponent="AttachImage",
                medicine_name=record.name,
            )
            return result
        except LLMProviderError as e:
            self.logger.warning(
                "Image generation failed, continuing without image",
                component="RemoteMedicineResolver",
                subcomponent="AttachImage",
                medicine_name=record.name,
                error=str(e),
            )
            return result

        self.logger.info(
            "Medicine image generated",
            component="RemoteMedicineResolver",
            subcomponent="AttachImage",
            medicine_name=record.name,
        )
        return result.model_copy(
            update={"medicine": record.model_copy(update={"image_url": image_url})}
        )

    def _checked_text(self, text: str) -> str:
        try:
            extract_json_object(text)
        except LookupParseError:
            self.logger.error(
                "Failed to parse provider response",
                component="RemoteMedicineResolver",
                subcomponent="Generate",
                raw_text=(text or "")[:500],
            )
            raise
        return text


def create_resolver(
    settings: Optional[Settings] = None,
    provider_factory: ProviderFactory = create_llm_provider,
) -> RemoteMedicineResolver:
    """Build a resolver from application settings."""
    settings = settings or get_settings()
    image_provider = None
    if settings.generate_medicine_images:
        try:
            image_provider = OpenAIImageProvider(
                api_key=settings.openai_api_key,
                model_name=settings.image_model_name,
                size=settings.image_size,
                timeout=settings.image_timeout_seconds,
            )
        except LLMProviderInitializationError as e:
            get_component_logger("RemoteMedicineResolver").warning(
                "Image generation disabled",
                component="RemoteMedicineResolver",
                subcomponent="CreateResolver",
                error=str(e),
            )

    return RemoteMedicineResolver(
        api_key=settings.api_key_for(),
        provider_type=settings.llm_provider,
        model_names=settings.model_names_for(),
        timeout_seconds=settings.lookup_timeout_seconds,
        temperature=settings.llm_temperature,
        provider_factory=provider_factory,
        image_provider=image_provider,
        image_timeout_seconds=settings.image_timeout_seconds,
    )
