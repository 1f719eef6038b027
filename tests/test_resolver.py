import asyncio
import json

import pytest

from conftest import DOLO_ENVELOPE, FakeImagesClient, envelope_with, make_resolver
from medinfo.core import LookupParseError, RemoteMedicineResolver, extract_json_object
from medinfo.models import LookupErrorKind, ScheduleClass
from medinfo.prompts import DEFAULT_DISCLAIMER
from medinfo.providers import OpenAIImageProvider
from medinfo.providers.llm_provider import (
    LLMProviderAuthenticationError,
    LLMProviderEmptyResponseError,
    LLMProviderExecutionError,
    LLMProviderInitializationError,
    LLMProviderRateLimitError,
    LLMResponse,
)


def test_extract_json_strips_code_fences():
    text = '```json\n{"found": false, "suggestion": "Try Dolo 650"}\n```'
    assert extract_json_object(text) == {"found": False, "suggestion": "Try Dolo 650"}


def test_extract_json_ignores_surrounding_prose():
    text = 'Sure! Here is the data: {"found": true, "medicine": {"name": "Pan D"}} Hope it helps.'
    payload = extract_json_object(text)
    assert payload["medicine"]["name"] == "Pan D"


def test_extract_json_skips_braces_that_are_not_json():
    text = 'Note {this is not json} then {"found": false}'
    assert extract_json_object(text) == {"found": False}


def test_extract_json_without_object_raises():
    with pytest.raises(LookupParseError):
        extract_json_object("I could not find that medicine, sorry.")
    with pytest.raises(LookupParseError):
        extract_json_object("   ")


async def test_lookup_normalizes_provider_payload(dolo_json):
    resolver, factory = make_resolver({"model-a": dolo_json})

    result = await resolver.lookup("Dolo 650")

    assert result.found
    assert not result.failed
    record = result.medicine
    assert record.name == "Dolo 650"
    assert record.composition_text == "Paracetamol 650mg"
    assert record.schedule_class == ScheduleClass.OTC
    assert record.precautions == ["Do not exceed 4g per day"]
    assert record.price_range.min == 24.0
    assert record.price_range.max == 36.0
    assert record.price_range.unit == "strip of 15 tablets"
    assert result.disclaimer == "Consult a doctor."
    assert factory.calls == ["model-a"]


async def test_lookup_sends_system_prompt_and_medicine_name(dolo_json):
    resolver, _ = make_resolver({"model-a": dolo_json})
    prompts = []

    original_factory = resolver.provider_factory

    def recording_factory(*args, **kwargs):
        provider = original_factory(*args, **kwargs)
        prompts.append(provider)
        return provider

    resolver.provider_factory = recording_factory
    await resolver.lookup("Dolo 650")

    prompt, system_prompt = prompts[0].prompts[0]
    assert "Dolo 650" in prompt
    assert '"found"' in system_prompt


async def test_missing_credential_is_configuration_failure(dolo_json):
    resolver, factory = make_resolver({"model-a": dolo_json}, api_key="  ")

    result = await resolver.lookup("Dolo 650")

    assert not result.found
    assert result.error_kind == LookupErrorKind.CONFIGURATION
    assert result.error == "Server configuration error: Missing Gemini API key"
    assert factory.calls == []


async def test_provider_initialization_error_is_configuration_failure():
    resolver, _ = make_resolver({"model-a": LLMProviderInitializationError})

    result = await resolver.lookup("Dolo 650")

    assert result.error_kind == LookupErrorKind.CONFIGURATION


async def test_falls_back_to_next_model_on_failure(dolo_json):
    resolver, factory = make_resolver(
        {
            "model-a": LLMProviderExecutionError("503 from upstream"),
            "model-b": LLMProviderRateLimitError("quota"),
            "model-c": dolo_json,
        }
    )

    result = await resolver.lookup("Dolo 650")

    assert result.found
    assert factory.calls == ["model-a", "model-b", "model-c"]


async def test_all_models_failing_is_transport_failure():
    resolver, factory = make_resolver(
        {
            "model-a": LLMProviderExecutionError("404 model not found"),
            "model-b": LLMProviderAuthenticationError("bad key"),
        }
    )

    result = await resolver.lookup("Dolo 650")

    assert not result.found
    assert result.medicine is None
    assert result.error_kind == LookupErrorKind.TRANSPORT
    assert factory.calls == ["model-a", "model-b"]


async def test_empty_generation_is_parse_failure_without_fallback(dolo_json):
    resolver, factory = make_resolver(
        {"model-a": LLMProviderEmptyResponseError("no text"), "model-b": dolo_json}
    )

    result = await resolver.lookup("Dolo 650")

    assert result.error_kind == LookupErrorKind.PARSE
    assert factory.calls == ["model-a"]


async def test_unparseable_text_is_parse_failure():
    resolver, _ = make_resolver({"model-a": "Dolo 650 is a paracetamol tablet."})

    result = await resolver.lookup("Dolo 650")

    assert result.error_kind == LookupErrorKind.PARSE
    assert result.medicine is None


async def test_found_without_medicine_is_parse_failure():
    resolver, _ = make_resolver({"model-a": '{"found": true, "medicine": null}'})

    result = await resolver.lookup("Dolo 650")

    assert result.error_kind == LookupErrorKind.PARSE


async def test_not_found_carries_suggestion():
    resolver, _ = make_resolver(
        {"model-a": '{"found": false, "suggestion": "Did you mean Dolo 650?"}'}
    )

    result = await resolver.lookup("Dollo 65")

    assert not result.found
    assert not result.failed
    assert result.suggestion == "Did you mean Dolo 650?"


async def test_bare_medicine_object_is_accepted():
    resolver, _ = make_resolver({"model-a": json.dumps(DOLO_ENVELOPE["medicine"])})

    result = await resolver.lookup("Dolo 650")

    assert result.found
    assert result.medicine.name == "Dolo 650"
    assert result.disclaimer == DEFAULT_DISCLAIMER


async def test_lookup_times_out():
    async def slow():
        await asyncio.sleep(2)
        return LLMResponse(content="{}", model="slow", provider_type="fake")

    resolver, _ = make_resolver({"model-a": slow}, timeout_seconds=0.05)

    result = await resolver.lookup("Dolo 650")

    assert result.error_kind == LookupErrorKind.TRANSPORT
    assert result.error == "Medicine lookup timed out"


async def test_blank_name_is_not_sent_to_provider(dolo_json):
    resolver, factory = make_resolver({"model-a": dolo_json})

    result = await resolver.lookup("   ")

    assert not result.found
    assert not result.failed
    assert factory.calls == []


@pytest.mark.parametrize(
    "fields",
    [{"uses": 5}, {"alternatives": True}, {"price": {"amount": [30]}}, {"sideEffects": {"a": 1}}],
)
async def test_wrongly_typed_field_is_parse_failure(fields):
    resolver, _ = make_resolver({"model-a": envelope_with(**fields)})

    result = await resolver.lookup("Dolo 650")

    assert result.error_kind == LookupErrorKind.PARSE
    assert result.error == "Failed to parse medicine information"
    assert result.medicine is None


async def test_unsupported_provider_type_is_configuration_failure():
    resolver = RemoteMedicineResolver(
        api_key="k", provider_type="anthropic", model_names=["model-a", "model-b"]
    )

    result = await resolver.lookup("Dolo 650")

    assert result.error_kind == LookupErrorKind.CONFIGURATION
    assert result.error.startswith("Server configuration error")


async def test_found_medicine_gets_generated_image(dolo_json):
    images = FakeImagesClient()
    resolver, _ = make_resolver(
        {"model-a": dolo_json}, image_provider=OpenAIImageProvider(client=images)
    )

    result = await resolver.lookup("Dolo 650")

    assert result.medicine.image_url == "https://images.test/dolo-650.png"
    request = images.requests[0]
    assert request["model"] == "dall-e-3"
    assert request["n"] == 1
    assert "Dolo 650" in request["prompt"]
    assert "Micro Labs Ltd." in request["prompt"]


@pytest.mark.parametrize(
    "images",
    [FakeImagesClient(url=None), FakeImagesClient(error=LLMProviderExecutionError("boom"))],
)
async def test_image_failure_keeps_the_record(dolo_json, images):
    resolver, _ = make_resolver(
        {"model-a": dolo_json}, image_provider=OpenAIImageProvider(client=images)
    )

    result = await resolver.lookup("Dolo 650")

    assert result.found
    assert result.medicine.image_url is None
    assert not result.failed


async def test_image_not_requested_when_not_found():
    images = FakeImagesClient()
    resolver, _ = make_resolver(
        {"model-a": '{"found": false, "suggestion": "Dolo 650"}'},
        image_provider=OpenAIImageProvider(client=images),
    )

    await resolver.lookup("Dollo")

    assert images.requests == []
