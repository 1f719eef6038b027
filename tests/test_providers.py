import httpx
import openai
import pytest

from medinfo.config import Settings
from medinfo.core import (
    ChainedMedicineSource,
    LocalMedicineSource,
    RemoteMedicineResolver,
    build_data_source,
    create_resolver,
)
from medinfo.providers import OpenAIImageProvider
from medinfo.core.sources import HttpMedicineSource
from medinfo.providers.llm_provider import (
    GeminiProvider,
    LLMProviderEmptyResponseError,
    LLMProviderExecutionError,
    LLMProviderInitializationError,
    OpenAIProvider,
    create_llm_provider,
    get_available_providers,
    register_provider,
    unregister_provider,
)
from conftest import FakeImagesClient, FakeProvider


def test_registry_lists_builtin_providers():
    assert {"gemini", "openai"} <= set(get_available_providers())


def test_unsupported_provider_is_an_initialization_error():
    with pytest.raises(LLMProviderInitializationError):
        create_llm_provider("watsonx", api_key="k", model_name="m")


@pytest.mark.parametrize("provider_type", ["gemini", "openai"])
def test_missing_key_fails_initialization(provider_type):
    with pytest.raises(LLMProviderInitializationError):
        create_llm_provider(provider_type, api_key="", model_name="some-model")


def test_openai_provider_is_built_with_explicit_key():
    provider = create_llm_provider("openai", api_key="sk-test", model_name="gpt-4o-mini", timeout=5)
    assert isinstance(provider, OpenAIProvider)
    assert provider.model_name == "gpt-4o-mini"
    assert provider.config.timeout == 5


def test_gemini_provider_is_built_with_explicit_key():
    provider = create_llm_provider("gemini", api_key="g-test", model_name="gemini-1.5-flash")
    assert isinstance(provider, GeminiProvider)
    assert provider.get_model_info()["model_name"] == "gemini-1.5-flash"


def test_register_custom_provider():
    class EchoProvider(FakeProvider):
        def __init__(self, api_key=None, config=None, model_name=None, **kwargs):
            super().__init__('{"found": false}', model_name=model_name)

    register_provider("echo", EchoProvider)
    try:
        provider = create_llm_provider("echo", api_key="k", model_name="echo-1")
        assert provider.model_name == "echo-1"
    finally:
        unregister_provider("echo")
    assert "echo" not in get_available_providers()


def test_settings_pick_credentials_per_provider():
    settings = Settings(gemini_api_key=" g ", openai_api_key="o", llm_provider="openai")
    assert settings.api_key_for() == "o"
    assert settings.api_key_for("gemini") == "g"
    assert settings.model_names_for("gemini")[0] == "gemini-flash-latest"


def test_data_source_follows_lookup_mode():
    assert isinstance(build_data_source(Settings(lookup_mode="local")), LocalMedicineSource)

    remote = build_data_source(Settings(lookup_mode="remote", gemini_api_key="k"))
    assert isinstance(remote, RemoteMedicineResolver)

    chain = build_data_source(Settings(lookup_mode="remote_then_local", medicine_lookup_url="http://x/api"))
    assert isinstance(chain, ChainedMedicineSource)
    assert isinstance(chain.sources[0], HttpMedicineSource)
    assert isinstance(chain.sources[1], LocalMedicineSource)


def test_image_provider_needs_a_key():
    with pytest.raises(LLMProviderInitializationError):
        OpenAIImageProvider(api_key=" ")


async def test_image_provider_returns_first_url():
    images = FakeImagesClient(url="https://images.test/pan-d.png")
    provider = OpenAIImageProvider(client=images, size="512x512")

    assert await provider.generate("Pan D box") == "https://images.test/pan-d.png"
    assert images.requests == [
        {"model": "dall-e-3", "prompt": "Pan D box", "n": 1, "size": "512x512"}
    ]


async def test_image_provider_without_url_is_empty_response():
    with pytest.raises(LLMProviderEmptyResponseError):
        await OpenAIImageProvider(client=FakeImagesClient(url=None)).generate("Pan D box")


async def test_image_provider_maps_sdk_errors():
    request = httpx.Request("POST", "https://api.openai.com/v1/images/generations")
    images = FakeImagesClient(error=openai.APIConnectionError(request=request))

    with pytest.raises(LLMProviderExecutionError):
        await OpenAIImageProvider(client=images).generate("Pan D box")


def test_resolver_images_follow_settings():
    enabled = create_resolver(
        Settings(gemini_api_key="g", openai_api_key="sk-test", generate_medicine_images=True)
    )
    assert isinstance(enabled.image_provider, OpenAIImageProvider)

    disabled = create_resolver(Settings(gemini_api_key="g", generate_medicine_images=False))
    assert disabled.image_provider is None

    keyless = create_resolver(
        Settings(gemini_api_key="g", openai_api_key="", generate_medicine_images=True)
    )
    assert keyless.image_provider is None
