import json
from types import SimpleNamespace

import pytest

from medinfo.core import (
    ConversationRouter,
    ConversationSession,
    LocalMedicineSource,
    MedicineDataSource,
    RemoteMedicineResolver,
)
from medinfo.models import LookupResult
from medinfo.providers.llm_provider import LLMProvider, LLMConfig, LLMResponse


DOLO_ENVELOPE = {
    "found": True,
    "medicine": {
        "id": "dolo-650",
        "name": "Dolo 650",
        "genericName": "Paracetamol",
        "manufacturer": "Micro Labs Ltd.",
        "schedule": "OTC",
        "composition": ["Paracetamol 650mg"],
        "uses": ["Fever", "Mild to moderate pain"],
        "sideEffects": ["Nausea"],
        "warnings": ["Do not exceed 4g per day"],
        "contraindications": ["Severe liver impairment"],
        "price": {"amount": 30, "currency": "INR", "unit": "strip of 15 tablets"},
        "availability": "Widely Available",
        "dosageForms": ["Tablet"],
        "imageUrl": None,
    },
    "disclaimer": "Consult a doctor.",
}


class FakeProvider(LLMProvider):
    """Provider whose execute() replays a scripted outcome."""

    def __init__(self, outcome, model_name="fake-model"):
        super().__init__(LLMConfig(model_name=model_name))
        self.outcome = outcome
        self.prompts = []

    async def execute(self, prompt, system_prompt=None, **kwargs):
        self.prompts.append((prompt, system_prompt))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        if callable(self.outcome):
            return await self.outcome()
        return LLMResponse(content=self.outcome, model=self.model_name, provider_type="fake")


class FakeProviderFactory:
    """
    Stand-in for create_llm_provider.

    outcomes maps model name to generated text, an exception to raise, or an
    async callable.
    """

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.calls = []

    def __call__(self, provider_type, api_key=None, model_name=None, **kwargs):
        self.calls.append(model_name)
        outcome = self.outcomes[model_name]
        if isinstance(outcome, type) and issubclass(outcome, Exception):
            raise outcome("provider could not be created")
        return FakeProvider(outcome, model_name=model_name)


class StubSource(MedicineDataSource):
    """Data source returning a fixed result and recording queries."""

    name = "stub"

    def __init__(self, result=None, error=None):
        self.result = result or LookupResult.miss()
        self.error = error
        self.queries = []

    async def lookup(self, medicine_name):
        self.queries.append(medicine_name)
        if self.error is not None:
            raise self.error
        return self.result


def envelope_with(**medicine_fields):
    """DOLO_ENVELOPE as generated text, with some medicine fields replaced."""
    envelope = json.loads(json.dumps(DOLO_ENVELOPE))
    envelope["medicine"].update(medicine_fields)
    return json.dumps(envelope)


class FakeImagesClient:
    """Stand-in for AsyncOpenAI exposing images.generate."""

    def __init__(self, url="https://images.test/dolo-650.png", error=None):
        self.url = url
        self.error = error
        self.requests = []
        self.images = SimpleNamespace(generate=self._generate)

    async def _generate(self, **params):
        self.requests.append(params)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(url=self.url)] if self.url else [])


def make_resolver(outcomes, api_key="test-key", timeout_seconds=5.0, image_provider=None):
    factory = FakeProviderFactory(outcomes)
    resolver = RemoteMedicineResolver(
        api_key=api_key,
        provider_type="gemini",
        model_names=list(outcomes),
        timeout_seconds=timeout_seconds,
        provider_factory=factory,
        image_provider=image_provider,
        image_timeout_seconds=timeout_seconds,
    )
    return resolver, factory


@pytest.fixture
def dolo_json():
    return json.dumps(DOLO_ENVELOPE)


@pytest.fixture
def local_router():
    return ConversationRouter(LocalMedicineSource())


@pytest.fixture
def local_session(local_router):
    return ConversationSession(local_router, follow_up_delay=0, image_ack_delay=0)
