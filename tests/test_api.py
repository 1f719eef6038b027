import pytest
from fastapi.testclient import TestClient

from conftest import StubSource, envelope_with, make_resolver
from medinfo.api.server import create_app
from medinfo.core import RemoteMedicineResolver
from medinfo.providers.llm_provider import LLMProviderExecutionError


LOOKUP_URL = "/api/medicine-lookup"


@pytest.fixture
def client_for():
    def build(outcomes, api_key="test-key"):
        resolver, factory = make_resolver(outcomes, api_key=api_key)
        return TestClient(create_app(resolver=resolver)), factory

    return build


def test_preflight_allows_cross_origin_posts(client_for, dolo_json):
    client, _ = client_for({"model-a": dolo_json})

    response = client.options(
        LOOKUP_URL,
        headers={
            "Origin": "http://localhost:8080",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type, authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


@pytest.mark.parametrize("body", [{}, {"medicineName": ""}, {"medicineName": "   "}, {"name": "Dolo"}])
def test_missing_name_is_bad_request(client_for, dolo_json, body):
    client, factory = client_for({"model-a": dolo_json})

    response = client.post(LOOKUP_URL, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Medicine name is required"}
    assert factory.calls == []


def test_malformed_body_is_bad_request(client_for, dolo_json):
    client, _ = client_for({"model-a": dolo_json})

    response = client.post(
        LOOKUP_URL, content=b"not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


def test_missing_credential_is_server_error(client_for, dolo_json):
    client, factory = client_for({"model-a": dolo_json}, api_key="")

    response = client.post(LOOKUP_URL, json={"medicineName": "Dolo 650"})

    assert response.status_code == 500
    assert response.json() == {"error": "Server configuration error: Missing Gemini API key"}
    assert factory.calls == []


def test_found_medicine(client_for, dolo_json):
    client, _ = client_for({"model-a": dolo_json})

    response = client.post(LOOKUP_URL, json={"medicineName": "Dolo 650"})

    assert response.status_code == 200
    body = response.json()
    assert body["found"] is True
    assert body["medicine"]["name"] == "Dolo 650"
    assert body["medicine"]["schedule"] == "OTC"
    assert body["medicine"]["priceRange"] == {"min": 24.0, "max": 36.0, "unit": "strip of 15 tablets"}
    assert body["disclaimer"] == "Consult a doctor."


def test_not_found_is_ok_with_suggestion(client_for):
    client, _ = client_for({"model-a": '{"found": false, "suggestion": "Did you mean Dolo 650?"}'})

    response = client.post(LOOKUP_URL, json={"medicineName": "Dollo"})

    assert response.status_code == 200
    assert response.json()["found"] is False
    assert response.json()["medicine"] is None
    assert response.json()["suggestion"] == "Did you mean Dolo 650?"


def test_provider_failure_is_server_error(client_for):
    client, _ = client_for({"model-a": LLMProviderExecutionError("503")})

    response = client.post(LOOKUP_URL, json={"medicineName": "Dolo 650"})

    assert response.status_code == 500
    body = response.json()
    assert body["found"] is False
    assert body["medicine"] is None
    assert body["error"]


def test_unparseable_generation_is_server_error(client_for):
    client, _ = client_for({"model-a": "no json here"})

    response = client.post(LOOKUP_URL, json={"medicineName": "Dolo 650"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to parse medicine information"


def test_health(client_for, dolo_json):
    client, _ = client_for({"model-a": dolo_json})

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["credential_configured"] is True


def test_wrongly_typed_field_is_json_parse_error(client_for):
    client, _ = client_for({"model-a": envelope_with(price={"amount": [30]})})

    response = client.post(LOOKUP_URL, json={"medicineName": "Dolo 650"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to parse medicine information",
        "found": False,
        "medicine": None,
    }


def test_unsupported_provider_is_configuration_error():
    resolver = RemoteMedicineResolver(api_key="k", provider_type="anthropic", model_names=["a", "b"])
    client = TestClient(create_app(resolver=resolver))

    response = client.post(LOOKUP_URL, json={"medicineName": "Dolo 650"})

    assert response.status_code == 500
    body = response.json()
    assert list(body) == ["error"]
    assert body["error"].startswith("Server configuration error")


def test_resolver_exception_still_answers_json():
    broken = StubSource(error=TypeError("'int' object is not iterable"))
    broken.provider_type = "stub"
    broken.api_key = "k"
    client = TestClient(create_app(resolver=broken))

    response = client.post(LOOKUP_URL, json={"medicineName": "Dolo 650"})

    assert response.status_code == 500
    assert response.json()["error"] == "Medicine lookup service is unavailable"
    assert response.json()["found"] is False
