from __future__ import annotations


def _skip(msg: str) -> None:  # pragma: no cover
    try:
        import pytest  # type: ignore

        pytest.skip(msg)
    except Exception:
        raise RuntimeError(msg)


def _client(configuration=None, settings=None):
    from fhirconf.core import ProviderSettings
    from fhirconf.runtime.app import create_app

    try:
        from fastapi.testclient import TestClient
    except Exception as e:  # pragma: no cover
        _skip(f"TestClient not available ({e!r}); install test extras to run this test")
        return None

    return TestClient(create_app(configuration, settings=settings or ProviderSettings()))


def test_metadata_serves_conformance_json() -> None:
    client = _client()

    res = client.get("/metadata")
    assert res.status_code == 200
    assert res.headers.get("content-type", "").startswith("application/json+fhir")

    body = res.json()
    assert body["resourceType"] == "Conformance"
    assert body["publisher"] == "Not provided"
    assert body["fhirVersion"] == "1.0.2"
    assert body["acceptUnknown"] == "extensions"
    assert body["format"] == ["application/xml+fhir", "application/json+fhir"]
    assert body["software"] == {"name": "fhirconf demo", "version": "0.1.0"}

    rest = body["rest"][0]
    assert rest["mode"] == "server"
    assert [i["code"] for i in rest["interaction"]] == ["transaction", "history-system"]
    assert rest["operation"] == [
        {"name": "$everything", "definition": {"reference": "OperationDefinition/everything"}}
    ]

    patient = next(r for r in rest["resource"] if r["type"] == "Patient")
    assert patient["profile"] == {"reference": "http://hl7.org/fhir/StructureDefinition/Patient"}
    assert [i["code"] for i in patient["interaction"]] == ["read", "vread", "create", "search-type"]
    assert patient["conditionalCreate"] is True
    assert "conditionalUpdate" not in patient
    assert patient["searchInclude"] == ["Patient:organization"]
    org = next(p for p in patient["searchParam"] if p["name"] == "organization")
    assert org == {
        "name": "organization",
        "type": "reference",
        "documentation": "The organization at which this person is a patient",
        "target": ["Organization"],
        "chain": ["name"],
    }


def test_options_root_returns_the_same_statement() -> None:
    client = _client()
    a = client.get("/metadata").json()
    b = client.options("/")
    assert b.status_code == 200
    assert b.json() == a


def test_publisher_omitted_when_unset() -> None:
    from fhirconf.core import ProviderSettings

    client = _client(settings=ProviderSettings(publisher=None))
    assert "publisher" not in client.get("/metadata").json()


def test_read_operation_definition() -> None:
    client = _client()

    res = client.get("/OperationDefinition/everything")
    assert res.status_code == 200
    op = res.json()
    assert op["resourceType"] == "OperationDefinition"
    assert op["id"] == "everything"
    assert op["code"] == "$everything"
    assert op["status"] == "active"
    assert op["instance"] is True
    assert op["system"] is False
    assert op["type"] == ["Patient"]
    assert [(p["name"], p["use"]) for p in op["parameter"]] == [("start", "in"), ("end", "in"), ("return", "out")]

    versioned = client.get("/OperationDefinition/everything/_history/1")
    assert versioned.status_code == 200
    assert versioned.json() == op


def test_unknown_operation_definition_is_404_outcome() -> None:
    client = _client()

    res = client.get("/OperationDefinition/nope")
    assert res.status_code == 404
    body = res.json()
    assert body["resourceType"] == "OperationOutcome"
    assert body["issue"][0]["code"] == "not-found"


def test_broken_configuration_is_500_outcome() -> None:
    from fhirconf.api import create_api_app
    from fhirconf.core import ServerConformanceProvider

    try:
        from fastapi.testclient import TestClient
    except Exception as e:  # pragma: no cover
        _skip(f"TestClient not available ({e!r}); install test extras to run this test")
        return

    def broken():
        raise RuntimeError("registry unavailable")

    client = TestClient(create_api_app(ServerConformanceProvider(broken)))
    res = client.get("/metadata")
    assert res.status_code == 500
    assert res.json()["issue"][0]["severity"] == "fatal"
    assert "registry unavailable" in res.json()["issue"][0]["diagnostics"]


def test_server_base_setting_applies_to_custom_profiles() -> None:
    from fhirconf.core import ProviderSettings, ResourceCatalog, ServerConfiguration, MethodBinding, RestOperationType

    catalog = ResourceCatalog()
    catalog.define("Widget")
    cfg = ServerConfiguration(catalog=catalog)
    cfg.resource_binding("Widget").add(MethodBinding(rest_operation_type=RestOperationType.READ))

    client = _client(cfg, ProviderSettings(server_base="https://fhir.example.org/base"))
    widget = client.get("/metadata").json()["rest"][0]["resource"][0]
    assert widget["profile"] == {"reference": "https://fhir.example.org/base/StructureDefinition/Widget"}


def test_incoming_request_base_used_by_default() -> None:
    from fhirconf.core import ResourceCatalog, ServerConfiguration, MethodBinding, RestOperationType

    catalog = ResourceCatalog()
    catalog.define("Widget")
    cfg = ServerConfiguration(catalog=catalog)
    cfg.resource_binding("Widget").add(MethodBinding(rest_operation_type=RestOperationType.READ))

    widget = _client(cfg).get("/metadata").json()["rest"][0]["resource"][0]
    assert widget["profile"] == {"reference": "http://testserver/StructureDefinition/Widget"}


def test_healthz() -> None:
    assert _client().get("/healthz").json() == {"ok": True}


def test_server_base_setting_leaves_caller_configuration_alone() -> None:
    from fhirconf.core import HardcodedServerAddressStrategy, IncomingRequestAddressStrategy, ProviderSettings
    from fhirconf.runtime.app import create_provider
    from fhirconf.runtime.demo import demo_configuration

    cfg = demo_configuration()
    provider = create_provider(cfg, settings=ProviderSettings(server_base="https://fhir.example.org/base"))

    assert isinstance(cfg.server_address_strategy, IncomingRequestAddressStrategy)
    used = provider.get_server_configuration()
    assert used is not cfg
    assert isinstance(used.server_address_strategy, HardcodedServerAddressStrategy)
    assert used.resource_bindings is cfg.resource_bindings


def test_server_base_setting_wraps_configuration_supplier() -> None:
    from fhirconf.core import ProviderSettings, ResourceCatalog, ServerConfiguration, MethodBinding, RestOperationType

    catalog = ResourceCatalog()
    catalog.define("Widget")
    cfg = ServerConfiguration(catalog=catalog)
    cfg.resource_binding("Widget").add(MethodBinding(rest_operation_type=RestOperationType.READ))

    client = _client(lambda: cfg, ProviderSettings(server_base="https://fhir.example.org/base"))
    widget = client.get("/metadata").json()["rest"][0]["resource"][0]
    assert widget["profile"] == {"reference": "https://fhir.example.org/base/StructureDefinition/Widget"}
