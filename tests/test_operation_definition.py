from __future__ import annotations

import pytest

from fhirconf.core import (
    OperationMethodBinding,
    OperationParameter,
    OperationParameterUse,
    ResourceNotFoundError,
    RestOperationType,
    ReturnType,
    ServerConfiguration,
    ServerConformanceProvider,
)
from fhirconf.runtime.demo import demo_configuration


def test_read_demo_operation_definition() -> None:
    provider = ServerConformanceProvider(demo_configuration())
    op = provider.read_operation_definition("everything")

    assert op.id == "everything"
    assert op.status == "active"
    assert op.code == "$everything"
    assert op.idempotent is True
    assert op.instance is True
    assert op.system is False
    assert op.type == ["Patient"]
    assert op.description == "Fetch a patient and everything related to it"
    assert [(p.name, p.use, p.type, p.min, p.max) for p in op.parameter] == [
        ("start", OperationParameterUse.IN, "date", 0, "1"),
        ("end", OperationParameterUse.IN, "date", 0, "1"),
        ("return", OperationParameterUse.OUT, "Bundle", 1, "1"),
    ]


@pytest.mark.parametrize(
    "raw",
    ["OperationDefinition/everything", "http://x/fhir/OperationDefinition/everything/_history/3"],
)
def test_typed_and_versioned_ids_resolve(raw: str) -> None:
    provider = ServerConformanceProvider(demo_configuration())
    assert provider.read_operation_definition(raw).code == "$everything"


@pytest.mark.parametrize("raw", [None, "", "   ", "OperationDefinition/", "nope"])
def test_missing_or_unknown_ids_raise_not_found(raw: str | None) -> None:
    provider = ServerConformanceProvider(demo_configuration())
    with pytest.raises(ResourceNotFoundError):
        provider.read_operation_definition(raw)


def test_shared_operation_merges_bindings() -> None:
    cfg = ServerConfiguration()
    on_patient = OperationMethodBinding(
        name="$match",
        resource_name="Patient",
        idempotent=True,
        description="first",
        parameters=(OperationParameter(name="resource", param_type="Resource", min=1),),
        return_params=(ReturnType(name="return", type="Bundle", max=-1),),
    )
    on_server = OperationMethodBinding(
        name="$match",
        rest_operation_type=RestOperationType.EXTENDED_OPERATION_SERVER,
        idempotent=False,
        can_operate_at_server_level=True,
        description="  ",
        parameters=(
            OperationParameter(name="resource", param_type="Resource", min=1),
            OperationParameter(name="count", param_type="integer", max=-1),
        ),
        return_params=(ReturnType(name="return", type="Bundle"),),
    )
    on_group = OperationMethodBinding(name="$match", resource_name="Group", can_operate_at_instance_level=True)
    cfg.resource_binding("Patient").add(on_patient)
    cfg.resource_binding("Group").add(on_group)
    cfg.server_bindings.append(on_server)

    op = ServerConformanceProvider(cfg).read_operation_definition("match")

    assert op.idempotent is False
    assert op.system is True
    assert op.instance is True
    assert op.description == "first"
    # Bindings are visited server-level first, then by resource name.
    assert op.type == ["Group", "Patient"]
    assert [(p.name, p.use.code, p.max) for p in op.parameter] == [
        ("resource", "in", "1"),
        ("count", "in", "*"),
        ("return", "out", "1"),
    ]


def test_same_binding_under_two_resources_counts_once() -> None:
    shared = OperationMethodBinding(name="$expunge", resource_name="Patient")
    cfg = ServerConfiguration()
    cfg.resource_binding("Patient").add(shared)
    cfg.resource_binding("Observation").add(shared)

    provider = ServerConformanceProvider(cfg)
    provider.initialize_operations()
    op = provider.read_operation_definition("expunge")
    assert op.type == ["Patient"]
    assert provider.operation_names() == ["expunge"]
