from __future__ import annotations

from typing import Any

from ...core.model import (
    Conformance,
    OperationDefinition,
    OperationDefinitionParameter,
    ResourceComponent,
    RestComponent,
    SearchParamComponent,
)


def _compact(d: dict[str, Any]) -> dict[str, Any]:
    # FHIR JSON never carries nulls or empty arrays.
    return {k: v for k, v in d.items() if v is not None and v != [] and v != {}}


def search_param_to_dict(p: SearchParamComponent) -> dict[str, Any]:
    return _compact(
        {
            "name": p.name,
            "type": p.type.code if p.type is not None else None,
            "documentation": p.documentation,
            "target": list(p.target),
            "chain": list(p.chain),
        }
    )


def resource_to_dict(r: ResourceComponent) -> dict[str, Any]:
    return _compact(
        {
            "type": r.type,
            "profile": {"reference": r.profile} if r.profile else None,
            "interaction": [{"code": i.code} for i in r.interaction],
            "conditionalCreate": r.conditional_create,
            "conditionalUpdate": r.conditional_update,
            "conditionalDelete": r.conditional_delete.code if r.conditional_delete is not None else None,
            "searchInclude": list(r.search_include),
            "searchParam": [search_param_to_dict(p) for p in r.search_param],
        }
    )


def rest_to_dict(rest: RestComponent) -> dict[str, Any]:
    return _compact(
        {
            "mode": rest.mode,
            "resource": [resource_to_dict(r) for r in rest.resource],
            "interaction": [{"code": i.code} for i in rest.interaction],
            "operation": [{"name": o.name, "definition": {"reference": o.definition}} for o in rest.operation],
        }
    )


def conformance_to_dict(c: Conformance) -> dict[str, Any]:
    software = _compact({"name": c.software_name, "version": c.software_version})
    implementation = _compact({"description": c.implementation_description})
    return _compact(
        {
            "resourceType": "Conformance",
            "status": c.status,
            "date": c.date,
            "publisher": c.publisher,
            "kind": c.kind,
            "software": software,
            "implementation": implementation,
            "fhirVersion": c.fhir_version,
            "acceptUnknown": c.accept_unknown,
            "format": list(c.format),
            "rest": [rest_to_dict(r) for r in c.rest],
        }
    )


def operation_parameter_to_dict(p: OperationDefinitionParameter) -> dict[str, Any]:
    return _compact(
        {
            "name": p.name,
            "use": p.use.code,
            "min": int(p.min),
            "max": p.max,
            "type": p.type,
        }
    )


def operation_definition_to_dict(op: OperationDefinition) -> dict[str, Any]:
    return _compact(
        {
            "resourceType": "OperationDefinition",
            "id": op.id,
            "status": op.status,
            "kind": op.kind,
            "description": op.description,
            "idempotent": bool(op.idempotent),
            "code": op.code,
            "system": bool(op.system),
            "type": list(op.type),
            "instance": bool(op.instance),
            "parameter": [operation_parameter_to_dict(p) for p in op.parameter],
        }
    )


def operation_outcome(severity: str, code: str, diagnostics: str) -> dict[str, Any]:
    return {
        "resourceType": "OperationOutcome",
        "issue": [{"severity": severity, "code": code, "diagnostics": diagnostics}],
    }
