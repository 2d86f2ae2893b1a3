from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ...core.codes import CT_FHIR_JSON
from ...core.conformance import ServerConformanceProvider
from ...core.errors import FhirConfError, ResourceNotFoundError
from ..serializers import conformance_to_dict, operation_definition_to_dict, operation_outcome


class FhirJSONResponse(JSONResponse):
    media_type = CT_FHIR_JSON


def mount_conformance_api(app: FastAPI, provider: ServerConformanceProvider) -> None:
    """Mount the metadata endpoints backed by `provider`."""

    @app.exception_handler(FhirConfError)
    async def _fhirconf_error(request: Request, exc: FhirConfError) -> FhirJSONResponse:  # noqa: ARG001
        if isinstance(exc, ResourceNotFoundError):
            body = operation_outcome("error", "not-found", str(exc))
        else:
            body = operation_outcome("fatal", "exception", str(exc))
        return FhirJSONResponse(status_code=exc.status_code, content=body)

    @app.get("/metadata", response_class=FhirJSONResponse)
    def get_metadata(request: Request) -> dict[str, Any]:
        return conformance_to_dict(provider.get_server_conformance(request))

    @app.options("/", response_class=FhirJSONResponse)
    def options_metadata(request: Request) -> dict[str, Any]:
        return conformance_to_dict(provider.get_server_conformance(request))

    @app.get("/OperationDefinition/{operation_id}", response_class=FhirJSONResponse)
    def read_operation_definition(operation_id: str) -> dict[str, Any]:
        return operation_definition_to_dict(provider.read_operation_definition(operation_id))

    @app.get("/OperationDefinition/{operation_id}/_history/{version_id}", response_class=FhirJSONResponse)
    def vread_operation_definition(operation_id: str, version_id: str) -> dict[str, Any]:  # noqa: ARG001
        return operation_definition_to_dict(provider.read_operation_definition(operation_id))
