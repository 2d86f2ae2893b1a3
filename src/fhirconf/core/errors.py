"""Exceptions raised by the conformance provider.

The HTTP layer turns these into OperationOutcome responses.
"""

from __future__ import annotations


class FhirConfError(Exception):
    """Base exception for fhirconf."""

    status_code = 500


class ResourceNotFoundError(FhirConfError):
    """Raised when a requested resource (e.g. an OperationDefinition) does not exist."""

    status_code = 404

    def __init__(self, resource_id: str | None) -> None:
        self.resource_id = resource_id
        if resource_id:
            message = f"Resource {resource_id} is not known"
        else:
            message = "Resource id is missing"
        super().__init__(message)


class InternalError(FhirConfError):
    """Raised when the server configuration cannot be obtained or is inconsistent."""

    status_code = 500
