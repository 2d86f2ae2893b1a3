from __future__ import annotations

from typing import Any

import httpx

from ..core.codes import CT_FHIR_JSON


class ConformanceClient:
    """HTTP client for reading a server's metadata.

    Contract:
    - GET /metadata                          -> Conformance
    - GET /OperationDefinition/{name}        -> OperationDefinition
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", *, timeout_s: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = float(timeout_s)

    def _get(self, path: str) -> dict[str, Any]:
        with httpx.Client(base_url=self.base_url, timeout=self.timeout_s) as client:
            res = client.get(path, headers={"accept": CT_FHIR_JSON})
            if res.status_code >= 400:
                raise RuntimeError(f"GET {path} failed: {res.status_code} {res.text}")
            return res.json()

    def get_conformance(self) -> dict[str, Any]:
        return self._get("/metadata")

    def get_operation_definition(self, name: str) -> dict[str, Any]:
        """Fetch an OperationDefinition by name; a leading `$` is accepted."""
        op = str(name).strip().lstrip("$")
        if not op:
            raise ValueError("operation name cannot be empty")
        return self._get(f"/OperationDefinition/{op}")

    def list_operations(self) -> list[str]:
        conformance = self.get_conformance()
        names: list[str] = []
        for rest in conformance.get("rest", []):
            for op in rest.get("operation", []):
                names.append(str(op.get("name")))
        return names
