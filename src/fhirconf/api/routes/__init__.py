from __future__ import annotations

from .conformance import FhirJSONResponse, mount_conformance_api

__all__ = ["FhirJSONResponse", "mount_conformance_api"]
