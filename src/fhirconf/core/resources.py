from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .codes import RESOURCE_TYPES, SearchParamType

HL7_STRUCTURE_DEFINITION_BASE = "http://hl7.org/fhir/StructureDefinition/"


@dataclass(frozen=True)
class RuntimeSearchParam:
    name: str
    description: str | None = None
    param_type: SearchParamType | None = None


@dataclass(frozen=True)
class ResourceDefinition:
    """What the server knows about a resource type.

    Only the bits the conformance statement needs: the name, the default search
    parameter descriptions, and whether the type is custom (server-defined profile).
    """

    name: str
    search_params: dict[str, RuntimeSearchParam] = field(default_factory=dict)
    custom: bool = False

    def get_search_param(self, name: str) -> RuntimeSearchParam | None:
        return self.search_params.get(name)

    def get_resource_profile(self, server_base: str | None) -> str:
        if not self.custom:
            return HL7_STRUCTURE_DEFINITION_BASE + self.name
        if server_base:
            return f"{server_base.rstrip('/')}/StructureDefinition/{self.name}"
        return f"StructureDefinition/{self.name}"


class ResourceCatalog:
    def __init__(self, definitions: list[ResourceDefinition] | None = None) -> None:
        self._lock = threading.RLock()
        self._definitions: dict[str, ResourceDefinition] = {}
        for d in definitions or []:
            self.register(d)

    def register(self, definition: ResourceDefinition) -> ResourceDefinition:
        name = str(definition.name).strip()
        if not name:
            raise ValueError("resource definition name cannot be empty")
        with self._lock:
            self._definitions[name] = definition
        return definition

    def define(
        self,
        name: str,
        search_params: dict[str, str] | list[RuntimeSearchParam] | None = None,
        *,
        custom: bool | None = None,
    ) -> ResourceDefinition:
        """Register a definition from plain values.

        `search_params` may be a mapping of name -> description.
        """

        params: dict[str, RuntimeSearchParam] = {}
        if isinstance(search_params, dict):
            for pname, desc in search_params.items():
                params[pname] = RuntimeSearchParam(name=pname, description=desc)
        elif search_params:
            params = {p.name: p for p in search_params}
        if custom is None:
            custom = name not in RESOURCE_TYPES
        return self.register(ResourceDefinition(name=name, search_params=params, custom=custom))

    def get_resource_definition(self, name: str) -> ResourceDefinition:
        with self._lock:
            d = self._definitions.get(name)
            if d is None:
                # Unknown names still get a definition; non-DSTU2 names are treated as custom.
                d = ResourceDefinition(name=name, custom=name not in RESOURCE_TYPES)
                self._definitions[name] = d
            return d

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._definitions

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._definitions)
