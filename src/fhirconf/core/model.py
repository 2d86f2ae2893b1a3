from __future__ import annotations

from dataclasses import dataclass, field

from .codes import (
    ConditionalDeleteStatus,
    OperationParameterUse,
    SearchParamType,
    SystemRestfulInteraction,
    TypeRestfulInteraction,
)


@dataclass
class SearchParamComponent:
    name: str
    type: SearchParamType | None = None
    documentation: str | None = None
    target: list[str] = field(default_factory=list)
    chain: list[str] = field(default_factory=list)


@dataclass
class ResourceComponent:
    type: str
    profile: str | None = None
    interaction: list[TypeRestfulInteraction] = field(default_factory=list)
    conditional_create: bool | None = None
    conditional_update: bool | None = None
    conditional_delete: ConditionalDeleteStatus | None = None
    search_include: list[str] = field(default_factory=list)
    search_param: list[SearchParamComponent] = field(default_factory=list)

    def add_interaction(self, code: TypeRestfulInteraction) -> bool:
        if code in self.interaction:
            return False
        self.interaction.append(code)
        return True

    def sort_interactions(self) -> None:
        self.interaction.sort(key=lambda c: c.ordinal)


@dataclass
class OperationComponent:
    name: str
    definition: str


@dataclass
class RestComponent:
    mode: str = "server"
    resource: list[ResourceComponent] = field(default_factory=list)
    interaction: list[SystemRestfulInteraction] = field(default_factory=list)
    operation: list[OperationComponent] = field(default_factory=list)

    def add_interaction(self, code: SystemRestfulInteraction) -> bool:
        if code in self.interaction:
            return False
        self.interaction.append(code)
        return True


@dataclass
class Conformance:
    """Server conformance statement (FHIR DSTU2 `Conformance`)."""

    date: str
    fhir_version: str
    publisher: str | None = None
    status: str | None = None
    kind: str = "instance"
    accept_unknown: str = "extensions"
    software_name: str | None = None
    software_version: str | None = None
    implementation_description: str | None = None
    format: list[str] = field(default_factory=list)
    rest: list[RestComponent] = field(default_factory=list)


@dataclass
class OperationDefinitionParameter:
    name: str
    use: OperationParameterUse
    min: int
    max: str
    type: str | None = None


@dataclass
class OperationDefinition:
    id: str | None = None
    status: str = "active"
    kind: str = "operation"
    idempotent: bool = True
    code: str | None = None
    description: str | None = None
    system: bool = False
    instance: bool = False
    type: list[str] = field(default_factory=list)
    parameter: list[OperationDefinitionParameter] = field(default_factory=list)
