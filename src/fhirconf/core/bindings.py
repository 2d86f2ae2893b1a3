from __future__ import annotations

from dataclasses import dataclass, field

from .codes import RestOperationType, SearchParamType


@dataclass(frozen=True, kw_only=True)
class BindingParameter:
    """A parameter accepted by a bound server method."""

    name: str


@dataclass(frozen=True, kw_only=True)
class IdParameter(BindingParameter):
    name: str = "_id"


@dataclass(frozen=True, kw_only=True)
class SearchParameter(BindingParameter):
    description: str | None = None
    required: bool = False
    param_type: SearchParamType | None = None
    # Resource type names a reference parameter may point at.
    declared_types: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not str(self.name).strip():
            raise ValueError("search parameter name cannot be empty")
        if self.param_type is not None and not isinstance(self.param_type, SearchParamType):
            object.__setattr__(self, "param_type", SearchParamType(str(self.param_type)))
        object.__setattr__(self, "declared_types", tuple(self.declared_types))


@dataclass(frozen=True, kw_only=True)
class OperationParameter(BindingParameter):
    param_type: str | None = None
    min: int = 0
    max: int = 1  # -1 means unbounded

    def __post_init__(self) -> None:
        _validate_cardinality(self.name, self.min, self.max)


@dataclass(frozen=True, kw_only=True)
class ReturnType:
    name: str
    type: str | None = None
    min: int = 0
    max: int = 1

    def __post_init__(self) -> None:
        _validate_cardinality(self.name, self.min, self.max)


def _validate_cardinality(name: str, lo: int, hi: int) -> None:
    if int(lo) < 0:
        raise ValueError(f"{name}: min must be >= 0")
    if int(hi) != -1 and int(hi) < int(lo):
        raise ValueError(f"{name}: max must be -1 (unbounded) or >= min")


@dataclass(frozen=True, kw_only=True, eq=False)
class MethodBinding:
    """A server method registered against a REST operation.

    Notes:
    - Bindings compare by identity. The same binding object listed under two
      resources is still a single binding.
    - `resource_name` is None for server-level (system) methods.
    """

    rest_operation_type: RestOperationType | None = None
    resource_name: str | None = None
    supports_conditional: bool = False
    description: str | None = None
    parameters: tuple[BindingParameter, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))


@dataclass(frozen=True, kw_only=True, eq=False)
class SearchMethodBinding(MethodBinding):
    rest_operation_type: RestOperationType | None = RestOperationType.SEARCH_TYPE
    includes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "includes", tuple(self.includes))

    @property
    def search_parameters(self) -> list[SearchParameter]:
        return [p for p in self.parameters if isinstance(p, SearchParameter)]


@dataclass(frozen=True, kw_only=True, eq=False)
class OperationMethodBinding(MethodBinding):
    """An extended `$operation`.

    `name` carries the leading `$` (e.g. `$everything`).
    """

    name: str
    rest_operation_type: RestOperationType | None = RestOperationType.EXTENDED_OPERATION_TYPE
    idempotent: bool = False
    can_operate_at_instance_level: bool = False
    can_operate_at_server_level: bool = False
    return_params: tuple[ReturnType, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        name = str(self.name).strip()
        if not name.startswith("$") or len(name) < 2:
            raise ValueError(f"operation name must start with '$', got {self.name!r}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "return_params", tuple(self.return_params))

    @property
    def operation_name(self) -> str:
        return self.name[1:]

    @property
    def operation_parameters(self) -> list[OperationParameter]:
        return [p for p in self.parameters if isinstance(p, OperationParameter)]


@dataclass(kw_only=True)
class ResourceBinding:
    resource_name: str
    method_bindings: list[MethodBinding] = field(default_factory=list)

    def add(self, binding: MethodBinding) -> MethodBinding:
        self.method_bindings.append(binding)
        return binding
