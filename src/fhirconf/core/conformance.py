from __future__ import annotations

import re
import threading
from datetime import datetime, timezone
from typing import Any

from .bindings import MethodBinding, OperationMethodBinding, SearchMethodBinding, SearchParameter
from .codes import (
    CT_FHIR_JSON,
    CT_FHIR_XML,
    FHIR_VERSION,
    RESOURCE_TYPES,
    ConditionalDeleteStatus,
    OperationParameterUse,
    SystemRestfulInteraction,
    TypeRestfulInteraction,
)
from .configuration import ConfigurationSource, ServerConfiguration
from .errors import InternalError, ResourceNotFoundError
from .log import get_logger
from .model import (
    Conformance,
    OperationComponent,
    OperationDefinition,
    OperationDefinitionParameter,
    ResourceComponent,
    RestComponent,
    SearchParamComponent,
)
from .resources import ResourceDefinition
from .settings import DEFAULT_PUBLISHER, ProviderSettings

logger = get_logger(__name__)

SERVER_LEVEL = ""


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _format_max(value: int) -> str:
    return "*" if int(value) == -1 else str(int(value))


def _parse_operation_id(raw: str | None) -> str | None:
    """Extract the id part from `everything`, `OperationDefinition/everything` or
    `.../OperationDefinition/everything/_history/2`."""

    if raw is None:
        return None
    parts = [p for p in str(raw).strip().split("/") if p]
    if "_history" in parts:
        parts = parts[: parts.index("_history")]
    if not parts:
        return None
    return parts[-1]


# FHIR dateTime: YYYY, YYYY-MM, YYYY-MM-DD or a full timestamp with a zone.
_FHIR_DATETIME = re.compile(
    r"-?[0-9]{4}"
    r"(-(0[1-9]|1[0-2])"
    r"(-(0[1-9]|[12][0-9]|3[01])"
    r"(T([01][0-9]|2[0-3]):[0-5][0-9]:([0-5][0-9]|60)(\.[0-9]+)?(Z|[+-]((0[0-9]|1[0-3]):[0-5][0-9]|14:00)))?)?)?"
)


def _conformance_date(value: datetime | str | None) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if _FHIR_DATETIME.fullmatch(text):
            # Kept verbatim so the configured precision survives.
            return text
        logger.debug("Ignoring unparseable conformance date %r", value)
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _search_sort_key(param: SearchParameter) -> tuple[int, str]:
    # Required parameters first, then by name.
    return (0 if param.required else 1, param.name)


class ServerConformanceProvider:
    """Serves the conformance statement for a RESTful server.

    Notes:
    - With caching on (the default) the same `Conformance` instance is returned on every
      call. Subclasses that decorate the returned statement per request should turn
      caching off with `set_cache(False)`.
    - The configuration can be given later via `set_server_configuration`, which lets a
      server and its provider reference each other.
    """

    def __init__(
        self,
        configuration: ConfigurationSource | None = None,
        *,
        publisher: str | None = DEFAULT_PUBLISHER,
        cache: bool = True,
    ) -> None:
        self._lock = threading.RLock()
        self._configuration_source: ConfigurationSource | None = configuration
        self._publisher = publisher
        self._cache = bool(cache)
        self._conformance: Conformance | None = None
        self._operation_binding_to_name: dict[int, str] | None = None
        self._operation_name_to_bindings: dict[str, list[OperationMethodBinding]] = {}

    @classmethod
    def from_settings(cls, configuration: ConfigurationSource | None, settings: ProviderSettings) -> "ServerConformanceProvider":
        return cls(configuration, publisher=settings.publisher, cache=settings.cache)

    # ------------------------------------------------------------------ config

    def set_server_configuration(self, configuration: ConfigurationSource) -> None:
        with self._lock:
            self._configuration_source = configuration
            self._conformance = None
            self._operation_binding_to_name = None
            self._operation_name_to_bindings = {}

    def get_server_configuration(self) -> ServerConfiguration:
        source = self._configuration_source
        if source is None:
            raise InternalError("No server configuration has been set on the conformance provider")
        if isinstance(source, ServerConfiguration):
            return source
        try:
            cfg = source()
        except Exception as ex:
            raise InternalError(f"Failed to obtain server configuration: {ex}") from ex
        if not isinstance(cfg, ServerConfiguration):
            raise InternalError(f"Server configuration supplier returned {type(cfg).__name__}")
        return cfg

    @property
    def publisher(self) -> str | None:
        """Value of the statement's `publisher`; None omits the element."""
        return self._publisher

    @publisher.setter
    def publisher(self, value: str | None) -> None:
        self._publisher = value

    @property
    def cache(self) -> bool:
        return self._cache

    def set_cache(self, cache: bool) -> None:
        """If true (default) the statement is built once and returned on every call."""
        with self._lock:
            self._cache = bool(cache)

    # ------------------------------------------------------------------ bindings

    def collect_method_bindings(self, cfg: ServerConfiguration | None = None) -> dict[str, list[MethodBinding]]:
        """Group bindings by resource name, ordered by name. Server bindings live under ""."""

        cfg = cfg or self.get_server_configuration()
        resource_to_methods: dict[str, list[MethodBinding]] = {}
        for rb in cfg.resource_bindings:
            for mb in rb.method_bindings:
                resource_to_methods.setdefault(rb.resource_name, []).append(mb)
        for mb in cfg.server_bindings:
            resource_to_methods.setdefault(SERVER_LEVEL, []).append(mb)
        return dict(sorted(resource_to_methods.items()))

    def initialize_operations(self) -> None:
        cfg = self.get_server_configuration()
        binding_to_name: dict[int, str] = {}
        name_to_bindings: dict[str, list[OperationMethodBinding]] = {}

        for bindings in self.collect_method_bindings(cfg).values():
            for mb in bindings:
                if not isinstance(mb, OperationMethodBinding):
                    continue
                if id(mb) in binding_to_name:
                    continue
                name = mb.operation_name
                binding_to_name[id(mb)] = name
                name_to_bindings.setdefault(name, []).append(mb)

        with self._lock:
            self._operation_binding_to_name = binding_to_name
            self._operation_name_to_bindings = name_to_bindings
        logger.info("Initialized %d operation(s): %s", len(name_to_bindings), ", ".join(sorted(name_to_bindings)) or "-")

    def _ensure_operations(self) -> None:
        if self._operation_binding_to_name is None:
            self.initialize_operations()

    def _operation_name(self, binding: OperationMethodBinding) -> str:
        names = self._operation_binding_to_name or {}
        name = names.get(id(binding))
        if name is None:
            # Registered after initialization; the name is derivable from the binding.
            name = binding.operation_name
        return name

    # ------------------------------------------------------------------ conformance

    def get_server_conformance(self, request: Any | None = None) -> Conformance:
        with self._lock:
            if self._conformance is not None and self._cache:
                logger.debug("Serving cached conformance statement")
                return self._conformance

            self._ensure_operations()
            conformance = self._build_conformance(request)
            self._conformance = conformance
            return conformance

    def _build_conformance(self, request: Any | None) -> Conformance:
        cfg = self.get_server_configuration()
        logger.debug("Building conformance statement for %s", cfg.server_name or "server")

        conformance = Conformance(
            date=_conformance_date(cfg.conformance_date),
            fhir_version=FHIR_VERSION,
            publisher=self._publisher,
            software_name=cfg.server_name,
            software_version=cfg.server_version,
            implementation_description=cfg.implementation_description,
            format=[CT_FHIR_XML, CT_FHIR_JSON],
        )

        rest = RestComponent(mode="server")
        conformance.rest.append(rest)

        operation_names: set[str] = set()
        server_base: str | None = None
        server_base_resolved = False

        for resource_name, bindings in self.collect_method_bindings(cfg).items():
            if resource_name == SERVER_LEVEL:
                for mb in bindings:
                    self._check_binding_for_system_ops(rest, mb)
                    if isinstance(mb, OperationMethodBinding):
                        self._add_operation(rest, operation_names, mb)
                continue

            if not server_base_resolved:
                server_base = cfg.server_address_strategy.determine_server_base(request)
                server_base_resolved = True

            definition = cfg.catalog.get_resource_definition(resource_name)
            resource = ResourceComponent(
                type=definition.name,
                profile=definition.get_resource_profile(server_base),
            )
            rest.resource.append(resource)
            includes: set[str] = set()

            for mb in bindings:
                self._add_resource_interactions(resource, mb)
                self._check_binding_for_system_ops(rest, mb)

                if isinstance(mb, SearchMethodBinding):
                    self._handle_search_method_binding(resource, definition, includes, mb)
                elif isinstance(mb, OperationMethodBinding):
                    self._add_operation(rest, operation_names, mb)

            resource.sort_interactions()
            resource.search_include.extend(sorted(includes))

        return conformance

    @staticmethod
    def _add_resource_interactions(resource: ResourceComponent, binding: MethodBinding) -> None:
        if binding.rest_operation_type is None:
            return
        interaction = TypeRestfulInteraction.from_code(binding.rest_operation_type.code)
        if interaction is None:
            return

        resource.add_interaction(interaction)
        if interaction is TypeRestfulInteraction.VREAD:
            # vread implies read
            resource.add_interaction(TypeRestfulInteraction.READ)

        if binding.supports_conditional:
            if interaction is TypeRestfulInteraction.CREATE:
                resource.conditional_create = True
            elif interaction is TypeRestfulInteraction.DELETE:
                resource.conditional_delete = ConditionalDeleteStatus.SINGLE
            elif interaction is TypeRestfulInteraction.UPDATE:
                resource.conditional_update = True

    @staticmethod
    def _check_binding_for_system_ops(rest: RestComponent, binding: MethodBinding) -> None:
        if binding.rest_operation_type is None:
            return
        interaction = SystemRestfulInteraction.from_code(binding.rest_operation_type.code)
        if interaction is not None:
            rest.add_interaction(interaction)

    def _add_operation(self, rest: RestComponent, operation_names: set[str], binding: OperationMethodBinding) -> None:
        name = self._operation_name(binding)
        if name in operation_names:
            return
        operation_names.add(name)
        rest.operation.append(OperationComponent(name=binding.name, definition=f"OperationDefinition/{name}"))

    @staticmethod
    def _handle_search_method_binding(
        resource: ResourceComponent,
        definition: ResourceDefinition,
        includes: set[str],
        binding: SearchMethodBinding,
    ) -> None:
        includes.update(i for i in binding.includes if i)

        for param in sorted(binding.search_parameters, key=_search_sort_key):
            name = param.name
            chain: str | None = None
            if "." in name:
                name, chain = name.split(".", 1)

            description = param.description
            if _is_blank(description):
                runtime_param = definition.get_search_param(name)
                if runtime_param is not None:
                    description = runtime_param.description

            component = SearchParamComponent(name=name, type=param.param_type, documentation=description)
            if not _is_blank(chain):
                component.chain.append(chain)  # type: ignore[arg-type]

            for target in param.declared_types:
                if target in RESOURCE_TYPES:
                    component.target.append(target)

            resource.search_param.append(component)

    # ------------------------------------------------------------------ operation definitions

    def read_operation_definition(self, operation_id: str | None) -> OperationDefinition:
        id_part = _parse_operation_id(operation_id)
        if id_part is None:
            raise ResourceNotFoundError(operation_id)

        with self._lock:
            self._ensure_operations()
            shared = list(self._operation_name_to_bindings.get(id_part, []))
        if not shared:
            raise ResourceNotFoundError(f"OperationDefinition/{id_part}")

        op = OperationDefinition(id=id_part, status="active", idempotent=True)
        in_params: set[str] = set()
        out_params: set[str] = set()

        for binding in shared:
            if not _is_blank(binding.description):
                op.description = binding.description
            if not binding.idempotent:
                op.idempotent = False
            op.code = binding.name
            if binding.can_operate_at_instance_level:
                op.instance = True
            if binding.can_operate_at_server_level:
                op.system = True
            if not _is_blank(binding.resource_name) and binding.resource_name not in op.type:
                op.type.append(binding.resource_name)  # type: ignore[arg-type]

            for param in binding.operation_parameters:
                if param.name in in_params:
                    continue
                in_params.add(param.name)
                op.parameter.append(
                    OperationDefinitionParameter(
                        name=param.name,
                        use=OperationParameterUse.IN,
                        type=param.param_type,
                        min=int(param.min),
                        max=_format_max(param.max),
                    )
                )

            for ret in binding.return_params:
                if ret.name in out_params:
                    continue
                out_params.add(ret.name)
                op.parameter.append(
                    OperationDefinitionParameter(
                        name=ret.name,
                        use=OperationParameterUse.OUT,
                        type=ret.type,
                        min=int(ret.min),
                        max=_format_max(ret.max),
                    )
                )

        return op

    def operation_names(self) -> list[str]:
        with self._lock:
            self._ensure_operations()
            return sorted(self._operation_name_to_bindings)
