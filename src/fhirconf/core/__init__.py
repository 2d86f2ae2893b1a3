from __future__ import annotations

from .bindings import (
    BindingParameter,
    IdParameter,
    MethodBinding,
    OperationMethodBinding,
    OperationParameter,
    ResourceBinding,
    ReturnType,
    SearchMethodBinding,
    SearchParameter,
)
from .codes import (
    CT_FHIR_JSON,
    CT_FHIR_XML,
    FHIR_VERSION,
    RESOURCE_TYPES,
    ConditionalDeleteStatus,
    OperationParameterUse,
    RestOperationType,
    SearchParamType,
    SystemRestfulInteraction,
    TypeRestfulInteraction,
)
from .configuration import (
    HardcodedServerAddressStrategy,
    IncomingRequestAddressStrategy,
    ServerConfiguration,
)
from .conformance import ServerConformanceProvider
from .errors import FhirConfError, InternalError, ResourceNotFoundError
from .log import configure_logging, get_logger
from .model import Conformance, OperationDefinition
from .resources import ResourceCatalog, ResourceDefinition, RuntimeSearchParam
from .settings import ProviderSettings

__all__ = [
    "BindingParameter",
    "IdParameter",
    "MethodBinding",
    "OperationMethodBinding",
    "OperationParameter",
    "ResourceBinding",
    "ReturnType",
    "SearchMethodBinding",
    "SearchParameter",
    "CT_FHIR_JSON",
    "CT_FHIR_XML",
    "FHIR_VERSION",
    "RESOURCE_TYPES",
    "ConditionalDeleteStatus",
    "OperationParameterUse",
    "RestOperationType",
    "SearchParamType",
    "SystemRestfulInteraction",
    "TypeRestfulInteraction",
    "HardcodedServerAddressStrategy",
    "IncomingRequestAddressStrategy",
    "ServerConfiguration",
    "ServerConformanceProvider",
    "FhirConfError",
    "InternalError",
    "ResourceNotFoundError",
    "configure_logging",
    "get_logger",
    "Conformance",
    "OperationDefinition",
    "ResourceCatalog",
    "ResourceDefinition",
    "RuntimeSearchParam",
    "ProviderSettings",
]
