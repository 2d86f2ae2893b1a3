from __future__ import annotations

from .core import (
    HardcodedServerAddressStrategy,
    IncomingRequestAddressStrategy,
    MethodBinding,
    OperationMethodBinding,
    OperationParameter,
    ResourceBinding,
    ResourceCatalog,
    RestOperationType,
    ReturnType,
    SearchMethodBinding,
    SearchParameter,
    SearchParamType,
    ServerConfiguration,
    ServerConformanceProvider,
)
from .runtime.server import ConformanceServer, run
from .sdk.client import ConformanceClient

__all__ = [
    "run",
    "ConformanceServer",
    "ConformanceClient",
    "HardcodedServerAddressStrategy",
    "IncomingRequestAddressStrategy",
    "MethodBinding",
    "OperationMethodBinding",
    "OperationParameter",
    "ResourceBinding",
    "ResourceCatalog",
    "RestOperationType",
    "ReturnType",
    "SearchMethodBinding",
    "SearchParameter",
    "SearchParamType",
    "ServerConfiguration",
    "ServerConformanceProvider",
]
