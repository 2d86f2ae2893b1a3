from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Protocol, Union

from .bindings import MethodBinding, ResourceBinding
from .resources import ResourceCatalog


class ServerAddressStrategy(Protocol):
    def determine_server_base(self, request: Any | None) -> str | None: ...


class IncomingRequestAddressStrategy:
    """Use the base URL of the request being served."""

    def determine_server_base(self, request: Any | None) -> str | None:
        if request is None:
            return None
        base = getattr(request, "base_url", None)
        if base is None:
            return None
        return str(base).rstrip("/")


@dataclass(frozen=True)
class HardcodedServerAddressStrategy:
    base: str

    def determine_server_base(self, request: Any | None) -> str | None:  # noqa: ARG002
        return self.base.rstrip("/")


@dataclass
class ServerConfiguration:
    """Snapshot of what a running server has registered.

    `conformance_date` may be a datetime or an ISO-8601 string; anything that does not
    parse is ignored and the statement is stamped with the current time instead.
    """

    resource_bindings: list[ResourceBinding] = field(default_factory=list)
    server_bindings: list[MethodBinding] = field(default_factory=list)
    server_name: str | None = None
    server_version: str | None = None
    implementation_description: str | None = None
    conformance_date: datetime | str | None = None
    catalog: ResourceCatalog = field(default_factory=ResourceCatalog)
    server_address_strategy: ServerAddressStrategy = field(default_factory=IncomingRequestAddressStrategy)

    def resource_binding(self, resource_name: str) -> ResourceBinding:
        """Return the binding group for `resource_name`, creating it if needed."""
        for rb in self.resource_bindings:
            if rb.resource_name == resource_name:
                return rb
        rb = ResourceBinding(resource_name=resource_name)
        self.resource_bindings.append(rb)
        return rb


ConfigurationSource = Union[ServerConfiguration, Callable[[], ServerConfiguration]]
