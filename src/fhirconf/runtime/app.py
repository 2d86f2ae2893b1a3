from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI

from ..api import create_api_app
from ..core.configuration import ConfigurationSource, HardcodedServerAddressStrategy, ServerConfiguration
from ..core.conformance import ServerConformanceProvider
from ..core.log import configure_logging
from ..core.settings import ProviderSettings
from .demo import demo_configuration


def _with_server_base(configuration: ConfigurationSource, server_base: str) -> ConfigurationSource:
    strategy = HardcodedServerAddressStrategy(server_base)
    if isinstance(configuration, ServerConfiguration):
        return replace(configuration, server_address_strategy=strategy)

    def supplier() -> ServerConfiguration:
        cfg = configuration()
        if not isinstance(cfg, ServerConfiguration):
            # Let the provider report the bad supplier.
            return cfg
        return replace(cfg, server_address_strategy=strategy)

    return supplier


def create_provider(
    configuration: ConfigurationSource | None = None,
    *,
    settings: ProviderSettings | None = None,
) -> ServerConformanceProvider:
    settings = settings or ProviderSettings.from_env()
    configure_logging(settings.log_level)

    if configuration is None:
        configuration = demo_configuration()
    if settings.server_base:
        configuration = _with_server_base(configuration, settings.server_base)

    provider = ServerConformanceProvider.from_settings(configuration, settings)
    provider.initialize_operations()
    return provider


def create_app(
    configuration: ConfigurationSource | None = None,
    *,
    settings: ProviderSettings | None = None,
) -> FastAPI:
    """Create the metadata app. Without a configuration the demo registry is served.

    For uvicorn: `uvicorn --factory fhirconf.runtime.app:create_app`
    """
    return create_api_app(create_provider(configuration, settings=settings))
