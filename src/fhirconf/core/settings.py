from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

DEFAULT_PUBLISHER = "Not provided"


def parse_bool(value: Any, *, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        raise ValueError(f"Missing {field}")
    s = str(value).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid {field}")


@dataclass(frozen=True)
class ProviderSettings:
    """Runtime knobs for the conformance provider.

    Read from the environment:
    - FHIRCONF_PUBLISHER: publisher name (empty string omits the element)
    - FHIRCONF_CACHE: cache the generated statement (default on)
    - FHIRCONF_LOG_LEVEL: level for the `fhirconf` loggers
    - FHIRCONF_SERVER_BASE: fixed server base URL instead of the request's
    """

    publisher: str | None = DEFAULT_PUBLISHER
    cache: bool = True
    log_level: str = "INFO"
    server_base: str | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ProviderSettings":
        env = os.environ if environ is None else environ

        publisher: str | None = DEFAULT_PUBLISHER
        if "FHIRCONF_PUBLISHER" in env:
            publisher = env["FHIRCONF_PUBLISHER"].strip() or None

        cache = True
        raw_cache = env.get("FHIRCONF_CACHE")
        if raw_cache is not None and raw_cache.strip():
            cache = parse_bool(raw_cache, field="FHIRCONF_CACHE")

        log_level = (env.get("FHIRCONF_LOG_LEVEL") or "INFO").strip().upper()
        server_base = (env.get("FHIRCONF_SERVER_BASE") or "").strip() or None

        return cls(publisher=publisher, cache=cache, log_level=log_level, server_base=server_base)
