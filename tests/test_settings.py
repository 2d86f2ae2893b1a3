from __future__ import annotations

import logging

import pytest

from fhirconf.core import ProviderSettings, ServerConformanceProvider, configure_logging, get_logger
from fhirconf.core.settings import parse_bool


def test_defaults_without_environment() -> None:
    s = ProviderSettings.from_env({})
    assert s.publisher == "Not provided"
    assert s.cache is True
    assert s.log_level == "INFO"
    assert s.server_base is None


def test_environment_overrides() -> None:
    s = ProviderSettings.from_env(
        {
            "FHIRCONF_PUBLISHER": "",
            "FHIRCONF_CACHE": "off",
            "FHIRCONF_LOG_LEVEL": "debug",
            "FHIRCONF_SERVER_BASE": "http://example.org/fhir",
        }
    )
    assert s.publisher is None
    assert s.cache is False
    assert s.log_level == "DEBUG"
    assert s.server_base == "http://example.org/fhir"

    provider = ServerConformanceProvider.from_settings(None, s)
    assert provider.cache is False
    assert provider.publisher is None


def test_invalid_cache_flag_is_rejected() -> None:
    with pytest.raises(ValueError):
        ProviderSettings.from_env({"FHIRCONF_CACHE": "maybe"})
    assert parse_bool("Yes", field="x") is True


def test_configure_logging_is_idempotent() -> None:
    configure_logging("DEBUG")
    configure_logging("WARNING")

    root = logging.getLogger("fhirconf")
    assert root.level == logging.WARNING
    assert len([h for h in root.handlers if type(h).__name__ == "_FhirConfHandler"]) == 1
    assert get_logger("core.x").name == "fhirconf.core.x"
    assert get_logger("fhirconf.api").name == "fhirconf.api"


def test_importing_package_has_no_side_effects() -> None:
    import os
    import subprocess
    import sys

    code = (
        "import logging, fhirconf, fhirconf.runtime.app\n"
        "assert not logging.getLogger('fhirconf').handlers\n"
    )
    env = dict(os.environ, FHIRCONF_CACHE="maybe", FHIRCONF_LOG_LEVEL="DEBUG")
    res = subprocess.run([sys.executable, "-c", code], env=env, capture_output=True, text=True, timeout=60)

    assert res.returncode == 0, res.stderr
    assert res.stdout == ""
