from __future__ import annotations

import logging
import sys

_ROOT_NAME = "fhirconf"


class _FhirConfHandler(logging.StreamHandler):
    """Marker type so repeated configuration does not stack handlers."""


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the `fhirconf` logger.

    Safe to call multiple times; only the level is updated after the first call.
    """

    logger = logging.getLogger(_ROOT_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if any(isinstance(h, _FhirConfHandler) for h in logger.handlers):
        return

    handler = _FhirConfHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    logger.addHandler(handler)


def get_logger(name: str = _ROOT_NAME) -> logging.Logger:
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)
