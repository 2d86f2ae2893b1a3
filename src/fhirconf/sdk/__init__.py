from __future__ import annotations

from .client import ConformanceClient

__all__ = ["ConformanceClient"]
