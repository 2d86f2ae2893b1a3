from __future__ import annotations

from .demo import demo_configuration
from .server import ConformanceServer, run

__all__ = ["demo_configuration", "ConformanceServer", "run"]
