from __future__ import annotations

from .conformance import (
    conformance_to_dict,
    operation_definition_to_dict,
    operation_outcome,
    resource_to_dict,
    search_param_to_dict,
)

__all__ = [
    "conformance_to_dict",
    "operation_definition_to_dict",
    "operation_outcome",
    "resource_to_dict",
    "search_param_to_dict",
]
