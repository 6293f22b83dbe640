"""
Roadmap data model.

Execution items, OKR hierarchies, table sort configuration and the paginated
API response envelope, plus the wire codec and validators that guard them at
system boundaries.
"""

from roadmap.lib.types import (
    ExecutionItem,
    ExecutionItemsApiResponse,
    HealthStatus,
    OKRHierarchy,
    SortDirection,
    TableSortConfig,
)
from roadmap.lib.serialize import (
    hierarchy_from_dict,
    hierarchy_to_dict,
    item_from_dict,
    item_to_dict,
    response_from_dict,
    response_to_dict,
    sort_config_from_dict,
    sort_config_to_dict,
)
from roadmap.lib.validate import ValidationError, validate_hierarchy, validate_response

__all__ = [
    "ExecutionItem",
    "ExecutionItemsApiResponse",
    "HealthStatus",
    "OKRHierarchy",
    "SortDirection",
    "TableSortConfig",
    "hierarchy_from_dict",
    "hierarchy_to_dict",
    "item_from_dict",
    "item_to_dict",
    "response_from_dict",
    "response_to_dict",
    "sort_config_from_dict",
    "sort_config_to_dict",
    "ValidationError",
    "validate_hierarchy",
    "validate_response",
]
