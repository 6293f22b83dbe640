"""
Wire codec for the roadmap model.

Converts between camelCase JSON-style dicts and the dataclasses in
roadmap.lib.types. Decoding validates against the matching schema first, so
a missing required field or an unknown health value surfaces as a
ValidationError rather than a KeyError. Optional fields that are None are left
out of encoded output.

Timestamps are normalised on the way through: they decode to datetime and
encode with isoformat(), so "2024-01-15" comes back as "2024-01-15T00:00:00"
and a trailing "Z" comes back as "+00:00". The instants are unchanged.
"""

from datetime import datetime

from roadmap.lib.constants import CHILD_LEVELS
from roadmap.lib.types import (
    ExecutionItem,
    ExecutionItemsApiResponse,
    HealthStatus,
    OKRHierarchy,
    TableSortConfig,
)
from roadmap.lib.validate import ROOT_PATH, ValidationError, join_path, validate

# (attribute, wire name) for plain string fields
_TEXT_FIELDS = (
    ("id", "id"),
    ("name", "name"),
    ("owner", "owner"),
    ("project_manager", "projectManager"),
    ("team", "team"),
    ("type", "type"),
    ("description", "description"),
)
_TIMESTAMP_FIELDS = (
    ("created_at", "createdAt"),
    ("updated_at", "updatedAt"),
)
_PAGE_FIELDS = (
    ("page", "page"),
    ("limit", "limit"),
    ("total_pages", "totalPages"),
    ("has_more", "hasMore"),
)


def _parse_timestamp(value: str, schema_name: str, path: str) -> datetime:
    """Parse an ISO 8601 date or date-time, accepting a trailing Z."""
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(schema_name, f"Invalid timestamp '{value}'", path) from None


def _decode_item(data: dict, schema_name: str = "execution_item", path: str = ROOT_PATH) -> ExecutionItem:
    kwargs = {attr: data.get(wire) for attr, wire in _TEXT_FIELDS}
    for attr, wire in _TIMESTAMP_FIELDS:
        if data.get(wire) is not None:
            kwargs[attr] = _parse_timestamp(data[wire], schema_name, join_path(path, wire))
    return ExecutionItem(health=HealthStatus(data["health"]), **kwargs)


def _encode_item(item: ExecutionItem) -> dict:
    result = {}
    for attr, wire in _TEXT_FIELDS:
        value = getattr(item, attr)
        if value is not None:
            result[wire] = value
        if attr == "project_manager":
            # Keep declaration order: health sits between projectManager and team
            result["health"] = item.health.value
    for attr, wire in _TIMESTAMP_FIELDS:
        value = getattr(item, attr)
        if value is not None:
            result[wire] = value.isoformat()
    return result


def _decode_node(data: dict, schema_name: str = "okr_hierarchy", path: str = ROOT_PATH) -> OKRHierarchy:
    node = OKRHierarchy(item=_decode_item(data, schema_name, path))
    for attr, (wire, _, _) in CHILD_LEVELS.items():
        if wire in data:
            setattr(node, attr, [
                _decode_node(child, schema_name, join_path(path, wire, index))
                for index, child in enumerate(data[wire])
            ])
    return node


def _encode_node(node: OKRHierarchy) -> dict:
    result = _encode_item(node.item)
    for attr, children in node.child_lists():
        result[CHILD_LEVELS[attr][0]] = [_encode_node(child) for child in children]
    return result


def item_from_dict(data: dict) -> ExecutionItem:
    validate(data, "execution_item")
    return _decode_item(data)


def item_to_dict(item: ExecutionItem) -> dict:
    return _encode_item(item)


def hierarchy_from_dict(data: dict) -> OKRHierarchy:
    """Decode a nested OKR tree. Absent child lists stay None."""
    validate(data, "okr_hierarchy")
    return _decode_node(data)


def hierarchy_to_dict(node: OKRHierarchy) -> dict:
    return _encode_node(node)


def sort_config_from_dict(data: dict) -> TableSortConfig:
    validate(data, "table_sort_config")
    return TableSortConfig(column=data["column"], direction=data["direction"])


def sort_config_to_dict(config: TableSortConfig) -> dict:
    return {"column": config.column, "direction": config.direction.value}


def response_from_dict(data: dict, hierarchical: bool = False) -> ExecutionItemsApiResponse:
    """Decode a response envelope.

    Args:
        data: Wire dict with data/total and optional pagination fields
        hierarchical: Decode entries as OKRHierarchy trees instead of flat items
    """
    if hierarchical:
        schema_name = "okr_hierarchy_response"
        decode = _decode_node
    else:
        schema_name = "execution_items_response"
        decode = _decode_item

    validate(data, schema_name)
    entries = [
        decode(entry, schema_name, join_path(ROOT_PATH, "data", index))
        for index, entry in enumerate(data["data"])
    ]

    return ExecutionItemsApiResponse(
        data=entries,
        total=data["total"],
        **{attr: data.get(wire) for attr, wire in _PAGE_FIELDS},
    )


def response_to_dict(response: ExecutionItemsApiResponse) -> dict:
    result = {
        "data": [
            _encode_node(entry) if isinstance(entry, OKRHierarchy) else _encode_item(entry)
            for entry in response.data
        ],
        "total": response.total,
    }
    for attr, wire in _PAGE_FIELDS:
        value = getattr(response, attr)
        if value is not None:
            result[wire] = value
    return result
