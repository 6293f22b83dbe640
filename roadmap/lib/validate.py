"""
Schema and invariant validation for roadmap payloads.

Wire payloads are checked against JSON Schema at the boundary; typed objects
are then checked for the invariants a schema cannot express (unique ids,
acyclic trees, consistent pagination). Fails hard with clear errors.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional

import jsonschema
import yaml

from roadmap.lib.config import RoadmapConfig
from roadmap.lib.constants import CHILD_LEVELS
from roadmap.lib.hierarchy import flatten, iter_nodes
from roadmap.lib.pagination import expected_total_pages
from roadmap.lib.types import ExecutionItem, ExecutionItemsApiResponse, OKRHierarchy

logger = logging.getLogger(__name__)

ROOT_PATH = "(root)"


class ValidationError(Exception):
    """Schema or invariant validation failed."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


# Cache loaded schemas
_schema_cache: dict[str, dict] = {}


def _get_schemas_dir() -> Path:
    """Get path to schemas directory."""
    return Path(__file__).parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text())
    return _schema_cache[schema_name]


def join_path(path: str, *parts) -> str:
    tail = ".".join(str(p) for p in parts)
    return tail if path == ROOT_PATH else f"{path}.{tail}"


def validate(data: dict, schema_name: str) -> None:
    """
    Validate data against named schema.

    Args:
        data: Wire (camelCase) dictionary to validate
        schema_name: Schema name (e.g., "execution_item", "okr_hierarchy_response")

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else ROOT_PATH
        raise ValidationError(schema_name, e.message, path) from None


def _dates_to_strings(value):
    """YAML turns bare 2024-01-15 into a date; the wire format wants a string."""
    if isinstance(value, dict):
        return {k: _dates_to_strings(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_dates_to_strings(v) for v in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def load_payload(filepath: Path):
    """Load a JSON or YAML payload file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file can't be decoded
    """
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    text = filepath.read_text()
    if filepath.suffix in (".yaml", ".yml"):
        try:
            return _dates_to_strings(yaml.safe_load(text))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {filepath}: {e}") from None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {filepath}: {e}") from None


def validate_file(filepath: Path, schema_name: str) -> dict:
    """
    Load a JSON/YAML file and validate against schema.

    Returns:
        Parsed and validated data

    Raises:
        ValidationError: If file is missing, undecodable, or doesn't match schema
    """
    try:
        data = load_payload(filepath)
    except (FileNotFoundError, ValueError) as e:
        raise ValidationError(schema_name, str(e)) from None

    validate(data, schema_name)
    return data


def check_unique_ids(items: Iterable[ExecutionItem], schema_name: str = "execution_items_response") -> None:
    """Raise if two items share an id."""
    seen: set[str] = set()
    for index, item in enumerate(items):
        if item.id in seen:
            raise ValidationError(schema_name, f"Duplicate id '{item.id}' (item {index})")
        seen.add(item.id)


def check_acyclic(root: OKRHierarchy) -> None:
    """Raise if a node is its own descendant or is shared between parents.

    Nodes are compared by identity, so this catches cycles built in memory
    (a decoded JSON payload can never contain one).
    """
    seen: set[int] = set()
    on_path: set[int] = set()
    stack = [(root, False, ROOT_PATH)]

    while stack:
        node, leaving, path = stack.pop()
        key = id(node)
        if leaving:
            on_path.discard(key)
            continue
        if key in on_path:
            raise ValidationError("okr_hierarchy", f"Node '{node.id}' is its own descendant", path)
        if key in seen:
            raise ValidationError("okr_hierarchy", f"Node '{node.id}' appears under more than one parent", path)

        seen.add(key)
        on_path.add(key)
        stack.append((node, True, path))
        for attr, children in reversed(list(node.child_lists())):
            wire_name = CHILD_LEVELS[attr][0]
            for index in reversed(range(len(children))):
                stack.append((children[index], False, join_path(path, wire_name, index)))


def check_hierarchy_ids(root: OKRHierarchy) -> None:
    """Raise if any id appears twice anywhere in the tree."""
    check_unique_ids(flatten(root), "okr_hierarchy")


def check_hierarchy_levels(root: OKRHierarchy, strict: bool = False) -> list[str]:
    """Check the Objective -> Key Result -> ... -> Sub Feature convention.

    A node populating keyResults should be an Objective and each entry in
    keyResults a Key Result, and so on down. Nodes without a type are skipped.

    Returns:
        Warning messages (empty if the tree follows the convention)

    Raises:
        ValidationError: On the first mismatch when strict is True
    """
    warnings = []

    def mismatch(message: str) -> None:
        if strict:
            raise ValidationError("okr_hierarchy", message)
        logger.warning(message)
        warnings.append(message)

    for node, _ in iter_nodes(root):
        for attr, children in node.child_lists():
            wire_name, parent_type, child_type = CHILD_LEVELS[attr]
            if children and node.type is not None and node.type != parent_type:
                mismatch(f"'{node.id}' is a {node.type} but has {wire_name} (expected {parent_type})")
            for child in children:
                if child.type is not None and child.type != child_type:
                    mismatch(f"'{child.id}' in {node.id}.{wire_name} is a {child.type} (expected {child_type})")

    return warnings


def check_item_type(item: ExecutionItem, allowed: Iterable[str]) -> None:
    """Raise if the item has a type outside the allowed set."""
    allowed = list(allowed)
    if item.type is not None and item.type not in allowed:
        raise ValidationError(
            "execution_item",
            f"'{item.id}' has type '{item.type}'. Must be one of: {', '.join(allowed)}",
            "type",
        )


def check_pagination(response: ExecutionItemsApiResponse) -> None:
    """Raise if the envelope's pagination metadata is inconsistent.

    Pages are 1-indexed; page 0 is rejected here and by the response schemas.
    """
    name = "execution_items_response"
    count = len(response.data)

    if response.total < 0:
        raise ValidationError(name, f"total must be >= 0, got {response.total}", "total")
    if count > response.total:
        raise ValidationError(name, f"data has {count} items but total is {response.total}", "data")
    if response.page is not None and response.page < 1:
        raise ValidationError(name, f"page must be >= 1, got {response.page}", "page")

    if response.limit is not None:
        if response.limit < 1:
            raise ValidationError(name, f"limit must be >= 1, got {response.limit}", "limit")
        if count > response.limit:
            raise ValidationError(name, f"data has {count} items but limit is {response.limit}", "data")

    if response.page is not None and response.limit is not None and response.total_pages is not None:
        expected = expected_total_pages(response.total, response.limit)
        if response.total_pages != expected:
            raise ValidationError(
                name,
                f"totalPages is {response.total_pages} but ceil({response.total}/{response.limit}) is {expected}",
                "totalPages",
            )

    if response.page is not None and response.total_pages is not None and response.has_more:
        if response.page >= response.total_pages:
            raise ValidationError(
                name,
                f"hasMore is true on page {response.page} of {response.total_pages}",
                "hasMore",
            )


def validate_hierarchy(root: OKRHierarchy, config: Optional[RoadmapConfig] = None) -> list[str]:
    """Run every tree invariant. Returns level-convention warnings."""
    config = config or RoadmapConfig()
    check_acyclic(root)
    check_hierarchy_ids(root)
    if config.strict_types:
        for item in flatten(root):
            check_item_type(item, config.item_types)
    return check_hierarchy_levels(root, strict=config.strict_levels)


def validate_response(response: ExecutionItemsApiResponse, config: Optional[RoadmapConfig] = None) -> list[str]:
    """Run every invariant that applies to a response envelope.

    Works for both flat and hierarchical data. Ids must be unique across the
    whole response, including nested nodes.

    Returns:
        Level-convention warnings (hierarchical responses only)
    """
    config = config or RoadmapConfig()
    check_pagination(response)

    warnings = []
    items = []
    for entry in response.data:
        if isinstance(entry, OKRHierarchy):
            check_acyclic(entry)
            warnings.extend(check_hierarchy_levels(entry, strict=config.strict_levels))
            items.extend(flatten(entry))
        else:
            items.append(entry)

    check_unique_ids(items)
    if config.strict_types:
        for item in items:
            check_item_type(item, config.item_types)
    return warnings
