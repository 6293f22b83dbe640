"""
roadmap validate - Check a JSON/YAML payload against the roadmap model.
"""

import logging
import sys
from pathlib import Path

from roadmap.lib.config import load_config
from roadmap.lib.constants import CHILD_LEVELS, EXIT_ERROR, EXIT_INVALID, EXIT_OK
from roadmap.lib.hierarchy import count_nodes, max_depth
from roadmap.lib.serialize import (
    hierarchy_from_dict,
    item_from_dict,
    response_from_dict,
    sort_config_from_dict,
)
from roadmap.lib.validate import (
    ValidationError,
    check_item_type,
    load_payload,
    validate_hierarchy,
    validate_response,
)

logger = logging.getLogger(__name__)

KINDS = ("item", "hierarchy", "sort", "response", "okr-response")

_CHILD_KEYS = {wire for wire, _, _ in CHILD_LEVELS.values()}


def detect_kind(data) -> str:
    """Guess the payload kind from its top-level keys."""
    if not isinstance(data, dict):
        return "item"
    if "data" in data:
        entries = data["data"] if isinstance(data["data"], list) else []
        if any(isinstance(e, dict) and e.keys() & _CHILD_KEYS for e in entries):
            return "okr-response"
        return "response"
    if "column" in data or "direction" in data:
        return "sort"
    if data.keys() & _CHILD_KEYS:
        return "hierarchy"
    return "item"


def _check(kind: str, data, config) -> tuple[list[str], str]:
    """Decode and check a payload. Returns (warnings, summary)."""
    if kind == "item":
        item = item_from_dict(data)
        if config.strict_types:
            check_item_type(item, config.item_types)
        return [], f"execution item '{item.id}'"

    if kind == "hierarchy":
        root = hierarchy_from_dict(data)
        warnings = validate_hierarchy(root, config)
        return warnings, f"OKR hierarchy '{root.id}' ({count_nodes(root)} nodes, {max_depth(root)} levels)"

    if kind == "sort":
        sort_config = sort_config_from_dict(data)
        return [], f"sort config ({sort_config.column} {sort_config.direction.value})"

    response = response_from_dict(data, hierarchical=(kind == "okr-response"))
    warnings = validate_response(response, config)
    return warnings, f"response (showing {len(response.data)} of {response.total} items)"


def cmd_validate(args) -> int:
    """Validate a payload file."""
    path = Path(args.file)
    config = load_config(Path(args.config) if args.config else Path.cwd())
    if args.strict:
        config.strict_levels = True
        config.strict_types = True

    try:
        data = load_payload(path)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR

    kind = args.kind or detect_kind(data)
    logger.debug(f"Validating {path} as {kind}")

    try:
        warnings, summary = _check(kind, data, config)
    except ValidationError as e:
        print(f"INVALID: {path}", file=sys.stderr)
        print(f"  Schema: {e.schema_name}", file=sys.stderr)
        print(f"  Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    for warning in warnings:
        print(f"WARN: {warning}")
    print(f"OK: {path} is a valid {summary}")
    return EXIT_OK
