"""Shared constants for the roadmap model."""

# Wire (camelCase) field names of an execution item, in declaration order.
# These are also the only valid TableSortConfig columns.
EXECUTION_ITEM_FIELDS = (
    "id",
    "name",
    "owner",
    "projectManager",
    "health",
    "team",
    "type",
    "description",
    "createdAt",
    "updatedAt",
)

REQUIRED_ITEM_FIELDS = ("id", "name", "owner", "projectManager", "health", "team")

# Conventional item types, top of the OKR tree first.
TYPE_OBJECTIVE = "Objective"
TYPE_KEY_RESULT = "Key Result"
TYPE_INITIATIVE = "Initiative"
TYPE_FEATURE = "Feature"
TYPE_SUB_FEATURE = "Sub Feature"

ITEM_TYPES = (
    TYPE_OBJECTIVE,
    TYPE_KEY_RESULT,
    TYPE_INITIATIVE,
    TYPE_FEATURE,
    TYPE_SUB_FEATURE,
)

# Child list attribute -> (wire name, type expected of the parent, type expected of children)
CHILD_LEVELS = {
    "key_results": ("keyResults", TYPE_OBJECTIVE, TYPE_KEY_RESULT),
    "initiatives": ("initiatives", TYPE_KEY_RESULT, TYPE_INITIATIVE),
    "features": ("features", TYPE_INITIATIVE, TYPE_FEATURE),
    "sub_features": ("subFeatures", TYPE_FEATURE, TYPE_SUB_FEATURE),
}

# CLI exit codes
EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2
