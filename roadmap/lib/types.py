"""
Roadmap data model.

Execution items are the unit of tracked roadmap work. OKR hierarchies nest them
as Objective -> Key Result -> Initiative -> Feature -> Sub Feature, although any
node may carry any of the four child lists; level consistency is a convention
checked by roadmap.lib.validate, not enforced here.

Attribute names are snake_case. The camelCase wire names live in
roadmap.lib.constants and are mapped by roadmap.lib.serialize.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, Iterator, Optional, TypeVar, Union

from roadmap.lib.constants import CHILD_LEVELS, EXECUTION_ITEM_FIELDS


class HealthStatus(Enum):
    """Delivery-risk classification of an execution item."""
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    OFF_TRACK = "off-track"


class SortDirection(Enum):
    """Table sort order."""
    ASC = "asc"
    DESC = "desc"


@dataclass
class ExecutionItem:
    """One unit of planned work.

    `id` is assigned at construction and cannot be reassigned afterwards.
    Every other field may be mutated in place by whoever owns the item.
    """
    id: str
    name: str
    owner: str
    project_manager: str
    health: HealthStatus
    team: str
    type: Optional[str] = None                 # Objective, Key Result, ... (free text)
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.health, HealthStatus):
            self.health = HealthStatus(self.health)

    def __setattr__(self, name, value):
        if name == "id" and "id" in self.__dict__:
            raise AttributeError(f"Cannot reassign id of execution item {self.__dict__['id']!r}")
        super().__setattr__(name, value)


@dataclass
class OKRHierarchy:
    """An execution item plus its (optional) child nodes.

    A child list of None means the field is absent; an empty list means it is
    present but empty. Each node owns its children exclusively and holds no
    reference to its parent.
    """
    item: ExecutionItem
    key_results: Optional[list["OKRHierarchy"]] = None
    initiatives: Optional[list["OKRHierarchy"]] = None
    features: Optional[list["OKRHierarchy"]] = None
    sub_features: Optional[list["OKRHierarchy"]] = None

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def type(self) -> Optional[str]:
        return self.item.type

    def child_lists(self) -> Iterator[tuple[str, list["OKRHierarchy"]]]:
        """Yield (attribute, children) for each child list that is present."""
        for attr in CHILD_LEVELS:
            children = getattr(self, attr)
            if children is not None:
                yield attr, children

    def children(self) -> Iterator["OKRHierarchy"]:
        """Yield direct children in keyResults, initiatives, features, subFeatures order."""
        for _, children in self.child_lists():
            yield from children


@dataclass
class TableSortConfig:
    """Sort descriptor for a table of execution items.

    `column` is a wire field name of ExecutionItem (e.g. "projectManager").
    """
    column: str
    direction: SortDirection

    def __post_init__(self):
        if self.column not in EXECUTION_ITEM_FIELDS:
            raise ValueError(
                f"Invalid sort column '{self.column}'. "
                f"Must be one of: {', '.join(EXECUTION_ITEM_FIELDS)}"
            )
        if not isinstance(self.direction, SortDirection):
            self.direction = SortDirection(self.direction)


T = TypeVar("T", bound=Union[ExecutionItem, OKRHierarchy])


@dataclass
class ExecutionItemsApiResponse(Generic[T]):
    """Response envelope carrying a page of items and pagination metadata.

    Only `data` and `total` are always present. page/limit/total_pages support
    offset pagination, has_more supports load-more style pagination; any mix
    may appear.
    """
    data: list[T]
    total: int
    page: Optional[int] = None
    limit: Optional[int] = None
    total_pages: Optional[int] = None
    has_more: Optional[bool] = None
