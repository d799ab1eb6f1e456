"""
Sort strategy selection.

``random`` (the default) delegates to the random sampler; any other sort
field produces a deterministic sort with stable tie-breaks. Sortable fields
are a closed enumeration resolved through a lookup table, so caller input
never reaches the store as a free-form field name.
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

CREATED_AT_FIELD = "createdAt"
ID_FIELD = "_id"


class SortField(str, Enum):
    """Sort options accepted from callers."""

    RANDOM = "random"
    QUESTION = "question"
    CATEGORY = "category"
    CREATED_AT = "createdAt"
    LEVEL = "level"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Storage field for every deterministic sort option
SORTABLE_FIELDS: dict[SortField, str] = {
    SortField.QUESTION: "question",
    SortField.CATEGORY: "category",
    SortField.CREATED_AT: CREATED_AT_FIELD,
    SortField.LEVEL: "level",
}


@dataclass(frozen=True)
class SortKey:
    field: str
    ascending: bool


@dataclass(frozen=True)
class RandomOrder:
    """Draw the page through the random sampler."""


@dataclass(frozen=True)
class FieldOrder:
    """Sort by ``keys`` in order, then skip/limit."""

    keys: tuple[SortKey, ...]


SortStrategy = RandomOrder | FieldOrder


def build_sort_keys(sort_by: SortField, direction: SortDirection) -> tuple[SortKey, ...]:
    """
    Primary key from the lookup table, then newest-first on creation time,
    then ``_id`` descending so equal timestamps still order deterministically.
    """
    field = SORTABLE_FIELDS[sort_by]
    keys = [SortKey(field, direction == SortDirection.ASC)]
    if field != CREATED_AT_FIELD:
        keys.append(SortKey(CREATED_AT_FIELD, ascending=False))
    keys.append(SortKey(ID_FIELD, ascending=False))
    return tuple(keys)


def select_sort_strategy(
    sort_by: SortField | None,
    direction: SortDirection = SortDirection.DESC,
) -> SortStrategy:
    """Pick random sampling or a deterministic field sort."""
    if sort_by is None or sort_by == SortField.RANDOM:
        logger.debug("Using random sorting")
        return RandomOrder()

    keys = build_sort_keys(sort_by, direction)
    logger.debug("Sorting by %s in %s order", keys[0].field, direction.value)
    return FieldOrder(keys)
