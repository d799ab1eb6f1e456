"""Translate Predicates and sort specs into pymongo filter and sort documents."""

import re
from typing import Any

from pymongo import ASCENDING, DESCENDING

from quizbank.search.predicate import AnyOf, Between, Clause, Equals, NoneOf, Predicate, TextMatch
from quizbank.search.sorting import SortKey


def _text_pattern(value: str, exact: bool) -> re.Pattern:
    escaped = re.escape(value)
    if exact:
        escaped = f"^{escaped}$"
    return re.compile(escaped, re.IGNORECASE)


def clause_to_mongo(clause: Clause) -> dict[str, Any]:
    """Single clause as a one-field filter document."""
    if isinstance(clause, Equals):
        return {clause.field: clause.value}

    if isinstance(clause, AnyOf):
        return {clause.field: {"$in": list(clause.values)}}

    if isinstance(clause, NoneOf):
        return {clause.field: {"$nin": list(clause.values)}}

    if isinstance(clause, TextMatch):
        patterns = [_text_pattern(value, clause.exact) for value in clause.values]
        if len(patterns) == 1:
            return {clause.field: {"$regex": patterns[0]}}
        return {clause.field: {"$in": patterns}}

    if isinstance(clause, Between):
        if clause.low is not None and clause.low == clause.high:
            return {clause.field: clause.low}
        bounds: dict[str, Any] = {}
        if clause.low is not None:
            bounds["$gte"] = clause.low
        if clause.high is not None:
            bounds["$lte"] = clause.high
        return {clause.field: bounds}

    raise TypeError(f"Unsupported clause type: {type(clause).__name__}")


def to_mongo_filter(predicate: Predicate) -> dict[str, Any]:
    """
    Translate a Predicate into a pymongo filter document.

    Clauses on distinct fields are merged into one document. When a field is
    constrained more than once the clauses are combined with ``$and`` so no
    constraint silently overwrites another.
    """
    parts = [clause_to_mongo(clause) for clause in predicate.clauses]
    fields = [field for part in parts for field in part]
    if len(fields) == len(set(fields)):
        merged: dict[str, Any] = {}
        for part in parts:
            merged.update(part)
        return merged
    return {"$and": parts}


def to_mongo_sort(sort_keys: list[SortKey]) -> list[tuple[str, int]]:
    """Sort keys as a pymongo sort list."""
    return [(key.field, ASCENDING if key.ascending else DESCENDING) for key in sort_keys]
