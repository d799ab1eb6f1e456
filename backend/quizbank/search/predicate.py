"""
Backend-neutral filter description.

A Predicate is a conjunction of clauses. Clauses are plain frozen data; they
carry no knowledge of any driver's query language. Translation lives in
``quizbank.search.mongo_query``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Equals:
    """field == value"""

    field: str
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """field ∈ values (for array fields: any element ∈ values)"""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive match of a text field against any of ``values``.

    ``exact`` compares whole values; otherwise each value is a substring.
    """

    field: str
    values: tuple[str, ...]
    exact: bool = True


@dataclass(frozen=True)
class NoneOf:
    """field ∉ values"""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Between:
    """low <= field <= high; an open bound is None."""

    field: str
    low: Any = None
    high: Any = None


Clause = Union[Equals, AnyOf, TextMatch, NoneOf, Between]


@dataclass(frozen=True)
class Predicate:
    """Conjunction (AND) of clauses. The empty predicate matches everything."""

    clauses: tuple[Clause, ...] = ()

    def and_(self, *clauses: Clause) -> Predicate:
        """A new predicate with ``clauses`` appended."""
        return Predicate(self.clauses + tuple(clauses))

    def fields(self) -> list[str]:
        """Fields the predicate constrains, in clause order."""
        return list(dict.fromkeys(clause.field for clause in self.clauses))

    @property
    def is_empty(self) -> bool:
        return not self.clauses
