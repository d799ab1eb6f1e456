"""
Build a backend-neutral Predicate from validated search criteria.

All emitted clauses are ANDed. Multi-valued facets use membership rather
than a disjunction of separate filters. Invalid optional filters (a level
outside 1..6, an unknown question type, unparseable ids) are dropped rather
than rejected; strict validation happens upstream.
"""

from dataclasses import dataclass

from quizbank.search.criteria import QuestionType, SearchCriteria
from quizbank.search.identifiers import parse_object_ids
from quizbank.search.predicate import AnyOf, Between, Clause, Equals, NoneOf, Predicate, TextMatch

LEVEL_FIELD = "level"
MIN_LEVEL = 1
MAX_LEVEL = 6


@dataclass(frozen=True)
class FacetFields:
    """Question-document fields a facet filters on."""

    id_field: str
    name_field: str


TOPIC = FacetFields("topic_id", "topic")
LANGUAGE = FacetFields("language_id", "language")
POSITION = FacetFields("position_id", "position")


def facet_clause(fields: FacetFields, ids: tuple[str, ...], names: tuple[str, ...]) -> Clause | None:
    """
    Membership on the id field when any id is a valid identifier, otherwise
    case-insensitive equality/membership on the name field. No input, no
    clause.
    """
    object_ids = parse_object_ids(ids)
    if object_ids:
        return AnyOf(fields.id_field, tuple(object_ids))
    if names:
        return TextMatch(fields.name_field, names, exact=True)
    return None


def parse_level_range(raw: str | int | None) -> tuple[int, int] | None:
    """
    Parse ``"3"`` or ``"2-4"`` into an inclusive range within 1..6.

    Returns None for anything non-numeric or out of range.
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        bounds = [raw, raw]
    else:
        parts = [part.strip() for part in str(raw).split("-")]
        if len(parts) not in (1, 2) or not all(part.isdecimal() for part in parts):
            return None
        bounds = [int(part) for part in parts]
        if len(bounds) == 1:
            bounds.append(bounds[0])

    low, high = bounds
    if not (MIN_LEVEL <= low <= high <= MAX_LEVEL):
        return None
    return low, high


def level_clause(raw: str | int | None) -> Clause | None:
    level_range = parse_level_range(raw)
    if level_range is None:
        return None
    return Between(LEVEL_FIELD, *level_range)


def exclusion_clause(exclude_ids: tuple[str, ...]) -> Clause | None:
    """``_id ∉ excluded`` over the ids that parse; None when none do."""
    object_ids = parse_object_ids(exclude_ids)
    if not object_ids:
        return None
    return NoneOf("_id", tuple(object_ids))


def build_predicate(criteria: SearchCriteria) -> Predicate:
    """Pure: identical criteria always produce equal predicates."""
    candidates: list[Clause | None] = [
        facet_clause(TOPIC, criteria.topic_ids, criteria.topic_names),
        facet_clause(LANGUAGE, criteria.language_ids, criteria.language_names),
        facet_clause(POSITION, criteria.position_ids, criteria.position_names),
        level_clause(criteria.level),
    ]

    tag_ids = parse_object_ids(criteria.tag_ids)
    if tag_ids:
        candidates.append(AnyOf("tag_ids", tuple(tag_ids)))

    if criteria.question_type in {member.value for member in QuestionType}:
        candidates.append(Equals("type", criteria.question_type))

    if criteria.category:
        candidates.append(TextMatch("category", (criteria.category,), exact=False))

    candidates.append(exclusion_clause(criteria.exclude_ids))

    return Predicate().and_(*(clause for clause in candidates if clause is not None))
