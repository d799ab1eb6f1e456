"""Validated search criteria built from raw request parameters."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from quizbank.core.app_exceptions import CriteriaValidationError
from quizbank.core.config import settings
from quizbank.search.resolver import dedupe_preserving_order, split_csv
from quizbank.search.sorting import SortDirection, SortField


class ResponseMode(str, Enum):
    FULL = "full"
    COMPACT = "compact"
    MINIMALIST = "minimalist"


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    OPEN_QUESTION = "open_question"


class SearchCriteria(BaseModel):
    """Typed, immutable search request. Built once per request."""

    model_config = ConfigDict(frozen=True)

    topic_ids: tuple[str, ...] = ()
    topic_names: tuple[str, ...] = ()
    language_ids: tuple[str, ...] = ()
    language_names: tuple[str, ...] = ()
    position_ids: tuple[str, ...] = ()
    position_names: tuple[str, ...] = ()

    # Kept raw; the filter builder ignores values outside the valid range
    level: str | None = None
    tag_ids: tuple[str, ...] = ()
    question_type: str | None = None
    category: str | None = None

    sort_by: SortField = SortField.RANDOM
    sort_direction: SortDirection = SortDirection.DESC
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)
    mode: ResponseMode = ResponseMode.FULL
    exclude_ids: tuple[str, ...] = ()


def _scalar(params: Mapping[str, Any], key: str) -> str | None:
    value = params.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _csv_list(params: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = params.get(key)
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        tokens = [token for item in value if item for token in split_csv(str(item))]
    else:
        tokens = split_csv(str(value))
    return tuple(dedupe_preserving_order(tokens))


def _enum_param(
    params: Mapping[str, Any],
    key: str,
    enum_cls: type[Enum],
    default: Enum,
    errors: list[str],
    case_sensitive: bool = False,
) -> Any:
    raw = _scalar(params, key)
    if raw is None:
        return default
    for member in enum_cls:
        if member.value == raw or (not case_sensitive and member.value.lower() == raw.lower()):
            return member
    errors.append(f"{key} must be one of: {', '.join(m.value for m in enum_cls)}")
    return default


def _positive_int(params: Mapping[str, Any], key: str, default: int, errors: list[str]) -> int:
    raw = _scalar(params, key)
    if raw is None:
        return default
    try:
        number = int(raw)
    except ValueError:
        number = 0
    if number < 1:
        errors.append(f"{key} must be a positive integer")
        return default
    return number


def parse_search_criteria(
    params: Mapping[str, Any],
    default_page_size: int | None = None,
    max_page_size: int | None = None,
) -> SearchCriteria:
    """
    Validate raw query parameters into SearchCriteria.

    List parameters are comma-separated (or repeated) and deduplicated in
    first-seen order. ``page_size`` above the cap is clamped to it.

    Raises:
        CriteriaValidationError: with every problem found, not just the first.
    """
    default_page_size = default_page_size or settings.DEFAULT_PAGE_SIZE
    max_page_size = max_page_size or settings.MAX_PAGE_SIZE
    errors: list[str] = []

    sort_by = _enum_param(params, "sort_by", SortField, SortField.RANDOM, errors, case_sensitive=True)
    sort_direction = _enum_param(params, "sort_direction", SortDirection, SortDirection.DESC, errors)
    mode = _enum_param(params, "mode", ResponseMode, ResponseMode.FULL, errors)

    page = _positive_int(params, "page", 1, errors)
    page_size = min(_positive_int(params, "page_size", default_page_size, errors), max_page_size)

    exclude_ids = _csv_list(params, "ignore_question_ids") + _csv_list(params, "exclude_ids")
    tag_ids = _csv_list(params, "tag_id") + _csv_list(params, "tag_ids")

    if errors:
        raise CriteriaValidationError(errors)

    try:
        return SearchCriteria(
            topic_ids=_csv_list(params, "topic_id"),
            topic_names=_csv_list(params, "topic"),
            language_ids=_csv_list(params, "language_id"),
            language_names=_csv_list(params, "language"),
            position_ids=_csv_list(params, "position_id"),
            position_names=_csv_list(params, "position"),
            level=_scalar(params, "level"),
            tag_ids=tuple(dedupe_preserving_order(tag_ids)),
            question_type=_scalar(params, "type"),
            category=_scalar(params, "category"),
            sort_by=sort_by,
            sort_direction=sort_direction,
            page=page,
            page_size=page_size,
            mode=mode,
            exclude_ids=tuple(dedupe_preserving_order(exclude_ids)),
        )
    except ValidationError as exc:
        raise CriteriaValidationError([error["msg"] for error in exc.errors()]) from exc
