"""Tests for search parameter validation."""

import pytest
from pydantic import ValidationError

from quizbank.core.app_exceptions import CriteriaValidationError
from quizbank.search.criteria import ResponseMode, SearchCriteria, parse_search_criteria
from quizbank.search.sorting import SortDirection, SortField


class TestDefaults:
    def test_empty_params(self):
        criteria = parse_search_criteria({}, default_page_size=20)
        assert criteria.sort_by == SortField.RANDOM
        assert criteria.sort_direction == SortDirection.DESC
        assert criteria.mode == ResponseMode.FULL
        assert criteria.page == 1
        assert criteria.page_size == 20
        assert criteria.exclude_ids == ()
        assert criteria.topic_ids == ()

    def test_custom_default_page_size(self):
        assert parse_search_criteria({}, default_page_size=10).page_size == 10


class TestParsing:
    def test_lists_are_split_trimmed_and_deduplicated(self):
        criteria = parse_search_criteria({"topic": " Lists , Loops,,Lists ", "language": ["Python", "Java,Python"]})
        assert criteria.topic_names == ("Lists", "Loops")
        assert criteria.language_names == ("Python", "Java")

    def test_enums_case_insensitive_except_sort_field(self):
        criteria = parse_search_criteria({"sort_direction": "ASC", "mode": "Compact", "sort_by": "createdAt"})
        assert criteria.sort_direction == SortDirection.ASC
        assert criteria.mode == ResponseMode.COMPACT
        assert criteria.sort_by == SortField.CREATED_AT

    def test_page_size_clamped(self):
        assert parse_search_criteria({"page_size": "500"}, max_page_size=100).page_size == 100

    def test_ignore_question_ids(self):
        criteria = parse_search_criteria({"ignore_question_ids": "a, b,a", "exclude_ids": "c"})
        assert criteria.exclude_ids == ("a", "b", "c")

    def test_blank_ignore_list(self):
        assert parse_search_criteria({"ignore_question_ids": "  "}).exclude_ids == ()

    def test_optional_filters_kept_raw(self):
        criteria = parse_search_criteria({"level": "9", "type": "essay", "tag_id": "t1", "category": "oop"})
        assert criteria.level == "9"
        assert criteria.question_type == "essay"
        assert criteria.tag_ids == ("t1",)
        assert criteria.category == "oop"


class TestErrors:
    @pytest.mark.parametrize(
        "params, message",
        [
            ({"page": "0"}, "page must be a positive integer"),
            ({"page": "abc"}, "page must be a positive integer"),
            ({"page_size": "-3"}, "page_size must be a positive integer"),
            ({"sort_by": "difficulty"}, "sort_by must be one of"),
            ({"sort_direction": "up"}, "sort_direction must be one of"),
            ({"mode": "verbose"}, "mode must be one of"),
        ],
    )
    def test_invalid_values(self, params, message):
        with pytest.raises(CriteriaValidationError) as exc_info:
            parse_search_criteria(params)
        assert any(message in error for error in exc_info.value.errors)

    def test_all_errors_reported(self):
        with pytest.raises(CriteriaValidationError) as exc_info:
            parse_search_criteria({"page": "x", "mode": "y"})
        assert len(exc_info.value.errors) == 2


def test_criteria_are_immutable():
    criteria = SearchCriteria()
    with pytest.raises(ValidationError):
        criteria.page = 2
