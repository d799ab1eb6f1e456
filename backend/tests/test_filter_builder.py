"""Tests for predicate construction from search criteria."""

from bson import ObjectId

from quizbank.search.criteria import SearchCriteria
from quizbank.search.filter_builder import build_predicate, parse_level_range
from quizbank.search.predicate import AnyOf, Between, Equals, NoneOf, TextMatch
from tests.conftest import LISTS_TOPIC_ID, LOOPS_TOPIC_ID, PYTHON_ID

VALID_ID = "64b7f0c2a1b2c3d4e5f6aaaa"


class TestFacetClauses:
    def test_no_criteria_matches_everything(self):
        predicate = build_predicate(SearchCriteria())
        assert predicate.is_empty

    def test_ids_become_membership(self):
        predicate = build_predicate(SearchCriteria(topic_ids=(LISTS_TOPIC_ID, LOOPS_TOPIC_ID)))
        assert predicate.clauses == (
            AnyOf("topic_id", (ObjectId(LISTS_TOPIC_ID), ObjectId(LOOPS_TOPIC_ID))),
        )

    def test_ids_take_precedence_over_names(self):
        predicate = build_predicate(
            SearchCriteria(language_ids=(PYTHON_ID,), language_names=("Python",))
        )
        assert predicate.fields() == ["language_id"]

    def test_names_without_ids_use_case_insensitive_match(self):
        predicate = build_predicate(SearchCriteria(position_names=("junior", "senior")))
        assert predicate.clauses == (TextMatch("position", ("junior", "senior"), exact=True),)

    def test_unparseable_ids_fall_back_to_names(self):
        predicate = build_predicate(SearchCriteria(topic_ids=("lists",), topic_names=("Lists",)))
        assert predicate.clauses == (TextMatch("topic", ("Lists",), exact=True),)

    def test_clauses_are_anded_in_order(self):
        predicate = build_predicate(
            SearchCriteria(
                topic_names=("Lists",),
                language_ids=(PYTHON_ID,),
                position_names=("junior",),
            )
        )
        assert predicate.fields() == ["topic", "language_id", "position"]


class TestLevelClause:
    def test_single_level(self):
        predicate = build_predicate(SearchCriteria(level="3"))
        assert predicate.clauses == (Between("level", 3, 3),)

    def test_level_range(self):
        assert parse_level_range("2-4") == (2, 4)

    def test_out_of_range_and_garbage_ignored(self):
        for raw in ("0", "7", "abc", "3.5", "-1", "5-2", "", "1-9", "²", "1-²"):
            assert build_predicate(SearchCriteria(level=raw)).is_empty, raw

    def test_bounds_inclusive(self):
        assert parse_level_range("1") == (1, 1)
        assert parse_level_range("6") == (6, 6)
        assert parse_level_range(6) == (6, 6)


class TestExclusionClause:
    def test_only_valid_ids_are_excluded(self):
        predicate = build_predicate(SearchCriteria(exclude_ids=(VALID_ID, "x2")))
        assert predicate.clauses == (NoneOf("_id", (ObjectId(VALID_ID),)),)

    def test_no_valid_ids_no_clause(self):
        predicate = build_predicate(SearchCriteria(exclude_ids=("x1", "x2")))
        assert predicate.is_empty


class TestOtherFilters:
    def test_tag_and_type(self):
        predicate = build_predicate(
            SearchCriteria(tag_ids=(VALID_ID, "bad"), question_type="open_question")
        )
        assert AnyOf("tag_ids", (ObjectId(VALID_ID),)) in predicate.clauses
        assert Equals("type", "open_question") in predicate.clauses

    def test_unknown_type_ignored(self):
        assert build_predicate(SearchCriteria(question_type="essay")).is_empty

    def test_category_is_substring_match(self):
        predicate = build_predicate(SearchCriteria(category="oop"))
        assert predicate.clauses == (TextMatch("category", ("oop",), exact=False),)


def test_build_is_pure():
    criteria = SearchCriteria(
        topic_ids=(LISTS_TOPIC_ID,),
        language_names=("Python",),
        level="2-5",
        exclude_ids=(VALID_ID,),
    )
    assert build_predicate(criteria) == build_predicate(criteria)
