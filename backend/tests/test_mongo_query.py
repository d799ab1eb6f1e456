"""Tests for Predicate to pymongo translation."""

import re

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from quizbank.search.mongo_query import to_mongo_filter, to_mongo_sort
from quizbank.search.predicate import AnyOf, Between, Equals, NoneOf, Predicate, TextMatch
from quizbank.search.sorting import SortKey


def test_empty_predicate():
    assert to_mongo_filter(Predicate()) == {}


def test_membership_and_exclusion():
    oid = ObjectId()
    predicate = Predicate((AnyOf("topic_id", (oid,)), NoneOf("_id", (oid,)), Equals("type", "x")))
    assert to_mongo_filter(predicate) == {
        "topic_id": {"$in": [oid]},
        "_id": {"$nin": [oid]},
        "type": "x",
    }


def test_exact_text_match_is_anchored_and_escaped():
    result = to_mongo_filter(Predicate((TextMatch("language", ("C++",)),)))
    pattern = result["language"]["$regex"]
    assert pattern.pattern == r"^C\+\+$"
    assert pattern.flags & re.IGNORECASE
    assert pattern.match("c++")
    assert not pattern.match("c++17")


def test_substring_match_with_several_values():
    result = to_mongo_filter(Predicate((TextMatch("category", ("oop", "io"), exact=False),)))
    patterns = result["category"]["$in"]
    assert [p.pattern for p in patterns] == ["oop", "io"]
    assert patterns[0].search("Intro to OOP")


def test_between():
    assert to_mongo_filter(Predicate((Between("level", 2, 4),))) == {"level": {"$gte": 2, "$lte": 4}}
    assert to_mongo_filter(Predicate((Between("level", 3, 3),))) == {"level": 3}
    assert to_mongo_filter(Predicate((Between("level", low=2),))) == {"level": {"$gte": 2}}


def test_repeated_field_uses_and():
    predicate = Predicate((Between("level", 1, 2), NoneOf("level", (2,))))
    assert to_mongo_filter(predicate) == {
        "$and": [{"level": {"$gte": 1, "$lte": 2}}, {"level": {"$nin": [2]}}]
    }


def test_and_appends_without_mutating():
    base = Predicate((Equals("type", "x"),))
    extended = base.and_(Between("level", 2, 2), NoneOf("type", ("y",)))

    assert base.clauses == (Equals("type", "x"),)
    assert extended.fields() == ["type", "level"]
    assert to_mongo_filter(extended) == {
        "$and": [{"type": "x"}, {"level": 2}, {"type": {"$nin": ["y"]}}]
    }


def test_sort():
    keys = [SortKey("question", True), SortKey("createdAt", False)]
    assert to_mongo_sort(keys) == [("question", ASCENDING), ("createdAt", DESCENDING)]
