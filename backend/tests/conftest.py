"""Pytest configuration and shared fixtures."""

import random

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from quizbank.api.dependencies import (
    get_facet_resolvers,
    get_logic_question_search_service,
    get_question_search_service,
)
from quizbank.main import create_app
from quizbank.search.facet_lookup import FacetKind
from quizbank.search.resolver import FacetResolvers
from quizbank.search.service import QuestionSearchService
from tests.helpers.fakes import InMemoryFacetLookup, InMemoryQuestionStore, make_question

PYTHON_ID = "64b7f0c2a1b2c3d4e5f60001"
JAVA_ID = "64b7f0c2a1b2c3d4e5f60002"
LISTS_TOPIC_ID = "64b7f0c2a1b2c3d4e5f60101"
LOOPS_TOPIC_ID = "64b7f0c2a1b2c3d4e5f60102"
JUNIOR_ID = "64b7f0c2a1b2c3d4e5f60201"


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def topic_lookup() -> InMemoryFacetLookup:
    return InMemoryFacetLookup({LISTS_TOPIC_ID: "Lists", LOOPS_TOPIC_ID: "Loops"})


@pytest.fixture
def language_lookup() -> InMemoryFacetLookup:
    return InMemoryFacetLookup({PYTHON_ID: "Python", JAVA_ID: "Java"})


@pytest.fixture
def position_lookup() -> InMemoryFacetLookup:
    return InMemoryFacetLookup({JUNIOR_ID: "junior"})


@pytest.fixture
def resolvers(topic_lookup, language_lookup, position_lookup) -> FacetResolvers:
    return FacetResolvers.from_lookups(
        {
            FacetKind.TOPIC: topic_lookup,
            FacetKind.LANGUAGE: language_lookup,
            FacetKind.POSITION: position_lookup,
        }
    )


@pytest.fixture
def question_store() -> InMemoryQuestionStore:
    """Five Python/Lists questions, two Java/Loops questions."""
    python_docs = [
        make_question(
            question=f"Python question {i}",
            topic="Lists",
            topic_id=ObjectId(LISTS_TOPIC_ID),
            language="Python",
            language_id=ObjectId(PYTHON_ID),
            createdAt=f"2024-01-0{i + 1}T00:00:00",
        )
        for i in range(5)
    ]
    java_docs = [
        make_question(
            question=f"Java question {i}",
            topic="Loops",
            topic_id=ObjectId(LOOPS_TOPIC_ID),
            language="Java",
            language_id=ObjectId(JAVA_ID),
            position="senior",
        )
        for i in range(2)
    ]
    return InMemoryQuestionStore(python_docs + java_docs)


@pytest.fixture
def logic_store() -> InMemoryQuestionStore:
    tag = ObjectId("64b7f0c2a1b2c3d4e5f60301")
    return InMemoryQuestionStore(
        [
            make_question(question="Logic 1", level=1, type="multiple_choice", tag_ids=[tag]),
            make_question(question="Logic 2", level=3, type="open_question", tag_ids=[]),
            make_question(question="Logic 3", level=6, type="multiple_choice", tag_ids=[tag]),
        ]
    )


@pytest.fixture
def client(resolvers, question_store, logic_store, rng):
    """TestClient with the Mongo-backed dependencies replaced by in-memory ones."""
    app = create_app()
    app.dependency_overrides[get_facet_resolvers] = lambda: resolvers
    app.dependency_overrides[get_question_search_service] = lambda: QuestionSearchService(
        question_store, rng=rng
    )
    app.dependency_overrides[get_logic_question_search_service] = lambda: QuestionSearchService(
        logic_store, rng=rng
    )
    with TestClient(app) as test_client:
        yield test_client
