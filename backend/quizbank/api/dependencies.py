"""FastAPI dependencies wiring the search core to MongoDB."""

from fastapi import Request

from quizbank.core.config import settings
from quizbank.db.mongo import get_collection, get_database
from quizbank.search.document_store import MongoQuestionStore
from quizbank.search.facet_lookup import FacetKind, MongoFacetLookup
from quizbank.search.resolver import FacetResolvers
from quizbank.search.service import QuestionSearchService


def get_facet_resolvers() -> FacetResolvers:
    db = get_database()
    return FacetResolvers.from_lookups({kind: MongoFacetLookup.for_kind(db, kind) for kind in FacetKind})


def get_question_search_service() -> QuestionSearchService:
    store = MongoQuestionStore(get_collection(settings.QUESTIONS_COLLECTION))
    return QuestionSearchService(store, in_memory_threshold=settings.RANDOM_SAMPLE_IN_MEMORY_THRESHOLD)


def get_logic_question_search_service() -> QuestionSearchService:
    store = MongoQuestionStore(get_collection(settings.LOGIC_QUESTIONS_COLLECTION))
    return QuestionSearchService(store, in_memory_threshold=settings.RANDOM_SAMPLE_IN_MEMORY_THRESHOLD)


def query_params_multimap(request: Request) -> dict[str, str | list[str]]:
    """Query string as a dict; repeated keys become lists."""
    params: dict[str, str | list[str]] = {}
    for key, value in request.query_params.multi_items():
        if key in params:
            existing = params[key]
            params[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params
