"""Question search endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from quizbank.api.dependencies import (
    get_facet_resolvers,
    get_logic_question_search_service,
    get_question_search_service,
    query_params_multimap,
)
from quizbank.core.app_exceptions import AppError
from quizbank.core.config import settings
from quizbank.schemas.search import FacetResolveResponse, QuestionSearchResponse, ResolutionItem
from quizbank.search.criteria import parse_search_criteria
from quizbank.search.facet_lookup import FacetKind
from quizbank.search.resolver import FacetResolvers
from quizbank.search.service import QuestionSearchService

router = APIRouter()


@router.get("/questions/search", response_model=QuestionSearchResponse)
def search_questions(
    request: Request,
    resolvers: FacetResolvers = Depends(get_facet_resolvers),
    service: QuestionSearchService = Depends(get_question_search_service),
) -> QuestionSearchResponse:
    """
    Search quiz questions by topic, language and position.

    Facet names and ids are resolved against each other first, so callers may
    pass either (comma-separated for several values). ``sort_by`` defaults to
    ``random``.
    """
    params = resolvers.rewrite_query_params(query_params_multimap(request), multi=True)
    criteria = parse_search_criteria(params, default_page_size=settings.DEFAULT_PAGE_SIZE)
    result = service.search(criteria)
    return QuestionSearchResponse(**result.to_dict())


@router.get("/logic-questions", response_model=QuestionSearchResponse)
def list_logic_questions(
    request: Request,
    service: QuestionSearchService = Depends(get_logic_question_search_service),
) -> QuestionSearchResponse:
    """List logic questions filtered by level, tag and type."""
    params = query_params_multimap(request)
    # Older clients page with ``limit``
    if "page_size" not in params and "limit" in params:
        params["page_size"] = params["limit"]
    criteria = parse_search_criteria(params, default_page_size=settings.LOGIC_DEFAULT_PAGE_SIZE)
    result = service.search(criteria)
    return QuestionSearchResponse(**result.to_dict())


@router.get("/facets/{kind}/resolve", response_model=FacetResolveResponse)
def resolve_facets(
    kind: str,
    ids: str | None = Query(None, description="Comma-separated facet ids"),
    names: str | None = Query(None, description="Comma-separated facet names"),
    resolvers: FacetResolvers = Depends(get_facet_resolvers),
) -> FacetResolveResponse:
    """Resolve facet ids to names and names to ids."""
    try:
        facet_kind = FacetKind(kind)
    except ValueError:
        raise AppError(
            status_code=404,
            code="UNKNOWN_FACET",
            message=f"Unknown facet: {kind}",
            details={"allowed": [k.value for k in FacetKind]},
        ) from None

    result = resolvers[facet_kind].resolve_many(ids, names)
    return FacetResolveResponse(
        kind=facet_kind.value,
        ids=result.ids_csv,
        names=result.names_csv,
        resolutions=[
            ResolutionItem(id=r.id, name=r.name, status=r.status.value) for r in result.resolutions
        ],
    )
