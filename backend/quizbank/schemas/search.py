"""Pydantic schemas for search endpoints."""

from typing import Any

from pydantic import BaseModel

from quizbank.common.pagination import PaginationMetadata


class QuestionSearchResponse(BaseModel):
    """Search response (stable contract)."""

    questions: list[dict[str, Any]]
    pagination: PaginationMetadata


class ResolutionItem(BaseModel):
    id: str | None
    name: str | None
    status: str


class FacetResolveResponse(BaseModel):
    """Resolved comma-separated facet lists."""

    kind: str
    ids: str | None
    names: str | None
    resolutions: list[ResolutionItem]
