"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from quizbank.api.v1.endpoints import questions

api_router = APIRouter()

api_router.include_router(questions.router, prefix="", tags=["Questions"])
