"""Question search orchestration."""

import logging
import random
from dataclasses import dataclass
from typing import Any

from quizbank.common.pagination import (
    PaginationMetadata,
    build_pagination_metadata,
    calculate_skip,
)
from quizbank.core.app_exceptions import SearchFailedError
from quizbank.search.criteria import ResponseMode, SearchCriteria
from quizbank.search.document_store import QuestionStore
from quizbank.search.filter_builder import build_predicate
from quizbank.search.identifiers import stringify_ids
from quizbank.search.sampler import DEFAULT_IN_MEMORY_THRESHOLD, RandomSampler
from quizbank.search.sorting import FieldOrder, select_sort_strategy

logger = logging.getLogger(__name__)

# Fields withheld in compact mode
ANSWER_FIELDS = ("correctAnswer", "explanation")


@dataclass
class SearchResult:
    """One page of documents plus its pagination metadata."""

    documents: list[dict[str, Any]]
    pagination: PaginationMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "questions": self.documents,
            "pagination": self.pagination.model_dump(),
        }


def apply_mode(documents: list[dict[str, Any]], mode: ResponseMode) -> list[dict[str, Any]]:
    """Shape documents for the requested response mode."""
    if mode == ResponseMode.COMPACT:
        return [{k: v for k, v in doc.items() if k not in ANSWER_FIELDS} for doc in documents]
    if mode == ResponseMode.MINIMALIST:
        return [{"_id": doc.get("_id"), "question": doc.get("question")} for doc in documents]
    return documents


class QuestionSearchService:
    """
    Runs a search end to end: build the predicate, count matches, fetch the
    page through the selected strategy, attach pagination metadata.

    Count and fetch are separate store calls and not atomic; ``total`` can be
    stale relative to the returned page if the collection changes in between.
    """

    def __init__(
        self,
        store: QuestionStore,
        in_memory_threshold: int = DEFAULT_IN_MEMORY_THRESHOLD,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.sampler = RandomSampler(store, in_memory_threshold=in_memory_threshold, rng=rng)

    def search(self, criteria: SearchCriteria) -> SearchResult:
        """
        Raises:
            SearchFailedError: the predicate could not be built or the match
                count failed. Random sampling failures are not raised; they
                produce an empty page.
        """
        try:
            predicate = build_predicate(criteria)
        except Exception as exc:
            raise SearchFailedError("Search failed: invalid filter") from exc

        try:
            total = self.store.count(predicate)
        except Exception as exc:
            raise SearchFailedError("Search failed: unable to count matches") from exc

        skip = calculate_skip(criteria.page, criteria.page_size)
        strategy = select_sort_strategy(criteria.sort_by, criteria.sort_direction)

        if isinstance(strategy, FieldOrder):
            if total == 0 or skip >= total:
                documents = []
            else:
                try:
                    documents = self.store.find_sorted(
                        predicate, list(strategy.keys), skip, criteria.page_size
                    )
                except Exception as exc:
                    raise SearchFailedError("Search failed: unable to fetch questions") from exc
            strategy_name = "sorted"
        else:
            documents = self.sampler.sample(predicate, skip, criteria.page_size, total=total)
            strategy_name = "random"

        logger.info(
            "Question search completed",
            extra={
                "strategy": strategy_name,
                "total": total,
                "page": criteria.page,
                "page_size": criteria.page_size,
                "returned": len(documents),
                "filtered_fields": predicate.fields(),
            },
        )

        return SearchResult(
            documents=stringify_ids(apply_mode(documents, criteria.mode)),
            pagination=build_pagination_metadata(total, criteria.page, criteria.page_size),
        )
