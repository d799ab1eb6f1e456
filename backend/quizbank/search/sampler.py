"""
Random sampling of matching documents.

Two tiers, chosen by match count:

- up to ``in_memory_threshold`` matches: load every match, Fisher-Yates
  shuffle, return ``[skip, skip + limit)``. Each page is a real slice of one
  random permutation for that call.
- above it: ask the store for a native random sample of ``limit`` documents.
  ``skip`` is ignored; consecutive pages are independent draws and may
  overlap.

Sampling is best effort. Store errors yield an empty page.
"""

import logging
import random
from collections.abc import MutableSequence
from typing import Any, TypeVar

from quizbank.search.document_store import QuestionStore
from quizbank.search.predicate import Predicate

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_IN_MEMORY_THRESHOLD = 1000


def fisher_yates_shuffle(items: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """
    Shuffle ``items`` in place without bias and return it.

    For i from the last index down to 1, swap item i with a uniformly chosen
    item in [0, i].
    """
    rng = rng or random.Random()
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


class RandomSampler:
    """Draws uniformly random pages of documents matching a predicate."""

    def __init__(
        self,
        store: QuestionStore,
        in_memory_threshold: int = DEFAULT_IN_MEMORY_THRESHOLD,
        rng: random.Random | None = None,
    ):
        if in_memory_threshold < 1:
            raise ValueError("in_memory_threshold must be >= 1")
        self.store = store
        self.in_memory_threshold = in_memory_threshold
        self.rng = rng or random.Random()

    def sample(
        self,
        predicate: Predicate,
        skip: int,
        limit: int,
        total: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Return up to ``limit`` random matching documents.

        ``total`` may be passed when the caller has already counted matches;
        otherwise the sampler counts them itself.
        """
        try:
            if total is None:
                total = self.store.count(predicate)

            if total == 0:
                return []

            if total <= self.in_memory_threshold:
                if skip >= total:
                    return []
                documents = self.store.find(predicate)
                fisher_yates_shuffle(documents, self.rng)
                return documents[skip : skip + limit]

            logger.debug(
                "Using native sampling",
                extra={"total": total, "threshold": self.in_memory_threshold, "limit": limit},
            )
            return self.store.sample(predicate, limit)
        except Exception:
            logger.error("Error getting random documents", exc_info=True)
            return []
