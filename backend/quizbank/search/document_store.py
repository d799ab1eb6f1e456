"""Document store access for question collections."""

from typing import Any, Protocol

from pymongo.collection import Collection

from quizbank.search.mongo_query import to_mongo_filter, to_mongo_sort
from quizbank.search.predicate import Predicate
from quizbank.search.sorting import SortKey


class QuestionStore(Protocol):
    """Read-only primitives the search core needs from a document store."""

    def count(self, predicate: Predicate) -> int: ...

    def find(self, predicate: Predicate) -> list[dict[str, Any]]: ...

    def find_sorted(
        self,
        predicate: Predicate,
        sort: list[SortKey],
        skip: int,
        limit: int,
    ) -> list[dict[str, Any]]: ...

    def sample(self, predicate: Predicate, size: int) -> list[dict[str, Any]]: ...


class MongoQuestionStore:
    """QuestionStore over a pymongo collection."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def count(self, predicate: Predicate) -> int:
        return self.collection.count_documents(to_mongo_filter(predicate))

    def find(self, predicate: Predicate) -> list[dict[str, Any]]:
        return list(self.collection.find(to_mongo_filter(predicate)))

    def find_sorted(
        self,
        predicate: Predicate,
        sort: list[SortKey],
        skip: int,
        limit: int,
    ) -> list[dict[str, Any]]:
        cursor = self.collection.find(to_mongo_filter(predicate))
        if sort:
            cursor = cursor.sort(to_mongo_sort(sort))
        return list(cursor.skip(skip).limit(limit))

    def sample(self, predicate: Predicate, size: int) -> list[dict[str, Any]]:
        pipeline = [
            {"$match": to_mongo_filter(predicate)},
            {"$sample": {"size": size}},
        ]
        return list(self.collection.aggregate(pipeline))
