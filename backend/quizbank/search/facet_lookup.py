"""Facet repositories: resolve a facet id to its name and back."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from pymongo.collection import Collection
from pymongo.database import Database

from quizbank.core.config import settings
from quizbank.search.identifiers import to_object_id


class FacetKind(str, Enum):
    TOPIC = "topic"
    LANGUAGE = "language"
    POSITION = "position"

    @property
    def id_param(self) -> str:
        """Query parameter (and question field) holding facet ids."""
        return f"{self.value}_id"

    @property
    def name_param(self) -> str:
        """Query parameter (and question field) holding facet names."""
        return self.value

    @property
    def display_field(self) -> str:
        """Field of the facet's own collection that holds its name."""
        return "name" if self is FacetKind.LANGUAGE else "title"

    @property
    def collection_name(self) -> str:
        return {
            FacetKind.TOPIC: settings.TOPICS_COLLECTION,
            FacetKind.LANGUAGE: settings.LANGUAGES_COLLECTION,
            FacetKind.POSITION: settings.POSITIONS_COLLECTION,
        }[self]


@dataclass(frozen=True)
class FacetRecord:
    id: str
    name: str


class FacetLookup(Protocol):
    """Lookup pair backing one facet. Both return None on a miss."""

    def lookup_by_id(self, facet_id: str) -> FacetRecord | None: ...

    def lookup_by_name(self, name: str) -> FacetRecord | None: ...


class MongoFacetLookup:
    """FacetLookup over a facet collection (topics, languages, positions)."""

    def __init__(self, collection: Collection, display_field: str):
        self.collection = collection
        self.display_field = display_field

    @classmethod
    def for_kind(cls, db: Database, kind: FacetKind) -> "MongoFacetLookup":
        return cls(db[kind.collection_name], kind.display_field)

    def _to_record(self, document: dict | None) -> FacetRecord | None:
        if not document:
            return None
        return FacetRecord(id=str(document["_id"]), name=document.get(self.display_field))

    def lookup_by_id(self, facet_id: str) -> FacetRecord | None:
        object_id = to_object_id(facet_id)
        if object_id is None:
            # Not an identifier the store can hold
            return None
        document = self.collection.find_one({"_id": object_id}, {self.display_field: 1})
        return self._to_record(document)

    def lookup_by_name(self, name: str) -> FacetRecord | None:
        pattern = re.compile(f"^{re.escape(name)}$", re.IGNORECASE)
        document = self.collection.find_one({self.display_field: pattern}, {self.display_field: 1})
        return self._to_record(document)
