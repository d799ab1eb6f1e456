"""
Facet resolution: translate facet names to identifiers and back.

Resolution is best effort. A token that cannot be resolved, because the store
has no such entry or because the lookup itself failed, passes through with
its literal value so the filter builder can still use it. The reason is kept
on the result instead of being swallowed.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from quizbank.search.facet_lookup import FacetKind, FacetLookup

logger = logging.getLogger(__name__)


class ResolutionStatus(str, Enum):
    RESOLVED_BY_ID = "resolved_by_id"
    RESOLVED_BY_NAME = "resolved_by_name"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"
    NO_INPUT = "no_input"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one facet value.

    For pass-through statuses ``id`` and ``name`` are exactly what the caller
    supplied.
    """

    id: str | None
    name: str | None
    status: ResolutionStatus

    @property
    def resolved(self) -> bool:
        return self.status in (ResolutionStatus.RESOLVED_BY_ID, ResolutionStatus.RESOLVED_BY_NAME)


@dataclass(frozen=True)
class MultiResolution:
    """Outcome of resolving comma-separated lists."""

    ids: tuple[str, ...]
    names: tuple[str, ...]
    resolutions: tuple[Resolution, ...] = ()

    @property
    def ids_csv(self) -> str | None:
        return ",".join(self.ids) if self.ids else None

    @property
    def names_csv(self) -> str | None:
        return ",".join(self.names) if self.names else None


def split_csv(value: str | None) -> list[str]:
    """Split on commas, trim whitespace, drop empty tokens."""
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def dedupe_preserving_order(values: Iterable[str]) -> list[str]:
    """Remove duplicates, keeping the first occurrence of each value."""
    return list(dict.fromkeys(values))


class FacetResolver:
    """Resolves one facet kind through its lookup pair."""

    def __init__(self, kind: FacetKind, lookup: FacetLookup):
        self.kind = kind
        self.lookup = lookup

    def resolve(self, facet_id: str | None, name: str | None) -> Resolution:
        """
        Resolve a single id/name pair.

        The id wins when it resolves; otherwise the name is tried. When
        neither resolves the original pair is returned unchanged.
        """
        if not facet_id and not name:
            return Resolution(facet_id, name, ResolutionStatus.NO_INPUT)

        try:
            if facet_id:
                record = self.lookup.lookup_by_id(facet_id)
                if record is not None:
                    return Resolution(facet_id, record.name, ResolutionStatus.RESOLVED_BY_ID)
                logger.warning("%s with ID %s not found", self.kind.value.capitalize(), facet_id)

            if name:
                record = self.lookup.lookup_by_name(name)
                if record is not None:
                    return Resolution(record.id, name, ResolutionStatus.RESOLVED_BY_NAME)
                logger.warning("%s with name %s not found", self.kind.value.capitalize(), name)
        except Exception:
            logger.error(
                "Error resolving %s data",
                self.kind.value,
                exc_info=True,
                extra={"facet_id": facet_id, "facet_name": name},
            )
            return Resolution(facet_id, name, ResolutionStatus.LOOKUP_FAILED)

        return Resolution(facet_id, name, ResolutionStatus.NOT_FOUND)

    def resolve_many(self, ids_csv: str | None, names_csv: str | None) -> MultiResolution:
        """
        Resolve comma-separated id and name lists.

        Every token is resolved on its own, duplicates included. Ids are
        processed before names and the two channels are merged, then both
        output lists are deduplicated in first-seen order.
        """
        resolutions: list[Resolution] = []
        for token in split_csv(ids_csv):
            resolutions.append(self.resolve(token, None))
        for token in split_csv(names_csv):
            resolutions.append(self.resolve(None, token))

        ids = dedupe_preserving_order(r.id for r in resolutions if r.id)
        names = dedupe_preserving_order(r.name for r in resolutions if r.name)
        return MultiResolution(tuple(ids), tuple(names), tuple(resolutions))


class FacetResolvers:
    """Resolvers for every facet kind, used to preprocess request parameters."""

    def __init__(self, resolvers: Mapping[FacetKind, FacetResolver]):
        missing = set(FacetKind) - set(resolvers)
        if missing:
            raise ValueError(f"Missing resolvers for: {sorted(k.value for k in missing)}")
        self.resolvers = dict(resolvers)

    @classmethod
    def from_lookups(cls, lookups: Mapping[FacetKind, FacetLookup]) -> "FacetResolvers":
        return cls({kind: FacetResolver(kind, lookup) for kind, lookup in lookups.items()})

    def __getitem__(self, kind: FacetKind) -> FacetResolver:
        return self.resolvers[kind]

    def rewrite_query_params(self, params: Mapping[str, Any], multi: bool = True) -> dict[str, Any]:
        """
        Return a copy of ``params`` with facet id/name parameters rewritten to
        their resolved values.

        ``multi`` treats values as comma-separated lists; otherwise each value
        is a single id or name.
        """
        rewritten = dict(params)
        for kind, resolver in self.resolvers.items():
            facet_id = _first(params.get(kind.id_param))
            name = _first(params.get(kind.name_param))
            if not facet_id and not name:
                continue

            if multi:
                result = resolver.resolve_many(facet_id, name)
                rewritten[kind.id_param] = result.ids_csv
                rewritten[kind.name_param] = result.names_csv
            else:
                resolution = resolver.resolve(facet_id, name)
                rewritten[kind.id_param] = resolution.id
                rewritten[kind.name_param] = resolution.name
        return rewritten


def _first(value: Any) -> str | None:
    """Collapse a repeated query parameter into one comma-separated value."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        joined = ",".join(str(v) for v in value if v)
        return joined or None
    return str(value) or None
