"""
Business logic for the forest fires resource.

``ForestFireService`` implements listing with filters and pagination,
lookups by a single parameter (year or autonomous community) or by
the composite key, create, update, the three delete variants and the
two seed operations.  It works against a ``ForestFireStore`` passed in
by the caller and reports failures by raising the errors defined in
``core.errors``; records are always returned without the internal id.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from forest_fires_api.app.core.db import INT64_MAX, DuplicateKeyError, ForestFireStore, RecordQuery
from forest_fires_api.app.core.errors import (
    BadRequestError,
    ConflictError,
    NoDataLoadedError,
    NotFoundError,
)
from forest_fires_api.app.services.seed_data import ALVARO_DATA, INITIAL_DATA
from forest_fires_api.app.services.validation import is_number, parse_number, parse_year, validate_record

logger = logging.getLogger(__name__)

# Query parameters with a meaning of their own; every other parameter
# is an equality filter on the record field of the same name.
RESERVED_PARAMS = ("from", "to", "offset", "limit")

LOAD_DATA_HINT = "Send a GET to /forest-fires/loadInitialData to load the initial data"


def _year_param(name: str, raw: Optional[str]) -> Optional[Any]:
    if raw is None or raw == "":
        return None
    value = parse_year(raw)
    if value is None:
        raise BadRequestError(f"Query parameter {name} must be a number")
    return value


def _count_param(name: str, raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    value = parse_number(raw)
    if value is None:
        raise BadRequestError(f"Query parameter {name} must be a number")
    if value < 0:
        raise BadRequestError(f"Query parameter {name} must not be negative")
    if value > INT64_MAX:
        raise BadRequestError(f"Query parameter {name} is too large")
    return int(value)


def build_list_query(params: Mapping[str, str]) -> RecordQuery:
    """Translate list query parameters into a ``RecordQuery``.

    Numeric‑looking filter values compare as numbers, anything else as
    a lowercase string.  ``from`` and ``to`` drop any fractional part.
    ``limit=0`` means no limit.
    """
    equals: Dict[str, Any] = {}
    for key, raw in params.items():
        if key in RESERVED_PARAMS:
            continue
        number = parse_number(raw)
        equals[key] = number if number is not None else raw.lower()
    limit = _count_param("limit", params.get("limit"))
    return RecordQuery(
        equals=equals,
        year_from=_year_param("from", params.get("from")),
        year_to=_year_param("to", params.get("to")),
        offset=_count_param("offset", params.get("offset")) or 0,
        limit=limit or None,
    )


def single_param_query(param: str) -> RecordQuery:
    """A year when ``param`` is numeric, otherwise a community name."""
    number = parse_year(param)
    if number is not None:
        return RecordQuery(equals={"year": number})
    return RecordQuery(equals={"autonomous_community": param.lower()})


def _path_key(year: str, autonomous_community: str) -> Tuple[Any, str]:
    # A non-numeric year is kept as text and can never match.
    number = parse_year(year)
    return (number if number is not None else year), autonomous_community.lower()


def key_query(year: str, autonomous_community: str) -> RecordQuery:
    return RecordQuery.by_key(*_path_key(year, autonomous_community))


class ForestFireService:
    """CRUD operations over forest fire records."""

    def __init__(self, store: ForestFireStore) -> None:
        self.store = store

    async def list_records(self, params: Mapping[str, str]) -> List[Dict[str, Any]]:
        """Return the records matching the query parameters.

        Raises ``NotFoundError`` when nothing matches.
        """
        query = build_list_query(params)
        records = self.store.find(query)
        if not records:
            raise NotFoundError("No data found")
        return records

    async def get_by_param(self, param: str) -> List[Dict[str, Any]]:
        if self.store.count() == 0:
            raise NoDataLoadedError("No data available", hint=LOAD_DATA_HINT)
        records = self.store.find(single_param_query(param))
        if not records:
            raise NotFoundError(f"No records for parameter: {param.lower()}")
        return records

    async def get_by_key(self, year: str, autonomous_community: str) -> Dict[str, Any]:
        record = self.store.find_one(*_path_key(year, autonomous_community))
        if record is None:
            raise NotFoundError("Record not found")
        return record

    async def create(self, payload: Any) -> Dict[str, Any]:
        record = validate_record(payload)
        try:
            created = self.store.insert(record)
        except DuplicateKeyError as exc:
            raise ConflictError("A record with that year and autonomous community already exists") from exc
        logger.info("Created record %s/%s", created["year"], created["autonomous_community"])
        return created

    async def update(self, year: str, autonomous_community: str, payload: Any) -> Dict[str, Any]:
        """Replace the non‑key fields of the record at the path key.

        The key in the body must match the path key; a differing key is
        reported as a conflict before the rest of the body is checked.
        """
        path_year, path_community = _path_key(year, autonomous_community)
        if isinstance(payload, Mapping):
            body_year = payload.get("year")
            body_community = payload.get("autonomous_community")
            year_differs = is_number(body_year) and body_year != path_year
            community_differs = isinstance(body_community, str) and body_community.lower() != path_community
            if year_differs or community_differs:
                raise ConflictError("The year and autonomous community of a record cannot be changed")

        record = validate_record(payload)
        changes = {
            "number_of_accidents": record["number_of_accidents"],
            "percentage_of_large_fires": record["percentage_of_large_fires"],
        }
        if self.store.update(record["year"], record["autonomous_community"], changes) == 0:
            raise NotFoundError("Record not found")
        logger.info("Updated record %s/%s", record["year"], record["autonomous_community"])
        return record

    async def delete_all(self) -> int:
        removed = self.store.remove()
        if removed == 0:
            raise NotFoundError("No data to delete")
        logger.info("Deleted all %d records", removed)
        return removed

    async def delete_by_param(self, param: str) -> int:
        if self.store.count() == 0:
            raise NoDataLoadedError("No data available to delete")
        removed = self.store.remove(single_param_query(param))
        if removed == 0:
            raise NotFoundError(f"No records match: {param.lower()}")
        logger.info("Deleted %d records for parameter %s", removed, param.lower())
        return removed

    async def delete_by_key(self, year: str, autonomous_community: str) -> None:
        if self.store.remove(key_query(year, autonomous_community)) == 0:
            raise NotFoundError("Record not found")
        logger.info("Deleted record %s/%s", year, autonomous_community.lower())

    async def load_initial_data(self) -> Tuple[bool, List[Dict[str, Any]]]:
        """Seed the initial dataset into an empty store.

        Returns ``(True, inserted)`` when the data was loaded, or
        ``(False, current_records)`` when the store already had data.
        """
        if self.store.count() > 0:
            return False, self.store.find()
        inserted = self.store.insert_many(INITIAL_DATA)
        logger.info("Loaded %d initial records", len(inserted))
        return True, inserted

    async def load_alvaro_data(self) -> List[Dict[str, Any]]:
        """Append the 2006/2016 dataset, skipping keys that already exist."""
        records = [validate_record(item) for item in ALVARO_DATA]
        inserted = self.store.insert_many(records)
        logger.info("Loaded %d of %d historical records", len(inserted), len(records))
        return inserted
