"""
Forest fires endpoints for API v1.

CRUD routes over forest fire statistics keyed by year and autonomous
community, plus the seed and documentation helpers.  Request bodies
are read as raw JSON so that missing or mistyped fields are reported
as 400 with the violated rule (see ``services.validation``).

The fixed paths (``loadInitialData``, ``loadAlvaroData``, ``docs``)
are declared before ``/{param}`` so they are not taken for a year or
community name.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from forest_fires_api.app.api.deps import get_forest_fire_service, get_settings
from forest_fires_api.app.core.config import Settings
from forest_fires_api.app.core.errors import BadRequestError, MethodNotAllowedError
from forest_fires_api.app.schemas.forest_fire import (
    DeleteResult,
    ForestFireRecord,
    RecordListMessage,
    RecordMessage,
)
from forest_fires_api.app.services.forest_fire_service import ForestFireService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise BadRequestError("Request body must be valid JSON") from exc


@router.get("/docs", response_class=RedirectResponse, status_code=status.HTTP_302_FOUND)
async def documentation(settings: Settings = Depends(get_settings)) -> RedirectResponse:
    """Redirect to the public API documentation."""
    return RedirectResponse(settings.docs_url, status_code=status.HTTP_302_FOUND)


@router.get("/loadInitialData", response_model=RecordListMessage)
async def load_initial_data(
    service: ForestFireService = Depends(get_forest_fire_service),
) -> Any:
    """Load the 2024 dataset if the store is empty.

    Returns 409 together with the current records when data is already
    present.
    """
    logger.info("New GET to /forest-fires/loadInitialData")
    loaded, records = await service.load_initial_data()
    if not loaded:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Data is already loaded", "data": records},
        )
    return RecordListMessage(message="Initial data loaded", data=records)


@router.get("/loadAlvaroData", response_model=RecordListMessage)
async def load_alvaro_data(
    service: ForestFireService = Depends(get_forest_fire_service),
) -> RecordListMessage:
    """Append the 2006 and 2016 datasets; existing keys are left untouched."""
    logger.info("New GET to /forest-fires/loadAlvaroData")
    records = await service.load_alvaro_data()
    return RecordListMessage(message="Historical data loaded", data=records)


@router.get("", response_model=List[ForestFireRecord])
async def list_forest_fires(
    request: Request,
    service: ForestFireService = Depends(get_forest_fire_service),
) -> List[ForestFireRecord]:
    """List records.

    - any record field as a query parameter filters by equality
      (e.g. ``?autonomous_community=aragon``);
    - **from**, **to**: inclusive year range;
    - **offset**, **limit**: pagination over the matches, in insertion order.
    """
    logger.info("New GET to /forest-fires")
    return await service.list_records(request.query_params)


@router.post("", response_model=RecordMessage, status_code=status.HTTP_201_CREATED)
async def create_forest_fire(
    request: Request,
    service: ForestFireService = Depends(get_forest_fire_service),
) -> RecordMessage:
    """Create a record.  409 if the year and community already exist."""
    logger.info("New POST to /forest-fires")
    payload = await _read_json(request)
    record = await service.create(payload)
    return RecordMessage(message="Record created", data=record)


@router.put("")
async def update_collection() -> None:
    logger.info("Rejected PUT to /forest-fires")
    raise MethodNotAllowedError("PUT is not allowed on the collection")


@router.delete("", response_model=DeleteResult)
async def delete_all_forest_fires(
    service: ForestFireService = Depends(get_forest_fire_service),
) -> DeleteResult:
    logger.info("New DELETE to /forest-fires")
    removed = await service.delete_all()
    return DeleteResult(message=f"Deleted {removed} records", deleted=removed)


@router.get("/{param}", response_model=List[ForestFireRecord])
async def get_by_param(
    param: str,
    service: ForestFireService = Depends(get_forest_fire_service),
) -> List[ForestFireRecord]:
    """Records for a year (numeric parameter) or an autonomous community."""
    logger.info("New GET to /forest-fires/%s", param)
    return await service.get_by_param(param)


@router.post("/{param}")
async def create_on_resource(param: str) -> None:
    logger.info("Rejected POST to /forest-fires/%s", param)
    raise MethodNotAllowedError("POST is not allowed on a specific resource")


@router.delete("/{param}", response_model=DeleteResult)
async def delete_by_param(
    param: str,
    service: ForestFireService = Depends(get_forest_fire_service),
) -> DeleteResult:
    """Delete every record for a year or an autonomous community."""
    logger.info("New DELETE to /forest-fires/%s", param)
    removed = await service.delete_by_param(param)
    return DeleteResult(
        message=f"Deleted {removed} records for parameter '{param.lower()}'", deleted=removed
    )


@router.get("/{year}/{autonomous_community}", response_model=ForestFireRecord)
async def get_by_key(
    year: str,
    autonomous_community: str,
    service: ForestFireService = Depends(get_forest_fire_service),
) -> ForestFireRecord:
    logger.info("New GET to /forest-fires/%s/%s", year, autonomous_community)
    return await service.get_by_key(year, autonomous_community)


@router.put("/{year}/{autonomous_community}", response_model=RecordMessage)
async def update_forest_fire(
    year: str,
    autonomous_community: str,
    request: Request,
    service: ForestFireService = Depends(get_forest_fire_service),
) -> RecordMessage:
    """Replace the counts of an existing record.

    The body must carry the full record; its year and autonomous
    community must equal the path (409 otherwise).
    """
    logger.info("New PUT to /forest-fires/%s/%s", year, autonomous_community)
    payload = await _read_json(request)
    record = await service.update(year, autonomous_community, payload)
    return RecordMessage(message="Record updated", data=record)


@router.delete("/{year}/{autonomous_community}", response_model=DeleteResult)
async def delete_by_key(
    year: str,
    autonomous_community: str,
    service: ForestFireService = Depends(get_forest_fire_service),
) -> DeleteResult:
    logger.info("New DELETE to /forest-fires/%s/%s", year, autonomous_community)
    await service.delete_by_key(year, autonomous_community)
    return DeleteResult(message="Record deleted", deleted=1)


@router.delete("/{year}/{autonomous_community}/{extra:path}")
async def delete_too_many_segments(year: str, autonomous_community: str, extra: str) -> None:
    logger.info("Rejected DELETE to /forest-fires/%s/%s/%s", year, autonomous_community, extra)
    raise BadRequestError("Too many parameters. Use only /{year}/{autonomous_community}")
