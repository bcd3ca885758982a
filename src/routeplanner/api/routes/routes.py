"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import CsvImportRequest, CsvImportResponse, OptimizeRequest, OptimizeResponse, StopModel
from ...services.routing.errors import InsufficientStopsError
from ...services.routing.service import import_stops_csv, optimize_stops

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizeRequest) -> OptimizeResponse:
    try:
        return optimize_stops(payload)
    except InsufficientStopsError as exc:
        # the caller needs to know which stops could not be located
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(exc),
                "excluded": [
                    StopModel(id=stop.stop_id, name=stop.name, address=stop.address).model_dump()
                    for stop in exc.excluded
                ],
            },
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc


@router.post("/import-csv", response_model=CsvImportResponse, status_code=status.HTTP_200_OK)
def import_csv(payload: CsvImportRequest) -> CsvImportResponse:
    """Parse CSV text into stops without ordering them."""
    try:
        return import_stops_csv(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
