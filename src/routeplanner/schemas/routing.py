"""Routing request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class StopInput(BaseModel):
    id: Optional[str] = Field(default=None, description="Caller-supplied identifier; generated when omitted.")
    name: Optional[str] = Field(default=None, description="Display name; defaults to the address or 'Stop N'.")
    address: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @model_validator(mode="after")
    def _coordinate_pair(self) -> "StopInput":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together.")
        return self


class OptimizeRequest(BaseModel):
    stops: List[StopInput]
    resolve_missing: bool = Field(
        default=True,
        description="Look up coordinates for stops that only have a name or address.",
    )
    compute_metrics: bool = Field(
        default=True,
        description="Score each leg with the directions service when one is configured.",
    )


class CsvImportRequest(BaseModel):
    content: str = Field(..., description="Raw CSV text, one stop per line.")
    start_index: int = Field(default=0, ge=0, description="Number of stops the caller already holds.")


class StopModel(BaseModel):
    id: str
    name: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class OrderedStopModel(StopModel):
    sequence: int


class LegModel(BaseModel):
    origin_id: str
    destination_id: str
    distance_m: float
    duration_s: float
    ok: bool
    error: Optional[str] = None
    geometry: List[Tuple[float, float]] = Field(default_factory=list, description="(lat, lon) road path when scored.")


class RouteMetricsModel(BaseModel):
    total_distance_m: float
    total_duration_s: float
    failed_legs: int
    partial: bool
    legs: List[LegModel]


class NavigationModel(BaseModel):
    google_maps_app: str
    google_maps_web: str


class OptimizeResponse(BaseModel):
    stops: List[OrderedStopModel]
    excluded: List[StopModel]
    metrics: Optional[RouteMetricsModel] = None
    navigation: Optional[NavigationModel] = None
    geojson: Dict[str, Any]
    metadata: dict


class CsvImportResponse(BaseModel):
    stops: List[StopModel]
