"""
DevCamper Backend — Pydantic Response Schemas
===============================================

What:  Pydantic models describing every JSON body the API returns.
Why:   FastAPI uses them to serialize responses and to generate OpenAPI docs.

Envelope convention:
    Success: {"success": true, "msg": "..."}
    Failure: {"success": false, "error": "..." | ["...", "..."]}
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class BootcampMessageResponse(BaseModel):
    """
    What:  Fixed success envelope returned by the bootcamp handlers.
    Who:   Every route under /api/v1/bootcamps.
    """
    success: bool = Field(default=True, description="Always true on success")
    msg: str = Field(description="Human-readable description of the action")


class ErrorResponse(BaseModel):
    """
    What:  Uniform error body produced by the error normalizer.

    `error` is a list only for validation failures, one entry per invalid field.
    """
    success: bool = Field(default=False, description="Always false on error")
    error: Union[str, List[str]] = Field(description="Error message(s)")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class GeoLocation(BaseModel):
    """
    What:  A single geocoding match.
    Who:   Returned by GeocoderService.geocode().
    """
    latitude: float
    longitude: float
    formatted_address: str = Field(default="", description="Address as the provider formats it")
    provider: str = Field(default="", description="geopy service name that answered")
    raw: Optional[Dict[str, Any]] = Field(default=None, description="Provider-specific payload")

    @property
    def coordinates(self) -> List[float]:
        """[longitude, latitude], the order GeoJSON points use."""
        return [self.longitude, self.latitude]
