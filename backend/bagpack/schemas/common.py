"""
BagPack Backend: Shared Pydantic Schemas
=========================================

What:  The camelCase base model every API schema derives from, plus the
       error and health payloads shared by all routes.

Wire format:
    Fields are snake_case in Python and camelCase in JSON (`bagId`,
    `payloadVolume`). FastAPI serializes response models by alias, and
    populate_by_name lets clients send either spelling.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    What:  Error body for failures that carry one (422 capacity, 429, 500).
    Why:   404s are deliberately empty; everything else gets this shape.

    Example:
        {
            "error": "insufficient_capacity",
            "message": "Insufficient capacity in bag",
            "details": {"bag_id": 1, "capacity": 8.0, "payload": 10.0},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
