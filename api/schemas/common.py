"""
Common Pydantic schemas used across the API.

This module contains the camelCase base model and shared schemas for
errors, simple acknowledgements and health checks.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from services.field_mapping import snake_to_camel


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON."""

    class Config:
        alias_generator = snake_to_camel
        populate_by_name = True
        from_attributes = True


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Error message")
    detail: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
    path: Optional[str] = Field(None, description="Request path that caused the error")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Guest not found",
                "detail": None,
                "timestamp": "2025-10-15T12:00:00Z",
                "path": "/api/admin/guests"
            }
        }


class SuccessResponse(BaseModel):
    """Standard success response."""

    success: bool = Field(True, description="Operation success flag")
    message: Optional[str] = Field(None, description="Success message")

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Wedding event deleted successfully"
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")
    version: str = Field(..., description="API version")
    database: str = Field(..., description="Database connection status")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "timestamp": "2025-10-15T12:00:00Z",
                "version": "1.0.0",
                "database": "connected"
            }
        }
