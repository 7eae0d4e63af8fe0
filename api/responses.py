"""
Standardized API response models.
Documents the error envelope and health payload shared by all endpoints.
"""

from typing import Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error code, e.g. SYNTAX_FAILURE or NOT_FOUND")
    message: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Error timestamp"
    )


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Check timestamp"
    )


# OpenAPI documentation for the strict endpoints
STRICT_ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "No structured document in the message"},
    422: {"model": ErrorResponse, "description": "Syntax failure or structural violation"},
}
