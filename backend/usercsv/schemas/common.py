"""
Common schemas used across the application.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Structured user-facing error (see core.errors.UserFacingError.to_dict)."""

    code: str = Field(..., description="Error code for client handling")
    message: str = Field(..., description="Error message safe to show in UI")
    stage: Optional[str] = Field(None, description="Pipeline stage that failed")
    details: Optional[dict[str, Any]] = Field(None, description="Diagnostics")


class ErrorResponse(BaseModel):
    """Standard error response format (FastAPI wraps it in `detail`)."""

    detail: ErrorDetail

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": {
                    "code": "INVALID_INPUT",
                    "message": "Invalid JSON format: Expecting value: line 1 column 1 (char 0)",
                    "stage": "parse",
                    "details": {"line": 1, "column": 1, "reason": "Expecting value"},
                }
            }
        }
    )
