"""
Schemas for the JSON -> CSV conversion endpoints.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ValidateResponse(BaseModel):
    """Result of the JSON syntax pre-check."""

    valid: bool = Field(..., description="True if the text parses as JSON")
    error: Optional[str] = Field(None, description="Parser message if not valid")


class ConvertResponse(BaseModel):
    """CSV text plus what the UI needs to offer it for download."""

    csv: str = Field(..., description="CSV document (header + one row per user)")
    file_name: str = Field(..., description="Suggested download file name")
    row_count: int = Field(..., ge=0, description="Number of user rows (header excluded)")
    warnings: List[str] = Field(default_factory=list, description="Date conversion anomalies")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "csv": "profile,address,...,cognito:username\n,,...,jane@example.com",
                "file_name": "users_converted.csv",
                "row_count": 1,
                "warnings": [],
            }
        }
    )
