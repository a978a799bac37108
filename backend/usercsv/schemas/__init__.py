"""
Schemas - Pydantic models for request/response validation.

This module contains the response schemas used by the API endpoints.
"""

from .common import ErrorDetail, ErrorResponse
from .convert import ConvertResponse, ValidateResponse

__all__ = [
    # Conversion schemas
    "ConvertResponse",
    "ValidateResponse",
    # Common schemas
    "ErrorDetail",
    "ErrorResponse",
]
