"""
Pipeline - JSON -> CSV conversion entry points.

Components:
- json_to_csv: parse the users export, render the CSV template, file/CLI helpers
"""

from .json_to_csv import (
    ConversionResult,
    convert_users_json,
    json_file_to_csv,
    json_to_csv,
)

__all__ = [
    "ConversionResult",
    "convert_users_json",
    "json_file_to_csv",
    "json_to_csv",
]
