# backend/usercsv/api/convert.py
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from usercsv.core.errors import InvalidInputError
from usercsv.pipeline.json_to_csv import (
    ConversionResult,
    convert_users_json,
    default_csv_filename,
    load_json_strict,
    sanitize_csv_filename,
)
from usercsv.schemas.common import ErrorResponse
from usercsv.schemas.convert import ConvertResponse, ValidateResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["convert"])

_ERROR_RESPONSES = {422: {"model": ErrorResponse}}


async def _read_input(
    file: Optional[UploadFile], json_text: Optional[str]
) -> tuple[str, Optional[str]]:
    """
    Returns (text, source_name). Uploaded file wins over the text field.
    """
    if file is not None:
        data = await file.read()
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise HTTPException(
                status_code=422,
                detail=InvalidInputError(
                    f"Uploaded file is not UTF-8 text: {e.reason}"
                ).to_dict(),
            ) from e
        return text, file.filename
    return json_text or "", None


def _require_non_empty(text: str) -> None:
    if not text.strip():
        raise HTTPException(
            status_code=422,
            detail={
                "code": "EMPTY_INPUT",
                "message": "Please enter JSON data or upload a file.",
            },
        )


def _convert_or_422(text: str) -> ConversionResult:
    try:
        return convert_users_json(text)
    except InvalidInputError as e:
        logger.warning("Conversion rejected: %s", e.message)
        raise HTTPException(status_code=422, detail=e.to_dict()) from e


@router.post("/validate", response_model=ValidateResponse, responses=_ERROR_RESPONSES)
async def validate_json(
    file: Optional[UploadFile] = File(None),
    json_text: Optional[str] = Form(None),
) -> ValidateResponse:
    """Syntax-only pre-check (is it JSON at all), before offering conversion."""
    text, _ = await _read_input(file, json_text)
    _require_non_empty(text)
    try:
        load_json_strict(text)
    except RecursionError:
        return ValidateResponse(valid=False, error="JSON nesting is too deep")
    except ValueError as e:
        return ValidateResponse(valid=False, error=str(e))
    return ValidateResponse(valid=True, error=None)


@router.post("/convert", response_model=ConvertResponse, responses=_ERROR_RESPONSES)
async def convert(
    file: Optional[UploadFile] = File(None),
    json_text: Optional[str] = Form(None),
    file_name: Optional[str] = Form(None),
) -> ConvertResponse:
    text, source_name = await _read_input(file, json_text)
    _require_non_empty(text)
    result = _convert_or_422(text)

    out_name = (
        sanitize_csv_filename(file_name, source_name=source_name)
        if file_name
        else default_csv_filename(source_name)
    )
    return ConvertResponse(
        csv=result.csv,
        file_name=out_name,
        row_count=result.row_count,
        warnings=result.warnings,
    )


@router.post("/convert/download", responses=_ERROR_RESPONSES)
async def convert_download(
    file: Optional[UploadFile] = File(None),
    json_text: Optional[str] = Form(None),
    file_name: Optional[str] = Form(None),
) -> Response:
    text, source_name = await _read_input(file, json_text)
    _require_non_empty(text)
    result = _convert_or_422(text)

    out_name = (
        sanitize_csv_filename(file_name, source_name=source_name)
        if file_name
        else default_csv_filename(source_name)
    )
    # RFC 5987 form keeps non-ASCII names intact
    disposition = f"attachment; filename*=UTF-8''{quote(out_name)}"
    return Response(
        content=result.csv.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": disposition,
            "X-Conversion-Warnings": str(len(result.warnings)),
        },
    )
