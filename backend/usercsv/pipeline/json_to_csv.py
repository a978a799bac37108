from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from usercsv.contracts.users import UserCollection
from usercsv.core.errors import InvalidInputError
from usercsv.export.renderer import render_users_csv

logger = logging.getLogger(__name__)

DEFAULT_CSV_NAME = "users_converted.csv"

_FORBIDDEN_FILENAME_CHARS = ["\\", "/", ":", "*", "?", "<", ">", "|", '"']


@dataclass(frozen=True)
class ConversionResult:
    csv: str
    row_count: int
    warnings: list[str] = field(default_factory=list)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def load_json_strict(json_text: str) -> Any:
    """
    json.loads restricted to standard JSON: NaN / Infinity / -Infinity are
    rejected. Raises ValueError (incl. JSONDecodeError), TypeError, or
    RecursionError for pathologically nested input.
    """
    return json.loads(json_text, parse_constant=_reject_constant)


def parse_users_json(json_text: str) -> UserCollection:
    """
    JSON text -> UserCollection.

    Raises InvalidInputError when the text is not JSON or is not
    an object holding a "Users" array of user objects.
    """
    try:
        raw = load_json_strict(json_text)
    except RecursionError as e:
        raise InvalidInputError(
            "Invalid JSON format: nesting is too deep",
            details={"reason": "maximum nesting depth exceeded"},
        ) from e
    except (TypeError, ValueError) as e:
        details = None
        if isinstance(e, json.JSONDecodeError):
            details = {"line": e.lineno, "column": e.colno, "reason": e.msg}
        raise InvalidInputError(
            f"Invalid JSON format: {e}", details=details
        ) from e

    try:
        return UserCollection.model_validate(raw)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(p) for p in err["loc"]),
                "msg": err["msg"],
            }
            for err in e.errors()
        ]
        raise InvalidInputError(
            'Invalid JSON format: expected an object with a "Users" array of user records',
            details={"errors": errors},
        ) from e


def convert_users_json(json_text: str) -> ConversionResult:
    """
    Full pipeline with diagnostics: parse -> project -> escape -> join.

    Malformed dates do not abort the conversion; they show up as 0 in
    updated_at and as messages in `warnings`.
    """
    collection = parse_users_json(json_text)

    warnings: list[str] = []
    csv_text = render_users_csv(collection, warnings=warnings)

    logger.info(
        "Converted %d users to CSV (%d date warnings)",
        len(collection.users),
        len(warnings),
    )
    return ConversionResult(
        csv=csv_text, row_count=len(collection.users), warnings=warnings
    )


# --------------------------------------------------------------------
# Public API: json_to_csv(json_text) -> csv_text
# --------------------------------------------------------------------
def json_to_csv(json_text: str) -> str:
    return convert_users_json(json_text).csv


def json_file_to_csv(in_json_path: Path, out_csv_path: Path) -> ConversionResult:
    """
    JSON file -> CSV file.

    IMPORTANT:
      - nothing is written when the input is invalid;
      - CSV is written exactly as produced (no trailing newline added).
    """
    result = convert_users_json(Path(in_json_path).read_text(encoding="utf-8"))

    out_csv_path = Path(out_csv_path)
    out_csv_path.parent.mkdir(parents=True, exist_ok=True)
    out_csv_path.write_text(result.csv, encoding="utf-8", newline="")
    return result


def _with_csv_ext(name: str) -> str:
    lower = name.lower()
    if lower.endswith(".csv"):
        return name
    if lower.endswith(".json"):
        return name[:-5] + ".csv"
    return name + ".csv"


def default_csv_filename(source_name: Optional[str] = None) -> str:
    """
    "users.json" -> "users_converted.csv"; no source -> "users_converted.csv".
    """
    stem = Path(source_name).stem.strip() if source_name else ""
    if not stem:
        return DEFAULT_CSV_NAME
    return f"{stem}_converted.csv"


def sanitize_csv_filename(name: Optional[str], *, source_name: Optional[str] = None) -> str:
    """
    User-chosen download name -> filesystem-safe "*.csv" name.
    Falls back to default_csv_filename(source_name) if nothing usable is left.
    """
    s = (name or "").strip()
    for bad in _FORBIDDEN_FILENAME_CHARS:
        s = s.replace(bad, " ")
    s = " ".join(s.split())
    if not s or s.lower() == ".csv":
        return default_csv_filename(source_name)
    return _with_csv_ext(s)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Convert a Cognito users JSON export to the CSV import template"
    )
    p.add_argument("in_json", help="Path to input users JSON (list-users output)")
    p.add_argument(
        "out_csv",
        nargs="?",
        default=None,
        help="Path to output CSV (default: <input>_converted.csv next to input)",
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = _build_arg_parser().parse_args(argv)

    in_json = Path(args.in_json)
    if args.out_csv:
        out_csv = Path(args.out_csv)
    else:
        out_csv = in_json.with_name(default_csv_filename(in_json.name))

    try:
        result = json_file_to_csv(in_json, out_csv)
    except InvalidInputError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return 2

    for w in result.warnings:
        print(f"[WARN] {w}")
    print(f"[OK] {result.row_count} users written to {out_csv.resolve()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
