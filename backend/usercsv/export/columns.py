from __future__ import annotations

from typing import Callable, Dict, Optional

from ..contracts.users import UserRecord
from ..normalize.dates import iso_to_epoch_millis

# ---------------------------------------------------------------------
# Output columns (header of the Cognito CSV import template, exact order)
# ---------------------------------------------------------------------

OUTPUT_COLUMNS: tuple[str, ...] = (
    "profile",
    "address",
    "birthdate",
    "gender",
    "preferred_username",
    "updated_at",
    "website",
    "picture",
    "phone_number",
    "phone_number_verified",
    "zoneinfo",
    "custom:custId",
    "custom:contactId",
    "custom:subStatus",
    "locale",
    "email",
    "email_verified",
    "given_name",
    "family_name",
    "middle_name",
    "name",
    "nickname",
    "cognito:mfa_enabled",
    "cognito:username",
)


def get_attribute_value(user: UserRecord, attribute_name: str) -> str:
    """
    Value of the first attribute named `attribute_name` (exact match),
    "" if the user has no such attribute.
    """
    for attr in user.attributes or ():
        if attr.name == attribute_name:
            return attr.value or ""
    return ""


# (user, warnings) -> cell value
Projection = Callable[[UserRecord, Optional[list[str]]], str]


def _project_updated_at(user: UserRecord, warnings: Optional[list[str]]) -> str:
    if not user.last_modified_at:
        return ""
    sink: list[str] = []
    millis = iso_to_epoch_millis(user.last_modified_at, sink)
    if warnings is not None:
        who = user.username or "<no Username>"
        warnings.extend(f"user {who}: {m}" for m in sink)
    return str(millis)


def _project_email(user: UserRecord, warnings: Optional[list[str]]) -> str:
    return get_attribute_value(user, "email")


# Columns that are NOT a plain attribute lookup under their own name.
# cognito:username carries the email: the directory username is not usable
# by the import target.
COLUMN_PROJECTIONS: Dict[str, Projection] = {
    "updated_at": _project_updated_at,
    "cognito:username": _project_email,
}


def project_value(
    user: UserRecord, column: str, warnings: Optional[list[str]] = None
) -> str:
    projection = COLUMN_PROJECTIONS.get(column)
    if projection is None:
        return get_attribute_value(user, column)
    return projection(user, warnings)


def project_row(
    user: UserRecord,
    columns: tuple[str, ...] = OUTPUT_COLUMNS,
    warnings: Optional[list[str]] = None,
) -> list[str]:
    """One raw (unescaped) value per column, in column order."""
    return [project_value(user, col, warnings) for col in columns]
