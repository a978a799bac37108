from __future__ import annotations

from typing import Optional

from ..contracts.users import UserCollection
from .columns import OUTPUT_COLUMNS, project_row
from .escaping import join_csv_row


def render_header() -> str:
    # column names are fixed ASCII identifiers, nothing to escape
    return ",".join(OUTPUT_COLUMNS)


def render_users_csv(
    collection: UserCollection, *, warnings: Optional[list[str]] = None
) -> str:
    """
    Users -> CSV text.

    IMPORTANT:
      - header first, then one row per user in input order
        (no sorting / filtering / dedup);
      - every row has exactly len(OUTPUT_COLUMNS) fields;
      - rows joined with "\\n", no trailing newline.
    """
    rows: list[str] = [render_header()]
    for user in collection.users:
        rows.append(join_csv_row(project_row(user, OUTPUT_COLUMNS, warnings)))
    return "\n".join(rows)
