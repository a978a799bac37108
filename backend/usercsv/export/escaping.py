from __future__ import annotations

# Characters that force a field to be quoted (RFC 4180, minimal quoting).
_NEEDS_QUOTING = (",", '"', "\n")


def escape_csv_field(value: str) -> str:
    """
    Quote a field only if it contains a comma, a double quote or a newline;
    inner double quotes are doubled. Empty stays empty (not "").
    """
    if value and any(ch in value for ch in _NEEDS_QUOTING):
        return '"' + value.replace('"', '""') + '"'
    return value


def join_csv_row(values: list[str]) -> str:
    return ",".join(escape_csv_field(v) for v in values)
