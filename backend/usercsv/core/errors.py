from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class UserFacingError(Exception):
    """
    An error that is safe and useful to show directly in UI.
    """
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    stage: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.stage:
            out["stage"] = self.stage
        if self.details:
            out["details"] = self.details
        return out


class InvalidInputError(UserFacingError):
    """
    Input text is not parseable JSON or is not a {"Users": [...]} document.

    The only error a conversion call surfaces to its caller; no partial CSV
    is produced when it is raised.
    """

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            code="INVALID_INPUT",
            message=message,
            details=details,
            stage="parse",
        )
