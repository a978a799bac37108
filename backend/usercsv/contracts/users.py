from __future__ import annotations

from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)


# ----------------------------
# Cognito ListUsers export
# ----------------------------
# Dates are kept as raw strings: a malformed date must not fail validation,
# it degrades to 0 at projection time (see normalize/dates.py).


class Attribute(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: StrictStr = Field(..., alias="Name")
    value: Optional[StrictStr] = Field(default="", alias="Value")


class UserRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    username: Optional[StrictStr] = Field(default=None, alias="Username")
    attributes: list[Attribute] = Field(default_factory=list, alias="Attributes")
    created_at: Optional[StrictStr] = Field(default=None, alias="UserCreateDate")
    last_modified_at: Optional[StrictStr] = Field(
        default=None, alias="UserLastModifiedDate"
    )
    enabled: Optional[StrictBool] = Field(default=None, alias="Enabled")
    status: Optional[StrictStr] = Field(default=None, alias="UserStatus")

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_attributes_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class UserCollection(BaseModel):
    """
    Top-level document: {"Users": [UserRecord, ...]}.

    Other top-level keys (PaginationToken etc.) are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    users: list[UserRecord] = Field(..., alias="Users")
