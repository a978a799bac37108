from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import pytest


def pytest_sessionstart(session):
    """
    Make sure backend/ (where the usercsv package lives) is on sys.path,
    even when pytest is started from the repository root.
    """
    backend_dir = Path(__file__).resolve().parents[1]  # .../backend
    p = str(backend_dir)
    if p not in sys.path:
        sys.path.insert(0, p)


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def sample_users_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "users" / "sample_users.json"


@pytest.fixture
def sample_users_text(sample_users_path: Path) -> str:
    return sample_users_path.read_text(encoding="utf-8")


@pytest.fixture
def make_user() -> Callable[..., dict[str, Any]]:
    """
    Factory for one raw Cognito user dict:
      make_user(email="a@b.c", given_name="A", last_modified="2023-...Z")
    Attribute order follows keyword order.
    """

    def _make(
        username: str = "user-1",
        *,
        last_modified: Optional[str] = "2023-06-15T10:30:00.000Z",
        **attrs: str,
    ) -> dict[str, Any]:
        user: dict[str, Any] = {
            "Username": username,
            "Attributes": [{"Name": k, "Value": v} for k, v in attrs.items()],
            "UserCreateDate": "2023-01-01T00:00:00.000Z",
            "Enabled": True,
            "UserStatus": "CONFIRMED",
        }
        if last_modified is not None:
            user["UserLastModifiedDate"] = last_modified
        return user

    return _make


@pytest.fixture
def users_json() -> Callable[..., str]:
    """users_json(u1, u2, ...) -> '{"Users": [u1, u2, ...]}'"""

    def _dump(*users: dict[str, Any]) -> str:
        return json.dumps({"Users": list(users)}, ensure_ascii=False)

    return _dump


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "out"
    out.mkdir(parents=True, exist_ok=True)
    return out
