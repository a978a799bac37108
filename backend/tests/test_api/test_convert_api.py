"""
Tests for the /api conversion endpoints.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from usercsv.export.columns import OUTPUT_COLUMNS
from usercsv.main import app

HEADER = ",".join(OUTPUT_COLUMNS)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.text == "ok"


class TestValidate:
    def test_valid_text(self, client: TestClient) -> None:
        r = client.post("/api/validate", data={"json_text": '{"Users": []}'})
        assert r.status_code == 200
        assert r.json() == {"valid": True, "error": None}

    def test_invalid_text(self, client: TestClient) -> None:
        r = client.post("/api/validate", data={"json_text": "{oops"})
        assert r.status_code == 200
        body = r.json()
        assert body["valid"] is False
        assert body["error"]

    def test_syntax_only(self, client: TestClient) -> None:
        # parseable JSON of the wrong shape passes the pre-check
        r = client.post("/api/validate", data={"json_text": "[1, 2]"})
        assert r.json()["valid"] is True

    def test_deep_nesting_is_not_valid(self, client: TestClient) -> None:
        r = client.post("/api/validate", data={"json_text": "[" * 100000})
        assert r.status_code == 200
        assert r.json()["valid"] is False

    def test_nan_is_not_valid(self, client: TestClient) -> None:
        r = client.post("/api/validate", data={"json_text": '{"Users": [], "x": NaN}'})
        assert r.status_code == 200
        assert r.json()["valid"] is False

    def test_empty(self, client: TestClient) -> None:
        r = client.post("/api/validate", data={"json_text": "  "})
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "EMPTY_INPUT"


class TestConvert:
    def test_text_input(self, client: TestClient, sample_users_text: str) -> None:
        r = client.post("/api/convert", data={"json_text": sample_users_text})
        assert r.status_code == 200
        body = r.json()
        assert body["csv"].startswith(HEADER + "\n")
        assert body["row_count"] == 3
        assert body["file_name"] == "users_converted.csv"
        assert len(body["warnings"]) == 1

    def test_file_upload_names_output_after_source(
        self, client: TestClient, sample_users_text: str
    ) -> None:
        r = client.post(
            "/api/convert",
            files={"file": ("prod-users.json", sample_users_text.encode("utf-8"), "application/json")},
        )
        assert r.status_code == 200
        assert r.json()["file_name"] == "prod-users_converted.csv"

    def test_file_upload_with_bom(self, client: TestClient) -> None:
        data = b"\xef\xbb\xbf" + b'{"Users": []}'
        r = client.post("/api/convert", files={"file": ("u.json", data, "application/json")})
        assert r.status_code == 200
        assert r.json()["csv"] == HEADER

    def test_user_chosen_file_name(self, client: TestClient) -> None:
        r = client.post(
            "/api/convert",
            data={"json_text": '{"Users": []}', "file_name": "march import"},
        )
        assert r.json()["file_name"] == "march import.csv"

    def test_invalid_json(self, client: TestClient) -> None:
        r = client.post("/api/convert", data={"json_text": '{"Users": ['})
        assert r.status_code == 422
        detail = r.json()["detail"]
        assert detail["code"] == "INVALID_INPUT"
        assert detail["stage"] == "parse"
        assert "csv" not in r.json()

    def test_shape_mismatch(self, client: TestClient) -> None:
        r = client.post("/api/convert", data={"json_text": '{"Items": []}'})
        assert r.status_code == 422
        assert r.json()["detail"]["details"]["errors"]

    def test_deep_nesting(self, client: TestClient) -> None:
        r = client.post("/api/convert", data={"json_text": "[" * 100000})
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "INVALID_INPUT"

    def test_lowercase_users_key(self, client: TestClient) -> None:
        r = client.post("/api/convert", data={"json_text": '{"users": []}'})
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "INVALID_INPUT"

    def test_non_utf8_upload(self, client: TestClient) -> None:
        r = client.post(
            "/api/convert",
            files={"file": ("u.json", b"\xff\xfe\x00bad", "application/json")},
        )
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "INVALID_INPUT"

    def test_missing_input(self, client: TestClient) -> None:
        r = client.post("/api/convert")
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "EMPTY_INPUT"


class TestDownload:
    def test_csv_attachment(self, client: TestClient, sample_users_text: str) -> None:
        r = client.post(
            "/api/convert/download",
            data={"json_text": sample_users_text, "file_name": "cognito_import"},
        )
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/csv")
        assert "cognito_import.csv" in r.headers["content-disposition"]
        assert r.headers["x-conversion-warnings"] == "1"
        assert r.content.decode("utf-8").startswith(HEADER)

    def test_invalid_input(self, client: TestClient) -> None:
        r = client.post("/api/convert/download", data={"json_text": "nope"})
        assert r.status_code == 422
        assert r.json()["detail"]["code"] == "INVALID_INPUT"
