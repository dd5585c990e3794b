"""Tests for the audit middleware helpers."""
import pytest

from repomind.core.audit import codebase_id_from_path, request_category


@pytest.mark.parametrize("path, expected", [
    ("/api/history/3f2c9a", "3f2c9a"),
    ("/api/history/3f2c9a/", "3f2c9a"),
    ("/api/history", None),
    ("/api/history/", None),
    ("/api/question/ask", None),
])
def test_codebase_id_from_path(path, expected):
    assert codebase_id_from_path(path) == expected


@pytest.mark.parametrize("path, expected", [
    ("/api/upload/zip", "UPLOAD"),
    ("/api/upload/github-split", "UPLOAD"),
    ("/api/question/ask", "QUESTION"),
    ("/api/history/abc", "HISTORY"),
    ("/api/refactor", "REFACTOR"),
    ("/", "REQUEST"),
])
def test_request_category(path, expected):
    assert request_category(path) == expected


def test_audited_request_still_succeeds(client):
    response = client.get("/api/history/does-not-exist")

    assert response.status_code == 200
    assert "X-Response-Time" in response.headers
