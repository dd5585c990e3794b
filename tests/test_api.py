"""End-to-end tests of the HTTP layer with FastAPI's TestClient."""
import pytest

from repomind.core.config import get_settings
from repomind.core.exceptions import UploadError
from repomind.llm.client import set_llm_client
from repomind.services import ingestion_service
from tests.conftest import FakeLLMClient, SAMPLE_PROJECT, make_zip, write_tree


@pytest.fixture
def uploaded(client):
    response = client.post(
        "/api/upload/zip",
        files={"file": ("sample.zip", make_zip(SAMPLE_PROJECT), "application/zip")},
    )
    assert response.status_code == 200
    return response.json()["codebaseId"]


def test_root(client):
    body = client.get("/").json()

    assert body["message"] == "RepoMind API is running!"
    assert body["endpoints"]["question"] == "/api/question/ask"


def test_unknown_route(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["error"] == "Route GET /api/nope not found"


def test_security_headers(client):
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


class TestHealth:

    def test_degraded_without_llm_key(self, client):
        body = client.get("/api/health").json()

        assert body["status"] == "degraded"
        assert body["database"]["status"] == "connected"
        assert body["ai"]["status"] == "not_configured"
        assert body["stats"] == {"codebases": 0, "codeFiles": 0, "questions": 0}
        assert "uptime" in body["system"]

    def test_ok_with_llm_key(self, client, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "key")
        get_settings.cache_clear()

        body = client.get("/api/health").json()

        assert body["status"] == "ok"
        assert body["ai"]["provider"] == "Groq"


class TestUploadZip:

    def test_success(self, client):
        response = client.post(
            "/api/upload/zip",
            files={"file": ("sample.zip", make_zip(SAMPLE_PROJECT), "application/zip")},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["name"] == "sample.zip"
        assert body["fileCount"] == 3
        assert body["totalSize"] > 0
        assert body["message"] == "Codebase uploaded successfully"
        assert "frontendFileCount" not in body

    def test_rejects_non_zip(self, client):
        response = client.post(
            "/api/upload/zip",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Only ZIP files are allowed"

    def test_requires_file(self, client):
        response = client.post("/api/upload/zip", data={"note": "nothing attached"})

        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded"

    def test_corrupt_archive(self, client):
        response = client.post(
            "/api/upload/zip",
            files={"file": ("broken.zip", b"not a zip", "application/zip")},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Failed to extract ZIP file. File may be corrupted."

    def test_too_large(self, client, monkeypatch):
        monkeypatch.setenv("MAX_FILE_SIZE", "10")
        get_settings.cache_clear()

        response = client.post(
            "/api/upload/zip",
            files={"file": ("sample.zip", make_zip(SAMPLE_PROJECT), "application/zip")},
        )

        assert response.status_code == 413
        assert response.json()["code"] == "file_too_large"


class TestUploadGithub:

    @pytest.fixture(autouse=True)
    def fake_clone(self, monkeypatch):
        def clone(url, destination):
            if "missing" in url:
                raise UploadError("Failed to clone repository. It may be private or not exist.")
            write_tree(destination, {"main.py": "print('hi')"})
            return destination

        monkeypatch.setattr(ingestion_service, "clone_repository", clone)

    def test_success(self, client):
        response = client.post("/api/upload/github", json={"repoUrl": "https://github.com/acme/widget"})

        body = response.json()
        assert response.status_code == 200
        assert body["name"] == "widget"
        assert body["fileCount"] == 1
        assert body["message"] == "GitHub repository cloned successfully"

    def test_snake_case_body_is_accepted(self, client):
        response = client.post("/api/upload/github", json={"repo_url": "https://github.com/acme/widget"})
        assert response.status_code == 200

    def test_requires_url(self, client):
        response = client.post("/api/upload/github", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Repository URL is required"

    def test_invalid_url(self, client):
        response = client.post("/api/upload/github", json={"repoUrl": "https://gitlab.com/a/b"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid GitHub repository URL"

    def test_clone_failure(self, client):
        response = client.post("/api/upload/github", json={"repoUrl": "https://github.com/acme/missing"})

        assert response.status_code == 400
        assert "may be private" in response.json()["error"]

    def test_split(self, client):
        response = client.post("/api/upload/github-split", json={
            "frontendUrl": "https://github.com/acme/web",
            "backendUrl": "https://github.com/acme/api",
        })

        body = response.json()
        assert response.status_code == 200
        assert body["name"] == "web + api (split)"
        assert (body["fileCount"], body["frontendFileCount"], body["backendFileCount"]) == (2, 1, 1)

    def test_split_requires_both(self, client):
        response = client.post("/api/upload/github-split", json={"frontendUrl": "https://github.com/acme/web"})

        assert response.status_code == 400
        assert response.json()["error"] == "Both frontendUrl and backendUrl are required"

    def test_split_invalid_backend(self, client):
        response = client.post("/api/upload/github-split", json={
            "frontendUrl": "https://github.com/acme/web",
            "backendUrl": "ftp://github.com/acme/api",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid backend GitHub URL"


class TestQuestion:

    def test_ask(self, client, uploaded, fake_llm):
        response = client.post("/api/question/ask", json={
            "codebaseId": uploaded,
            "question": "Where is the login code?",
            "tags": ["auth"],
        })

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert isinstance(body["questionId"], int)
        assert body["answer"] == "Authentication lives in src/auth.py."
        assert body["mermaidCode"].startswith("graph TD")
        assert body["fileReferences"][0]["file"] == "src/auth.py"

        history = client.get(f"/api/history/{uploaded}").json()
        assert history["count"] == 1
        assert history["questions"][0]["tags"] == ["auth"]
        assert history["questions"][0]["mermaid_code"].startswith("graph TD")

    def test_ask_with_plain_string_references(self, client, uploaded):
        set_llm_client(FakeLLMClient(response={
            "answer": "x", "mermaidCode": "graph TD", "references": ["src/auth.py"]
        }))

        response = client.post("/api/question/ask", json={"codebaseId": uploaded, "question": "Where is login?"})

        assert response.status_code == 200
        assert response.json()["fileReferences"] == []
        history = client.get(f"/api/history/{uploaded}").json()
        assert history["questions"][0]["file_references"] == []

    def test_requires_fields(self, client):
        response = client.post("/api/question/ask", json={"question": "Where is login?"})

        assert response.status_code == 400
        assert response.json()["error"] == "Codebase ID and question are required"

    def test_question_too_short(self, client, uploaded):
        response = client.post("/api/question/ask", json={"codebaseId": uploaded, "question": "  hi  "})

        assert response.status_code == 400
        assert response.json()["error"] == "Question must be at least 5 characters long"

    def test_unknown_codebase(self, client, fake_llm):
        response = client.post("/api/question/ask", json={"codebaseId": "nope", "question": "Where is login?"})

        assert response.status_code == 404
        assert response.json()["error"] == "No files found in codebase"

    def test_llm_not_configured(self, client, uploaded):
        response = client.post("/api/question/ask", json={"codebaseId": uploaded, "question": "Where is login?"})

        assert response.status_code == 503
        assert response.json()["code"] == "llm_error"
        assert response.json()["error"].startswith("Failed to answer question:")

    def test_history_keeps_ten(self, client, uploaded, fake_llm):
        for n in range(12):
            client.post("/api/question/ask", json={"codebaseId": uploaded, "question": f"Question number {n}"})

        history = client.get(f"/api/history/{uploaded}", params={"limit": "50"}).json()

        assert history["count"] == 10
        assert history["questions"][0]["question"] == "Question number 11"


class TestHistory:

    def test_list_codebases(self, client, uploaded):
        body = client.get("/api/history").json()

        assert body["success"] is True
        assert [c["id"] for c in body["codebases"]] == [uploaded]
        assert body["codebases"][0]["file_count"] == 3

    def test_search_and_limit(self, client, uploaded, fake_llm):
        for question in ("Where is login handled?", "How is the database opened?", "What does login return?"):
            client.post("/api/question/ask", json={"codebaseId": uploaded, "question": question})

        searched = client.get(f"/api/history/{uploaded}", params={"search": "LOGIN"}).json()
        limited = client.get(f"/api/history/{uploaded}", params={"limit": "1"}).json()
        bad_limit = client.get(f"/api/history/{uploaded}", params={"limit": "abc"}).json()

        # every canned answer mentions auth, none mentions login
        assert [q["question"] for q in searched["questions"]] == [
            "What does login return?", "Where is login handled?"
        ]
        assert limited["count"] == 1
        assert bad_limit["count"] == 3

    def test_delete(self, client, uploaded):
        response = client.delete(f"/api/history/{uploaded}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Session deleted successfully"}
        assert client.get("/api/history").json()["codebases"] == []

    def test_delete_missing(self, client):
        response = client.delete("/api/history/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "Session not found"


class TestRefactor:

    def test_suggestions(self, client):
        set_llm_client(FakeLLMClient(response={"suggestions": [
            {"title": "Use a context manager", "description": "...", "priority": "medium",
             "category": "best-practices"}
        ]}))

        response = client.post("/api/refactor", json={"code": "f = open('x')", "language": "python"})

        assert response.status_code == 200
        assert response.json()["suggestions"][0]["title"] == "Use a context manager"

    def test_requires_code_and_language(self, client):
        response = client.post("/api/refactor", json={"code": "x = 1"})

        assert response.status_code == 400
        assert response.json()["error"] == "Code and language are required"

    def test_malformed_body(self, client):
        response = client.post("/api/refactor", json={"code": ["not", "a", "string"], "language": "py"})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"
