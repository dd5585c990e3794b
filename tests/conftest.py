"""
Shared fixtures.

Every test gets its own SQLite database and upload directory under
tmp_path; cached settings, the database engine and the LLM client
singleton are reset around each test.
"""
import io
import zipfile
from pathlib import Path

import pytest

from repomind.core.config import get_settings
from repomind.database import CodebaseRepository, init_tables, reset_database
from repomind.llm.client import reset_llm_client, set_llm_client


class FakeLLMClient:
    """Stands in for LLMClient; returns a canned JSON object or raises."""

    def __init__(self, response=None, error=None):
        self.response = response or {}
        self.error = error
        self.calls = []

    def generate_json(self, user_message, system_prompt, temperature=0.3, max_tokens=2048):
        self.calls.append({
            "user_message": user_message,
            "system_prompt": system_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'repomind.db'}")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("HISTORY_KEEP", raising=False)
    monkeypatch.delenv("MAX_FILE_SIZE", raising=False)

    get_settings.cache_clear()
    reset_database()
    reset_llm_client()
    init_tables()

    yield

    reset_database()
    reset_llm_client()
    get_settings.cache_clear()


@pytest.fixture
def repository():
    return CodebaseRepository()


@pytest.fixture
def fake_llm():
    """Install a FakeLLMClient as the LLM singleton."""
    client = FakeLLMClient(response={
        "answer": "Authentication lives in src/auth.py.",
        "mermaidCode": "graph TD\n  A[Request] --> B[auth]",
        "references": [
            {"file": "src/auth.py", "lineStart": 1, "lineEnd": 3,
             "snippet": "def login():", "explanation": "login handler"}
        ],
    })
    set_llm_client(client)
    return client


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from repomind.api.main import app

    with TestClient(app) as test_client:
        yield test_client


def make_zip(files: dict) -> bytes:
    """Build an in-memory ZIP archive from {path: text}."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, text in files.items():
            archive.writestr(name, text)
    return buffer.getvalue()


def write_tree(root: Path, files: dict) -> Path:
    """Create {relative_path: text} under root."""
    for name, text in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


SAMPLE_PROJECT = {
    "src/auth.py": "def login(user):\n    return check_password(user)\n",
    "src/db.py": "import sqlite3\n\ndef connect():\n    return sqlite3.connect('app.db')\n",
    "README.md": "# Sample\n",
    "node_modules/lib/index.js": "module.exports = 1;\n",
    "assets/logo.png": "not really a png",
}
