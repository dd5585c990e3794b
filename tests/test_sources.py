"""Tests for ZIP extraction, GitHub URL handling and cloning."""
import pytest
from git import GitCommandError

from repomind.core.exceptions import UploadError
from repomind.core.validators import validate_github_url
from repomind.ingestion import sources
from repomind.ingestion import (
    clone_repository,
    extract_zip,
    is_zip_upload,
    repo_name_from_url,
    safe_rmtree,
)
from tests.conftest import make_zip


def test_extract_zip(tmp_path):
    archive = tmp_path / "repo.zip"
    archive.write_bytes(make_zip({"proj/main.py": "print(1)"}))

    extract_zip(archive, tmp_path / "out")

    assert (tmp_path / "out" / "proj" / "main.py").read_text() == "print(1)"


def test_extract_zip_strips_parent_references(tmp_path):
    archive = tmp_path / "evil.zip"
    archive.write_bytes(make_zip({"../escape.py": "x = 1"}))

    extract_zip(archive, tmp_path / "out")

    assert not (tmp_path / "escape.py").exists()
    assert (tmp_path / "out" / "escape.py").exists()


def test_extract_corrupt_zip(tmp_path):
    archive = tmp_path / "broken.zip"
    archive.write_bytes(b"definitely not a zip")

    with pytest.raises(UploadError) as exc_info:
        extract_zip(archive, tmp_path / "out")

    assert exc_info.value.message == "Failed to extract ZIP file. File may be corrupted."
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("filename, content_type, expected", [
    ("repo.zip", "application/octet-stream", True),
    ("REPO.ZIP", None, True),
    ("repo", "application/zip", True),
    ("repo", "application/x-zip-compressed", True),
    ("repo.tar.gz", "application/gzip", False),
    (None, None, False),
])
def test_is_zip_upload(filename, content_type, expected):
    assert is_zip_upload(filename, content_type) is expected


@pytest.mark.parametrize("url, expected", [
    ("https://github.com/acme/widget", True),
    ("http://www.github.com/acme/widget.js/", True),
    ("https://github.com/acme-co/my_repo.git", True),
    ("https://gitlab.com/acme/widget", False),
    ("https://github.com/acme", False),
    ("https://github.com/acme/widget/tree/main", False),
    ("", False),
])
def test_validate_github_url(url, expected):
    assert validate_github_url(url)[0] is expected


def test_repo_name_from_url():
    assert repo_name_from_url("https://github.com/acme/widget") == "widget"
    assert repo_name_from_url("https://github.com/acme/widget.git") == "widget"
    assert repo_name_from_url("https://github.com/acme/widget/") == "widget"


def test_clone_rejects_invalid_url(tmp_path):
    with pytest.raises(UploadError) as exc_info:
        clone_repository("https://example.com/acme/widget", tmp_path / "clone")

    assert exc_info.value.message == "Invalid GitHub repository URL"


def test_clone_failure_is_upload_error(tmp_path, monkeypatch):
    def failing_clone(url, to_path, **kwargs):
        raise GitCommandError(["git", "clone"], 128, stderr="repository not found")

    monkeypatch.setattr(sources.Repo, "clone_from", failing_clone)

    with pytest.raises(UploadError) as exc_info:
        clone_repository("https://github.com/acme/private", tmp_path / "clone")

    assert "may be private or not exist" in exc_info.value.message


def test_clone_is_shallow(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(
        sources.Repo, "clone_from",
        lambda url, to_path, **kwargs: calls.append((url, to_path, kwargs))
    )

    clone_repository("https://github.com/acme/widget", tmp_path / "clone")

    assert calls == [(
        "https://github.com/acme/widget",
        tmp_path / "clone",
        {"depth": 1, "single_branch": True},
    )]


def test_safe_rmtree(tmp_path):
    target = tmp_path / "scratch"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "file.txt").write_text("x")

    safe_rmtree(target)
    safe_rmtree(target)  # already gone

    assert not target.exists()
