"""Tests for source file discovery."""
from pathlib import Path

from repomind.ingestion import (
    get_language_from_filename,
    process_code_files,
    should_process_file,
)
from tests.conftest import SAMPLE_PROJECT, write_tree


def test_collects_supported_files_only(tmp_path):
    write_tree(tmp_path, SAMPLE_PROJECT)

    result = process_code_files(tmp_path)

    assert [f.relative_path for f in result.files] == ["README.md", "src/auth.py", "src/db.py"]
    assert result.total_size == sum(f.size for f in result.files)


def test_detects_languages(tmp_path):
    write_tree(tmp_path, {
        "a.tsx": "export const A = 1;",
        "b.yml": "key: value",
        "c.sh": "echo hi",
        "d.PY": "print(1)",
    })

    languages = {f.relative_path: f.language for f in process_code_files(tmp_path).files}

    assert languages == {"a.tsx": "typescript", "b.yml": "yaml", "c.sh": "bash", "d.PY": "python"}


def test_skips_ignored_and_hidden_directories(tmp_path):
    write_tree(tmp_path, {
        "app/main.go": "package main",
        "app/vendor/dep.go": "package dep",
        "build/out.js": "compiled()",
        ".github/workflows/ci.yml": "on: push",
        "pkg/__pycache__/mod.py": "cached",
        ".env.json": "{}",
    })

    result = process_code_files(tmp_path)

    assert [f.relative_path for f in result.files] == ["app/main.go"]


def test_skips_empty_and_oversized_files(tmp_path):
    write_tree(tmp_path, {
        "empty.py": "   \n\t",
        "big.py": "x = 1\n" * 100,
        "small.py": "y = 2\n",
    })

    result = process_code_files(tmp_path, max_file_size=50)

    assert [f.relative_path for f in result.files] == ["small.py"]
    assert result.total_size == len("y = 2\n")


def test_undecodable_bytes_are_replaced(tmp_path):
    (tmp_path / "latin.py").write_bytes(b"name = '\xe9t\xe9'\n")

    result = process_code_files(tmp_path)

    assert len(result.files) == 1
    assert "�" in result.files[0].content


def test_with_prefix(tmp_path):
    write_tree(tmp_path, {"index.js": "start()"})

    prefixed = process_code_files(tmp_path).with_prefix("frontend")

    assert [f.relative_path for f in prefixed.files] == ["frontend/index.js"]
    assert prefixed.total_size == len("start()")


def test_empty_directory(tmp_path):
    result = process_code_files(tmp_path)
    assert result.files == []
    assert result.total_size == 0


def test_get_language_from_filename():
    assert get_language_from_filename("main.rs") == "rust"
    assert get_language_from_filename("Component.VUE") == "vue"
    assert get_language_from_filename("Makefile") == "text"
    assert get_language_from_filename("notes.txt") == "text"


def test_should_process_file():
    assert should_process_file("src/app.py")
    assert should_process_file(str(Path("src") / "deep" / "app.kt"))
    assert not should_process_file("node_modules/react/index.js")
    assert not should_process_file("src/.cache/app.py")
    assert not should_process_file("image.png")
