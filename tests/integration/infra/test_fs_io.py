from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution,
source classification and JSON document loading from disk.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from objsnoop.infra.fs import (
    get_user_data_dir,
    is_remote_source,
    normalize_path,
    read_json_file,
)
from objsnoop.infra.stores import DocumentStore, load_document_store

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.objsnoop on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.objsnoop")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and fallbacks."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("   ", fallback="/tmp") == os.path.abspath("/tmp")


@pytest.mark.parametrize("source, remote", [
    ("https://host/doc.json", True),
    ("HTTP://host/doc.json", True),
    ("/data/doc.json", False),
    ("doc.json", False),
])
def test_is_remote_source(source: str, remote: bool) -> None:
    """TC-03: Verify URL detection for document sources."""
    assert is_remote_source(source) is remote

# -----------------------------------------------------------------------------
# DOCUMENT LOADING TESTS
# -----------------------------------------------------------------------------

def test_document_store_from_file(tmp_path: Path, sample_document) -> None:
    """TC-04: Verify a document store loads from a JSON file."""
    doc_path = tmp_path / "plan.json"
    doc_path.write_text(json.dumps(sample_document), encoding="utf-8")

    store = load_document_store(str(doc_path))

    assert isinstance(store, DocumentStore)
    assert store.name == "site-plan"
    assert len(store.keys()) == 5


def test_read_json_file_errors(tmp_path: Path) -> None:
    """TC-05: Verify read failures surface as OSError/ValueError."""
    with pytest.raises(OSError):
        read_json_file(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    with pytest.raises(ValueError):
        read_json_file(str(bad))
