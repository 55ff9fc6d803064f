"""Tests for logical path classification."""

import pytest

from stagecache.core.classifier import classify, is_synapse_id
from stagecache.core.models import GridObjectPath, LocalPath, RemotePath


@pytest.mark.parametrize(
    "raw",
    [
        "/abs/local/file.txt",
        "relative/file.txt",
        "file.txt",
        "syn12345",
        "",
    ],
)
def test_paths_without_scheme_are_local(raw: str) -> None:
    assert classify(raw) == LocalPath(raw)


@pytest.mark.parametrize(
    "raw",
    [
        "s3://bucket/my file.txt",
        "http://[::1",
        "icgc:",
    ],
)
def test_unparsable_paths_fall_back_to_local(raw: str) -> None:
    assert isinstance(classify(raw), LocalPath)


def test_grid_scheme_is_case_insensitive_and_lowercases_object_id() -> None:
    path = classify("icgc:OBJ-1")

    assert isinstance(path, GridObjectPath)
    assert path.object_id == "obj-1"
    assert path.raw == "icgc:OBJ-1"
    assert classify("ICGC:Abc-DEF") == GridObjectPath("ICGC:Abc-DEF", object_id="abc-def")


@pytest.mark.parametrize(
    "raw",
    [
        "s3://bucket/key/sub",
        "https://example.org/data/ref.fa",
        "ftp://mirror.example.org/pub/file",
        "gs://bucket/object",
    ],
)
def test_other_schemes_are_remote_and_unmodified(raw: str) -> None:
    path = classify(raw)

    assert isinstance(path, RemotePath)
    assert path.uri == raw


def test_classification_is_deterministic() -> None:
    samples = ["/tmp/a", "icgc:X", "s3://b/k", "syn1", "http://[::1", "https://h/p"]

    assert [classify(s) for s in samples] == [classify(s) for s in samples]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("syn12345", True),
        ("SYN9", True),
        ("syn", False),
        ("synonyms.txt", False),
        ("syn123/file", False),
        ("/data/syn123", False),
    ],
)
def test_is_synapse_id(raw: str, expected: bool) -> None:
    assert is_synapse_id(raw) is expected
