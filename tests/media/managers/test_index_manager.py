"""
Storage Index Tests

Tests for the persisted JSON index showing:
- Empty start
- Save/load round-trip
- Corruption detection
- Atomic replace

To run these tests:
    pytest tests/media/managers/test_index_manager.py -v
"""

import json
from pathlib import Path

import pytest

from core.constants import ShotType
from media.interfaces.media_store_interface import IndexCorrupt
from media.managers.index_manager import StorageIndex
from media.models.media_file import MediaFile


def _media(media_id: str, captured_at: int, shot_type=ShotType.DERECHA, **kwargs) -> MediaFile:
    return MediaFile(
        id=media_id,
        storage_path=Path(f"/videos/{shot_type.value}_{media_id}.mp4"),
        shot_type=shot_type,
        captured_at_epoch_ms=captured_at,
        duration_seconds=kwargs.get("duration_seconds", 9.5),
        size_bytes=kwargs.get("size_bytes", 2048),
        score_record_id=kwargs.get("score_record_id"),
    )


# =============================================================================
# LOAD / SAVE TESTS
# =============================================================================


@pytest.mark.unit
def test_load_without_file_returns_empty(temp_media_dir):
    """
    Test loading before anything was saved.

    Should return an empty mapping and not create a file.
    """
    index = StorageIndex(temp_media_dir / "videos_index.json")

    assert index.load() == {}
    assert not index.exists


@pytest.mark.unit
def test_save_then_load_round_trip(temp_media_dir):
    """
    Test that every field survives save and load.

    Should:
    - Return equal MediaFile objects
    - Keep optional score_record_id (set and unset)
    """
    index = StorageIndex(temp_media_dir / "videos_index.json")
    entries = {
        "a": _media("a", 1_000, ShotType.VIBORA, score_record_id="rec-1"),
        "b": _media("b", 2_000, ShotType.REVES, duration_seconds=61.25, size_bytes=0),
    }

    index.save(entries)
    loaded = index.load()

    assert loaded == entries
    assert loaded["a"].score_record_id == "rec-1"
    assert loaded["b"].score_record_id is None


@pytest.mark.unit
def test_save_writes_versioned_document(temp_media_dir):
    """
    Test the on-disk format.

    Should write {"version": 1, "media": [...]} ordered by capture time
    and leave no temp file behind.
    """
    index = StorageIndex(temp_media_dir / "videos_index.json")
    index.save({
        "late": _media("late", 5_000),
        "early": _media("early", 1_000),
    })

    document = json.loads(index.index_path.read_text(encoding="utf-8"))

    assert document["version"] == 1
    assert [record["id"] for record in document["media"]] == ["early", "late"]
    assert not index.tmp_path.exists()


@pytest.mark.unit
def test_save_replaces_previous_index(temp_media_dir):
    """
    Test that save overwrites rather than appends.
    """
    index = StorageIndex(temp_media_dir / "videos_index.json")
    index.save({"a": _media("a", 1_000)})
    index.save({"b": _media("b", 2_000)})

    assert list(index.load()) == ["b"]


# =============================================================================
# CORRUPTION TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"version": 1}',
        '{"version": 99, "media": []}',
        '{"version": 1, "media": ["oops"]}',
        '{"version": 1, "media": [{"id": "x"}]}',
    ],
    ids=[
        "invalid-json",
        "wrong-top-level",
        "missing-media",
        "unknown-version",
        "non-object-record",
        "incomplete-record",
    ],
)
def test_load_rejects_corrupt_index(temp_media_dir, content):
    """
    Test that a damaged index raises IndexCorrupt.

    Should never return a partial mapping.
    """
    index_path = temp_media_dir / "videos_index.json"
    index_path.write_text(content, encoding="utf-8")

    with pytest.raises(IndexCorrupt):
        StorageIndex(index_path).load()


@pytest.mark.unit
def test_load_rejects_duplicate_ids(temp_media_dir):
    """
    Test that two records with the same id raise IndexCorrupt.
    """
    record = _media("dup", 1_000).to_dict()
    index_path = temp_media_dir / "videos_index.json"
    index_path.write_text(
        json.dumps({"version": 1, "media": [record, record]}),
        encoding="utf-8",
    )

    with pytest.raises(IndexCorrupt, match="Duplicate"):
        StorageIndex(index_path).load()


@pytest.mark.unit
def test_load_rejects_unknown_shot_type(temp_media_dir):
    """
    Test that a record with an unknown shot type raises IndexCorrupt.
    """
    record = _media("x", 1_000).to_dict()
    record["shot_type"] = "globo"
    index_path = temp_media_dir / "videos_index.json"
    index_path.write_text(json.dumps({"version": 1, "media": [record]}), encoding="utf-8")

    with pytest.raises(IndexCorrupt):
        StorageIndex(index_path).load()


@pytest.mark.unit
def test_load_rejects_non_finite_duration(temp_media_dir):
    """
    Test that a NaN duration written by another tool raises IndexCorrupt.
    """
    record = _media("x", 1_000).to_dict()
    record["duration_seconds"] = float("nan")
    index_path = temp_media_dir / "videos_index.json"
    index_path.write_text(json.dumps({"version": 1, "media": [record]}), encoding="utf-8")

    with pytest.raises(IndexCorrupt):
        StorageIndex(index_path).load()
