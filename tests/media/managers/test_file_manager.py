"""
File Manager Tests

Tests for payload copy/delete showing:
- Naming scheme
- Partial-file copy
- Idempotent delete

To run these tests:
    pytest tests/media/managers/test_file_manager.py -v
"""

from unittest.mock import patch

import pytest

from core.constants import ShotType
from media.interfaces.media_store_interface import CopyFailed, DeleteFailed
from media.managers.file_manager import FileManager


@pytest.fixture
def file_manager(temp_media_dir):
    """FileManager writing into a temp videos directory"""
    return FileManager(temp_media_dir / "padeltech_videos")


@pytest.mark.unit
def test_creates_videos_directory(temp_media_dir):
    """
    Test that the videos directory is created on construction.
    """
    FileManager(temp_media_dir / "padeltech_videos")

    assert (temp_media_dir / "padeltech_videos").is_dir()


@pytest.mark.unit
def test_generate_filename(file_manager):
    """
    Test naming scheme <shot type>_<id><extension>.
    """
    name = file_manager.generate_filename(ShotType.BANDEJA, "1718000000000-abcd1234")

    assert name == "bandeja_1718000000000-abcd1234.mp4"


@pytest.mark.unit
def test_copy_in_copies_bytes(file_manager, make_capture):
    """
    Test a successful copy.

    Should:
    - Create the destination with the same bytes
    - Leave the source in place
    - Leave no .partial file
    """
    source = make_capture("clip.mp4", size=4096)
    dest = file_manager.destination_for(ShotType.DERECHA, "1-a")

    file_manager.copy_in(source, dest)

    assert dest.read_bytes() == source.read_bytes()
    assert source.exists()
    assert file_manager.list_partials() == []


@pytest.mark.unit
def test_copy_in_missing_source(file_manager, temp_media_dir):
    """
    Test copying a file that does not exist.

    Should raise CopyFailed.
    """
    dest = file_manager.destination_for(ShotType.DERECHA, "1-a")

    with pytest.raises(CopyFailed):
        file_manager.copy_in(temp_media_dir / "nope.mp4", dest)

    assert not dest.exists()


@pytest.mark.unit
def test_copy_in_refuses_to_overwrite(file_manager, make_capture):
    """
    Test that an existing destination is never overwritten.
    """
    source = make_capture("clip.mp4")
    dest = file_manager.destination_for(ShotType.DERECHA, "1-a")
    dest.write_bytes(b"existing")

    with pytest.raises(CopyFailed):
        file_manager.copy_in(source, dest)

    assert dest.read_bytes() == b"existing"


@pytest.mark.unit
def test_copy_in_failure_discards_partial(file_manager, make_capture):
    """
    Test an I/O error during the copy.

    Should raise CopyFailed and leave neither the final file nor a
    .partial file.
    """
    source = make_capture("clip.mp4")
    dest = file_manager.destination_for(ShotType.DERECHA, "1-a")

    def broken_copy(src, dst):
        with open(dst, "wb") as f:
            f.write(b"half")
        raise OSError("disk full")

    with patch("media.managers.file_manager.shutil.copy2", side_effect=broken_copy):
        with pytest.raises(CopyFailed, match="disk full"):
            file_manager.copy_in(source, dest)

    assert not dest.exists()
    assert file_manager.list_partials() == []


@pytest.mark.unit
def test_copy_in_interrupted_discards_partial(file_manager, make_capture):
    """
    Test a cancellation during the copy.

    Should re-raise the interruption with nothing under the final name.
    """
    source = make_capture("clip.mp4")
    dest = file_manager.destination_for(ShotType.DERECHA, "1-a")

    with patch(
        "media.managers.file_manager.shutil.copy2",
        side_effect=KeyboardInterrupt,
    ):
        with pytest.raises(KeyboardInterrupt):
            file_manager.copy_in(source, dest)

    assert not dest.exists()
    assert file_manager.list_partials() == []


@pytest.mark.unit
def test_delete_file_twice(file_manager, make_capture):
    """
    Test deleting a payload twice.

    Should return True then False, never raise.
    """
    dest = file_manager.destination_for(ShotType.DERECHA, "1-a")
    file_manager.copy_in(make_capture("clip.mp4"), dest)

    assert file_manager.delete_file(dest) is True
    assert file_manager.delete_file(dest) is False


@pytest.mark.unit
def test_delete_file_permission_error(file_manager, make_capture):
    """
    Test a delete the filesystem refuses.

    Should raise DeleteFailed.
    """
    dest = file_manager.destination_for(ShotType.DERECHA, "1-a")
    file_manager.copy_in(make_capture("clip.mp4"), dest)

    with patch("pathlib.Path.unlink", side_effect=PermissionError("read-only")):
        with pytest.raises(DeleteFailed):
            file_manager.delete_file(dest)

    assert dest.exists()


@pytest.mark.unit
def test_list_payloads_ignores_partials(file_manager):
    """
    Test that in-flight copies are not listed as payloads.
    """
    (file_manager.videos_dir / "derecha_1-a.mp4").write_bytes(b"x")
    (file_manager.videos_dir / "derecha_2-b.mp4.partial").write_bytes(b"x")

    assert [p.name for p in file_manager.list_payloads()] == ["derecha_1-a.mp4"]
    assert [p.name for p in file_manager.list_partials()] == ["derecha_2-b.mp4.partial"]
