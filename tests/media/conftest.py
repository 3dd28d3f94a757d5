"""
Media Test Configuration and Fixtures

This file contains pytest fixtures shared across media tests.

To use pytest:
    pip install pytest
    pytest tests/media/
"""

import tempfile
from pathlib import Path

import pytest

from core.constants import ShotType
from media import MediaConfig, MediaController, RetentionPolicy
from media.implementations.local_media_store import LocalMediaStore
from media.implementations.memory_media_store import InMemoryMediaStore
from media.models.media_file import MS_PER_DAY, MediaFile, now_epoch_ms
from media.utils.path_utils import generate_media_id

# 3.2 MB, the size of a short practice clip
SAMPLE_VIDEO_SIZE = int(3.2 * 1024 * 1024)


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def memory_store():
    """
    Provide a fresh InMemoryMediaStore instance for each test.

    Usage:
        def test_something(memory_store):
            memory_store.save(Path("/fake/clip.mp4"), {"shotType": "derecha"})
    """
    store = InMemoryMediaStore()
    store.initialize()
    yield store
    store.cleanup()


@pytest.fixture
def temp_media_dir():
    """
    Provide a temporary directory for media tests.

    Automatically cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def media_config(temp_media_dir):
    """
    Provide a MediaConfig rooted in the temp directory.

    Usage:
        def test_with_config(media_config):
            store = LocalMediaStore(media_config)
    """
    config = MediaConfig(temp_media_dir / "config" / "media.yaml")
    config.set('storage_base_path', str(temp_media_dir / "store"), save=False)
    config.set('retention_days', 30, save=False)
    config.set('auto_sweep_on_save', True, save=False)
    config.set('sweep_batch_size', 2, save=False)
    return config


@pytest.fixture
def local_store(media_config):
    """
    Provide an initialized LocalMediaStore on the temp directory.

    Usage:
        def test_real_store(local_store, sample_video):
            video = local_store.save(sample_video, {"shotType": "derecha"})
    """
    store = LocalMediaStore(media_config)
    store.initialize()
    yield store
    store.cleanup()


# =============================================================================
# CONTROLLER FIXTURES
# =============================================================================

@pytest.fixture
def media_controller(memory_store):
    """
    Provide MediaController with the in-memory store.

    Usage:
        def test_controller(media_controller):
            stats = media_controller.get_stats()
    """
    retention = RetentionPolicy(memory_store, max_age_days=30)
    controller = MediaController(memory_store, retention=retention, auto_sweep=True)
    yield controller
    controller.cleanup()


@pytest.fixture
def local_media_controller(local_store, media_config):
    """Provide MediaController over the filesystem store"""
    controller = MediaController(local_store, config=media_config)
    yield controller
    controller.cleanup()


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def sample_video(temp_media_dir):
    """
    Create a 3.2 MB fake capture outside the store.

    Usage:
        def test_save(local_store, sample_video):
            video = local_store.save(sample_video, {"shotType": "derecha"})
    """
    capture_dir = temp_media_dir / "camera"
    capture_dir.mkdir(exist_ok=True)

    video_path = capture_dir / "capture.mp4"
    video_path.write_bytes(b"\x00" * SAMPLE_VIDEO_SIZE)

    return video_path


@pytest.fixture
def make_capture(temp_media_dir):
    """
    Factory for small fake captures.

    Usage:
        def test_many(local_store, make_capture):
            path = make_capture("clip_1.mp4")
    """
    capture_dir = temp_media_dir / "camera"
    capture_dir.mkdir(exist_ok=True)

    def _make(name: str = "clip.mp4", size: int = 1024) -> Path:
        path = capture_dir / name
        path.write_bytes(b"v" * size)
        return path

    return _make


@pytest.fixture
def days_ago():
    """
    Convert an age in days to a capture timestamp.

    Usage:
        def test_old(days_ago):
            captured_at = days_ago(31)
    """
    now_ms = now_epoch_ms()

    def _days_ago(days: float) -> int:
        return now_ms - int(days * MS_PER_DAY)

    return _days_ago


@pytest.fixture
def make_media(days_ago):
    """
    Factory for MediaFile entries to preload into the in-memory store.

    Usage:
        def test_sweep(memory_store, make_media):
            memory_store.add_media(make_media(age_days=40))
    """
    def _make(
        age_days: float = 0,
        shot_type: ShotType = ShotType.DERECHA,
        size_bytes: int = 1024,
    ) -> MediaFile:
        captured_at = days_ago(age_days)
        media_id = generate_media_id(captured_at)
        return MediaFile(
            id=media_id,
            storage_path=Path(f"/memory/padeltech_videos/{shot_type.value}_{media_id}.mp4"),
            shot_type=shot_type,
            captured_at_epoch_ms=captured_at,
            duration_seconds=12.0,
            size_bytes=size_bytes,
        )

    return _make


@pytest.fixture
def event_tracker():
    """
    Provide a helper for tracking event callbacks.

    Usage:
        def test_events(media_controller, event_tracker):
            media_controller.on_error = event_tracker.track
            # ... trigger event ...
            assert event_tracker.was_called()
    """
    class EventTracker:
        def __init__(self):
            self.calls = []
            self.call_args = []

        def track(self, *args, **kwargs):
            """Record an event invocation"""
            self.calls.append({'args': args, 'kwargs': kwargs})
            if args:
                self.call_args.append(args[0])

        def was_called(self) -> bool:
            """Check if event was triggered"""
            return len(self.calls) > 0

        def get_call_count(self) -> int:
            """Get number of times event was triggered"""
            return len(self.calls)

        def get_last_call(self):
            """Get arguments from last call"""
            return self.calls[-1] if self.calls else None

    return EventTracker()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers.

    Same markers across all test packages for consistency.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Unit integration tests")
    config.addinivalue_line("markers", "integration: Full integration tests")
    config.addinivalue_line("markers", "slow: Slow tests (use sparingly)")
