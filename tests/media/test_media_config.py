"""
Media Config Tests

Tests for the YAML-backed media configuration.

To run these tests:
    pytest tests/media/test_media_config.py -v
"""

import pytest
import yaml

from media.config import MediaConfig


@pytest.mark.unit
def test_creates_default_file(temp_media_dir):
    """
    Test first run without a config file.

    Should write the defaults to YAML.
    """
    config_path = temp_media_dir / "media.yaml"

    config = MediaConfig(config_path)

    assert config_path.exists()
    written = yaml.safe_load(config_path.read_text())
    assert written["retention_days"] == config.retention_days == 30
    assert written["videos_directory"] == "padeltech_videos"


@pytest.mark.unit
def test_file_overrides_defaults(temp_media_dir):
    """
    Test that values in the YAML file win over defaults.
    """
    config_path = temp_media_dir / "media.yaml"
    config_path.write_text(yaml.safe_dump({
        "storage_base_path": str(temp_media_dir / "custom"),
        "retention_days": 7,
        "auto_sweep_on_save": False,
    }))

    config = MediaConfig(config_path)

    assert config.retention_days == 7
    assert config.auto_sweep_on_save is False
    assert config.videos_dir == temp_media_dir / "custom" / "padeltech_videos"
    assert config.index_path == temp_media_dir / "custom" / "videos_index.json"
    assert config.sweep_batch_size == 10


@pytest.mark.unit
@pytest.mark.parametrize(
    "override",
    [
        {"storage_base_path": "relative/path"},
        {"retention_days": -1},
        {"sweep_batch_size": 0},
        {"video_extension": "mp4"},
    ],
)
def test_invalid_values_rejected(temp_media_dir, override):
    """
    Test validation of file values.
    """
    config_path = temp_media_dir / "media.yaml"
    config_path.write_text(yaml.safe_dump(override))

    with pytest.raises(ValueError):
        MediaConfig(config_path)


@pytest.mark.unit
def test_set_and_reload(temp_media_dir):
    """
    Test persisting a change and reading it back.
    """
    config_path = temp_media_dir / "media.yaml"
    config = MediaConfig(config_path)

    config.set("retention_days", 14)
    config.reload()

    assert config.retention_days == 14
    assert MediaConfig(config_path).get("retention_days") == 14
