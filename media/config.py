"""
Media Store Configuration Handler

Manages YAML configuration file for media store settings.
Provides defaults from config/settings.py and validation.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config.settings import (
    AUTO_SWEEP_ON_SAVE,
    INDEX_FILE_NAME,
    MEDIA_BASE_PATH,
    MEDIA_CONFIG_PATH,
    RETENTION_DAYS,
    SWEEP_BATCH_SIZE,
    VIDEO_FILENAME_EXTENSION,
    VIDEOS_DIRECTORY_NAME,
)


class MediaConfig:
    """
    Media store configuration with YAML file support.

    Reads from config/media.yaml if it exists,
    otherwise uses defaults from config/settings.py.

    Usage:
        config = MediaConfig()
        videos_dir = config.videos_dir
        retention = config.retention_days
    """

    # Default config file location
    DEFAULT_CONFIG_PATH = MEDIA_CONFIG_PATH

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file (None = use default)
        """
        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path or self.DEFAULT_CONFIG_PATH)

        # Load configuration (defaults + file overrides)
        self._config = self._load_config()

        self.logger.info(f"Media config loaded from {self.config_path}")

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values from settings"""
        return {
            # Paths
            'storage_base_path': str(MEDIA_BASE_PATH),
            'videos_directory': VIDEOS_DIRECTORY_NAME,
            'index_filename': INDEX_FILE_NAME,
            'video_extension': VIDEO_FILENAME_EXTENSION,

            # Retention
            'retention_days': RETENTION_DAYS,
            'auto_sweep_on_save': AUTO_SWEEP_ON_SAVE,
            'sweep_batch_size': SWEEP_BATCH_SIZE,
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file or use defaults"""
        # Start with defaults
        config = self._get_defaults()

        # Try to load from file
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}

                # Merge file config with defaults (file overrides defaults)
                config.update(file_config)

                self.logger.info(f"Loaded config from {self.config_path}")

            except (OSError, yaml.YAMLError) as e:
                self.logger.warning(
                    f"Failed to load config from {self.config_path}: {e}. "
                    f"Using defaults."
                )
        else:
            self.logger.info(
                f"Config file not found at {self.config_path}. "
                f"Using defaults. Creating default config file..."
            )
            self._save_config(config)

        # Validate configuration
        self._validate_config(config)

        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        storage_path = Path(config['storage_base_path']).expanduser()
        if not storage_path.is_absolute():
            raise ValueError(
                f"storage_base_path must be absolute path: {storage_path}"
            )

        if config['retention_days'] < 0:
            raise ValueError("retention_days cannot be negative")

        if config['sweep_batch_size'] < 1:
            raise ValueError("sweep_batch_size must be at least 1")

        if not str(config['video_extension']).startswith('.'):
            raise ValueError(
                f"video_extension must start with a dot: {config['video_extension']}"
            )

    def _save_config(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Save configuration to YAML file"""
        if config is None:
            config = self._config

        try:
            # Create config directory if it doesn't exist
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w') as f:
                yaml.dump(
                    config,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2
                )

            self.logger.info(f"Config saved to {self.config_path}")

        except OSError as e:
            self.logger.error(f"Failed to save config: {e}")

    # =========================================================================
    # PROPERTY ACCESSORS
    # =========================================================================

    @property
    def storage_base_path(self) -> Path:
        """Get storage base directory as Path object"""
        return Path(self._config['storage_base_path']).expanduser()

    @property
    def videos_dir(self) -> Path:
        """Directory holding the video payloads"""
        return self.storage_base_path / self._config['videos_directory']

    @property
    def index_path(self) -> Path:
        """Location of the persisted index"""
        return self.storage_base_path / self._config['index_filename']

    @property
    def video_extension(self) -> str:
        """Extension given to stored videos"""
        return self._config['video_extension']

    @property
    def retention_days(self) -> int:
        """How many days to keep recorded videos"""
        return self._config['retention_days']

    @property
    def auto_sweep_on_save(self) -> bool:
        """Whether a retention sweep runs before each save"""
        return self._config['auto_sweep_on_save']

    @property
    def sweep_batch_size(self) -> int:
        """Entries deleted per batch during a sweep"""
        return self._config['sweep_batch_size']

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any, save: bool = True) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key
            value: New value
            save: If True, save to file immediately
        """
        self._config[key] = value

        if save:
            self._save_config()

    def reload(self) -> None:
        """Reload configuration from file"""
        self._config = self._load_config()
        self.logger.info("Configuration reloaded")

    def to_dict(self) -> Dict[str, Any]:
        """Get configuration as dictionary"""
        return self._config.copy()

    def __repr__(self) -> str:
        """Human-readable representation"""
        return f"MediaConfig(path={self.config_path})"
