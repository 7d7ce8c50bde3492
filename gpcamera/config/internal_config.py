"""
Configuration loader for gpcamera.

Handles the gpcamera-config.yaml file which locates the native libraries,
selects the behaviour of targeted connects and configures logging.
Values resolve as ENV > YAML > default.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

import yaml

DEFAULT_CONFIG_ENV = "GPCAMERA_CONFIG"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class LibraryConfig:
    # None lets ctypes.util.find_library locate the library
    gphoto2_path: Optional[str] = None
    gphoto2_port_path: Optional[str] = None


@dataclass
class CameraConfig:
    fallback_to_default: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_to_file: bool = False
    log_path: str = "/tmp/gpcamera_logs"


@dataclass
class GPCameraConfig:
    """Complete configuration for gpcamera."""

    library: LibraryConfig = field(default_factory=LibraryConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load_from_file(cls, config_path: str) -> "GPCameraConfig":
        """Load configuration from YAML file."""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        config = data.get('gpcamera') or {}

        return cls(
            library=LibraryConfig(**(config.get('library') or {})),
            camera=CameraConfig(**(config.get('camera') or {})),
            logging=LoggingConfig(**(config.get('logging') or {}))
        )

    @classmethod
    def load_default(cls) -> "GPCameraConfig":
        """Load default configuration."""
        return cls(
            library=LibraryConfig(),
            camera=CameraConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "GPCameraConfig":
        """
        Load configuration from config_path (or $GPCAMERA_CONFIG) and apply
        environment overrides. Without a file the defaults are used.
        """
        config_path = config_path or os.environ.get(DEFAULT_CONFIG_ENV)
        if config_path:
            config = cls.load_from_file(config_path)
        else:
            config = cls.load_default()
        config.apply_env_overrides()
        return config

    def apply_env_overrides(self, environ=None):
        """Override file values with GPCAMERA_* environment variables."""
        environ = os.environ if environ is None else environ

        self.library.gphoto2_path = environ.get('GPCAMERA_LIBGPHOTO2') or self.library.gphoto2_path
        self.library.gphoto2_port_path = (environ.get('GPCAMERA_LIBGPHOTO2_PORT')
                                          or self.library.gphoto2_port_path)

        fallback = environ.get('GPCAMERA_FALLBACK_TO_DEFAULT')
        if fallback is not None:
            self.camera.fallback_to_default = fallback.strip().lower() in _TRUE_VALUES

        self.logging.level = environ.get('GPCAMERA_LOG_LEVEL') or self.logging.level
