"""
Configuration management for gpcamera.

This package loads the library locations, connect behaviour and logging
settings from YAML with environment overrides.
"""

from .internal_config import CameraConfig, GPCameraConfig, LibraryConfig, LoggingConfig

__all__ = ["GPCameraConfig", "LibraryConfig", "CameraConfig", "LoggingConfig"]
