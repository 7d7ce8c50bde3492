"""
gpcamera

Binds a process to camera hardware through libgphoto2: camera discovery,
connection lifecycle and low-level port reset.
"""

__version__ = "0.1.0"

from .camera import Camera, new_camera
from .config import GPCameraConfig
from .context import Context
from .devices import CameraList, DetectedCamera, list_cameras
from .errors import (
    CameraNotFoundError,
    ContextInitError,
    GPhotoError,
    LibraryLoadError,
    PortResetError,
    ResourceReleasedError,
)
from .logger import configure_logging

__all__ = [
    "Camera",
    "CameraList",
    "CameraNotFoundError",
    "Context",
    "ContextInitError",
    "DetectedCamera",
    "GPCameraConfig",
    "GPhotoError",
    "LibraryLoadError",
    "PortResetError",
    "ResourceReleasedError",
    "configure_logging",
    "list_cameras",
    "new_camera",
    "__version__",
]
