"""
Camera discovery for gpcamera.

Enumerates connected cameras through libgphoto2's autodetection.
"""

from typing import Optional

import structlog

from ..backend import GPhotoBackend, get_default_backend
from ..config import GPCameraConfig
from ..context import Context
from ..errors import check
from ..resources import new_camera_list
from .models import CameraList

logger = structlog.get_logger(__name__)


def detect_cameras(backend: GPhotoBackend, context: Context) -> CameraList:
    """
    Autodetect connected cameras using an existing context.

    The native camera list lives only for the duration of this call.

    Raises:
        GPhotoError: if autodetection or any list access fails, including a
            negative entry count
    """
    cameras = CameraList()
    with new_camera_list(backend) as camera_list:
        check(backend.camera_autodetect(camera_list.handle, context.handle),
              "Cannot autodetect cameras")

        size = check(backend.list_count(camera_list.handle), "Cannot get camera list")

        for index in range(size):
            result, name = backend.list_get_name(camera_list.handle, index)
            check(result, f"Cannot get camera name at index {index}")
            result, port = backend.list_get_value(camera_list.handle, index)
            check(result, f"Cannot get camera port at index {index}")
            cameras.append(name or "", port or "")

    logger.debug("Autodetected cameras", count=len(cameras))
    return cameras


def list_cameras(backend: Optional[GPhotoBackend] = None,
                 config: Optional[GPCameraConfig] = None) -> CameraList:
    """
    List the cameras currently connected to the computer.

    A private context is created for the call and released before returning.

    Args:
        backend: Native backend, defaults to the system libgphoto2
        config: Configuration, defaults to GPCameraConfig.load()

    Returns:
        CameraList with index-aligned names and ports (empty when no camera
        is connected)
    """
    if backend is None:
        config = config or GPCameraConfig.load()
        backend = get_default_backend(config.library)
    with Context(backend) as context:
        cameras = detect_cameras(backend, context)

    for camera in cameras:
        logger.info("Discovered camera", name=camera.name, port=camera.port)
    return cameras
