"""
Native backend for gpcamera.

This package holds the function contract of libgphoto2 and its ctypes
implementation. The default backend is created lazily so that importing
gpcamera does not require the native library to be installed.
"""

import threading
from typing import Optional

from ..errors import set_result_describer
from .base import GPhotoBackend, Handle

_default_backend: Optional[GPhotoBackend] = None
_lock = threading.Lock()


def get_default_backend(library_config=None) -> GPhotoBackend:
    """
    Return the process wide libgphoto2 backend, loading it on first use.

    Args:
        library_config: Optional LibraryConfig with explicit library paths,
            only honoured on the first call.
    """
    global _default_backend
    with _lock:
        if _default_backend is None:
            from .libgphoto2 import LibGPhoto2Backend

            if library_config is None:
                from ..config import GPCameraConfig
                library_config = GPCameraConfig.load().library

            backend = LibGPhoto2Backend(
                gphoto2_path=library_config.gphoto2_path,
                gphoto2_port_path=library_config.gphoto2_port_path,
            )
            set_result_describer(backend.result_as_string)
            _default_backend = backend
        return _default_backend


def set_default_backend(backend: Optional[GPhotoBackend]):
    """Replace the process wide backend (None forces a reload on next use)."""
    global _default_backend
    with _lock:
        _default_backend = backend
        set_result_describer(backend.result_as_string if backend is not None else None)


__all__ = ["GPhotoBackend", "Handle", "get_default_backend", "set_default_backend"]
