"""
Owned native handles.

Every foreign pointer handed out by libgphoto2 is wrapped in a NativeResource
that knows its single release call. Releasing twice, or reading the handle
after release, raises ResourceReleasedError instead of touching freed memory.
"""

from typing import Callable, Optional

import structlog

from .backend import GPhotoBackend, Handle
from .errors import GP_ERROR, GP_OK, GPhotoError, ResourceReleasedError, check

logger = structlog.get_logger(__name__)


class NativeResource:
    """A native handle together with the call that releases it."""

    def __init__(self, handle: Handle, release: Callable[[Handle], Optional[int]],
                 kind: str = "native resource"):
        self._handle = handle
        self._release = release
        self.kind = kind
        self._released = False

    @property
    def handle(self) -> Handle:
        if self._released:
            raise ResourceReleasedError(self.kind)
        return self._handle

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> Optional[int]:
        """
        Release the handle. The resource counts as released even when the
        native call reports an error, so the call is never repeated.

        Returns:
            The native status of the release call (None for void calls)
        """
        if self._released:
            raise ResourceReleasedError(self.kind)
        self._released = True
        handle, self._handle = self._handle, None
        return self._release(handle)

    def release_quietly(self):
        """Release if still held, logging instead of raising on failure."""
        if self._released:
            return
        result = self.release()
        if result is not None and result < GP_OK:
            logger.warning("Failed to release native resource", kind=self.kind,
                           error=str(GPhotoError(f"Cannot free {self.kind}", result)))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release_quietly()
        return False

    def __repr__(self) -> str:
        state = "released" if self._released else "held"
        return f"<{self.__class__.__name__} {self.kind} {state}>"


def allocate(backend_call: Callable[[], tuple], release: Callable[[Handle], Optional[int]],
             kind: str, message: str) -> NativeResource:
    """
    Run a ``*_new`` style backend call and wrap the returned handle.

    Raises:
        GPhotoError: if the call fails or returns no handle
    """
    result, handle = backend_call()
    check(result, message)
    if handle is None:
        raise GPhotoError(message, GP_ERROR)
    return NativeResource(handle, release, kind)


def new_camera_list(backend: GPhotoBackend) -> NativeResource:
    return allocate(backend.list_new, backend.list_free, "CameraList",
                    "Cannot initialize camera list")


def new_abilities_list(backend: GPhotoBackend) -> NativeResource:
    return allocate(backend.abilities_list_new, backend.abilities_list_free,
                    "CameraAbilitiesList", "Cannot initialize camera abilities list")


def new_port_info_list(backend: GPhotoBackend) -> NativeResource:
    return allocate(backend.port_info_list_new, backend.port_info_list_free,
                    "GPPortInfoList", "Cannot initialize port info list")


def new_camera_handle(backend: GPhotoBackend) -> NativeResource:
    return allocate(backend.camera_new, backend.camera_unref, "Camera",
                    "Cannot initialize camera pointer")


def new_port(backend: GPhotoBackend) -> NativeResource:
    return allocate(backend.port_new, backend.port_free, "GPPort",
                    "Cannot initialize port")
