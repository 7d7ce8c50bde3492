"""
Camera connection lifecycle for gpcamera.

new_camera() performs the libgphoto2 connect handshake: detect devices, load
abilities and port metadata, match a device by name, bind abilities and port
info to a fresh camera handle and initialise it. Every intermediate native
object is released before returning, and on any failure the camera handle
and its context are released before the error propagates.
"""

from contextlib import ExitStack, contextmanager
from typing import Optional

import structlog

from .backend import GPhotoBackend, get_default_backend
from .config import GPCameraConfig
from .context import Context
from .devices.discovery import detect_cameras
from .devices.models import DetectedCamera
from .errors import (
    GP_ERROR_BAD_PARAMETERS,
    GP_ERROR_UNKNOWN_PORT,
    GP_OK,
    CameraNotFoundError,
    GPhotoError,
    PortResetError,
    check,
)
from .resources import (
    NativeResource,
    new_abilities_list,
    new_camera_handle,
    new_port,
    new_port_info_list,
)

logger = structlog.get_logger(__name__)


class Camera:
    """
    A camera connected to the computer.

    Owns one native camera handle and one Context. Both are released together
    by free(); the Camera must not be used afterwards. Not thread safe.
    """

    def __init__(self, handle: Optional[NativeResource], context: Context,
                 backend: GPhotoBackend):
        self._camera = handle
        self.context = context
        self.backend = backend
        # Root of the configuration widget tree, filled in by settings code.
        self.settings = None

    @property
    def released(self) -> bool:
        return self.context.released

    def exit(self):
        """
        Close the connection to the camera so other applications can access it.

        libgphoto2 reinitialises the camera automatically on the next access.
        Does nothing when no native handle was ever set.
        """
        if self._camera is None:
            return
        check(self.backend.camera_exit(self._camera.handle, self.context.handle),
              "Cannot exit camera")

    def free(self):
        """
        Exit the camera, drop the native camera handle and release the context.

        If exit() fails nothing is released and the error is raised. Once the
        handle is unreferenced the context is released even if the unref call
        failed; the unref error is raised afterwards.
        """
        self.exit()
        try:
            if self._camera is not None:
                check(self._camera.release(), "Cannot unref camera")
        finally:
            self.context.free()
        logger.debug("Camera released")

    def reset(self):
        """
        Reset the camera's USB port. Requires exclusive access to the device.

        The camera is exited first. A separate port object is opened on the
        camera's port info, reset, closed and freed; the port object is closed
        and freed even when a step fails.
        """
        self.exit()
        if self._camera is None:
            raise GPhotoError("Camera has no native handle", GP_ERROR_BAD_PARAMETERS)
        with _open_port(self.backend, self._camera.handle) as port:
            check(self.backend.port_reset(port.handle), "Cannot reset port", PortResetError)
        logger.info("Camera port reset")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.released:
            return False
        if exc_type is None:
            self.free()
            return False

        # The error raised in the block takes precedence over cleanup errors
        try:
            self.free()
        except GPhotoError as e:
            logger.warning("Camera cleanup failed", error=str(e))
        return False

    def __repr__(self) -> str:
        state = "released" if self.released else "open"
        return f"<Camera {state}>"


def new_camera(name: str = "", backend: Optional[GPhotoBackend] = None,
               config: Optional[GPCameraConfig] = None) -> Camera:
    """
    Connect to the camera called name.

    With an empty name libgphoto2 picks the first connected camera itself.
    When name is given but not detected, CameraNotFoundError is raised unless
    the camera config enables fallback_to_default.

    Args:
        name: Model name as reported by list_cameras()
        backend: Native backend, defaults to the system libgphoto2
        config: Configuration, defaults to GPCameraConfig.load()

    Returns:
        An initialised Camera
    """
    config = config or GPCameraConfig.load()
    backend = backend or get_default_backend(config.library)

    context = Context(backend)
    with ExitStack() as owned:
        owned.callback(context.release_quietly)

        camera = None
        if name:
            camera = _open_named(backend, context, name, config.camera.fallback_to_default)
        if camera is None:
            camera = _open_default(backend, context)

        owned.pop_all()
    return Camera(camera, context, backend)


def _init_camera(backend: GPhotoBackend, camera: NativeResource, context: Context):
    result = backend.camera_init(camera.handle, context.handle)
    if result != GP_OK:
        backend.camera_exit(camera.handle, context.handle)
        raise GPhotoError("Cannot initialize camera", result)


def _open_default(backend: GPhotoBackend, context: Context) -> NativeResource:
    camera = new_camera_handle(backend)
    with ExitStack() as cleanup:
        cleanup.callback(camera.release_quietly)
        _init_camera(backend, camera, context)
        cleanup.pop_all()
    return camera


def _open_named(backend: GPhotoBackend, context: Context, name: str,
                fallback_to_default: bool) -> Optional[NativeResource]:
    with new_abilities_list(backend) as abilities_list:
        check(backend.abilities_list_load(abilities_list.handle, context.handle),
              "Cannot load camera abilities list")

        detected = detect_cameras(backend, context).find(name)
        if detected is not None:
            logger.info("Found camera", name=detected.name, port=detected.port)
            return _open_detected(backend, context, abilities_list, detected)

    if not fallback_to_default:
        raise CameraNotFoundError(name)
    logger.warning("Camera not detected, connecting to default camera", name=name)
    return None


def _open_detected(backend: GPhotoBackend, context: Context,
                   abilities_list: NativeResource, detected: DetectedCamera) -> NativeResource:
    camera = new_camera_handle(backend)
    with ExitStack() as cleanup:
        cleanup.callback(camera.release_quietly)

        index = check(backend.abilities_list_lookup_model(abilities_list.handle, detected.name),
                      "Cannot lookup camera model")
        result, abilities = backend.abilities_list_get_abilities(abilities_list.handle, index)
        check(result, "Cannot get camera abilities")
        check(backend.camera_set_abilities(camera.handle, abilities),
              "Cannot set camera abilities")

        _bind_port_info(backend, camera, detected.port)
        _init_camera(backend, camera, context)

        cleanup.pop_all()
    return camera


def _bind_port_info(backend: GPhotoBackend, camera: NativeResource, path: str):
    with new_port_info_list(backend) as port_info_list:
        check(backend.port_info_list_load(port_info_list.handle), "Cannot load port info list")
        check(backend.port_info_list_count(port_info_list.handle), "Cannot get port info list")

        index = backend.port_info_list_lookup_path(port_info_list.handle, path)
        if index == GP_ERROR_UNKNOWN_PORT:
            raise GPhotoError(f"Unknown port {path!r}", index)
        check(index, "Cannot lookup port")

        result, port_info = backend.port_info_list_get_info(port_info_list.handle, index)
        check(result, "Cannot get port info")
        check(backend.camera_set_port_info(camera.handle, port_info), "Cannot set port info")


@contextmanager
def _open_port(backend: GPhotoBackend, camera_handle):
    """
    Open a standalone GPPort on the camera's port info.

    The port is closed (when it was opened) and freed on exit. An error from
    the body or from opening wins over a cleanup error, which is only logged.
    """
    port = new_port(backend)
    opened = False
    try:
        result, port_info = backend.camera_get_port_info(camera_handle)
        check(result, "Cannot get camera port info", PortResetError)
        check(backend.port_set_info(port.handle, port_info), "Cannot set port info", PortResetError)
        check(backend.port_open(port.handle), "Cannot open port", PortResetError)
        opened = True
        yield port
    except BaseException:
        _close_port(backend, port, opened, raise_errors=False)
        raise
    _close_port(backend, port, opened, raise_errors=True)


def _close_port(backend: GPhotoBackend, port: NativeResource, opened: bool, raise_errors: bool):
    error = None
    if opened:
        result = backend.port_close(port.handle)
        if result < GP_OK:
            error = PortResetError("Cannot close port", result)
    result = port.release()
    if result < GP_OK and error is None:
        error = PortResetError("Cannot free port", result)

    if error is None:
        return
    if raise_errors:
        raise error
    logger.warning("Port cleanup failed", error=str(error))
