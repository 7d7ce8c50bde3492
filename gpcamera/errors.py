"""
Error types and result codes for gpcamera.

Every non-OK status returned by libgphoto2 is wrapped into a GPhotoError
carrying an optional human message and the native integer code.
"""

from typing import Callable, Optional

# libgphoto2_port result codes (gphoto2-port-result.h)
GP_OK = 0
GP_ERROR = -1
GP_ERROR_BAD_PARAMETERS = -2
GP_ERROR_NO_MEMORY = -3
GP_ERROR_LIBRARY = -4
GP_ERROR_UNKNOWN_PORT = -5
GP_ERROR_NOT_SUPPORTED = -6
GP_ERROR_IO = -7
GP_ERROR_FIXED_LIMIT_EXCEEDED = -8
GP_ERROR_TIMEOUT = -10
GP_ERROR_IO_SUPPORTED_SERIAL = -20
GP_ERROR_IO_SUPPORTED_USB = -21
GP_ERROR_IO_INIT = -31
GP_ERROR_IO_READ = -34
GP_ERROR_IO_WRITE = -35
GP_ERROR_IO_UPDATE = -37
GP_ERROR_IO_SERIAL_SPEED = -41
GP_ERROR_IO_USB_CLEAR_HALT = -51
GP_ERROR_IO_USB_FIND = -52
GP_ERROR_IO_USB_CLAIM = -53
GP_ERROR_IO_LOCK = -60
GP_ERROR_HAL = -70

# libgphoto2 result codes (gphoto2-result.h)
GP_ERROR_CORRUPTED_DATA = -102
GP_ERROR_FILE_EXISTS = -103
GP_ERROR_MODEL_NOT_FOUND = -105
GP_ERROR_DIRECTORY_NOT_FOUND = -107
GP_ERROR_FILE_NOT_FOUND = -108
GP_ERROR_DIRECTORY_EXISTS = -109
GP_ERROR_CAMERA_BUSY = -110
GP_ERROR_PATH_NOT_ABSOLUTE = -111
GP_ERROR_CANCEL = -112
GP_ERROR_CAMERA_ERROR = -113
GP_ERROR_OS_FAILURE = -114
GP_ERROR_NO_SPACE = -115

RESULT_DESCRIPTIONS = {
    GP_OK: "No error",
    GP_ERROR: "Unspecified error",
    GP_ERROR_BAD_PARAMETERS: "Bad parameters",
    GP_ERROR_NO_MEMORY: "Out of memory",
    GP_ERROR_LIBRARY: "Error loading a library",
    GP_ERROR_UNKNOWN_PORT: "Unknown port",
    GP_ERROR_NOT_SUPPORTED: "Unsupported operation",
    GP_ERROR_IO: "I/O problem",
    GP_ERROR_FIXED_LIMIT_EXCEEDED: "Fixed limit exceeded",
    GP_ERROR_TIMEOUT: "Timeout reading from or writing to the port",
    GP_ERROR_IO_SUPPORTED_SERIAL: "Serial port not supported",
    GP_ERROR_IO_SUPPORTED_USB: "USB port not supported",
    GP_ERROR_IO_INIT: "Error initializing the port",
    GP_ERROR_IO_READ: "Error reading from the port",
    GP_ERROR_IO_WRITE: "Error writing to the port",
    GP_ERROR_IO_UPDATE: "Error updating the port settings",
    GP_ERROR_IO_SERIAL_SPEED: "Error setting the serial port speed",
    GP_ERROR_IO_USB_CLEAR_HALT: "Error clearing a halt condition on the USB port",
    GP_ERROR_IO_USB_FIND: "Could not find the requested device on the USB port",
    GP_ERROR_IO_USB_CLAIM: "Could not claim the USB device",
    GP_ERROR_IO_LOCK: "Could not lock the device",
    GP_ERROR_HAL: "libhal error",
    GP_ERROR_CORRUPTED_DATA: "Corrupted data",
    GP_ERROR_FILE_EXISTS: "File exists",
    GP_ERROR_MODEL_NOT_FOUND: "Unknown model",
    GP_ERROR_DIRECTORY_NOT_FOUND: "Directory not found",
    GP_ERROR_FILE_NOT_FOUND: "File not found",
    GP_ERROR_DIRECTORY_EXISTS: "Directory exists",
    GP_ERROR_CAMERA_BUSY: "I/O in progress",
    GP_ERROR_PATH_NOT_ABSOLUTE: "Path not absolute",
    GP_ERROR_CANCEL: "Cancelled",
    GP_ERROR_CAMERA_ERROR: "Camera error",
    GP_ERROR_OS_FAILURE: "OS error",
    GP_ERROR_NO_SPACE: "Not enough space",
}

# Optional hook installed by the native backend so that messages come from
# gp_result_as_string() rather than the static table.
_describe_hook: Optional[Callable[[int], Optional[str]]] = None


def set_result_describer(describer: Optional[Callable[[int], Optional[str]]]):
    """Install (or clear with None) the function used to describe result codes."""
    global _describe_hook
    _describe_hook = describer


def describe_result(code: int) -> str:
    """Return a human readable description for a libgphoto2 result code."""
    if _describe_hook is not None:
        text = _describe_hook(code)
        if text:
            return text
    return RESULT_DESCRIPTIONS.get(code, f"Unknown error {code}")


class GPhotoError(Exception):
    """A native libgphoto2 call returned a non-OK status."""

    def __init__(self, message: str = "", code: int = GP_ERROR):
        self.message = message
        self.code = int(code)
        super().__init__(str(self))

    def __str__(self) -> str:
        description = describe_result(self.code)
        if self.message:
            return f"{self.message}: {description} ({self.code})"
        return f"{description} ({self.code})"


class ContextInitError(GPhotoError):
    """The native library could not allocate a GPContext."""


class CameraNotFoundError(GPhotoError):
    """No detected camera matched the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Camera not found: {name!r}", GP_ERROR_MODEL_NOT_FOUND)


class PortResetError(GPhotoError):
    """A step of the open/reset/close port sequence failed."""


class ResourceReleasedError(GPhotoError):
    """A native handle was used or released after it had already been released."""

    def __init__(self, what: str):
        super().__init__(f"{what} has already been released", GP_ERROR_BAD_PARAMETERS)


class LibraryLoadError(GPhotoError):
    """libgphoto2 or libgphoto2_port could not be loaded."""

    def __init__(self, message: str):
        super().__init__(message, GP_ERROR_LIBRARY)


def check(result: int, message: str = "", error_class=GPhotoError) -> int:
    """
    Raise error_class if result is a negative native status.

    Non-negative results pass through so that count and index returning
    calls can be checked the same way.
    """
    if result < GP_OK:
        raise error_class(message, result)
    return result
