"""
ctypes binding of the native function contract to libgphoto2.

Loads libgphoto2 and libgphoto2_port, declares every signature used by
gpcamera and adapts out-parameters to ``(status, value)`` tuples.
"""

import ctypes
import ctypes.util
import logging
from typing import Dict, Optional, Tuple

from ..errors import GP_OK, LibraryLoadError
from ..logger import TRACE
from .base import GPhotoBackend
from .structs import (
    GPHOTO2_PORT_SIGNATURES,
    GPHOTO2_SIGNATURES,
    CameraAbilities,
    CameraAbilitiesListPtr,
    CameraListPtr,
    CameraPtr,
    GPPortInfo,
    GPPortInfoListPtr,
    GPPortPtr,
)


def _encode(text: str) -> bytes:
    return text.encode("utf-8")


def _decode(raw: Optional[bytes]) -> Optional[str]:
    if raw is None:
        return None
    return raw.decode("utf-8", errors="replace")


def _load_library(name: str, path: Optional[str]) -> ctypes.CDLL:
    """Load a shared library by explicit path or by ctypes.util lookup."""
    location = path or ctypes.util.find_library(name)
    if not location:
        raise LibraryLoadError(f"Cannot find lib{name}")
    try:
        return ctypes.CDLL(location)
    except OSError as e:
        raise LibraryLoadError(f"Cannot load {location}: {e}")


def _bind(library: ctypes.CDLL, signatures: Dict) -> Dict[str, object]:
    functions = {}
    for name, (restype, argtypes) in signatures.items():
        try:
            function = getattr(library, name)
        except AttributeError:
            raise LibraryLoadError(f"Missing symbol {name} in {library._name}")
        function.restype = restype
        function.argtypes = argtypes
        functions[name] = function
    return functions


class LibGPhoto2Backend(GPhotoBackend):
    """
    GPhotoBackend implemented on top of the system libgphoto2.

    Every call is logged at TRACE level with its result so that a hanging
    or failing native call can be located from the log.
    """

    def __init__(self, gphoto2_path: Optional[str] = None,
                 gphoto2_port_path: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self._port_lib = _load_library("gphoto2_port", gphoto2_port_path)
        self._lib = _load_library("gphoto2", gphoto2_path)
        self._functions = _bind(self._lib, GPHOTO2_SIGNATURES)
        self._functions.update(_bind(self._port_lib, GPHOTO2_PORT_SIGNATURES))
        self.logger.debug("Loaded libgphoto2 from %s and libgphoto2_port from %s",
                          self._lib._name, self._port_lib._name)

    def _call(self, name: str, *args):
        result = self._functions[name](*args)
        self.logger.log(TRACE, "%s -> %s", name, result)
        return result

    def _new(self, name: str, pointer_type) -> Tuple[int, Optional[ctypes.c_void_p]]:
        handle = pointer_type()
        result = self._call(name, ctypes.byref(handle))
        if result != GP_OK or not handle.value:
            return result, None
        return result, handle

    # Context

    def context_new(self):
        handle = self._call("gp_context_new")
        if not handle:
            return None
        return ctypes.c_void_p(handle)

    def context_unref(self, context) -> None:
        self._call("gp_context_unref", context)

    # Camera

    def camera_new(self):
        return self._new("gp_camera_new", CameraPtr)

    def camera_init(self, camera, context) -> int:
        return self._call("gp_camera_init", camera, context)

    def camera_exit(self, camera, context) -> int:
        return self._call("gp_camera_exit", camera, context)

    def camera_unref(self, camera) -> int:
        return self._call("gp_camera_unref", camera)

    def camera_autodetect(self, camera_list, context) -> int:
        return self._call("gp_camera_autodetect", camera_list, context)

    def camera_set_abilities(self, camera, abilities) -> int:
        return self._call("gp_camera_set_abilities", camera, abilities)

    def camera_set_port_info(self, camera, port_info) -> int:
        return self._call("gp_camera_set_port_info", camera, port_info)

    def camera_get_port_info(self, camera):
        info = GPPortInfo()
        result = self._call("gp_camera_get_port_info", camera, ctypes.byref(info))
        return result, info if result == GP_OK else None

    # CameraList

    def list_new(self):
        return self._new("gp_list_new", CameraListPtr)

    def list_count(self, camera_list) -> int:
        return self._call("gp_list_count", camera_list)

    def list_get_name(self, camera_list, index: int):
        # The string is owned by the list and must not be freed here.
        value = ctypes.c_char_p()
        result = self._call("gp_list_get_name", camera_list, index, ctypes.byref(value))
        return result, _decode(value.value) if result == GP_OK else None

    def list_get_value(self, camera_list, index: int):
        value = ctypes.c_char_p()
        result = self._call("gp_list_get_value", camera_list, index, ctypes.byref(value))
        return result, _decode(value.value) if result == GP_OK else None

    def list_free(self, camera_list) -> int:
        return self._call("gp_list_free", camera_list)

    # CameraAbilitiesList

    def abilities_list_new(self):
        return self._new("gp_abilities_list_new", CameraAbilitiesListPtr)

    def abilities_list_load(self, abilities_list, context) -> int:
        return self._call("gp_abilities_list_load", abilities_list, context)

    def abilities_list_lookup_model(self, abilities_list, model: str) -> int:
        return self._call("gp_abilities_list_lookup_model", abilities_list, _encode(model))

    def abilities_list_get_abilities(self, abilities_list, index: int):
        abilities = CameraAbilities()
        result = self._call("gp_abilities_list_get_abilities", abilities_list, index,
                            ctypes.byref(abilities))
        return result, abilities if result == GP_OK else None

    def abilities_list_free(self, abilities_list) -> int:
        return self._call("gp_abilities_list_free", abilities_list)

    # GPPortInfoList

    def port_info_list_new(self):
        return self._new("gp_port_info_list_new", GPPortInfoListPtr)

    def port_info_list_load(self, port_info_list) -> int:
        return self._call("gp_port_info_list_load", port_info_list)

    def port_info_list_count(self, port_info_list) -> int:
        return self._call("gp_port_info_list_count", port_info_list)

    def port_info_list_lookup_path(self, port_info_list, path: str) -> int:
        return self._call("gp_port_info_list_lookup_path", port_info_list, _encode(path))

    def port_info_list_get_info(self, port_info_list, index: int):
        info = GPPortInfo()
        result = self._call("gp_port_info_list_get_info", port_info_list, index,
                            ctypes.byref(info))
        return result, info if result == GP_OK else None

    def port_info_list_free(self, port_info_list) -> int:
        return self._call("gp_port_info_list_free", port_info_list)

    # GPPort

    def port_new(self):
        return self._new("gp_port_new", GPPortPtr)

    def port_set_info(self, port, port_info) -> int:
        return self._call("gp_port_set_info", port, port_info)

    def port_open(self, port) -> int:
        return self._call("gp_port_open", port)

    def port_reset(self, port) -> int:
        return self._call("gp_port_reset", port)

    def port_close(self, port) -> int:
        return self._call("gp_port_close", port)

    def port_free(self, port) -> int:
        return self._call("gp_port_free", port)

    # Diagnostics

    def result_as_string(self, code: int) -> Optional[str]:
        # gp_result_as_string defers to libgphoto2_port for codes above -100.
        return _decode(self._functions["gp_result_as_string"](code))
