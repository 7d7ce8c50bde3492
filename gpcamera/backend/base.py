"""
Native function contract for gpcamera.

The camera and discovery code talk to libgphoto2 only through this interface.
Each method maps to exactly one native call and returns the native integer
status. Calls that fill an out-parameter return a ``(status, value)`` tuple.
Handles are opaque: callers pass them back unchanged and never inspect them.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

Handle = Any


class GPhotoBackend(ABC):
    """Function contract of the native device-control library."""

    # Context

    @abstractmethod
    def context_new(self) -> Optional[Handle]:
        """Allocate a GPContext. Returns None when the library fails."""

    @abstractmethod
    def context_unref(self, context: Handle) -> None:
        """Drop the reference to a GPContext."""

    # Camera

    @abstractmethod
    def camera_new(self) -> Tuple[int, Optional[Handle]]:
        """Allocate a Camera handle."""

    @abstractmethod
    def camera_init(self, camera: Handle, context: Handle) -> int:
        """Open the connection to the camera."""

    @abstractmethod
    def camera_exit(self, camera: Handle, context: Handle) -> int:
        """Close the connection so other processes can access the device."""

    @abstractmethod
    def camera_unref(self, camera: Handle) -> int:
        """Drop the reference to a Camera handle."""

    @abstractmethod
    def camera_autodetect(self, camera_list: Handle, context: Handle) -> int:
        """Fill camera_list with (model, port) pairs of connected devices."""

    @abstractmethod
    def camera_set_abilities(self, camera: Handle, abilities: Handle) -> int:
        """Bind the abilities of a camera model to the handle."""

    @abstractmethod
    def camera_set_port_info(self, camera: Handle, port_info: Handle) -> int:
        """Bind the port the camera is connected to."""

    @abstractmethod
    def camera_get_port_info(self, camera: Handle) -> Tuple[int, Optional[Handle]]:
        """Port info currently bound to the camera."""

    # CameraList

    @abstractmethod
    def list_new(self) -> Tuple[int, Optional[Handle]]:
        """Allocate an empty CameraList."""

    @abstractmethod
    def list_count(self, camera_list: Handle) -> int:
        """Number of entries, or a negative status."""

    @abstractmethod
    def list_get_name(self, camera_list: Handle, index: int) -> Tuple[int, Optional[str]]:
        """Name stored at index."""

    @abstractmethod
    def list_get_value(self, camera_list: Handle, index: int) -> Tuple[int, Optional[str]]:
        """Value stored at index. For autodetect lists this is the port path."""

    @abstractmethod
    def list_free(self, camera_list: Handle) -> int:
        """Free a CameraList and the strings it owns."""

    # CameraAbilitiesList

    @abstractmethod
    def abilities_list_new(self) -> Tuple[int, Optional[Handle]]:
        """Allocate an empty CameraAbilitiesList."""

    @abstractmethod
    def abilities_list_load(self, abilities_list: Handle, context: Handle) -> int:
        """Fill the list with every model the installed drivers support."""

    @abstractmethod
    def abilities_list_lookup_model(self, abilities_list: Handle, model: str) -> int:
        """Index of model in the list, or a negative status."""

    @abstractmethod
    def abilities_list_get_abilities(self, abilities_list: Handle,
                                     index: int) -> Tuple[int, Optional[Handle]]:
        """Copy of the CameraAbilities at index."""

    @abstractmethod
    def abilities_list_free(self, abilities_list: Handle) -> int:
        """Free a CameraAbilitiesList."""

    # GPPortInfoList

    @abstractmethod
    def port_info_list_new(self) -> Tuple[int, Optional[Handle]]:
        """Allocate an empty GPPortInfoList."""

    @abstractmethod
    def port_info_list_load(self, port_info_list: Handle) -> int:
        """Fill the list with the ports the installed port drivers provide."""

    @abstractmethod
    def port_info_list_count(self, port_info_list: Handle) -> int:
        """Number of entries, or a negative status."""

    @abstractmethod
    def port_info_list_lookup_path(self, port_info_list: Handle, path: str) -> int:
        """Index of the port with this path, or a negative status."""

    @abstractmethod
    def port_info_list_get_info(self, port_info_list: Handle,
                                index: int) -> Tuple[int, Optional[Handle]]:
        """Port info at index. The info belongs to the list."""

    @abstractmethod
    def port_info_list_free(self, port_info_list: Handle) -> int:
        """Free a GPPortInfoList."""

    # GPPort

    @abstractmethod
    def port_new(self) -> Tuple[int, Optional[Handle]]:
        """Allocate an unopened GPPort."""

    @abstractmethod
    def port_set_info(self, port: Handle, port_info: Handle) -> int:
        """Bind port info to the port before opening it."""

    @abstractmethod
    def port_open(self, port: Handle) -> int:
        """Open the port."""

    @abstractmethod
    def port_reset(self, port: Handle) -> int:
        """Reset the device on an opened port."""

    @abstractmethod
    def port_close(self, port: Handle) -> int:
        """Close an opened port."""

    @abstractmethod
    def port_free(self, port: Handle) -> int:
        """Free a GPPort."""

    # Diagnostics

    def result_as_string(self, code: int) -> Optional[str]:
        """Native description of a result code, if the library provides one."""
        return None
