"""
Tests for the ctypes backend and default backend selection.
"""

import ctypes
from types import SimpleNamespace

import pytest

from gpcamera.backend import get_default_backend, set_default_backend
from gpcamera.backend.libgphoto2 import LibGPhoto2Backend, _bind
from gpcamera.backend.structs import CameraAbilities
from gpcamera.config import LibraryConfig
from gpcamera.errors import LibraryLoadError, describe_result


@pytest.fixture
def cdll(mocker):
    """Stand-in for ctypes.CDLL whose functions are mocks."""
    return mocker.patch("gpcamera.backend.libgphoto2.ctypes.CDLL")


def test_camera_abilities_layout():
    """Test CameraAbilities matches the size of the C structure."""
    assert ctypes.sizeof(CameraAbilities) == 2504


def test_missing_library(mocker):
    """Test a library that cannot be located raises LibraryLoadError."""
    mocker.patch("gpcamera.backend.libgphoto2.ctypes.util.find_library", return_value=None)

    with pytest.raises(LibraryLoadError) as exc_info:
        LibGPhoto2Backend()

    assert "gphoto2_port" in str(exc_info.value)


def test_unloadable_library(cdll):
    """Test an OSError from the loader is wrapped."""
    cdll.side_effect = OSError("wrong ELF class")

    with pytest.raises(LibraryLoadError) as exc_info:
        LibGPhoto2Backend("/opt/libgphoto2.so", "/opt/libgphoto2_port.so")

    assert "wrong ELF class" in str(exc_info.value)


def test_missing_symbol():
    """Test a library without a required symbol raises LibraryLoadError."""
    library = SimpleNamespace(_name="libgphoto2.so.6")

    with pytest.raises(LibraryLoadError):
        _bind(library, {"gp_camera_new": (ctypes.c_int, [])})


def test_new_without_handle(cdll):
    """Test an allocation that leaves the pointer NULL returns no handle."""
    backend = LibGPhoto2Backend("/opt/libgphoto2.so", "/opt/libgphoto2_port.so")
    cdll.return_value.gp_camera_new.return_value = 0

    assert backend.camera_new() == (0, None)


def test_context_new_null(cdll):
    """Test a NULL context is reported as None."""
    backend = LibGPhoto2Backend("/opt/libgphoto2.so", "/opt/libgphoto2_port.so")
    cdll.return_value.gp_context_new.return_value = None

    assert backend.context_new() is None


def test_result_as_string(cdll):
    """Test native result descriptions are decoded."""
    backend = LibGPhoto2Backend("/opt/libgphoto2.so", "/opt/libgphoto2_port.so")
    cdll.return_value.gp_result_as_string.return_value = b"Unknown model"

    assert backend.result_as_string(-105) == "Unknown model"


def test_default_backend_uses_library_config(cdll):
    """Test the default backend loads the configured paths and describes results."""
    cdll.return_value.gp_result_as_string.return_value = b"Native description"

    backend = get_default_backend(LibraryConfig(gphoto2_path="/opt/libgphoto2.so",
                                                gphoto2_port_path="/opt/libgphoto2_port.so"))

    assert isinstance(backend, LibGPhoto2Backend)
    assert get_default_backend() is backend
    cdll.assert_any_call("/opt/libgphoto2.so")
    cdll.assert_any_call("/opt/libgphoto2_port.so")
    assert describe_result(-1) == "Native description"


def test_set_default_backend(backend):
    """Test an explicitly installed backend is returned."""
    set_default_backend(backend)

    assert get_default_backend() is backend
