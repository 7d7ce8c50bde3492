"""
Shared fixtures: an in-memory backend standing in for libgphoto2.
"""

import itertools
from collections import Counter

import pytest

from gpcamera.backend import GPhotoBackend, set_default_backend
from gpcamera.config import GPCameraConfig
from gpcamera.errors import GP_ERROR_MODEL_NOT_FOUND, GP_ERROR_UNKNOWN_PORT, GP_OK

CANON = ("Canon EOS R", "usb:001,004")
NIKON = ("Nikon Z6", "usb:001,005")


class FakeHandle:
    """Opaque handle handed out by FakeBackend."""

    def __init__(self, kind, number):
        self.kind = kind
        self.number = number

    def __repr__(self):
        return f"<{self.kind} #{self.number}>"


class FakeBackend(GPhotoBackend):
    """
    Fake libgphoto2.

    Records every call, counts allocations against releases per handle kind
    and returns an injected status for any method registered with fail().
    """

    def __init__(self, cameras=(), models=None, ports=None):
        self.cameras = list(cameras)
        self.models = list(models) if models is not None else [name for name, _ in self.cameras]
        self.ports = list(ports) if ports is not None else [port for _, port in self.cameras]
        self.failures = {}
        self.list_count_result = None
        self.context_fails = False
        self.calls = []
        self.allocated = Counter()
        self.released = Counter()
        self.bound = {}
        self._lists = {}
        self._ids = itertools.count(1)

    # Test helpers

    def fail(self, method, code):
        self.failures[method] = code

    def called(self, method):
        return sum(1 for name, _ in self.calls if name == method)

    def call_names(self):
        return [name for name, _ in self.calls]

    def args_of(self, method):
        return [args for name, args in self.calls if name == method]

    def leaks(self):
        return {kind: self.allocated[kind] - self.released[kind]
                for kind in self.allocated
                if self.allocated[kind] != self.released[kind]}

    def _record(self, method, *args):
        self.calls.append((method, args))
        return self.failures.get(method, GP_OK)

    def _alloc(self, method, kind):
        status = self._record(method)
        if status < GP_OK:
            return status, None
        self.allocated[kind] += 1
        return GP_OK, FakeHandle(kind, next(self._ids))

    def _free(self, method, kind, handle):
        status = self._record(method, handle)
        self.released[kind] += 1
        return status

    # Context

    def context_new(self):
        self._record("context_new")
        if self.context_fails:
            return None
        self.allocated["GPContext"] += 1
        return FakeHandle("GPContext", next(self._ids))

    def context_unref(self, context):
        self._free("context_unref", "GPContext", context)

    # Camera

    def camera_new(self):
        return self._alloc("camera_new", "Camera")

    def camera_init(self, camera, context):
        return self._record("camera_init", camera, context)

    def camera_exit(self, camera, context):
        return self._record("camera_exit", camera, context)

    def camera_unref(self, camera):
        return self._free("camera_unref", "Camera", camera)

    def camera_autodetect(self, camera_list, context):
        status = self._record("camera_autodetect", camera_list, context)
        if status < GP_OK:
            return status
        self._lists[camera_list] = list(self.cameras)
        return len(self.cameras)

    def camera_set_abilities(self, camera, abilities):
        status = self._record("camera_set_abilities", camera, abilities)
        if status == GP_OK:
            self.bound.setdefault(camera, {})["abilities"] = abilities
        return status

    def camera_set_port_info(self, camera, port_info):
        status = self._record("camera_set_port_info", camera, port_info)
        if status == GP_OK:
            self.bound.setdefault(camera, {})["port_info"] = port_info
        return status

    def camera_get_port_info(self, camera):
        status = self._record("camera_get_port_info", camera)
        if status < GP_OK:
            return status, None
        return status, self.bound.get(camera, {}).get("port_info", "port:default")

    # CameraList

    def list_new(self):
        status, handle = self._alloc("list_new", "CameraList")
        if handle is not None:
            self._lists[handle] = []
        return status, handle

    def list_count(self, camera_list):
        status = self._record("list_count", camera_list)
        if status < GP_OK:
            return status
        if self.list_count_result is not None:
            return self.list_count_result
        return len(self._lists[camera_list])

    def list_get_name(self, camera_list, index):
        status = self._record("list_get_name", camera_list, index)
        if status < GP_OK:
            return status, None
        return status, self._lists[camera_list][index][0]

    def list_get_value(self, camera_list, index):
        status = self._record("list_get_value", camera_list, index)
        if status < GP_OK:
            return status, None
        return status, self._lists[camera_list][index][1]

    def list_free(self, camera_list):
        return self._free("list_free", "CameraList", camera_list)

    # CameraAbilitiesList

    def abilities_list_new(self):
        return self._alloc("abilities_list_new", "CameraAbilitiesList")

    def abilities_list_load(self, abilities_list, context):
        return self._record("abilities_list_load", abilities_list, context)

    def abilities_list_lookup_model(self, abilities_list, model):
        status = self._record("abilities_list_lookup_model", abilities_list, model)
        if status < GP_OK:
            return status
        if model not in self.models:
            return GP_ERROR_MODEL_NOT_FOUND
        return self.models.index(model)

    def abilities_list_get_abilities(self, abilities_list, index):
        status = self._record("abilities_list_get_abilities", abilities_list, index)
        if status < GP_OK:
            return status, None
        return status, f"abilities:{self.models[index]}"

    def abilities_list_free(self, abilities_list):
        return self._free("abilities_list_free", "CameraAbilitiesList", abilities_list)

    # GPPortInfoList

    def port_info_list_new(self):
        return self._alloc("port_info_list_new", "GPPortInfoList")

    def port_info_list_load(self, port_info_list):
        return self._record("port_info_list_load", port_info_list)

    def port_info_list_count(self, port_info_list):
        status = self._record("port_info_list_count", port_info_list)
        if status < GP_OK:
            return status
        return len(self.ports)

    def port_info_list_lookup_path(self, port_info_list, path):
        status = self._record("port_info_list_lookup_path", port_info_list, path)
        if status < GP_OK:
            return status
        if path not in self.ports:
            return GP_ERROR_UNKNOWN_PORT
        return self.ports.index(path)

    def port_info_list_get_info(self, port_info_list, index):
        status = self._record("port_info_list_get_info", port_info_list, index)
        if status < GP_OK:
            return status, None
        return status, f"port:{self.ports[index]}"

    def port_info_list_free(self, port_info_list):
        return self._free("port_info_list_free", "GPPortInfoList", port_info_list)

    # GPPort

    def port_new(self):
        return self._alloc("port_new", "GPPort")

    def port_set_info(self, port, port_info):
        return self._record("port_set_info", port, port_info)

    def port_open(self, port):
        return self._record("port_open", port)

    def port_reset(self, port):
        return self._record("port_reset", port)

    def port_close(self, port):
        return self._record("port_close", port)

    def port_free(self, port):
        return self._free("port_free", "GPPort", port)


@pytest.fixture
def backend():
    """Fake backend with a Canon and a Nikon connected."""
    return FakeBackend(cameras=[CANON, NIKON])


@pytest.fixture
def empty_backend():
    """Fake backend with no camera connected."""
    return FakeBackend()


@pytest.fixture
def config():
    return GPCameraConfig.load_default()


@pytest.fixture(autouse=True)
def reset_default_backend():
    yield
    set_default_backend(None)
