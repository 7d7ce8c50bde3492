"""
ctypes declarations for the libgphoto2 structures passed by value.

Only CameraAbilities crosses the boundary by value; every other libgphoto2
type is an opaque pointer and is carried as c_void_p.
"""

import ctypes


class CameraAbilities(ctypes.Structure):
    """Mirror of ``CameraAbilities`` from gphoto2-abilities-list.h (2.5.x)."""

    _fields_ = [
        ("model", ctypes.c_char * 128),
        ("status", ctypes.c_int),
        ("port", ctypes.c_int),
        ("speed", ctypes.c_int * 64),
        ("operations", ctypes.c_int),
        ("file_operations", ctypes.c_int),
        ("folder_operations", ctypes.c_int),
        ("usb_vendor", ctypes.c_int),
        ("usb_product", ctypes.c_int),
        ("usb_class", ctypes.c_int),
        ("usb_subclass", ctypes.c_int),
        ("usb_protocol", ctypes.c_int),
        ("library", ctypes.c_char * 1024),
        ("id", ctypes.c_char * 1024),
        ("device_type", ctypes.c_int),
        ("reserved2", ctypes.c_int),
        ("reserved3", ctypes.c_int),
        ("reserved4", ctypes.c_int),
        ("reserved5", ctypes.c_int),
        ("reserved6", ctypes.c_int),
        ("reserved7", ctypes.c_int),
        ("reserved8", ctypes.c_int),
    ]

    def __str__(self) -> str:
        return self.model.decode("utf-8", errors="replace")


# Opaque pointer types
GPContextPtr = ctypes.c_void_p
CameraPtr = ctypes.c_void_p
CameraListPtr = ctypes.c_void_p
CameraAbilitiesListPtr = ctypes.c_void_p
GPPortInfoListPtr = ctypes.c_void_p
GPPortInfo = ctypes.c_void_p
GPPortPtr = ctypes.c_void_p

# Native signatures: name -> (restype, argtypes)
GPHOTO2_SIGNATURES = {
    "gp_context_new": (GPContextPtr, []),
    "gp_context_unref": (None, [GPContextPtr]),
    "gp_camera_new": (ctypes.c_int, [ctypes.POINTER(CameraPtr)]),
    "gp_camera_init": (ctypes.c_int, [CameraPtr, GPContextPtr]),
    "gp_camera_exit": (ctypes.c_int, [CameraPtr, GPContextPtr]),
    "gp_camera_unref": (ctypes.c_int, [CameraPtr]),
    "gp_camera_autodetect": (ctypes.c_int, [CameraListPtr, GPContextPtr]),
    "gp_camera_set_abilities": (ctypes.c_int, [CameraPtr, CameraAbilities]),
    "gp_camera_set_port_info": (ctypes.c_int, [CameraPtr, GPPortInfo]),
    "gp_camera_get_port_info": (ctypes.c_int, [CameraPtr, ctypes.POINTER(GPPortInfo)]),
    "gp_list_new": (ctypes.c_int, [ctypes.POINTER(CameraListPtr)]),
    "gp_list_count": (ctypes.c_int, [CameraListPtr]),
    "gp_list_get_name": (ctypes.c_int, [CameraListPtr, ctypes.c_int,
                                        ctypes.POINTER(ctypes.c_char_p)]),
    "gp_list_get_value": (ctypes.c_int, [CameraListPtr, ctypes.c_int,
                                         ctypes.POINTER(ctypes.c_char_p)]),
    "gp_list_free": (ctypes.c_int, [CameraListPtr]),
    "gp_abilities_list_new": (ctypes.c_int, [ctypes.POINTER(CameraAbilitiesListPtr)]),
    "gp_abilities_list_load": (ctypes.c_int, [CameraAbilitiesListPtr, GPContextPtr]),
    "gp_abilities_list_lookup_model": (ctypes.c_int, [CameraAbilitiesListPtr, ctypes.c_char_p]),
    "gp_abilities_list_get_abilities": (ctypes.c_int, [CameraAbilitiesListPtr, ctypes.c_int,
                                                       ctypes.POINTER(CameraAbilities)]),
    "gp_abilities_list_free": (ctypes.c_int, [CameraAbilitiesListPtr]),
    "gp_result_as_string": (ctypes.c_char_p, [ctypes.c_int]),
}

GPHOTO2_PORT_SIGNATURES = {
    "gp_port_info_list_new": (ctypes.c_int, [ctypes.POINTER(GPPortInfoListPtr)]),
    "gp_port_info_list_load": (ctypes.c_int, [GPPortInfoListPtr]),
    "gp_port_info_list_count": (ctypes.c_int, [GPPortInfoListPtr]),
    "gp_port_info_list_lookup_path": (ctypes.c_int, [GPPortInfoListPtr, ctypes.c_char_p]),
    "gp_port_info_list_get_info": (ctypes.c_int, [GPPortInfoListPtr, ctypes.c_int,
                                                  ctypes.POINTER(GPPortInfo)]),
    "gp_port_info_list_free": (ctypes.c_int, [GPPortInfoListPtr]),
    "gp_port_new": (ctypes.c_int, [ctypes.POINTER(GPPortPtr)]),
    "gp_port_set_info": (ctypes.c_int, [GPPortPtr, GPPortInfo]),
    "gp_port_open": (ctypes.c_int, [GPPortPtr]),
    "gp_port_reset": (ctypes.c_int, [GPPortPtr]),
    "gp_port_close": (ctypes.c_int, [GPPortPtr]),
    "gp_port_free": (ctypes.c_int, [GPPortPtr]),
}
