"""
Device discovery for gpcamera.

This package enumerates connected cameras and models the autodetection
result.
"""

from .discovery import detect_cameras, list_cameras
from .models import CameraList, DetectedCamera

__all__ = ["list_cameras", "detect_cameras", "CameraList", "DetectedCamera"]
