"""
Device models for gpcamera.

These models represent the cameras reported by libgphoto2's autodetection.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass(frozen=True)
class DetectedCamera:
    """One autodetected camera."""
    name: str    # e.g., "Nikon Z6"
    port: str    # e.g., "usb:001,005"

    def __str__(self) -> str:
        return f"{self.name} ({self.port})"


@dataclass
class CameraList:
    """
    Autodetected cameras as two index-aligned lists.

    names[i] is the model reported on ports[i]. Names are not unique when
    several cameras of the same model are connected.
    """
    names: List[str] = field(default_factory=list)
    ports: List[str] = field(default_factory=list)

    def __post_init__(self):
        if len(self.names) != len(self.ports):
            raise ValueError(f"names and ports differ in length: "
                             f"{len(self.names)} != {len(self.ports)}")

    def append(self, name: str, port: str):
        self.names.append(name)
        self.ports.append(port)

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[DetectedCamera]:
        for name, port in zip(self.names, self.ports):
            yield DetectedCamera(name=name, port=port)

    def find(self, name: str) -> Optional[DetectedCamera]:
        """First camera whose name matches exactly, or None."""
        for camera in self:
            if camera.name == name:
                return camera
        return None

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            "cameras": [{"name": camera.name, "port": camera.port} for camera in self]
        }
