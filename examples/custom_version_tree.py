"""Example: Adapting an upload framework's own objects to the version tree."""

from typing import Mapping, Optional

from sizekit.api.store import MappingStore
from sizekit.api.tracker import ImageSizeTracker
from sizekit.io.probe import CallableProbe
from sizekit.io.version_tree import VersionNode


class UploaderNode(VersionNode):
    """Wraps an uploader exposing ``path``, ``version_key`` and ``children``."""

    def __init__(self, uploader, name: str = "base") -> None:
        self._uploader = uploader
        self._name = name

    @property
    def version_name(self) -> str:
        return self._name

    @property
    def current_path(self) -> Optional[str]:
        return self._uploader.path

    def versions(self) -> Mapping[str, VersionNode]:
        return {
            key: UploaderNode(child, name=child.version_key)
            for key, child in self._uploader.children.items()
        }


class Uploader:
    def __init__(self, path, version_key="base", children=None) -> None:
        self.path = path
        self.version_key = version_key
        self.children = children or {}


uploader = Uploader(
    "media/photo.jpg",
    children={"small": Uploader("media/small_photo.jpg", "small")},
)

# Rows from a key/value store work the same way as model attributes
row = {"photo": "media/photo.jpg", "photo_information": None}

# Any function returning (width, height) can serve as the probe
fixed_sizes = {"media/photo.jpg": (1024, 768), "media/small_photo.jpg": (128, 96)}
tracker = ImageSizeTracker(
    UploaderNode(uploader),
    MappingStore(row, "photo"),
    probe=CallableProbe(fixed_sizes.get),
)

tracker.capture("image/jpeg")
print(row["photo_information"])
print(tracker.version("small").image_width())
