"""I/O modules for version trees and image sizes."""

from sizekit.io.image_size import ImageSize
from sizekit.io.version_tree import AttachmentNode, VersionNode

__all__ = ["ImageSize", "AttachmentNode", "VersionNode"]
