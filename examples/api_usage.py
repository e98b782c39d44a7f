"""Example: Keeping image sizes for an uploaded picture and its versions."""

from sizekit import ImageSizeTracker
from sizekit.api.store import AttributeStore
from sizekit.core.config import TrackerConfigBuilder
from sizekit.io.version_tree import AttachmentNode


class Artist:
    """Stand-in for an ORM model with a ``pic`` upload and its metadata column."""

    def __init__(self) -> None:
        self.pic = "uploads/pic.png"
        self.pic_information = None


artist = Artist()

# Describe the stored files: the original plus a thumbnail with its own thumbnail
root = AttachmentNode("uploads/pic.png")
thumb = root.add_version("thumb", "uploads/thumb_pic.png")
thumb.add_version("tiny", "uploads/thumb_tiny_pic.png")

# Probe with ImageMagick, giving up on any file after 5 seconds
config = TrackerConfigBuilder().with_probe_timeout(5.0).build()
tracker = ImageSizeTracker(root, AttributeStore(artist, "pic"), config=config)

# Call on every cache event; the whole tree is re-probed from the root
tracker.capture("image/png")
print(repr(artist.pic_information))

# Queries read the stored field and return None when nothing is known
print(tracker.image_width(), tracker.image_height())
print(tracker.version("thumb", "tiny").image_width())
print(tracker.content_type())

# Recreating versions later without a content type keeps the original one
tracker.capture("", node=thumb)
print(tracker.content_type())
