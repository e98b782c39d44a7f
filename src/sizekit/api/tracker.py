"""Public Python API: capture and query cached image sizes."""

import logging
from typing import Optional

from sizekit.api.store import MetadataStore
from sizekit.core import codec
from sizekit.core.config import TrackerConfig
from sizekit.core.walker import collect_sizes
from sizekit.exceptions import ConfigurationError
from sizekit.io.image_size import ImageSize
from sizekit.io.probe import SizeProbe, create_probe
from sizekit.io.version_tree import VersionNode
from sizekit.logging_utils import capture_context

logger = logging.getLogger("sizekit.api.tracker")


def _descend(node: VersionNode, keys: tuple[str, ...]) -> VersionNode:
    for key in keys:
        children = node.versions()
        if key not in children:
            raise KeyError(f"No version {key!r} under {node.version_name!r}")
        node = children[key]
    return node


class ImageSizeTracker:
    """Keep an attachment's metadata field in sync with its version tree.

    Call :meth:`capture` whenever the host framework caches a new file for
    the attachment or any of its versions. Queries read the persisted field
    on demand and return None whenever data is missing. Without an explicit
    config, settings come from the ``SIZEKIT_*`` environment variables.
    The root must be named ``config.base_name`` and the store field must
    end with ``config.field_suffix``.

    Example:
        >>> root = AttachmentNode("/uploads/pic.png")
        >>> root.add_version("thumb", "/uploads/thumb_pic.png")
        >>> tracker = ImageSizeTracker(root, AttributeStore(artist, "pic"))
        >>> tracker.capture("image/png")
        >>> tracker.version("thumb").image_width()
        20
    """

    def __init__(
        self,
        root: VersionNode,
        store: MetadataStore,
        probe: Optional[SizeProbe] = None,
        config: Optional[TrackerConfig] = None,
    ) -> None:
        self.root = root
        self.store = store
        self.config = config or TrackerConfig.from_env()
        self.probe = probe or create_probe(self.config)

        if root.version_name != self.config.base_name:
            raise ConfigurationError(
                f"Root version is named {root.version_name!r}, "
                f"expected {self.config.base_name!r}"
            )
        if not store.field_name.endswith(self.config.field_suffix):
            raise ConfigurationError(
                f"Field {store.field_name!r} does not end with {self.config.field_suffix!r}"
            )

    @property
    def record(self) -> Optional[str]:
        """The persisted record, or None when there is none."""
        value = self.store.read()
        return value if isinstance(value, str) else None

    def capture(
        self, content_type: Optional[str] = None, node: Optional[VersionNode] = None
    ) -> Optional[str]:
        """Rebuild and persist the record after a cache event.

        The whole tree is probed starting from the root, whichever node
        triggered the event. A blank ``content_type`` keeps the content type
        of the previous record.

        Args:
            content_type: Content type reported for the newly cached file.
            node: Node whose file was cached, for logging only.

        Returns:
            The new record, or None if the host record has no metadata field.
        """
        if not self.store.has_metadata_field():
            return None

        previous_content_type = codec.decode_content_type(self.record)
        if content_type and content_type.strip():
            effective_content_type = content_type
        else:
            effective_content_type = previous_content_type or ""

        with capture_context(self.store.field_name):
            sizes = collect_sizes(self.root, self.probe, on_collision=self.config.on_collision)
        new_record = codec.encode(effective_content_type, sizes)
        self.store.write(new_record)

        trigger = node.version_name if node is not None else self.root.version_name
        logger.info(
            "Stored %d size(s) in %s after caching %r",
            len(sizes),
            self.store.field_name,
            trigger,
        )
        return new_record

    on_cache = capture

    def content_type(self) -> Optional[str]:
        """Original content type of the upload."""
        return codec.decode_content_type(self.record)

    def size(self, name: Optional[str] = None) -> Optional[ImageSize]:
        """Size recorded for version ``name`` (defaults to the root)."""
        return codec.decode_size(self.record, name or self.root.version_name)

    def image_width(self, name: Optional[str] = None) -> Optional[int]:
        size = self.size(name)
        return size.width if size is not None else None

    def image_height(self, name: Optional[str] = None) -> Optional[int]:
        size = self.size(name)
        return size.height if size is not None else None

    def sizes(self) -> dict[str, ImageSize]:
        """Every size in the persisted record."""
        return codec.decode_sizes(self.record)

    def version(self, *keys: str) -> "VersionView":
        """Return a view of the node reached by following ``keys`` from the root.

        Raises:
            KeyError: If a key does not name a child version.
        """
        return VersionView(self, _descend(self.root, keys))


class VersionView:
    """Queries bound to a single node of the tracked tree."""

    def __init__(self, tracker: ImageSizeTracker, node: VersionNode) -> None:
        self._tracker = tracker
        self.node = node

    @property
    def name(self) -> str:
        return self.node.version_name

    def image_width(self) -> Optional[int]:
        return self._tracker.image_width(self.name)

    def image_height(self) -> Optional[int]:
        return self._tracker.image_height(self.name)

    def size(self) -> Optional[ImageSize]:
        return self._tracker.size(self.name)

    def content_type(self) -> Optional[str]:
        return self._tracker.content_type()

    def version(self, *keys: str) -> "VersionView":
        return VersionView(self._tracker, _descend(self.node, keys))

    def __repr__(self) -> str:
        return f"VersionView(name={self.name!r})"
