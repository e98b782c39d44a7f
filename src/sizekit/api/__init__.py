"""Public API for capturing and querying image metadata."""

from sizekit.api.store import AttributeStore, MappingStore, MetadataStore, info_field_name
from sizekit.api.tracker import ImageSizeTracker, VersionView

__all__ = [
    "AttributeStore",
    "ImageSizeTracker",
    "MappingStore",
    "MetadataStore",
    "VersionView",
    "info_field_name",
]
