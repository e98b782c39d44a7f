"""Access to the host record field holding the metadata record."""

import logging
from abc import ABC, abstractmethod
from typing import Any, MutableMapping

from sizekit import constants

logger = logging.getLogger(__name__)


def info_field_name(attachment_name: str, suffix: str = constants.INFO_FIELD_SUFFIX) -> str:
    """Return the field name for an attachment, e.g. ``"pic"`` -> ``"pic_information"``."""
    return f"{attachment_name}{suffix}"


class MetadataStore(ABC):
    """The single string field a host record provides per attachment."""

    def __init__(
        self, record: Any, attachment_name: str, suffix: str = constants.INFO_FIELD_SUFFIX
    ) -> None:
        self.record = record
        self.attachment_name = attachment_name
        self.field_name = info_field_name(attachment_name, suffix)

    @abstractmethod
    def has_metadata_field(self) -> bool:
        """Whether the host record can store metadata for this attachment."""
        pass

    @abstractmethod
    def read(self) -> Any:
        """Return the raw field value (None when unsupported or unset)."""
        pass

    @abstractmethod
    def write(self, value: str) -> None:
        """Overwrite the field with ``value``."""
        pass


class AttributeStore(MetadataStore):
    """Field stored as an attribute of the host record (ORM models and similar).

    Support is decided once per record class and field name.
    """

    _support_cache: dict[tuple[type, str], bool] = {}

    def has_metadata_field(self) -> bool:
        key = (type(self.record), self.field_name)
        supported = self._support_cache.get(key)
        if supported is None:
            supported = hasattr(self.record, self.field_name)
            self._support_cache[key] = supported
            if not supported:
                logger.info(
                    "%s has no %r field; image metadata capture disabled",
                    type(self.record).__name__,
                    self.field_name,
                )
        return supported

    def read(self) -> Any:
        if not self.has_metadata_field():
            return None
        return getattr(self.record, self.field_name, None)

    def write(self, value: str) -> None:
        if not self.has_metadata_field():
            return
        setattr(self.record, self.field_name, value)

    @classmethod
    def clear_support_cache(cls) -> None:
        """Forget per-class decisions (used for tests)."""
        cls._support_cache.clear()


class MappingStore(MetadataStore):
    """Field stored under a key of a dict-like host record."""

    record: MutableMapping[str, Any]

    def has_metadata_field(self) -> bool:
        return self.field_name in self.record

    def read(self) -> Any:
        return self.record.get(self.field_name)

    def write(self, value: str) -> None:
        if not self.has_metadata_field():
            return
        self.record[self.field_name] = value
