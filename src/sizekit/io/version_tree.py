"""Version tree interface consumed by the size walker."""

import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from sizekit import constants

logger = logging.getLogger(__name__)


class VersionNode(ABC):
    """One stored file in an attachment's version tree.

    Hosts adapt their upload framework's attachment objects to this
    interface. The root node is named ``"base"``; every other node carries
    the name its size is recorded under.
    """

    @property
    @abstractmethod
    def version_name(self) -> str:
        """Name the node's size is stored under."""
        pass

    @property
    @abstractmethod
    def current_path(self) -> Optional[str]:
        """Location of the stored file, or None when nothing is stored yet."""
        pass

    @abstractmethod
    def versions(self) -> Mapping[str, "VersionNode"]:
        """Named child versions derived from this node."""
        pass


class AttachmentNode(VersionNode):
    """In-memory version tree for hosts without their own node objects.

    Example:
        >>> root = AttachmentNode("/uploads/pic.png")
        >>> thumb = root.add_version("thumb", "/uploads/thumb_pic.png")
        >>> thumb.add_version("tiny", "/uploads/tiny_pic.png").version_name
        'thumb_tiny'
    """

    def __init__(
        self,
        path: Optional[str] = None,
        name: str = constants.BASE_VERSION_NAME,
        parent: Optional["AttachmentNode"] = None,
    ) -> None:
        self._path = path
        self._name = name
        self._parent = parent
        self._versions: dict[str, AttachmentNode] = {}

    @property
    def version_name(self) -> str:
        return self._name

    @property
    def current_path(self) -> Optional[str]:
        return self._path

    @current_path.setter
    def current_path(self, path: Optional[str]) -> None:
        self._path = path

    @property
    def parent(self) -> Optional["AttachmentNode"]:
        return self._parent

    @property
    def root(self) -> "AttachmentNode":
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    def versions(self) -> Mapping[str, "AttachmentNode"]:
        return dict(self._versions)

    def add_version(
        self, key: str, path: Optional[str] = None, name: Optional[str] = None
    ) -> "AttachmentNode":
        """Attach a derived version under ``key`` and return it.

        Args:
            key: Accessor name of the child within this node.
            path: Stored file location of the child, if any.
            name: Record name of the child. Defaults to ``key`` for children of
                the root and to the ancestor keys joined with ``_`` below that.

        Returns:
            The new child node.
        """
        if key in self._versions:
            raise ValueError(f"Version {key!r} already exists under {self._name!r}")
        if name is None:
            if self._parent is None:
                name = key
            else:
                name = f"{self._name}{constants.NESTED_NAME_SEPARATOR}{key}"
        if name == constants.BASE_VERSION_NAME:
            logger.warning(
                "Version %r uses the reserved name %r; its size will shadow the base image",
                key,
                name,
            )
        child = AttachmentNode(path=path, name=name, parent=self)
        self._versions[key] = child
        return child

    def version(self, *keys: str) -> "AttachmentNode":
        """Walk down the tree by accessor keys, e.g. ``node.version("thumb", "tiny")``."""
        node = self
        for key in keys:
            try:
                node = node._versions[key]
            except KeyError as e:
                raise KeyError(f"No version {key!r} under {node._name!r}") from e
        return node

    def __repr__(self) -> str:
        return f"AttachmentNode(name={self._name!r}, path={self._path!r})"
