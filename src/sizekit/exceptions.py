"""Custom exceptions for the sizekit package."""


class SizeKitError(Exception):
    """Base exception for all sizekit errors."""

    pass


class ProbeError(SizeKitError):
    """Raised when the external size probe cannot report a size."""

    pass


class RecordFormatError(SizeKitError):
    """Raised when a metadata record is not well formed."""

    pass


class VersionNameCollisionError(SizeKitError):
    """Raised when two nodes of a version tree share the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Version name {name!r} is used by more than one node")
        self.name = name


class ConfigurationError(SizeKitError):
    """Raised when configuration is invalid."""

    pass
