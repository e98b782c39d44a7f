"""Cached image size and content type metadata for attachments and their versions."""

from __future__ import annotations

__version__ = "0.3.0"

__all__ = ["ImageSizeTracker"]


def __getattr__(name: str):
    if name == "ImageSizeTracker":
        from sizekit.api.tracker import ImageSizeTracker

        return ImageSizeTracker
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["ImageSizeTracker"])
