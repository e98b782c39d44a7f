"""Dataclass for a cached image size."""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class ImageSize:
    """Pixel dimensions of one node in a version tree.

    Unpacks like a ``(width, height)`` tuple so callers can write
    ``width, height = size``.
    """

    width: int
    """Image width in pixels."""

    height: int
    """Image height in pixels."""

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Image size cannot be negative: {self.width}x{self.height}")

    def __iter__(self) -> Iterator[int]:
        yield self.width
        yield self.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
