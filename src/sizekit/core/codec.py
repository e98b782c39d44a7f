"""Encoding and decoding of the flat metadata record.

A record is a newline-terminated list of lines. The first line holds the
original content type (possibly empty), every following line one size::

    image/png
    base:200x150
    thumb:20x15
    thumb_tiny:10x7

Lookups compare names literally, line by line; names are never turned into
patterns.
"""

import logging
from typing import Any, Iterator, Mapping, Optional

from sizekit import constants
from sizekit.exceptions import RecordFormatError
from sizekit.io.image_size import ImageSize

logger = logging.getLogger(__name__)

_NL = constants.RECORD_LINE_TERMINATOR
_SEP = constants.SIZE_NAME_SEPARATOR
_DIM = constants.SIZE_DIMENSION_SEPARATOR


def _is_number(text: str) -> bool:
    return text.isascii() and text.isdigit()


def parse_dimensions(text: str) -> Optional[ImageSize]:
    """Parse ``"<width>x<height>"`` into an ImageSize.

    Surrounding whitespace is ignored. Returns None for anything else.
    """
    if not isinstance(text, str):
        return None
    width, dim, height = text.strip().partition(_DIM)
    if not dim or not _is_number(width) or not _is_number(height):
        return None
    return ImageSize(int(width), int(height))


def _split_size_line(line: str) -> Optional[tuple[str, ImageSize]]:
    name, sep, dims = line.rpartition(_SEP)
    if not sep:
        return None
    width, dim, height = dims.partition(_DIM)
    if not dim or not _is_number(width) or not _is_number(height):
        return None
    return name, ImageSize(int(width), int(height))


def _size_lines(record: str) -> Iterator[str]:
    lines = record.split(_NL)
    return iter(lines[1:])


def encode(content_type: str, sizes: Mapping[str, ImageSize]) -> str:
    """Serialize a content type and size mapping into a record.

    Args:
        content_type: Original content type of the upload. May be empty.
        sizes: Mapping of version name to size, written in iteration order.

    Returns:
        The record string, every line terminated by a newline.
    """
    if content_type is None:
        raise TypeError("content_type must be a string, not None")
    if _NL in content_type or "\r" in content_type:
        raise ValueError(f"content_type cannot contain line breaks: {content_type!r}")

    parts = [content_type, _NL]
    for name, size in sizes.items():
        if _NL in name or "\r" in name:
            raise ValueError(f"Version name cannot contain line breaks: {name!r}")
        width, height = size
        parts.append(f"{name}{_SEP}{int(width)}{_DIM}{int(height)}{_NL}")
    return "".join(parts)


def decode_content_type(record: Any) -> Optional[str]:
    """Return the content type line of a record, or None if there is no record."""
    if not isinstance(record, str):
        return None
    return record.split(_NL, 1)[0]


def decode_size(record: Any, name: str) -> Optional[ImageSize]:
    """Return the size stored for ``name``, or None when absent or malformed."""
    if not isinstance(record, str) or not isinstance(name, str):
        return None
    # Names may themselves contain ':' so the exact prefix is compared.
    prefix = f"{name}{_SEP}"
    for line in _size_lines(record):
        if not line.startswith(prefix):
            continue
        parsed = _split_size_line(line)
        if parsed is not None and parsed[0] == name:
            return parsed[1]
    return None


def decode_sizes(record: Any) -> dict[str, ImageSize]:
    """Return every well-formed size line of a record, in record order."""
    sizes: dict[str, ImageSize] = {}
    if not isinstance(record, str):
        return sizes
    for line in _size_lines(record):
        parsed = _split_size_line(line)
        if parsed is None:
            continue
        name, size = parsed
        sizes.setdefault(name, size)
    return sizes


def validate_record(record: Any) -> None:
    """Raise RecordFormatError unless ``record`` is a well-formed record."""
    if not isinstance(record, str):
        raise RecordFormatError(f"Record must be a string, got {type(record).__name__}")
    if not record.endswith(_NL):
        raise RecordFormatError("Record must end with a line terminator")
    for number, line in enumerate(record[:-1].split(_NL)[1:], start=2):
        if _split_size_line(line) is None:
            raise RecordFormatError(f"Line {number} is not a size entry: {line!r}")
