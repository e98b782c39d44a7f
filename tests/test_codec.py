"""Tests for the metadata record codec."""

import pytest

from sizekit.core import codec
from sizekit.exceptions import RecordFormatError
from sizekit.io.image_size import ImageSize


def _sizes() -> dict[str, ImageSize]:
    return {
        "base": ImageSize(200, 150),
        "thumb": ImageSize(20, 15),
        "thumb_tiny": ImageSize(10, 7),
    }


class TestEncode:
    """Tests for codec.encode."""

    def test_encode_layout(self) -> None:
        """Content type first, then one size line per entry in order."""
        record = codec.encode("image/png", _sizes())
        assert record == "image/png\nbase:200x150\nthumb:20x15\nthumb_tiny:10x7\n"

    def test_encode_empty_mapping(self) -> None:
        """An empty mapping still writes the content type line."""
        record = codec.encode("image/jpeg", {})
        assert record == "image/jpeg\n"
        assert codec.decode_size(record, "base") is None

    def test_encode_empty_content_type(self) -> None:
        """Empty content type leaves an empty first line."""
        record = codec.encode("", {"base": ImageSize(1, 2)})
        assert record == "\nbase:1x2\n"
        assert codec.decode_content_type(record) == ""

    def test_encode_accepts_plain_tuples(self) -> None:
        """Sizes may be given as (width, height) pairs."""
        assert codec.encode("image/gif", {"base": (3, 4)}) == "image/gif\nbase:3x4\n"

    def test_encode_rejects_none_content_type(self) -> None:
        with pytest.raises(TypeError):
            codec.encode(None, {})

    def test_encode_rejects_line_breaks(self) -> None:
        with pytest.raises(ValueError):
            codec.encode("image/png\nbase:1x1", {})

    @pytest.mark.parametrize("name", ["a\nb", "a\rb", "thumb\n"])
    def test_encode_rejects_line_breaks_in_names(self, name: str) -> None:
        """A name with a line break would split its size line in two."""
        with pytest.raises(ValueError):
            codec.encode("image/png", {name: ImageSize(1, 2)})


class TestDecode:
    """Tests for decoding records."""

    def test_round_trip(self) -> None:
        """Every encoded entry decodes back to the same size."""
        sizes = _sizes()
        record = codec.encode("image/png", sizes)

        assert codec.decode_content_type(record) == "image/png"
        for name, size in sizes.items():
            assert codec.decode_size(record, name) == size

    def test_missing_name(self) -> None:
        record = codec.encode("image/png", _sizes())
        assert codec.decode_size(record, "nonexistent") is None

    def test_name_is_not_a_prefix_match(self) -> None:
        """'thumb' must not match the 'thumb_tiny' line and vice versa."""
        record = "image/png\nthumb_tiny:10x7\n"
        assert codec.decode_size(record, "thumb") is None
        assert codec.decode_size(record, "tiny") is None

    def test_pattern_characters_are_literal(self) -> None:
        """Names containing regex metacharacters are compared verbatim."""
        record = codec.encode("image/png", {"a.b": ImageSize(5, 6), "x+": ImageSize(7, 8)})
        assert codec.decode_size(record, "a.b") == ImageSize(5, 6)
        assert codec.decode_size(record, "aXb") is None
        assert codec.decode_size(record, "x+") == ImageSize(7, 8)
        assert codec.decode_size(record, ".*") is None

    def test_name_containing_separator(self) -> None:
        record = codec.encode("image/png", {"a:b": ImageSize(1, 2), "a": ImageSize(3, 4)})
        assert codec.decode_size(record, "a:b") == ImageSize(1, 2)
        assert codec.decode_size(record, "a") == ImageSize(3, 4)

    def test_content_type_line_is_not_a_size(self) -> None:
        """A content type shaped like a size line is never returned as a size."""
        record = "base:1x1\nthumb:2x2\n"
        assert codec.decode_size(record, "base") is None
        assert codec.decode_size(record, "thumb") == ImageSize(2, 2)

    def test_first_match_wins(self) -> None:
        record = "image/png\nbase:1x1\nbase:2x2\n"
        assert codec.decode_size(record, "base") == ImageSize(1, 1)
        assert codec.decode_sizes(record) == {"base": ImageSize(1, 1)}

    @pytest.mark.parametrize(
        "line",
        ["base:200x", "base:x150", "base:200by150", "base:-1x5", "base: 200x150", "base:2x3 extra"],
    )
    def test_malformed_lines_are_absent(self, line: str) -> None:
        record = f"image/png\n{line}\n"
        assert codec.decode_size(record, "base") is None

    @pytest.mark.parametrize("record", [None, 42, b"image/png\nbase:1x1\n", ["image/png"]])
    def test_non_string_records(self, record) -> None:
        """Records that are not strings decode to nothing."""
        assert codec.decode_content_type(record) is None
        assert codec.decode_size(record, "base") is None
        assert codec.decode_sizes(record) == {}

    def test_content_type_without_terminator(self) -> None:
        assert codec.decode_content_type("image/png") == "image/png"
        assert codec.decode_size("image/png", "image/png") is None

    def test_decode_sizes_skips_garbage(self) -> None:
        record = "image/png\nbase:200x150\nnot a size\nthumb:20x15\n"
        assert codec.decode_sizes(record) == {
            "base": ImageSize(200, 150),
            "thumb": ImageSize(20, 15),
        }


class TestParseDimensions:
    """Tests for codec.parse_dimensions."""

    def test_parse_valid(self) -> None:
        assert codec.parse_dimensions("640x480") == ImageSize(640, 480)
        assert codec.parse_dimensions(" 640x480\n") == ImageSize(640, 480)

    @pytest.mark.parametrize("text", ["", "640", "640x", "x480", "axb", "640X480", "640x480x2"])
    def test_parse_invalid(self, text: str) -> None:
        assert codec.parse_dimensions(text) is None


class TestValidateRecord:
    """Tests for codec.validate_record."""

    def test_valid_record(self) -> None:
        codec.validate_record(codec.encode("image/png", _sizes()))
        codec.validate_record("\n")

    def test_missing_terminator(self) -> None:
        with pytest.raises(RecordFormatError):
            codec.validate_record("image/png\nbase:1x1")

    def test_bad_line(self) -> None:
        with pytest.raises(RecordFormatError, match="Line 3"):
            codec.validate_record("image/png\nbase:1x1\noops\n")

    def test_not_a_string(self) -> None:
        with pytest.raises(RecordFormatError):
            codec.validate_record(None)
