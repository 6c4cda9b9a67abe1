import struct
from io import BytesIO

import pytest

from bmp_reader.bmp_header import (
    BMPFileHeader,
    BMPInfoHeader,
    COMPRESSION_RLE4,
    COMPRESSION_RLE8,
    read_headers,
)
from bmp_reader.errors import BMPIOError, InvalidFormatError
from bmp_reader.utils import ByteStream
from bmp_builder import build_bmp


def info_bytes(width=4, height=3, planes=1, bit_count=24, compression=0, colors_used=0):
    return struct.pack("<IiiHHIIiiII", 40, width, height, planes, bit_count,
                       compression, 0, 0, 0, colors_used, 0)


def test_file_header_fields_are_little_endian():
    data = b"BM" + bytes([0x78, 0x56, 0x34, 0x12, 0, 0, 0, 0, 0x36, 0x01, 0, 0])
    header = BMPFileHeader(data)
    assert header.is_valid()
    assert header.file_size == 0x12345678
    assert header.pixel_offset == 0x136


def test_file_header_rejects_short_buffer():
    with pytest.raises(BMPIOError):
        BMPFileHeader(b"BM\x00\x00")


def test_info_header_negative_height_is_top_down():
    header = BMPInfoHeader(info_bytes(width=5, height=-7))
    assert header.width == 5
    assert header.height == 7
    assert header.raw_height == -7
    assert header.top_down


def test_info_header_positive_height_is_bottom_up():
    header = BMPInfoHeader(info_bytes(width=5, height=7))
    assert header.height == 7
    assert not header.top_down


@pytest.mark.parametrize("bit_count, colors_used, expected", [
    (1, 0, 2),
    (4, 0, 16),
    (8, 0, 256),
    (8, 12, 12),
    (24, 0, 0),
    (32, 5, 0),
])
def test_palette_length(bit_count, colors_used, expected):
    header = BMPInfoHeader(info_bytes(bit_count=bit_count, colors_used=colors_used))
    assert header.palette_length == expected


@pytest.mark.parametrize("bit_count, channels, bitdepth", [
    (1, 3, 24), (4, 3, 24), (8, 3, 24), (16, 3, 24), (24, 3, 24), (32, 4, 32),
])
def test_channels_follow_bit_count(bit_count, channels, bitdepth):
    header = BMPInfoHeader(info_bytes(bit_count=bit_count))
    assert header.channels == channels
    assert header.bitdepth == bitdepth


@pytest.mark.parametrize("bit_count, compression", [
    (8, COMPRESSION_RLE8),
    (4, COMPRESSION_RLE4),
    (1, COMPRESSION_RLE4),
    (16, 0),
])
def test_validate_accepts_supported_combinations(bit_count, compression):
    BMPInfoHeader(info_bytes(bit_count=bit_count, compression=compression)).validate()


@pytest.mark.parametrize("kwargs", [
    {"bit_count": 2},
    {"bit_count": 0},
    {"bit_count": 4, "compression": COMPRESSION_RLE8},
    {"bit_count": 24, "compression": COMPRESSION_RLE8},
    {"bit_count": 8, "compression": COMPRESSION_RLE4},
    {"bit_count": 32, "compression": 3},
    {"planes": 2},
    {"width": 0},
    {"width": -4},
    {"height": 0},
])
def test_validate_rejects_unsupported_headers(kwargs):
    header = BMPInfoHeader(info_bytes(**kwargs))
    with pytest.raises(InvalidFormatError):
        header.validate()


def test_read_headers_rejects_bad_magic():
    data = build_bmp(1, 1, 24, b"\x00" * 4, magic=b"MB")
    with pytest.raises(InvalidFormatError):
        read_headers(ByteStream(BytesIO(data)))


def test_read_headers_truncated_info_header():
    data = build_bmp(1, 1, 24, b"\x00" * 4)[:30]
    with pytest.raises(BMPIOError):
        read_headers(ByteStream(BytesIO(data)))


def test_read_headers_leaves_stream_after_info_header():
    data = build_bmp(2, -3, 8, b"", palette=[(1, 2, 3)], colors_used=1)
    stream = ByteStream(BytesIO(data))
    file_header, info_header = read_headers(stream)
    assert stream.tell() == 54
    assert file_header.pixel_offset == 58
    assert (info_header.width, info_header.height, info_header.top_down) == (2, 3, True)
    assert "RLE" not in info_header.get_compression_string()
    assert "top-down" in str(info_header)


def test_stream_rejects_reads_past_end_before_reading():
    stream = ByteStream(BytesIO(b"abc"))
    with pytest.raises(BMPIOError):
        stream.read(8 * 1024 ** 3)
    assert stream.tell() == 0
    assert stream.remaining() == 3
    assert stream.read(3) == b"abc"
