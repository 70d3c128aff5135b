"""Bounds-checked byte reading and writing utilities.

This module provides the low-level little-endian field access used by the
segment and message codecs. Every read validates that the requested width fits
in the buffer before interpreting any bytes.
"""

from __future__ import annotations

import struct
from typing import Union

from ..exceptions import OutOfBoundsError

Buffer = Union[bytes, bytearray, memoryview]

PRICE_SCALE = 10_000

_UINT_FORMATS = {1: "<B", 2: "<H", 4: "<I", 8: "<Q"}


class ByteView:
    """Read-only cursor-free view over a byte buffer.

    All offsets are relative to the start of the view. The underlying buffer is
    never copied.

    Example:
        >>> view = ByteView(b"\\x51\\x00\\x2a\\x00")
        >>> view.read_uint8(0)
        81
        >>> view.read_uint16(2)
        42
    """

    __slots__ = ("_data",)

    def __init__(self, data: Buffer) -> None:
        """Initialize a view over the given buffer.

        Args:
            data: Bytes-like object to read from
        """
        self._data = memoryview(data).cast("B")

    def __len__(self) -> int:
        return len(self._data)

    def _check(self, offset: int, width: int) -> None:
        if offset < 0 or width < 0 or offset + width > len(self._data):
            raise OutOfBoundsError(offset, width, len(self._data))

    def read_uint(self, offset: int, width: int) -> int:
        """Read a little-endian unsigned integer.

        Args:
            offset: Byte offset from the start of the view
            width: Width in bytes (1, 2, 4 or 8)

        Returns:
            Unsigned integer value

        Raises:
            ValueError: If width is not 1, 2, 4 or 8
            OutOfBoundsError: If the field extends past the end of the view
        """
        fmt = _UINT_FORMATS.get(width)
        if fmt is None:
            raise ValueError(f"width must be 1, 2, 4 or 8, got {width}")
        self._check(offset, width)
        return struct.unpack_from(fmt, self._data, offset)[0]

    def read_uint8(self, offset: int) -> int:
        return self.read_uint(offset, 1)

    def read_uint16(self, offset: int) -> int:
        return self.read_uint(offset, 2)

    def read_uint32(self, offset: int) -> int:
        return self.read_uint(offset, 4)

    def read_uint64(self, offset: int) -> int:
        return self.read_uint(offset, 8)

    def read_int64(self, offset: int) -> int:
        """Read a little-endian signed 8-byte integer."""
        self._check(offset, 8)
        return struct.unpack_from("<q", self._data, offset)[0]

    def read_price(self, offset: int) -> float:
        """Read a fixed-point price with 4 implied decimal digits.

        Args:
            offset: Byte offset of the signed 8-byte price field

        Returns:
            Price in currency units (raw value / 10000)
        """
        return self.read_int64(offset) / PRICE_SCALE

    def read_bytes(self, offset: int, length: int) -> bytes:
        """Read raw bytes.

        Raises:
            OutOfBoundsError: If the range extends past the end of the view
        """
        self._check(offset, length)
        return bytes(self._data[offset : offset + length])

    def read_padded_text(self, offset: int, length: int) -> str:
        """Read fixed-width, space-padded ASCII text.

        Trailing spaces are removed. Other characters, including control
        characters, are kept as-is.

        Args:
            offset: Byte offset of the text field
            length: Field width in bytes

        Returns:
            Text with trailing spaces stripped
        """
        return self.read_bytes(offset, length).decode("latin-1").rstrip(" ")

    def slice(self, offset: int, length: int) -> ByteView:
        """Return a sub-view sharing the same buffer.

        Raises:
            OutOfBoundsError: If the range extends past the end of the view
        """
        self._check(offset, length)
        return ByteView(self._data[offset : offset + length])

    def tobytes(self) -> bytes:
        return self._data.tobytes()


class ByteWriter:
    """Writes little-endian fields into a fixed-size, zero-filled buffer.

    Example:
        >>> writer = ByteWriter(4)
        >>> writer.write_uint8(0, 0x51)
        >>> writer.write_uint16(2, 42)
        >>> writer.to_bytes()
        b'Q\\x00*\\x00'
    """

    def __init__(self, size: int) -> None:
        """Initialize a zero-filled buffer.

        Args:
            size: Buffer size in bytes
        """
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self._buffer = bytearray(size)

    def __len__(self) -> int:
        return len(self._buffer)

    def _check(self, offset: int, width: int) -> None:
        if offset < 0 or offset + width > len(self._buffer):
            raise OutOfBoundsError(offset, width, len(self._buffer))

    def write_uint(self, offset: int, value: int, width: int) -> None:
        """Write a little-endian unsigned integer.

        Raises:
            ValueError: If width is invalid or value does not fit
            OutOfBoundsError: If the field extends past the end of the buffer
        """
        fmt = _UINT_FORMATS.get(width)
        if fmt is None:
            raise ValueError(f"width must be 1, 2, 4 or 8, got {width}")
        max_value = (1 << (8 * width)) - 1
        if not 0 <= value <= max_value:
            raise ValueError(f"Value {value} does not fit in {width} unsigned bytes")
        self._check(offset, width)
        struct.pack_into(fmt, self._buffer, offset, value)

    def write_uint8(self, offset: int, value: int) -> None:
        self.write_uint(offset, value, 1)

    def write_uint16(self, offset: int, value: int) -> None:
        self.write_uint(offset, value, 2)

    def write_uint32(self, offset: int, value: int) -> None:
        self.write_uint(offset, value, 4)

    def write_uint64(self, offset: int, value: int) -> None:
        self.write_uint(offset, value, 8)

    def write_int64(self, offset: int, value: int) -> None:
        if not -(1 << 63) <= value < (1 << 63):
            raise ValueError(f"Value {value} does not fit in 8 signed bytes")
        self._check(offset, 8)
        struct.pack_into("<q", self._buffer, offset, value)

    def write_price(self, offset: int, price: float) -> None:
        """Write a price as a signed 8-byte integer scaled by 10000."""
        self.write_int64(offset, round(price * PRICE_SCALE))

    def write_bytes(self, offset: int, data: bytes) -> None:
        self._check(offset, len(data))
        self._buffer[offset : offset + len(data)] = data

    def write_padded_text(self, offset: int, text: str, length: int) -> None:
        """Write ASCII text right-padded with spaces to a fixed width.

        Raises:
            ValueError: If the encoded text is longer than the field
        """
        raw = text.encode("latin-1")
        if len(raw) > length:
            raise ValueError(f"Text {text!r} exceeds field width {length}")
        self.write_bytes(offset, raw.ljust(length, b" "))

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)
