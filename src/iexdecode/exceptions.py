"""Exception hierarchy for iexdecode.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from IexDecodeError for easy catching of any iexdecode-specific
error, and each one carries the ReturnCode kind it reports.
"""

from __future__ import annotations

import enum
from typing import ClassVar


class ReturnCode(enum.Enum):
    """Outcome kinds reported by the decoder."""

    SUCCESS = "Success"
    NOT_INITIALIZED = "Decoder not initialized"
    SOURCE_OPEN_FAILED = "Failed opening packet source"
    HEADER_DECODE_FAILED = "Failed decoding segment header"
    BLOCK_DECODE_FAILED = "Failed decoding message block"
    UNKNOWN_MESSAGE_TYPE = "Unknown message type"
    END_OF_STREAM = "End of stream"


class IexDecodeError(Exception):
    """Base exception for all iexdecode errors."""

    code: ClassVar[ReturnCode] = ReturnCode.BLOCK_DECODE_FAILED


class SchemaError(IexDecodeError):
    """Raised when a model's wire layout is invalid.

    Examples:
        - Field without wire metadata
        - Overlapping fields
        - Code field whose annotation is not an enum
    """


class EncodeError(IexDecodeError):
    """Raised when a record cannot be encoded to its wire layout.

    Examples:
        - Symbol longer than its fixed-width field
        - Integer that does not fit its field width
    """


class OutOfBoundsError(IexDecodeError, IndexError):
    """Raised when a read would run past the end of a byte buffer.

    ByteView raises this instead of returning partial data. The framing and codec
    layers wrap it in HeaderDecodeError or BlockDecodeError.
    """

    def __init__(self, offset: int, width: int, size: int) -> None:
        super().__init__(
            f"Read of {width} bytes at offset {offset} exceeds buffer of {size} bytes"
        )
        self.offset = offset
        self.width = width
        self.size = size


class NotInitializedError(IexDecodeError):
    """Raised when the decoder is used before a packet source is attached."""

    code = ReturnCode.NOT_INITIALIZED


class SourceOpenError(IexDecodeError):
    """Raised when a packet source cannot be opened.

    Examples:
        - File does not exist or is unreadable
        - Unrecognized capture format (not pcap, pcapng or gzip)
        - Capture contains no packets
    """

    code = ReturnCode.SOURCE_OPEN_FAILED


class HeaderDecodeError(IexDecodeError):
    """Raised when an IEX-TP segment header is invalid.

    Examples:
        - Payload shorter than the 40-byte header
        - Transport version other than 1
    """

    code = ReturnCode.HEADER_DECODE_FAILED


class BlockDecodeError(IexDecodeError):
    """Raised when a message block of a known type cannot be decoded.

    Examples:
        - Block length prefix overruns the segment
        - Message body truncated
        - Timestamp outside the valid range
        - Unrecognized enumeration code
    """

    code = ReturnCode.BLOCK_DECODE_FAILED


class UnknownMessageTypeError(IexDecodeError):
    """Raised for a well-framed block whose type byte is not recognized.

    This is not a framing failure: the decoder has already moved past the block,
    so callers may skip it and keep reading.
    """

    code = ReturnCode.UNKNOWN_MESSAGE_TYPE

    def __init__(self, type_byte: int, block_length: int) -> None:
        super().__init__(f"Unknown message type 0x{type_byte:02x} (block length {block_length})")
        self.type_byte = type_byte
        self.block_length = block_length


class EndOfStreamError(IexDecodeError):
    """Raised when the packet source has no more packets."""

    code = ReturnCode.END_OF_STREAM
