"""IEX-TP segment framing.

A segment is one packet payload: a 40-byte header followed by message blocks.
Each block is a 2-byte little-endian length followed by that many bytes of
message body. A zero-length block is a heartbeat.

Segment structure:
- [Header (40 bytes)] [Length (2)] [Body] [Length (2)] [Body] ...
"""

from __future__ import annotations

import struct
from typing import Iterable, Iterator, Optional

from ..codec.byteview import Buffer, ByteView
from ..codec.decoder import decode_record
from ..codec.encoder import encode_record
from ..exceptions import BlockDecodeError, HeaderDecodeError
from ..models.header import PROTOCOL_TOPS, SUPPORTED_VERSION, SegmentHeader

HEADER_LENGTH = 40
BLOCK_PREFIX_LENGTH = 2
MAX_BLOCK_LENGTH = 0xFFFF


def decode_segment_header(payload: Buffer | ByteView) -> SegmentHeader:
    """Decode and validate the header at the start of a segment.

    Args:
        payload: Packet payload starting with the segment header

    Returns:
        Decoded header

    Raises:
        HeaderDecodeError: If the payload is shorter than 40 bytes or the
            transport version is not 1

    Example:
        >>> header = decode_segment_header(payload)
        >>> header.message_count
        3
    """
    view = payload if isinstance(payload, ByteView) else ByteView(payload)
    if len(view) < HEADER_LENGTH:
        raise HeaderDecodeError(
            f"Payload too short for segment header: {len(view)} bytes, need {HEADER_LENGTH}"
        )

    header = decode_record(SegmentHeader, view, error=HeaderDecodeError)
    if header.version != SUPPORTED_VERSION:
        raise HeaderDecodeError(
            f"Unsupported transport version {header.version}, expected {SUPPORTED_VERSION}"
        )

    return header


def encode_segment_header(header: SegmentHeader) -> bytes:
    """Encode a segment header to its 40 wire bytes."""
    return encode_record(header)


def read_block(view: ByteView, offset: int, end: Optional[int] = None) -> tuple[ByteView, int]:
    """Read the block starting at ``offset``.

    Args:
        view: Segment payload
        offset: Offset of the block's length prefix
        end: Segment end (defaults to the end of the view)

    Returns:
        Tuple of (block body, offset of the next block)

    Raises:
        BlockDecodeError: If the length prefix or the body extends past ``end``
    """
    if end is None:
        end = len(view)

    if offset + BLOCK_PREFIX_LENGTH > end:
        raise BlockDecodeError(
            f"Truncated block length prefix at offset {offset} (segment ends at {end})"
        )

    block_length = view.read_uint16(offset)
    body_start = offset + BLOCK_PREFIX_LENGTH
    next_offset = body_start + block_length
    if next_offset > end:
        raise BlockDecodeError(
            f"Block at offset {offset} declares {block_length} bytes but only "
            f"{end - body_start} remain in segment"
        )

    return view.slice(body_start, block_length), next_offset


def iter_blocks(payload: Buffer | ByteView, start: int = HEADER_LENGTH) -> Iterator[ByteView]:
    """Iterate over every block body of a segment, heartbeats included.

    Raises:
        BlockDecodeError: If a block overruns the segment
    """
    view = payload if isinstance(payload, ByteView) else ByteView(payload)
    offset = start
    while offset < len(view):
        body, offset = read_block(view, offset)
        yield body


def frame_block(body: bytes) -> bytes:
    """Prefix a message body with its 2-byte little-endian length.

    Raises:
        ValueError: If the body is longer than 65535 bytes
    """
    if len(body) > MAX_BLOCK_LENGTH:
        raise ValueError(f"Block body must be at most {MAX_BLOCK_LENGTH} bytes, got {len(body)}")
    return struct.pack("<H", len(body)) + body


def build_segment(
    bodies: Iterable[bytes],
    *,
    protocol_id: int = PROTOCOL_TOPS,
    channel_id: int = 1,
    session_id: int = 0,
    stream_offset: int = 0,
    first_message_sequence: int = 1,
    send_time: int = 0,
    version: int = SUPPORTED_VERSION,
) -> bytes:
    """Build a complete segment from message bodies.

    ``payload_length`` and ``message_count`` are computed from the bodies. An
    empty body produces a heartbeat block.

    Example:
        >>> segment = build_segment([encode_record(quote)], send_time=1517058017224122394)
        >>> len(segment)
        84
    """
    bodies = list(bodies)
    blocks = b"".join(frame_block(body) for body in bodies)

    header = SegmentHeader(
        version=version,
        protocol_id=protocol_id,
        channel_id=channel_id,
        session_id=session_id,
        payload_length=len(blocks),
        message_count=len(bodies),
        stream_offset=stream_offset,
        first_message_sequence=first_message_sequence,
        send_time=send_time,
    )
    return encode_segment_header(header) + blocks
