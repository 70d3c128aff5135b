"""IEX-TP segment framing utilities.

This module provides segment header decoding/encoding and iteration over the
length-prefixed message blocks of a segment.
"""

from __future__ import annotations

from .segment import (
    BLOCK_PREFIX_LENGTH,
    HEADER_LENGTH,
    build_segment,
    decode_segment_header,
    encode_segment_header,
    frame_block,
    iter_blocks,
    read_block,
)

__all__ = [
    "HEADER_LENGTH",
    "BLOCK_PREFIX_LENGTH",
    "decode_segment_header",
    "encode_segment_header",
    "read_block",
    "iter_blocks",
    "frame_block",
    "build_segment",
]
