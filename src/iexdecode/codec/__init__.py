"""Binary codec for IEX-TP messages.

This module provides bounds-checked byte access, layout-driven record decoding
and encoding, and dispatch of message blocks by type byte.
"""

from __future__ import annotations

from .byteview import PRICE_SCALE, ByteView, ByteWriter
from .decoder import decode_record
from .dispatch import (
    MESSAGE_DECODERS,
    MESSAGE_REGISTRY,
    body_length,
    decode_message,
    is_known_type,
    register_message,
)
from .encoder import encode_record
from .schema import FieldLayout, MessageLayout

__all__ = [
    "ByteView",
    "ByteWriter",
    "PRICE_SCALE",
    "decode_record",
    "encode_record",
    "decode_message",
    "register_message",
    "is_known_type",
    "body_length",
    "MESSAGE_DECODERS",
    "MESSAGE_REGISTRY",
    "MessageLayout",
    "FieldLayout",
]
