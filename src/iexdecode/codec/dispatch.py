"""Message dispatch by type byte.

This module maps the one-byte type tag at the start of a message block to the
decode routine of the matching variant, and applies the checks shared by all
variants.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Optional

from ..config import DecoderConfig
from ..exceptions import BlockDecodeError, UnknownMessageTypeError
from ..models.base import IexMessage
from ..models.enums import MessageType
from ..models.messages import MESSAGE_CLASSES
from ..utils.timestamps import validate_timestamp
from .byteview import Buffer, ByteView
from .decoder import decode_record
from .schema import MessageLayout

logger = logging.getLogger(__name__)

MessageDecoder = Callable[[ByteView], IexMessage]

# type byte -> message class
MESSAGE_REGISTRY: dict[int, type[IexMessage]] = {}

# type byte -> decode routine
MESSAGE_DECODERS: dict[int, MessageDecoder] = {}

_DEFAULT_CONFIG = DecoderConfig()


def register_message(message_class: type[IexMessage]) -> None:
    """Register a message class under each of its ``wire_types``.

    Args:
        message_class: IexMessage subclass with a non-empty ``wire_types``

    Raises:
        ValueError: If the class has no wire types or a type byte is already
            registered to another class
    """
    if not message_class.wire_types:
        raise ValueError(f"{message_class.__name__} declares no wire_types")

    # Fail on invalid layouts at registration rather than on first decode.
    MessageLayout.from_model(message_class)

    for message_type in message_class.wire_types:
        type_byte = int(message_type)
        existing = MESSAGE_REGISTRY.get(type_byte)
        if existing is not None and existing is not message_class:
            raise ValueError(
                f"Type byte 0x{type_byte:02x} already registered to {existing.__name__}. "
                f"Cannot register {message_class.__name__}."
            )
        MESSAGE_REGISTRY[type_byte] = message_class
        MESSAGE_DECODERS[type_byte] = partial(decode_record, message_class)


for _message_class in MESSAGE_CLASSES:
    register_message(_message_class)


def is_known_type(type_byte: int) -> bool:
    """Return True if the type byte has a registered decoder."""
    return type_byte in MESSAGE_DECODERS


def body_length(message_type: MessageType | int) -> int:
    """Return the wire length of a message body, type byte included.

    Raises:
        KeyError: If the type is not registered
    """
    return MessageLayout.from_model(MESSAGE_REGISTRY[int(message_type)]).body_length


def decode_message(
    body: Buffer | ByteView,
    config: Optional[DecoderConfig] = None,
) -> IexMessage:
    """Decode one message block body.

    The first byte selects the decode routine. Every decoded message then has
    its timestamp checked against the configured bounds.

    Args:
        body: Block body, starting with the type byte
        config: Validation settings (defaults to DecoderConfig())

    Returns:
        Decoded message variant

    Raises:
        UnknownMessageTypeError: If the type byte is not recognized
        BlockDecodeError: If the body is empty, truncated, holds an invalid code
            or its timestamp is out of range

    Example:
        >>> msg = decode_message(body)
        >>> if isinstance(msg, QuoteUpdateMessage):
        ...     print(msg.symbol, msg.bid_price, msg.ask_price)
    """
    view = body if isinstance(body, ByteView) else ByteView(body)
    if len(view) == 0:
        raise BlockDecodeError("Cannot decode empty message body")

    type_byte = view.read_uint8(0)
    decoder = MESSAGE_DECODERS.get(type_byte)
    if decoder is None:
        logger.debug("Unknown message type 0x%02x (block length %d)", type_byte, len(view))
        raise UnknownMessageTypeError(type_byte, len(view))

    message = decoder(view)

    if config is None:
        config = _DEFAULT_CONFIG
    if config.validate_timestamps and not validate_timestamp(
        message.timestamp, config.min_timestamp_ns, config.max_timestamp_ns
    ):
        raise BlockDecodeError(
            f"{type(message).__name__} timestamp {message.timestamp} outside valid range "
            f"({config.min_timestamp_ns}, {config.max_timestamp_ns})"
        )

    return message
