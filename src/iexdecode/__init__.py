"""iexdecode: IEX TOPS/DEEP Market Data Decoder

A Python library for decoding IEX-TP captures: the segment framing that carries
IEX's TOPS and DEEP market-data feeds, and the fixed-layout messages inside it.

Key Features:
- Bounds-checked little-endian field access
- Pydantic models declaring each message's byte-exact wire layout
- Pull-based decoder that absorbs heartbeats transparently
- pcap/pcapng captures, gzip-compressed or not, via dpkt

Quick Start:
    >>> from iexdecode import IexDecoder, QuoteUpdateMessage
    >>>
    >>> decoder = IexDecoder()
    >>> if decoder.open_for_decoding("data_feeds_20180127_IEXTP1_TOPS1.6.pcap.gz"):
    ...     for msg in decoder:
    ...         if isinstance(msg, QuoteUpdateMessage):
    ...             print(msg.symbol, msg.bid_price, msg.ask_price)

Message formats: https://iextrading.com/trading/market-data/
"""

from __future__ import annotations

from .codec import decode_message, decode_record, encode_record, is_known_type
from .config import DecoderConfig
from .decoder import DecoderState, DecoderStats, IexDecoder
from .exceptions import (
    BlockDecodeError,
    EncodeError,
    EndOfStreamError,
    HeaderDecodeError,
    IexDecodeError,
    NotInitializedError,
    OutOfBoundsError,
    ReturnCode,
    SchemaError,
    SourceOpenError,
    UnknownMessageTypeError,
)
from .framing import build_segment, decode_segment_header, frame_block
from .models import (
    AuctionInformationMessage,
    IexMessage,
    Message,
    MessageType,
    OfficialPriceMessage,
    OperationalHaltStatusMessage,
    PriceLevelUpdateMessage,
    QuoteUpdateMessage,
    SecurityDirectoryMessage,
    SecurityEventMessage,
    SegmentHeader,
    ShortSalePriceTestStatusMessage,
    SystemEventMessage,
    TradeReportMessage,
    TradingStatusMessage,
)
from .source import MemoryPacketSource, PacketSource, PcapPacketSource

__version__ = "0.1.0"

__all__ = [
    # Core API
    "IexDecoder",
    "DecoderConfig",
    "DecoderState",
    "DecoderStats",
    "decode_message",
    "decode_record",
    "encode_record",
    "is_known_type",
    # Sources
    "PacketSource",
    "PcapPacketSource",
    "MemoryPacketSource",
    # Framing
    "SegmentHeader",
    "decode_segment_header",
    "build_segment",
    "frame_block",
    # Messages
    "IexMessage",
    "Message",
    "MessageType",
    "SystemEventMessage",
    "SecurityDirectoryMessage",
    "SecurityEventMessage",
    "TradingStatusMessage",
    "OperationalHaltStatusMessage",
    "ShortSalePriceTestStatusMessage",
    "QuoteUpdateMessage",
    "TradeReportMessage",
    "OfficialPriceMessage",
    "AuctionInformationMessage",
    "PriceLevelUpdateMessage",
    # Exceptions
    "ReturnCode",
    "IexDecodeError",
    "SchemaError",
    "EncodeError",
    "OutOfBoundsError",
    "NotInitializedError",
    "SourceOpenError",
    "HeaderDecodeError",
    "BlockDecodeError",
    "UnknownMessageTypeError",
    "EndOfStreamError",
    # Version
    "__version__",
]
