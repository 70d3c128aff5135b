"""Pydantic models for IEX-TP segments and TOPS/DEEP messages.

This module provides the SegmentHeader, the IexMessage base class with its
variants, the wire enumerations, and the field helpers that declare layouts.
"""

from __future__ import annotations

from .base import IexMessage
from .enums import (
    AuctionType,
    ImbalanceSide,
    LuldTier,
    MessageType,
    OfficialPriceType,
    OperationalHaltStatus,
    SaleCondition,
    SecurityEventCode,
    ShortSaleTestDetail,
    SystemEventCode,
    TradingStatus,
    WireCode,
)
from .fields import Code, Flag, PaddedText, Price, Tag, UInt
from .header import PROTOCOL_DEEP, PROTOCOL_TOPS, SUPPORTED_VERSION, SegmentHeader
from .messages import (
    MESSAGE_ADAPTER,
    MESSAGE_CLASSES,
    AuctionInformationMessage,
    Message,
    OfficialPriceMessage,
    OperationalHaltStatusMessage,
    PriceLevelUpdateMessage,
    QuoteUpdateMessage,
    SecurityDirectoryMessage,
    SecurityEventMessage,
    ShortSalePriceTestStatusMessage,
    SystemEventMessage,
    TradeReportMessage,
    TradingStatusMessage,
)

__all__ = [
    # Base and union
    "IexMessage",
    "Message",
    "MESSAGE_ADAPTER",
    "MESSAGE_CLASSES",
    # Header
    "SegmentHeader",
    "SUPPORTED_VERSION",
    "PROTOCOL_TOPS",
    "PROTOCOL_DEEP",
    # Variants
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
    # Enums
    "WireCode",
    "MessageType",
    "SystemEventCode",
    "LuldTier",
    "TradingStatus",
    "OperationalHaltStatus",
    "ShortSaleTestDetail",
    "OfficialPriceType",
    "AuctionType",
    "ImbalanceSide",
    "SecurityEventCode",
    "SaleCondition",
    # Field helpers
    "Tag",
    "UInt",
    "Price",
    "PaddedText",
    "Code",
    "Flag",
]
