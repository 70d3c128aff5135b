"""Enumerations carried on the IEX wire.

Every member's value is the exact byte transmitted, so conversion to and from
the wire is a plain ``int`` round trip.
"""

from __future__ import annotations

import enum


class WireCode(enum.IntEnum):
    """Base for one-byte codes, most of which are ASCII characters."""

    @property
    def char(self) -> str:
        """The code as a one-character string."""
        return chr(self.value)


class MessageType(WireCode):
    """Message type tags (first byte of every message block)."""

    SYSTEM_EVENT = 0x53  # 'S'
    SECURITY_DIRECTORY = 0x44  # 'D'
    SECURITY_EVENT = 0x45  # 'E'
    TRADING_STATUS = 0x48  # 'H'
    OPERATIONAL_HALT_STATUS = 0x4F  # 'O'
    SHORT_SALE_PRICE_TEST_STATUS = 0x50  # 'P'
    QUOTE_UPDATE = 0x51  # 'Q'
    TRADE_REPORT = 0x54  # 'T'
    OFFICIAL_PRICE = 0x58  # 'X'
    TRADE_BREAK = 0x42  # 'B'
    AUCTION_INFORMATION = 0x41  # 'A'
    PRICE_LEVEL_UPDATE_BUY = 0x38  # '8'
    PRICE_LEVEL_UPDATE_SELL = 0x35  # '5'


class SystemEventCode(WireCode):
    START_OF_MESSAGES = 0x4F  # 'O'
    START_OF_SYSTEM_HOURS = 0x53  # 'S'
    START_OF_REGULAR_MARKET_HOURS = 0x52  # 'R'
    END_OF_REGULAR_MARKET_HOURS = 0x4D  # 'M'
    END_OF_SYSTEM_HOURS = 0x45  # 'E'
    END_OF_MESSAGES = 0x43  # 'C'


class LuldTier(WireCode):
    """Limit Up-Limit Down price band tier."""

    NOT_APPLICABLE = 0x0
    TIER_1_NMS_STOCK = 0x1
    TIER_2_NMS_STOCK = 0x2


class TradingStatus(WireCode):
    TRADING_HALTED = 0x48  # 'H'
    HALT_RELEASED_INTO_ORDER_ACCEPTANCE = 0x4F  # 'O'
    TRADING_PAUSED = 0x50  # 'P'
    TRADING = 0x54  # 'T'


class OperationalHaltStatus(WireCode):
    OPERATIONALLY_HALTED = 0x4F  # 'O'
    NOT_HALTED = 0x4E  # 'N'


class ShortSaleTestDetail(WireCode):
    NO_PRICE_TEST = 0x20  # ' '
    INTRADAY_PRICE_DROP = 0x41  # 'A'
    CONTINUED = 0x43  # 'C'
    DEACTIVATED = 0x44  # 'D'
    NOT_AVAILABLE = 0x4E  # 'N'


class OfficialPriceType(WireCode):
    OPENING_PRICE = 0x51  # 'Q'
    CLOSING_PRICE = 0x4D  # 'M'


class AuctionType(WireCode):
    OPENING = 0x4F  # 'O'
    CLOSING = 0x43  # 'C'
    IPO = 0x49  # 'I'
    HALT = 0x48  # 'H'
    VOLATILITY = 0x56  # 'V'


class ImbalanceSide(WireCode):
    BUY = 0x42  # 'B'
    SELL = 0x53  # 'S'
    NONE = 0x4E  # 'N'


class SecurityEventCode(WireCode):
    OPENING_PROCESS_COMPLETE = 0x4F  # 'O'
    CLOSING_PROCESS_COMPLETE = 0x43  # 'C'


class SaleCondition(enum.IntFlag):
    """Sale condition bits of the trade report flags byte."""

    NONE = 0
    SINGLE_PRICE_CROSS = 0x08  # 'X'
    TRADE_THROUGH_EXEMPT = 0x10  # '8'
    ODD_LOT = 0x20  # 'I'
    EXTENDED_HOURS = 0x40  # 'T'
    INTERMARKET_SWEEP = 0x80  # 'F'
