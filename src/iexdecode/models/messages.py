"""IEX TOPS/DEEP message variants.

Each class mirrors one fixed-layout record of the IEX TOPS 1.6 / DEEP 1.0
feeds. Offsets are relative to the start of the message block body,
where byte 0 is the type tag.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Union

from pydantic import Field, TypeAdapter

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
)
from .fields import Code, Flag, PaddedText, Price, Tag, UInt


class SystemEventMessage(IexMessage):
    """Market-wide system event."""

    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.SYSTEM_EVENT,)

    message_type: Literal[MessageType.SYSTEM_EVENT] = Tag()
    system_event: SystemEventCode = Code(offset=1)


class SecurityDirectoryMessage(IexMessage):
    """Reference data for one security."""

    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.SECURITY_DIRECTORY,)

    message_type: Literal[MessageType.SECURITY_DIRECTORY] = Tag()
    flags: int = UInt(offset=1, width=1)
    symbol: str = PaddedText(offset=10)
    round_lot_size: int = UInt(offset=18, width=4)
    adjusted_poc_price: float = Price(
        offset=22, description="Adjusted previous official closing price"
    )
    luld_tier: LuldTier = Code(offset=30)

    @property
    def is_test_security(self) -> bool:
        return bool(self.flags & 0x80)

    @property
    def is_when_issued(self) -> bool:
        return bool(self.flags & 0x40)

    @property
    def is_etp(self) -> bool:
        return bool(self.flags & 0x20)


class SecurityEventMessage(IexMessage):
    """Per-security auction process event."""

    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.SECURITY_EVENT,)

    message_type: Literal[MessageType.SECURITY_EVENT] = Tag()
    security_event: SecurityEventCode = Code(offset=1)
    symbol: str = PaddedText(offset=10)


class TradingStatusMessage(IexMessage):
    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.TRADING_STATUS,)

    message_type: Literal[MessageType.TRADING_STATUS] = Tag()
    trading_status: TradingStatus = Code(offset=1)
    symbol: str = PaddedText(offset=10)
    reason: str = PaddedText(offset=18, length=4)


class OperationalHaltStatusMessage(IexMessage):
    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.OPERATIONAL_HALT_STATUS,)

    message_type: Literal[MessageType.OPERATIONAL_HALT_STATUS] = Tag()
    operational_halt_status: OperationalHaltStatus = Code(offset=1)
    symbol: str = PaddedText(offset=10)


class ShortSalePriceTestStatusMessage(IexMessage):
    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.SHORT_SALE_PRICE_TEST_STATUS,)

    message_type: Literal[MessageType.SHORT_SALE_PRICE_TEST_STATUS] = Tag()
    short_sale_test_in_effect: bool = Flag(offset=1)
    symbol: str = PaddedText(offset=10)
    detail: ShortSaleTestDetail = Code(offset=18)


class QuoteUpdateMessage(IexMessage):
    """Top-of-book quote.

    The ask price precedes the ask size on the wire (offsets 30 and 38), unlike
    the bid side.
    """

    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.QUOTE_UPDATE,)

    message_type: Literal[MessageType.QUOTE_UPDATE] = Tag()
    flags: int = UInt(offset=1, width=1)
    symbol: str = PaddedText(offset=10)
    bid_size: int = UInt(offset=18, width=4)
    bid_price: float = Price(offset=22)
    ask_price: float = Price(offset=30)
    ask_size: int = UInt(offset=38, width=4)

    @property
    def is_symbol_halted(self) -> bool:
        """Symbol availability flag: trading halted, paused or not available."""
        return bool(self.flags & 0x80)

    @property
    def is_pre_post_market(self) -> bool:
        """Market session flag: quote sent outside regular market hours."""
        return bool(self.flags & 0x40)


class TradeReportMessage(IexMessage):
    """Trade report or trade break.

    Both record types share one layout; ``message_type`` tells them apart.
    """

    wire_types: ClassVar[tuple[MessageType, ...]] = (
        MessageType.TRADE_REPORT,
        MessageType.TRADE_BREAK,
    )

    message_type: Literal[MessageType.TRADE_REPORT, MessageType.TRADE_BREAK] = Tag()
    flags: int = UInt(offset=1, width=1)
    symbol: str = PaddedText(offset=10)
    size: int = UInt(offset=18, width=4)
    price: float = Price(offset=22)
    trade_id: int = UInt(offset=30, width=8)

    @property
    def is_trade_break(self) -> bool:
        return self.message_type == MessageType.TRADE_BREAK

    @property
    def sale_conditions(self) -> SaleCondition:
        return SaleCondition(self.flags & 0xF8)


class OfficialPriceMessage(IexMessage):
    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.OFFICIAL_PRICE,)

    message_type: Literal[MessageType.OFFICIAL_PRICE] = Tag()
    price_type: OfficialPriceType = Code(offset=1)
    symbol: str = PaddedText(offset=10)
    price: float = Price(offset=18)


class AuctionInformationMessage(IexMessage):
    """Auction imbalance and indicative price information."""

    wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.AUCTION_INFORMATION,)

    message_type: Literal[MessageType.AUCTION_INFORMATION] = Tag()
    auction_type: AuctionType = Code(offset=1)
    symbol: str = PaddedText(offset=10)
    paired_shares: int = UInt(offset=18, width=4)
    reference_price: float = Price(offset=22)
    indicative_clearing_price: float = Price(offset=30)
    imbalance_shares: int = UInt(offset=38, width=4)
    imbalance_side: ImbalanceSide = Code(offset=42)
    extension_number: int = UInt(offset=43, width=1)
    scheduled_auction_time: int = UInt(offset=44, width=4, description="Seconds since epoch")
    auction_book_clearing_price: float = Price(offset=48)
    collar_reference_price: float = Price(offset=56)
    lower_auction_collar: float = Price(offset=64)
    upper_auction_collar: float = Price(offset=72)


class PriceLevelUpdateMessage(IexMessage):
    """DEEP aggregated price level update for the buy or sell side."""

    wire_types: ClassVar[tuple[MessageType, ...]] = (
        MessageType.PRICE_LEVEL_UPDATE_BUY,
        MessageType.PRICE_LEVEL_UPDATE_SELL,
    )

    message_type: Literal[
        MessageType.PRICE_LEVEL_UPDATE_BUY, MessageType.PRICE_LEVEL_UPDATE_SELL
    ] = Tag()
    flags: int = UInt(offset=1, width=1)
    symbol: str = PaddedText(offset=10)
    size: int = UInt(offset=18, width=4)
    price: float = Price(offset=22)

    @property
    def side(self) -> str:
        """'B' for buy side updates, 'S' for sell side."""
        return "B" if self.message_type == MessageType.PRICE_LEVEL_UPDATE_BUY else "S"

    @property
    def is_event_complete(self) -> bool:
        """True when the update completes an atomic order book event."""
        return bool(self.flags & 0x01)


MESSAGE_CLASSES: tuple[type[IexMessage], ...] = (
    SystemEventMessage,
    SecurityDirectoryMessage,
    SecurityEventMessage,
    TradingStatusMessage,
    OperationalHaltStatusMessage,
    ShortSalePriceTestStatusMessage,
    QuoteUpdateMessage,
    TradeReportMessage,
    OfficialPriceMessage,
    AuctionInformationMessage,
    PriceLevelUpdateMessage,
)

Message = Annotated[
    Union[
        SystemEventMessage,
        SecurityDirectoryMessage,
        SecurityEventMessage,
        TradingStatusMessage,
        OperationalHaltStatusMessage,
        ShortSalePriceTestStatusMessage,
        QuoteUpdateMessage,
        TradeReportMessage,
        OfficialPriceMessage,
        AuctionInformationMessage,
        PriceLevelUpdateMessage,
    ],
    Field(discriminator="message_type"),
]

MESSAGE_ADAPTER: TypeAdapter[Message] = TypeAdapter(Message)
