"""Unit tests for the message variants and their byte-exact layouts."""

from __future__ import annotations

import struct
from datetime import datetime, timezone

import pytest
from conftest import CAPTURE_TIMESTAMP, pack_quote, pack_trade
from pydantic import ValidationError

from iexdecode.codec import body_length, decode_message, encode_record
from iexdecode.exceptions import BlockDecodeError
from iexdecode.models import (
    MESSAGE_ADAPTER,
    AuctionInformationMessage,
    AuctionType,
    ImbalanceSide,
    LuldTier,
    MessageType,
    OfficialPriceMessage,
    OfficialPriceType,
    OperationalHaltStatus,
    OperationalHaltStatusMessage,
    PriceLevelUpdateMessage,
    QuoteUpdateMessage,
    SaleCondition,
    SecurityDirectoryMessage,
    SecurityEventCode,
    SecurityEventMessage,
    ShortSalePriceTestStatusMessage,
    ShortSaleTestDetail,
    SystemEventCode,
    SystemEventMessage,
    TradeReportMessage,
    TradingStatus,
    TradingStatusMessage,
)

TS = CAPTURE_TIMESTAMP


class TestBodyLengths:
    """Test every variant's body length."""

    @pytest.mark.parametrize(
        "message_type,length",
        [
            (MessageType.SYSTEM_EVENT, 10),
            (MessageType.SECURITY_DIRECTORY, 31),
            (MessageType.SECURITY_EVENT, 18),
            (MessageType.TRADING_STATUS, 22),
            (MessageType.OPERATIONAL_HALT_STATUS, 18),
            (MessageType.SHORT_SALE_PRICE_TEST_STATUS, 19),
            (MessageType.QUOTE_UPDATE, 42),
            (MessageType.TRADE_REPORT, 38),
            (MessageType.TRADE_BREAK, 38),
            (MessageType.OFFICIAL_PRICE, 26),
            (MessageType.AUCTION_INFORMATION, 80),
            (MessageType.PRICE_LEVEL_UPDATE_BUY, 30),
            (MessageType.PRICE_LEVEL_UPDATE_SELL, 30),
        ],
    )
    def test_body_length(self, message_type: MessageType, length: int) -> None:
        """Test body lengths match the published layouts."""
        assert body_length(message_type) == length


class TestAdministrativeMessages:
    """Test system, directory and status messages."""

    def test_system_event(self) -> None:
        """Test system event decoding."""
        msg = decode_message(struct.pack("<BcQ", 0x53, b"R", TS))

        assert isinstance(msg, SystemEventMessage)
        assert msg.system_event is SystemEventCode.START_OF_REGULAR_MARKET_HOURS
        assert msg.system_event.char == "R"
        assert msg.timestamp == TS

    def test_security_directory(self) -> None:
        """Test security directory decoding and flag properties."""
        body = struct.pack("<BBQ8sIqB", 0x44, 0xA0, TS, b"ZIEXT   ", 100, 100000, 1)
        msg = decode_message(body)

        assert isinstance(msg, SecurityDirectoryMessage)
        assert msg.symbol == "ZIEXT"
        assert msg.round_lot_size == 100
        assert msg.adjusted_poc_price == 10.0
        assert msg.luld_tier is LuldTier.TIER_1_NMS_STOCK
        assert msg.is_test_security is True
        assert msg.is_when_issued is False
        assert msg.is_etp is True

    def test_security_event(self) -> None:
        """Test security event decoding."""
        msg = decode_message(struct.pack("<BcQ8s", 0x45, b"C", TS, b"AAPL    "))

        assert isinstance(msg, SecurityEventMessage)
        assert msg.security_event is SecurityEventCode.CLOSING_PROCESS_COMPLETE
        assert msg.symbol == "AAPL"

    def test_trading_status_with_reason(self) -> None:
        """Test the 4-byte reason field."""
        msg = decode_message(struct.pack("<BcQ8s4s", 0x48, b"H", TS, b"ZIEXT   ", b"T1  "))

        assert isinstance(msg, TradingStatusMessage)
        assert msg.trading_status is TradingStatus.TRADING_HALTED
        assert msg.symbol == "ZIEXT"
        assert msg.reason == "T1"

    def test_trading_status_blank_reason(self) -> None:
        """Test an all-space reason decodes to an empty string."""
        msg = decode_message(struct.pack("<BcQ8s4s", 0x48, b"T", TS, b"AMD     ", b"    "))

        assert isinstance(msg, TradingStatusMessage)
        assert msg.trading_status is TradingStatus.TRADING
        assert msg.reason == ""

    def test_operational_halt_status(self) -> None:
        """Test operational halt decoding."""
        msg = decode_message(struct.pack("<BcQ8s", 0x4F, b"O", TS, b"ZIEXT   "))

        assert isinstance(msg, OperationalHaltStatusMessage)
        assert msg.operational_halt_status is OperationalHaltStatus.OPERATIONALLY_HALTED

    def test_short_sale_price_test_status(self) -> None:
        """Test the boolean flag and detail code."""
        msg = decode_message(struct.pack("<BBQ8sc", 0x50, 1, TS, b"ZIEXT   ", b"A"))

        assert isinstance(msg, ShortSalePriceTestStatusMessage)
        assert msg.short_sale_test_in_effect is True
        assert msg.detail is ShortSaleTestDetail.INTRADAY_PRICE_DROP

    def test_short_sale_no_price_test_is_space(self) -> None:
        """Test the space detail code."""
        msg = decode_message(struct.pack("<BBQ8sc", 0x50, 0, TS, b"ZIEXT   ", b" "))

        assert isinstance(msg, ShortSalePriceTestStatusMessage)
        assert msg.short_sale_test_in_effect is False
        assert msg.detail is ShortSaleTestDetail.NO_PRICE_TEST


class TestQuoteUpdate:
    """Test quote update decoding."""

    def test_amd_quote(self, quote_body: bytes) -> None:
        """Test prices are raw / 10000 and the symbol is unpadded."""
        msg = decode_message(quote_body)

        assert isinstance(msg, QuoteUpdateMessage)
        assert msg.message_type == MessageType.QUOTE_UPDATE
        assert msg.symbol == "AMD"
        assert msg.bid_size == 1280
        assert msg.bid_price == 4.06
        assert msg.ask_price == 4.34
        assert msg.ask_size == 19232
        assert msg.timestamp == TS

    def test_quote_flags(self) -> None:
        """Test halted and pre/post-market flags."""
        msg = decode_message(pack_quote(flags=0xC0))

        assert isinstance(msg, QuoteUpdateMessage)
        assert msg.is_symbol_halted is True
        assert msg.is_pre_post_market is True

        msg = decode_message(pack_quote(flags=0x00))
        assert isinstance(msg, QuoteUpdateMessage)
        assert msg.is_symbol_halted is False
        assert msg.is_pre_post_market is False

    def test_zero_sided_quote(self) -> None:
        """Test an empty book side decodes to zero price and size."""
        msg = decode_message(pack_quote(bid_size=0, bid_price=0))

        assert isinstance(msg, QuoteUpdateMessage)
        assert msg.bid_size == 0
        assert msg.bid_price == 0.0

    def test_truncated_quote_raises(self, quote_body: bytes) -> None:
        """Test a quote one byte short is rejected."""
        with pytest.raises(BlockDecodeError, match="Truncated QuoteUpdateMessage"):
            decode_message(quote_body[:-1])

    def test_encode_matches_wire(self, quote_body: bytes) -> None:
        """Test re-encoding a decoded quote reproduces the wire bytes."""
        assert encode_record(decode_message(quote_body)) == quote_body


class TestTradeReport:
    """Test trade report and trade break decoding."""

    def test_trade_report(self) -> None:
        """Test a regular trade."""
        msg = decode_message(pack_trade())

        assert isinstance(msg, TradeReportMessage)
        assert msg.message_type == MessageType.TRADE_REPORT
        assert msg.is_trade_break is False
        assert msg.symbol == "ZIEXT"
        assert msg.size == 100
        assert msg.price == 9.95
        assert msg.trade_id == 429974

    def test_trade_break_shares_layout(self) -> None:
        """Test the tag comes from the type byte, not the routine."""
        msg = decode_message(pack_trade(type_byte=0x42))

        assert isinstance(msg, TradeReportMessage)
        assert msg.message_type == MessageType.TRADE_BREAK
        assert msg.is_trade_break is True
        assert msg.trade_id == 429974

    def test_sale_conditions(self) -> None:
        """Test sale condition flag bits."""
        msg = decode_message(pack_trade(flags=0x80 | 0x20))

        assert isinstance(msg, TradeReportMessage)
        assert msg.sale_conditions == SaleCondition.INTERMARKET_SWEEP | SaleCondition.ODD_LOT
        assert SaleCondition.EXTENDED_HOURS not in msg.sale_conditions

    def test_no_sale_conditions(self) -> None:
        """Test a trade without conditions."""
        msg = decode_message(pack_trade(flags=0))

        assert isinstance(msg, TradeReportMessage)
        assert msg.sale_conditions == SaleCondition.NONE


class TestOfficialPrice:
    """Test official price decoding."""

    def test_opening_price(self) -> None:
        """Test an official opening price."""
        msg = decode_message(struct.pack("<BcQ8sq", 0x58, b"Q", TS, b"ZIEXT   ", 100000))

        assert isinstance(msg, OfficialPriceMessage)
        assert msg.price_type is OfficialPriceType.OPENING_PRICE
        assert msg.price == 10.0


class TestAuctionInformation:
    """Test auction information decoding."""

    def test_zexit_opening_auction(self, auction_body: bytes) -> None:
        """Test every field of the opening auction fixture."""
        msg = decode_message(auction_body)

        assert isinstance(msg, AuctionInformationMessage)
        assert msg.auction_type is AuctionType.OPENING
        assert msg.auction_type.char == "O"
        assert msg.symbol == "ZEXIT"
        assert msg.paired_shares == 907
        assert msg.reference_price == 10.0
        assert msg.indicative_clearing_price == 9.99
        assert msg.imbalance_shares == 2345
        assert msg.imbalance_side is ImbalanceSide.SELL
        assert msg.extension_number == 0
        assert msg.scheduled_auction_time == 1517063400
        assert msg.auction_book_clearing_price == 9.99
        assert msg.collar_reference_price == 10.0
        assert msg.lower_auction_collar == 9.0
        assert msg.upper_auction_collar == 11.0

    def test_invalid_imbalance_side_raises(self, auction_body: bytes) -> None:
        """Test an unrecognized enumeration code is a block error."""
        corrupt = auction_body[:42] + b"X" + auction_body[43:]

        with pytest.raises(BlockDecodeError, match="imbalance_side"):
            decode_message(corrupt)


class TestPriceLevelUpdate:
    """Test DEEP price level updates."""

    @pytest.mark.parametrize(
        "type_byte,message_type,side",
        [
            (0x38, MessageType.PRICE_LEVEL_UPDATE_BUY, "B"),
            (0x35, MessageType.PRICE_LEVEL_UPDATE_SELL, "S"),
        ],
    )
    def test_both_sides(self, type_byte: int, message_type: MessageType, side: str) -> None:
        """Test buy and sell updates share one layout."""
        body = struct.pack("<BBQ8sIq", type_byte, 1, TS, b"ZIEXT   ", 9700, 253100)
        msg = decode_message(body)

        assert isinstance(msg, PriceLevelUpdateMessage)
        assert msg.message_type == message_type
        assert msg.side == side
        assert msg.size == 9700
        assert msg.price == 25.31
        assert msg.is_event_complete is True

    def test_event_in_progress(self) -> None:
        """Test the event flag clear."""
        body = struct.pack("<BBQ8sIq", 0x38, 0, TS, b"ZIEXT   ", 0, 253100)
        msg = decode_message(body)

        assert isinstance(msg, PriceLevelUpdateMessage)
        assert msg.is_event_complete is False


class TestMessageModels:
    """Test model behavior shared by every variant."""

    def test_messages_are_frozen(self, quote_body: bytes) -> None:
        """Test decoded messages are immutable values."""
        msg = decode_message(quote_body)

        with pytest.raises(ValidationError):
            msg.timestamp = 0  # type: ignore[misc]

    def test_event_time(self, quote_body: bytes) -> None:
        """Test timestamps convert to UTC datetimes."""
        msg = decode_message(quote_body)

        assert msg.event_time == datetime(2018, 1, 27, 13, 0, 17, 224122, tzinfo=timezone.utc)

    def test_json_dump(self, auction_body: bytes) -> None:
        """Test messages serialize with wire codes as integers."""
        msg = decode_message(auction_body)
        data = msg.model_dump(mode="json")

        assert data["message_type"] == 0x41
        assert data["auction_type"] == ord("O")
        assert data["symbol"] == "ZEXIT"
        assert data["reference_price"] == 10.0

    def test_adapter_discriminates(self, quote_body: bytes) -> None:
        """Test the tagged union selects the variant from message_type."""
        msg = decode_message(quote_body)
        rebuilt = MESSAGE_ADAPTER.validate_python(msg.model_dump())

        assert isinstance(rebuilt, QuoteUpdateMessage)
        assert rebuilt == msg
