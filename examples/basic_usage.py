#!/usr/bin/env python3
"""Basic usage example for iexdecode.

This example demonstrates:
1. Building IEX messages as Pydantic models
2. Encoding them into an IEX-TP segment
3. Decoding the segment with IexDecoder
4. Inspecting the segment headers and decoder statistics
"""

from __future__ import annotations

from iexdecode import (
    IexDecoder,
    MemoryPacketSource,
    MessageType,
    QuoteUpdateMessage,
    SystemEventMessage,
    TradeReportMessage,
    build_segment,
    encode_record,
)
from iexdecode.models import SystemEventCode

SEND_TIME = 1517058015909382289


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("iexdecode Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating messages...")
    start = SystemEventMessage(
        message_type=MessageType.SYSTEM_EVENT,
        timestamp=SEND_TIME,
        system_event=SystemEventCode.START_OF_MESSAGES,
    )
    quote = QuoteUpdateMessage(
        message_type=MessageType.QUOTE_UPDATE,
        flags=0,
        timestamp=SEND_TIME + 1_000,
        symbol="ZIEXT",
        bid_size=100,
        bid_price=99.05,
        ask_price=99.07,
        ask_size=1000,
    )
    trade = TradeReportMessage(
        message_type=MessageType.TRADE_REPORT,
        flags=0,
        timestamp=SEND_TIME + 2_000,
        symbol="ZIEXT",
        size=100,
        price=99.05,
        trade_id=429974,
    )
    for msg in (start, quote, trade):
        print(f"   {msg.message_type.name}: {len(encode_record(msg))} bytes")
    print()

    print("2. Building segments...")
    packets = [
        build_segment([], send_time=SEND_TIME),
        build_segment([encode_record(start)], send_time=SEND_TIME),
        build_segment(
            [encode_record(quote), b"", encode_record(trade)],
            first_message_sequence=2,
            send_time=SEND_TIME + 2_000,
        ),
    ]
    for packet in packets:
        print(f"   {len(packet)} bytes: {packet[:16].hex()}...")
    print()

    print("3. Decoding...")
    with IexDecoder(MemoryPacketSource(packets)) as decoder:
        decoded = list(decoder)
        for msg in decoded:
            print(f"   {msg.event_time.isoformat()} {msg!r}")
        print()

        print("4. Headers and statistics...")
        print(f"   First header: {decoder.get_first_header()!r}")
        print(f"   Last header:  {decoder.get_last_decoded_header()!r}")
        print(f"   Packets: {decoder.stats.packets}")
        print(f"   Heartbeats: {decoder.stats.heartbeats}")
        print(f"   Messages: {decoder.stats.messages}")
    print()

    if decoded == [start, quote, trade]:
        print("   ✓ Round-trip successful")
    else:
        print("   ✗ Round-trip failed")


if __name__ == "__main__":
    main()
