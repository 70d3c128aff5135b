"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import gzip
import io
import struct
from pathlib import Path
from typing import Callable, Iterable

import dpkt
import pytest

# Quote and trade times from the 2018-01-27 TOPS 1.6 sample capture
CAPTURE_TIMESTAMP = 1517058017224122394
CAPTURE_SEND_TIME = 1517058015909382289

IEX_TOPS_PORT = 10378

HEADER_FORMAT = "<BBHIIHHQQQ"


def pack_header(
    *,
    version: int = 1,
    protocol_id: int = 0x8003,
    channel_id: int = 1,
    session_id: int = 1150681088,
    payload_length: int = 0,
    message_count: int = 0,
    stream_offset: int = 0,
    first_message_sequence: int = 1,
    send_time: int = CAPTURE_SEND_TIME,
) -> bytes:
    return struct.pack(
        HEADER_FORMAT,
        version,
        0,
        protocol_id,
        channel_id,
        session_id,
        payload_length,
        message_count,
        stream_offset,
        first_message_sequence,
        send_time,
    )


def pack_segment(bodies: Iterable[bytes], **header_fields: int) -> bytes:
    """Pack a segment by hand, independently of the library's framing code."""
    bodies = list(bodies)
    blocks = b"".join(struct.pack("<H", len(body)) + body for body in bodies)
    return (
        pack_header(payload_length=len(blocks), message_count=len(bodies), **header_fields)
        + blocks
    )


def pack_quote(
    symbol: bytes = b"AMD     ",
    *,
    flags: int = 0,
    timestamp: int = CAPTURE_TIMESTAMP,
    bid_size: int = 1280,
    bid_price: int = 40600,
    ask_price: int = 43400,
    ask_size: int = 19232,
) -> bytes:
    return struct.pack(
        "<BBQ8sIqqI", 0x51, flags, timestamp, symbol, bid_size, bid_price, ask_price, ask_size
    )


def pack_trade(
    symbol: bytes = b"ZIEXT   ",
    *,
    type_byte: int = 0x54,
    flags: int = 0,
    timestamp: int = CAPTURE_TIMESTAMP,
    size: int = 100,
    price: int = 99500,
    trade_id: int = 429974,
) -> bytes:
    return struct.pack("<BBQ8sIqQ", type_byte, flags, timestamp, symbol, size, price, trade_id)


def pack_system_event(code: bytes = b"S", timestamp: int = CAPTURE_TIMESTAMP) -> bytes:
    return struct.pack("<BcQ", 0x53, code, timestamp)


def pack_auction(timestamp: int = CAPTURE_TIMESTAMP) -> bytes:
    """Opening auction for ZEXIT: 907 paired shares around a $10.00 reference."""
    return struct.pack(
        "<BcQ8sIqqIcBIqqqq",
        0x41,
        b"O",
        timestamp,
        b"ZEXIT   ",
        907,
        100000,
        99900,
        2345,
        b"S",
        0,
        1517063400,
        99900,
        100000,
        90000,
        110000,
    )


def udp_frame(payload: bytes, dport: int = IEX_TOPS_PORT) -> dpkt.ip.IP:
    udp = dpkt.udp.UDP(sport=dport, dport=dport, data=payload)
    udp.ulen = len(udp)
    ip = dpkt.ip.IP(
        src=bytes([10, 0, 0, 1]),
        dst=bytes([233, 215, 21, 4]),
        p=dpkt.ip.IP_PROTO_UDP,
        ttl=64,
        data=udp,
    )
    ip.len = len(ip)
    return ip


def ethernet_frame(payload: bytes, dport: int = IEX_TOPS_PORT) -> dpkt.ethernet.Ethernet:
    return dpkt.ethernet.Ethernet(
        src=b"\x00\x1b\x21\x00\x00\x01",
        dst=b"\x01\x00\x5e\x57\x15\x04",
        type=dpkt.ethernet.ETH_TYPE_IP,
        data=udp_frame(payload, dport),
    )


def write_pcap(
    path: Path,
    frames: Iterable[object],
    *,
    linktype: int = dpkt.pcap.DLT_EN10MB,
    nano: bool = False,
    compress: bool = False,
) -> Path:
    buffer = io.BytesIO()
    writer = dpkt.pcap.Writer(buffer, linktype=linktype, nano=nano)
    for i, frame in enumerate(frames):
        writer.writepkt(bytes(frame), ts=1517058015.0 + i)
    data = buffer.getvalue()
    path.write_bytes(gzip.compress(data) if compress else data)
    return path


def write_pcapng(path: Path, frames: Iterable[object]) -> Path:
    with path.open("wb") as f:
        writer = dpkt.pcapng.Writer(f)
        for i, frame in enumerate(frames):
            writer.writepkt(bytes(frame), ts=1517058015.0 + i)
    return path


@pytest.fixture
def timestamp() -> int:
    """A real 2018 capture time."""
    return CAPTURE_TIMESTAMP


@pytest.fixture
def quote_body() -> bytes:
    """AMD quote: 1280 @ 4.06 bid, 19232 @ 4.34 ask."""
    return pack_quote()


@pytest.fixture
def auction_body() -> bytes:
    return pack_auction()


@pytest.fixture
def header_only_segment() -> bytes:
    """First packet of every capture: a header with no message blocks."""
    return pack_header()


@pytest.fixture
def capture_path(tmp_path: Path) -> Callable[..., Path]:
    """Write Ethernet frames carrying the given payloads to a pcap file."""

    def _write(payloads: Iterable[bytes], name: str = "capture.pcap", **kwargs: object) -> Path:
        frames = [ethernet_frame(p) for p in payloads]
        return write_pcap(tmp_path / name, frames, **kwargs)  # type: ignore[arg-type]

    return _write
