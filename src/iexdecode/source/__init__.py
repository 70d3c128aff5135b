"""Packet sources for the IEX decoder.

This module provides the PacketSource interface and its capture-file and
in-memory implementations.
"""

from __future__ import annotations

from .driver import PacketSource
from .memory import MemoryPacketSource
from .pcap import PcapPacketSource

__all__ = [
    "PacketSource",
    "PcapPacketSource",
    "MemoryPacketSource",
]
