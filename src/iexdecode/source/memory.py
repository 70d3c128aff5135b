"""In-memory packet source.

Replays a fixed sequence of payloads, for tests and for decoding segments that
were captured or built by other means.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .driver import PacketSource

logger = logging.getLogger(__name__)


class MemoryPacketSource(PacketSource):
    """Packet source backed by a list of payloads.

    Attributes:
        payloads: Payloads in delivery order
        packets_read: Number of payloads handed out so far

    Examples:
        ```python
        from iexdecode import IexDecoder
        from iexdecode.framing import build_segment
        from iexdecode.source import MemoryPacketSource

        source = MemoryPacketSource([build_segment([]), build_segment([body])])
        decoder = IexDecoder(source)
        message = decoder.get_next_message()
        ```
    """

    def __init__(self, payloads: Iterable[bytes]) -> None:
        self.payloads: list[bytes] = [bytes(p) for p in payloads]
        self.packets_read = 0
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        if self._is_open:
            return
        self._is_open = True
        self.packets_read = 0
        logger.debug("Opened in-memory source with %d payloads", len(self.payloads))

    def next_packet_payload(self) -> Optional[bytes]:
        if not self._is_open:
            raise RuntimeError("MemoryPacketSource not open. Call open() first.")
        if self.packets_read >= len(self.payloads):
            return None
        payload = self.payloads[self.packets_read]
        self.packets_read += 1
        return payload

    def close(self) -> None:
        self._is_open = False
