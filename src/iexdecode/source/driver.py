"""Abstract interface for packet sources.

A packet source hands the decoder one packet payload (the UDP payload holding
an IEX-TP segment) at a time. Reading and demultiplexing the capture container
is entirely the source's concern.

Design Pattern: Strategy Pattern / Adapter Pattern
- PacketSource: Abstract interface
- PcapPacketSource: pcap/pcapng capture files (via dpkt)
- MemoryPacketSource: In-memory payloads (replay and testing)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Iterator, Optional


class PacketSource(ABC):
    """Abstract interface for packet payload sources.

    Examples:
        ```python
        from iexdecode.source import PcapPacketSource

        with PcapPacketSource("20180127_IEXTP1_TOPS1.6.pcap.gz") as source:
            for payload in source:
                print(len(payload))
        ```
    """

    @abstractmethod
    def open(self) -> None:
        """Prepare the source for reading.

        Raises:
            SourceOpenError: If the underlying data cannot be opened
        """

    @abstractmethod
    def next_packet_payload(self) -> Optional[bytes]:
        """Return the next packet payload, or None when the stream is exhausted.

        A returned buffer is only guaranteed valid until the next call.

        Raises:
            RuntimeError: If the source is not open
        """

    @abstractmethod
    def close(self) -> None:
        """Release the underlying resources. Closing twice is a no-op."""

    def __enter__(self) -> PacketSource:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __iter__(self) -> Iterator[bytes]:
        while True:
            payload = self.next_packet_payload()
            if payload is None:
                return
            yield payload
