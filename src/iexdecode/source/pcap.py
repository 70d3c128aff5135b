"""Packet capture file source.

Reads IEX-TP segments out of pcap and pcapng captures, optionally
gzip-compressed as IEX distributes them. Frames are unwrapped with dpkt down
to the UDP payload; anything that is not UDP is skipped.
"""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

import dpkt

from ..exceptions import SourceOpenError
from .driver import PacketSource

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
PCAP_MAGICS = (
    b"\xd4\xc3\xb2\xa1",  # microsecond, little-endian
    b"\xa1\xb2\xc3\xd4",  # microsecond, big-endian
    b"\x4d\x3c\xb2\xa1",  # nanosecond, little-endian
    b"\xa1\xb2\x3c\x4d",  # nanosecond, big-endian
)
PCAPNG_MAGIC = b"\x0a\x0d\x0d\x0a"

# DLT_RAW is 12 on most platforms, 14 on OpenBSD; LINKTYPE_RAW is 101
RAW_LINK_TYPES = frozenset({12, 14, 101})


class PcapPacketSource(PacketSource):
    """Packet source reading UDP payloads from a capture file.

    Attributes:
        path: Capture file path
        udp_port: If set, only datagrams with this destination port are returned
        frames_read: Number of capture records read so far
        frames_skipped: Records dropped as non-UDP or filtered out

    Examples:
        ```python
        source = PcapPacketSource("data_feeds_20180127_IEXTP1_TOPS1.6.pcap.gz")
        source.open()
        payload = source.next_packet_payload()
        source.close()
        ```
    """

    def __init__(self, path: Union[str, Path], udp_port: Optional[int] = None) -> None:
        self.path = Path(path)
        self.udp_port = udp_port
        self.frames_read = 0
        self.frames_skipped = 0
        self._file: Optional[BinaryIO] = None
        self._records: Optional[Iterator[tuple[float, bytes]]] = None
        self._datalink: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self._records is not None

    def open(self) -> None:
        if self.is_open:
            return

        try:
            raw = self.path.open("rb")
        except OSError as e:
            raise SourceOpenError(f"Cannot open capture file {self.path}: {e}") from e

        try:
            stream, magic = _sniff(raw)
            if magic in PCAP_MAGICS:
                reader = dpkt.pcap.Reader(stream)
            elif magic == PCAPNG_MAGIC:
                reader = dpkt.pcapng.Reader(stream)
            else:
                raise SourceOpenError(
                    f"{self.path} is not a pcap or pcapng capture (magic {magic.hex()})"
                )
        except SourceOpenError:
            raw.close()
            raise
        except (OSError, ValueError, EOFError, dpkt.dpkt.UnpackError) as e:
            raw.close()
            raise SourceOpenError(f"Cannot read capture file {self.path}: {e}") from e

        self._file = raw
        self._datalink = reader.datalink()
        self._records = iter(reader)
        self.frames_read = 0
        self.frames_skipped = 0
        logger.info("Opened capture %s (link type %d)", self.path, self._datalink)

    def next_packet_payload(self) -> Optional[bytes]:
        if self._records is None:
            raise RuntimeError("PcapPacketSource not open. Call open() first.")

        while True:
            try:
                _, frame = next(self._records)
            except StopIteration:
                return None
            except (dpkt.dpkt.NeedData, EOFError) as e:
                logger.warning("Capture %s ends with a truncated record: %s", self.path, e)
                return None

            self.frames_read += 1
            payload = self._udp_payload(frame)
            if payload is None:
                self.frames_skipped += 1
                continue
            return payload

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            logger.info(
                "Closed capture %s after %d frames (%d skipped)",
                self.path,
                self.frames_read,
                self.frames_skipped,
            )
        self._file = None
        self._records = None
        self._datalink = None

    def _udp_payload(self, frame: bytes) -> Optional[bytes]:
        """Unwrap a link-layer frame down to its UDP payload."""
        try:
            if self._datalink == dpkt.pcap.DLT_EN10MB:
                network = dpkt.ethernet.Ethernet(frame).data
            elif self._datalink == dpkt.pcap.DLT_LINUX_SLL:
                network = dpkt.sll.SLL(frame).data
            elif self._datalink in RAW_LINK_TYPES:
                network = dpkt.ip.IP(frame)
            else:
                logger.debug("Unsupported link type %s, skipping frame", self._datalink)
                return None
        except (dpkt.dpkt.UnpackError, dpkt.dpkt.NeedData) as e:
            logger.warning("Malformed frame skipped: %s", e)
            return None

        if not isinstance(network, (dpkt.ip.IP, dpkt.ip6.IP6)):
            return None

        udp = network.data
        if not isinstance(udp, dpkt.udp.UDP):
            return None
        if self.udp_port is not None and udp.dport != self.udp_port:
            return None

        payload = bytes(udp.data)
        # Ethernet trailer padding can survive past the IP layer
        if dpkt.udp.UDP_HDR_LEN <= udp.ulen < dpkt.udp.UDP_HDR_LEN + len(payload):
            payload = payload[: udp.ulen - dpkt.udp.UDP_HDR_LEN]
        return payload


def _sniff(raw: BinaryIO) -> tuple[BinaryIO, bytes]:
    """Return a stream positioned at the capture header, and its magic bytes."""
    compressed = raw.read(2) == GZIP_MAGIC
    raw.seek(0)
    if not compressed:
        magic = raw.read(4)
        raw.seek(0)
        return raw, magic

    # GzipFile does not close a fileobj it was handed
    with gzip.GzipFile(fileobj=raw, mode="rb") as probe:
        magic = probe.read(4)
    raw.seek(0)
    return gzip.GzipFile(fileobj=raw, mode="rb"), magic  # type: ignore[return-value]
