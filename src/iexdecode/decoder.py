"""Segment decoder: pull-based iteration over the messages of a capture.

The decoder owns one cursor into the current packet payload. Each call to
``get_next_message()`` consumes one message block; when a segment runs out the
next packet is fetched from the packet source and its header decoded. Heartbeats,
both empty segments and zero-length blocks, are absorbed and never returned.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Iterator, Optional, Union

from .codec.byteview import Buffer, ByteView
from .codec.dispatch import decode_message
from .config import DecoderConfig
from .exceptions import (
    EndOfStreamError,
    IexDecodeError,
    NotInitializedError,
    SourceOpenError,
    UnknownMessageTypeError,
)
from .framing.segment import HEADER_LENGTH, decode_segment_header, read_block
from .models.base import IexMessage
from .models.header import SegmentHeader
from .source.driver import PacketSource
from .source.pcap import PcapPacketSource

logger = logging.getLogger(__name__)


class DecoderState(enum.Enum):
    NO_ACTIVE_SEGMENT = "no_active_segment"
    WITHIN_SEGMENT = "within_segment"


@dataclass
class DecoderCursor:
    """Position inside the current segment.

    Attributes:
        view: Payload of the current packet
        offset: Offset of the next block's length prefix
        end: Offset one past the last payload byte
    """

    view: ByteView
    offset: int
    end: int

    @property
    def remaining(self) -> int:
        return self.end - self.offset


@dataclass
class DecoderStats:
    """Counters accumulated while decoding.

    Attributes:
        packets: Packet payloads fetched from the source
        heartbeats: Empty segments and zero-length blocks absorbed
        messages: Messages decoded successfully
        unknown: Blocks with an unrecognized type byte
    """

    packets: int = 0
    heartbeats: int = 0
    messages: int = 0
    unknown: int = 0
    by_type: dict[str, int] = field(default_factory=dict)


class IexDecoder:
    """Decoder for IEX TOPS and DEEP captures.

    Attributes:
        config: Validation and skip policy
        stats: Decoding counters

    Examples:
        ```python
        from iexdecode import IexDecoder, QuoteUpdateMessage

        with IexDecoder() as decoder:
            if decoder.open_for_decoding("20180127_IEXTP1_TOPS1.6.pcap.gz"):
                for message in decoder:
                    if isinstance(message, QuoteUpdateMessage):
                        print(message.symbol, message.bid_price, message.ask_price)
        ```

        Pull one message at a time and handle each outcome:

        ```python
        decoder = IexDecoder(PcapPacketSource(path))
        while True:
            try:
                message = decoder.get_next_message()
            except UnknownMessageTypeError:
                continue
            except EndOfStreamError:
                break
        ```
    """

    def __init__(
        self,
        source: Optional[PacketSource] = None,
        config: Optional[DecoderConfig] = None,
    ) -> None:
        self.config = config or DecoderConfig()
        self.stats = DecoderStats()
        self._source: Optional[PacketSource] = None
        self._cursor: Optional[DecoderCursor] = None
        self._first_header: Optional[SegmentHeader] = None
        self._last_decoded_header: Optional[SegmentHeader] = None

        if source is not None:
            self.attach(source)

    @property
    def state(self) -> DecoderState:
        if self._cursor is None:
            return DecoderState.NO_ACTIVE_SEGMENT
        return DecoderState.WITHIN_SEGMENT

    @property
    def is_initialized(self) -> bool:
        return self._source is not None

    @property
    def first_header(self) -> Optional[SegmentHeader]:
        """Header of the first packet of the capture."""
        return self._first_header

    @property
    def last_decoded_header(self) -> Optional[SegmentHeader]:
        """Header of the most recently opened segment."""
        return self._last_decoded_header

    def get_first_header(self) -> SegmentHeader:
        """Return the first packet's header.

        Raises:
            NotInitializedError: If no source has been opened
        """
        if self._first_header is None:
            raise NotInitializedError("No packet source opened")
        return self._first_header

    def get_last_decoded_header(self) -> SegmentHeader:
        """Return the most recently decoded segment header.

        Raises:
            NotInitializedError: If no source has been opened
        """
        if self._last_decoded_header is None:
            raise NotInitializedError("No packet source opened")
        return self._last_decoded_header

    def attach(self, source: PacketSource) -> None:
        """Start decoding from a packet source.

        The source is opened if needed and its first packet is fetched and
        decoded immediately, so ``first_header`` is available right away.

        Raises:
            SourceOpenError: If the source cannot be opened or has no packets
            HeaderDecodeError: If the first packet's header is invalid
        """
        self.close()
        source.open()
        self._source = source
        self.stats = DecoderStats()

        payload = self._fetch_packet()
        if payload is None:
            self.close()
            raise SourceOpenError("Packet source contains no packets")

        try:
            self.open_segment(payload)
        except IexDecodeError:
            self.close()
            raise
        self._first_header = self._last_decoded_header

    def open(self, path: Union[str, Path], udp_port: Optional[int] = None) -> None:
        """Open a capture file for decoding.

        Raises:
            SourceOpenError: If the file cannot be opened or holds no packets
            HeaderDecodeError: If the first packet's header is invalid
        """
        self.attach(PcapPacketSource(path, udp_port=udp_port))

    def open_for_decoding(self, path: Union[str, Path], udp_port: Optional[int] = None) -> bool:
        """Open a capture file, returning False instead of raising on failure."""
        try:
            self.open(path, udp_port=udp_port)
        except IexDecodeError as e:
            logger.error("Failed to open %s for decoding: %s", path, e)
            return False
        return True

    def open_segment(self, payload: Union[Buffer, ByteView]) -> SegmentHeader:
        """Decode a packet's header and position the cursor on its first block.

        A header-only packet, or one whose header declares no payload, leaves
        the decoder with no active segment.

        Raises:
            HeaderDecodeError: If the payload is too short or the version is not 1
        """
        view = payload if isinstance(payload, ByteView) else ByteView(payload)
        self._cursor = None

        header = decode_segment_header(view)
        self._last_decoded_header = header

        if header.payload_length == 0 or len(view) <= HEADER_LENGTH:
            self.stats.heartbeats += 1
            logger.debug(
                "Segment at stream offset %d carries no blocks", header.stream_offset
            )
            return header

        if len(view) - HEADER_LENGTH != header.payload_length:
            logger.warning(
                "Segment declares %d payload bytes but packet holds %d",
                header.payload_length,
                len(view) - HEADER_LENGTH,
            )

        self._cursor = DecoderCursor(view=view, offset=HEADER_LENGTH, end=len(view))
        return header

    def get_next_message(self) -> IexMessage:
        """Decode and return the next message of the capture.

        Raises:
            NotInitializedError: If no source has been attached
            EndOfStreamError: When the source has no more packets
            UnknownMessageTypeError: For a block with an unrecognized type byte;
                the cursor has already moved past it, so the next call continues
            BlockDecodeError: If a block is truncated, overruns its segment or
                fails validation
            HeaderDecodeError: If a fetched packet's header is invalid
        """
        if self._source is None:
            raise NotInitializedError("No packet source attached; call open() first")

        while True:
            while self._cursor is None:
                payload = self._fetch_packet()
                if payload is None:
                    raise EndOfStreamError("Packet source exhausted")
                self.open_segment(payload)

            cursor = self._cursor
            try:
                body, cursor.offset = read_block(cursor.view, cursor.offset, cursor.end)
            except IexDecodeError:
                self._cursor = None
                raise

            if cursor.offset >= cursor.end:
                self._cursor = None

            if len(body) == 0:
                self.stats.heartbeats += 1
                continue

            try:
                message = decode_message(body, self.config)
            except UnknownMessageTypeError:
                self.stats.unknown += 1
                raise

            self.stats.messages += 1
            name = message.message_type.name
            self.stats.by_type[name] = self.stats.by_type.get(name, 0) + 1
            return message

    def close(self) -> None:
        """Close the packet source and reset the decoder."""
        if self._source is not None:
            self._source.close()
        self._source = None
        self._cursor = None
        self._first_header = None
        self._last_decoded_header = None

    def __iter__(self) -> Iterator[IexMessage]:
        while True:
            try:
                yield self.get_next_message()
            except EndOfStreamError:
                return
            except UnknownMessageTypeError as e:
                if not self.config.skip_unknown_types:
                    raise
                logger.debug("Skipping block: %s", e)

    def __enter__(self) -> IexDecoder:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def _fetch_packet(self) -> Optional[bytes]:
        assert self._source is not None
        payload = self._source.next_packet_payload()
        if payload is not None:
            self.stats.packets += 1
            logger.debug("Fetched packet %d (%d bytes)", self.stats.packets, len(payload))
        return payload
