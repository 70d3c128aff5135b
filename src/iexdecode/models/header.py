"""IEX-TP transport segment header."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ..utils.timestamps import to_datetime
from .fields import UInt

SUPPORTED_VERSION = 1

# Higher-layer protocol identifiers.
PROTOCOL_TOPS = 0x8003
PROTOCOL_DEEP = 0x8004


class SegmentHeader(BaseModel):
    """The 40-byte header that starts every IEX-TP segment.

    Byte 1 is reserved and not exposed.

    Attributes:
        version: Transport version, must be 1
        protocol_id: Higher-layer protocol (0x8003 TOPS, 0x8004 DEEP)
        channel_id: Stream of sequenced messages
        session_id: Session identifier
        payload_length: Bytes of message blocks following the header
        message_count: Number of message blocks in the payload
        stream_offset: Byte offset of the payload within the stream
        first_message_sequence: Sequence number of the first message block
        send_time: Send time of the segment, nanoseconds since epoch
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: int = UInt(offset=0, width=1)
    protocol_id: int = UInt(offset=2, width=2)
    channel_id: int = UInt(offset=4, width=4)
    session_id: int = UInt(offset=8, width=4)
    payload_length: int = UInt(offset=12, width=2)
    message_count: int = UInt(offset=14, width=2)
    stream_offset: int = UInt(offset=16, width=8)
    first_message_sequence: int = UInt(offset=24, width=8)
    send_time: int = UInt(offset=32, width=8)

    @property
    def send_datetime(self) -> datetime:
        return to_datetime(self.send_time)

    @property
    def is_heartbeat(self) -> bool:
        """True when the segment carries no message blocks."""
        return self.payload_length == 0
