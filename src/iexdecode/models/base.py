"""Base message class and shared Pydantic configuration.

This module provides IexMessage, the base of every decoded message variant.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..utils.timestamps import to_datetime
from .enums import MessageType
from .fields import Tag, UInt


class IexMessage(BaseModel):
    """Base class for all decoded IEX messages.

    Subclasses declare their wire layout with the helpers from
    ``iexdecode.models.fields`` and list the type bytes they are decoded from in
    ``wire_types``. Every variant carries the type tag at offset 0 and the
    nanosecond timestamp at offset 2.

    Example:
        >>> class SystemEventMessage(IexMessage):
        ...     wire_types: ClassVar[tuple[MessageType, ...]] = (MessageType.SYSTEM_EVENT,)
        ...     message_type: Literal[MessageType.SYSTEM_EVENT] = Tag()
        ...     system_event: SystemEventCode = Code(offset=1)

    Attributes:
        wire_types: Type bytes that decode into this class
    """

    model_config = ConfigDict(
        # Decoded records are values
        frozen=True,
        extra="forbid",
    )

    wire_types: ClassVar[tuple[MessageType, ...]] = ()

    message_type: MessageType = Tag()
    timestamp: int = UInt(offset=2, width=8)

    @property
    def event_time(self) -> datetime:
        """Timestamp as an aware UTC datetime (microsecond precision)."""
        return to_datetime(self.timestamp)
