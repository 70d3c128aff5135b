"""Fixed-layout binary encoder for wire models.

This module provides encode_record(), the inverse of decode_record(). It is
used to build segments for replay and test captures.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from ..exceptions import EncodeError, OutOfBoundsError
from .byteview import ByteWriter
from .schema import FieldLayout, MessageLayout


def encode_record(record: BaseModel) -> bytes:
    """Encode a model instance to its fixed-layout wire bytes.

    Args:
        record: Model instance declaring a wire layout

    Returns:
        Record bytes of exactly the layout's body length

    Raises:
        SchemaError: If the model layout is invalid
        EncodeError: If a field value does not fit its wire field

    Examples:
        ```python
        from iexdecode.codec.encoder import encode_record
        from iexdecode.models import MessageType, SystemEventCode, SystemEventMessage

        msg = SystemEventMessage(
            message_type=MessageType.SYSTEM_EVENT,
            timestamp=1517058017224122394,
            system_event=SystemEventCode.START_OF_SYSTEM_HOURS,
        )
        body = encode_record(msg)  # 10 bytes
        ```
    """
    layout = MessageLayout.from_model(type(record))
    writer = ByteWriter(layout.body_length)

    for field_layout in layout.fields:
        value = getattr(record, field_layout.name)
        try:
            _encode_field(writer, field_layout, value)
        except (ValueError, OutOfBoundsError) as e:
            raise EncodeError(f"Field {field_layout.name}: {e}") from e

    return writer.to_bytes()


def _encode_field(writer: ByteWriter, field_layout: FieldLayout, value: Any) -> None:
    kind = field_layout.kind
    offset = field_layout.offset

    if kind == "price":
        writer.write_price(offset, value)
    elif kind == "text":
        writer.write_padded_text(offset, value, field_layout.width)
    elif kind == "bool":
        writer.write_uint(offset, 1 if value else 0, field_layout.width)
    else:
        # tag, code and uint fields are all plain integers on the wire
        writer.write_uint(offset, int(value), field_layout.width)
