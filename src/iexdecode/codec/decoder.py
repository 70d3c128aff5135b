"""Fixed-layout binary decoder for wire models.

This module provides decode_record(), which reads every field of a model from
its declared byte offset and builds the validated model instance.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import BlockDecodeError, IexDecodeError, OutOfBoundsError
from ..models.enums import MessageType
from .byteview import Buffer, ByteView
from .schema import FieldLayout, MessageLayout

T = TypeVar("T", bound=BaseModel)


def decode_record(
    model_class: type[T],
    data: Buffer | ByteView,
    *,
    error: type[IexDecodeError] = BlockDecodeError,
) -> T:
    """Decode a fixed-layout record into a model instance.

    Bytes beyond the layout's last field are ignored, so records that later
    protocol revisions extend still decode.

    Args:
        model_class: Model class declaring the wire layout
        data: Record bytes, starting at the layout's offset 0
        error: Exception class raised on failure

    Returns:
        Decoded model instance

    Raises:
        SchemaError: If the model layout is invalid
        error: If the record is truncated or a field value is invalid

    Examples:
        ```python
        from iexdecode.codec.decoder import decode_record
        from iexdecode.models import QuoteUpdateMessage

        quote = decode_record(QuoteUpdateMessage, body)
        print(quote.symbol, quote.bid_price, quote.ask_price)
        ```
    """
    layout = MessageLayout.from_model(model_class)
    view = data if isinstance(data, ByteView) else ByteView(data)

    if len(view) < layout.body_length:
        raise error(
            f"Truncated {model_class.__name__}: need {layout.body_length} bytes, "
            f"got {len(view)}"
        )

    field_values: dict[str, Any] = {}
    for field_layout in layout.fields:
        try:
            field_values[field_layout.name] = _decode_field(view, field_layout)
        except OutOfBoundsError as e:
            raise error(f"Truncated data while decoding field {field_layout.name}: {e}") from e
        except ValueError as e:
            raise error(f"Invalid value for field {field_layout.name}: {e}") from e

    try:
        return model_class(**field_values)
    except ValidationError as e:
        raise error(f"Failed to construct {model_class.__name__}: {e}") from e


def _decode_field(view: ByteView, field_layout: FieldLayout) -> Any:
    """Decode a single field value.

    Raises:
        OutOfBoundsError: If the field lies outside the view
        ValueError: If an enumerated code is not recognized
    """
    kind = field_layout.kind
    offset = field_layout.offset

    if kind == "price":
        return view.read_price(offset)

    if kind == "text":
        return view.read_padded_text(offset, field_layout.width)

    raw = view.read_uint(offset, field_layout.width)

    if kind == "bool":
        return raw != 0

    if kind == "tag":
        return MessageType(raw)

    if kind == "code":
        assert field_layout.enum_type is not None
        try:
            return field_layout.enum_type(raw)
        except ValueError as e:
            raise ValueError(
                f"0x{raw:02x} is not a valid {field_layout.enum_type.__name__}"
            ) from e

    return raw
