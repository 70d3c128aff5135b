"""Field type helpers for wire-layout models.

This module provides convenience functions that wrap Pydantic's Field() and
attach the byte-exact wire position of each field. The codec reads this
metadata to decode and encode models without per-message code.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def _wire(kind: str, offset: int, width: int) -> dict[str, Any]:
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    return {"wire": kind, "offset": offset, "width": width}


def Tag(**kwargs: Any) -> FieldInfo:
    """Create the one-byte message type tag field at offset 0."""
    return cast(FieldInfo, Field(json_schema_extra=_wire("tag", 0, 1), **kwargs))


def UInt(*, offset: int, width: int, **kwargs: Any) -> FieldInfo:
    """Create a little-endian unsigned integer field.

    Args:
        offset: Byte offset of the field within the record
        width: Width in bytes (1, 2, 4 or 8)
        **kwargs: Additional Field() arguments (description, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Record(BaseModel):
        ...     size: int = UInt(offset=18, width=4)
    """
    if width not in (1, 2, 4, 8):
        raise ValueError(f"width must be 1, 2, 4 or 8, got {width}")
    return cast(
        FieldInfo,
        Field(
            ge=0,
            le=(1 << (8 * width)) - 1,
            json_schema_extra=_wire("uint", offset, width),
            **kwargs,
        ),
    )


def Price(*, offset: int, **kwargs: Any) -> FieldInfo:
    """Create a fixed-point price field.

    Prices are signed 8-byte integers carrying 4 implied decimal digits and
    are exposed as floats in currency units.
    """
    return cast(FieldInfo, Field(json_schema_extra=_wire("price", offset, 8), **kwargs))


def PaddedText(*, offset: int, length: int = 8, **kwargs: Any) -> FieldInfo:
    """Create a fixed-width, space-padded text field.

    Args:
        offset: Byte offset of the field within the record
        length: Field width in bytes (8 for symbols)
        **kwargs: Additional Field() arguments

    Example:
        >>> class Record(BaseModel):
        ...     symbol: str = PaddedText(offset=10)
        ...     reason: str = PaddedText(offset=18, length=4)
    """
    return cast(
        FieldInfo,
        Field(max_length=length, json_schema_extra=_wire("text", offset, length), **kwargs),
    )


def Code(*, offset: int, **kwargs: Any) -> FieldInfo:
    """Create a one-byte enumerated code field.

    The field annotation must be an enum whose values are the wire bytes.
    """
    return cast(FieldInfo, Field(json_schema_extra=_wire("code", offset, 1), **kwargs))


def Flag(*, offset: int, **kwargs: Any) -> FieldInfo:
    """Create a one-byte boolean field (zero is False, anything else True)."""
    return cast(FieldInfo, Field(json_schema_extra=_wire("bool", offset, 1), **kwargs))
