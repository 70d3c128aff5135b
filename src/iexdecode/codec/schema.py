"""Wire layout introspection for Pydantic models.

This module analyzes models built with the ``iexdecode.models.fields`` helpers
and extracts the byte offset, width and kind of every field.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Type

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError

WIRE_KINDS = ("tag", "uint", "price", "text", "code", "bool")


@dataclass(frozen=True)
class FieldLayout:
    """Wire position of a single field.

    Attributes:
        name: Field name
        kind: One of WIRE_KINDS
        offset: Byte offset within the record
        width: Width in bytes
        enum_type: Enum class for code fields
    """

    name: str
    kind: str
    offset: int
    width: int
    enum_type: Optional[Type[enum.Enum]] = None

    @property
    def end(self) -> int:
        return self.offset + self.width


class MessageLayout:
    """Wire layout of an entire record.

    Example:
        >>> layout = MessageLayout.from_model(QuoteUpdateMessage)
        >>> layout.body_length
        42
        >>> [f.name for f in layout.fields][:3]
        ['message_type', 'flags', 'timestamp']
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize layout from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            SchemaError: If any field lacks wire metadata or fields overlap
        """
        self.model_class = model_class
        self.fields: List[FieldLayout] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> MessageLayout:
        """Return the (cached) layout of a model class."""
        return _layout_for(model_class)

    @property
    def body_length(self) -> int:
        """Minimum record length covering every field."""
        return max((f.end for f in self.fields), default=0)

    def _introspect(self) -> None:
        for name, field_info in self.model_class.model_fields.items():
            self.fields.append(self._extract_field_layout(name, field_info))

        self.fields.sort(key=lambda f: f.offset)
        for previous, current in zip(self.fields, self.fields[1:]):
            if current.offset < previous.end:
                raise SchemaError(
                    f"{self.model_class.__name__}: field {current.name} at offset "
                    f"{current.offset} overlaps {previous.name} ending at {previous.end}"
                )

    def _extract_field_layout(self, name: str, field_info: FieldInfo) -> FieldLayout:
        extra: Any = field_info.json_schema_extra
        if not isinstance(extra, dict) or "wire" not in extra:
            raise SchemaError(f"{self.model_class.__name__}.{name} has no wire layout")

        kind = extra["wire"]
        if kind not in WIRE_KINDS:
            raise SchemaError(f"{self.model_class.__name__}.{name}: unknown wire kind {kind!r}")

        enum_type = None
        if kind == "code":
            annotation = field_info.annotation
            if not (isinstance(annotation, type) and issubclass(annotation, enum.Enum)):
                raise SchemaError(
                    f"{self.model_class.__name__}.{name}: code fields must be annotated "
                    f"with an enum, got {annotation}"
                )
            enum_type = annotation

        return FieldLayout(
            name=name,
            kind=kind,
            offset=int(extra["offset"]),
            width=int(extra["width"]),
            enum_type=enum_type,
        )


@lru_cache(maxsize=None)
def _layout_for(model_class: Type[BaseModel]) -> MessageLayout:
    return MessageLayout(model_class)
