"""Message layout CLI command."""

from __future__ import annotations

from ..codec.dispatch import MESSAGE_REGISTRY
from ..codec.schema import MessageLayout
from ..models.base import IexMessage
from ..models.header import SegmentHeader


def print_layouts() -> None:
    """Print the wire layout of the segment header and every message variant."""
    classes: list[type[IexMessage]] = []
    for message_class in MESSAGE_REGISTRY.values():
        if message_class not in classes:
            classes.append(message_class)

    print(f"{len(classes)} message variants registered.")
    print("Offsets and widths are in bytes; integers are little-endian.")
    print()

    print_layout("SegmentHeader", MessageLayout.from_model(SegmentHeader))
    for message_class in classes:
        tags = ", ".join(f"0x{int(t):02X} {t.name}" for t in message_class.wire_types)
        print_layout(f"{message_class.__name__} ({tags})", MessageLayout.from_model(message_class))


def print_layout(title: str, layout: MessageLayout) -> None:
    """Print one layout as an offset/width/field table.

    Args:
        title: Heading line
        layout: Layout to print
    """
    print(f"{'=' * 8} {title} {'=' * 8}")
    print(f"Length: {layout.body_length} bytes")
    print(f"{'offset':>6}  {'width':>5}  {'kind':<6} field")
    for field in layout.fields:
        detail = f" [{field.enum_type.__name__}]" if field.enum_type is not None else ""
        print(f"{field.offset:>6}  {field.width:>5}  {field.kind:<6} {field.name}{detail}")
    print()
