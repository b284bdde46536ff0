"""Wire format for element records sent across the bridge.

A record is one flat string because the bridge carries a single string per
call::

    id;,text;,name;,className;,tagName;,left;,top;,width;,height[;,attributes]

``attributes`` is ``name::value`` pairs joined by ``#$``. Text-node records
have nine fields, element records ten (the last possibly empty). Unset fields
travel as the literal ``null``.
"""

import math
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Tuple

from ..core.errors import MalformedRecordError
from ..types import ElementRecord

FIELD_DELIMITER = ";,"
ATTRIBUTE_DELIMITER = "#$"
PAIR_SEPARATOR = "::"
NULL = "null"

TEXT_RECORD_FIELDS = 9
ELEMENT_RECORD_FIELDS = 10


def finished_sentinel(tool_name: str) -> str:
    """The message that closes a request's output stream."""
    return f"{tool_name}-finished"


def is_finished(message: str, tool_name: str) -> bool:
    return message == finished_sentinel(tool_name)


def js_number(value: float) -> str:
    """
    Format a number the way the host's Number-to-String conversion does.

    Integral values lose the fractional part (``10``, not ``10.0``), which the
    native side relies on when it parses coordinates as integers.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(float(value))
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def format_field(value: Any) -> str:
    if value is None:
        return NULL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return js_number(value)
    return str(value)


def format_attributes(attributes: Iterable[Tuple[str, str]]) -> str:
    return ATTRIBUTE_DELIMITER.join(f"{name}{PAIR_SEPARATOR}{value}" for name, value in attributes)


def serialize_record(record: ElementRecord) -> str:
    """
    Encode a record into its bridge message.

    Args:
        record: Record to encode

    Returns:
        Delimited message string
    """
    fields = [
        record.id,
        record.text,
        record.name,
        record.class_name,
        record.tag_name,
        record.left,
        record.top,
        record.width,
        record.height,
    ]
    message = FIELD_DELIMITER.join(format_field(f) for f in fields)
    if record.attributes is not None:
        message += FIELD_DELIMITER + format_attributes(record.attributes)
    return message


def _optional(field: str) -> Optional[str]:
    return None if field == NULL else field


def _number(message: str, field: str) -> float:
    try:
        return float(field)
    except ValueError as e:
        raise MalformedRecordError(message, f"{field!r} is not a number") from e


def parse_attributes(message: str, field: str) -> List[Tuple[str, str]]:
    if not field:
        return []
    pairs = []
    for pair in field.split(ATTRIBUTE_DELIMITER):
        name, separator, value = pair.partition(PAIR_SEPARATOR)
        if not separator:
            raise MalformedRecordError(message, f"attribute {pair!r} has no {PAIR_SEPARATOR!r}")
        pairs.append((name, value))
    return pairs


def parse_record(message: str) -> ElementRecord:
    """
    Decode a bridge message back into a record.

    A value that itself contains the field delimiter makes the message
    ambiguous and is rejected rather than guessed at.

    Args:
        message: Delimited message string

    Returns:
        Decoded ElementRecord

    Raises:
        MalformedRecordError: If the message has the wrong shape
    """
    data = message.split(FIELD_DELIMITER)
    if len(data) not in (TEXT_RECORD_FIELDS, ELEMENT_RECORD_FIELDS):
        raise MalformedRecordError(message, f"expected 9 or 10 fields, got {len(data)}")

    attributes = None
    if len(data) == ELEMENT_RECORD_FIELDS:
        attributes = parse_attributes(message, data[9])

    return ElementRecord(
        id=_optional(data[0]),
        text=_optional(data[1]),
        name=_optional(data[2]),
        class_name=_optional(data[3]),
        tag_name=_optional(data[4]),
        left=_number(message, data[5]),
        top=_number(message, data[6]),
        width=_number(message, data[7]),
        height=_number(message, data[8]),
        attributes=attributes,
    )


def collect_records(messages: Iterable[str], tool_name: str) -> Tuple[List[ElementRecord], bool]:
    """
    Decode one request's message stream.

    Messages after the sentinel belong to a later request and are ignored.

    Returns:
        (records, finished) where finished says whether the sentinel was seen
    """
    records = []
    for message in messages:
        if is_finished(message, tool_name):
            return records, True
        records.append(parse_record(message))
    return records, False


def to_screen_point(
    record: ElementRecord,
    origin: Tuple[int, int] = (0, 0),
    scale: float = 1.0,
) -> Tuple[int, int]:
    """
    Native-side touch point for a record: the box centre, scaled by the web
    view's zoom and offset by the web view's on-screen origin.
    """
    x = int(origin[0] + (record.left + math.floor(record.width / 2)) * scale)
    y = int(origin[1] + (record.top + math.floor(record.height / 2)) * scale)
    return x, y
