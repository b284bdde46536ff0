"""Bridge protocol: record wire format and the output sink."""

from .codec import (
    ATTRIBUTE_DELIMITER,
    FIELD_DELIMITER,
    NULL,
    PAIR_SEPARATOR,
    collect_records,
    finished_sentinel,
    is_finished,
    js_number,
    parse_record,
    serialize_record,
    to_screen_point,
)
from .sink import CallbackSink, ListSink, Sink

__all__ = [
    "ATTRIBUTE_DELIMITER",
    "FIELD_DELIMITER",
    "NULL",
    "PAIR_SEPARATOR",
    "collect_records",
    "finished_sentinel",
    "is_finished",
    "js_number",
    "parse_record",
    "serialize_record",
    "to_screen_point",
    "CallbackSink",
    "ListSink",
    "Sink",
]
