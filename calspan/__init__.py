from .interval import (
    Interval,
    IntervalParseError,
    OverflowPolicy,
    ParseFailure,
    ParseResult,
    format_interval,
    parse_interval,
)
from .util import (
    MICROS_PER_DAY,
    MICROS_PER_HOUR,
    MICROS_PER_MILLI,
    MICROS_PER_MINUTE,
    MICROS_PER_SECOND,
    MICROS_PER_WEEK,
    MONTHS_PER_YEAR,
)

__all__ = [
    "Interval",
    "IntervalParseError",
    "OverflowPolicy",
    "ParseFailure",
    "ParseResult",
    "parse_interval",
    "format_interval",
    "MICROS_PER_MILLI",
    "MICROS_PER_SECOND",
    "MICROS_PER_MINUTE",
    "MICROS_PER_HOUR",
    "MICROS_PER_DAY",
    "MICROS_PER_WEEK",
    "MONTHS_PER_YEAR",
]
