import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypeAlias

from typing_extensions import override

from calspan.grammar import KEYWORD, UNITS, Clauses, match_clauses
from calspan.util import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    MICROS_PER_DAY,
    MICROS_PER_HOUR,
    MICROS_PER_MILLI,
    MICROS_PER_MINUTE,
    MICROS_PER_SECOND,
    MICROS_PER_WEEK,
    MONTHS_PER_YEAR,
    clamp,
    trunc_divmod,
    wrap,
)

logger = logging.getLogger(__name__)

OverflowPolicy: TypeAlias = Literal["wrap", "saturate", "reject"]

_OVERFLOW_POLICIES: tuple[OverflowPolicy, ...] = ("wrap", "saturate", "reject")

# Microsecond scale for each clause that contributes to the microsecond field
_MICRO_SCALES: dict[str, int] = {
    "week": MICROS_PER_WEEK,
    "day": MICROS_PER_DAY,
    "hour": MICROS_PER_HOUR,
    "minute": MICROS_PER_MINUTE,
    "second": MICROS_PER_SECOND,
    "millisecond": MICROS_PER_MILLI,
    "microsecond": 1,
}


class ParseFailure(Enum):
    """Reason a string could not be turned into an Interval."""

    MISSING = "missing"
    NO_MATCH = "no_match"
    NO_CLAUSES = "no_clauses"
    OVERFLOW = "overflow"


class IntervalParseError(ValueError):
    """Raised by Interval.from_string when the text is not a valid interval."""

    def __init__(self, message: str, *, text: str | None, failure: ParseFailure):
        super().__init__(message)
        self.text: str | None = text
        self.failure: ParseFailure = failure


@dataclass(frozen=True, kw_only=True)
class Interval:
    """A calendar interval split into whole months and microseconds.

    The two fields are independent: 40 days is never folded into months, and
    no range validation happens on construction.
    """

    months: int = 0
    microseconds: int = 0

    @classmethod
    def parse(
        cls, text: str | None, *, overflow: OverflowPolicy = "wrap"
    ) -> "Interval | None":
        """Parse canonical interval text, returning None if it is not valid.

        Missing input, text that does not match the grammar and the bare
        keyword "interval" all give None. Use try_parse() to tell them apart.
        """
        return cls.try_parse(text, overflow=overflow).interval

    @classmethod
    def try_parse(
        cls, text: str | None, *, overflow: OverflowPolicy = "wrap"
    ) -> "ParseResult":
        """Parse interval text into a ParseResult that records why it failed.

        Args:
            text: String such as "interval 1 year 2 months -3 days"
            overflow: How totals outside the field widths are narrowed:
                "wrap" (two's complement), "saturate" (clamp to range),
                or "reject" (fail with ParseFailure.OVERFLOW). A clause whose
                digit run is too long to convert to an int fails with
                ParseFailure.OVERFLOW under every policy

        Raises:
            ValueError: If overflow is not a known policy name
        """
        if overflow not in _OVERFLOW_POLICIES:
            valid = ", ".join(_OVERFLOW_POLICIES)
            raise ValueError(
                f"Invalid overflow policy: {overflow!r}\nValid policies: {valid}"
            )

        if text is None:
            return ParseResult.failed(ParseFailure.MISSING)

        clauses = match_clauses(text)
        if clauses is None:
            logger.debug(f"Rejected interval text {text!r}: no grammar match")
            return ParseResult.failed(ParseFailure.NO_MATCH)
        if not clauses.has_clauses:
            logger.debug(f"Rejected interval text {text!r}: no unit clauses")
            return ParseResult.failed(ParseFailure.NO_CLAUSES)
        if clauses.oversized:
            units = ", ".join(clauses.oversized)
            logger.debug(f"Rejected interval text: digit run too long for {units}")
            return ParseResult.failed(ParseFailure.OVERFLOW)

        months, microseconds = _accumulate(clauses)

        if overflow == "reject":
            if not (INT32_MIN <= months <= INT32_MAX) or not (
                INT64_MIN <= microseconds <= INT64_MAX
            ):
                logger.debug(f"Rejected interval text {text!r}: out of range")
                return ParseResult.failed(ParseFailure.OVERFLOW)
        elif overflow == "saturate":
            months = clamp(months, INT32_MIN, INT32_MAX)
            microseconds = clamp(microseconds, INT64_MIN, INT64_MAX)
        else:
            months = wrap(months, 32)
            microseconds = wrap(microseconds, 64)

        return ParseResult(
            success=True,
            interval=cls(months=months, microseconds=microseconds),
            failure=None,
        )

    @classmethod
    def from_string(
        cls, text: str | None, *, overflow: OverflowPolicy = "wrap"
    ) -> "Interval":
        """Parse interval text, raising IntervalParseError if it is not valid."""
        result = cls.try_parse(text, overflow=overflow)
        if result.interval is not None:
            return result.interval

        assert result.failure is not None
        raise IntervalParseError(
            _failure_message(text, result.failure),
            text=text,
            failure=result.failure,
        )

    def to_canonical_string(self) -> str:
        """Format as canonical text, e.g. "interval 1 years 2 months".

        Units are always pluralized, and the zero interval formats to the bare
        keyword "interval".
        """
        parts = [KEYWORD]

        if self.months != 0:
            years, months = trunc_divmod(self.months, MONTHS_PER_YEAR)
            _append_unit(parts, years, "year")
            _append_unit(parts, months, "month")

        if self.microseconds != 0:
            rest = self.microseconds
            for unit, scale in _MICRO_SCALES.items():
                value, rest = trunc_divmod(rest, scale)
                _append_unit(parts, value, unit)

        return "".join(parts)

    @override
    def __str__(self) -> str:
        return self.to_canonical_string()

    @override
    def __hash__(self) -> int:
        return wrap(31 * wrap(self.months, 32) + wrap(self.microseconds, 32), 32)


@dataclass(frozen=True)
class ParseResult:
    """Result of Interval.try_parse().

    Attributes:
        success: True if the text parsed into an interval
        interval: The parsed interval if successful, None if failed
        failure: Why parsing failed, None if successful
    """

    success: bool
    interval: Interval | None
    failure: ParseFailure | None

    @classmethod
    def failed(cls, failure: ParseFailure) -> "ParseResult":
        return cls(success=False, interval=None, failure=failure)


def _accumulate(clauses: Clauses) -> tuple[int, int]:
    """Sum clause values into exact (months, microseconds) totals."""
    values = clauses.values
    months = values["year"] * MONTHS_PER_YEAR + values["month"]
    microseconds = sum(values[unit] * scale for unit, scale in _MICRO_SCALES.items())
    return months, microseconds


def _append_unit(parts: list[str], value: int, unit: str) -> None:
    if value != 0:
        parts.append(f" {value} {unit}s")


def _failure_message(text: str | None, failure: ParseFailure) -> str:
    example = 'Example: Interval.from_string("interval 1 year 2 months 3 days")'
    if failure is ParseFailure.MISSING:
        return f"Cannot parse interval from None.\n{example}"
    if failure is ParseFailure.NO_CLAUSES:
        return (
            f"Interval text {text!r} has no unit clauses.\n"
            f"Hint: Add at least one clause, e.g. 'interval 0 days'\n"
            f"{example}"
        )
    if failure is ParseFailure.OVERFLOW:
        return (
            f"Interval text {text!r} does not fit in 32-bit months "
            f"and 64-bit microseconds.\n"
            f"Hint: Use overflow='wrap' or overflow='saturate' to narrow instead;\n"
            f"digit runs too long to convert fail under every policy"
        )
    units = ", ".join(UNITS)
    return (
        f"Invalid interval text: {text!r}\n"
        f"Expected 'interval' followed by '<integer> <unit>' clauses in order: "
        f"{units}\n"
        f"{example}"
    )


def parse_interval(
    text: str | None, *, overflow: OverflowPolicy = "wrap"
) -> Interval | None:
    """Parse interval text, returning None if it is not valid.

    Example:
        >>> parse_interval("interval 1 years 2 months")
        Interval(months=14, microseconds=0)
        >>> parse_interval("interval") is None
        True
    """
    return Interval.parse(text, overflow=overflow)


def format_interval(interval: Interval) -> str:
    """Return the canonical text form of an interval."""
    return interval.to_canonical_string()
