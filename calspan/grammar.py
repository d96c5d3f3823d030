"""Text grammar for the canonical interval form.

An interval string is the keyword ``interval`` followed by optional unit
clauses in a fixed order::

    interval 1 year 2 months 3 weeks -4 days 5 hours

Each clause may be left out, but none may repeat or appear out of order.
"""

import re
from dataclasses import dataclass
from functools import cache

KEYWORD = "interval"

# Clause order is significant: the pattern only accepts units in this order
UNITS: tuple[str, ...] = (
    "year",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
    "microsecond",
)


@dataclass(frozen=True)
class Clauses:
    """Signed values captured from a matched interval string.

    Attributes:
        values: Value for every unit in ``UNITS``; absent clauses are 0
        present: Units that actually appeared in the text, in grammar order
        oversized: Units whose digit runs are too long to convert to an int;
            their entry in ``values`` is left at 0
    """

    values: dict[str, int]
    present: tuple[str, ...]
    oversized: tuple[str, ...] = ()

    @property
    def has_clauses(self) -> bool:
        return bool(self.present)


def unit_regex(unit: str) -> str:
    """Return the optional clause regex for one unit, e.g. ``" 3 years"``.

    The whole clause is wrapped in a non-capturing optional group so it can be
    left out. Leading whitespace separates it from the previous token, then an
    optionally negative run of digits is captured under the unit's name, and the
    unit name itself may carry a trailing "s".
    """
    return rf"(?:\s+(?P<{unit}>-?\d+)\s+{unit}s?)?"


@cache
def interval_pattern() -> re.Pattern[str]:
    """Compile the interval grammar once and share it between callers."""
    source = re.escape(KEYWORD) + "".join(unit_regex(unit) for unit in UNITS)
    return re.compile(source, re.ASCII)


def match_clauses(text: str) -> Clauses | None:
    """Match the full text against the grammar.

    Returns:
        Captured clause values, or None if any part of the text is unmatched
    """
    match = interval_pattern().fullmatch(text)
    if match is None:
        return None

    groups = match.groupdict()
    present = tuple(unit for unit in UNITS if groups[unit] is not None)
    values = {unit: 0 for unit in UNITS}
    oversized: list[str] = []
    for unit in present:
        try:
            values[unit] = int(groups[unit])
        except ValueError:
            # digit run beyond the interpreter's int string conversion limit
            oversized.append(unit)
    return Clauses(values=values, present=present, oversized=tuple(oversized))
