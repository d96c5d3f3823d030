"""Utility constants for calspan.

Time unit constants represent durations in microseconds.
These define both the parse-time conversion and the format-time decomposition.
"""

# Time unit constants (all values in microseconds)
MICROS_PER_MILLI = 1000
MICROS_PER_SECOND = MICROS_PER_MILLI * 1000
MICROS_PER_MINUTE = MICROS_PER_SECOND * 60
MICROS_PER_HOUR = MICROS_PER_MINUTE * 60
MICROS_PER_DAY = MICROS_PER_HOUR * 24
MICROS_PER_WEEK = MICROS_PER_DAY * 7

MONTHS_PER_YEAR = 12

# Signed field widths
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def wrap(value: int, bits: int) -> int:
    """Narrow an integer to a signed two's-complement field of ``bits`` width."""
    mask = (1 << bits) - 1
    value &= mask
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Divide toward zero; the remainder takes the sign of ``value``."""
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor
