import logging
import numbers
from fractions import Fraction
from typing import Any

logger = logging.getLogger(__name__)

NEGATIVE_REFS = {"S", "W"}
POSITIVE_REFS = {"N", "E"}


def rational(value: Any) -> Fraction:
    """
    Normalises an EXIF rational into a Fraction.

    Accepts piexif's ``(numerator, denominator)`` pairs, ints, Fractions,
    Pillow's IFDRational and floats. A zero denominator is how EXIF writers
    mark an unset component, so it reads as 0.
    """
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise TypeError(f"Expected a (numerator, denominator) pair, got {value!r}")
        num, den = value
    elif isinstance(value, numbers.Rational):
        num, den = value.numerator, value.denominator
    elif isinstance(value, float):
        return Fraction(repr(value))
    else:
        raise TypeError(f"Not a rational value: {value!r}")

    if den == 0:
        return Fraction(0)
    return Fraction(int(num), int(den))


def sexagesimal_to_decimal(degrees: Any, minutes: Any, seconds: Any, ref: str) -> Fraction:
    """
    Converts a (degrees, minutes, seconds) angle to signed decimal degrees.

    N and E are the positive directions. "S" and "W" negate the result; any
    other reference letter is left positive.

    Args:
        degrees, minutes, seconds: Rational components, see ``rational``.
        ref: Hemisphere reference letter.

    Returns:
        The exact decimal value as a new Fraction.
    """
    decimal = rational(degrees) + rational(minutes) / 60 + rational(seconds) / 3600

    letter = (ref or "").strip().upper()
    if letter in NEGATIVE_REFS:
        return -decimal
    if letter not in POSITIVE_REFS:
        logger.warning(f"Unrecognised hemisphere reference {ref!r}, treating as positive")
    return decimal


def format_decimal(value: Fraction, places: int = 6) -> str:
    """Fixed-point string with ``places`` digits, halves rounded away from zero."""
    value = Fraction(value)
    scale = 10**places
    quotient, remainder = divmod(abs(value.numerator) * scale, value.denominator)
    if 2 * remainder >= value.denominator:
        quotient += 1

    sign = "-" if value < 0 else ""
    whole, frac = divmod(quotient, scale)
    if places == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{frac:0{places}d}"
