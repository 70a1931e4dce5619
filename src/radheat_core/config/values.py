# src/radheat_core/config/values.py
"""
Interprets frequency values as they appear on the command line, in option files
and in frequency files.
"""
import logging
import math
import re
from typing import Any

import pint

from ..units import ANGULAR_FREQUENCY_DIMENSIONALITY, Quantity, ureg

logger = logging.getLogger(__name__)

# A trailing 'i' after a digit or a dot is read as the imaginary unit ('2+0.5i').
_IMAGINARY_I_SUFFIX = re.compile(r"(?<=[0-9.])[iI]$")
# Whitespace is only allowed around the '+'/'-' joining real and imaginary parts ('2 + 0.5j').
_BINARY_SIGN = re.compile(r"(?<=[0-9.])\s*([+-])\s*(?=[0-9.])")


def parse_complex_literal(token: str) -> complex:
    """
    Parses a real or complex literal such as '3', '1.5e14', '2+0.5j' or '2 + 0.5i'.

    Raises:
        ValueError: if the token is not a single numeric literal.
    """
    text = _BINARY_SIGN.sub(r"\1", token.strip())
    if not text:
        raise ValueError("Empty frequency value.")
    if re.search(r"\s", text):
        raise ValueError(f"'{token.strip()}' holds more than one value.")
    text = _IMAGINARY_I_SUFFIX.sub("j", text)
    return complex(text)


def _angular_frequency_from_quantity(value: str) -> float:
    try:
        qty = ureg.Quantity(value)
    except (pint.errors.PintError, AttributeError, TypeError, ValueError) as e:
        raise ValueError(f"Cannot parse '{value}' as a quantity: {e}") from e
    if not isinstance(qty, Quantity) or qty.unitless:
        raise ValueError(f"'{value}' is neither a number nor an angular frequency.")
    if qty.dimensionality != ANGULAR_FREQUENCY_DIMENSIONALITY:
        raise ValueError(
            f"Value '{value}' has dimensionality '{qty.dimensionality}', "
            "which is not compatible with 'rad/s'."
        )
    if "radian" in str(qty.units):
        return float(qty.to("rad/s").magnitude)
    # Cycle frequencies (Hz, 1/s) carry no radian unit.
    omega = 2.0 * math.pi * float(qty.to("Hz").magnitude)
    logger.debug(f"Converted cycle frequency '{value}' to angular frequency {omega:g} rad/s.")
    return omega


def parse_frequency_value(value: Any) -> complex:
    """
    Converts one frequency value to a Python complex number in rad/s.

    Numbers are used as given. Strings are read as numeric literals first and,
    failing that, as Pint quantities. Quantities in radians per time ('3e14 rad/s')
    are angular frequencies; other inverse-time units ('1 THz', '5 1/s') are cycle
    frequencies and are multiplied by 2*pi.

    Raises:
        TypeError: for booleans and non-numeric, non-string values.
        ValueError: for strings that are neither literals nor frequencies.
    """
    if isinstance(value, bool):
        raise TypeError(f"Boolean '{value}' is not a frequency.")
    if isinstance(value, (int, float, complex)):
        return complex(value)
    if not isinstance(value, str):
        raise TypeError(f"Unsupported frequency value of type '{type(value).__name__}'.")
    try:
        return parse_complex_literal(value)
    except ValueError:
        pass
    return complex(_angular_frequency_from_quantity(value))
