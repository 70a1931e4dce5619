# --- src/radheat_core/units.py ---
import pint
import logging

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")

# --- Canonical dimensionality objects for explicit checks ---
ANGULAR_FREQUENCY_DIMENSIONALITY = ureg.parse_expression('rad/s').dimensionality
LENGTH_DIMENSIONALITY = ureg.parse_expression('m').dimensionality
VOLUME_DIMENSIONALITY = ureg.parse_expression('m**3').dimensionality
TEMPERATURE_DIMENSIONALITY = ureg.parse_expression('K').dimensionality

logger.debug("Defined canonical dimensionalities for angular frequency, length, volume and temperature.")


def to_magnitude(value, target_units: str, dimensionality) -> float:
    """
    Converts a plain number or a Pint-parsable string (e.g. '300 K', '1e-21 m**3')
    to a float magnitude in `target_units`. Plain numbers are taken to already be
    in `target_units`.

    Raises:
        ValueError: if the value cannot be parsed or has the wrong dimension.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    try:
        qty = ureg.Quantity(value)
    except (pint.errors.PintError, AttributeError, TypeError, ValueError) as e:
        raise ValueError(f"Cannot parse '{value}' as a quantity: {e}") from e
    if not isinstance(qty, Quantity) or qty.unitless:
        return float(qty.magnitude if isinstance(qty, Quantity) else qty)
    if qty.dimensionality != dimensionality:
        raise ValueError(
            f"Value '{value}' has dimensionality '{qty.dimensionality}', "
            f"which is not compatible with '{target_units}'."
        )
    return float(qty.to(target_units).magnitude)
