"""Kubernetes resource quantity conversions."""

from decimal import Decimal, ROUND_CEILING, ROUND_DOWN
from typing import Optional, Union

from kubernetes.utils.quantity import parse_quantity

QuantityT = Union[str, int, float, Decimal]

_MILLI = Decimal(1000)


def _parse(quantity: Optional[QuantityT]) -> Decimal:
    if quantity is None or quantity == "":
        return Decimal(0)
    return parse_quantity(quantity)


def cpu_milli(quantity: Optional[QuantityT]) -> int:
    """Convert a CPU quantity to thousandths of a core.

    Fractions of a millicore round up, so "0.0001" is reported as 1.

    Args:
        quantity: Quantity string (e.g., "500m", "2", "0.25")

    Returns:
        CPU in millicores, 0 when the quantity is unset

    Raises:
        ValueError: If the quantity string is invalid
    """
    value = _parse(quantity) * _MILLI
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def memory_bytes(quantity: Optional[QuantityT]) -> int:
    """Convert a memory quantity to bytes.

    Args:
        quantity: Quantity string (e.g., "256Mi", "1G", "1048576")

    Returns:
        Memory in bytes, 0 when the quantity is unset

    Raises:
        ValueError: If the quantity string is invalid
    """
    return int(_parse(quantity).to_integral_value(rounding=ROUND_DOWN))
