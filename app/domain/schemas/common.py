"""
Display precision for API responses.
Money is shown with 4 decimals and quantities with 6, both HALF_UP.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Optional

from pydantic import PlainSerializer

MONETARY_QUANTUM = Decimal("0.0001")
QUANTITY_QUANTUM = Decimal("0.000001")

# Serialized as JSON numbers (IEEE doubles) rather than pydantic's default decimal
# strings. A 4 dp amount keeps every digit only below 1e11 (15 significant digits);
# all arithmetic before the response layer stays Decimal.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def normalize_monetary(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    return value.quantize(MONETARY_QUANTUM, rounding=ROUND_HALF_UP)


def normalize_quantity(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    return value.quantize(QUANTITY_QUANTUM, rounding=ROUND_HALF_UP)
