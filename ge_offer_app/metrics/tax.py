"""Grand Exchange tax calculation"""

import math

from ..config.defaults import TaxParams


def calculate_ge_tax(price: float, params: TaxParams = TaxParams()) -> int:
    """
    Calculate the tax deducted from the proceeds of a sale

    tax = min(floor(price * rate), cap)

    Args:
        price: Sale price per item
        params: Tax rate and cap

    Returns:
        Tax in whole coins (0 for non-positive prices)
    """
    if price <= 0:
        return 0

    return min(math.floor(price * params.rate), params.cap)
