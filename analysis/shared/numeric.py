"""
Numeric guards for prices and profit thresholds.
"""

import math


def is_usable_price(price) -> bool:
    """A price is usable when it is a finite, positive number."""
    return (
        isinstance(price, (int, float))
        and not isinstance(price, bool)
        and math.isfinite(price)
        and price > 0
    )


def meets_minimum(value: float, minimum: float) -> bool:
    """`value >= minimum`, counting float round-off at the boundary as equal."""
    return value >= minimum or math.isclose(value, minimum)
