"""Number parsing and cost/retail price disambiguation."""

import re
from typing import NamedTuple

from .constants import CURRENCY_SYMBOLS

# Leading decimal number, so "12 pcs" reads as 12
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_NUMBER_NOISE = re.compile(rf"[,\s{re.escape(CURRENCY_SYMBOLS)}]")


class PriceResolution(NamedTuple):
    """Resolved unit cost and optional unit retail for one row."""

    cost: float
    retail: float | None


def parse_leading_float(value: str) -> float | None:
    """Parse the leading number of a string, or None if it has none."""
    match = _LEADING_NUMBER.match(value.strip())
    if not match:
        return None
    return float(match.group(0))


def parse_number(value: str | None) -> float:
    """Parse a vendor number, ignoring currency symbols, commas and whitespace.

    Args:
        value: Raw cell text such as "$1,299.00" or "12 ".

    Returns:
        The parsed number, or 0 when nothing numeric is found.
    """
    if not value:
        return 0.0
    parsed = parse_leading_float(_NUMBER_NOISE.sub("", value))
    return parsed if parsed is not None else 0.0


def resolve_prices(cost_text: str | None, retail_text: str | None) -> PriceResolution:
    """Decide which of a row's two price values is cost and which is retail.

    Vendors are inconsistent about which column they call "price", so when
    both values are positive the smaller one is always the cost.

    Args:
        cost_text: Raw value from the column mapped to unit_cost.
        retail_text: Raw value from the column mapped to unit_retail.

    Returns:
        PriceResolution with cost (0 when unknown) and retail (None when unknown).
    """
    cost = parse_number(cost_text)
    retail = parse_number(retail_text) if retail_text else None

    if cost > 0 and retail is not None and retail > 0:
        if cost > retail:
            return PriceResolution(cost=retail, retail=cost)
        return PriceResolution(cost=cost, retail=retail)

    if cost > 0:
        return PriceResolution(cost=cost, retail=None)

    if retail is not None and retail > 0:
        return PriceResolution(cost=0.0, retail=retail)

    return PriceResolution(cost=0.0, retail=None)
