import logging
from decimal import Decimal
from typing import Dict, Mapping, Protocol, Sequence

from .models import from_cents, round_half_up, to_cents

logger = logging.getLogger("widget_pricing.offers")


class Offer(Protocol):
    """Per-product total transform.

    ``apply`` receives the running per-product totals and the raw item codes
    and returns a new mapping. Implementations must not mutate their input.
    """

    def apply(self, product_totals: Mapping[str, Decimal], items: Sequence[str]) -> Dict[str, Decimal]:
        ...


def count_product(items: Sequence[str], code: str) -> int:
    return sum(1 for item in items if item == code)


class BuyOneGetOneHalfPrice:
    """Every second unit of ``product_code`` is half price.

    Arithmetic is done in integer cents: the current line total is divided
    evenly over the units (so earlier offers are respected), each discounted
    unit knocks off half of that unit price.
    """

    def __init__(self, product_code: str):
        self.product_code = product_code

    def __repr__(self):
        return f"BuyOneGetOneHalfPrice({self.product_code!r})"

    def apply(self, product_totals: Mapping[str, Decimal], items: Sequence[str]) -> Dict[str, Decimal]:
        totals = dict(product_totals)
        count = count_product(items, self.product_code)
        if count < 2 or self.product_code not in totals:
            return totals

        discounted_units = count // 2
        unit_cents = round_half_up(Decimal(to_cents(totals[self.product_code])) / count)
        discount_cents = round_half_up(Decimal(unit_cents * discounted_units) / 2)
        discount = from_cents(discount_cents)

        totals[self.product_code] = totals[self.product_code] - discount
        logger.debug(
            "bogo-half %s: count=%s discounted_units=%s discount=%s",
            self.product_code, count, discounted_units, discount,
        )
        return totals
