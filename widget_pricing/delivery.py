import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Protocol, Tuple

from .errors import InvalidDeliveryRule
from .models import Money, to_money

logger = logging.getLogger("widget_pricing.delivery")


class DeliveryRule(Protocol):
    def calculate(self, order_subtotal: Decimal) -> Decimal:
        ...


@dataclass(frozen=True)
class Tier:
    threshold: Decimal
    cost: Decimal

    def __post_init__(self):
        object.__setattr__(self, "threshold", to_money(self.threshold))
        object.__setattr__(self, "cost", to_money(self.cost))
        if self.threshold < 0 or self.cost < 0:
            raise InvalidDeliveryRule(
                f"tier ({self.threshold}, {self.cost}) must not be negative"
            )


class TieredDeliveryRule:
    """Delivery cost banded by order subtotal.

    The tier with the highest threshold not above the subtotal applies.
    Supply a zero-threshold tier to cover every subtotal; otherwise a
    subtotal below every threshold falls back to the lowest tier's cost.
    """

    def __init__(self, tiers: Iterable[Tier]):
        ordered = sorted(tiers, key=lambda t: t.threshold, reverse=True)
        if not ordered:
            raise InvalidDeliveryRule("a delivery rule needs at least one tier")
        self._tiers: Tuple[Tier, ...] = tuple(ordered)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Money, Money]]) -> "TieredDeliveryRule":
        return cls(Tier(threshold, cost) for threshold, cost in pairs)

    @property
    def tiers(self) -> Tuple[Tier, ...]:
        return self._tiers

    def calculate(self, order_subtotal: Money) -> Decimal:
        subtotal = to_money(order_subtotal)
        for tier in self._tiers:
            if subtotal >= tier.threshold:
                logger.debug("delivery tier %s matched subtotal=%s", tier.threshold, subtotal)
                return tier.cost
        fallback = self._tiers[-1]
        logger.debug("no tier matched subtotal=%s, falling back to %s", subtotal, fallback.threshold)
        return fallback.cost


ACME_TIERS = (("90.00", "0.00"), ("50.00", "2.95"), ("0.00", "4.95"))


def acme_delivery_rule() -> TieredDeliveryRule:
    return TieredDeliveryRule.from_pairs(ACME_TIERS)
