import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from .catalogue import ProductCatalogue
from .delivery import DeliveryRule
from .errors import InvalidProduct
from .models import ZERO, round_money
from .offers import Offer

logger = logging.getLogger("widget_pricing.basket")


class Basket:
    """Items added for one checkout, priced through offers and delivery."""

    def __init__(self, catalogue: ProductCatalogue, delivery_rule: DeliveryRule, offers: Sequence[Offer] = ()):
        self.catalogue = catalogue
        self.delivery_rule = delivery_rule
        self.offers = tuple(offers)
        self._items: List[str] = []

    def add(self, code: str) -> None:
        if not self.catalogue.has_product(code):
            raise InvalidProduct(code)
        self._items.append(code)

    def add_many(self, codes: Iterable[str]) -> None:
        codes = list(codes)
        for code in codes:
            if not self.catalogue.has_product(code):
                raise InvalidProduct(code)
        self._items.extend(codes)

    def get_items(self) -> List[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def product_totals(self) -> Dict[str, Decimal]:
        totals: Dict[str, Decimal] = {}
        for code in self._items:
            totals[code] = totals.get(code, ZERO) + self.catalogue.price_of(code)
        return totals

    def _discounted_subtotal(self) -> Decimal:
        totals = self.product_totals()
        for offer in self.offers:
            totals = offer.apply(totals, self._items)
        return round_money(sum(totals.values(), ZERO))

    def subtotal(self) -> Decimal:
        subtotal = self._discounted_subtotal()
        logger.info("subtotal=%s", subtotal)
        return subtotal

    def delivery_cost(self) -> Decimal:
        return self.delivery_rule.calculate(self._discounted_subtotal())

    def total(self) -> Decimal:
        subtotal = self.subtotal()
        delivery = self.delivery_rule.calculate(subtotal)
        total = round_money(subtotal + delivery)
        logger.debug("total computed: %s (delivery=%s)", total, delivery)
        return total
