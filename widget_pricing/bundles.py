import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .catalogue import ProductCatalogue
from .errors import InvalidBundleDefinition
from .models import ZERO, Product, round_money, to_money

logger = logging.getLogger("widget_pricing.bundles")

Products = Union[ProductCatalogue, Iterable[Product]]


def _materialize(products: Products) -> Products:
    if isinstance(products, ProductCatalogue):
        return products
    return list(products)


def _price_lookup(products: Products) -> Dict[str, Decimal]:
    if isinstance(products, ProductCatalogue):
        return {p.code: p.price for p in products}
    prices: Dict[str, Decimal] = {}
    for product in products:
        # first product carrying a code is the one that prices it
        prices.setdefault(product.code, product.price)
    return prices


@dataclass(frozen=True)
class ProductBundle:
    """A fixed-price substitute for a multiset of product codes.

    ``product_codes`` may repeat a code, e.g. ("R01", "R01") needs two red
    widgets in the basket.
    """

    code: str
    name: str
    product_codes: Tuple[str, ...]
    bundle_price: Decimal

    def __post_init__(self):
        if isinstance(self.product_codes, str):
            raise InvalidBundleDefinition("Bundle product codes must be a sequence of codes, not a string")
        codes = tuple(self.product_codes)
        if not codes:
            raise InvalidBundleDefinition("Bundle must contain at least one product")
        price = to_money(self.bundle_price)
        if price < 0:
            raise InvalidBundleDefinition("Bundle price cannot be negative")
        object.__setattr__(self, "product_codes", codes)
        object.__setattr__(self, "bundle_price", price)

    def required_counts(self) -> Counter:
        return Counter(self.product_codes)

    def can_apply_to_items(self, items: Sequence[str]) -> bool:
        available = Counter(items)
        return all(available[code] >= needed for code, needed in self.required_counts().items())

    def regular_price(self, products: Products) -> Decimal:
        prices = _price_lookup(products)
        return sum((prices.get(code, ZERO) for code in self.product_codes), ZERO)

    def calculate_savings(self, products: Products) -> Decimal:
        savings = self.regular_price(products) - self.bundle_price
        return max(ZERO, savings)

    def get_max_applications(self, items: Sequence[str]) -> int:
        if not self.can_apply_to_items(items):
            return 0
        available = Counter(items)
        return min(available[code] // needed for code, needed in self.required_counts().items())

    def to_dict(self):
        return {
            "code": self.code,
            "name": self.name,
            "product_codes": list(self.product_codes),
            "bundle_price": str(round_money(self.bundle_price)),
        }


@dataclass
class BundleApplication:
    bundle: Optional[ProductBundle]
    remaining_items: List[str]
    savings: Decimal = ZERO

    @property
    def applied(self) -> bool:
        return self.bundle is not None


@dataclass
class BundleQuote:
    total: Decimal
    bundles_applied: List[ProductBundle] = field(default_factory=list)
    savings: Decimal = ZERO
    remaining_items: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            "total": str(self.total),
            "bundles_applied": [b.code for b in self.bundles_applied],
            "savings": str(self.savings),
            "remaining_items": list(self.remaining_items),
        }


class BundleManager:
    """Registry of bundles plus the greedy bundle resolver.

    Insertion order is the tie-break: among bundles with equal savings the
    one registered first wins.
    """

    def __init__(self, bundles: Iterable[ProductBundle] = ()):
        self._bundles: Dict[str, ProductBundle] = {}
        for bundle in bundles:
            self.add_bundle(bundle)

    def add_bundle(self, bundle: ProductBundle) -> None:
        self._bundles[bundle.code] = bundle

    def get_bundle(self, code: str) -> Optional[ProductBundle]:
        return self._bundles.get(code)

    def has_bundle(self, code: str) -> bool:
        return code in self._bundles

    def remove_bundle(self, code: str) -> bool:
        if code not in self._bundles:
            return False
        del self._bundles[code]
        return True

    def all_bundles(self) -> List[ProductBundle]:
        return list(self._bundles.values())

    def bundle_count(self) -> int:
        return len(self._bundles)

    __len__ = bundle_count

    def find_applicable_bundles(self, items: Sequence[str]) -> List[ProductBundle]:
        return [b for b in self._bundles.values() if b.can_apply_to_items(items)]

    def apply_best_bundle(self, items: Sequence[str], products: Products) -> BundleApplication:
        products = _materialize(products)
        best: Optional[ProductBundle] = None
        max_savings = ZERO
        for bundle in self.find_applicable_bundles(items):
            savings = bundle.calculate_savings(products)
            # strict: ties keep the earlier bundle, zero savings never wins
            if savings > max_savings:
                best, max_savings = bundle, savings

        if best is None:
            return BundleApplication(bundle=None, remaining_items=list(items))

        remaining = list(items)
        for code in best.product_codes:
            remaining.remove(code)
        logger.debug("bundle %s applied, savings=%s", best.code, max_savings)
        return BundleApplication(bundle=best, remaining_items=remaining, savings=max_savings)

    def calculate_with_bundles(self, items: Sequence[str], products: Products) -> BundleQuote:
        products = _materialize(products)
        remaining = list(items)
        applied: List[ProductBundle] = []
        total_savings = ZERO
        bundle_total = ZERO

        while True:
            step = self.apply_best_bundle(remaining, products)
            if not step.applied:
                break
            applied.append(step.bundle)
            bundle_total += step.bundle.bundle_price
            total_savings += step.savings
            remaining = step.remaining_items

        prices = _price_lookup(products)
        individual_total = sum((prices.get(code, ZERO) for code in remaining), ZERO)

        quote = BundleQuote(
            total=round_money(bundle_total + individual_total),
            bundles_applied=applied,
            savings=round_money(total_savings),
            remaining_items=remaining,
        )
        logger.info(
            "bundle quote total=%s bundles=%s savings=%s",
            quote.total, [b.code for b in applied], quote.savings,
        )
        return quote
