import logging
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Mapping

from .errors import ProductNotFound
from .models import Product

logger = logging.getLogger("widget_pricing.catalogue")


class ProductCatalogue:
    """Read-only code -> Product lookup, built once at construction."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: Dict[str, Product] = {}
        for product in products:
            # last definition of a code wins
            self._products[product.code] = product
        logger.debug("catalogue built with %s products", len(self._products))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, object]]) -> "ProductCatalogue":
        return cls(
            Product(code=code, name=str(entry.get("name", code)), price=entry["price"])
            for code, entry in data.items()
        )

    def has_product(self, code: str) -> bool:
        return code in self._products

    def get_product(self, code: str) -> Product:
        try:
            return self._products[code]
        except KeyError:
            raise ProductNotFound(code) from None

    def price_of(self, code: str) -> Decimal:
        return self.get_product(code).price

    def codes(self) -> List[str]:
        return list(self._products)

    def __contains__(self, code: object) -> bool:
        return code in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)
