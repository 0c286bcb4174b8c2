from dataclasses import dataclass
from typing import Iterable, List, Sequence

from widget_pricing.basket import Basket
from widget_pricing.bundles import BundleManager, ProductBundle
from widget_pricing.catalogue import ProductCatalogue
from widget_pricing.delivery import acme_delivery_rule
from widget_pricing.models import Product
from widget_pricing.offers import BuyOneGetOneHalfPrice


@dataclass(frozen=True)
class Defaults:
    red: str = "32.95"
    green: str = "24.95"
    blue: str = "7.95"


def make_products() -> List[Product]:
    return [
        Product("R01", "Red Widget", Defaults.red),
        Product("G01", "Green Widget", Defaults.green),
        Product("B01", "Blue Widget", Defaults.blue),
    ]


def make_catalogue(products: Iterable[Product] = None) -> ProductCatalogue:
    return ProductCatalogue(make_products() if products is None else products)


def make_basket(items: Sequence[str] = (), offers=None, catalogue: ProductCatalogue = None) -> Basket:
    if offers is None:
        offers = [BuyOneGetOneHalfPrice("R01")]
    b = Basket(catalogue or make_catalogue(), acme_delivery_rule(), offers)
    for code in items:
        b.add(code)
    return b


def starter_pack(price="55.00") -> ProductBundle:
    return ProductBundle("BUNDLE01", "Widget Starter Pack", ("R01", "G01", "B01"), price)


def red_pair(price="60.00") -> ProductBundle:
    return ProductBundle("BUNDLE02", "Red Widget Pair", ("R01", "R01"), price)


def make_manager(*bundles: ProductBundle) -> BundleManager:
    return BundleManager(bundles or (starter_pack(), red_pair()))
