"""Pricing configuration loaded from YAML.

Layout::

    products:
      R01: {name: Red Widget, price: 32.95}
    delivery:
      tiers:
        - {threshold: 90, cost: 0}
        - {threshold: 0, cost: 4.95}
    offers:
      - {type: bogo_half_price, product: R01}
    bundles:
      - {code: BUNDLE01, name: Widget Starter Pack, products: [R01, G01, B01], price: 55.00}

``load_config()`` without a path reads ``WIDGET_PRICING_CONFIG`` and falls
back to the built-in Acme setup when the variable is unset.
"""
import logging
import os
from dataclasses import dataclass, field
from decimal import InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .basket import Basket
from .bundles import BundleManager, ProductBundle
from .catalogue import ProductCatalogue
from .delivery import Tier, TieredDeliveryRule
from .errors import ConfigError
from .offers import BuyOneGetOneHalfPrice, Offer

logger = logging.getLogger("widget_pricing.config")

CONFIG_ENV_VAR = "WIDGET_PRICING_CONFIG"

OFFER_TYPES = {
    "bogo_half_price": BuyOneGetOneHalfPrice,
}

ACME_CONFIG: Dict[str, Any] = {
    "products": {
        "R01": {"name": "Red Widget", "price": "32.95"},
        "G01": {"name": "Green Widget", "price": "24.95"},
        "B01": {"name": "Blue Widget", "price": "7.95"},
    },
    "delivery": {
        "tiers": [
            {"threshold": "90.00", "cost": "0.00"},
            {"threshold": "50.00", "cost": "2.95"},
            {"threshold": "0.00", "cost": "4.95"},
        ],
    },
    "offers": [{"type": "bogo_half_price", "product": "R01"}],
    "bundles": [
        {"code": "BUNDLE01", "name": "Widget Starter Pack", "products": ["R01", "G01", "B01"], "price": "55.00"},
        {"code": "BUNDLE02", "name": "Red Widget Pair", "products": ["R01", "R01"], "price": "60.00"},
    ],
}


@dataclass
class PricingConfig:
    catalogue: ProductCatalogue
    delivery_rule: TieredDeliveryRule
    offers: Tuple[Offer, ...] = ()
    bundles: BundleManager = field(default_factory=BundleManager)
    source: str = "builtin"

    def new_basket(self) -> Basket:
        return Basket(self.catalogue, self.delivery_rule, self.offers)


def _section(doc: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = doc.get(key, default)
    if not isinstance(value, kind):
        raise ConfigError(f"'{key}' must be a {kind.__name__}")
    return value


def _build_offer(entry: Mapping[str, Any]) -> Offer:
    if not isinstance(entry, Mapping):
        raise ConfigError(f"offer entry must be a mapping, got {entry!r}")
    offer_type = entry.get("type")
    if not isinstance(offer_type, str) or offer_type not in OFFER_TYPES:
        raise ConfigError(f"unknown offer type: {offer_type!r}")
    if "product" not in entry:
        raise ConfigError(f"offer {offer_type} needs a 'product'")
    return OFFER_TYPES[offer_type](str(entry["product"]))


def build_config(doc: Mapping[str, Any], source: str = "builtin") -> PricingConfig:
    if not isinstance(doc, Mapping):
        raise ConfigError("configuration root must be a mapping")

    products = _section(doc, "products", dict, None)
    try:
        catalogue = ProductCatalogue.from_mapping(products)
        tiers: List[Tier] = [
            Tier(t["threshold"], t["cost"]) for t in _section(doc, "delivery", dict, {}).get("tiers", [])
        ]
        bundles = [
            ProductBundle(b["code"], b.get("name", b["code"]), tuple(b["products"]), b["price"])
            for b in _section(doc, "bundles", list, [])
        ]
    except (KeyError, TypeError, AttributeError, InvalidOperation) as exc:
        raise ConfigError(f"malformed configuration entry: {exc}") from exc

    offers = tuple(_build_offer(o) for o in _section(doc, "offers", list, []))
    config = PricingConfig(
        catalogue=catalogue,
        delivery_rule=TieredDeliveryRule(tiers),
        offers=offers,
        bundles=BundleManager(bundles),
        source=source,
    )
    logger.info(
        "pricing config from %s: %s products, %s offers, %s bundles",
        source, len(catalogue), len(offers), len(config.bundles),
    )
    return config


def load_config(path: Optional[str] = None) -> PricingConfig:
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return build_config(ACME_CONFIG)

    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"cannot read pricing config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    return build_config(doc, source=str(path))
