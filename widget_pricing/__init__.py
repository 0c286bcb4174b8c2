from .basket import Basket
from .bundles import BundleApplication, BundleManager, BundleQuote, ProductBundle
from .catalogue import ProductCatalogue
from .config import PricingConfig, load_config
from .delivery import DeliveryRule, Tier, TieredDeliveryRule, acme_delivery_rule
from .errors import (
    ConfigError,
    InvalidBundleDefinition,
    InvalidDeliveryRule,
    InvalidProduct,
    PricingError,
    ProductNotFound,
)
from .models import Product, round_money, to_money
from .offers import BuyOneGetOneHalfPrice, Offer

__version__ = "0.1.0"
