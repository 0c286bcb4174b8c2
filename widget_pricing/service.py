import json
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

from .basket import Basket
from .bundles import BundleManager, BundleQuote
from .models import round_money


@dataclass
class Receipt:
    items: List[str]
    subtotal: Decimal
    delivery: Decimal
    total: Decimal
    meta: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "items": list(self.items),
            "subtotal": str(round_money(self.subtotal)),
            "delivery": str(round_money(self.delivery)),
            "total": str(round_money(self.total)),
            "meta": self.meta,
        }


def add_items(basket: Basket, codes: Iterable[str]) -> Basket:
    basket.add_many(codes)
    return basket


def checkout(basket: Basket) -> Receipt:
    subtotal = basket.subtotal()
    delivery = basket.delivery_rule.calculate(subtotal)
    receipt = Receipt(
        items=basket.get_items(),
        subtotal=subtotal,
        delivery=delivery,
        total=round_money(subtotal + delivery),
    )
    receipt.meta["ts"] = str(int(time.time()))
    return receipt


def quote_bundles(manager: BundleManager, basket: Basket) -> BundleQuote:
    return manager.calculate_with_bundles(basket.get_items(), basket.catalogue)


def print_receipt(receipt: Receipt) -> str:
    text = json.dumps(receipt.to_dict(), ensure_ascii=False)
    print(text)
    return text
