from decimal import Decimal

import pytest

from common.factories import make_basket
from widget_pricing.basket import Basket
from widget_pricing.errors import InvalidProduct
from widget_pricing.offers import BuyOneGetOneHalfPrice


class FixedLinePrice:
    def __init__(self, code, amount):
        self.code = code
        self.amount = Decimal(amount)

    def apply(self, product_totals, items):
        totals = dict(product_totals)
        if self.code in totals:
            totals[self.code] = self.amount
        return totals


@pytest.mark.unit
def test_add_keeps_order_and_duplicates():
    basket = make_basket(["R01", "B01", "R01"])
    assert basket.get_items() == ["R01", "B01", "R01"]
    assert len(basket) == 3


@pytest.mark.unit
def test_add_unknown_product_raises_and_leaves_items_alone():
    basket = make_basket(["R01"])
    with pytest.raises(InvalidProduct) as exc:
        basket.add("X99")
    assert exc.value.code == "X99"
    assert basket.get_items() == ["R01"]


@pytest.mark.unit
def test_add_many_is_all_or_nothing():
    basket = make_basket()
    with pytest.raises(InvalidProduct):
        basket.add_many(["R01", "G01", "NOPE"])
    assert basket.get_items() == []
    basket.add_many(["R01", "G01"])
    assert basket.get_items() == ["R01", "G01"]


@pytest.mark.unit
def test_get_items_returns_a_copy():
    basket = make_basket(["B01"])
    basket.get_items().append("R01")
    assert basket.get_items() == ["B01"]


@pytest.mark.unit
def test_product_totals_group_by_code():
    basket = make_basket(["B01", "R01", "B01"])
    assert basket.product_totals() == {"B01": Decimal("15.90"), "R01": Decimal("32.95")}


@pytest.mark.unit
@pytest.mark.parametrize(
    "items,expect",
    [
        (["B01"], "12.90"),
        (["R01", "G01"], "60.85"),
        (["R01", "R01", "R01"], "98.85"),
    ],
    ids=["under-50", "50-to-90", "free-delivery"],
)
def test_total_without_offers(items, expect):
    basket = make_basket(items, offers=[])
    assert basket.total() == Decimal(expect)
    assert basket.total() == basket.subtotal() + basket.delivery_cost()


@pytest.mark.unit
def test_empty_basket_pays_lowest_tier_delivery():
    assert make_basket().total() == Decimal("4.95")


@pytest.mark.unit
def test_total_is_repeatable():
    basket = make_basket(["R01", "R01"])
    assert basket.total() == basket.total() == Decimal("54.37")


@pytest.mark.unit
def test_offers_applied_in_registration_order(catalogue, delivery_rule):
    first_fix = Basket(catalogue, delivery_rule, [FixedLinePrice("R01", "60.00"), BuyOneGetOneHalfPrice("R01")])
    first_bogo = Basket(catalogue, delivery_rule, [BuyOneGetOneHalfPrice("R01"), FixedLinePrice("R01", "60.00")])
    for b in (first_fix, first_bogo):
        b.add_many(["R01", "R01"])

    assert first_fix.subtotal() == Decimal("45.00")
    assert first_bogo.subtotal() == Decimal("60.00")


@pytest.mark.unit
def test_subtotal_logging(log_capture):
    make_basket(["B01"]).total()
    assert any("subtotal" in r.message for r in log_capture.records)


@pytest.mark.unit
def test_delivery_cost_does_not_log_subtotal_again(log_capture):
    basket = make_basket(["R01", "G01"])
    basket.subtotal()
    assert basket.delivery_cost() == Decimal("2.95")
    assert sum("subtotal=" in r.message for r in log_capture.records) == 1
