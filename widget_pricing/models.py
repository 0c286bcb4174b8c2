from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from .errors import InvalidProduct

Money = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Money) -> Decimal:
    """Coerce ``value`` to Decimal. Floats go through ``str`` so 32.95 stays 32.95."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Money) -> Decimal:
    return to_money(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_cents(value: Money) -> int:
    return round_half_up(to_money(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


@dataclass(frozen=True)
class Product:
    code: str
    name: str
    price: Decimal

    def __post_init__(self):
        price = to_money(self.price)
        if price < 0:
            raise InvalidProduct(self.code, f"Product {self.code} has a negative price")
        # frozen: bypass __setattr__ to store the normalised price
        object.__setattr__(self, "price", price)

    def to_dict(self):
        return {"code": self.code, "name": self.name, "price": str(round_money(self.price))}
