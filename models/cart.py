"""
Sepet veri modeli - her satır bir ürün anlık görüntüsü + sipariş niyetidir.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from models.product import Product


class OrderType(str, Enum):
    PURCHASE = "purchase"   # mevcut satılabilir stoktan satın alma
    GIFT = "gift"           # mağaza sahibine hediye, stoğu artırır


@dataclass
class CartItem:
    """Sepetteki tek bir satır."""
    product: Product
    order_type: OrderType
    quantity: int = 1

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def price(self) -> float:
        return self.product.price

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity
