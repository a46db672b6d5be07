"""
Sepet toplayıcı. Her ekleme ayrı bir satırdır; aynı ürün+tip birleştirilmez.
Tüm işlemler senkron ve hata üretmez.
"""
from __future__ import annotations

from models.cart import CartItem, OrderType
from models.product import Product


class Cart:
    def __init__(self):
        self._items: list[CartItem] = []

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    def add(self, product: Product, order_type: OrderType) -> CartItem:
        # Fiyat doğrulaması yok - admin formunun sorumluluğu
        item = CartItem(product=product, order_type=OrderType(order_type), quantity=1)
        self._items.append(item)
        return item

    def remove(self, item_id: str) -> None:
        """İlk eşleşen satırı siler, yoksa bir şey yapmaz."""
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[idx]
                return

    def remove_at(self, index: int) -> None:
        """Belirli satırı (sıra numarasıyla) siler; geçersiz indeks yok sayılır."""
        if 0 <= index < len(self._items):
            del self._items[index]

    def total(self) -> float:
        return sum(item.line_total for item in self._items)

    def partition(self) -> tuple[list[CartItem], list[CartItem]]:
        """(hediye, satın alma) gruplarını sırayı koruyarak döner."""
        gifts, purchases = self.indexed_partition()
        return [i for _, i in gifts], [i for _, i in purchases]

    def indexed_partition(self) -> tuple[list[tuple[int, CartItem]], list[tuple[int, CartItem]]]:
        """partition() ile aynı, satırın sepetteki sırasıyla birlikte."""
        gifts = [(n, i) for n, i in enumerate(self._items) if i.order_type == OrderType.GIFT]
        purchases = [(n, i) for n, i in enumerate(self._items) if i.order_type == OrderType.PURCHASE]
        return gifts, purchases

    def item_ids(self) -> list[str]:
        return [item.id for item in self._items]

    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> tuple[tuple[str, int, OrderType], ...]:
        return tuple((i.id, i.quantity, i.order_type) for i in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))


def items_total(items: list[CartItem]) -> float:
    return sum(item.line_total for item in items)
