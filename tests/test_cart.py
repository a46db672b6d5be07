"""Sepet satırları, toplamlar ve gruplama."""

import pytest

from engine.cart import Cart, items_total
from models.cart import OrderType


@pytest.fixture
def cart():
    return Cart()


def test_each_add_is_a_separate_line(cart, product_factory):
    product = product_factory(price=5.0)
    cart.add(product, OrderType.GIFT)
    cart.add(product, OrderType.GIFT)

    assert len(cart) == 2
    assert cart.count() == 2
    assert cart.total() == pytest.approx(10.0)
    assert cart.item_ids() == [product.id, product.id]


def test_remove_drops_first_match_only(cart, product_factory):
    product = product_factory("x")
    cart.add(product, OrderType.GIFT)
    cart.add(product, OrderType.PURCHASE)

    cart.remove("x")

    assert len(cart) == 1
    assert cart.items[0].order_type == OrderType.PURCHASE


def test_remove_unknown_id_is_noop(cart, product_factory):
    cart.add(product_factory("x"), OrderType.GIFT)
    cart.remove("missing")
    assert len(cart) == 1


def test_partition_keeps_order(cart, product_factory):
    cart.add(product_factory("a"), OrderType.GIFT)
    cart.add(product_factory("b"), OrderType.PURCHASE)
    cart.add(product_factory("c"), OrderType.GIFT)

    gifts, purchases = cart.partition()

    assert [i.id for i in gifts] == ["a", "c"]
    assert [i.id for i in purchases] == ["b"]


def test_items_returns_copy(cart, product_factory):
    cart.add(product_factory("a"), OrderType.GIFT)
    cart.items.clear()
    assert not cart.is_empty()


def test_clear_and_totals(cart, product_factory):
    cart.add(product_factory("a", price=2.5), OrderType.GIFT)
    cart.add(product_factory("b", price=7.5), OrderType.PURCHASE)
    assert items_total(cart.items) == pytest.approx(10.0)

    cart.clear()

    assert cart.is_empty()
    assert cart.total() == 0
    assert cart.snapshot() == ()


def test_order_type_accepts_raw_value(cart, product_factory):
    item = cart.add(product_factory("a"), "gift")
    assert item.order_type is OrderType.GIFT


def test_add_then_remove_all_empties_cart(cart, product_factory):
    products = [product_factory(str(n), price=n + 1.0) for n in range(5)]
    for n, product in enumerate(products):
        cart.add(product, OrderType.GIFT if n % 2 else OrderType.PURCHASE)
    assert items_total(cart.partition()[0]) + items_total(cart.partition()[1]) == pytest.approx(cart.total())

    for product in products:
        cart.remove(product.id)

    gifts, purchases = cart.partition()
    assert cart.total() == 0
    assert gifts == [] and purchases == []


def test_remove_at_drops_that_line(cart, product_factory):
    product = product_factory("x")
    cart.add(product, OrderType.GIFT)
    cart.add(product, OrderType.PURCHASE)
    cart.add(product_factory("y"), OrderType.GIFT)

    gifts, purchases = cart.indexed_partition()
    assert [n for n, _ in gifts] == [0, 2]
    assert [n for n, _ in purchases] == [1]

    cart.remove_at(1)
    cart.remove_at(99)

    assert [(i.id, i.order_type) for i in cart.items] == [("x", OrderType.GIFT), ("y", OrderType.GIFT)]
