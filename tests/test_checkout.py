"""Checkout aşamaları, toplu sepet URL'si ve onay sonrası stok."""

from urllib.parse import parse_qsl, urlparse

import pytest

from config.settings import AMAZON_CART_URL, DEFAULT_AFFILIATE_TAG
from engine.cart import Cart
from engine.checkout import CheckoutError, CheckoutFlow, CheckoutStage, build_batch_url
from models.cart import OrderType


def no_sleep(seconds):
    pass


@pytest.fixture
def opened():
    return []


@pytest.fixture
def flow(product_factory):
    cart = Cart()
    cart.add(product_factory("a", asin="B0AAAAAAA1"), OrderType.GIFT)
    return CheckoutFlow(cart, affiliate_tag="shop-20", transfer_delay=0)


def test_batch_url_skips_lines_without_asin(product_factory):
    cart = Cart()
    cart.add(product_factory("a", asin="B0AAAAAAA1"), OrderType.GIFT)
    cart.add(product_factory("b", asin=None), OrderType.GIFT)
    cart.add(product_factory("c", asin="B0CCCCCCC3"), OrderType.PURCHASE)

    url = build_batch_url(cart.items, "shop-20")
    parsed = urlparse(url)

    assert url.startswith(AMAZON_CART_URL + "?")
    assert parse_qsl(parsed.query) == [
        ("ASIN.1", "B0AAAAAAA1"),
        ("Quantity.1", "1"),
        ("ASIN.2", "B0CCCCCCC3"),
        ("Quantity.2", "1"),
        ("AssociateTag", "shop-20"),
    ]


def test_batch_url_uses_default_tag(product_factory):
    cart = Cart()
    cart.add(product_factory("a"), OrderType.GIFT)
    assert build_batch_url(cart.items).endswith(f"AssociateTag={DEFAULT_AFFILIATE_TAG}")


def test_happy_path(flow, opened):
    flow.begin()
    assert flow.stage == CheckoutStage.TRANSFERRING

    url = flow.transfer(opener=opened.append, sleep=no_sleep)

    assert flow.stage == CheckoutStage.CONFIRM
    assert opened == [url]
    assert flow.batch_url == url

    ids = flow.confirm()
    assert ids == ["a"]
    assert flow.is_finished


def test_transfer_waits_for_delay(product_factory, opened):
    cart = Cart()
    cart.add(product_factory("a"), OrderType.GIFT)
    flow = CheckoutFlow(cart, transfer_delay=1.5)
    waited = []

    flow.checkout(opener=opened.append, sleep=waited.append)

    assert waited == [1.5]
    assert flow.stage == CheckoutStage.CONFIRM


def test_opener_failure_still_reaches_confirm(flow):
    def broken(url):
        raise RuntimeError("popup blocked")

    url = flow.checkout(opener=broken, sleep=no_sleep)

    assert flow.stage == CheckoutStage.CONFIRM
    assert url.startswith(AMAZON_CART_URL)


def test_empty_cart_cannot_begin():
    flow = CheckoutFlow(Cart())
    with pytest.raises(CheckoutError):
        flow.begin()
    assert flow.stage == CheckoutStage.CART


def test_go_back_keeps_cart(flow, opened):
    flow.checkout(opener=opened.append, sleep=no_sleep)
    flow.go_back()

    assert flow.stage == CheckoutStage.CART
    assert len(flow.cart) == 1


def test_invalid_transitions(flow, opened):
    with pytest.raises(CheckoutError):
        flow.confirm()
    with pytest.raises(CheckoutError):
        flow.go_back()
    with pytest.raises(CheckoutError):
        flow.transfer(opener=opened.append, sleep=no_sleep)
    assert opened == []


def test_confirm_calls_completion_hook(flow, opened):
    received = []
    flow.checkout(opener=opened.append, sleep=no_sleep)
    flow.confirm(on_complete=received.append)
    assert received == [["a"]]
