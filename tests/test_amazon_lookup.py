"""ASIN sayfası ayrıştırma."""

import requests

from scraper import amazon_lookup
from scraper.amazon_lookup import is_valid_asin, lookup_asin, parse_product_page

PRODUCT_HTML = """
<html><body>
  <span id="productTitle">  Mini Claw Clip Pack (12 pcs)  </span>
  <span class="a-price"><span class="a-offscreen">$1,012.99</span></span>
  <img id="landingImage" src="https://img/small.jpg" data-old-hires="https://img/large.jpg">
</body></html>
"""

SPLIT_PRICE_HTML = """
<html><body>
  <span id="productTitle">Satin Pillowcase</span>
  <span class="a-price-whole">19.</span><span class="a-price-fraction">99</span>
  <img id="imgBlkFront" src="https://img/front.jpg">
</body></html>
"""


def test_parse_product_page():
    listing = parse_product_page(PRODUCT_HTML, "B08KWN3ZK7")

    assert listing.title == "Mini Claw Clip Pack (12 pcs)"
    assert listing.price == 1012.99
    assert listing.image_url == "https://img/large.jpg"
    assert listing.url == "https://www.amazon.com/dp/B08KWN3ZK7"


def test_parse_split_price_and_fallback_image():
    listing = parse_product_page(SPLIT_PRICE_HTML, "B07NQ2GLQ4", domain="co.uk")

    assert listing.price == 19.99
    assert listing.image_url == "https://img/front.jpg"
    assert listing.url == "https://www.amazon.co.uk/dp/B07NQ2GLQ4"


def test_parse_page_without_title():
    assert parse_product_page("<html><title>Robot Check</title></html>", "B07NQ2GLQ4") is None


def test_asin_validation():
    assert is_valid_asin("b07nq2glq4")
    assert not is_valid_asin("B07")
    assert not is_valid_asin("")


def test_lookup_rejects_invalid_asin_without_request(monkeypatch):
    def fail():
        raise AssertionError("no request expected")

    monkeypatch.setattr(amazon_lookup, "_get_session", fail)
    assert lookup_asin("nope") is None


class FakeSession:
    def __init__(self, status_code=200, text="", error=None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self


def test_lookup_fetches_and_parses(monkeypatch):
    session = FakeSession(text=PRODUCT_HTML)
    monkeypatch.setattr(amazon_lookup, "_get_session", lambda: session)

    listing = lookup_asin(" b08kwn3zk7 ")

    assert listing.asin == "B08KWN3ZK7"
    assert session.urls == ["https://www.amazon.com/dp/B08KWN3ZK7"]


def test_lookup_handles_blocked_and_network_errors(monkeypatch):
    monkeypatch.setattr(amazon_lookup, "_get_session", lambda: FakeSession(status_code=503))
    assert lookup_asin("B08KWN3ZK7") is None

    monkeypatch.setattr(
        amazon_lookup, "_get_session",
        lambda: FakeSession(error=requests.ConnectionError("reset")),
    )
    assert lookup_asin("B08KWN3ZK7") is None
