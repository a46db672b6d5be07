"""
Pytest fixtures for storefront tests.

In-memory store, sample catalog and owner/sponsor sessions.
"""

import pytest

from engine.session import StorefrontSession
from models.product import Platform, Product, ProductCategory
from models.shop import Role, UserProfile
from sync.store import MemoryStore


def make_product(pid="p1", stock=0, video=None, price=10.0, cost=None, asin="B000000001", **kwargs):
    return Product(
        id=pid,
        name=kwargs.pop("name", f"Product {pid}"),
        price=price,
        cost_price=cost,
        category=kwargs.pop("category", ProductCategory.BEAUTY),
        platform=kwargs.pop("platform", Platform.AMAZON),
        stock_count=stock,
        video_url=video,
        asin=asin,
        **kwargs,
    )


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def owner():
    return UserProfile(id="owner", name="Maya", role=Role.DAUGHTER)


@pytest.fixture
def sponsor():
    return UserProfile(id="sponsor", name="Mom", role=Role.MOTHER)


@pytest.fixture
def seeded_store(store, owner, sponsor):
    store.upsert_profile(owner)
    store.upsert_profile(sponsor)
    store.save_product(make_product("p1", stock=0))
    store.save_product(make_product("p2", stock=1))
    store.save_product(make_product("p3", stock=3, video="https://v/3", cost=4.0))
    return store


@pytest.fixture
def owner_session(seeded_store):
    session = StorefrontSession(seeded_store)
    session.attach()
    session.switch_user("owner")
    yield session
    session.detach()


@pytest.fixture
def sponsor_session(seeded_store):
    session = StorefrontSession(seeded_store)
    session.attach()
    session.switch_user("sponsor")
    yield session
    session.detach()
