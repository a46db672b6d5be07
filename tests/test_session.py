"""Oturum: abonelik önbellekleri, sahip yetkileri ve checkout sonrası stok."""

from dataclasses import replace

import pytest

from engine.checkout import CheckoutStage
from engine.session import StorefrontSession
from models.cart import OrderType
from models.shop import Role, ShopSettings
from sync.store import ALL_ENTITIES


def no_sleep(seconds):
    pass


def run_checkout(session):
    opened = []
    session.checkout.checkout(opener=opened.append, sleep=no_sleep)
    session.confirm_checkout()
    return opened


def test_attach_fills_caches(owner_session):
    assert owner_session.initialized
    assert [p.id for p in owner_session.products] == ["p3", "p2", "p1"]
    assert [p.name for p in owner_session.profiles] == ["Maya", "Mom"]
    assert owner_session.settings == ShopSettings()
    assert owner_session.is_owner


def test_switch_user_unknown_profile(owner_session):
    with pytest.raises(KeyError):
        owner_session.switch_user("ghost")
    assert owner_session.current_user.id == "owner"


def test_sponsor_cannot_edit_catalog(sponsor_session, product_factory):
    assert not sponsor_session.is_owner
    with pytest.raises(PermissionError):
        sponsor_session.save_product(product_factory("new"))
    with pytest.raises(PermissionError):
        sponsor_session.delete_product("p1")
    with pytest.raises(PermissionError):
        sponsor_session.attach_review_video("p2", "https://v")
    with pytest.raises(PermissionError):
        sponsor_session.update_settings(ShopSettings(store_name="Hacked"))


def test_owner_review_video_flows_back_through_subscription(owner_session):
    owner_session.attach_review_video("p2", "https://v/2")
    assert owner_session.find_product("p2").video_url == "https://v/2"


def test_owner_marketplace_sync(owner_session):
    owner_session.sync_to_marketplace("p3")
    assert owner_session.find_product("p3").is_marketplace_synced
    assert owner_session.sync_to_marketplace("missing") is None


def test_owner_delete_product(owner_session):
    assert owner_session.delete_product("p1")
    assert owner_session.find_product("p1") is None


def test_add_to_cart_uses_offer_type(sponsor_session):
    assert sponsor_session.add_to_cart("p3").order_type == OrderType.PURCHASE
    assert sponsor_session.add_to_cart("p1").order_type == OrderType.GIFT
    assert sponsor_session.add_to_cart("missing") is None
    assert len(sponsor_session.cart) == 2


def test_confirmed_checkout_adds_one_unit_per_line(sponsor_session):
    sponsor_session.add_to_cart("p1")
    sponsor_session.add_to_cart("p2")

    opened = run_checkout(sponsor_session)

    assert len(opened) == 1
    assert sponsor_session.checkout.stage == CheckoutStage.SUCCESS
    assert sponsor_session.cart.is_empty()
    p1 = sponsor_session.find_product("p1")
    p2 = sponsor_session.find_product("p2")
    assert (p1.stock_count, p1.is_received) == (1, True)
    assert (p2.stock_count, p2.is_received) == (2, True)
    assert sponsor_session.find_product("p3").stock_count == 3


def test_line_quantity_does_not_change_stock_increment(sponsor_session):
    item = sponsor_session.add_to_cart("p1")
    item.quantity = 3

    run_checkout(sponsor_session)

    assert sponsor_session.find_product("p1").stock_count == 1


def test_repeated_lines_each_add_a_unit(sponsor_session):
    sponsor_session.add_to_cart("p1")
    sponsor_session.add_to_cart("p1")

    run_checkout(sponsor_session)

    assert sponsor_session.find_product("p1").stock_count == 2


def test_product_removed_before_confirm_is_skipped(sponsor_session, owner_session):
    sponsor_session.add_to_cart("p1")
    sponsor_session.add_to_cart("p2")
    owner_session.delete_product("p1")

    run_checkout(sponsor_session)

    assert sponsor_session.find_product("p1") is None
    assert sponsor_session.find_product("p2").stock_count == 2
    assert sponsor_session.cart.is_empty()


def test_go_back_keeps_cart_and_stock(sponsor_session):
    sponsor_session.add_to_cart("p1")
    sponsor_session.checkout.checkout(opener=lambda url: None, sleep=no_sleep)
    sponsor_session.checkout.go_back()

    assert len(sponsor_session.cart) == 1
    assert sponsor_session.find_product("p1").stock_count == 0


def test_new_checkout_after_success(sponsor_session):
    sponsor_session.add_to_cart("p1")
    run_checkout(sponsor_session)

    flow = sponsor_session.new_checkout()

    assert flow.stage == CheckoutStage.CART
    assert sponsor_session.checkout is flow


def test_affiliate_tag_follows_settings(owner_session, sponsor_session):
    owner_session.update_settings(ShopSettings(amazon_affiliate_tag="maya-20"))
    sponsor_session.add_to_cart("p3")

    opened = []
    sponsor_session.checkout.checkout(opener=opened.append, sleep=no_sleep)

    assert sponsor_session.settings.amazon_affiliate_tag == "maya-20"
    assert opened[0].endswith("AssociateTag=maya-20")


def test_create_profile_signs_in_new_member(sponsor_session):
    profile = sponsor_session.create_profile("Aunt Jo", Role.FAMILY_MEMBER)

    assert sponsor_session.current_user == profile
    assert profile.handle.startswith("aunt_jo")
    assert not sponsor_session.is_owner
    assert any(p.name == "Aunt Jo" for p in sponsor_session.profiles)


def test_profile_updates_refresh_current_user(owner_session, seeded_store, sponsor):
    owner_session.switch_user("sponsor")
    seeded_store.upsert_profile(replace(sponsor, role=Role.BOARD_MEMBER))
    assert owner_session.current_user.role == Role.BOARD_MEMBER


def test_messaging(sponsor_session, owner_session):
    sponsor_session.send_message("Ordered your toner!", "owner")
    owner_session.send_message("Thank you!", "sponsor")
    assert sponsor_session.send_message("   ", "owner") is None

    thread = owner_session.conversation_with("sponsor")
    assert [m.text for m in thread] == ["Ordered your toner!", "Thank you!"]

    assert owner_session.erase_conversation("sponsor") == 2
    assert sponsor_session.conversation_with("owner") == []


def test_detach_stops_updates(owner_session, seeded_store, product_factory):
    owner_session.detach()
    seeded_store.save_product(product_factory("p9"))
    assert owner_session.find_product("p9") is None
    assert not owner_session.attached


def test_confirm_mixed_quantities_adds_one_unit_each(sponsor_session):
    bulk = sponsor_session.add_to_cart("p1")
    bulk.quantity = 3
    sponsor_session.add_to_cart("p2")

    run_checkout(sponsor_session)

    assert sponsor_session.find_product("p1").stock_count == 1
    assert sponsor_session.find_product("p2").stock_count == 2


def test_live_view_releases_subscriptions(seeded_store):
    baseline = {e: seeded_store.subscriber_count(e) for e in ALL_ENTITIES}
    session = StorefrontSession(seeded_store)

    for _ in range(3):
        with session.live():
            assert [p.id for p in session.products] == ["p3", "p2", "p1"]
            assert seeded_store.subscriber_count("products") == baseline["products"] + 1

    with pytest.raises(RuntimeError):
        with session.live():
            raise RuntimeError("rerun")

    assert {e: seeded_store.subscriber_count(e) for e in ALL_ENTITIES} == baseline


def test_live_view_keeps_existing_attachment(owner_session, seeded_store):
    with owner_session.live():
        pass
    assert owner_session.attached
    assert seeded_store.subscriber_count("products") == 1


def test_adding_after_success_starts_new_checkout(sponsor_session):
    sponsor_session.add_to_cart("p1")
    run_checkout(sponsor_session)
    finished = sponsor_session.checkout

    sponsor_session.add_to_cart("p2")

    assert sponsor_session.checkout is not finished
    assert sponsor_session.checkout.stage == CheckoutStage.CART
    assert sponsor_session.checkout.cart.item_ids() == ["p2"]


def test_remove_cart_line_targets_exact_line(sponsor_session):
    sponsor_session.add_to_cart("p3", OrderType.GIFT)
    sponsor_session.add_to_cart("p3", OrderType.PURCHASE)

    _, purchases = sponsor_session.cart.indexed_partition()
    sponsor_session.remove_cart_line(purchases[0][0])

    assert [i.order_type for i in sponsor_session.cart.items] == [OrderType.GIFT]
