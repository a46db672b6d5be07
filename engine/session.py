"""
Oturum bağlamı: simüle edilen aktif kullanıcı, abonelikle beslenen
önbellekler, sepet ve checkout akışı.

Global değişken yerine tek bir StorefrontSession nesnesi UI'ya açıkça
geçirilir. Önbellekler her bildirimde tamamen değiştirilir; en son tam
liste her zaman doğrudur.
"""
from __future__ import annotations

import random
from contextlib import contextmanager
from dataclasses import replace
from typing import Optional

from config.settings import AVATAR_URL_TEMPLATE
from engine.cart import Cart
from engine.checkout import CheckoutFlow
from engine.inventory import receive_unit, shopper_offer
from engine.messages import conversation
from models.cart import CartItem, OrderType
from models.product import Product
from models.shop import Message, Role, ShopSettings, UserProfile
from sync.store import Entity, SnapshotStore, Subscription
from utils.logger import logger


class StorefrontSession:
    def __init__(self, store: SnapshotStore):
        self.store = store
        self.current_user: Optional[UserProfile] = None

        self.products: list[Product] = []
        self.settings: ShopSettings = ShopSettings()
        self.messages: list[Message] = []
        self.profiles: list[UserProfile] = []
        self.initialized = False

        self.cart = Cart()
        self.checkout: CheckoutFlow = self.new_checkout()
        self._subscriptions: list[Subscription] = []

    # ── Abonelikler ──────────────────────────────────────

    def apply_products(self, products: list[Product]) -> None:
        self.products = list(products)

    def apply_settings(self, settings: ShopSettings) -> None:
        self.settings = settings
        self.checkout.affiliate_tag = settings.amazon_affiliate_tag

    def apply_messages(self, messages: list[Message]) -> None:
        self.messages = list(messages)

    def apply_profiles(self, profiles: list[UserProfile]) -> None:
        self.profiles = list(profiles)
        self.initialized = True
        # Aktif kullanıcının güncel halini al (ör. rol değişti)
        if self.current_user is not None:
            fresh = self.find_profile(self.current_user.id)
            if fresh is not None:
                self.current_user = fresh

    def attach(self) -> None:
        if self._subscriptions:
            return
        self._subscriptions = [
            self.store.subscribe(Entity.PRODUCTS, self.apply_products),
            self.store.subscribe(Entity.SETTINGS, self.apply_settings),
            self.store.subscribe(Entity.MESSAGES, self.apply_messages),
            self.store.subscribe(Entity.PROFILES, self.apply_profiles),
        ]

    def detach(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions = []

    @property
    def attached(self) -> bool:
        return bool(self._subscriptions)

    @contextmanager
    def live(self):
        """
        Görünüm ömrü boyunca abone kalır. Streamlit her turda bu bloğa
        girer; çıkışta abonelikler paylaşılan depodan kaldırılır.
        """
        already = self.attached
        self.attach()
        try:
            yield self
        finally:
            if not already:
                self.detach()

    # ── Kullanıcı ────────────────────────────────────────

    def find_profile(self, profile_id: str) -> Optional[UserProfile]:
        return next((p for p in self.profiles if p.id == profile_id), None)

    def switch_user(self, profile_id: str) -> UserProfile:
        profile = self.find_profile(profile_id)
        if profile is None:
            raise KeyError(f"Unknown profile: {profile_id}")
        self.current_user = profile
        return profile

    def sign_out(self) -> None:
        self.current_user = None

    @property
    def is_owner(self) -> bool:
        return self.current_user is not None and self.current_user.is_owner

    def other_profiles(self) -> list[UserProfile]:
        if self.current_user is None:
            return list(self.profiles)
        return [p for p in self.profiles if p.id != self.current_user.id]

    def create_profile(self, name: str, role: Role) -> Optional[UserProfile]:
        handle = name.lower().replace(" ", "_") + str(random.randint(0, 99))
        profile = UserProfile(
            id="",
            name=name,
            role=Role(role),
            handle=handle,
            bio=f"Member of the {self.settings.store_name} community.",
            avatar_url=AVATAR_URL_TEMPLATE.format(seed=name),
        )
        saved = self.store.upsert_profile(profile)
        if saved is None:
            return None
        self.current_user = self.find_profile(saved.id) or saved
        return self.current_user

    def _require_owner(self, action: str) -> None:
        if not self.is_owner:
            raise PermissionError(f"Only the store owner can {action}")

    # ── Ürünler (sadece sahip) ───────────────────────────

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def save_product(self, product: Product) -> Optional[Product]:
        self._require_owner("edit products")
        return self.store.save_product(product)

    def delete_product(self, product_id: str) -> bool:
        self._require_owner("delete products")
        return self.store.delete_product(product_id)

    def attach_review_video(self, product_id: str, video_url: str) -> Optional[Product]:
        self._require_owner("upload review videos")
        product = self.find_product(product_id)
        if product is None:
            return None
        return self.store.save_product(replace(product, video_url=video_url))

    def sync_to_marketplace(self, product_id: str) -> Optional[Product]:
        self._require_owner("sync products to the marketplace")
        product = self.find_product(product_id)
        if product is None:
            return None
        return self.store.save_product(replace(product, is_marketplace_synced=True))

    def update_settings(self, settings: ShopSettings) -> bool:
        self._require_owner("change shop settings")
        ok = self.store.update_settings(settings)
        if ok:
            self.apply_settings(settings)
        return ok

    # ── Sepet & Checkout ─────────────────────────────────

    def new_checkout(self) -> CheckoutFlow:
        self.checkout = CheckoutFlow(self.cart, affiliate_tag=self.settings.amazon_affiliate_tag)
        return self.checkout

    def add_to_cart(self, product_id: str, order_type: Optional[OrderType] = None) -> Optional[CartItem]:
        product = self.find_product(product_id)
        if product is None:
            return None
        if self.checkout.is_finished:
            self.new_checkout()
        if order_type is None:
            order_type = shopper_offer(product).order_type
        return self.cart.add(product, order_type)

    def remove_from_cart(self, item_id: str) -> None:
        self.cart.remove(item_id)

    def remove_cart_line(self, index: int) -> None:
        self.cart.remove_at(index)

    def complete_purchase(self, item_ids: list[str]) -> list[Product]:
        """
        Checkout onayı sonrası: her sepet satırı için ürüne +1 stok ve
        "teslim alındı" işareti yazılır, sepet koşulsuz temizlenir.

        Not: satırdaki miktar stok artışına yansımaz (satır başına tam +1).
        Aynı ürünün tekrarlanan satırları ayrı ayrı +1 ekler.
        """
        working = {p.id: p for p in self.products}
        touched: list[str] = []

        for item_id in item_ids:
            product = working.get(item_id)
            if product is None:
                logger.warning(f"Confirmed cart item {item_id} no longer in catalog, skipping")
                continue
            working[item_id] = receive_unit(product)
            if item_id not in touched:
                touched.append(item_id)

        saved = []
        for product_id in touched:
            result = self.store.save_product(working[product_id])
            if result is not None:
                saved.append(result)

        self.cart.clear()
        return saved

    def confirm_checkout(self) -> list[str]:
        return self.checkout.confirm(on_complete=self.complete_purchase)

    # ── Mesajlar ─────────────────────────────────────────

    def send_message(self, text: str, recipient_id: str) -> Optional[Message]:
        if self.current_user is None or not text.strip():
            return None
        return self.store.send_message(self.current_user.id, recipient_id, text)

    def conversation_with(self, other_id: str) -> list[Message]:
        if self.current_user is None:
            return []
        return conversation(self.messages, self.current_user.id, other_id)

    def erase_conversation(self, other_id: str) -> int:
        erased = 0
        for m in self.conversation_with(other_id):
            if self.store.delete_message(m.id):
                erased += 1
        return erased
