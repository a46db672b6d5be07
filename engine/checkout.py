"""
Checkout el sıkışması: sepet → aktarım → onay → başarı.

Sepet tek bir Amazon toplu sepet URL'sine dönüştürülür ve yeni sekmede
açılır. Harici ödemenin tamamlandığı doğrulanamaz; onay kullanıcının
beyanıdır. Onaydan sonra stok güncellemesi ve sepetin temizlenmesi
çağıranın (StorefrontSession) işidir.
"""
from __future__ import annotations

import time
import webbrowser
from enum import Enum
from typing import Callable, Iterable, Optional
from urllib.parse import urlencode

from config.settings import AMAZON_CART_URL, CHECKOUT_TRANSFER_DELAY, DEFAULT_AFFILIATE_TAG
from engine.cart import Cart
from models.cart import CartItem
from utils.logger import logger


class CheckoutStage(str, Enum):
    CART = "cart"
    TRANSFERRING = "transferring"
    CONFIRM = "confirm"
    SUCCESS = "success"


class CheckoutError(Exception):
    """Geçersiz aşama geçişi."""


def build_batch_url(items: Iterable[CartItem], affiliate_tag: Optional[str] = None) -> str:
    """
    Amazon toplu sepet URL'si üretir.

    ASIN'i olmayan satırlar URL'ye girmez (sepette görünmeye devam eder).
    İndeksler 1'den başlar ve atlanan satırlarda boşluk bırakmaz.
    """
    params = []
    n = 0
    for item in items:
        asin = (item.product.asin or "").strip()
        if not asin:
            continue
        n += 1
        params.append((f"ASIN.{n}", asin))
        params.append((f"Quantity.{n}", str(item.quantity)))

    params.append(("AssociateTag", affiliate_tag or DEFAULT_AFFILIATE_TAG))
    return f"{AMAZON_CART_URL}?{urlencode(params)}"


class CheckoutFlow:
    """Tek bir sepet örneği için dört aşamalı checkout akışı."""

    def __init__(
        self,
        cart: Cart,
        affiliate_tag: Optional[str] = None,
        transfer_delay: float = CHECKOUT_TRANSFER_DELAY,
    ):
        self.cart = cart
        self.affiliate_tag = affiliate_tag
        self.transfer_delay = transfer_delay
        self.stage = CheckoutStage.CART
        self.batch_url: Optional[str] = None
        self.confirmed_ids: list[str] = []

    def _require(self, expected: CheckoutStage, action: str) -> None:
        if self.stage != expected:
            raise CheckoutError(
                f"'{action}' requires stage {expected.value}, current stage is {self.stage.value}"
            )

    def begin(self) -> None:
        self._require(CheckoutStage.CART, "begin")
        if self.cart.is_empty():
            raise CheckoutError("cannot start checkout with an empty cart")
        self.stage = CheckoutStage.TRANSFERRING

    def transfer(
        self,
        opener: Callable[[str], object] = webbrowser.open_new_tab,
        sleep: Callable[[float], object] = time.sleep,
    ) -> str:
        """
        URL'yi oluşturur, açar ve koşulsuz olarak onay aşamasına geçer.

        Gecikme sadece kullanıcıya "batching" hissi vermek içindir; harici
        sayfanın sonucu beklenmez.
        """
        self._require(CheckoutStage.TRANSFERRING, "transfer")
        sleep(self.transfer_delay)

        self.batch_url = build_batch_url(self.cart.items, self.affiliate_tag)
        logger.info(f"Opening marketplace batch cart with {len(self.cart)} line(s)")
        try:
            opener(self.batch_url)
        except Exception as e:
            # Açılamasa da kullanıcı linki elle açabilir
            logger.error(f"Failed to open marketplace cart: {e}")

        self.stage = CheckoutStage.CONFIRM
        return self.batch_url

    def checkout(
        self,
        opener: Callable[[str], object] = webbrowser.open_new_tab,
        sleep: Callable[[float], object] = time.sleep,
    ) -> str:
        self.begin()
        return self.transfer(opener=opener, sleep=sleep)

    def go_back(self) -> None:
        """Onaydan sepete döner; sepet içeriği korunur."""
        self._require(CheckoutStage.CONFIRM, "go_back")
        self.stage = CheckoutStage.CART

    def confirm(self, on_complete: Optional[Callable[[list[str]], object]] = None) -> list[str]:
        """Kullanıcı beyanı ile satın almayı onaylar - doğrulama yapılmaz."""
        self._require(CheckoutStage.CONFIRM, "confirm")
        ids = self.cart.item_ids()
        self.confirmed_ids = ids
        if on_complete is not None:
            on_complete(ids)
        self.stage = CheckoutStage.SUCCESS
        return ids

    @property
    def is_finished(self) -> bool:
        return self.stage == CheckoutStage.SUCCESS
