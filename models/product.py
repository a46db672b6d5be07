"""
Ürün veri modeli - mağaza kataloğundaki her ürün bu modele dönüşür.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Platform(str, Enum):
    AMAZON = "Amazon"
    SHEIN = "Shein"


class ProductCategory(str, Enum):
    BEAUTY = "Beauty & Skincare"
    FASHION = "Fashion & Apparel"
    ACCESSORIES = "Accessories"
    HAIR = "Hair Care"
    TECH = "Tech & Gadgets"
    SHEIN = "Shein Finds"


@dataclass
class Product:
    """Platform-bağımsız mağaza ürünü."""
    id: str
    name: str
    price: float
    category: ProductCategory = ProductCategory.FASHION
    description: str = ""
    image_url: str = ""
    additional_images: list[str] = field(default_factory=list)
    affiliate_link: str = ""
    platform: Platform = Platform.AMAZON

    # Maliyet (kar hesabı için)
    cost_price: Optional[float] = None

    # Envanter durumu
    stock_count: int = 0              # demo ünite dahil toplam adet
    video_url: Optional[str] = None   # inceleme videosu
    is_wishlist: bool = True
    is_received: bool = False
    is_marketplace_synced: bool = False

    # Amazon toplu sepet için
    asin: Optional[str] = None

    @property
    def has_review(self) -> bool:
        return bool(self.video_url)

    @property
    def profit_margin(self) -> Optional[float]:
        """Kar marjı (%) - maliyet girilmişse."""
        if self.cost_price is None or self.price == 0:
            return None
        return ((self.price - self.cost_price) / self.price) * 100
