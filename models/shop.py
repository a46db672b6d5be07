"""
Mağaza ayarları, kullanıcı profilleri ve mesajlar.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.settings import INITIAL_SETTINGS, OWNER_ROLE


class Role(str, Enum):
    DAUGHTER = "Daughter"
    MOTHER = "Mother"
    BOARD_MEMBER = "Board Member"
    FAMILY_MEMBER = "Family Member"
    SPONSOR = "Sponsor"


@dataclass
class ShippingAddress:
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""


@dataclass
class UserProfile:
    """Simüle edilen kullanıcı - kimlik doğrulaması yok, sadece rol."""
    id: str
    name: str
    role: Role
    handle: str = ""
    bio: str = ""
    avatar_url: str = ""
    shipping_address: Optional[ShippingAddress] = None

    @property
    def is_owner(self) -> bool:
        return self.role.value == OWNER_ROLE


@dataclass
class ShopSettings:
    """Tekil global mağaza ayarı (son yazan kazanır)."""
    store_name: str = INITIAL_SETTINGS["store_name"]
    tagline: str = INITIAL_SETTINGS["tagline"]
    hero_headline: str = INITIAL_SETTINGS["hero_headline"]
    hero_subtext: str = INITIAL_SETTINGS["hero_subtext"]
    primary_color: str = INITIAL_SETTINGS["primary_color"]
    secondary_color: str = INITIAL_SETTINGS["secondary_color"]
    background_color: str = INITIAL_SETTINGS["background_color"]
    font_heading: str = INITIAL_SETTINGS["font_heading"]
    font_body: str = INITIAL_SETTINGS["font_body"]
    amazon_affiliate_tag: Optional[str] = None


@dataclass
class Message:
    """Doğrudan mesaj. Düzenleme yok; sadece ekleme/silme."""
    id: str
    sender_id: str
    recipient_id: str
    text: str
    timestamp: int = 0        # epoch milisaniye, sıralama anahtarı


@dataclass
class ContentPrompt:
    """AI trend taramasından gelen içerik görevi."""
    title: str
    description: str
    platform: str = "TikTok"
    difficulty: str = "Easy"
    xp_reward: int = 100
