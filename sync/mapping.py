"""
Saklama alan adları (camelCase) ↔ bellek içi alan adları (snake_case).

Her varlık için alan eşlemesi açıkça ve eksiksiz yazılır. Saklanan
kayıttaki bilinmeyen anahtarlar yok sayılır, eksik anahtarlar dataclass
varsayılanını alır.
"""
from __future__ import annotations

from dataclasses import asdict, fields
from typing import Any, Optional

from models.product import Platform, Product, ProductCategory
from models.shop import Message, Role, ShippingAddress, ShopSettings, UserProfile
from utils.logger import logger

# model alanı → saklama alanı
PRODUCT_FIELDS = {
    "id": "id",
    "name": "name",
    "price": "price",
    "cost_price": "costPrice",
    "category": "category",
    "description": "description",
    "image_url": "imageUrl",
    "additional_images": "additionalImages",
    "video_url": "videoUrl",
    "affiliate_link": "affiliateLink",
    "platform": "platform",
    "is_wishlist": "isWishlist",
    "is_received": "isReceived",
    "stock_count": "stockCount",
    "is_marketplace_synced": "isMarketplaceSynced",
    "asin": "asin",
}

SETTINGS_FIELDS = {
    "store_name": "storeName",
    "tagline": "tagline",
    "hero_headline": "heroHeadline",
    "hero_subtext": "heroSubtext",
    "primary_color": "primaryColor",
    "secondary_color": "secondaryColor",
    "background_color": "backgroundColor",
    "font_heading": "fontHeading",
    "font_body": "fontBody",
    "amazon_affiliate_tag": "amazonAffiliateTag",
}

MESSAGE_FIELDS = {
    "id": "id",
    "sender_id": "senderId",
    "recipient_id": "recipientId",
    "text": "text",
    "timestamp": "timestamp",
}

PROFILE_FIELDS = {
    "id": "id",
    "name": "name",
    "handle": "handle",
    "bio": "bio",
    "avatar_url": "avatarUrl",
    "role": "role",
    "shipping_address": "shippingAddress",
}

ADDRESS_FIELDS = {
    "street": "street",
    "city": "city",
    "state": "state",
    "zip_code": "zipCode",
    "country": "country",
}


def _check_exhaustive(model, mapping: dict[str, str]) -> None:
    names = {f.name for f in fields(model)}
    missing = names - set(mapping)
    if missing:
        raise RuntimeError(f"{model.__name__} mapping is missing fields: {sorted(missing)}")


for _model, _mapping in (
    (Product, PRODUCT_FIELDS),
    (ShopSettings, SETTINGS_FIELDS),
    (Message, MESSAGE_FIELDS),
    (UserProfile, PROFILE_FIELDS),
    (ShippingAddress, ADDRESS_FIELDS),
):
    _check_exhaustive(_model, _mapping)


def _encode(obj, mapping: dict[str, str]) -> dict[str, Any]:
    data = asdict(obj)
    return {stored: data[attr] for attr, stored in mapping.items()}


def _decode_kwargs(record: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    return {attr: record[stored] for attr, stored in mapping.items() if stored in record}


def _enum_or_default(enum_cls, value, default):
    """Bilinmeyen değer tüm listeyi bozmasın; varsayılan üyeye düşer."""
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(f"Unknown {enum_cls.__name__} value {value!r}, using {default.value!r}")
        return default


# ── Product ───────────────────────────────────────────────

def encode_product(product: Product) -> dict[str, Any]:
    row = _encode(product, PRODUCT_FIELDS)
    row["category"] = product.category.value
    row["platform"] = product.platform.value
    row["additionalImages"] = list(product.additional_images)
    return row


def decode_product(record: dict[str, Any]) -> Product:
    kwargs = _decode_kwargs(record, PRODUCT_FIELDS)
    kwargs["id"] = str(kwargs.get("id", ""))
    kwargs.setdefault("name", "")
    kwargs["price"] = float(kwargs.get("price") or 0)
    if kwargs.get("cost_price") is not None:
        kwargs["cost_price"] = float(kwargs["cost_price"])
    if kwargs.get("stock_count") is None:
        kwargs["stock_count"] = 0
    kwargs["stock_count"] = int(kwargs["stock_count"])
    if "category" in kwargs:
        kwargs["category"] = _enum_or_default(ProductCategory, kwargs["category"], ProductCategory.FASHION)
    if "platform" in kwargs:
        kwargs["platform"] = _enum_or_default(Platform, kwargs["platform"], Platform.AMAZON)
    if kwargs.get("additional_images") is None:
        kwargs.pop("additional_images", None)
    for flag in ("is_wishlist", "is_received", "is_marketplace_synced"):
        if kwargs.get(flag) is None:
            kwargs.pop(flag, None)
    return Product(**kwargs)


# ── ShopSettings ──────────────────────────────────────────

def encode_settings(settings: ShopSettings) -> dict[str, Any]:
    return _encode(settings, SETTINGS_FIELDS)


def decode_settings(record: dict[str, Any]) -> ShopSettings:
    return ShopSettings(**_decode_kwargs(record, SETTINGS_FIELDS))


# ── Message ───────────────────────────────────────────────

def encode_message(message: Message) -> dict[str, Any]:
    return _encode(message, MESSAGE_FIELDS)


def decode_message(record: dict[str, Any]) -> Message:
    kwargs = _decode_kwargs(record, MESSAGE_FIELDS)
    kwargs["id"] = str(kwargs.get("id", ""))
    kwargs["timestamp"] = int(kwargs.get("timestamp") or 0)
    kwargs.setdefault("sender_id", "")
    kwargs.setdefault("recipient_id", "")
    kwargs.setdefault("text", "")
    return Message(**kwargs)


# ── UserProfile ───────────────────────────────────────────

def encode_address(address: Optional[ShippingAddress]) -> Optional[dict[str, Any]]:
    if address is None:
        return None
    return _encode(address, ADDRESS_FIELDS)


def decode_address(record: Optional[dict[str, Any]]) -> Optional[ShippingAddress]:
    if record is None:
        return None
    return ShippingAddress(**_decode_kwargs(record, ADDRESS_FIELDS))


def encode_profile(profile: UserProfile) -> dict[str, Any]:
    row = _encode(profile, PROFILE_FIELDS)
    row["role"] = profile.role.value
    row["shippingAddress"] = encode_address(profile.shipping_address)
    return row


def decode_profile(record: dict[str, Any]) -> UserProfile:
    kwargs = _decode_kwargs(record, PROFILE_FIELDS)
    kwargs["id"] = str(kwargs.get("id", ""))
    kwargs.setdefault("name", "")
    kwargs["role"] = _enum_or_default(Role, kwargs.get("role") or Role.FAMILY_MEMBER.value, Role.FAMILY_MEMBER)
    kwargs["shipping_address"] = decode_address(kwargs.get("shipping_address"))
    return UserProfile(**kwargs)
