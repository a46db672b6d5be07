"""
Demo için örnek profil, ürün ve mağaza ayarlarını depoya yazar.
"""
from config.settings import AVATAR_URL_TEMPLATE, PLACEHOLDER_IMAGE_TEMPLATE
from models.product import Platform, Product, ProductCategory
from models.shop import Role, ShopSettings, UserProfile

# ── Simüle edilen iki kullanıcı ───────────────────────────

DEMO_PROFILES = [
    ("owner", "Maya", "maya_builds", Role.DAUGHTER, "Founder & chief curator. Every product gets a review first."),
    ("sponsor", "Mom", "mom_sponsor", Role.MOTHER, "Proud sponsor. Gifting the first unit of every wishlist item."),
]

# ── Örnek ürünler ─────────────────────────────────────────
# (id, ad, fiyat, maliyet, kategori, platform, asin, stok, video)

DEMO_PRODUCTS = [
    ("1001", "Glow Recipe Watermelon Toner", 34.00, 22.00, ProductCategory.BEAUTY,
     Platform.AMAZON, "B07XQK3GVM", 0, None),
    ("1002", "Satin Pillowcase Set", 19.99, 9.50, ProductCategory.HAIR,
     Platform.AMAZON, "B07NQ2GLQ4", 1, None),
    ("1003", "Mini Claw Clip Pack", 12.99, 4.20, ProductCategory.ACCESSORIES,
     Platform.AMAZON, "B08KWN3ZK7", 3, "https://www.tiktok.com/@maya_builds/video/1"),
    ("1004", "LED Vanity Mirror", 29.99, 15.00, ProductCategory.TECH,
     Platform.AMAZON, "B07QK2SPP7", 2, None),
    ("1005", "Ribbed Lounge Set", 24.50, 11.00, ProductCategory.SHEIN,
     Platform.SHEIN, None, 1, "https://www.tiktok.com/@maya_builds/video/2"),
]


def demo_profiles() -> list[UserProfile]:
    return [
        UserProfile(
            id=pid,
            name=name,
            handle=handle,
            role=role,
            bio=bio,
            avatar_url=AVATAR_URL_TEMPLATE.format(seed=name),
        )
        for pid, name, handle, role, bio in DEMO_PROFILES
    ]


def demo_products() -> list[Product]:
    products = []
    for pid, name, price, cost, category, platform, asin, stock, video in DEMO_PRODUCTS:
        if platform == Platform.AMAZON:
            link = f"https://www.amazon.com/dp/{asin}"
        else:
            link = "https://us.shein.com"
        products.append(Product(
            id=pid,
            name=name,
            price=price,
            cost_price=cost,
            category=category,
            description=f"{name} - curated for the shop.",
            image_url=PLACEHOLDER_IMAGE_TEMPLATE.format(seed=pid),
            affiliate_link=link,
            platform=platform,
            stock_count=stock,
            video_url=video,
            is_wishlist=stock == 0,
            is_received=stock > 0,
            asin=asin,
        ))
    return products


def seed(store) -> None:
    """Depoya demo verilerini yazar (var olan kayıtların üzerine yazar)."""
    store.update_settings(ShopSettings())
    for profile in demo_profiles():
        store.upsert_profile(profile)
    for product in demo_products():
        store.save_product(product)


def main():
    from sync.store import create_store

    print("Demo verisi yaziliyor...\n")
    store = create_store()
    seed(store)
    print(f"  {len(DEMO_PROFILES)} profil, {len(DEMO_PRODUCTS)} urun yazildi.")
    if not store.is_remote:
        print("  Supabase ayarli degil - veriler sadece bellekte tutuldu.")


if __name__ == "__main__":
    main()
