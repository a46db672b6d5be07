"""
Proje ayarları ve sabit değerler.
"""
import os
from pathlib import Path

# ── Dizinler ──────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
REPORTS_DIR = PROJECT_ROOT / "reports"

# ── Veri Senkronizasyonu (Supabase) ──────────────────────
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY", "")

PRODUCTS_TABLE = "products"
SETTINGS_TABLE = "settings"
MESSAGES_TABLE = "messages"
PROFILES_TABLE = "profiles"
SETTINGS_ROW_ID = "global_settings"    # tekil mağaza ayarı kaydı

# ── Yapay Zeka (OpenAI) ──────────────────────────────────
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
OPENAI_TEXT_MODEL = os.environ.get("OPENAI_TEXT_MODEL", "gpt-4o-mini")
OPENAI_IMAGE_MODEL = os.environ.get("OPENAI_IMAGE_MODEL", "gpt-image-1")
DESCRIPTION_MAX_WORDS = 40

# ── Amazon Toplu Sepet ───────────────────────────────────
AMAZON_CART_URL = "https://www.amazon.com/gp/aws/cart/add.html"
DEFAULT_AFFILIATE_TAG = "cdi-nonprofit-20"
CHECKOUT_TRANSFER_DELAY = 1.5          # saniye, sadece "batching" göstergesi için

# ── Envanter Kuralları ───────────────────────────────────
DEMO_UNITS = 1                         # ilk ünite inceleme videosu için ayrılır
OWNER_ROLE = "Daughter"                # ürün/ayar düzenleyebilen rol

# ── Loglama ──────────────────────────────────────────────
LOG_LEVEL = os.environ.get("STOREFRONT_LOG_LEVEL", "INFO")

# ── Varsayılan Mağaza Ayarları ───────────────────────────
INITIAL_SETTINGS = {
    "store_name": "Shop'reneur Incubator",
    "tagline": "Constructive Designs Inc. Platform",
    "hero_headline": "Build Your Digital Empire",
    "hero_subtext": "From wishlist to boutique, and then to the global marketplace.",
    "primary_color": "#0f172a",
    "secondary_color": "#6366f1",
    "background_color": "#f8fafc",
    "font_heading": "Playfair Display",
    "font_body": "Inter",
}

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"
PLACEHOLDER_IMAGE_TEMPLATE = "https://picsum.photos/seed/{seed}/400/500"

# ── Rapor Ayarları ────────────────────────────────────────
REPORT_DATE_FORMAT = "%d.%m.%Y"
