"""
AI destekli içerik üretimi - ürün açıklaması, ürün görseli, sanal deneme,
trend ürün arama, içerik görevleri ve iş mentoru sohbeti.

Tüm çağrılar "best-effort": API key yoksa veya çağrı başarısız olursa
nötr bir yedek değer döner. Tek istisna sanal deneme görselidir; hata
çağırana AIContentError olarak iletilir.

Kullanım:
    export OPENAI_API_KEY="sk-..."
    text = generate_product_description("Glow Serum", "Beauty & Skincare", "dewy, vegan")
"""
from __future__ import annotations

import base64
import json
import re
from typing import Optional

from config.settings import (
    DESCRIPTION_MAX_WORDS,
    OPENAI_API_KEY,
    OPENAI_IMAGE_MODEL,
    OPENAI_TEXT_MODEL,
)
from models.shop import ContentPrompt
from utils.logger import logger

EMPTY_DESCRIPTION = "Check out this amazing find!"
FALLBACK_DESCRIPTION = "A must-have item for your collection!"
MENTOR_FALLBACK_REPLY = "The Mentor is offline right now. Try again in a moment! 💡"

FALLBACK_CHALLENGES = [
    ContentPrompt(
        title="GRWM: School Fit",
        description="Get Ready With Me videos are trending. Show an outfit combo from your shop!",
        platform="TikTok",
        difficulty="Easy",
        xp_reward=150,
    ),
    ContentPrompt(
        title="ASMR Unboxing",
        description="Satisfying unboxing videos are viral. Film a silent unboxing of your best seller.",
        platform="Instagram",
        difficulty="Medium",
        xp_reward=300,
    ),
]

MENTOR_SYSTEM_PROMPT = """You are "The Mentor", a smart, savvy, and encouraging AI business coach for the Shop'reneur app.
Your audience is teenage entrepreneurs who are dropshipping or curating products from Amazon/Shein.

Your goal:
1. Answer questions about entrepreneurship, affiliate marketing, profit margins, and branding.
2. Be concise, use emojis, and keep the vibe motivational but practical.
3. If they ask about trends, explain that you can "Scan the socials" for them if they click the scan button.
"""

_DATA_URL_PREFIX = re.compile(r"^data:image/(png|jpeg|jpg|webp);base64,")


class AIContentError(Exception):
    """AI çağrısı başarısız oldu."""


def _get_client():
    """API key varsa OpenAI istemcisi, yoksa None."""
    if not OPENAI_API_KEY:
        return None
    import openai
    return openai.OpenAI(api_key=OPENAI_API_KEY)


def _chat_json(client, prompt: str, max_tokens: int = 1500) -> dict:
    response = client.chat.completions.create(
        model=OPENAI_TEXT_MODEL,
        messages=[{"role": "user", "content": prompt}],
        response_format={"type": "json_object"},
        temperature=0.7,
        max_tokens=max_tokens,
    )
    return json.loads(response.choices[0].message.content or "{}")


def _first_image_data_url(response) -> Optional[str]:
    for item in response.data or []:
        if getattr(item, "b64_json", None):
            return f"data:image/png;base64,{item.b64_json}"
    return None


def _trim_words(text: str, limit: int) -> str:
    words = text.split()
    if len(words) <= limit:
        return text.strip()
    return " ".join(words[:limit])


# ── Ürün Açıklaması ──────────────────────────────────────

def generate_product_description(product_name: str, category: str, keywords: str) -> str:
    client = _get_client()
    if client is None:
        logger.warning("OPENAI_API_KEY not set, using fallback product description")
        return FALLBACK_DESCRIPTION

    prompt = f"""You are a trendy, Gen Z savvy copywriter for a teenage girl's online boutique on the "Shop'reneur" platform.
Write a catchy, short, and appealing product description (max {DESCRIPTION_MAX_WORDS} words) for a product named "{product_name}".
Category: {category}.
Keywords/Vibe: {keywords}.
Use emojis sparingly but effectively. Make it sound exciting!
"""

    try:
        response = client.chat.completions.create(
            model=OPENAI_TEXT_MODEL,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.9,
            max_tokens=200,
        )
        text = (response.choices[0].message.content or "").strip()
        if not text:
            return EMPTY_DESCRIPTION
        return _trim_words(text, DESCRIPTION_MAX_WORDS)
    except Exception as e:
        logger.error(f"Error generating description: {e}")
        return FALLBACK_DESCRIPTION


# ── Görseller ────────────────────────────────────────────

def generate_product_image(product_name: str, category: str, description: str) -> Optional[str]:
    """Stüdyo ürün fotoğrafı üretir; data URL veya None döner."""
    client = _get_client()
    if client is None:
        return None

    prompt = f"""Professional product photography of {product_name}.
Category: {category}.
Description: {description}.
Style: High-end e-commerce, clean white or pastel background, studio lighting, 4k, detailed.
Ensure the item is the main focus and fully visible. No text overlays."""

    try:
        response = client.images.generate(
            model=OPENAI_IMAGE_MODEL,
            prompt=prompt,
            size="1024x1024",
            n=1,
        )
        return _first_image_data_url(response)
    except Exception as e:
        logger.error(f"Error generating product image: {e}")
        return None


def decode_user_image(user_image: str) -> bytes:
    """Data URL önekini temizleyip base64 görseli çözer."""
    return base64.b64decode(_DATA_URL_PREFIX.sub("", user_image))


def generate_try_on_image(
    user_image: str,
    product_name: str,
    product_category: str,
    product_description: str,
) -> Optional[str]:
    """
    Kullanıcının fotoğrafı üzerine ürünü giydirir.

    Args:
        user_image: base64 ya da data URL formatında kullanıcı fotoğrafı

    Raises:
        AIContentError: API key yoksa veya API çağrısı başarısızsa
    """
    client = _get_client()
    if client is None:
        raise AIContentError("OPENAI_API_KEY is not configured")

    prompt = f"""Detailed Instruction: This is a photo of a user who wants to virtually try on a product.
Generate a realistic image of this EXACT person wearing the following item: "{product_name}".

Product Details: {product_description}
Category: {product_category}

Requirements:
1. Maintain the person's identity, facial features, hair, and body shape exactly as they appear in the original photo.
2. Maintain the background of the original photo if possible, or use a neutral flattering background if the outfit change requires it.
3. The clothing/item should fit naturally.
4. High quality, photorealistic output.
"""

    try:
        image_bytes = decode_user_image(user_image)
        response = client.images.edit(
            model=OPENAI_IMAGE_MODEL,
            image=("user.jpg", image_bytes, "image/jpeg"),
            prompt=prompt,
        )
    except Exception as e:
        logger.error(f"Error generating try-on image: {e}")
        raise AIContentError(str(e)) from e

    return _first_image_data_url(response)


# ── Trend Ürün & İçerik Görevleri ────────────────────────

def search_trending_products(query: str) -> list[dict]:
    """Arama terimine göre 4 trend ürün fikri; hata durumunda boş liste."""
    client = _get_client()
    if client is None:
        return []

    prompt = f"""You are a product scout for a teen dropshipping business.
Generate a list of 4 trending/viral product ideas based on the search term: "{query}".

Return ONLY JSON with this exact schema:
{{
  "products": [
    {{
      "name": "Creative Product Name",
      "price": 0.0,
      "category": "One of: Beauty & Skincare, Fashion & Apparel, Accessories, Tech & Gadgets",
      "description": "Short catchy description",
      "keywords": "comma, separated, keywords"
    }}
  ]
}}
"""

    try:
        data = _chat_json(client, prompt)
    except Exception as e:
        logger.error(f"Error searching products: {e}")
        return []

    results = []
    for raw in data.get("products", []):
        if not isinstance(raw, dict) or not raw.get("name"):
            continue
        try:
            price = float(raw.get("price") or 0)
        except (TypeError, ValueError):
            price = 0.0
        results.append({
            "name": str(raw["name"]),
            "price": price,
            "category": str(raw.get("category", "")),
            "description": str(raw.get("description", "")),
            "keywords": str(raw.get("keywords", "")),
        })
    return results


def scan_trend_challenges() -> list[ContentPrompt]:
    """Güncel trendlerden 3 içerik görevi; başarısız olursa sabit görevler."""
    client = _get_client()
    if client is None:
        return list(FALLBACK_CHALLENGES)

    prompt = """Step 1: Think about the top 3 current viral trends on TikTok and Instagram for teenagers (fashion, beauty, or lifestyle).
Step 2: Based on these trends, generate 3 specific business challenges for a shop owner to capitalize on them.

Return ONLY JSON with this schema:
{
  "challenges": [
    {
      "title": "Short catchy title",
      "description": "Specific instruction on what content to create based on the trend",
      "platform": "TikTok" | "Instagram" | "YouTube",
      "difficulty": "Easy" | "Medium" | "Hard",
      "xpReward": 100
    }
  ]
}
"""

    try:
        data = _chat_json(client, prompt)
        challenges = [
            ContentPrompt(
                title=c["title"],
                description=c.get("description", ""),
                platform=c.get("platform", "TikTok"),
                difficulty=c.get("difficulty", "Easy"),
                xp_reward=int(c.get("xpReward", 100)),
            )
            for c in data.get("challenges", [])
        ]
    except Exception as e:
        logger.error(f"Error scanning trends: {e}")
        return list(FALLBACK_CHALLENGES)

    return challenges or list(FALLBACK_CHALLENGES)


# ── İş Mentoru ───────────────────────────────────────────

class MentorChat:
    """Sohbet geçmişini tutan iş koçu."""

    def __init__(self):
        self.history: list[dict] = [{"role": "system", "content": MENTOR_SYSTEM_PROMPT}]

    def send(self, text: str) -> str:
        self.history.append({"role": "user", "content": text})

        client = _get_client()
        if client is None:
            reply = MENTOR_FALLBACK_REPLY
        else:
            try:
                response = client.chat.completions.create(
                    model=OPENAI_TEXT_MODEL,
                    messages=self.history,
                    temperature=0.8,
                    max_tokens=500,
                )
                reply = (response.choices[0].message.content or "").strip() or MENTOR_FALLBACK_REPLY
            except Exception as e:
                logger.error(f"Mentor chat failed: {e}")
                reply = MENTOR_FALLBACK_REPLY

        self.history.append({"role": "assistant", "content": reply})
        return reply

    @property
    def turns(self) -> list[dict]:
        """Sistem mesajı hariç görünür sohbet."""
        return self.history[1:]
