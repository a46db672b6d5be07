"""
ASIN ile Amazon ürün sayfasından başlık, fiyat ve görsel çeker.
Admin panelinde yeni ürün formunu doldurmak için.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Optional

import requests
from bs4 import BeautifulSoup

from utils.logger import logger

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
]

ASIN_PATTERN = re.compile(r"^[A-Z0-9]{10}$")


@dataclass
class AmazonListing:
    """Amazon ürün sayfası özeti."""
    asin: str
    title: str
    price: float = 0.0
    image_url: str = ""
    url: str = ""


def _get_session() -> requests.Session:
    """Oturum oluşturur."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    })
    return session


def _parse_price(price_str: str) -> float:
    """Fiyat parse eder."""
    if not price_str:
        return 0.0
    cleaned = re.sub(r'[^\d.,]', '', price_str)
    cleaned = cleaned.replace(',', '')
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def is_valid_asin(asin: str) -> bool:
    return bool(ASIN_PATTERN.match((asin or "").strip().upper()))


def product_url(asin: str, domain: str = "com") -> str:
    return f"https://www.amazon.{domain}/dp/{asin}"


def parse_product_page(html: str, asin: str, domain: str = "com") -> Optional[AmazonListing]:
    """Ürün sayfası HTML'inden listing çıkarır; başlık yoksa None."""
    soup = BeautifulSoup(html, "html.parser")

    title_el = soup.select_one("#productTitle")
    title = title_el.get_text(strip=True) if title_el else ""
    if not title:
        return None

    # Fiyat: önce ekran okuyucu metni, yoksa tam + kesir
    price = 0.0
    offscreen = soup.select_one("span.a-price span.a-offscreen")
    if offscreen:
        price = _parse_price(offscreen.get_text(strip=True))
    else:
        price_whole = soup.select_one("span.a-price-whole")
        price_frac = soup.select_one("span.a-price-fraction")
        if price_whole:
            whole = price_whole.get_text(strip=True).replace(",", "").replace(".", "")
            frac = price_frac.get_text(strip=True) if price_frac else "00"
            price = _parse_price(f"{whole}.{frac}")

    # Görsel
    image_url = ""
    img_el = soup.select_one("#landingImage") or soup.select_one("#imgBlkFront")
    if img_el:
        image_url = img_el.get("data-old-hires") or img_el.get("src", "")

    return AmazonListing(
        asin=asin,
        title=title,
        price=price,
        image_url=image_url,
        url=product_url(asin, domain),
    )


def lookup_asin(asin: str, domain: str = "com") -> Optional[AmazonListing]:
    """
    Amazon'dan tek bir ürünü getirir.

    Returns:
        AmazonListing veya bulunamazsa / bot koruması devredeyse None
    """
    asin = (asin or "").strip().upper()
    if not is_valid_asin(asin):
        logger.warning(f"Invalid ASIN: {asin!r}")
        return None

    session = _get_session()
    try:
        resp = session.get(product_url(asin, domain), timeout=15)
    except requests.RequestException as e:
        logger.error(f"ASIN lookup failed for {asin}: {e}")
        return None

    if resp.status_code != 200:
        logger.warning(f"ASIN lookup for {asin}: HTTP {resp.status_code}")
        return None

    return parse_product_page(resp.text, asin, domain)
