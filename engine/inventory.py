"""
Envanter modeli: ürünün stok sayısı ve inceleme videosundan satılabilir
stoğu hesaplar. Yan etkisi yoktur, I/O yapmaz.

Kural: ilk ünite demo/inceleme ünitesidir ve asla satılmaz.
    sellable_stock = max(0, stock_count - 1)
    can_sell       = sellable_stock > 0 ve video var
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from config.settings import DEMO_UNITS
from models.cart import OrderType
from models.product import Product


class InventoryStage(str, Enum):
    WISHLIST = "wishlist"            # henüz hiç ünite yok
    DEMO_UNIT = "demo_unit"          # tek ünite, inceleme için ayrılmış
    NEEDS_REVIEW = "needs_review"    # stok var ama video yok
    SELLABLE = "sellable"


STAGE_LABELS = {
    InventoryStage.WISHLIST: "Wishlist Only",
    InventoryStage.DEMO_UNIT: "Demo Unit Only",
    InventoryStage.NEEDS_REVIEW: "Review Video Required",
    InventoryStage.SELLABLE: "In Stock",
}


@dataclass(frozen=True)
class InventoryStatus:
    total_stock: int
    sellable_stock: int
    can_sell: bool
    stage: InventoryStage
    needs_review: bool


@dataclass(frozen=True)
class Offer:
    """Alışverişçiye sunulan aksiyon."""
    order_type: OrderType
    label: str
    hint: str = ""


@dataclass
class InventorySummary:
    """Katalog geneli envanter özeti - admin paneli ve rapor için."""
    total_products: int = 0
    total_units: int = 0
    sellable_units: int = 0
    sellable_value: float = 0.0
    potential_profit: float = 0.0
    stage_counts: dict[InventoryStage, int] = field(
        default_factory=lambda: {stage: 0 for stage in InventoryStage}
    )
    needs_review: list[str] = field(default_factory=list)


def compute_inventory(product: Product) -> InventoryStatus:
    """Ürünün toplam / satılabilir stoğunu ve aşamasını hesaplar."""
    total = max(0, product.stock_count or 0)
    sellable = max(0, total - DEMO_UNITS)
    has_video = product.has_review
    can_sell = sellable > 0 and has_video

    if total == 0:
        stage = InventoryStage.WISHLIST
    elif sellable == 0:
        stage = InventoryStage.DEMO_UNIT
    elif not has_video:
        stage = InventoryStage.NEEDS_REVIEW
    else:
        stage = InventoryStage.SELLABLE

    return InventoryStatus(
        total_stock=total,
        sellable_stock=sellable,
        can_sell=can_sell,
        stage=stage,
        needs_review=total >= 1 and not has_video,
    )


def shopper_offer(product: Product) -> Offer:
    """Satılabilir ürün için "Buy Now", diğerleri için hediye akışı."""
    status = compute_inventory(product)

    if status.can_sell:
        return Offer(OrderType.PURCHASE, "Buy Now")

    if not product.has_review:
        hint = "Step 1: Review video required"
    else:
        hint = f"Step 2: Stock required ({status.total_stock}/{DEMO_UNITS + 1})"

    if status.stage == InventoryStage.WISHLIST:
        return Offer(OrderType.GIFT, "Gift First One", hint)
    return Offer(OrderType.GIFT, "Gift to Stock Up", hint)


def receive_unit(product: Product) -> Product:
    """Onaylanan checkout satırı için tek ünite ekler (+1, miktardan bağımsız)."""
    return replace(
        product,
        stock_count=max(0, product.stock_count or 0) + 1,
        is_received=True,
    )


def summarize_inventory(products: list[Product]) -> InventorySummary:
    summary = InventorySummary(total_products=len(products))

    for p in products:
        status = compute_inventory(p)
        summary.total_units += status.total_stock
        summary.stage_counts[status.stage] += 1

        if status.needs_review:
            summary.needs_review.append(p.name)

        # Video yoksa stok satılamaz; değer hesabına sadece satılabilirler girer
        if status.can_sell:
            summary.sellable_units += status.sellable_stock
            summary.sellable_value += status.sellable_stock * p.price
            if p.cost_price is not None:
                summary.potential_profit += status.sellable_stock * (p.price - p.cost_price)

    return summary
