"""
Shop'reneur yönetim CLI'ı.

Kullanım:
    python . seed        → Demo verisini depoya yaz
    python . inventory   → Ürünlerin envanter durumunu göster
    python . report      → Excel envanter raporu oluştur

Mağaza arayüzü için: streamlit run storefront.py
"""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

# Proje kök dizinini Python path'e ekle
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _load_catalog():
    """Depoyu açar; bellek içi depo ise demo verisiyle doldurur."""
    from scripts.seed_demo import seed
    from sync.store import Entity, create_store

    store = create_store()
    if not store.is_remote:
        print("  Supabase ayarli degil - demo verisi kullaniliyor.\n")
        seed(store)
    products = store.snapshot(Entity.PRODUCTS)
    settings = store.snapshot(Entity.SETTINGS)
    return products, settings


def cmd_seed(args):
    """Demo verisini yazar."""
    from scripts.seed_demo import main as seed_main
    seed_main()


def cmd_inventory(args):
    """Ürünlerin envanter sınıflandırmasını yazdırır."""
    from engine.inventory import STAGE_LABELS, compute_inventory, shopper_offer, summarize_inventory

    products, _ = _load_catalog()
    if not products:
        print("  Urun bulunamadi! Once 'python . seed' calistirin.")
        return

    print(f"{'='*72}")
    print(f"  ENVANTER DURUMU")
    print(f"{'='*72}\n")

    for p in products:
        status = compute_inventory(p)
        offer = shopper_offer(p)
        print(
            f"  {p.name[:32]:32s} stok {status.total_stock:3d} | "
            f"satilabilir {status.sellable_stock:3d} | {STAGE_LABELS[status.stage]:22s} | {offer.label}"
        )

    summary = summarize_inventory(products)
    print(f"\n{'─'*72}")
    print(f"  Toplam Urun:        {summary.total_products}")
    print(f"  Toplam Unite:       {summary.total_units}")
    print(f"  Satilabilir Unite:  {summary.sellable_units}")
    print(f"  Satilabilir Deger:  ${summary.sellable_value:,.2f}")
    print(f"  Potansiyel Kar:     ${summary.potential_profit:,.2f}")

    if summary.needs_review:
        print(f"\n  ⚠ Inceleme Videosu Bekleyenler:")
        for name in summary.needs_review:
            print(f"    - {name}")


def cmd_report(args):
    """Excel envanter raporu oluşturur."""
    from config.settings import REPORTS_DIR
    from writers.inventory_report import generate_inventory_report

    products, settings = _load_catalog()
    if not products:
        print("  Urun bulunamadi! Once 'python . seed' calistirin.")
        return

    output = Path(args.output) if args.output else REPORTS_DIR / f"inventory_{date.today():%Y%m%d}.xlsx"
    store_name = settings.store_name if settings else "Store"
    path = generate_inventory_report(products, output, store_name=store_name)
    print(f"  Rapor olusturuldu: {path}")


def main():
    parser = argparse.ArgumentParser(
        prog="shopreneur",
        description="Shop'reneur Magaza Yonetim Araclari",
    )
    sub = parser.add_subparsers(dest="command", help="Komutlar")

    sub.add_parser("seed", help="Demo verisini yaz")
    sub.add_parser("inventory", help="Envanter durumunu goster")
    report = sub.add_parser("report", help="Excel envanter raporu olustur")
    report.add_argument("-o", "--output", help="Cikti dosyasi (.xlsx)")

    args = parser.parse_args()

    if args.command == "seed":
        cmd_seed(args)
    elif args.command == "inventory":
        cmd_inventory(args)
    elif args.command == "report":
        cmd_report(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
