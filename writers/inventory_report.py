"""
Excel envanter raporu yazıcı.
2 sayfa: SUMMARY, INVENTORY
"""
from __future__ import annotations

from datetime import date
from pathlib import Path

from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config.settings import REPORT_DATE_FORMAT
from engine.inventory import STAGE_LABELS, InventoryStage, compute_inventory, summarize_inventory
from models.product import Product

# ── Stil Sabitleri ────────────────────────────────────────
HEADER_FILL = PatternFill(start_color="6366F1", end_color="6366F1", fill_type="solid")
HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
TITLE_FONT = Font(name="Calibri", bold=True, size=14, color="0F172A")
SUBTITLE_FONT = Font(name="Calibri", bold=True, size=11, color="444444")
NORMAL_FONT = Font(name="Calibri", size=10)
MONEY_FORMAT = '#,##0.00 $'
PERCENT_FORMAT = '0.0"%"'
THIN_BORDER = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)

STAGE_FILLS = {
    InventoryStage.WISHLIST: PatternFill(start_color="F1F5F9", end_color="F1F5F9", fill_type="solid"),
    InventoryStage.DEMO_UNIT: PatternFill(start_color="FFF3E0", end_color="FFF3E0", fill_type="solid"),
    InventoryStage.NEEDS_REVIEW: PatternFill(start_color="FFCDD2", end_color="FFCDD2", fill_type="solid"),
    InventoryStage.SELLABLE: PatternFill(start_color="E8F5E9", end_color="E8F5E9", fill_type="solid"),
}

INVENTORY_HEADERS = [
    "ID", "Product", "Platform", "Category", "ASIN", "Price", "Cost",
    "Margin", "Total Stock", "Sellable", "Review Video", "Stage",
]


def _apply_header_row(ws, row: int, col_start: int, col_end: int):
    """Başlık satırına stil uygular."""
    for col in range(col_start, col_end + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = THIN_BORDER


def _apply_data_row(ws, row: int, col_start: int, col_end: int):
    """Veri satırına stil uygular."""
    for col in range(col_start, col_end + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = NORMAL_FONT
        cell.border = THIN_BORDER
        cell.alignment = Alignment(vertical="center")


def _auto_width(ws, min_width: int = 10, max_width: int = 40):
    """Sütun genişliklerini otomatik ayarlar."""
    for col_cells in ws.columns:
        max_len = min_width
        col_letter = get_column_letter(col_cells[0].column)
        for cell in col_cells:
            if cell.value:
                cell_len = len(str(cell.value))
                if cell_len > max_len:
                    max_len = min(cell_len + 2, max_width)
        ws.column_dimensions[col_letter].width = max_len


def generate_inventory_report(
    products: list[Product],
    output_path: Path,
    store_name: str = "Store",
) -> Path:
    """
    Excel envanter raporu oluşturur.

    Returns: oluşturulan dosya yolu
    """
    wb = Workbook()

    _write_summary_sheet(wb, products, store_name)
    _write_inventory_sheet(wb, products)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    return output_path


# ══════════════════════════════════════════════════════════
#  SAYFA 1: ÖZET
# ══════════════════════════════════════════════════════════
def _write_summary_sheet(wb, products, store_name):
    ws = wb.active
    ws.title = "SUMMARY"
    ws.sheet_properties.tabColor = "6366F1"

    summary = summarize_inventory(products)

    ws.merge_cells("A1:D1")
    ws["A1"] = f"{store_name} - Inventory Report"
    ws["A1"].font = TITLE_FONT
    ws["A1"].alignment = Alignment(horizontal="center")

    ws.merge_cells("A2:D2")
    ws["A2"] = f"Report Date: {date.today().strftime(REPORT_DATE_FORMAT)}"
    ws["A2"].font = SUBTITLE_FONT
    ws["A2"].alignment = Alignment(horizontal="center")

    # ── KPI'lar ──
    row = 4
    ws.cell(row=row, column=1, value="Metric")
    ws.cell(row=row, column=2, value="Value")
    _apply_header_row(ws, row, 1, 2)

    kpis = [
        ("Products", summary.total_products, None),
        ("Total Units", summary.total_units, None),
        ("Sellable Units", summary.sellable_units, None),
        ("Sellable Value", summary.sellable_value, MONEY_FORMAT),
        ("Potential Profit", summary.potential_profit, MONEY_FORMAT),
        ("Needs Review Video", len(summary.needs_review), None),
    ]
    for name, value, fmt in kpis:
        row += 1
        ws.cell(row=row, column=1, value=name).font = Font(name="Calibri", bold=True, size=10)
        cell = ws.cell(row=row, column=2, value=value)
        if fmt:
            cell.number_format = fmt
        _apply_data_row(ws, row, 2, 2)
        ws.cell(row=row, column=1).border = THIN_BORDER

    # ── Aşama Dağılımı ──
    row += 2
    ws.cell(row=row, column=1, value="Inventory Stages").font = SUBTITLE_FONT

    row += 1
    chart_start_row = row
    ws.cell(row=row, column=1, value="Stage")
    ws.cell(row=row, column=2, value="Products")
    _apply_header_row(ws, row, 1, 2)

    for stage in InventoryStage:
        row += 1
        ws.cell(row=row, column=1, value=STAGE_LABELS[stage])
        ws.cell(row=row, column=2, value=summary.stage_counts[stage])
        _apply_data_row(ws, row, 1, 2)
        ws.cell(row=row, column=1).fill = STAGE_FILLS[stage]

    chart = BarChart()
    chart.title = "Products per Stage"
    chart.style = 10
    chart.y_axis.title = "Products"
    chart.width = 18
    chart.height = 9

    data_ref = Reference(ws, min_col=2, min_row=chart_start_row, max_row=row)
    cats_ref = Reference(ws, min_col=1, min_row=chart_start_row + 1, max_row=row)
    chart.add_data(data_ref, titles_from_data=True)
    chart.set_categories(cats_ref)
    ws.add_chart(chart, f"D{chart_start_row}")

    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 2: ENVANTER
# ══════════════════════════════════════════════════════════
def _write_inventory_sheet(wb, products):
    ws = wb.create_sheet("INVENTORY")
    ws.sheet_properties.tabColor = "4CAF50"

    for i, h in enumerate(INVENTORY_HEADERS, 1):
        ws.cell(row=1, column=i, value=h)
    _apply_header_row(ws, 1, 1, len(INVENTORY_HEADERS))

    for row_idx, p in enumerate(products, 2):
        status = compute_inventory(p)
        values = [
            p.id,
            p.name,
            p.platform.value,
            p.category.value,
            p.asin or "-",
            p.price,
            p.cost_price if p.cost_price is not None else "-",
            p.profit_margin if p.profit_margin is not None else "-",
            status.total_stock,
            status.sellable_stock,
            "Yes" if p.has_review else "No",
            STAGE_LABELS[status.stage],
        ]
        for col_idx, v in enumerate(values, 1):
            ws.cell(row=row_idx, column=col_idx, value=v)
        _apply_data_row(ws, row_idx, 1, len(INVENTORY_HEADERS))

        ws.cell(row=row_idx, column=6).number_format = MONEY_FORMAT
        if p.cost_price is not None:
            ws.cell(row=row_idx, column=7).number_format = MONEY_FORMAT
        if p.profit_margin is not None:
            ws.cell(row=row_idx, column=8).number_format = PERCENT_FORMAT
        ws.cell(row=row_idx, column=12).fill = STAGE_FILLS[status.stage]

    ws.freeze_panes = "A2"
    _auto_width(ws)
