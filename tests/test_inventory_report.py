"""Excel envanter raporu."""

from openpyxl import load_workbook

from writers.inventory_report import INVENTORY_HEADERS, generate_inventory_report


def test_report_sheets_and_rows(tmp_path, product_factory):
    products = [
        product_factory("a", name="Toner", stock=3, video="https://v", price=10.0, cost=4.0),
        product_factory("b", name="Mirror", stock=0, asin=None),
    ]

    path = generate_inventory_report(products, tmp_path / "out" / "inventory.xlsx", store_name="Maya's")

    assert path.exists()
    wb = load_workbook(path)
    assert wb.sheetnames == ["SUMMARY", "INVENTORY"]

    summary = wb["SUMMARY"]
    assert summary["A1"].value == "Maya's - Inventory Report"
    assert summary["B5"].value == 2
    assert summary["B7"].value == 2

    ws = wb["INVENTORY"]
    assert [c.value for c in ws[1]] == INVENTORY_HEADERS
    assert ws["B2"].value == "Toner"
    assert ws["J2"].value == 2
    assert ws["L2"].value == "In Stock"
    assert ws["E3"].value == "-"
    assert ws["L3"].value == "Wishlist Only"
    assert ws.freeze_panes == "A2"
