"""Tests for the Excel and HTML invoice statements"""
import pytest
import sys
from pathlib import Path

from openpyxl import load_workbook

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from billing.html_exporter import HTMLInvoiceExporter
from billing.invoice import Invoice
from billing.models import LineItem, LaborCharge, Payment, PaymentMethod, Currency
from billing.report_generator import ReportGenerator

BHD = Currency(symbol='BD', symbol_position='before', decimal_places=3)


def make_paid_invoice():
    invoice = Invoice(
        line_items=[
            LineItem(description="Pipe <15mm>", quantity=2, unit_price=10, item_type='PART'),
            LineItem(description="Valve", quantity=1, unit_price=5),
        ],
        labor_charge=LaborCharge(hours=2, rate_per_hour=25),
        tax_rate=10,
        invoice_no="INV-0042",
    )
    invoice.generate()
    invoice.add_payment(Payment(amount=30, method=PaymentMethod.CASH))
    invoice.add_payment(Payment(amount=30, method=PaymentMethod.BENEFIT_PAY, reference_number="BP-1"))
    return invoice


class TestReportGenerator:

    def setup_method(self):
        self.invoice = make_paid_invoice()
        self.report = ReportGenerator(self.invoice, BHD)

    def test_dataframe_has_items_and_labor(self):
        df = self.report.to_dataframe()

        assert list(df['Description']) == ["Pipe <15mm>", "Valve", "Labor"]
        assert list(df['Total']) == ["BD 20.000", "BD 5.000", "BD 50.000"]

    def test_summary_rows(self):
        summary = dict(self.report.get_summary_rows())

        assert summary['Subtotal'] == 75
        assert summary['Tax (10%)'] == 7.5
        assert summary['Total'] == 82.5
        assert summary['Amount Paid'] == 60
        assert summary['Balance Due'] == 22.5
        assert 'Discount' not in summary

    def test_draft_summary_has_no_payment_rows(self):
        draft = Invoice(line_items=[LineItem(description="Valve", quantity=1, unit_price=5)])
        summary = dict(ReportGenerator(draft, BHD).get_summary_rows())

        assert summary['Total'] == 5
        assert 'Balance Due' not in summary

    def test_export_excel(self, tmp_path):
        path = tmp_path / "out" / "invoice.xlsx"
        self.report.export_excel(str(path))

        ws = load_workbook(path).active
        values = [cell for row in ws.iter_rows(values_only=True) for cell in row if cell is not None]

        assert "Invoice: INV-0042" in values
        assert "Balance Due" in values
        assert 22.5 in values
        assert "BP-1" in values


class TestHTMLInvoiceExporter:

    def test_generate_html(self):
        html = HTMLInvoiceExporter(make_paid_invoice(), BHD).generate_html()

        assert "INV-0042" in html
        assert "Pipe &lt;15mm&gt;" in html
        assert "BD 82.500" in html
        assert "BD 22.500" in html
        assert "Partially Paid" in html
        assert "BenefitPay" in html

    def test_export_html(self, tmp_path):
        path = tmp_path / "invoice.html"
        HTMLInvoiceExporter(make_paid_invoice(), BHD).export_html(str(path))

        assert path.read_text(encoding='utf-8').startswith("<!DOCTYPE html>")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
