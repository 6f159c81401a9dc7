"""Tests for loading line items and payments from spreadsheets"""
import pandas as pd
import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from billing.data_loader import DataLoader
from billing.errors import ValidationError
from billing.models import PaymentMethod


class TestLoadLineItems:

    def test_load_from_csv(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text(
            "Description, Quantity ,Unit Price,Item Type\n"
            "Copper pipe,2,10,part\n"
            "Sealant,1,5,\n"
            ",,,\n",
            encoding='utf-8',
        )

        items = DataLoader.load_line_items(str(path))

        assert len(items) == 2
        assert items[0].description == "Copper pipe"
        assert items[0].line_total == 20
        assert items[0].item_type == 'PART'
        assert items[1].item_type == 'MATERIAL'

    def test_load_from_excel(self, tmp_path):
        path = tmp_path / "items.xlsx"
        pd.DataFrame({
            'Description': ['Valve', 'Filter'],
            'Quantity': [1, 3],
            'Price': [12.5, 2],
        }).to_excel(path, index=False)

        items = DataLoader.load_line_items(str(path))

        assert [i.unit_price for i in items] == [12.5, 2]
        assert sum(i.line_total for i in items) == 18.5

    def test_bad_quantity_reports_row(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text("Description,Quantity,Unit Price\nPipe,two,10\n", encoding='utf-8')

        with pytest.raises(ValidationError, match="Row 2"):
            DataLoader.load_line_items(str(path))

    def test_unknown_item_type_reports_row(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text(
            "Description,Quantity,Unit Price,Item Type\n"
            "Pipe,1,10,Part\n"
            "Gadget,1,10,Widget\n",
            encoding='utf-8',
        )

        with pytest.raises(ValidationError, match="Row 3"):
            DataLoader.load_line_items(str(path))

    def test_missing_quantity_column(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text("Description,Unit Price\nPipe,10\n", encoding='utf-8')

        with pytest.raises(ValidationError):
            DataLoader.load_line_items(str(path))


class TestLoadPayments:

    def test_load_payments(self, tmp_path):
        path = tmp_path / "payments.csv"
        path.write_text(
            "Amount,Method,Reference,Date,Notes\n"
            "30,Cash,,2026-01-10,\n"
            "22.5,Benefit Pay,778899,2026-01-11,final\n",
            encoding='utf-8',
        )

        payments = DataLoader.load_payments(str(path))

        assert [p.amount for p in payments] == [30, 22.5]
        assert payments[0].method == PaymentMethod.CASH
        assert payments[0].reference_number is None
        assert payments[1].method == PaymentMethod.BENEFIT_PAY
        assert payments[1].reference_number == "778899"
        assert payments[1].notes == "final"
        assert payments[1].recorded_at.day == 11

    def test_method_defaults_to_cash(self, tmp_path):
        path = tmp_path / "payments.csv"
        path.write_text("Amount\n15\n", encoding='utf-8')

        payments = DataLoader.load_payments(str(path))

        assert payments[0].method == PaymentMethod.CASH

    def test_unknown_method_reports_row(self, tmp_path):
        path = tmp_path / "payments.csv"
        path.write_text("Amount,Method\n15,Cash\n10,Barter\n", encoding='utf-8')

        with pytest.raises(ValidationError, match="Row 3"):
            DataLoader.load_payments(str(path))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
