"""Data loading utilities for Field Billing"""
import pandas as pd
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .errors import ValidationError
from .models import LineItem, Payment, PaymentMethod, ITEM_TYPES

UNIT_PRICE_COLUMNS = ('unit price', 'unit_price', 'unitprice', 'price')
ITEM_TYPE_COLUMNS = ('item type', 'item_type', 'itemtype', 'type')
REFERENCE_COLUMNS = ('reference', 'reference number', 'reference_number', 'ref')


class DataLoader:
    """
    Load line items and payments from spreadsheet files.
    """

    @staticmethod
    def _read_table(filepath: str) -> pd.DataFrame:
        """Read an Excel or CSV file and normalize its column names."""
        path = Path(filepath)
        if path.suffix.lower() == '.csv':
            df = pd.read_csv(path)
        else:
            df = pd.read_excel(path)

        df.columns = df.columns.astype(str).str.strip().str.lower()
        return df.dropna(how='all')

    @staticmethod
    def _first_value(row: pd.Series, columns) -> Optional[object]:
        for column in columns:
            if column in row.index and pd.notna(row[column]):
                return row[column]
        return None

    @staticmethod
    def _to_float(value, field: str, row_number: int) -> float:
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            raise ValidationError(f"Row {row_number}: {field} is missing")
        try:
            # Accept "BD 12.500", "$1,200" and plain numbers
            if isinstance(value, str):
                value = value.replace(',', '').replace('$', '').replace('BD', '').strip()
            return float(value)
        except ValueError:
            raise ValidationError(f"Row {row_number}: {field} is not a number ({value!r})") from None

    @staticmethod
    def load_line_items(filepath: str) -> List[LineItem]:
        """
        Load line items from an Excel or CSV file.

        Expected columns:
        - Description
        - Quantity
        - Unit Price (or Price)
        - Item Type (optional, default MATERIAL)

        Args:
            filepath: Path to the file

        Returns:
            List of LineItem objects in file order
        """
        df = DataLoader._read_table(filepath)
        if 'quantity' not in df.columns:
            raise ValidationError(f"{filepath}: no 'Quantity' column")

        items = []
        for position, (_, row) in enumerate(df.iterrows()):
            # +2: one for the header line, one for 1-based numbering
            row_number = position + 2
            unit_price = DataLoader._first_value(row, UNIT_PRICE_COLUMNS)
            item_type = DataLoader._first_value(row, ITEM_TYPE_COLUMNS)
            item_type = str(item_type).strip().upper() if item_type is not None else 'MATERIAL'
            if item_type not in ITEM_TYPES:
                raise ValidationError(f"Row {row_number}: unknown item type {item_type!r}")
            description = row.get('description')

            items.append(LineItem(
                description=str(description) if pd.notna(description) else "",
                quantity=DataLoader._to_float(row.get('quantity'), 'Quantity', row_number),
                unit_price=DataLoader._to_float(unit_price, 'Unit price', row_number),
                item_type=item_type,
            ))

        return items

    @staticmethod
    def load_payments(filepath: str) -> List[Payment]:
        """
        Load recorded payments from an Excel or CSV file.

        Expected columns:
        - Amount
        - Method: Cash, BenefitPay, Card, Bank Transfer, Cheque, Online
        - Reference (optional, required for BenefitPay when submitting)
        - Date (optional)
        - Notes (optional)
        """
        df = DataLoader._read_table(filepath)
        if 'amount' not in df.columns:
            raise ValidationError(f"{filepath}: no 'Amount' column")

        payments = []
        for position, (_, row) in enumerate(df.iterrows()):
            row_number = position + 2
            method = row.get('method', 'CASH')
            if pd.isna(method):
                method = 'CASH'
            try:
                method = PaymentMethod.parse(str(method))
            except ValidationError as e:
                raise ValidationError(f"Row {row_number}: {e}") from None

            recorded_at = datetime.now()
            if 'date' in df.columns and pd.notna(row.get('date')):
                recorded_at = pd.to_datetime(row['date']).to_pydatetime()

            reference = DataLoader._first_value(row, REFERENCE_COLUMNS)
            if isinstance(reference, float) and reference.is_integer():
                # Numeric references come back as floats when the column has blanks
                reference = int(reference)
            notes = row.get('notes')

            payments.append(Payment(
                amount=DataLoader._to_float(row.get('amount'), 'Amount', row_number),
                method=method,
                reference_number=str(reference).strip() if reference is not None else None,
                recorded_at=recorded_at,
                notes=str(notes) if notes is not None and pd.notna(notes) else "",
            ))

        return payments
