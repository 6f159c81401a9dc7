"""Excel invoice statement for Field Billing"""
import pandas as pd
from pathlib import Path
from typing import List, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from .formatting import format_money
from .invoice import Invoice
from .models import Currency, DEFAULT_CURRENCY
from config import COMPANY_NAME, EXCEL_STYLES, PAYMENT_METHODS


class ReportGenerator:
    """
    Generates an Excel statement for a generated invoice.
    """

    COLUMNS = ['Description', 'Type', 'Qty', 'Unit Price', 'Total']

    def __init__(self, invoice: Invoice, currency: Currency = DEFAULT_CURRENCY):
        self.invoice = invoice
        self.currency = currency

    def _money(self, value: float) -> str:
        return format_money(value, self.currency)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Line items plus a labor row, with display-formatted amounts.
        """
        data = []
        for item in self.invoice.line_items:
            data.append({
                'Description': item.description,
                'Type': item.item_type.title(),
                'Qty': item.quantity,
                'Unit Price': self._money(item.unit_price),
                'Total': self._money(item.line_total),
            })

        labor = self.invoice.labor_charge
        if labor.hours > 0:
            data.append({
                'Description': 'Labor',
                'Type': 'Labor',
                'Qty': labor.hours,
                'Unit Price': self._money(labor.rate_per_hour),
                'Total': self._money(labor.labor_total),
            })

        return pd.DataFrame(data, columns=self.COLUMNS)

    def get_summary_rows(self) -> List[Tuple[str, float]]:
        """Label/amount pairs printed under the line items."""
        # Drafts have no payments yet, so only the preview totals are shown
        generated = self.invoice.totals is not None
        totals = self.invoice.totals if generated else self.invoice.preview_totals()

        summary = [
            ('Materials Subtotal', totals.materials_subtotal),
            ('Labor', totals.labor_total),
            ('Subtotal', totals.subtotal),
            (f"Tax ({totals.tax_rate:g}%)", totals.tax_amount),
        ]
        if totals.discount > 0:
            summary.append(('Discount', -totals.discount))
        summary.append(('Total', totals.total))

        if generated:
            summary.append(('Amount Paid', self.invoice.amount_paid))
            summary.append(('Balance Due', self.invoice.balance_due))
        return summary

    def get_payment_rows(self) -> List[Tuple[str, str, str, float]]:
        """Date, method, reference and amount for each payment."""
        return [
            (
                p.recorded_at.strftime('%d/%m/%Y'),
                PAYMENT_METHODS.get(p.method.value, p.method.value),
                p.reference_number or '',
                p.amount,
            )
            for p in self.invoice.payments
        ]

    def export_excel(self, filepath: str) -> None:
        """
        Export the statement to an Excel file.

        Args:
            filepath: Path to save the Excel file
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Invoice"

        # Styles
        header_fill = PatternFill(start_color=EXCEL_STYLES['header_bg_color'],
                                  end_color=EXCEL_STYLES['header_bg_color'],
                                  fill_type='solid')
        summary_fill = PatternFill(start_color=EXCEL_STYLES['summary_bg_color'],
                                   end_color=EXCEL_STYLES['summary_bg_color'],
                                   fill_type='solid')
        header_font = Font(name=EXCEL_STYLES['font_name'],
                           size=EXCEL_STYLES['font_size'],
                           bold=True)
        title_font = Font(name=EXCEL_STYLES['font_name'],
                          size=14,
                          bold=True)
        border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        decimals = '0' * self.currency.decimal_places
        number_format = f'#,##0.{decimals}' if decimals else '#,##0'

        # Title section
        ws['A1'] = COMPANY_NAME
        ws['A1'].font = title_font

        ws['A2'] = f"Invoice: {self.invoice.invoice_no or '-'}"
        ws['A2'].font = Font(size=12, bold=True)
        ws['A3'] = f"Status: {self.invoice.status.value.replace('_', ' ').title()}"

        # Line items start at row 5
        df = self.to_dataframe()
        start_row = 5

        for col_idx, col_name in enumerate(df.columns, 1):
            cell = ws.cell(row=start_row, column=col_idx, value=col_name)
            cell.fill = header_fill
            cell.font = header_font
            cell.border = border
            cell.alignment = Alignment(horizontal='center')

        for row_idx, row in enumerate(df.itertuples(index=False), 1):
            for col_idx, value in enumerate(row, 1):
                cell = ws.cell(row=start_row + row_idx, column=col_idx, value=value)
                cell.border = border
                if col_idx >= 3:
                    cell.alignment = Alignment(horizontal='right')

        # Totals block
        current_row = start_row + len(df) + 2
        for label, amount in self.get_summary_rows():
            label_cell = ws.cell(row=current_row, column=4, value=label)
            amount_cell = ws.cell(row=current_row, column=5, value=round(amount, self.currency.decimal_places))
            amount_cell.number_format = number_format
            amount_cell.alignment = Alignment(horizontal='right')
            for cell in (label_cell, amount_cell):
                cell.border = border
                if label in ('Total', 'Balance Due'):
                    cell.fill = summary_fill
                    cell.font = Font(bold=True)
            current_row += 1

        # Payments
        payment_rows = self.get_payment_rows()
        if payment_rows:
            current_row += 1
            for col_idx, col_name in enumerate(['Date', 'Method', 'Reference', 'Amount'], 1):
                cell = ws.cell(row=current_row, column=col_idx, value=col_name)
                cell.fill = header_fill
                cell.font = header_font
                cell.border = border
            for values in payment_rows:
                current_row += 1
                for col_idx, value in enumerate(values, 1):
                    cell = ws.cell(row=current_row, column=col_idx, value=value)
                    cell.border = border
                    if col_idx == 4:
                        cell.number_format = number_format

        # Adjust column widths
        column_widths = [35, 12, 14, 16, 16]
        for idx, width in enumerate(column_widths, 1):
            ws.column_dimensions[chr(64 + idx)].width = width

        # Save
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        wb.save(filepath)
