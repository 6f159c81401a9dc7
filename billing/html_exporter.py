"""HTML invoice exporter for Field Billing"""
from html import escape
from pathlib import Path

from .formatting import format_money
from .invoice import Invoice
from .models import Currency, DEFAULT_CURRENCY
from .report_generator import ReportGenerator
from config import COMPANY_NAME


class HTMLInvoiceExporter:
    """
    Generates a printable HTML invoice statement.
    Same content as the Excel statement.
    """

    HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        * {{
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }}

        body {{
            font-family: Arial, sans-serif;
            font-size: 11px;
            background-color: #f5f5f5;
            padding: 20px;
        }}

        .report-container {{
            max-width: 800px;
            margin: 0 auto;
            background-color: white;
            padding: 20px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.1);
        }}

        .report-title {{
            text-align: center;
            font-size: 16px;
            font-weight: bold;
            margin-bottom: 6px;
            color: #333;
        }}

        .report-status {{
            text-align: center;
            margin-bottom: 20px;
            color: #666;
        }}

        table {{
            width: 100%;
            border-collapse: collapse;
            margin-top: 10px;
        }}

        th {{
            background-color: #d3d3d3;
            color: #333;
            font-weight: bold;
            padding: 10px 8px;
            text-align: center;
            border: 1px solid #999;
            font-size: 12px;
        }}

        td {{
            padding: 8px;
            border: 1px solid #ccc;
            vertical-align: middle;
        }}

        .col-text {{
            text-align: left;
        }}

        .col-money {{
            text-align: right;
            width: 110px;
        }}

        .summary-row {{
            background-color: #00ffff !important;
            font-weight: bold;
        }}

        .paid {{
            color: #060;
        }}

        .due {{
            color: #c00;
        }}

        @media print {{
            body {{
                background-color: white;
                padding: 0;
            }}

            .report-container {{
                box-shadow: none;
                padding: 10px;
            }}
        }}
    </style>
</head>
<body>
    <div class="report-container">
        <div class="report-title">{title}</div>
        <div class="report-status">{status}</div>
        <table>
            <thead>
                <tr>
                    <th>Description</th>
                    <th>Type</th>
                    <th>Qty</th>
                    <th>Unit Price</th>
                    <th>Total</th>
                </tr>
            </thead>
            <tbody>
{rows}
            </tbody>
        </table>
        <table>
            <tbody>
{summary}
            </tbody>
        </table>
{payments}
    </div>
</body>
</html>"""

    ROW_TEMPLATE = """                <tr>
                    <td class="col-text">{description}</td>
                    <td class="col-text">{item_type}</td>
                    <td class="col-money">{quantity}</td>
                    <td class="col-money">{unit_price}</td>
                    <td class="col-money">{total}</td>
                </tr>"""

    SUMMARY_ROW_TEMPLATE = """                <tr{row_class}>
                    <td class="col-text">{label}</td>
                    <td class="col-money {amount_class}">{amount}</td>
                </tr>"""

    PAYMENT_ROW_TEMPLATE = """                <tr>
                    <td class="col-text">{date}</td>
                    <td class="col-text">{method}</td>
                    <td class="col-text">{reference}</td>
                    <td class="col-money">{amount}</td>
                </tr>"""

    def __init__(self, invoice: Invoice, currency: Currency = DEFAULT_CURRENCY):
        self.invoice = invoice
        self.currency = currency
        self.report = ReportGenerator(invoice, currency)

    def _format_money(self, value: float) -> str:
        if value < 0:
            return f"-{format_money(abs(value), self.currency)}"
        return format_money(value, self.currency)

    def generate_html(self) -> str:
        """Generate the HTML statement."""
        title = f"{COMPANY_NAME} - Invoice {self.invoice.invoice_no}".rstrip()

        rows = []
        for record in self.report.to_dataframe().to_dict('records'):
            rows.append(self.ROW_TEMPLATE.format(
                description=escape(str(record['Description'])),
                item_type=escape(str(record['Type'])),
                quantity=f"{record['Qty']:g}",
                unit_price=escape(record['Unit Price']),
                total=escape(record['Total']),
            ))

        summary_rows = []
        for label, amount in self.report.get_summary_rows():
            amount_class = ""
            if label == 'Balance Due':
                amount_class = "paid" if amount == 0 else "due"
            summary_rows.append(self.SUMMARY_ROW_TEMPLATE.format(
                row_class=' class="summary-row"' if label in ('Total', 'Balance Due') else '',
                label=escape(label),
                amount=escape(self._format_money(amount)),
                amount_class=amount_class,
            ))

        payments = ""
        payment_rows = self.report.get_payment_rows()
        if payment_rows:
            body = "\n".join(
                self.PAYMENT_ROW_TEMPLATE.format(
                    date=escape(day),
                    method=escape(method),
                    reference=escape(reference),
                    amount=escape(self._format_money(amount)),
                )
                for day, method, reference, amount in payment_rows
            )
            payments = (
                "        <table>\n"
                "            <thead>\n"
                "                <tr><th>Date</th><th>Method</th><th>Reference</th><th>Amount</th></tr>\n"
                "            </thead>\n"
                f"            <tbody>\n{body}\n            </tbody>\n"
                "        </table>"
            )

        status_text = self.invoice.status.value.replace("_", " ").title()

        return self.HTML_TEMPLATE.format(
            title=escape(title),
            status=escape(status_text),
            rows="\n".join(rows),
            summary="\n".join(summary_rows),
            payments=payments,
        )

    def export_html(self, filepath: str) -> None:
        """Export the statement to an HTML file."""
        html = self.generate_html()

        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(html)
