"""Main entry point for Field Billing"""
import argparse
import sys
from datetime import datetime

from billing.data_loader import DataLoader
from billing.errors import ValidationError, CalculationError, PayloadError
from billing.formatting import format_money
from billing.html_exporter import HTMLInvoiceExporter
from billing.invoice import Invoice
from billing.models import LaborCharge, DEFAULT_CURRENCY
from billing.report_generator import ReportGenerator
from config import DEFAULT_TAX_RATE, DEFAULT_LABOR_HOURS, DEFAULT_LABOR_RATE, DEFAULT_DISCOUNT


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate a work-order invoice statement')
    parser.add_argument('items_file', help='Path to Excel/CSV file with line items')
    parser.add_argument('--invoice-no', '-n', default='', help='Invoice number shown on the statement')
    parser.add_argument('--hours', type=float, default=DEFAULT_LABOR_HOURS,
                        help=f'Labor hours. Default: {DEFAULT_LABOR_HOURS}')
    parser.add_argument('--rate', type=float, default=DEFAULT_LABOR_RATE,
                        help=f'Labor rate per hour. Default: {DEFAULT_LABOR_RATE}')
    parser.add_argument('--tax', type=float, default=DEFAULT_TAX_RATE,
                        help=f'Tax rate in percent (e.g., 10 for 10%%). Default: {DEFAULT_TAX_RATE}')
    parser.add_argument('--discount', type=float, default=DEFAULT_DISCOUNT, help='Flat discount amount')
    parser.add_argument('--payments', '-p', default=None, help='Excel/CSV file with recorded payments')
    parser.add_argument('--output', '-o', default=None, help='Output Excel file path')
    parser.add_argument('--html', default=None, help='Also write an HTML statement to this path')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    currency = DEFAULT_CURRENCY

    try:
        items = DataLoader.load_line_items(args.items_file)
        print(f"Loaded {len(items)} line items")

        invoice = Invoice(
            line_items=items,
            labor_charge=LaborCharge(hours=args.hours, rate_per_hour=args.rate),
            tax_rate=args.tax,
            discount=args.discount,
            invoice_no=args.invoice_no,
        )
        totals = invoice.generate()

        if args.payments:
            payments = DataLoader.load_payments(args.payments)
            for payment in payments:
                invoice.add_payment(payment)
            print(f"Recorded {len(payments)} payments")
    except (ValidationError, CalculationError, PayloadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Output path
    if args.output:
        output_path = args.output
    else:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_path = f"output/invoices/{args.invoice_no or 'invoice'}_{timestamp}.xlsx"

    ReportGenerator(invoice, currency).export_excel(output_path)
    print(f"Statement saved to: {output_path}")
    if args.html:
        HTMLInvoiceExporter(invoice, currency).export_html(args.html)
        print(f"HTML statement saved to: {args.html}")

    # Print summary
    print(f"\n=== Summary ===")
    print(f"Materials: {format_money(totals.materials_subtotal, currency)}")
    print(f"Labor: {format_money(totals.labor_total, currency)}")
    print(f"Subtotal: {format_money(totals.subtotal, currency)}")
    print(f"Tax ({totals.tax_rate:g}%): {format_money(totals.tax_amount, currency)}")
    if totals.discount > 0:
        print(f"Discount: -{format_money(totals.discount, currency)}")
        if totals.discount > totals.subtotal + totals.tax_amount:
            print("  → Discount exceeds subtotal + tax; total clamped to zero")
    print(f"Total: {format_money(totals.total, currency)}")
    print(f"Paid: {format_money(invoice.amount_paid, currency)}")
    print(f"Balance Due: {format_money(invoice.balance_due, currency)}")
    if invoice.is_fully_paid:
        print("  → Invoice is fully paid")
    return 0


if __name__ == '__main__':
    sys.exit(main())
