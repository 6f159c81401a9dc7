"""Invoice aggregate with its payment-progress lifecycle"""
from typing import List, Optional, Sequence, Tuple

from .calculator import BillingCalculator
from .errors import ValidationError
from .models import (
    LineItem, LaborCharge, InvoiceTotals, Payment, InvoiceStatus, Currency,
    DEFAULT_CURRENCY,
)


class Invoice:
    """
    Billing record for one work order.

    Lifecycle:
    ==========

    DRAFT           line items and labor can still change, no totals yet
    GENERATED       totals frozen by generate(), no payments
    PARTIALLY_PAID  0 < amount paid < total
    FULLY_PAID      amount paid >= total (terminal)

    Payments are append-only. There is no way to remove a payment or to
    reopen a fully paid invoice.
    """

    def __init__(
        self,
        line_items: Sequence[LineItem] = (),
        labor_charge: Optional[LaborCharge] = None,
        tax_rate: float = 0.0,
        discount: float = 0.0,
        invoice_no: str = "",
        calculator: Optional[BillingCalculator] = None,
    ):
        self.invoice_no = invoice_no
        self._line_items: List[LineItem] = list(line_items)
        self.labor_charge = labor_charge or LaborCharge(hours=0, rate_per_hour=0)
        self.tax_rate = tax_rate
        self.discount = discount
        self.calculator = calculator or BillingCalculator()
        self.totals: Optional[InvoiceTotals] = None
        self._payments: List[Payment] = []

    @property
    def line_items(self) -> Tuple[LineItem, ...]:
        return tuple(self._line_items)

    @property
    def payments(self) -> Tuple[Payment, ...]:
        return tuple(self._payments)

    def add_line_item(self, item: LineItem) -> None:
        """Add a line item while the invoice is still a draft."""
        if self.totals is not None:
            raise ValidationError("Line items are frozen once the invoice is generated")
        self._line_items.append(item)

    def preview_totals(self) -> InvoiceTotals:
        """Totals for the current draft values, without freezing them."""
        return self.calculator.calculate_invoice(
            self._line_items, self.labor_charge, self.tax_rate, self.discount
        )

    def generate(self) -> InvoiceTotals:
        """Freeze the totals and move DRAFT -> GENERATED."""
        if self.totals is not None:
            raise ValidationError("Invoice has already been generated")
        self.totals = self.preview_totals()
        return self.totals

    @property
    def total(self) -> float:
        if self.totals is None:
            raise ValidationError("Invoice has not been generated yet")
        return self.totals.total

    @property
    def amount_paid(self) -> float:
        return self.calculator.aggregate_payments(self._payments)

    @property
    def balance_due(self) -> float:
        return self.calculator.compute_balance_due(self.total, self.amount_paid)

    @property
    def is_fully_paid(self) -> bool:
        return self.calculator.is_fully_paid(self.total, self.amount_paid)

    @property
    def status(self) -> InvoiceStatus:
        if self.totals is None:
            return InvoiceStatus.DRAFT
        if self.is_fully_paid:
            # A zero-total invoice is settled the moment it is generated
            return InvoiceStatus.FULLY_PAID
        if not self._payments:
            return InvoiceStatus.GENERATED
        return InvoiceStatus.PARTIALLY_PAID

    def add_payment(self, payment: Payment) -> InvoiceStatus:
        """
        Record a payment against the invoice.

        The payment is validated before it is appended, so a rejected
        payment leaves the invoice untouched.

        Args:
            payment: The payment to record

        Returns:
            The invoice status after the payment

        Raises:
            ValidationError: if the invoice is a draft or already fully paid,
                or the payment itself is invalid
        """
        status = self.status
        if status == InvoiceStatus.DRAFT:
            raise ValidationError("Payments can only be recorded on a generated invoice")
        if status == InvoiceStatus.FULLY_PAID:
            raise ValidationError("Invoice is already fully paid")

        self.calculator.validate_payment_submission(
            payment.method, payment.amount, payment.reference_number, self.balance_due
        )
        self._payments.append(payment)
        return self.status

    def suggested_payment_amount(self, currency: Currency = DEFAULT_CURRENCY) -> float:
        """Balance due rounded to the currency's precision (the "pay full amount" value)."""
        return round(self.balance_due, currency.decimal_places)
