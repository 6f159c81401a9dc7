"""Invoice and payment calculation logic for Field Billing"""
import math
from numbers import Real
from typing import Iterable, List, Optional, Union, TYPE_CHECKING

from .errors import ValidationError, CalculationError
from .models import (
    LineItem, LaborCharge, LaborEntry, InvoiceTotals, Payment, PaymentMethod,
)
from config import REFERENCE_REQUIRED_METHODS

if TYPE_CHECKING:
    from .invoice import Invoice


def _require_amount(value, name: str, allow_zero: bool = True) -> float:
    """Reject anything that is not a finite, non-negative number."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number")
    if value < 0 or (value == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "greater than zero"
        raise ValidationError(f"{name} must be {qualifier}, got {value}")
    return value


def _checked(value: float, name: str) -> float:
    if not math.isfinite(value):
        raise CalculationError(f"{name} is not a finite number ({value})")
    return value


class BillingCalculator:
    """
    Calculates invoice totals and payment progress for a work order.

    Business Logic:
    ===============

    Materials:  sum of quantity x unit price over every line item
    Labor:      hours x hourly rate
    Subtotal:   materials + labor
    Tax:        subtotal x tax rate / 100
    Total:      subtotal + tax - discount, never below zero

    A discount larger than subtotal + tax is accepted; the total is clamped
    to zero rather than rejected.

    Payments:
    - Amount paid is the sum of all recorded payments (order does not matter)
    - Balance due = total - amount paid, never below zero
    - Overpaying is allowed; the excess is not tracked as credit

    The calculator holds no state, so one instance can be shared freely.
    """

    def compute_materials_subtotal(self, items: Iterable[LineItem]) -> float:
        """
        Sum quantity x unit price over all line items.

        Args:
            items: Line items of the work order (may be empty)

        Returns:
            Materials subtotal, 0 for no items

        Raises:
            ValidationError: if any quantity or unit price is negative
        """
        totals = []
        for index, item in enumerate(items, 1):
            quantity = _require_amount(item.quantity, f"Item {index} quantity")
            unit_price = _require_amount(item.unit_price, f"Item {index} unit price")
            totals.append(quantity * unit_price)
        return _checked(math.fsum(totals), "Materials subtotal")

    def compute_labor_total(self, charge: LaborCharge) -> float:
        """Hours x rate. Raises ValidationError if either is negative."""
        hours = _require_amount(charge.hours, "Labor hours")
        rate = _require_amount(charge.rate_per_hour, "Labor rate")
        return _checked(hours * rate, "Labor total")

    def compute_labor_hours(self, entries: Iterable[LaborEntry]) -> float:
        """
        Total hours worked over closed clock-in/clock-out sessions.

        Break minutes are deducted per session; a session can not go below
        zero. Sessions that are still open (no clock out) are skipped.
        """
        seconds = []
        for entry in entries:
            if entry.is_open:
                continue
            breaks = _require_amount(entry.break_minutes, "Break minutes")
            elapsed = (entry.clock_out_at - entry.clock_in_at).total_seconds()
            if elapsed < 0:
                raise ValidationError(
                    f"Clock out ({entry.clock_out_at}) is before clock in ({entry.clock_in_at})"
                )
            seconds.append(max(0.0, elapsed - breaks * 60))
        return math.fsum(seconds) / 3600

    def compute_invoice_totals(
        self,
        materials_subtotal: float,
        labor_total: float,
        tax_rate_percent: float,
        discount: float,
    ) -> InvoiceTotals:
        """
        Calculate subtotal, tax and the final total.

        Args:
            materials_subtotal: From compute_materials_subtotal
            labor_total: From compute_labor_total
            tax_rate_percent: Tax rate in percent (10 means 10%)
            discount: Flat discount amount

        Returns:
            InvoiceTotals with total clamped at zero
        """
        materials_subtotal = _require_amount(materials_subtotal, "Materials subtotal")
        labor_total = _require_amount(labor_total, "Labor total")
        tax_rate = _require_amount(tax_rate_percent, "Tax rate")
        discount = _require_amount(discount, "Discount")

        subtotal = _checked(materials_subtotal + labor_total, "Subtotal")
        tax_amount = _checked(subtotal * tax_rate / 100, "Tax amount")
        total = _checked(max(0.0, subtotal + tax_amount - discount), "Total")

        return InvoiceTotals(
            materials_subtotal=materials_subtotal,
            labor_total=labor_total,
            subtotal=subtotal,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            discount=discount,
            total=total,
        )

    def calculate_invoice(
        self,
        items: Iterable[LineItem],
        charge: LaborCharge,
        tax_rate_percent: float,
        discount: float = 0.0,
    ) -> InvoiceTotals:
        """Compute totals straight from line items and a labor charge."""
        return self.compute_invoice_totals(
            self.compute_materials_subtotal(items),
            self.compute_labor_total(charge),
            tax_rate_percent,
            discount,
        )

    def aggregate_payments(self, payments: Iterable[Payment]) -> float:
        """
        Sum the amounts of all payments.

        math.fsum is exactly rounded, so any ordering of the same payments
        gives the same result.

        Raises:
            ValidationError: if any payment amount is zero or negative
        """
        amounts = [
            _require_amount(p.amount, f"Payment {index} amount", allow_zero=False)
            for index, p in enumerate(payments, 1)
        ]
        return _checked(math.fsum(amounts), "Amount paid")

    def compute_balance_due(self, total: float, paid_amount: float) -> float:
        """Remaining amount to collect, floored at zero."""
        total = _require_amount(total, "Total")
        paid_amount = _require_amount(paid_amount, "Amount paid")
        return _checked(max(0.0, total - paid_amount), "Balance due")

    def is_fully_paid(self, total: float, paid_amount: float) -> bool:
        total = _require_amount(total, "Total")
        paid_amount = _require_amount(paid_amount, "Amount paid")
        return paid_amount >= total

    def validate_payment_submission(
        self,
        method: Union[PaymentMethod, str],
        amount: float,
        reference_number: Optional[str],
        balance_due: float,
    ) -> None:
        """
        Check a payment before it is submitted.

        Amounts above balance_due are accepted; the balance simply
        bottoms out at zero.

        Raises:
            ValidationError: non-positive amount, unknown method, or a
                BenefitPay payment without a reference number
        """
        method = PaymentMethod.parse(method)
        _require_amount(amount, "Payment amount", allow_zero=False)
        if method.value in REFERENCE_REQUIRED_METHODS:
            if reference_number is None or not str(reference_number).strip():
                raise ValidationError(
                    f"A reference number is required for {method.value} payments"
                )

    def calculate_summary(self, invoices: List['Invoice']) -> dict:
        """
        Calculate summary totals for a list of generated invoices.

        Args:
            invoices: Invoice objects (drafts are skipped)

        Returns:
            Dictionary with summary totals
        """
        generated = [inv for inv in invoices if inv.totals is not None]
        return {
            'invoice_count': len(generated),
            'total_billed': math.fsum(inv.totals.total for inv in generated),
            'total_paid': math.fsum(inv.amount_paid for inv in generated),
            'total_balance_due': math.fsum(inv.balance_due for inv in generated),
            'fully_paid_count': sum(1 for inv in generated if inv.is_fully_paid),
        }
