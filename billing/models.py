"""Data models for Field Billing"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Literal, Union

from .errors import ValidationError
from config import DEFAULT_CURRENCY as _DEFAULT_CURRENCY

ItemType = Literal['MATERIAL', 'PART', 'CONSUMABLE', 'SERVICE', 'LABOR']
ITEM_TYPES = ('MATERIAL', 'PART', 'CONSUMABLE', 'SERVICE', 'LABOR')
SymbolPosition = Literal['before', 'after']


class PaymentMethod(str, Enum):
    """How a customer settled (part of) an invoice"""
    CASH = 'CASH'
    BENEFIT_PAY = 'BENEFIT_PAY'
    CARD = 'CARD'
    BANK_TRANSFER = 'BANK_TRANSFER'
    CHEQUE = 'CHEQUE'
    ONLINE = 'ONLINE'

    @classmethod
    def parse(cls, value: Union['PaymentMethod', str]) -> 'PaymentMethod':
        """
        Accept an enum member, its API code ('BENEFIT_PAY') or a loose
        label ('Benefit Pay', 'bank transfer').
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValidationError(f"Unknown payment method: {value!r}")
        code = value.strip().upper().replace('-', '_').replace(' ', '_')
        if code == 'BENEFITPAY':
            code = 'BENEFIT_PAY'
        try:
            return cls(code)
        except ValueError:
            raise ValidationError(f"Unknown payment method: {value!r}") from None


class WorkOrderStatus(str, Enum):
    """Where a work order is in the field visit"""
    PENDING = 'PENDING'
    SCHEDULED = 'SCHEDULED'
    CONFIRMED = 'CONFIRMED'
    EN_ROUTE = 'EN_ROUTE'
    ARRIVED = 'ARRIVED'
    IN_PROGRESS = 'IN_PROGRESS'
    ON_HOLD = 'ON_HOLD'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'
    REQUIRES_FOLLOWUP = 'REQUIRES_FOLLOWUP'


class InvoiceStatus(str, Enum):
    """Payment progress of an invoice"""
    DRAFT = 'DRAFT'
    GENERATED = 'GENERATED'
    PARTIALLY_PAID = 'PARTIALLY_PAID'
    FULLY_PAID = 'FULLY_PAID'


@dataclass(frozen=True)
class LineItem:
    """A material, part or service billed on a work order"""
    description: str
    quantity: float
    unit_price: float
    item_type: ItemType = 'MATERIAL'

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class LaborCharge:
    """Hours worked at an hourly rate"""
    hours: float
    rate_per_hour: float

    @property
    def labor_total(self) -> float:
        return self.hours * self.rate_per_hour


@dataclass(frozen=True)
class LaborEntry:
    """A single clock-in / clock-out session on a work order"""
    clock_in_at: datetime
    clock_out_at: Optional[datetime] = None
    break_minutes: float = 0.0

    @property
    def is_open(self) -> bool:
        """Still clocked in"""
        return self.clock_out_at is None


@dataclass(frozen=True)
class InvoiceTotals:
    """Result of an invoice calculation"""
    materials_subtotal: float
    labor_total: float
    subtotal: float
    tax_rate: float  # percent
    tax_amount: float
    discount: float
    total: float


@dataclass(frozen=True)
class Payment:
    """A payment recorded against an invoice. Immutable once recorded."""
    amount: float
    method: PaymentMethod
    reference_number: Optional[str] = None
    recorded_at: datetime = field(default_factory=datetime.now)
    notes: str = ""

    def __post_init__(self):
        # Frozen dataclass, so bypass __setattr__ to normalise the method
        object.__setattr__(self, 'method', PaymentMethod.parse(self.method))


@dataclass(frozen=True)
class Currency:
    """Display settings for monetary amounts"""
    symbol: str
    symbol_position: SymbolPosition = 'before'
    decimal_places: int = 2
    code: str = ""
    is_default: bool = False

    def __post_init__(self):
        if self.symbol_position not in ('before', 'after'):
            raise ValidationError("Symbol position must be 'before' or 'after'")
        if (not isinstance(self.decimal_places, int) or isinstance(self.decimal_places, bool)
                or self.decimal_places < 0):
            raise ValidationError("Decimal places must be a non-negative integer")


DEFAULT_CURRENCY = Currency(
    symbol=_DEFAULT_CURRENCY['symbol'],
    symbol_position=_DEFAULT_CURRENCY['symbol_position'],
    decimal_places=_DEFAULT_CURRENCY['decimal_places'],
    code=_DEFAULT_CURRENCY['code'],
    is_default=True,
)
