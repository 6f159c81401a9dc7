"""Translate remote API JSON payloads into billing models"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from .errors import PayloadError, ValidationError
from .models import LineItem, Payment, PaymentMethod, Currency, DEFAULT_CURRENCY, ITEM_TYPES


def unwrap_envelope(payload: Any) -> Any:
    """
    Return the `data` member of a `{"success": ..., "data": ...}` response.

    Bare arrays or objects without the envelope are rejected rather than
    guessed at.
    """
    if not isinstance(payload, dict) or 'success' not in payload or 'data' not in payload:
        raise PayloadError("Response is not an API envelope with 'success' and 'data'")
    if payload['success'] is not True:
        raise PayloadError(payload.get('message') or "API reported failure")
    return payload['data']


def _require(record: Dict[str, Any], key: str, kind: str) -> Any:
    if not isinstance(record, dict):
        raise PayloadError(f"{kind} record must be an object, got {type(record).__name__}")
    if key not in record or record[key] is None:
        raise PayloadError(f"{kind} record is missing '{key}'")
    return record[key]


def _number(record: Dict[str, Any], key: str, kind: str) -> float:
    value = _require(record, key, kind)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"{kind} field '{key}' must be a number, got {value!r}")
    return float(value)


def parse_line_item(record: Dict[str, Any]) -> LineItem:
    """Parse `{description, quantity, unitPrice, itemType}`."""
    description = str(_require(record, 'description', 'Item'))
    item_type = record.get('itemType') or 'MATERIAL'
    if item_type not in ITEM_TYPES:
        raise PayloadError(f"Unknown item type: {item_type!r}")
    return LineItem(
        description=description,
        quantity=_number(record, 'quantity', 'Item'),
        unit_price=_number(record, 'unitPrice', 'Item'),
        item_type=item_type,
    )


def _parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now()
    try:
        # fromisoformat does not take the trailing 'Z' before Python 3.11
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        raise PayloadError(f"Invalid timestamp: {value!r}") from None


def parse_payment(record: Dict[str, Any]) -> Payment:
    """Parse `{amount, paymentMethod, referenceNumber, notes, receivedAt}`."""
    try:
        method = PaymentMethod.parse(_require(record, 'paymentMethod', 'Payment'))
    except ValidationError as e:
        raise PayloadError(str(e)) from None
    reference = record.get('referenceNumber', record.get('reference'))
    return Payment(
        amount=_number(record, 'amount', 'Payment'),
        method=method,
        reference_number=reference or None,
        recorded_at=_parse_timestamp(record.get('receivedAt') or record.get('createdAt')),
        notes=record.get('notes') or "",
    )


def parse_currency(record: Dict[str, Any]) -> Currency:
    """Parse `{symbol, symbolPosition, decimalPlaces, code, isDefault}`."""
    decimal_places = _require(record, 'decimalPlaces', 'Currency')
    if isinstance(decimal_places, bool) or not isinstance(decimal_places, int):
        raise PayloadError(f"Currency field 'decimalPlaces' must be an integer, got {decimal_places!r}")
    try:
        return Currency(
            symbol=str(_require(record, 'symbol', 'Currency')),
            symbol_position=record.get('symbolPosition') or 'before',
            decimal_places=decimal_places,
            code=record.get('code') or "",
            is_default=bool(record.get('isDefault', False)),
        )
    except ValidationError as e:
        raise PayloadError(str(e)) from None


def select_default_currency(currencies: List[Currency]) -> Currency:
    """The currency flagged as default, else the first one, else BHD."""
    for currency in currencies:
        if currency.is_default:
            return currency
    if currencies:
        return currencies[0]
    print(f"⚠️ No currencies configured, using default {DEFAULT_CURRENCY.code}")
    return DEFAULT_CURRENCY


def build_payment_request(
    method: PaymentMethod,
    amount: float,
    reference_number: Optional[str] = None,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Body for POSTing a new payment to an invoice."""
    body: Dict[str, Any] = {
        'amount': amount,
        'paymentMethod': PaymentMethod.parse(method).value,
    }
    reference = (reference_number or "").strip()
    if reference:
        body['referenceNumber'] = reference
    if notes:
        body['notes'] = notes
    return body
