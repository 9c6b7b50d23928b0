"""
Data formatting utilities for MarzPay API operations.
"""

import calendar
import re
import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Tuple, Union

from ..constants import DEFAULT_CURRENCY, ReportPeriod
from ..exceptions import MarzPayError


def format_amount(
    amount: Union[int, float, Decimal, str],
    currency: str = DEFAULT_CURRENCY,
    decimal_places: int = 2
) -> str:
    """
    Format amount with currency code and thousand separators.

    Returns:
        Formatted string (e.g., "UGX 5,000.00")

    Raises:
        ValueError: If amount is not a finite number
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Amount must be a valid number. Got: {amount!r}")

    if not value.is_finite():
        raise ValueError(f"Amount must be a valid number. Got: {amount!r}")

    return f"{currency} {value:,.{decimal_places}f}"


def parse_amount(amount_string: str, currency: str = DEFAULT_CURRENCY) -> Decimal:
    """
    Parse a formatted amount such as "UGX 5,000.00".

    Raises:
        ValueError: If the string does not contain a number
    """
    if not amount_string or not isinstance(amount_string, str):
        raise ValueError("Amount string is required and must be a string")

    cleaned = re.sub(rf'\s*{re.escape(currency)}\s*', '', amount_string, flags=re.IGNORECASE)
    cleaned = cleaned.replace(',', '').strip()

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Invalid amount format: {amount_string}")


def parse_marzpay_amount(amount: Any) -> Decimal:
    """
    Parse amount from a MarzPay response.
    Amounts arrive as strings or as ``{"raw": ..., "formatted": ...}`` objects.
    """
    if isinstance(amount, dict):
        amount = amount.get('raw')
    try:
        return Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal('0')


def generate_reference() -> str:
    """Generate a UUID4 transaction reference."""
    return str(uuid.uuid4())


def format_date(value: Union[date, datetime, str]) -> str:
    """Format a date as YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return datetime.fromisoformat(value).date().isoformat()


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by ``months`` calendar months, clamping to the month's last day."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def month_bounds(year: int, month: int) -> Tuple[str, str]:
    """First and last day of a month as YYYY-MM-DD strings."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1).isoformat(), date(year, month, last_day).isoformat()


def lookback_range(period, count: int, today: Optional[date] = None) -> Tuple[str, str]:
    """
    Date range covering the last ``count`` periods up to today.

    Returns:
        (start, end) as YYYY-MM-DD strings
    """
    end = today or date.today()
    period = ReportPeriod(getattr(period, 'value', period))

    if period is ReportPeriod.DAILY:
        start = end - timedelta(days=count)
    elif period is ReportPeriod.WEEKLY:
        start = end - timedelta(weeks=count)
    else:
        start = shift_months(end, -count)

    return start.isoformat(), end.isoformat()


def clean_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset query parameters and unwrap enum members."""
    cleaned = {}
    for key, value in params.items():
        if value is None or value == '':
            continue
        cleaned[key] = getattr(value, 'value', value)
    return cleaned


def response_section(payload: Any, *keys: str, expected: type = dict) -> Any:
    """
    Walk nested objects of a decoded response.

    A missing or null section yields an empty ``expected``.

    Raises:
        DecodeError: If the response does not have the documented shape
    """
    path = 'response'
    current = payload
    for key in keys:
        if not isinstance(current, dict):
            raise MarzPayError.decode_error(f"Unexpected response structure: {path} is not an object", 0)
        path = f"{path}.{key}"
        current = current.get(key)
        if current is None:
            return expected()

    if not isinstance(current, expected):
        raise MarzPayError.decode_error(
            f"Unexpected response structure: {path} is not a {expected.__name__}", 0
        )
    return current
