"""
Validation utilities for MarzPay API operations.

Each validator returns the cleaned value or raises a ``ValidationError``
subclass carrying the error code the API would use for the same problem.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional
from urllib.parse import urlparse

from ..constants import MAX_PER_PAGE, MAX_REFERENCE_LENGTH, ReferenceRule
from ..exceptions import (
    InvalidAmountError, InvalidPhoneNumberError, InvalidReferenceError, ValidationError
)
from .phone import PhoneNumberUtils

UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)
UUID4_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)
FREE_FORM_REFERENCE_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

_default_phone_utils = PhoneNumberUtils()


def is_valid_uuid(value) -> bool:
    return isinstance(value, str) and bool(UUID_PATTERN.match(value))


def is_valid_uuid4(value) -> bool:
    return isinstance(value, str) and bool(UUID4_PATTERN.match(value))


def is_valid_date(value) -> bool:
    """Check for a real calendar date in YYYY-MM-DD format."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_url(value) -> bool:
    if not isinstance(value, str):
        return False
    parsed = urlparse(value.strip())
    return bool(parsed.scheme and parsed.netloc)


def validate_phone_number(
    phone: str,
    phone_utils: Optional[PhoneNumberUtils] = None,
    code: str = 'INVALID_PHONE'
) -> str:
    """
    Validate and format phone number for Uganda.

    Args:
        phone: Phone number to validate
        phone_utils: Normalizer to use (default: standard Ugandan table)
        code: Error code raised for a malformed number

    Returns:
        Validated phone number in format: +256XXXXXXXXX

    Raises:
        InvalidPhoneNumberError: If phone number is missing or invalid
    """
    if not phone:
        raise InvalidPhoneNumberError("Phone number is required", 'MISSING_PHONE')

    formatted = (phone_utils or _default_phone_utils).normalize(phone)
    if formatted is None:
        raise InvalidPhoneNumberError("Invalid phone number format", code)

    return formatted


def validate_amount(amount, min_amount: int, max_amount: int, currency: str = 'UGX') -> int:
    """
    Validate a transaction amount against inclusive limits.

    Returns:
        Amount as a whole number of currency units

    Raises:
        InvalidAmountError: If amount is missing, malformed or out of range
    """
    message = f"Amount must be between {min_amount:,} and {max_amount:,} {currency}"

    if amount is None or isinstance(amount, bool):
        raise InvalidAmountError(message, 'INVALID_AMOUNT')

    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError(message, 'INVALID_AMOUNT')

    if not value.is_finite() or value < min_amount or value > max_amount:
        raise InvalidAmountError(message, 'INVALID_AMOUNT')

    return int(value)


def validate_reference(reference, rule: ReferenceRule = ReferenceRule.UUID4) -> str:
    """
    Validate a collection or disbursement reference.

    Args:
        reference: Reference supplied by the caller
        rule: ``uuid4`` requires a version 4 UUID; ``free_form`` accepts
            letters, numbers, hyphens and underscores

    Raises:
        InvalidReferenceError: If reference is missing or invalid
    """
    if not reference:
        raise InvalidReferenceError("Reference is required", 'MISSING_REFERENCE')

    if ReferenceRule(rule) is ReferenceRule.UUID4:
        if not is_valid_uuid4(reference):
            raise InvalidReferenceError("Reference must be a valid UUID4", 'INVALID_REFERENCE')
        return reference

    reference = str(reference).strip()

    if not reference:
        raise InvalidReferenceError("Reference cannot be empty", 'MISSING_REFERENCE')

    if len(reference) > MAX_REFERENCE_LENGTH:
        raise InvalidReferenceError(
            f"Reference too long. Maximum {MAX_REFERENCE_LENGTH} characters. "
            f"Got: {len(reference)} characters",
            'INVALID_REFERENCE'
        )

    if not FREE_FORM_REFERENCE_PATTERN.match(reference):
        raise InvalidReferenceError(
            "Reference can only contain letters, numbers, hyphens, and underscores",
            'INVALID_REFERENCE'
        )

    return reference


def validate_uuid(uuid, label: str) -> str:
    """
    Validate a resource UUID used in a lookup path.

    Raises:
        InvalidReferenceError: ``MISSING_UUID`` or ``INVALID_UUID``
    """
    if not uuid:
        raise InvalidReferenceError(f"{label} UUID is required", 'MISSING_UUID')

    if not is_valid_uuid(uuid):
        raise InvalidReferenceError("Invalid UUID format", 'INVALID_UUID')

    return uuid


def validate_choice(value, choices: Iterable, message: str, code: str) -> str:
    """Accept a plain string or enum member whose value is one of ``choices``."""
    value = getattr(value, 'value', value)
    allowed = [getattr(choice, 'value', choice) for choice in choices]
    if value not in allowed:
        raise ValidationError(message, code)
    return value


def validate_text(value, label: str, max_length: int, empty_code: str, length_code: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} must be a non-empty string", empty_code)

    if len(value) > max_length:
        raise ValidationError(f"{label} must be less than {max_length} characters", length_code)

    return value


def validate_pagination(page=None, per_page=None, max_per_page: int = MAX_PER_PAGE):
    if page is not None:
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValidationError("Page must be a positive integer", 'INVALID_PAGE')

    if per_page is not None:
        if isinstance(per_page, bool) or not isinstance(per_page, int) or not 1 <= per_page <= max_per_page:
            raise ValidationError(f"Per page must be between 1 and {max_per_page}", 'INVALID_PER_PAGE')


def validate_date_range(start_date=None, end_date=None):
    """
    Validate optional YYYY-MM-DD bounds.

    Raises:
        ValidationError: ``INVALID_START_DATE``, ``INVALID_END_DATE`` or
            ``INVALID_DATE_RANGE``
    """
    if start_date is not None and not is_valid_date(start_date):
        raise ValidationError("Start date must be in YYYY-MM-DD format", 'INVALID_START_DATE')

    if end_date is not None and not is_valid_date(end_date):
        raise ValidationError("End date must be in YYYY-MM-DD format", 'INVALID_END_DATE')

    if start_date and end_date and date.fromisoformat(start_date) > date.fromisoformat(end_date):
        raise ValidationError("Start date cannot be after end date", 'INVALID_DATE_RANGE')


def validate_count(count, maximum: int, label: str, code: str) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= maximum:
        raise ValidationError(f"{label} must be between 1 and {maximum}", code)
    return count
