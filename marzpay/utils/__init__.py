"""
Utility modules for MarzPay API operations.
"""

from .http_client import RequestGateway
from .phone import PhoneNumberUtils
from .validators import (
    is_valid_uuid,
    validate_phone_number,
    validate_amount,
    validate_reference,
    validate_uuid,
)
from .formatters import (
    format_amount,
    parse_amount,
    generate_reference,
)

__all__ = [
    'RequestGateway',
    'PhoneNumberUtils',
    'is_valid_uuid',
    'validate_phone_number',
    'validate_amount',
    'validate_reference',
    'validate_uuid',
    'format_amount',
    'parse_amount',
    'generate_reference',
]
