"""
Account service for MarzPay account operations.
Handles account information, settings and status checks.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import (
    APIEndpoints, MAX_ADDRESS_LENGTH, MAX_CITY_LENGTH,
    MAX_COUNTRY_LENGTH, MAX_NAME_LENGTH
)
from ..exceptions import ValidationError
from ..utils.formatters import response_section
from ..utils.http_client import RequestGateway
from ..utils.phone import PhoneNumberUtils
from ..utils.validators import validate_phone_number, validate_text

logger = logging.getLogger(__name__)

# field: (label, max length, empty code, length code)
TEXT_FIELDS = {
    'business_name': ('Business name', MAX_NAME_LENGTH, 'INVALID_BUSINESS_NAME', 'BUSINESS_NAME_TOO_LONG'),
    'business_address': ('Business address', MAX_ADDRESS_LENGTH, 'INVALID_ADDRESS', 'ADDRESS_TOO_LONG'),
    'business_city': ('Business city', MAX_CITY_LENGTH, 'INVALID_CITY', 'CITY_TOO_LONG'),
    'business_country': ('Business country', MAX_COUNTRY_LENGTH, 'INVALID_COUNTRY', 'COUNTRY_TOO_LONG'),
}
PROFILE_FIELDS = ('business_name', 'contact_phone', 'business_address', 'business_city', 'business_country')


def _account(response: Dict[str, Any]) -> Dict[str, Any]:
    return response_section(response, 'data', 'account')


class AccountService:
    """
    Service for account-related operations.
    """

    def __init__(self, gateway: RequestGateway, phone_utils: Optional[PhoneNumberUtils] = None):
        self.gateway = gateway
        self.phone_utils = phone_utils or PhoneNumberUtils()

    def get_account_info(self) -> Dict[str, Any]:
        """
        Retrieve account information.

        Returns:
            API response with business details, status and limits
        """
        logger.info("Retrieving account information")
        return self.gateway.get(APIEndpoints.ACCOUNT)

    def update_account(self, **settings) -> Dict[str, Any]:
        """
        Update account settings.

        Accepts ``business_name``, ``contact_phone``, ``business_address``,
        ``business_city`` and ``business_country``. Fields left as None are
        not sent.

        Raises:
            ValidationError: If a field is invalid or nothing is provided
        """
        update_data = self.validate_account_settings(settings)

        if not update_data:
            raise ValidationError("No valid settings provided for update", 'NO_SETTINGS')

        logger.info(f"Updating account settings: {', '.join(sorted(update_data))}")
        return self.gateway.put(APIEndpoints.ACCOUNT, body=update_data)

    def validate_account_settings(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        """Validate settings and return the non-null values to send."""
        update_data = {}

        for field, (label, max_length, empty_code, length_code) in TEXT_FIELDS.items():
            value = settings.get(field)
            if value is not None:
                update_data[field] = validate_text(value, label, max_length, empty_code, length_code)

        contact_phone = settings.get('contact_phone')
        if contact_phone is not None:
            update_data['contact_phone'] = validate_phone_number(
                contact_phone, self.phone_utils, code='INVALID_CONTACT_PHONE'
            )

        return update_data

    def get_account_status(self) -> Dict[str, Any]:
        account = _account(self.get_account_info())
        return {
            'status': 'success',
            'data': {'account': {'status': account.get('status')}},
        }

    def is_account_active(self) -> bool:
        status = response_section(self.get_account_info(), 'data', 'account', 'status')
        return status.get('account_status') == 'active' and str(status.get('is_frozen')).lower() == 'false'

    def is_account_verified(self) -> bool:
        status = response_section(self.get_account_info(), 'data', 'account', 'status')
        return str(status.get('is_verified')).lower() == 'true'

    def get_account_limits(self) -> Dict[str, Any]:
        account = _account(self.get_account_info())
        return {
            'status': 'success',
            'data': {'account': {'limits': account.get('limits')}},
        }

    def get_business_profile(self) -> Dict[str, Any]:
        account = _account(self.get_account_info())
        return {
            'status': 'success',
            'data': {'account': {field: account.get(field) for field in PROFILE_FIELDS}},
        }
