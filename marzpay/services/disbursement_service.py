"""
Disbursement service for MarzPay mobile money payouts.
Handles sending money to a customer's mobile wallet.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import (
    APIEndpoints, DEFAULT_COUNTRY, DEFAULT_CURRENCY,
    DISBURSEMENT_MAX_AMOUNT, DISBURSEMENT_MIN_AMOUNT, TransactionType
)
from ..exceptions import InvalidAmountError, InvalidReferenceError
from ..utils.formatters import clean_params, generate_reference
from ..utils.http_client import RequestGateway
from ..utils.phone import PhoneNumberUtils
from ..utils.validators import (
    validate_amount, validate_phone_number, validate_reference, validate_uuid
)

logger = logging.getLogger(__name__)


class DisbursementService:
    """
    Service for mobile money disbursement operations.
    Handles sending money, status queries and payout history.
    """

    def __init__(self, gateway: RequestGateway, phone_utils: Optional[PhoneNumberUtils] = None):
        self.gateway = gateway
        self.phone_utils = phone_utils or PhoneNumberUtils()

    def send_money(
        self,
        amount,
        phone_number: str,
        reference: str,
        description: Optional[str] = None,
        callback_url: Optional[str] = None,
        country: str = DEFAULT_COUNTRY
    ) -> Dict[str, Any]:
        """
        Send money to a customer via mobile money.

        Args:
            amount: Amount in UGX (1,000 - 500,000)
            phone_number: Beneficiary phone number in any supported format
            reference: Unique transaction reference
            description: Payment description
            callback_url: Webhook URL overriding the account default
            country: Country code

        Returns:
            API response containing the created transaction

        Raises:
            ValidationError: If input validation fails
            MarzPayError: If the API request fails
        """
        validated_amount = validate_amount(amount, DISBURSEMENT_MIN_AMOUNT, DISBURSEMENT_MAX_AMOUNT)
        validated_phone = validate_phone_number(phone_number, self.phone_utils)
        validated_reference = validate_reference(reference, self.gateway.config.reference_rule)

        logger.info(
            f"Sending {validated_amount} {DEFAULT_CURRENCY} to "
            f"{self.phone_utils.mask(validated_phone)}, reference: {validated_reference}"
        )

        payload = {
            'amount': validated_amount,
            'phone_number': validated_phone,
            'reference': validated_reference,
            'description': description,
            'callback_url': callback_url,
            'country': country,
        }

        response = self.gateway.post(APIEndpoints.SEND_MONEY, body=payload)
        logger.info(f"Disbursement initiated for reference: {validated_reference}")
        return response

    def get_disbursement(self, uuid: str) -> Dict[str, Any]:
        """
        Get disbursement details by transaction UUID.

        Raises:
            InvalidReferenceError: If the UUID is missing or malformed
        """
        validate_uuid(uuid, 'Disbursement')
        return self.gateway.get(APIEndpoints.DISBURSEMENT.format(uuid=uuid))

    def get_status(self, uuid: str) -> Dict[str, Any]:
        return self.get_disbursement(uuid)

    def get_disbursement_services(self) -> Dict[str, Any]:
        """Get disbursement services available to the business."""
        return self.gateway.get(APIEndpoints.DISBURSEMENT_SERVICES)

    def get_history(self, **filters) -> Dict[str, Any]:
        """
        List past disbursements.

        Args:
            **filters: Extra query parameters (page, per_page, status, ...)
        """
        params = clean_params({'type': TransactionType.WITHDRAWAL, **filters})
        return self.gateway.get(APIEndpoints.TRANSACTIONS, params=params)

    def is_valid_amount(self, amount) -> bool:
        try:
            validate_amount(amount, DISBURSEMENT_MIN_AMOUNT, DISBURSEMENT_MAX_AMOUNT)
        except InvalidAmountError:
            return False
        return True

    def get_limits(self) -> Dict[str, Any]:
        return {
            'min': DISBURSEMENT_MIN_AMOUNT,
            'max': DISBURSEMENT_MAX_AMOUNT,
            'currency': DEFAULT_CURRENCY,
        }

    def generate_reference(self) -> str:
        return generate_reference()

    def is_valid_reference(self, reference) -> bool:
        """Check a reference against the configured reference rule."""
        try:
            validate_reference(reference, self.gateway.config.reference_rule)
        except InvalidReferenceError:
            return False
        return True
