"""
Collection service for MarzPay mobile money collections.
Handles requesting money from a customer's mobile wallet.
"""

import logging
from typing import Any, Dict, Optional

from ..constants import (
    APIEndpoints, COLLECTION_MAX_AMOUNT, COLLECTION_MIN_AMOUNT,
    DEFAULT_COUNTRY, DEFAULT_CURRENCY
)
from ..exceptions import InvalidAmountError, InvalidReferenceError
from ..utils.formatters import generate_reference
from ..utils.http_client import RequestGateway
from ..utils.phone import PhoneNumberUtils
from ..utils.validators import (
    validate_amount, validate_phone_number, validate_reference, validate_uuid
)

logger = logging.getLogger(__name__)


class CollectionService:
    """
    Service for mobile money collection operations.
    Handles initiation, status queries and available services.
    """

    def __init__(self, gateway: RequestGateway, phone_utils: Optional[PhoneNumberUtils] = None):
        self.gateway = gateway
        self.phone_utils = phone_utils or PhoneNumberUtils()

    def collect_money(
        self,
        amount,
        phone_number: str,
        reference: str,
        description: Optional[str] = None,
        callback_url: Optional[str] = None,
        country: str = DEFAULT_COUNTRY
    ) -> Dict[str, Any]:
        """
        Request money from a customer via mobile money.

        Args:
            amount: Amount in UGX (500 - 10,000,000)
            phone_number: Customer phone number in any supported format
            reference: Unique transaction reference
            description: Payment description shown to the customer
            callback_url: Webhook URL overriding the account default
            country: Country code

        Returns:
            API response containing the created transaction

        Raises:
            ValidationError: If input validation fails
            MarzPayError: If the API request fails
        """
        validated_amount = validate_amount(amount, COLLECTION_MIN_AMOUNT, COLLECTION_MAX_AMOUNT)
        validated_phone = validate_phone_number(phone_number, self.phone_utils)
        validated_reference = validate_reference(reference, self.gateway.config.reference_rule)

        logger.info(
            f"Collecting {validated_amount} {DEFAULT_CURRENCY} from "
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

        response = self.gateway.post(APIEndpoints.COLLECT_MONEY, body=payload)
        logger.info(f"Collection initiated for reference: {validated_reference}")
        return response

    def get_collection(self, uuid: str) -> Dict[str, Any]:
        """
        Get collection details by transaction UUID.

        Raises:
            InvalidReferenceError: If the UUID is missing or malformed
        """
        validate_uuid(uuid, 'Collection')
        return self.gateway.get(APIEndpoints.COLLECTION.format(uuid=uuid))

    def get_status(self, uuid: str) -> Dict[str, Any]:
        return self.get_collection(uuid)

    def get_collection_services(self) -> Dict[str, Any]:
        """Get collection services available to the business."""
        return self.gateway.get(APIEndpoints.COLLECTION_SERVICES)

    def is_valid_amount(self, amount) -> bool:
        try:
            validate_amount(amount, COLLECTION_MIN_AMOUNT, COLLECTION_MAX_AMOUNT)
        except InvalidAmountError:
            return False
        return True

    def get_limits(self) -> Dict[str, Any]:
        return {
            'min': COLLECTION_MIN_AMOUNT,
            'max': COLLECTION_MAX_AMOUNT,
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
