"""
MarzPay client entry point.
"""

import logging
from typing import Any, Dict, Optional

import requests

from . import __version__
from .config import MarzPayConfig
from .constants import APIEndpoints, DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ReferenceRule, SDK_NAME
from .exceptions import MarzPayError
from .services import (
    AccountService, BalanceService, CatalogService, CollectionService,
    DisbursementService, TransactionService, WebhookService
)
from .utils.formatters import response_section
from .utils.http_client import RequestGateway
from .utils.phone import PhoneNumberUtils

logger = logging.getLogger(__name__)


class MarzPay:
    """
    Client for the MarzPay mobile money API.

    Builds one configuration, one gateway and one phone helper, and hands
    them to each service.

    Example:
        with MarzPay('user', 'key') as client:
            client.collections.collect_money(5000, '0759983853', reference)
    """

    def __init__(
        self,
        api_user: str,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        reference_rule=ReferenceRule.UUID4,
        session: Optional[requests.Session] = None
    ):
        config = MarzPayConfig(
            api_user, api_key, base_url=base_url, timeout=timeout, reference_rule=reference_rule
        )
        self._setup(config, session)

    @classmethod
    def from_settings(cls, session: Optional[requests.Session] = None, **overrides) -> 'MarzPay':
        """Build a client from the ``MARZPAY_*`` Django settings."""
        client = cls.__new__(cls)
        client._setup(MarzPayConfig.from_settings(**overrides), session)
        return client

    def _setup(self, config: MarzPayConfig, session: Optional[requests.Session]):
        self.config = config
        self.gateway = RequestGateway(config, session=session)
        self.phone_utils = PhoneNumberUtils()

        self.collections = CollectionService(self.gateway, self.phone_utils)
        self.disbursements = DisbursementService(self.gateway, self.phone_utils)
        self.accounts = AccountService(self.gateway, self.phone_utils)
        self.balance = BalanceService(self.gateway)
        self.transactions = TransactionService(self.gateway)
        self.services = CatalogService(self.gateway)
        self.webhooks = WebhookService(self.gateway)

    def set_credentials(self, api_user: str, api_key: str):
        self.config.set_credentials(api_user, api_key)
        logger.info("MarzPay credentials updated")

    def get_auth_header(self) -> str:
        return self.config.auth_header

    def get_info(self) -> Dict[str, Any]:
        return {
            'name': SDK_NAME,
            'version': __version__,
            'base_url': self.config.base_url,
            'timeout': self.config.timeout,
            'reference_rule': self.config.reference_rule.value,
            'features': [
                'Collections API',
                'Disbursements API',
                'Accounts API',
                'Balance API',
                'Transactions API',
                'Services API',
                'Webhooks API',
                'Phone Number Utilities',
            ],
        }

    def test_connection(self) -> Dict[str, Any]:
        """
        Check credentials and connectivity with a GET on the account endpoint.

        Returns:
            ``{'status': 'success', 'data': {...}}`` on success, otherwise
            ``{'status': 'error', 'message': ..., 'code': ...}``
        """
        try:
            response = self.gateway.get(APIEndpoints.ACCOUNT)
            account = response_section(response, 'data', 'account')
            status = response_section(account, 'status')
        except MarzPayError as e:
            logger.error(f"MarzPay connection test failed: {e.code} {e.message}")
            return {
                'status': 'error',
                'message': 'API connection failed',
                'error': e.message,
                'code': e.code,
            }

        return {
            'status': 'success',
            'message': 'API connection successful',
            'data': {
                'account_status': status.get('account_status'),
                'business_name': account.get('business_name'),
            },
        }

    def close(self):
        self.gateway.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
