"""
Service modules for MarzPay API operations.
"""

from .collection_service import CollectionService
from .disbursement_service import DisbursementService
from .account_service import AccountService
from .balance_service import BalanceService
from .transaction_service import TransactionService
from .catalog_service import CatalogService
from .webhook_service import WebhookService

__all__ = [
    'CollectionService',
    'DisbursementService',
    'AccountService',
    'BalanceService',
    'TransactionService',
    'CatalogService',
    'WebhookService',
]
