"""
Transaction service for MarzPay transaction history and reporting.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable

from ..constants import (
    APIEndpoints, BULK_PER_PAGE, MAX_PER_PAGE, MAX_RECENT_DAYS, MAX_REPORT_COUNT,
    ReportPeriod, TransactionStatus, TransactionType
)
from ..exceptions import InvalidReferenceError, ValidationError
from ..utils.formatters import (
    clean_params, lookback_range, parse_marzpay_amount, response_section
)
from ..utils.http_client import RequestGateway
from ..utils.validators import (
    validate_choice, validate_count, validate_date_range, validate_pagination, validate_uuid
)

logger = logging.getLogger(__name__)

TRANSACTION_PROVIDERS = ('mtn', 'airtel')


def _transactions(response: Dict[str, Any]) -> list:
    return response_section(response, 'data', 'transactions', expected=list)


class TransactionService:
    """
    Service for listing, filtering and summarizing transactions.
    """

    def __init__(self, gateway: RequestGateway):
        self.gateway = gateway

    def get_transactions(self, **filters) -> Dict[str, Any]:
        """
        List transactions.

        Args:
            **filters: ``page``, ``per_page``, ``type``, ``status``,
                ``provider``, ``reference``, ``start_date``, ``end_date``

        Raises:
            ValidationError: If a filter is invalid
        """
        return self._fetch(filters, MAX_PER_PAGE)

    def _fetch(self, filters: Dict[str, Any], max_per_page: int) -> Dict[str, Any]:
        self.validate_transaction_params(filters, max_per_page)
        return self.gateway.get(APIEndpoints.TRANSACTIONS, params=clean_params(filters))

    def get_transaction(self, uuid: str) -> Dict[str, Any]:
        validate_uuid(uuid, 'Transaction')
        return self.gateway.get(APIEndpoints.TRANSACTION.format(uuid=uuid))

    def validate_transaction_params(self, params: Dict[str, Any], max_per_page: int = MAX_PER_PAGE):
        validate_pagination(params.get('page'), params.get('per_page'), max_per_page)

        if params.get('type') is not None:
            validate_choice(params['type'], TransactionType, 'Invalid transaction type', 'INVALID_TYPE')

        if params.get('status') is not None:
            validate_choice(params['status'], TransactionStatus, 'Invalid transaction status', 'INVALID_STATUS')

        if params.get('provider') is not None:
            validate_choice(params['provider'], TRANSACTION_PROVIDERS, 'Invalid provider', 'INVALID_PROVIDER')

        validate_date_range(params.get('start_date'), params.get('end_date'))

    def get_by_type(self, transaction_type, **filters) -> Dict[str, Any]:
        return self.get_transactions(type=transaction_type, **filters)

    def get_by_status(self, status, **filters) -> Dict[str, Any]:
        return self.get_transactions(status=status, **filters)

    def get_by_provider(self, provider, **filters) -> Dict[str, Any]:
        return self.get_transactions(provider=provider, **filters)

    def get_by_date_range(self, start_date: str, end_date: str, **filters) -> Dict[str, Any]:
        if not start_date or not end_date:
            raise ValidationError("Both start and end dates are required", 'MISSING_DATES')

        return self.get_transactions(start_date=start_date, end_date=end_date, **filters)

    def get_recent(self, days: int = 7, **filters) -> Dict[str, Any]:
        """Transactions from the last ``days`` days (1 - 365)."""
        validate_count(days, MAX_RECENT_DAYS, 'Days', 'INVALID_DAYS')

        end = date.today()
        start = end - timedelta(days=days)
        return self.get_by_date_range(start.isoformat(), end.isoformat(), **filters)

    def get_summary(self, **filters) -> Dict[str, Any]:
        """Counts and totals over every transaction matching ``filters``."""
        response = self._fetch({**filters, 'per_page': BULK_PER_PAGE}, BULK_PER_PAGE)
        return {
            'status': 'success',
            'data': {
                'summary': self.calculate_summary(_transactions(response)),
                'filters': filters,
            },
        }

    def calculate_summary(self, transactions: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Summarize a list of transactions.

        Only successful transactions count towards ``total_amount``.
        """
        transactions = list(transactions)
        total = len(transactions)
        total_amount = 0
        counts = {'successful': 0, 'failed': 0, 'pending': 0, 'collection': 0, 'withdrawal': 0}

        for transaction in transactions:
            status = transaction.get('status')
            if status == TransactionStatus.SUCCESSFUL.value:
                total_amount += parse_marzpay_amount(transaction.get('amount'))
            if status in counts:
                counts[status] += 1

            kind = transaction.get('type')
            if kind in counts:
                counts[kind] += 1

        success_rate = (counts['successful'] / total) * 100 if total else 0

        return {
            'total_amount': float(total_amount),
            'total_transactions': total,
            'successful_transactions': counts['successful'],
            'failed_transactions': counts['failed'],
            'pending_transactions': counts['pending'],
            'total_collections': counts['collection'],
            'total_withdrawals': counts['withdrawal'],
            'success_rate': round(success_rate, 2),
        }

    def search_by_reference(self, reference: str) -> Dict[str, Any]:
        if not reference or not isinstance(reference, str):
            raise InvalidReferenceError("Reference is required and must be a string", 'INVALID_REFERENCE')

        return self.get_transactions(reference=reference)

    def get_analytics(self, period: str = ReportPeriod.MONTHLY.value, count: int = 6) -> Dict[str, Any]:
        """Summary and raw transactions for the last ``count`` periods."""
        period = validate_choice(period, ReportPeriod, 'Period must be daily, weekly, or monthly', 'INVALID_PERIOD')
        validate_count(count, MAX_REPORT_COUNT, 'Count', 'INVALID_COUNT')

        start_date, end_date = lookback_range(period, count)
        filters = {'start_date': start_date, 'end_date': end_date, 'per_page': BULK_PER_PAGE}
        transactions = _transactions(self._fetch(filters, BULK_PER_PAGE))

        logger.info(f"Transaction analytics for {start_date} to {end_date}: {len(transactions)} transactions")

        return {
            'status': 'success',
            'data': {
                'period': period,
                'count': count,
                'date_range': {'start': start_date, 'end': end_date},
                'summary': self.calculate_summary(transactions),
                'transactions': transactions,
            },
        }
