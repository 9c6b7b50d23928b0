"""
Balance service for MarzPay account balance operations.
"""

import logging
from decimal import Decimal
from typing import Any, Dict

from ..constants import (
    APIEndpoints, BULK_PER_PAGE, BalanceOperation, CRITICAL_BALANCE_THRESHOLD,
    DEFAULT_CURRENCY, LOW_BALANCE_THRESHOLD, MAX_PER_PAGE, MAX_REPORT_COUNT, ReportPeriod
)
from ..exceptions import InvalidAmountError, ValidationError
from ..utils.formatters import (
    clean_params, lookback_range, month_bounds, parse_marzpay_amount,
    response_section
)
from ..utils.http_client import RequestGateway
from ..utils.validators import (
    validate_choice, validate_count, validate_date_range, validate_pagination
)

logger = logging.getLogger(__name__)


def _balance(response: Dict[str, Any]) -> Dict[str, Any]:
    return response_section(response, 'data', 'account', 'balance')


class BalanceService:
    """
    Service for balance retrieval, history and alerts.
    """

    def __init__(self, gateway: RequestGateway):
        self.gateway = gateway

    def get_balance(self) -> Dict[str, Any]:
        """
        Retrieve the current account balance.

        Returns:
            API response; ``data.account.balance`` holds ``raw``,
            ``formatted`` and ``currency``
        """
        logger.info("Retrieving account balance")
        return self.gateway.get(APIEndpoints.BALANCE)

    def get_balance_history(self, **filters) -> Dict[str, Any]:
        """
        Retrieve balance movements.

        Args:
            **filters: ``page``, ``per_page``, ``operation`` (credit/debit),
                ``start_date`` and ``end_date`` (YYYY-MM-DD)

        Raises:
            ValidationError: If a filter is invalid
        """
        return self._fetch_history(filters, MAX_PER_PAGE)

    def _fetch_history(self, filters: Dict[str, Any], max_per_page: int) -> Dict[str, Any]:
        self.validate_balance_history_params(filters, max_per_page)
        return self.gateway.get(APIEndpoints.BALANCE_HISTORY, params=clean_params(filters))

    def validate_balance_history_params(self, params: Dict[str, Any], max_per_page: int = MAX_PER_PAGE):
        validate_pagination(params.get('page'), params.get('per_page'), max_per_page)

        if params.get('operation') is not None:
            validate_choice(
                params['operation'], BalanceOperation,
                'Operation must be either "credit" or "debit"', 'INVALID_OPERATION'
            )

        validate_date_range(params.get('start_date'), params.get('end_date'))

    def get_period_summary(self, start_date: str, end_date: str) -> Dict[str, Any]:
        """Balance history for every movement between two dates."""
        if not start_date or not end_date:
            raise ValidationError("Both start and end dates are required", 'MISSING_DATES')

        filters = {'start_date': start_date, 'end_date': end_date, 'per_page': BULK_PER_PAGE}
        return self._fetch_history(filters, BULK_PER_PAGE)

    def get_monthly_summary(self, year: int, month: int) -> Dict[str, Any]:
        if isinstance(year, bool) or not isinstance(year, int) or not 2000 <= year <= 2100:
            raise ValidationError("Year must be between 2000 and 2100", 'INVALID_YEAR')

        if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12", 'INVALID_MONTH')

        start_date, end_date = month_bounds(year, month)
        return self.get_period_summary(start_date, end_date)

    def get_balance_trends(self, period: str = ReportPeriod.MONTHLY.value, count: int = 6) -> Dict[str, Any]:
        """Balance history covering the last ``count`` days, weeks or months."""
        period = validate_choice(period, ReportPeriod, 'Period must be daily, weekly, or monthly', 'INVALID_PERIOD')
        validate_count(count, MAX_REPORT_COUNT, 'Count', 'INVALID_COUNT')

        start_date, end_date = lookback_range(period, count)
        return self.get_period_summary(start_date, end_date)

    def get_balance_formats(self) -> Dict[str, Any]:
        balance = _balance(self.get_balance())
        return {
            'raw': balance.get('raw'),
            'formatted': balance.get('formatted'),
            'currency': balance.get('currency'),
        }

    def has_sufficient_balance(self, amount) -> bool:
        """
        Check whether the balance covers ``amount``.

        Raises:
            InvalidAmountError: If amount is not a positive number
            MarzPayError: If the balance could not be retrieved
        """
        if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)) or not amount > 0:
            raise InvalidAmountError("Amount must be a positive number", 'INVALID_AMOUNT')

        current = parse_marzpay_amount(_balance(self.get_balance()).get('raw'))
        return current >= Decimal(str(amount))

    def get_balance_alerts(self) -> Dict[str, Any]:
        balance = _balance(self.get_balance())
        current = parse_marzpay_amount(balance.get('raw'))

        alerts = []
        if current < LOW_BALANCE_THRESHOLD:
            alerts.append({
                'type': 'low_balance',
                'message': 'Account balance is low',
                'threshold': LOW_BALANCE_THRESHOLD,
                'current': current,
                'severity': 'warning',
            })

        if current < CRITICAL_BALANCE_THRESHOLD:
            alerts.append({
                'type': 'critical_balance',
                'message': 'Account balance is critically low',
                'threshold': CRITICAL_BALANCE_THRESHOLD,
                'current': current,
                'severity': 'critical',
            })

        if alerts:
            logger.warning(f"Balance alerts raised: {[alert['type'] for alert in alerts]}")

        return {
            'status': 'success',
            'data': {
                'alerts': alerts,
                'current_balance': current,
                'currency': balance.get('currency') or DEFAULT_CURRENCY,
            },
        }
