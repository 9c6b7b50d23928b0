"""
Constants and enums for MarzPay API operations.
"""

from enum import Enum


class Provider(str, Enum):
    """Mobile network operators in Uganda."""
    MTN = "mtn"
    AIRTEL = "airtel"
    AFRICELL = "africell"
    UGANDA_TEL = "ugandaTel"
    UNKNOWN = "unknown"


class ReferenceRule(str, Enum):
    """How collection and disbursement references are validated."""
    UUID4 = "uuid4"
    FREE_FORM = "free_form"


class TransactionType(str, Enum):
    COLLECTION = "collection"
    WITHDRAWAL = "withdrawal"
    CHARGE = "charge"
    REFUND = "refund"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESSFUL = "successful"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ServiceType(str, Enum):
    COLLECTION = "collection"
    WITHDRAWAL = "withdrawal"


class ServiceStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class BalanceOperation(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class WebhookEventType(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    COLLECTION_COMPLETED = "collection.completed"
    COLLECTION_FAILED = "collection.failed"
    COLLECTION_CANCELLED = "collection.cancelled"


class WebhookEnvironment(str, Enum):
    TEST = "test"
    PRODUCTION = "production"


class ReportPeriod(str, Enum):
    """Window sizes for trend and analytics queries."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# API Endpoints
class APIEndpoints:
    """MarzPay API endpoints."""
    ACCOUNT = "/account"
    BALANCE = "/balance"
    BALANCE_HISTORY = "/balance/history"

    # Collection endpoints
    COLLECT_MONEY = "/collect-money"
    COLLECTION = "/collect-money/{uuid}"
    COLLECTION_SERVICES = "/collect-money/services"

    # Disbursement endpoints
    SEND_MONEY = "/send-money"
    DISBURSEMENT = "/send-money/{uuid}"
    DISBURSEMENT_SERVICES = "/send-money/services"

    TRANSACTIONS = "/transactions"
    TRANSACTION = "/transactions/{uuid}"

    SERVICES = "/services"
    SERVICE = "/services/{uuid}"

    WEBHOOKS = "/webhooks"
    WEBHOOK = "/webhooks/{uuid}"


# Phone number settings
UGANDA_COUNTRY_CODE = "256"
SUBSCRIBER_NUMBER_LENGTH = 9

# Ordering matters: the first provider listing a prefix wins.
# 075 is claimed by both MTN and Airtel in the published table.
PROVIDER_PREFIXES = {
    Provider.MTN: ("075", "076", "077", "078"),
    Provider.AIRTEL: ("075", "070", "074"),
    Provider.AFRICELL: ("079",),
    Provider.UGANDA_TEL: ("071",),
}

# Amount limits (UGX)
DEFAULT_CURRENCY = "UGX"
DEFAULT_COUNTRY = "UG"
COLLECTION_MIN_AMOUNT = 500
COLLECTION_MAX_AMOUNT = 10_000_000
DISBURSEMENT_MIN_AMOUNT = 1_000
DISBURSEMENT_MAX_AMOUNT = 500_000

# Balance alert thresholds (UGX)
LOW_BALANCE_THRESHOLD = 10_000
CRITICAL_BALANCE_THRESHOLD = 1_000

# Query limits
MAX_PER_PAGE = 100
BULK_PER_PAGE = 1000
MAX_REPORT_COUNT = 24
MAX_RECENT_DAYS = 365
MIN_COMPARE_SERVICES = 2
MAX_COMPARE_SERVICES = 5

# Text field limits
MAX_REFERENCE_LENGTH = 100
MAX_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 200
MAX_CITY_LENGTH = 50
MAX_COUNTRY_LENGTH = 50

# Default settings
DEFAULT_BASE_URL = "https://wallet.wearemarz.com/api/v1"
DEFAULT_TIMEOUT = 30  # seconds

SDK_NAME = "MarzPay Python SDK"
