"""
Custom exceptions for MarzPay API operations.

Every failure surfaced to a caller is a ``MarzPayError``: local validation
failures, error responses from the API and transport failures alike.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


NETWORK_ERROR = "NETWORK_ERROR"
DECODE_ERROR = "DECODE_ERROR"
REQUEST_FAILED = "REQUEST_FAILED"
API_ERROR = "API_ERROR"


class ErrorClassification(str, Enum):
    """Coarse error categories for branching logic."""
    VALIDATION = "validation"
    SERVER = "server"
    NETWORK = "network"
    DECODE = "decode"


USER_MESSAGES = {
    'INVALID_AMOUNT': 'Please enter a valid amount between 500 and 10,000,000 UGX',
    'INVALID_PHONE': 'Please enter a valid phone number',
    'MISSING_PHONE': 'Please enter a phone number',
    'MISSING_UUID': 'Transaction reference is missing',
    'INVALID_UUID': 'Invalid transaction reference format',
    'INVALID_REFERENCE': 'Invalid transaction reference format',
    'MISSING_CREDENTIALS': 'API credentials are missing. Please configure your username and key',
    'INVALID_CREDENTIALS': 'Invalid API credentials. Please check your username and key',
    NETWORK_ERROR: 'Network connection failed. Please check your internet connection',
    DECODE_ERROR: 'Received an unexpected response from the payment service',
    'ACCOUNT_FROZEN': 'Your account has been frozen. Please contact support',
    'INSUFFICIENT_BALANCE': 'Insufficient balance to complete this transaction',
    'SERVICE_UNAVAILABLE': 'Service temporarily unavailable. Please try again later',
    'RATE_LIMIT_EXCEEDED': 'Too many requests. Please wait before trying again',
}


class MarzPayError(Exception):
    """
    Base exception for all MarzPay-related errors.

    Instances are read-only once constructed and compare equal by content
    (type, message, code, status and details). The creation timestamp is
    informational and does not take part in equality.
    """

    def __init__(
        self,
        message: str,
        code: str = API_ERROR,
        status: int = 0,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self._message = message
        self._code = code
        self._status = status
        self._details = dict(details or {})
        self._timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> str:
        return self._code

    @property
    def status(self) -> int:
        return self._status

    @property
    def details(self) -> Dict[str, Any]:
        return dict(self._details)

    @property
    def timestamp(self) -> str:
        return self._timestamp

    @property
    def classification(self) -> ErrorClassification:
        """Category derived from the code and status."""
        if self._code == NETWORK_ERROR:
            return ErrorClassification.NETWORK
        if self._code == DECODE_ERROR:
            return ErrorClassification.DECODE
        if self._status >= 500:
            return ErrorClassification.SERVER
        return ErrorClassification.VALIDATION

    def is_validation_error(self) -> bool:
        return self.classification is ErrorClassification.VALIDATION

    def is_server_error(self) -> bool:
        return self.classification is ErrorClassification.SERVER

    def is_network_error(self) -> bool:
        return self.classification is ErrorClassification.NETWORK

    def user_message(self) -> str:
        """Human-readable text for the error code, falling back to the raw message."""
        return USER_MESSAGES.get(self._code, self._message)

    def get_summary(self) -> Dict[str, Any]:
        return {
            'name': type(self).__name__,
            'code': self._code,
            'status': self._status,
            'message': self._message,
            'timestamp': self._timestamp,
        }

    def to_dict(self) -> Dict[str, Any]:
        summary = self.get_summary()
        summary['classification'] = self.classification.value
        summary['details'] = self.details
        return summary

    def _key(self):
        return (type(self), self._message, self._code, self._status, repr(sorted(self._details.items())))

    def __eq__(self, other):
        if not isinstance(other, MarzPayError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"{type(self).__name__}(message={self._message!r}, code={self._code!r}, status={self._status})"

    @staticmethod
    def validation_error(message: str, code: str) -> 'ValidationError':
        """Error raised by a local validation rule."""
        return ValidationError(message, code, 400)

    @staticmethod
    def from_response(body: Any, status: int) -> 'APIError':
        """Error built from a decoded non-success API response."""
        if not isinstance(body, dict):
            body = {'data': body}
        message = body.get('message') or 'Request failed'
        code = body.get('error_code') or API_ERROR
        return APIError(message, code, status, body)

    @staticmethod
    def network_error(message: str) -> 'NetworkError':
        """Error for a request that never received a response."""
        return NetworkError(message, NETWORK_ERROR, 0)

    @staticmethod
    def decode_error(raw_text: str, status: int) -> 'DecodeError':
        """Error for a response body that is not valid JSON."""
        return DecodeError(raw_text or 'Empty response body', DECODE_ERROR, status)


class ValidationError(MarzPayError):
    """Raised when input validation fails."""

    def __init__(self, message, code='VALIDATION_ERROR', status=400, details=None):
        super().__init__(message, code, status, details)


class InvalidPhoneNumberError(ValidationError):
    """Raised when phone number format is invalid."""
    pass


class InvalidAmountError(ValidationError):
    """Raised when amount is invalid."""
    pass


class InvalidReferenceError(ValidationError):
    """Raised when a transaction reference or resource UUID is invalid."""
    pass


class ConfigurationError(ValidationError):
    """Raised when there's a configuration issue."""
    pass


class APIError(MarzPayError):
    """Raised when the MarzPay API returns an error."""
    pass


class NetworkError(MarzPayError):
    """Raised when the API could not be reached."""
    pass


class DecodeError(MarzPayError):
    """Raised when the API response could not be decoded."""
    pass
