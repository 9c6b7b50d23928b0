"""
MarzPay Payment Utility for Django

A client for collecting and disbursing Ugandan mobile money through the MarzPay API.
"""

__version__ = "0.1.0"

from .client import MarzPay  # noqa: E402
from .config import MarzPayConfig  # noqa: E402
from .exceptions import (  # noqa: E402
    MarzPayError,
    ValidationError,
    APIError,
    NetworkError,
    DecodeError,
)
from .utils.phone import PhoneNumberUtils  # noqa: E402

__all__ = [
    'MarzPay',
    'MarzPayConfig',
    'MarzPayError',
    'ValidationError',
    'APIError',
    'NetworkError',
    'DecodeError',
    'PhoneNumberUtils',
]
