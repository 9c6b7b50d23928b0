"""
Configuration management for the MarzPay client.
"""

import base64

from django.conf import settings

from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ReferenceRule
from .exceptions import ConfigurationError


class MarzPayConfig:
    """
    Connection settings shared by every call a client makes.

    The gateway reads credentials on each request. ``set_credentials`` replaces
    them in place and is not atomic: a call already in flight may use either
    the old or the new pair.
    """

    def __init__(
        self,
        api_user: str,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        reference_rule=ReferenceRule.UUID4
    ):
        self._check_credentials(api_user, api_key, "API credentials are required")
        if not base_url:
            raise ConfigurationError("MarzPay base URL is not configured.", 'MISSING_BASE_URL')

        self.api_user = api_user
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.reference_rule = ReferenceRule(reference_rule)

    @staticmethod
    def _check_credentials(api_user, api_key, message):
        if not api_user or not api_key:
            raise ConfigurationError(message, 'MISSING_CREDENTIALS')

    @classmethod
    def from_settings(cls, **overrides) -> 'MarzPayConfig':
        """
        Build configuration from Django settings.

        Reads ``MARZPAY_API_USER``, ``MARZPAY_API_KEY``, ``MARZPAY_BASE_URL``,
        ``MARZPAY_TIMEOUT`` and ``MARZPAY_REFERENCE_RULE``. Keyword arguments
        take precedence over settings.
        """
        values = {
            'api_user': getattr(settings, 'MARZPAY_API_USER', ''),
            'api_key': getattr(settings, 'MARZPAY_API_KEY', ''),
            'base_url': getattr(settings, 'MARZPAY_BASE_URL', DEFAULT_BASE_URL),
            'timeout': getattr(settings, 'MARZPAY_TIMEOUT', DEFAULT_TIMEOUT),
            'reference_rule': getattr(settings, 'MARZPAY_REFERENCE_RULE', ReferenceRule.UUID4),
        }
        values.update(overrides)

        if not values['api_user'] or not values['api_key']:
            raise ConfigurationError(
                "MARZPAY_API_USER and MARZPAY_API_KEY must be configured in Django settings. "
                "Please add them to your settings.py or .env file.",
                'MISSING_CREDENTIALS'
            )

        return cls(**values)

    def set_credentials(self, api_user: str, api_key: str):
        """Replace the API credentials used for subsequent calls."""
        self._check_credentials(api_user, api_key, "Both API username and key are required")
        self.api_user = api_user
        self.api_key = api_key

    @property
    def auth_header(self) -> str:
        """Basic authorization header value for the current credentials."""
        credentials = f"{self.api_user}:{self.api_key}".encode('utf-8')
        return f"Basic {base64.b64encode(credentials).decode('ascii')}"

    def get_full_url(self, endpoint: str) -> str:
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"
