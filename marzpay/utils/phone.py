"""
Phone number normalization and classification for Ugandan mobile numbers.

Nothing in this module raises: every operation that cannot produce a
meaningful result returns ``None`` so it can be used in guard conditions.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..constants import (
    PROVIDER_PREFIXES, Provider, SUBSCRIBER_NUMBER_LENGTH, UGANDA_COUNTRY_CODE
)

INTERNATIONAL_PATTERN = re.compile(r'^\+256[0-9]{9}$')
_DIGITS_PATTERN = re.compile(r'^256[0-9]{9}$')
_NON_DIGIT_PATTERN = re.compile(r'\D')


class PhoneNumberUtils:
    """
    Formats, validates and classifies phone numbers.

    The canonical form is ``+256XXXXXXXXX``. Accepted inputs::

        0759983853      local
        256759983853    country code
        +256759983853   international
        759983853       subscriber number only

    Args:
        provider_prefixes: Ordered mapping of provider to 3-digit prefixes.
            Lookups return the first provider listing a prefix.
    """

    def __init__(self, provider_prefixes: Optional[Mapping[Provider, Iterable[str]]] = None):
        prefixes = provider_prefixes if provider_prefixes is not None else PROVIDER_PREFIXES
        self.providers: Dict[Provider, Tuple[str, ...]] = {
            Provider(provider): tuple(values) for provider, values in prefixes.items()
        }

    def normalize(self, phone) -> Optional[str]:
        """
        Convert a phone number to international format.

        Returns:
            ``+256XXXXXXXXX`` or None if the input is not a supported number
        """
        if not phone or not isinstance(phone, str):
            return None

        # only a leading + survives: 256+759983853 -> 256759983853
        plus = '+' if phone.strip().startswith('+') else ''
        cleaned = plus + _NON_DIGIT_PATTERN.sub('', phone)

        if cleaned.startswith('+'):
            digits = cleaned[1:]
        elif cleaned.startswith('0'):
            # 0759983853 -> 256759983853
            digits = UGANDA_COUNTRY_CODE + cleaned[1:]
        elif cleaned.startswith(UGANDA_COUNTRY_CODE):
            digits = cleaned
        elif len(cleaned) == SUBSCRIBER_NUMBER_LENGTH:
            digits = UGANDA_COUNTRY_CODE + cleaned
        else:
            return None

        if not _DIGITS_PATTERN.match(digits):
            return None

        return f"+{digits}"

    def is_valid(self, phone) -> bool:
        formatted = self.normalize(phone)
        return formatted is not None and bool(INTERNATIONAL_PATTERN.match(formatted))

    def get_provider(self, phone) -> Optional[Provider]:
        """
        Get the network operator for a phone number.

        Returns:
            The first provider whose prefix table contains the number's
            prefix, ``Provider.UNKNOWN`` if none does, or None for an
            invalid number
        """
        formatted = self.normalize(phone)
        if formatted is None:
            return None

        # +256759983853 -> 075
        prefix = '0' + formatted[4:6]
        for provider, prefixes in self.providers.items():
            if prefix in prefixes:
                return provider

        return Provider.UNKNOWN

    def is_from_provider(self, phone, provider) -> bool:
        phone_provider = self.get_provider(phone)
        if phone_provider is None:
            return False
        return phone_provider.value.lower() == str(getattr(provider, 'value', provider)).lower()

    def is_valid_for_provider(self, phone, provider) -> bool:
        return self.is_valid(phone) and self.is_from_provider(phone, provider)

    def get_local_number(self, phone) -> Optional[str]:
        """+256759983853 -> 0759983853"""
        formatted = self.normalize(phone)
        if formatted is None:
            return None
        return '0' + formatted[4:]

    def get_country_code_number(self, phone) -> Optional[str]:
        """+256759983853 -> 256759983853"""
        formatted = self.normalize(phone)
        if formatted is None:
            return None
        return formatted[1:]

    def mask(self, phone, mask_char: str = '*') -> Optional[str]:
        """
        Mask a phone number for display, keeping the first and last two characters.

        Example:
            ``mask('0759983853')`` returns ``'+2*********53'``
        """
        formatted = self.normalize(phone)
        if formatted is None:
            return None

        length = len(formatted)
        return formatted[:2] + mask_char * (length - 4) + formatted[-2:]

    def get_all_formats(self, phone) -> Optional[Dict[str, str]]:
        formatted = self.normalize(phone)
        if formatted is None:
            return None

        return {
            'local': self.get_local_number(formatted),
            'country_code': self.get_country_code_number(formatted),
            'international': formatted,
        }

    def get_supported_providers(self) -> List[str]:
        return [provider.value for provider in self.providers]

    def get_provider_prefixes(self, provider) -> Optional[List[str]]:
        name = str(getattr(provider, 'value', provider)).lower()
        for known, prefixes in self.providers.items():
            if known.value.lower() == name:
                return list(prefixes)
        return None
