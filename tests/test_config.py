import base64

import pytest
from django.test import override_settings

from marzpay.config import MarzPayConfig
from marzpay.constants import DEFAULT_BASE_URL, ReferenceRule
from marzpay.exceptions import ConfigurationError


def test_requires_credentials():
    with pytest.raises(ConfigurationError) as exc:
        MarzPayConfig('', 'key')
    assert exc.value.code == 'MISSING_CREDENTIALS'


def test_requires_base_url():
    with pytest.raises(ConfigurationError) as exc:
        MarzPayConfig('user', 'key', base_url='')
    assert exc.value.code == 'MISSING_BASE_URL'


def test_defaults_and_url_building():
    config = MarzPayConfig('user', 'key')
    assert config.base_url == DEFAULT_BASE_URL
    assert config.reference_rule is ReferenceRule.UUID4
    assert config.get_full_url('/balance') == f'{DEFAULT_BASE_URL}/balance'
    assert config.get_full_url('account') == f'{DEFAULT_BASE_URL}/account'


def test_auth_header():
    config = MarzPayConfig('user', 'key')
    assert config.auth_header == 'Basic ' + base64.b64encode(b'user:key').decode('ascii')


def test_set_credentials():
    config = MarzPayConfig('user', 'key')
    config.set_credentials('other', 'secret')
    assert (config.api_user, config.api_key) == ('other', 'secret')

    with pytest.raises(ConfigurationError) as exc:
        config.set_credentials('other', '')
    assert exc.value.message == 'Both API username and key are required'
    assert config.api_key == 'secret'


def test_from_settings_reads_django_settings():
    config = MarzPayConfig.from_settings()
    assert config.api_user == 'test-user'
    assert config.api_key == 'test-key'
    assert config.base_url == 'https://wallet.example.test/api/v1'
    assert config.timeout == 10


def test_from_settings_overrides():
    with override_settings(MARZPAY_REFERENCE_RULE='free_form'):
        config = MarzPayConfig.from_settings(timeout=3)
    assert config.timeout == 3
    assert config.reference_rule is ReferenceRule.FREE_FORM


def test_from_settings_missing_credentials():
    with override_settings(MARZPAY_API_KEY=''), pytest.raises(ConfigurationError) as exc:
        MarzPayConfig.from_settings()
    assert exc.value.code == 'MISSING_CREDENTIALS'
