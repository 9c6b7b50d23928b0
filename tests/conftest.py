"""Pytest fixtures for the MarzPay client tests."""

import json
import os
import sys
from unittest.mock import MagicMock

import django
import pytest
import requests
from django.conf import settings

# Ensure project root is on sys.path so `marzpay` imports resolve
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

if not settings.configured:
    settings.configure(
        INSTALLED_APPS=['marzpay'],
        MARZPAY_API_USER='test-user',
        MARZPAY_API_KEY='test-key',
        MARZPAY_BASE_URL='https://wallet.example.test/api/v1/',
        MARZPAY_TIMEOUT=10,
    )
    django.setup()

from marzpay.config import MarzPayConfig  # noqa: E402
from marzpay.constants import ReferenceRule  # noqa: E402
from marzpay.utils.http_client import RequestGateway  # noqa: E402
from marzpay.utils.phone import PhoneNumberUtils  # noqa: E402

BASE_URL = 'https://wallet.example.test/api/v1'
REFERENCE = '0b8c6e7a-2f4d-4c1e-9a3b-5d6e7f8a9b0c'
RESOURCE_UUID = '3f2504e0-4f89-11d3-9a0c-0305e82c3301'


def make_response(payload=None, status=200, text=None):
    """Build a real requests.Response carrying ``payload`` as JSON."""
    response = requests.Response()
    response.status_code = status
    if text is not None:
        response._content = text.encode('utf-8')
    elif payload is None:
        response._content = b''
    else:
        response._content = json.dumps(payload).encode('utf-8')
    response.encoding = 'utf-8'
    return response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.request.return_value = make_response({'status': 'success', 'data': {}})
    return session


@pytest.fixture
def config():
    return MarzPayConfig('test-user', 'test-key', base_url=BASE_URL, timeout=10)


@pytest.fixture
def free_form_config():
    return MarzPayConfig(
        'test-user', 'test-key', base_url=BASE_URL, timeout=10,
        reference_rule=ReferenceRule.FREE_FORM
    )


@pytest.fixture
def gateway(config, session):
    return RequestGateway(config, session=session)


@pytest.fixture
def fake_gateway(config):
    """Gateway double recording calls made by services."""
    gateway = MagicMock(spec=RequestGateway)
    gateway.config = config
    gateway.get.return_value = {'status': 'success', 'data': {}}
    gateway.post.return_value = {'status': 'success', 'data': {}}
    gateway.put.return_value = {'status': 'success', 'data': {}}
    gateway.delete.return_value = {'status': 'success'}
    return gateway


@pytest.fixture
def phone_utils():
    return PhoneNumberUtils()
