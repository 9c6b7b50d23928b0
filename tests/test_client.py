from io import StringIO
from unittest.mock import patch

import pytest
import requests
from django.core.management import call_command
from django.core.management.base import CommandError

from conftest import BASE_URL, make_response
from marzpay import MarzPay, __version__
from marzpay.constants import ReferenceRule
from marzpay.services import (
    AccountService, BalanceService, CatalogService, CollectionService,
    DisbursementService, TransactionService, WebhookService
)

ACCOUNT = {'status': 'success', 'data': {'account': {
    'business_name': 'Acme Ltd',
    'status': {'account_status': 'active', 'is_frozen': 'false'},
}}}
BALANCE = {'status': 'success', 'data': {'account': {'balance': {
    'raw': 125000, 'formatted': '125,000.00', 'currency': 'UGX',
}}}}


@pytest.fixture
def client(session):
    return MarzPay('test-user', 'test-key', base_url=BASE_URL, session=session)


def test_services_share_one_gateway(client):
    assert isinstance(client.collections, CollectionService)
    assert isinstance(client.disbursements, DisbursementService)
    assert isinstance(client.accounts, AccountService)
    assert isinstance(client.balance, BalanceService)
    assert isinstance(client.transactions, TransactionService)
    assert isinstance(client.services, CatalogService)
    assert isinstance(client.webhooks, WebhookService)

    for service in (client.collections, client.balance, client.webhooks):
        assert service.gateway is client.gateway
    assert client.collections.phone_utils is client.phone_utils


def test_set_credentials_updates_auth_header(client):
    before = client.get_auth_header()
    client.set_credentials('other', 'secret')
    assert client.get_auth_header() != before
    assert client.gateway.config.api_user == 'other'


def test_get_info(client):
    info = client.get_info()
    assert info['version'] == __version__
    assert info['base_url'] == BASE_URL
    assert info['reference_rule'] == 'uuid4'


def test_test_connection_success(client, session):
    session.request.return_value = make_response(ACCOUNT)

    result = client.test_connection()

    assert result['status'] == 'success'
    assert result['data'] == {'account_status': 'active', 'business_name': 'Acme Ltd'}


def test_test_connection_reports_failures(client, session):
    session.request.side_effect = requests.ConnectionError('refused')

    result = client.test_connection()

    assert result['status'] == 'error'
    assert result['code'] == 'NETWORK_ERROR'


def test_from_settings(session):
    client = MarzPay.from_settings(session=session, reference_rule=ReferenceRule.FREE_FORM)
    assert client.config.api_user == 'test-user'
    assert client.config.reference_rule is ReferenceRule.FREE_FORM
    assert client.gateway.session is session


def test_context_manager_closes_session(session):
    with MarzPay('test-user', 'test-key', session=session) as client:
        assert client.config.timeout == 30
    session.close.assert_called_once_with()


def test_management_command_prints_balance():
    out = StringIO()
    with patch('requests.Session') as session_cls:
        session_cls.return_value.request.side_effect = [make_response(ACCOUNT), make_response(BALANCE)]
        call_command('marzpay_test_connection', '--balance', stdout=out)

    output = out.getvalue()
    assert 'Connection successful' in output
    assert 'Acme Ltd' in output
    assert 'UGX 125,000.00' in output


def test_management_command_fails_on_api_error():
    with patch('requests.Session') as session_cls:
        session_cls.return_value.request.return_value = make_response(
            {'message': 'Invalid credentials', 'error_code': 'INVALID_CREDENTIALS'}, status=401
        )
        with pytest.raises(CommandError, match='INVALID_CREDENTIALS'):
            call_command('marzpay_test_connection', stdout=StringIO())


def test_test_connection_reports_unexpected_body(client, session):
    session.request.return_value = make_response(['unexpected'])

    result = client.test_connection()

    assert result['status'] == 'error'
    assert result['code'] == 'DECODE_ERROR'
