from decimal import Decimal

import pytest

from marzpay.exceptions import APIError, DecodeError, InvalidAmountError, ValidationError
from marzpay.services import AccountService, BalanceService

ACCOUNT_RESPONSE = {
    'status': 'success',
    'data': {
        'account': {
            'business_name': 'Acme Ltd',
            'contact_phone': '+256759983853',
            'business_city': 'Kampala',
            'status': {'account_status': 'active', 'is_frozen': 'false', 'is_verified': True},
            'limits': {'daily': 1_000_000},
        },
    },
}


def balance_response(raw, currency='UGX'):
    return {'status': 'success', 'data': {'account': {'balance': {
        'raw': raw, 'formatted': f'{raw:,}.00', 'currency': currency,
    }}}}


@pytest.fixture
def accounts(fake_gateway, phone_utils):
    fake_gateway.get.return_value = ACCOUNT_RESPONSE
    return AccountService(fake_gateway, phone_utils)


@pytest.fixture
def balance(fake_gateway):
    return BalanceService(fake_gateway)


def test_update_account_sends_only_given_fields(accounts, fake_gateway):
    accounts.update_account(business_name='Acme Uganda', contact_phone='0759983853', business_city=None)

    fake_gateway.put.assert_called_once_with('/account', body={
        'business_name': 'Acme Uganda',
        'contact_phone': '+256759983853',
    })


@pytest.mark.parametrize('settings, code', [
    ({}, 'NO_SETTINGS'),
    ({'business_name': '  '}, 'INVALID_BUSINESS_NAME'),
    ({'business_address': 'x' * 201}, 'ADDRESS_TOO_LONG'),
    ({'business_country': 'x' * 51}, 'COUNTRY_TOO_LONG'),
    ({'contact_phone': '12345'}, 'INVALID_CONTACT_PHONE'),
])
def test_update_account_validation(accounts, fake_gateway, settings, code):
    with pytest.raises(ValidationError) as exc:
        accounts.update_account(**settings)

    assert exc.value.code == code
    fake_gateway.put.assert_not_called()


def test_account_views(accounts):
    assert accounts.is_account_active()
    assert accounts.is_account_verified()
    assert accounts.get_account_limits()['data']['account']['limits'] == {'daily': 1_000_000}

    profile = accounts.get_business_profile()['data']['account']
    assert profile['business_name'] == 'Acme Ltd'
    assert profile['business_address'] is None


def test_frozen_account_is_not_active(accounts, fake_gateway):
    fake_gateway.get.return_value = {'data': {'account': {'status': {
        'account_status': 'active', 'is_frozen': True,
    }}}}
    assert not accounts.is_account_active()


def test_account_errors_propagate(accounts, fake_gateway):
    fake_gateway.get.side_effect = APIError('Unauthorized', 'INVALID_CREDENTIALS', 401)
    with pytest.raises(APIError):
        accounts.is_account_active()


def test_balance_history_filters(balance, fake_gateway):
    balance.get_balance_history(operation='credit', page=1, start_date='2024-01-01')
    fake_gateway.get.assert_called_once_with(
        '/balance/history', params={'operation': 'credit', 'page': 1, 'start_date': '2024-01-01'}
    )


@pytest.mark.parametrize('filters, code', [
    ({'operation': 'refund'}, 'INVALID_OPERATION'),
    ({'per_page': 101}, 'INVALID_PER_PAGE'),
    ({'page': 0}, 'INVALID_PAGE'),
    ({'start_date': '2024-02-01', 'end_date': '2024-01-01'}, 'INVALID_DATE_RANGE'),
])
def test_balance_history_validation(balance, filters, code):
    with pytest.raises(ValidationError) as exc:
        balance.get_balance_history(**filters)
    assert exc.value.code == code


def test_monthly_summary_uses_bulk_page_size(balance, fake_gateway):
    balance.get_monthly_summary(2024, 2)
    fake_gateway.get.assert_called_once_with('/balance/history', params={
        'start_date': '2024-02-01', 'end_date': '2024-02-29', 'per_page': 1000,
    })

    with pytest.raises(ValidationError) as exc:
        balance.get_monthly_summary(2024, 13)
    assert exc.value.code == 'INVALID_MONTH'

    with pytest.raises(ValidationError) as exc:
        balance.get_period_summary('', '2024-01-01')
    assert exc.value.code == 'MISSING_DATES'


def test_balance_trends_validation(balance):
    with pytest.raises(ValidationError) as exc:
        balance.get_balance_trends('yearly')
    assert exc.value.code == 'INVALID_PERIOD'

    with pytest.raises(ValidationError) as exc:
        balance.get_balance_trends('daily', 25)
    assert exc.value.code == 'INVALID_COUNT'


def test_sufficient_balance(balance, fake_gateway):
    fake_gateway.get.return_value = balance_response(50_000)
    assert balance.has_sufficient_balance(50_000)
    assert not balance.has_sufficient_balance(50_000.5)

    with pytest.raises(InvalidAmountError):
        balance.has_sufficient_balance(0)


def test_balance_alerts(balance, fake_gateway):
    fake_gateway.get.return_value = balance_response(500)
    data = balance.get_balance_alerts()['data']

    assert [alert['type'] for alert in data['alerts']] == ['low_balance', 'critical_balance']
    assert data['current_balance'] == Decimal('500')

    fake_gateway.get.return_value = balance_response(20_000)
    assert balance.get_balance_alerts()['data']['alerts'] == []


def test_balance_formats(balance, fake_gateway):
    fake_gateway.get.return_value = balance_response(1500)
    assert balance.get_balance_formats() == {'raw': 1500, 'formatted': '1,500.00', 'currency': 'UGX'}


def test_unexpected_account_shape_is_decode_error(accounts, balance, fake_gateway):
    fake_gateway.get.return_value = {'status': 'success', 'data': ['unexpected']}

    with pytest.raises(DecodeError):
        accounts.is_account_active()

    with pytest.raises(DecodeError):
        balance.get_balance_alerts()
