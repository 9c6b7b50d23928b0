import pytest

from conftest import REFERENCE, RESOURCE_UUID
from marzpay.exceptions import APIError, ValidationError
from marzpay.services import CatalogService

SERVICE = {
    'uuid': RESOURCE_UUID,
    'name': 'MTN Collections',
    'type': 'collection',
    'provider': 'mtn',
    'status': 'active',
    'countries': ['UG'],
    'currencies': ['UGX'],
    'limits': {'min': 500},
    'features': ['callbacks'],
    'updated_at': '2024-01-01T00:00:00Z',
}


@pytest.fixture
def catalog(fake_gateway):
    return CatalogService(fake_gateway)


def test_get_services_filters(catalog, fake_gateway):
    catalog.get_collection_services(provider='mtn')
    fake_gateway.get.assert_called_once_with('/services', params={'type': 'collection', 'provider': 'mtn'})

    catalog.get_active()
    fake_gateway.get.assert_called_with('/services', params={'status': 'active'})


@pytest.mark.parametrize('filters, code', [
    ({'type': 'charge'}, 'INVALID_TYPE'),
    ({'provider': 'africell'}, 'INVALID_PROVIDER'),
    ({'status': 'paused'}, 'INVALID_STATUS'),
])
def test_get_services_validation(catalog, filters, code):
    with pytest.raises(ValidationError) as exc:
        catalog.get_services(**filters)
    assert exc.value.code == code


def test_summary(catalog, fake_gateway):
    fake_gateway.get.side_effect = [
        {'data': {'summary': {'total_services': 6, 'total_providers': 2, 'total_countries': 1}}},
        {'data': {'summary': {'total_services': 4}}},
    ]

    summary = catalog.get_summary()['data']['summary']

    assert summary == {
        'total_services': 6,
        'active_services': 4,
        'inactive_services': 2,
        'total_providers': 2,
        'total_countries': 1,
    }
    assert fake_gateway.get.call_args_list[1].kwargs['params'] == {'status': 'active', 'per_page': 1000}


def test_is_service_available(catalog, fake_gateway):
    fake_gateway.get.return_value = {'data': {'summary': {'total_services': 1}}}
    assert catalog.is_service_available('withdrawal', 'airtel')

    fake_gateway.get.side_effect = APIError('Server error', 'API_ERROR', 500)
    with pytest.raises(APIError):
        catalog.is_service_available('withdrawal', 'airtel')


def test_capabilities_and_status(catalog, fake_gateway):
    fake_gateway.get.return_value = {'data': {'service': SERVICE}}

    capabilities = catalog.get_service_capabilities(RESOURCE_UUID)['data']['service']
    assert capabilities['currencies'] == ['UGX']

    status = catalog.get_service_status(RESOURCE_UUID)['data']['service']
    assert status == {'status': 'active', 'updated_at': '2024-01-01T00:00:00Z', 'is_active': True}


def test_get_by_country(catalog, fake_gateway):
    fake_gateway.get.return_value = {'data': {'services': [SERVICE, dict(SERVICE, countries=['KE'])]}}

    data = catalog.get_by_country('ug')['data']
    assert data['services'] == [SERVICE]
    assert data['summary'] == {'total_services': 1, 'country': 'UG'}

    with pytest.raises(ValidationError) as exc:
        catalog.get_by_country('')
    assert exc.value.code == 'MISSING_COUNTRY'

    with pytest.raises(ValidationError) as exc:
        catalog.get_by_country('UGA')
    assert exc.value.code == 'INVALID_COUNTRY_CODE'


def test_compare_services(catalog, fake_gateway):
    other = dict(SERVICE, uuid=REFERENCE, provider='airtel', status='inactive')
    fake_gateway.get.side_effect = [{'data': {'service': SERVICE}}, {'data': {'service': other}}]

    comparison = catalog.compare_services([RESOURCE_UUID, REFERENCE])['data']['comparison']

    assert [s['uuid'] for s in comparison['services']] == [RESOURCE_UUID, REFERENCE]
    assert comparison['summary']['active_services'] == 1
    assert comparison['summary']['providers'] == ['mtn', 'airtel']
    assert comparison['summary']['types'] == ['collection']


@pytest.mark.parametrize('uuids, code', [
    ([RESOURCE_UUID], 'INSUFFICIENT_SERVICES'),
    ([RESOURCE_UUID] * 6, 'TOO_MANY_SERVICES'),
    ([RESOURCE_UUID, 'nope'], 'INVALID_UUID'),
])
def test_compare_services_validation(catalog, fake_gateway, uuids, code):
    with pytest.raises(ValidationError) as exc:
        catalog.compare_services(uuids)
    assert exc.value.code == code
    fake_gateway.get.assert_not_called()
