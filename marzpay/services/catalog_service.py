"""
Catalog service for the MarzPay ``/services`` resource.
Lists the collection and withdrawal services offered per provider.
"""

import logging
from typing import Any, Dict, List

from ..constants import (
    APIEndpoints, BULK_PER_PAGE, MAX_COMPARE_SERVICES, MIN_COMPARE_SERVICES,
    ServiceStatus, ServiceType
)
from ..exceptions import InvalidReferenceError, ValidationError
from ..utils.formatters import clean_params, response_section
from ..utils.http_client import RequestGateway
from ..utils.validators import is_valid_uuid, validate_choice, validate_uuid

logger = logging.getLogger(__name__)

SERVICE_PROVIDERS = ('mtn', 'airtel')


def _service(response: Dict[str, Any]) -> Dict[str, Any]:
    return response_section(response, 'data', 'service')


def _summary(response: Dict[str, Any]) -> Dict[str, Any]:
    return response_section(response, 'data', 'summary')


def _total_services(response: Dict[str, Any]) -> int:
    return _summary(response).get('total_services') or 0


class CatalogService:
    """
    Service for querying available payment services.
    """

    def __init__(self, gateway: RequestGateway):
        self.gateway = gateway

    def get_services(self, **filters) -> Dict[str, Any]:
        """
        List services.

        Args:
            **filters: ``type`` (collection/withdrawal), ``provider``
                (mtn/airtel), ``status`` (active/inactive), paging

        Raises:
            ValidationError: If a filter is invalid
        """
        self.validate_service_params(filters)
        return self.gateway.get(APIEndpoints.SERVICES, params=clean_params(filters))

    def get_service(self, uuid: str) -> Dict[str, Any]:
        validate_uuid(uuid, 'Service')
        return self.gateway.get(APIEndpoints.SERVICE.format(uuid=uuid))

    def validate_service_params(self, params: Dict[str, Any]):
        if params.get('type') is not None:
            validate_choice(params['type'], ServiceType, 'Invalid service type', 'INVALID_TYPE')

        if params.get('provider') is not None:
            validate_choice(params['provider'], SERVICE_PROVIDERS, 'Invalid provider', 'INVALID_PROVIDER')

        if params.get('status') is not None:
            validate_choice(params['status'], ServiceStatus, 'Invalid service status', 'INVALID_STATUS')

    def get_by_type(self, service_type, **filters) -> Dict[str, Any]:
        return self.get_services(type=service_type, **filters)

    def get_by_provider(self, provider, **filters) -> Dict[str, Any]:
        return self.get_services(provider=provider, **filters)

    def get_active(self, **filters) -> Dict[str, Any]:
        return self.get_services(status=ServiceStatus.ACTIVE, **filters)

    def get_collection_services(self, **filters) -> Dict[str, Any]:
        return self.get_by_type(ServiceType.COLLECTION, **filters)

    def get_withdrawal_services(self, **filters) -> Dict[str, Any]:
        return self.get_by_type(ServiceType.WITHDRAWAL, **filters)

    def get_summary(self) -> Dict[str, Any]:
        all_services = self.get_services(per_page=BULK_PER_PAGE)
        active_services = self.get_active(per_page=BULK_PER_PAGE)

        total = _total_services(all_services)
        active = _total_services(active_services)
        summary = _summary(all_services)

        return {
            'status': 'success',
            'data': {
                'summary': {
                    'total_services': total,
                    'active_services': active,
                    'inactive_services': total - active,
                    'total_providers': summary.get('total_providers') or 0,
                    'total_countries': summary.get('total_countries') or 0,
                },
            },
        }

    def is_service_available(self, service_type, provider) -> bool:
        services = self.get_services(type=service_type, provider=provider, status=ServiceStatus.ACTIVE)
        return _total_services(services) > 0

    def get_service_capabilities(self, uuid: str) -> Dict[str, Any]:
        service = _service(self.get_service(uuid))
        return {
            'status': 'success',
            'data': {
                'service': {
                    'countries': service.get('countries') or [],
                    'currencies': service.get('currencies') or [],
                    'limits': service.get('limits') or {},
                    'features': service.get('features') or [],
                },
            },
        }

    def get_service_status(self, uuid: str) -> Dict[str, Any]:
        service = _service(self.get_service(uuid))
        return {
            'status': 'success',
            'data': {
                'service': {
                    'status': service.get('status'),
                    'updated_at': service.get('updated_at'),
                    'is_active': service.get('status') == ServiceStatus.ACTIVE.value,
                },
            },
        }

    def get_by_country(self, country: str, **filters) -> Dict[str, Any]:
        """
        Services supporting a country, filtered client-side.

        Args:
            country: ISO 3166 alpha-2 country code
        """
        if not country or not isinstance(country, str):
            raise ValidationError("Country code is required", 'MISSING_COUNTRY')

        if len(country) != 2:
            raise ValidationError("Country code must be 2 characters", 'INVALID_COUNTRY_CODE')

        country = country.upper()
        response = self.get_services(**filters)
        services = response_section(response, 'data', 'services', expected=list)
        if not services:
            return response

        matching = [service for service in services if country in (service.get('countries') or [])]
        return {
            'status': 'success',
            'data': {
                'services': matching,
                'summary': {'total_services': len(matching), 'country': country},
            },
        }

    def compare_services(self, service_uuids: List[str]) -> Dict[str, Any]:
        """
        Fetch 2 to 5 services and lay them side by side.

        Raises:
            ValidationError: If too few or too many UUIDs are given
            InvalidReferenceError: If any UUID is malformed
        """
        if not isinstance(service_uuids, (list, tuple)) or len(service_uuids) < MIN_COMPARE_SERVICES:
            raise ValidationError(
                f"At least {MIN_COMPARE_SERVICES} service UUIDs are required for comparison",
                'INSUFFICIENT_SERVICES'
            )

        if len(service_uuids) > MAX_COMPARE_SERVICES:
            raise ValidationError(
                f"Maximum {MAX_COMPARE_SERVICES} services can be compared at once",
                'TOO_MANY_SERVICES'
            )

        for uuid in service_uuids:
            if not is_valid_uuid(uuid):
                raise InvalidReferenceError(f"Invalid UUID format: {uuid}", 'INVALID_UUID')

        logger.info(f"Comparing {len(service_uuids)} services")
        services = [_service(self.get_service(uuid)) for uuid in service_uuids]

        comparison = {
            'services': [
                {
                    'uuid': service.get('uuid'),
                    'name': service.get('name'),
                    'type': service.get('type'),
                    'provider': service.get('provider'),
                    'status': service.get('status'),
                    'countries': service.get('countries') or [],
                    'currencies': service.get('currencies') or [],
                    'limits': service.get('limits') or {},
                    'features': service.get('features') or [],
                }
                for service in services
            ],
            'summary': {
                'total_services': len(services),
                'active_services': sum(1 for s in services if s.get('status') == ServiceStatus.ACTIVE.value),
                'types': list(dict.fromkeys(s.get('type') for s in services)),
                'providers': list(dict.fromkeys(s.get('provider') for s in services)),
            },
        }

        return {'status': 'success', 'data': {'comparison': comparison}}
