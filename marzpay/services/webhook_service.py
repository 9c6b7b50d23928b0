"""
Webhook service for managing MarzPay callback endpoints.
"""

import logging
from typing import Any, Dict

from ..constants import (
    APIEndpoints, MAX_NAME_LENGTH, WebhookEnvironment, WebhookEventType
)
from ..exceptions import ValidationError
from ..utils.formatters import clean_params, response_section
from ..utils.http_client import RequestGateway
from ..utils.validators import is_valid_url, validate_choice, validate_uuid

logger = logging.getLogger(__name__)

WEBHOOK_STATUSES = ('active', 'inactive')


def _webhooks(response: Dict[str, Any]) -> list:
    return response_section(response, 'data', 'webhooks', expected=list)


class WebhookService:
    """
    Service for webhook registration and management.
    """

    def __init__(self, gateway: RequestGateway):
        self.gateway = gateway

    def get_webhooks(self, **filters) -> Dict[str, Any]:
        """
        List registered webhooks.

        Args:
            **filters: ``status`` (active/inactive), ``event_type``, paging

        Raises:
            ValidationError: If a filter is invalid
        """
        if filters.get('status') is not None:
            validate_choice(filters['status'], WEBHOOK_STATUSES, 'Invalid webhook status', 'INVALID_STATUS')

        if filters.get('event_type') is not None:
            validate_choice(filters['event_type'], WebhookEventType, 'Invalid event type', 'INVALID_EVENT_TYPE')

        return self.gateway.get(APIEndpoints.WEBHOOKS, params=clean_params(filters))

    def create_webhook(
        self,
        name: str,
        url: str,
        event_type,
        environment,
        is_active: bool = True
    ) -> Dict[str, Any]:
        """
        Register a new webhook.

        Args:
            name: Display name (max 100 characters)
            url: Absolute callback URL
            event_type: One of ``WebhookEventType``
            environment: ``test`` or ``production``
            is_active: Whether deliveries start immediately

        Returns:
            API response containing the created webhook

        Raises:
            ValidationError: If any field is missing or invalid
        """
        if not name or not isinstance(name, str) or not name.strip():
            raise ValidationError("Webhook name is required", 'MISSING_NAME')

        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Webhook name must be less than {MAX_NAME_LENGTH} characters", 'NAME_TOO_LONG'
            )

        if not url:
            raise ValidationError("Webhook URL is required", 'MISSING_URL')

        if not is_valid_url(url):
            raise ValidationError("Invalid webhook URL format", 'INVALID_URL')

        if not event_type:
            raise ValidationError("Event type is required", 'MISSING_EVENT_TYPE')

        event_type = validate_choice(event_type, WebhookEventType, 'Invalid event type', 'INVALID_EVENT_TYPE')

        if not environment:
            raise ValidationError("Environment is required", 'MISSING_ENVIRONMENT')

        environment = validate_choice(
            environment, WebhookEnvironment,
            'Environment must be either "test" or "production"', 'INVALID_ENVIRONMENT'
        )

        payload = {
            'name': name,
            'url': url,
            'event_type': event_type,
            'environment': environment,
            'is_active': bool(is_active),
        }

        logger.info(f"Creating webhook '{name}' for {event_type} ({environment})")
        return self.gateway.post(APIEndpoints.WEBHOOKS, body=payload)

    def get_webhook(self, uuid: str) -> Dict[str, Any]:
        validate_uuid(uuid, 'Webhook')
        return self.gateway.get(APIEndpoints.WEBHOOK.format(uuid=uuid))

    def update_webhook(self, uuid: str, **changes) -> Dict[str, Any]:
        """
        Update a webhook.

        Args:
            uuid: Webhook UUID
            **changes: Any of ``name``, ``url``, ``event_type``,
                ``environment``, ``is_active``

        Raises:
            ValidationError: If a change is invalid or nothing is given
        """
        validate_uuid(uuid, 'Webhook')
        update_data = self.validate_webhook_changes(changes)

        if not update_data:
            raise ValidationError("No valid update parameters provided", 'NO_UPDATE_PARAMS')

        logger.info(f"Updating webhook {uuid}: {', '.join(sorted(update_data))}")
        return self.gateway.put(APIEndpoints.WEBHOOK.format(uuid=uuid), body=update_data)

    def validate_webhook_changes(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Validate update fields and return the non-null values to send."""
        update_data = {}

        name = changes.get('name')
        if name is not None:
            if not isinstance(name, str) or not name.strip() or len(name) > MAX_NAME_LENGTH:
                raise ValidationError(
                    f"Webhook name must be a non-empty string of at most {MAX_NAME_LENGTH} characters",
                    'INVALID_NAME'
                )
            update_data['name'] = name

        url = changes.get('url')
        if url is not None:
            if not is_valid_url(url):
                raise ValidationError("Invalid webhook URL format", 'INVALID_URL')
            update_data['url'] = url

        if changes.get('event_type') is not None:
            update_data['event_type'] = validate_choice(
                changes['event_type'], WebhookEventType, 'Invalid event type', 'INVALID_EVENT_TYPE'
            )

        if changes.get('environment') is not None:
            update_data['environment'] = validate_choice(
                changes['environment'], WebhookEnvironment,
                'Environment must be either "test" or "production"', 'INVALID_ENVIRONMENT'
            )

        is_active = changes.get('is_active')
        if is_active is not None:
            if not isinstance(is_active, bool):
                raise ValidationError("is_active must be a boolean", 'INVALID_IS_ACTIVE')
            update_data['is_active'] = is_active

        return update_data

    def delete_webhook(self, uuid: str) -> Dict[str, Any]:
        validate_uuid(uuid, 'Webhook')
        logger.info(f"Deleting webhook {uuid}")
        return self.gateway.delete(APIEndpoints.WEBHOOK.format(uuid=uuid))

    def get_by_status(self, status, **filters) -> Dict[str, Any]:
        return self.get_webhooks(status=status, **filters)

    def get_by_event_type(self, event_type, **filters) -> Dict[str, Any]:
        return self.get_webhooks(event_type=event_type, **filters)

    def get_by_environment(self, environment, **filters) -> Dict[str, Any]:
        """Webhooks for one environment, filtered client-side."""
        environment = validate_choice(
            environment, WebhookEnvironment,
            'Environment must be either "test" or "production"', 'INVALID_ENVIRONMENT'
        )

        response = self.get_webhooks(**filters)
        matching = [hook for hook in _webhooks(response) if hook.get('environment') == environment]
        return {
            'status': 'success',
            'data': {
                'webhooks': matching,
                'summary': {'total_webhooks': len(matching), 'environment': environment},
            },
        }

    def activate(self, uuid: str) -> Dict[str, Any]:
        return self.update_webhook(uuid, is_active=True)

    def deactivate(self, uuid: str) -> Dict[str, Any]:
        return self.update_webhook(uuid, is_active=False)

    def get_summary(self) -> Dict[str, Any]:
        webhooks = _webhooks(self.get_webhooks())

        by_event_type = {}
        by_environment = {}
        active = 0
        for hook in webhooks:
            if hook.get('is_active') is True or str(hook.get('is_active')).lower() == 'true':
                active += 1

            event_type = hook.get('event_type')
            by_event_type[event_type] = by_event_type.get(event_type, 0) + 1

            environment = hook.get('environment')
            by_environment[environment] = by_environment.get(environment, 0) + 1

        return {
            'status': 'success',
            'data': {
                'summary': {
                    'total_webhooks': len(webhooks),
                    'active_webhooks': active,
                    'inactive_webhooks': len(webhooks) - active,
                    'by_event_type': by_event_type,
                    'by_environment': by_environment,
                },
            },
        }
