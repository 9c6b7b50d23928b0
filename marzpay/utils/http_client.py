"""
HTTP gateway for MarzPay API communication.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..config import MarzPayConfig
from ..exceptions import MarzPayError, APIError, REQUEST_FAILED

logger = logging.getLogger(__name__)

BODY_METHODS = ('POST', 'PUT', 'PATCH')

# Failures with no usable response, including a connection lost mid-body
TRANSPORT_ERRORS = (
    requests.ConnectionError,
    requests.Timeout,
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ContentDecodingError,
)


def is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


class RequestGateway:
    """
    Single path through which every service talks to the MarzPay API.
    Handles authentication, JSON serialization, error translation and logging.

    Each call makes exactly one request; nothing is retried or cached.
    """

    def __init__(self, config: MarzPayConfig, session: Optional[requests.Session] = None):
        """
        Initialize the gateway.

        Args:
            config: Connection settings; read on every call
            session: Session to send requests through (default: a new one)
        """
        self.config = config
        self.session = session or requests.Session()

    def _get_full_url(self, endpoint: str) -> str:
        return self.config.get_full_url(endpoint)

    def _build_headers(self, headers: Optional[Dict[str, str]], has_body: bool) -> Dict[str, str]:
        merged = {
            'Accept': 'application/json',
            'Authorization': self.config.auth_header,
        }
        if has_body:
            merged['Content-Type'] = 'application/json'
        merged.update(headers or {})
        return merged

    def _log_request(self, method: str, url: str, headers: Dict, params=None, data=None):
        logger.info(f"MarzPay API Request: {method} {url}")
        logger.debug(f"Headers: {self._sanitize_headers(headers)}")
        if params:
            logger.debug(f"Query: {params}")
        if data is not None:
            logger.debug(f"Payload: {data}")

    def _sanitize_headers(self, headers: Dict) -> Dict:
        """Remove sensitive data from headers for logging."""
        sanitized = headers.copy()
        if 'Authorization' in sanitized:
            sanitized['Authorization'] = 'Basic ***'
        return sanitized

    def _decode(self, response: requests.Response) -> Any:
        if not response.content and is_success(response):
            return {}
        try:
            return response.json()
        except ValueError:
            logger.error(f"MarzPay API returned a non-JSON body (status {response.status_code})")
            raise MarzPayError.decode_error(response.text, response.status_code)

    def _handle_response(self, response: requests.Response) -> Any:
        """
        Decode the response and raise for non-success statuses.

        Raises:
            DecodeError: If the body is not valid JSON
            APIError: If the status is outside the 2xx range
        """
        logger.info(f"MarzPay API Response: {response.status_code}")
        data = self._decode(response)
        logger.debug(f"Response: {data}")

        if not is_success(response):
            error = MarzPayError.from_response(data, response.status_code)
            logger.warning(f"MarzPay API error {error.status} {error.code}: {error.message}")
            raise error

        return data

    def call(
        self,
        endpoint: str,
        method: str = 'GET',
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make a request to the API.

        Args:
            endpoint: API endpoint path, relative to the base URL
            method: HTTP method
            body: Request payload; sent only for POST, PUT and PATCH
            headers: Extra headers; these override the defaults
            params: Query parameters

        Returns:
            Decoded response body

        Raises:
            NetworkError: If no response was received
            APIError: If the API returned an error or the request was rejected locally
            DecodeError: If the response body is not valid JSON
        """
        method = method.upper()
        url = self._get_full_url(endpoint)
        data = None
        if body is not None and method in BODY_METHODS:
            data = json.dumps(body)
        request_headers = self._build_headers(headers, data is not None)

        self._log_request(method, url, request_headers, params, body if data is not None else None)

        try:
            response = self.session.request(
                method,
                url,
                params=params or None,
                data=data,
                headers=request_headers,
                timeout=self.config.timeout
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"MarzPay API request failed: {method} {url}: {str(e)}")
            raise MarzPayError.network_error(f"Network request failed: {str(e)}") from e
        except requests.RequestException as e:
            logger.error(f"MarzPay API request failed: {method} {url}: {str(e)}")
            raise APIError(str(e) or 'Request failed', REQUEST_FAILED, 0) from e

        return self._handle_response(response)

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.call(endpoint, 'GET', params=params, **kwargs)

    def post(self, endpoint: str, body: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.call(endpoint, 'POST', body=body, **kwargs)

    def put(self, endpoint: str, body: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.call(endpoint, 'PUT', body=body, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Any:
        return self.call(endpoint, 'DELETE', **kwargs)

    def close(self):
        """Close the session."""
        self.session.close()
