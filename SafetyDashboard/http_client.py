"""Shared JSON-over-HTTP helper for the remote data providers."""
import logging
from typing import Any, Dict, Type

import requests

from weather_provider import ProviderError


def fetch_json(
    url: str,
    params: Dict[str, Any],
    timeout: float,
    error_cls: Type[ProviderError],
    service: str,
) -> Any:
    """
    GET a JSON document, mapping every failure onto ``error_cls``.

    Raises:
        ProviderError: The given subclass, on network, HTTP or decode errors
    """
    try:
        logging.info(f"Making {service} API request: {url}")
        logging.debug(f"Request parameters: {params}")

        response = requests.get(url, params=params, timeout=timeout)

        logging.info(f"API response status: {response.status_code}")
        if not response.ok:
            logging.error(f"{service} request failed with status {response.status_code}")
            _raise_error_response(response, error_cls, service)

        data = response.json()
        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        return data

    # requests' JSONDecodeError is also a RequestException, so decode errors go first
    except ValueError as e:
        logging.error(f"Failed to decode {service} response: {e}")
        raise error_cls(f"Failed to parse response: {str(e)}")
    except requests.exceptions.RequestException as e:
        logging.error(f"Network error during {service} request: {e}")
        raise error_cls(f"Network error: {str(e)}")


def _raise_error_response(response: requests.Response, error_cls: Type[ProviderError], service: str) -> None:
    """Parse and raise an error from a non-2xx response."""
    try:
        error_data = response.json()
    except ValueError:
        logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
        raise error_cls(f"HTTP {response.status_code}: {response.text[:200]}")

    logging.error(f"{service} API error response: {error_data}")
    message = "Unknown error"
    if isinstance(error_data, dict):
        # Open-Meteo uses "reason", disease.sh uses "message"
        message = error_data.get("reason") or error_data.get("message") or message
    raise error_cls(f"{service} API error {response.status_code}: {message}")
