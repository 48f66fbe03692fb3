# -*- coding: utf-8 -*-
"""
Kos API Client - HTTP access to the kos platform backend.
==========================================================

Covers the endpoints the admin creation wizards submit to:
- POST /properties
- POST /rooms
- POST /adminkos/properties/{id}/room-types
- GET  /properties/{id}
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
import urllib3

from services.exceptions import ApiException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ApiConfig:
    """
    API connection settings.

    Values left as None are read from Config (which reads .env):

        API_BASE_URL=http://localhost:3000/api
        API_TOKEN=<bearer token>
    """
    base_url: str = None
    token: Optional[str] = None
    timeout: int = None
    verify_ssl: bool = None

    def __post_init__(self):
        from app.config import Config

        if self.base_url is None:
            self.base_url = Config.API_BASE_URL
        if self.token is None:
            self.token = Config.API_TOKEN
        if self.timeout is None:
            self.timeout = Config.API_TIMEOUT
        if self.verify_ssl is None:
            self.verify_ssl = Config.API_VERIFY_SSL


class KosApiClient:
    """
    Client for the kos backend.

    Usage:
        client = KosApiClient(ApiConfig(base_url="http://localhost:3000/api"))
        result = client.create_property(submission.to_dict())
    """

    def __init__(self, config: Optional[ApiConfig] = None):
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.access_token: Optional[str] = self.config.token

        if not self.config.verify_ssl:
            # Self-signed certificates in development
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def set_access_token(self, token: Optional[str]):
        """Set the bearer token of the signed-in admin."""
        self.access_token = token
        logger.debug("Access token updated")

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json"
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None
    ) -> Any:
        """
        Execute an HTTP request.

        Raises:
            ApiException: the server answered with an error status
            NetworkException: the server could not be reached
        """
        url = f"{self.base_url}{endpoint}"

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.debug(f"[API REQ] Params: {params}")
        if json_data:
            try:
                logger.debug(f"[API REQ] Body: {json.dumps(json_data, ensure_ascii=False, default=str)}")
            except (TypeError, ValueError):
                logger.debug(f"[API REQ] Body: {json_data}")

        try:
            response = requests.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                headers=self._headers(),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()

            result = None
            if response.text:
                result = response.json()

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except (ValueError, AttributeError):
                pass
            if not isinstance(response_data, dict):
                response_data = {"error": str(response_data)}
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data}")
            raise ApiException(
                message=response_data.get("error") or str(e),
                status_code=status_code,
                response_data=response_data,
                context=endpoint
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e,
                context=endpoint
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e,
                context=endpoint
            )

    # ==================== Properties ====================

    def create_property(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a property from a property-creation submission body."""
        return self._request("POST", "/properties", json_data=payload)

    def get_property(self, property_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/properties/{property_id}")

    # ==================== Rooms ====================

    def create_rooms(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create rooms from a room-creation submission body (includes propertyId)."""
        return self._request("POST", "/rooms", json_data=payload)

    def create_room_type(self, property_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "POST", f"/adminkos/properties/{property_id}/room-types", json_data=payload
        )


# Singleton instance
_api_client_instance: Optional[KosApiClient] = None


def get_api_client(config: Optional[ApiConfig] = None) -> KosApiClient:
    """
    Get the shared API client.

    Args:
        config: Settings used when the client is first created
    """
    global _api_client_instance

    if _api_client_instance is None:
        _api_client_instance = KosApiClient(config)

    return _api_client_instance


def reset_api_client():
    """Drop the shared client (after logout or a settings change)."""
    global _api_client_instance
    _api_client_instance = None
