"""
HTTP client for the MoneyMigo API
"""

import logging
from typing import Any, Dict, List, Optional
import httpx

from moneymigo.config import settings

logger = logging.getLogger(__name__)

class ApiError(Exception):
    """
    A failed API call. status is 0 when the server could not be reached.
    """

    def __init__(self, message: str, status: int, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

def build_query_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop unset and empty values, the server treats them as absent anyway"""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None and value != ""}

class MoneyMigoClient:
    """
    One method per API endpoint. Pass an existing httpx.Client (or a
    FastAPI TestClient) to reuse its transport, otherwise one is created
    against API_BASE_URL.
    """

    def __init__(self, base_url: str = None, http: httpx.Client = None, timeout: float = None):
        if http is None:
            http = httpx.Client(
                base_url=base_url or settings.API_BASE_URL,
                timeout=timeout or settings.CLIENT_TIMEOUT
            )
        self.http = http

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Request %s %s failed: %s", method, url, e)
            raise ApiError("Network error occurred", 0, str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = None
            if isinstance(data, dict):
                message = data.get("error") or data.get("message")
            raise ApiError(message or f"HTTP error! status: {response.status_code}", response.status_code, data)

        return data

    # Transactions

    def get_transactions(self, params: Dict[str, Any] = None) -> List[Dict[str, Any]]:
        return self._request("GET", "/transactions", params=build_query_params(params))

    def get_transaction(self, transaction_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/transactions/{transaction_id}")

    def create_transaction(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/transactions", json=data)

    def update_transaction(self, transaction_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/transactions/{transaction_id}", json=data)

    def delete_transaction(self, transaction_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/transactions/{transaction_id}")

    def get_transaction_stats(self, params: Dict[str, Any] = None) -> Dict[str, float]:
        return self._request("GET", "/transactions/stats", params=build_query_params(params))

    def withdraw_investment(self, transaction_id: int) -> Dict[str, Any]:
        return self._request("PATCH", f"/transactions/{transaction_id}/withdraw")

    def reopen_investment(self, transaction_id: int) -> Dict[str, Any]:
        return self._request("PATCH", f"/transactions/{transaction_id}/reopen")

    # Payment types

    def get_payment_types(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/payment-types")

    def add_payment_type(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/payment-types", json={"name": name})

    def delete_payment_type(self, payment_type_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/payment-types/{payment_type_id}")

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
