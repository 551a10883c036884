"""
HTTP client for the order admin API.

Used by the admin console session and the manage_orders.py command line tool.
"""
from typing import Any, Dict, List, Optional
from pathlib import Path
import logging

import httpx

from app.core.config import settings
from app.modules.orders.schemas.order import (
    AdminOrder, AdminOrderFilters, BulkUpdateResult, ExportOptions, OrderAnalytics, OrderPage
)

logger = logging.getLogger(__name__)


class AdminAPIError(Exception):
    """Raised when the admin API answers with an error or cannot be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> Optional[str]:
    """Pull the human readable message out of an error body"""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    detail = body.get("detail") or body.get("error")
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        # FastAPI validation errors
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return None


class AdminOrderAPI:
    """Thin wrapper over /admin/orders endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            base_url: Server root, defaults to settings.ADMIN_API_URL.
            token: Admin bearer token, defaults to settings.ADMIN_API_TOKEN.
            client: Pre-configured httpx client (any base URL already applied).
            timeout: Request timeout in seconds.
        """
        self.token = token if token is not None else settings.ADMIN_API_TOKEN
        self.prefix = f"{settings.API_V1_STR}/admin/orders"
        self._owns_client = client is None
        self.client = client or httpx.Client(
            base_url=base_url or settings.ADMIN_API_URL,
            timeout=timeout or settings.ADMIN_API_TIMEOUT,
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "AdminOrderAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.client.request(method, f"{self.prefix}{path}", headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Admin API {method} {path} failed: {e}")
            raise AdminAPIError(f"Cannot reach admin API: {e}") from e

        if response.is_error:
            message = _error_message(response) or f"Admin API error ({response.status_code})"
            logger.warning(f"Admin API {method} {path} returned {response.status_code}: {message}")
            raise AdminAPIError(message, status_code=response.status_code)
        return response

    @staticmethod
    def _params(model) -> Dict[str, Any]:
        return model.model_dump(mode="json", exclude_none=True)

    def get_all_orders(self, filters: AdminOrderFilters) -> OrderPage:
        response = self._request("GET", "", params=self._params(filters))
        return OrderPage.model_validate(response.json())

    def get_order_analytics(self) -> OrderAnalytics:
        response = self._request("GET", "/analytics")
        return OrderAnalytics.model_validate(response.json())

    def update_order_status(self, order_id: str, status: str) -> AdminOrder:
        response = self._request("PUT", f"/{order_id}/status", json={"status": status})
        return AdminOrder.model_validate(response.json())

    def update_payment_status(self, order_id: str, payment_status: str) -> AdminOrder:
        response = self._request("PUT", f"/{order_id}/payment-status", json={"payment_status": payment_status})
        return AdminOrder.model_validate(response.json())

    def bulk_update_order_status(self, order_ids: List[str], status: str) -> BulkUpdateResult:
        response = self._request("PUT", "/bulk/status", json={"order_ids": order_ids, "status": status})
        return BulkUpdateResult.model_validate(response.json())

    def bulk_update_payment_status(self, order_ids: List[str], payment_status: str) -> BulkUpdateResult:
        response = self._request(
            "PUT", "/bulk/payment-status", json={"order_ids": order_ids, "payment_status": payment_status}
        )
        return BulkUpdateResult.model_validate(response.json())

    def export_orders(self, options: ExportOptions) -> bytes:
        response = self._request("GET", "/export", params=self._params(options))
        return response.content

    @staticmethod
    def download_csv(content: bytes, filename: str, directory: Optional[Path] = None) -> Path:
        """Write exported CSV bytes to directory/filename and return the path"""
        target_dir = Path(directory) if directory else Path.cwd()
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        path.write_bytes(content)
        logger.info(f"Saved order export to {path}")
        return path
