import logging
from typing import Any, Dict, Optional

import requests

from .filter_state import PriceBounds

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Raised when the storefront API cannot be reached or answers with an error"""


class ProductsApiClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.warning(f"Request to {url} failed: {str(e)}")
            raise ApiClientError(str(e)) from e
        except ValueError as e:
            logger.warning(f"Invalid JSON from {url}: {str(e)}")
            raise ApiClientError("Invalid response body") from e

    def list_products(self, params: Dict[str, str]) -> Dict[str, Any]:
        return self._get("/products/", params=params)

    def get_price_range(self) -> PriceBounds:
        payload = self._get("/products/price-range")
        try:
            return PriceBounds.from_payload(payload)
        except (AttributeError, TypeError, ValueError) as e:
            raise ApiClientError(f"Malformed price range: {payload!r}") from e
