# storefront/services/product_client.py
import requests

from storefront.domain.errors import NotFoundError
from storefront.utils.retry import http_retry
from storefront.utils.settings import PRODUCT_SERVICE_URL, PRODUCT_SERVICE_TIMEOUT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """
    Klient katalogu (product-service). Tylko odczyt.
    Zwraca aktualna cene jednostkowa, niczego nie cache'uje.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout or PRODUCT_SERVICE_TIMEOUT

    @http_retry()
    def fetch_product(self, product_id: int) -> dict:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        #404 to odpowiedz, nie blad transportu - bez retry
        if resp.status_code == 404:
            raise NotFoundError(f"Product {product_id} not found")
        resp.raise_for_status()
        return resp.json()
