from typing import Any, Dict
import logging

import requests

from exceptions import DependencyError, FailureKind

logger = logging.getLogger(__name__)


class MerchantClient:
    """Read-only lookups against the merchant service."""

    def __init__(self, base_url: str, timeout: float, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_billing(self, merchant_code: str) -> Dict[str, Any]:
        url = f"{self.base_url}/v1/merchants/{merchant_code}/billing"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            billing = response.json()
        except requests.RequestException as e:
            logger.error(f"Billing lookup failed for merchant {merchant_code}: {e}")
            raise DependencyError(f"Merchant billing lookup failed for {merchant_code}", FailureKind.DEPENDENCY)
        except ValueError:
            raise DependencyError(f"Merchant billing for {merchant_code} is not valid JSON", FailureKind.DEPENDENCY)

        if not isinstance(billing, dict) or not billing:
            raise DependencyError(f"No billing information for merchant {merchant_code}", FailureKind.DEPENDENCY)
        return billing
