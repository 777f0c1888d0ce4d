from dataclasses import dataclass
from typing import Any, Dict
import logging

import requests

from exceptions import DependencyError, FailureKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayResponse:
    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class GatewayClient:
    """Synchronous client for the remote authorization gateway."""

    def __init__(self, base_url: str, authorize_path: str, timeout: float, session: requests.Session = None):
        self.url = base_url.rstrip("/") + authorize_path
        self.timeout = timeout
        self.session = session or requests.Session()

    def authorize(self, payload: Dict[str, Any]) -> GatewayResponse:
        """
        Send an authorization payload.

        Every HTTP status is returned to the caller; only transport failures raise.
        """
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise DependencyError(f"Gateway timed out after {self.timeout}s: {e}", FailureKind.TRANSPORT)
        except requests.RequestException as e:
            raise DependencyError(f"Gateway unreachable: {e}", FailureKind.TRANSPORT)

        logger.info(f"Gateway answered {response.status_code} for {payload.get('unique_code')}")
        return GatewayResponse(status_code=response.status_code, body=response.text or "")
