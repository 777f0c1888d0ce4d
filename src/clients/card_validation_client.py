import logging

import requests

from exceptions import DependencyError, FailureKind

logger = logging.getLogger(__name__)


class CardValidationClient:
    """Optional pre-authorization check of the encrypted card payload."""

    def __init__(self, base_url: str, timeout: float, session: requests.Session = None):
        self.url = base_url.rstrip("/") + "/v1/cards/validate"
        self.timeout = timeout
        self.session = session or requests.Session()

    def validate(self, card_data: str, unique_code: str) -> None:
        try:
            response = self.session.post(
                self.url,
                json={"card": card_data, "unique_code": unique_code},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DependencyError(f"Card validation unreachable: {e}", FailureKind.TRANSPORT)

        if response.status_code != 200:
            logger.warning(f"Card validation refused {unique_code} with status {response.status_code}")
            raise DependencyError(
                f"Card validation refused with status {response.status_code}", FailureKind.DEPENDENCY
            )
