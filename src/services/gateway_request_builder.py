from typing import Any, Dict, Optional

from clients.merchant_client import MerchantClient
from models.pos_configuration import PosConfigurationSnapshot
from models.transaction import Transaction
from services.policy import TransactionPolicy


class GatewayRequestBuilder:
    """Assembles the outbound authorization payload for a stored transaction."""

    def __init__(self, merchant_client: MerchantClient, policy: TransactionPolicy):
        self.merchant_client = merchant_client
        self.policy = policy

    def build(
        self,
        transaction: Transaction,
        configuration: PosConfigurationSnapshot,
        card_data: str,
        deferred_interest: Optional[bool] = None,
        installments: Optional[int] = None,
    ) -> Dict[str, Any]:
        # Raises DependencyError; nothing is sent without billing data
        billing = self.merchant_client.get_billing(configuration.merchant_code)

        return {
            "merchant": {"code": configuration.merchant_code},
            "merchant_billing": billing,
            "type": transaction.modality.value,
            "brand": transaction.brand,
            "detail": transaction.detail,
            "amount": str(transaction.amount),
            "unique_code": transaction.unique_code,
            "date": transaction.created_at.isoformat(),
            "state": transaction.state.value,
            "currency": transaction.currency,
            "country": self.policy.country_code,
            "pos_code": configuration.code,
            "pos_model": configuration.model,
            "card": card_data,
            "deferred_interest": deferred_interest,
            "installments": installments,
        }
