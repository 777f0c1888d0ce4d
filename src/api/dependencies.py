from functools import lru_cache

from clients.card_validation_client import CardValidationClient
from clients.gateway_client import GatewayClient
from clients.merchant_client import MerchantClient
from config import Settings, settings
from services.gateway_orchestrator import GatewayOrchestrator
from services.gateway_request_builder import GatewayRequestBuilder
from services.policy import TransactionPolicy
from services.transaction_service import TransactionService
from services.transaction_validator import TransactionValidator


def build_transaction_service(app_settings: Settings) -> TransactionService:
    """Wire the service and its remote collaborators from settings"""
    policy = TransactionPolicy.from_settings(app_settings)
    timeout = app_settings.HTTP_TIMEOUT_SECONDS

    card_validation_client = None
    if app_settings.CARD_VALIDATION_ENABLED and app_settings.CARD_VALIDATION_URL:
        card_validation_client = CardValidationClient(app_settings.CARD_VALIDATION_URL, timeout)

    orchestrator = GatewayOrchestrator(
        request_builder=GatewayRequestBuilder(MerchantClient(app_settings.MERCHANT_SERVICE_URL, timeout), policy),
        gateway_client=GatewayClient(app_settings.GATEWAY_URL, app_settings.GATEWAY_AUTHORIZE_PATH, timeout),
        policy=policy,
        card_validation_client=card_validation_client,
    )
    return TransactionService(policy, TransactionValidator(policy), orchestrator)


@lru_cache
def get_transaction_service() -> TransactionService:
    return build_transaction_service(settings)
