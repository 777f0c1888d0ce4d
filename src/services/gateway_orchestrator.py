"""
Drives a stored transaction through the remote authorization gateway.

The gateway answer (or the reason no answer was obtained) is first turned into
an AuthorizationResult, then applied to the transaction in a single write.
"""
from dataclasses import dataclass
from typing import Optional
import enum
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from clients.card_validation_client import CardValidationClient
from clients.gateway_client import GatewayClient, GatewayResponse
from exceptions import DependencyError, FailureKind
from models.enums import TransactionState
from models.transaction import Transaction
from services.configuration_service import ConfigurationService
from services.gateway_request_builder import GatewayRequestBuilder
from services.policy import TransactionPolicy

logger = logging.getLogger(__name__)

AUTHORIZED_DETAIL = "Transaction authorized by gateway"
REJECTED_DETAIL = "Transaction rejected by gateway"
IN_VALIDATION_DETAIL = "Transaction in validation at gateway"
FAILURE_DETAIL = "Transaction rejected: error communicating with the payment gateway"


class Decision(enum.Enum):
    AUTHORIZED = "AUTHORIZED"
    REJECTED = "REJECTED"
    IN_VALIDATION = "IN_VALIDATION"


@dataclass(frozen=True)
class AuthorizationResult:
    decision: Decision
    detail: str
    failure: Optional[FailureKind] = None
    status_code: Optional[int] = None

    @property
    def target_state(self) -> Optional[TransactionState]:
        """State to record, or None when the transaction stays as it is"""
        if self.decision is Decision.AUTHORIZED:
            return TransactionState.AUTHORIZED
        if self.decision is Decision.REJECTED:
            return TransactionState.REJECTED
        return None

    @classmethod
    def failed(cls, kind: FailureKind) -> "AuthorizationResult":
        return cls(decision=Decision.REJECTED, detail=FAILURE_DETAIL, failure=kind)


class GatewayOrchestrator:
    def __init__(
        self,
        request_builder: GatewayRequestBuilder,
        gateway_client: GatewayClient,
        policy: TransactionPolicy,
        card_validation_client: Optional[CardValidationClient] = None,
    ):
        self.request_builder = request_builder
        self.gateway_client = gateway_client
        self.policy = policy
        self.card_validation_client = card_validation_client

    def process(
        self,
        db: Session,
        transaction: Transaction,
        card_data: str,
        deferred_interest: Optional[bool] = None,
        installments: Optional[int] = None,
    ) -> Transaction:
        """
        Authorize an already persisted transaction and record the verdict.

        Never raises for gateway or collaborator failures: they end in REJECTED.
        """
        result = self.authorize(db, transaction, card_data, deferred_interest, installments)
        if result.failure is not None:
            logger.warning(
                f"Authorization of {transaction.unique_code} failed ({result.failure.value}); marking as rejected"
            )
        return self._record(db, transaction, result)

    def authorize(
        self,
        db: Session,
        transaction: Transaction,
        card_data: str,
        deferred_interest: Optional[bool] = None,
        installments: Optional[int] = None,
    ) -> AuthorizationResult:
        try:
            configuration = ConfigurationService.get_current(db)
            payload = self.request_builder.build(
                transaction, configuration, card_data, deferred_interest, installments
            )
            if self.card_validation_client is not None:
                self.card_validation_client.validate(card_data, transaction.unique_code)

            logger.info(f"Sending {transaction.unique_code} to gateway with card data attached")
            response = self.gateway_client.authorize(payload)
        except DependencyError as e:
            logger.error(f"Gateway processing error for {transaction.unique_code}: {e}")
            db.rollback()
            return AuthorizationResult.failed(e.kind)
        except Exception:
            logger.exception(f"Unexpected error while authorizing {transaction.unique_code}")
            # a failed query leaves the connection unusable until rolled back
            db.rollback()
            return AuthorizationResult.failed(FailureKind.INTERNAL)

        return self.interpret(response)

    def interpret(self, response: GatewayResponse) -> AuthorizationResult:
        """Map a gateway HTTP answer onto a decision, first matching rule wins"""
        body = response.body or ""

        if response.is_success and self.policy.accepted_marker in body:
            return AuthorizationResult(Decision.AUTHORIZED, AUTHORIZED_DETAIL, status_code=response.status_code)

        if response.status_code == 400 or self.policy.rejected_marker in body:
            return AuthorizationResult(Decision.REJECTED, REJECTED_DETAIL, status_code=response.status_code)

        if response.status_code == 202:
            return AuthorizationResult(Decision.IN_VALIDATION, IN_VALIDATION_DETAIL, status_code=response.status_code)

        return AuthorizationResult(
            Decision.REJECTED,
            f"Transaction rejected: unexpected gateway status {response.status_code}",
            failure=FailureKind.UNEXPECTED_STATUS,
            status_code=response.status_code,
        )

    def _record(self, db: Session, transaction: Transaction, result: AuthorizationResult) -> Transaction:
        if transaction.state.is_terminal:
            # Reconciled while the gateway was being called
            logger.warning(
                f"Transaction {transaction.unique_code} was reconciled concurrently; keeping state {transaction.state.value}"
            )
            return transaction

        self._apply(transaction, result)

        try:
            db.commit()
        except StaleDataError:
            # A reconciliation committed first; its state is authoritative
            db.rollback()
            db.refresh(transaction)
            logger.warning(
                f"Transaction {transaction.unique_code} was reconciled concurrently; keeping state {transaction.state.value}"
            )
            return transaction
        except SQLAlchemyError as e:
            logger.error(f"Failed to record verdict for {transaction.unique_code}, retrying as rejected: {e}")
            db.rollback()
            db.refresh(transaction)
            if transaction.state.is_terminal:
                return transaction
            self._apply(transaction, AuthorizationResult.failed(FailureKind.INTERNAL))
            db.commit()

        logger.info(f"Transaction {transaction.unique_code} state is now {transaction.state.value}")
        return transaction

    @staticmethod
    def _apply(transaction: Transaction, result: AuthorizationResult) -> None:
        target_state = result.target_state
        if target_state is None:
            logger.info(f"Transaction {transaction.unique_code} is in validation at the gateway")
        else:
            transaction.state = target_state
        transaction.detail = result.detail
