from typing import Optional, Union
import enum
import logging

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from exceptions import ConflictError, InvalidStateTransitionError, NotFoundError, ValidationError
from models.enums import TransactionState
from models.transaction import Transaction

logger = logging.getLogger(__name__)


class ReconciliationOutcome(enum.Enum):
    AUTHORIZED = "authorized"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class StateReconciler:
    @staticmethod
    def reconcile(
        db: Session,
        unique_code: str,
        new_state: Union[TransactionState, str],
        message: Optional[str] = None,
    ) -> ReconciliationOutcome:
        """Apply a state pushed by the gateway after the synchronous exchange"""
        state = StateReconciler._parse_state(new_state)
        logger.info(f"Reconciling transaction {unique_code} to {state.value}")

        transaction = (
            db.query(Transaction)
            .filter(Transaction.unique_code == unique_code)
            .with_for_update()
            .first()
        )
        if not transaction:
            raise NotFoundError(f"Transaction {unique_code} not found")

        if transaction.state.is_terminal and not state.is_terminal:
            raise InvalidStateTransitionError(
                f"Transaction {unique_code} is already {transaction.state.value} and cannot return to {state.value}"
            )

        transaction.state = state
        transaction.detail = message or f"State updated to {state.value}"

        try:
            db.commit()
        except StaleDataError:
            db.rollback()
            raise ConflictError(f"Transaction {unique_code} was modified concurrently, retry the update")

        logger.info(f"Transaction {unique_code} reconciled to {state.value}")

        if state is TransactionState.AUTHORIZED:
            return ReconciliationOutcome.AUTHORIZED
        if state is TransactionState.REJECTED:
            return ReconciliationOutcome.REJECTED
        return ReconciliationOutcome.ACCEPTED

    @staticmethod
    def _parse_state(value: Union[TransactionState, str]) -> TransactionState:
        if isinstance(value, TransactionState):
            return value
        try:
            return TransactionState(value)
        except ValueError:
            accepted = ", ".join(s.value for s in TransactionState)
            raise ValidationError(f"Invalid state {value!r}. Must be one of: {accepted}")
