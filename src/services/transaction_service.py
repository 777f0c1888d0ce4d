from typing import Optional
from decimal import Decimal
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from exceptions import ConflictError, NotFoundError
from models.enums import ReceiptState, TransactionModality, TransactionState, TransactionType
from models.transaction import Transaction
from services.code_generator import generate_unique_code
from services.gateway_orchestrator import GatewayOrchestrator
from services.policy import TransactionPolicy
from services.transaction_validator import TransactionValidator

logger = logging.getLogger(__name__)


def _is_unique_code_violation(error: IntegrityError) -> bool:
    # SQLite names the column, PostgreSQL names the ix_transactions_unique_code index
    return "unique_code" in str(error.orig)


class TransactionService:
    def __init__(
        self,
        policy: TransactionPolicy,
        validator: TransactionValidator,
        orchestrator: GatewayOrchestrator,
    ):
        self.policy = policy
        self.validator = validator
        self.orchestrator = orchestrator

    def create_transaction(
        self,
        db: Session,
        amount: Optional[Decimal],
        brand: Optional[str],
        deferred_interest: Optional[bool] = None,
        installments: Optional[int] = None,
    ) -> Transaction:
        """Validate and persist a new POS payment in SUBMITTED state"""
        now = datetime.now().astimezone()

        transaction_obj = Transaction(
            amount=amount,
            brand=brand,
            currency=self.policy.default_currency,
            type=TransactionType.PAYMENT,
            modality=TransactionModality.SIMPLE,
            state=TransactionState.SUBMITTED,
            receipt_state=ReceiptState.PENDING,
            created_at=now,
            deferred_interest=bool(deferred_interest),
            installments=installments if deferred_interest else None,
        )
        transaction_obj.unique_code = generate_unique_code(now)
        transaction_obj.detail = f"POS transaction - {brand}"

        logger.info(f"Defaults applied for transaction: brand={brand}, amount={amount}")

        # Nothing reaches the store unless validation passes
        self.validator.validate(transaction_obj)

        db.add(transaction_obj)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if not _is_unique_code_violation(e):
                logger.error(f"Failed to store transaction {transaction_obj.unique_code}: {e}")
                raise
            logger.error(f"Unique code collision for {transaction_obj.unique_code}: {e}")
            raise ConflictError(f"Transaction code {transaction_obj.unique_code} already exists, retry the payment")

        logger.info(f"Created transaction {transaction_obj.unique_code}")
        return transaction_obj

    def process_payment(
        self,
        db: Session,
        amount: Optional[Decimal],
        brand: Optional[str],
        card_data: str,
        deferred_interest: Optional[bool] = None,
        installments: Optional[int] = None,
    ) -> Transaction:
        """Create a transaction and drive it through the gateway"""
        transaction_obj = self.create_transaction(
            db=db,
            amount=amount,
            brand=brand,
            deferred_interest=deferred_interest,
            installments=installments,
        )
        return self.orchestrator.process(
            db,
            transaction_obj,
            card_data,
            deferred_interest=transaction_obj.deferred_interest,
            installments=transaction_obj.installments,
        )

    @staticmethod
    def get_by_unique_code(db: Session, unique_code: str) -> Transaction:
        """Get transaction by unique code"""
        transaction_obj = db.query(Transaction).filter(Transaction.unique_code == unique_code).first()
        if not transaction_obj:
            raise NotFoundError(f"Transaction {unique_code} not found")
        return transaction_obj
