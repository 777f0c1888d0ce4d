from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from decimal import Decimal
import logging

from database import get_db
from exceptions import ConflictError, NotFoundError, ValidationError
from models.enums import TransactionState
from services.state_reconciler import ReconciliationOutcome, StateReconciler
from services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

# The gateway reads business state from these status codes
OUTCOME_STATUS = {
    ReconciliationOutcome.AUTHORIZED: status.HTTP_201_CREATED,
    ReconciliationOutcome.REJECTED: status.HTTP_400_BAD_REQUEST,
    ReconciliationOutcome.ACCEPTED: status.HTTP_201_CREATED,
}


class TransactionResponse(BaseModel):
    unique_code: str
    amount: Decimal
    brand: str
    currency: str
    type: str
    modality: str
    state: str
    receipt_state: str
    detail: str
    deferred_interest: bool | None
    installments: int | None
    created_at: str


class StateUpdateRequest(BaseModel):
    unique_code: str = Field(..., min_length=1)
    state: TransactionState
    message: str | None = Field(None, max_length=500)


def to_response(transaction) -> TransactionResponse:
    return TransactionResponse(
        unique_code=transaction.unique_code,
        amount=transaction.amount,
        brand=transaction.brand,
        currency=transaction.currency,
        type=transaction.type.value,
        modality=transaction.modality.value,
        state=transaction.state.value,
        receipt_state=transaction.receipt_state.value,
        detail=transaction.detail,
        deferred_interest=transaction.deferred_interest,
        installments=transaction.installments,
        created_at=transaction.created_at.isoformat(),
    )


@router.get("/{unique_code}/status", response_model=TransactionResponse)
def get_transaction_status(
    unique_code: str,
    db: Session = Depends(get_db)
):
    """Get the current state of a transaction"""
    try:
        transaction = TransactionService.get_by_unique_code(db, unique_code)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return to_response(transaction)


@router.put("/status", status_code=status.HTTP_201_CREATED)
def update_transaction_status(
    update: StateUpdateRequest,
    db: Session = Depends(get_db)
):
    """Apply a state update pushed by the gateway"""
    logger.info(f"State update received from gateway for {update.unique_code}: {update.state.value}")
    try:
        outcome = StateReconciler.reconcile(db, update.unique_code, update.state, update.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        logger.warning(f"State update refused: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return Response(status_code=OUTCOME_STATUS[outcome])
