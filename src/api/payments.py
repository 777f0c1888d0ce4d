from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from decimal import Decimal
import logging

from api.dependencies import get_transaction_service
from database import get_db
from exceptions import ConflictError, ValidationError
from services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


class PaymentRequest(BaseModel):
    # amount and brand rules are enforced by the service so the caller gets its message
    amount: Decimal | None = Field(None, examples=[49.99])
    brand: str | None = Field(None, examples=["VISA"])
    card_data: str = Field(..., min_length=1, description="Encrypted card payload, passed through untouched")
    deferred_interest: bool = False
    installments: int | None = Field(None, description="Only used when deferred_interest is true", examples=[3])


class PaymentResponse(BaseModel):
    message: str
    unique_code: str
    state: str


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_200_OK)
def process_payment(
    payment_data: PaymentRequest,
    db: Session = Depends(get_db),
    service: TransactionService = Depends(get_transaction_service),
):
    """Create a POS payment and authorize it with the gateway"""
    logger.info(
        f"Payment request received: brand={payment_data.brand}, "
        f"deferred_interest={payment_data.deferred_interest}, installments={payment_data.installments}"
    )
    try:
        transaction = service.process_payment(
            db=db,
            amount=payment_data.amount,
            brand=payment_data.brand,
            card_data=payment_data.card_data,
            deferred_interest=payment_data.deferred_interest,
            installments=payment_data.installments,
        )
    except ValidationError as e:
        logger.warning(f"Payment validation error: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error while processing payment: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Payment processing failed: {str(e)}"
        )

    return PaymentResponse(
        message=transaction.detail,
        unique_code=transaction.unique_code,
        state=transaction.state.value,
    )
