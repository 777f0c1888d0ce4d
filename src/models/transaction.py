from sqlalchemy import Column, String, DateTime, Numeric, Text, Boolean, Integer, Enum
from sqlalchemy.sql import func

from database import Base
from models.enums import ReceiptState, TransactionModality, TransactionState, TransactionType


def _enum_column(enum_class, length: int):
    return Enum(enum_class, native_enum=False, length=length, validate_strings=True)


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    unique_code = Column(String(64), nullable=False, unique=True, index=True)
    amount = Column(Numeric(19, 2), nullable=False)
    brand = Column(String(4), nullable=False)
    currency = Column(String(3), nullable=False, default='USD')
    type = Column(_enum_column(TransactionType, 20), nullable=False, default=TransactionType.PAYMENT)
    modality = Column(_enum_column(TransactionModality, 20), nullable=False, default=TransactionModality.SIMPLE)
    state = Column(_enum_column(TransactionState, 20), nullable=False, default=TransactionState.SUBMITTED, index=True)
    receipt_state = Column(_enum_column(ReceiptState, 20), nullable=False, default=ReceiptState.PENDING)
    detail = Column(Text, nullable=False)
    deferred_interest = Column(Boolean, nullable=True)
    installments = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    version = Column(Integer, nullable=False)

    # Every UPDATE is guarded by "WHERE version = <loaded version>"
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Transaction(unique_code={self.unique_code}, state={self.state}, amount={self.amount})>"
