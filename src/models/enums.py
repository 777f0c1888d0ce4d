import enum


class TransactionType(enum.Enum):
    PAYMENT = "PAYMENT"
    REVERSAL = "REVERSAL"


class TransactionModality(enum.Enum):
    SIMPLE = "SIMPLE"
    RECURRING = "RECURRING"


class TransactionState(enum.Enum):
    SUBMITTED = "SUBMITTED"
    AUTHORIZED = "AUTHORIZED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not TransactionState.SUBMITTED


class ReceiptState(enum.Enum):
    PENDING = "PENDING"
    PRINTED = "PRINTED"
