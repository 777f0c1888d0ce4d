from decimal import Decimal
import logging

from exceptions import ValidationError
from models.transaction import Transaction
from services.policy import TransactionPolicy

logger = logging.getLogger(__name__)


class TransactionValidator:
    """Checks a candidate transaction once defaults are in place, before it is stored."""

    def __init__(self, policy: TransactionPolicy):
        self.policy = policy

    def validate(self, transaction: Transaction) -> None:
        self._validate_brand(transaction.brand)
        self._validate_amount(transaction.amount)

        if transaction.currency not in self.policy.supported_currencies:
            raise ValidationError(
                f"Invalid currency. Must be one of: {', '.join(sorted(self.policy.supported_currencies))}"
            )

        if transaction.deferred_interest and transaction.installments is not None and transaction.installments < 1:
            raise ValidationError("Installments must be at least 1 for deferred interest payments")

        logger.info(f"Transaction {transaction.unique_code} passed validation")

    def _validate_brand(self, brand) -> None:
        if (
            brand is None
            or not brand.strip()
            or len(brand) > self.policy.max_brand_length
            or brand not in self.policy.accepted_brands
        ):
            raise ValidationError(f"Invalid brand. Must be one of: {self.policy.brand_list()}")

    def _validate_amount(self, amount) -> None:
        if amount is None:
            raise ValidationError("Amount is required")
        value = Decimal(str(amount))
        if not value.is_finite():
            raise ValidationError("Amount must be a finite number")
        if value <= 0:
            raise ValidationError("Amount must be greater than zero")
        # amounts are stored as Numeric(19, 2)
        if value.normalize().as_tuple().exponent < -2:
            raise ValidationError("Amount must have at most 2 decimal places")
