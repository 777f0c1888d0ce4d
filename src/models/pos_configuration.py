from dataclasses import dataclass

from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.sql import func

from database import Base


class PosConfiguration(Base):
    """Terminal identity and the merchant it is registered to."""

    __tablename__ = "pos_configurations"

    code = Column(String(10), primary_key=True)
    model = Column(String(10), primary_key=True)
    merchant_code = Column(String(20), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<PosConfiguration(code={self.code}, model={self.model}, merchant_code={self.merchant_code})>"


@dataclass(frozen=True)
class PosConfigurationSnapshot:
    code: str
    model: str
    merchant_code: str

    @classmethod
    def from_model(cls, configuration: PosConfiguration) -> "PosConfigurationSnapshot":
        return cls(
            code=configuration.code,
            model=configuration.model,
            merchant_code=configuration.merchant_code,
        )
