from sqlalchemy.orm import Session
import logging

from exceptions import DependencyError
from models.pos_configuration import PosConfiguration, PosConfigurationSnapshot

logger = logging.getLogger(__name__)


class ConfigurationService:
    @staticmethod
    def get_current(db: Session) -> PosConfigurationSnapshot:
        """Get the active terminal configuration as a read-only snapshot"""
        configuration = (
            db.query(PosConfiguration)
            .filter(PosConfiguration.active.is_(True))
            .order_by(PosConfiguration.created_at.desc())
            .first()
        )
        if not configuration:
            raise DependencyError("No active POS configuration is registered")
        return PosConfigurationSnapshot.from_model(configuration)

    @staticmethod
    def register(db: Session, code: str, model: str, merchant_code: str) -> PosConfiguration:
        """Make the given terminal the only active configuration"""
        db.query(PosConfiguration).update({PosConfiguration.active: False})

        configuration = db.get(PosConfiguration, (code, model))
        if configuration is None:
            configuration = PosConfiguration(code=code, model=model)
            db.add(configuration)
        configuration.merchant_code = merchant_code
        configuration.active = True
        db.flush()

        logger.info(f"Registered POS {code}/{model} for merchant {merchant_code}")
        return configuration
