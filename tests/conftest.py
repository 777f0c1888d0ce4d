import os
import tempfile
from pathlib import Path

# Must be set before the application modules create their engine
_TEST_DIR = tempfile.mkdtemp(prefix="pos-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TEST_DIR) / 'pos_test.db'}"

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from database import Base, engine, SessionLocal
from main import app
from api.dependencies import get_transaction_service
from clients.gateway_client import GatewayClient, GatewayResponse
from clients.merchant_client import MerchantClient
from services.configuration_service import ConfigurationService
from services.gateway_orchestrator import GatewayOrchestrator
from services.gateway_request_builder import GatewayRequestBuilder
from services.policy import TransactionPolicy
from services.transaction_service import TransactionService
from services.transaction_validator import TransactionValidator


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def pos_configuration(db):
    configuration = ConfigurationService.register(db, code="POS001", model="PX10", merchant_code="MER-100")
    db.commit()
    return configuration


@pytest.fixture
def policy():
    return TransactionPolicy()


@pytest.fixture
def gateway_client():
    client = MagicMock(spec=GatewayClient)
    client.authorize.return_value = GatewayResponse(status_code=200, body="pago aceptada")
    return client


@pytest.fixture
def merchant_client():
    client = MagicMock(spec=MerchantClient)
    client.get_billing.return_value = {
        "tax_id": "1790011223001",
        "business_name": "Cafeteria La Ronda",
        "address": "Av. Amazonas N34-120",
    }
    return client


@pytest.fixture
def orchestrator(gateway_client, merchant_client, policy):
    return GatewayOrchestrator(
        request_builder=GatewayRequestBuilder(merchant_client, policy),
        gateway_client=gateway_client,
        policy=policy,
    )


@pytest.fixture
def transaction_service(policy, orchestrator):
    return TransactionService(policy, TransactionValidator(policy), orchestrator)


@pytest.fixture
def client(transaction_service):
    app.dependency_overrides[get_transaction_service] = lambda: transaction_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_payment_data():
    return {
        "amount": "49.99",
        "brand": "VISA",
        "card_data": "ZW5jcnlwdGVkLWNhcmQtcGF5bG9hZA==",
    }
