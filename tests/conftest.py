"""Shared fixtures: both storage backends, the app and fake provider gateways."""

from datetime import datetime
from decimal import Decimal
from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from restapi.dependencies import get_plaid, get_stripe
from restapi.router import create_app
from tracker.bank.schemas import BankAccountData, BankTransactionData
from tracker.core.config import Settings
from tracker.core.database import DatabaseManager
from tracker.payment.gateway import StripeGateway
from tracker.storage.database import DatabaseStorage
from tracker.storage.memory import MemoryStorage

WEBHOOK_SECRET = "whsec_test_secret"
BACKENDS = ["memory", "database"]


def build_storage(backend: str):
    if backend == "memory":
        return MemoryStorage()
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return DatabaseStorage(DatabaseManager(engine=engine))


class FakeStripe(StripeGateway):
    """Real webhook verification, recorded payment intents."""

    def __init__(self, webhook_secret=WEBHOOK_SECRET):
        super().__init__("sk_test_123", webhook_secret)
        self.intents: List[dict] = []
        self.error = None

    def create_payment_intent(self, amount, currency, metadata):
        if self.error is not None:
            raise self.error
        self.intents.append({"amount": amount, "currency": currency, "metadata": metadata})
        return f"pi_{len(self.intents)}_secret_test"


class FakePlaid:
    """Stands in for the Plaid client with one checking account."""

    def __init__(self):
        self.accounts = [
            BankAccountData(
                account_id="acc_checking",
                name="Plaid Checking",
                type="depository",
                subtype="checking",
                mask="0000",
                current_balance=Decimal("110.00"),
                available_balance=Decimal("100.00"),
            ),
        ]
        self.transactions = [
            BankTransactionData(
                transaction_id="txn_coffee",
                amount=Decimal("4.33"),
                name="Starbucks",
                merchant_name="Starbucks",
                category="Food & Dining",
                date=datetime(2024, 3, 10),
            ),
            BankTransactionData(
                transaction_id="txn_payroll",
                amount=Decimal("-2500.00"),
                name="Payroll deposit",
                date=datetime(2024, 3, 1),
            ),
            BankTransactionData(
                transaction_id="txn_pending",
                amount=Decimal("12.00"),
                name="Uber",
                date=datetime(2024, 3, 11),
                pending=True,
            ),
        ]

    def create_link_token(self, user_id):
        return f"link-sandbox-{user_id}"

    def exchange_public_token(self, public_token):
        return "access-sandbox-token", "item-123"

    def get_accounts(self, access_token, institution_name=None):
        return [
            account.model_copy(update={"institution_name": institution_name})
            for account in self.accounts
        ]

    def get_transactions(self, access_token, account_id, start_date, end_date):
        return list(self.transactions)


@pytest.fixture
def settings():
    return Settings(
        STRIPE_SECRET_KEY="sk_test_123",
        STRIPE_PUBLIC_KEY="pk_test_123",
        STRIPE_WEBHOOK_SECRET=WEBHOOK_SECRET,
        SECRET_KEY="test-secret-key",
        _env_file=None,
    )


@pytest.fixture(params=BACKENDS)
async def storage(request):
    storage = build_storage(request.param)
    await storage.initialize()
    yield storage
    await storage.close()


@pytest.fixture
def stripe_gateway():
    return FakeStripe()


@pytest.fixture
def plaid_gateway():
    return FakePlaid()


@pytest.fixture(params=BACKENDS)
def app(request, settings, stripe_gateway, plaid_gateway):
    app = create_app(settings=settings, storage=build_storage(request.param))
    app.dependency_overrides[get_stripe] = lambda: stripe_gateway
    app.dependency_overrides[get_plaid] = lambda: plaid_gateway
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "password": "secret123", "email": "alice@example.com"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
