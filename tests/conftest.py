from unittest.mock import MagicMock

import pytest

from dragonpay_payments.core.client import GatewayClient
from dragonpay_payments.core.config import GatewayConfig


@pytest.fixture
def transaction():
    return {
        "merchantid": "MERCHANT",
        "txnid": "TXN-0001",
        "amount": 1000,
        "ccy": "PHP",
        "description": "Order 0001",
        "email": "buyer@example.com",
        "password": "s3cret",
    }


@pytest.fixture
def billing():
    return {
        "firstName": "Juan",
        "lastName": "Dela Cruz",
        "address1": "1 Ayala Ave",
        "city": "Makati",
        "state": "Metro Manila",
        "country": "PH",
        "zipCode": "1226",
        "telNo": "0281234567",
    }


@pytest.fixture
def transport():
    mock = MagicMock()
    mock.call.return_value = "TOKEN-ABC123"
    return mock


@pytest.fixture
def client(transport):
    return GatewayClient(sandbox=True, transport=transport)


@pytest.fixture
def config():
    return GatewayConfig(merchant_id="MERCHANT", password="s3cret")
