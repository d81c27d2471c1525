"""
Public facade for the Dragonpay payment-switch client.

The most useful pieces are re-exported here so integrators can
``from dragonpay_payments import ...`` without navigating the package.
"""

from .api import build_redirect_url, create_gateway_client, request_token
from .core import (
    BillingInfoRejected,
    BillingInfoVerifier,
    ClientStateError,
    ConfigError,
    DigestSigner,
    DragonpayError,
    ErrorKind,
    GatewayClient,
    GatewayConfig,
    GatewayError,
    GatewayParameters,
    IncorrectSecretKey,
    InvalidChannel,
    InvalidMode,
    MissingParameters,
    PaymentChannel,
    ProtocolMode,
    RequestsSoapTransport,
    Token,
    TransactionMode,
    TransportFailure,
    UnknownErrorCode,
    load_gateway_config,
)

__all__ = (
    "BillingInfoRejected",
    "BillingInfoVerifier",
    "ClientStateError",
    "ConfigError",
    "DigestSigner",
    "DragonpayError",
    "ErrorKind",
    "GatewayClient",
    "GatewayConfig",
    "GatewayError",
    "GatewayParameters",
    "IncorrectSecretKey",
    "InvalidChannel",
    "InvalidMode",
    "MissingParameters",
    "PaymentChannel",
    "ProtocolMode",
    "RequestsSoapTransport",
    "Token",
    "TransactionMode",
    "TransportFailure",
    "UnknownErrorCode",
    "build_redirect_url",
    "create_gateway_client",
    "load_gateway_config",
    "request_token",
)
