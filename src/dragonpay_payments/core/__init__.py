"""
Core primitives that implement the Dragonpay transaction-initiation protocol.
"""

from .catalog import (
    CATALOG,
    BillingInfoRejected,
    ClientStateError,
    ConfigError,
    CurrencyNotSupported,
    DragonpayError,
    ErrorCatalog,
    ErrorInOperation,
    ErrorKind,
    GatewayError,
    IncorrectSecretKey,
    InsufficientFunds,
    InvalidChannel,
    InvalidMerchantId,
    InvalidMerchantPassword,
    InvalidMode,
    InvalidParameters,
    InvalidPaymentGatewayId,
    InvalidReferenceNumber,
    InvalidToken,
    MissingParameters,
    ParameterError,
    TransactionCancelled,
    TransactionLimitExceeded,
    TransportFailure,
    UnauthorizedAccess,
    UnknownErrorCode,
    message,
    resolve,
)
from .channels import ChannelSelector, PaymentChannel
from .client import ClientState, GatewayClient, Token
from .config import GatewayConfig, GatewayParameters, load_gateway_config
from .digest import DigestSigner
from .environment import GatewayEnvironment, build_environment, load_env_file
from .modes import ModeSwitch, ProtocolMode, TransactionMode
from .parameters import ParameterSet, TransactionRequest
from .transport import BillingInfoResult, BillingInfoVerifier, RequestsSoapTransport, Transport

__all__ = [
    "CATALOG",
    "BillingInfoRejected",
    "BillingInfoResult",
    "BillingInfoVerifier",
    "ChannelSelector",
    "ClientState",
    "ClientStateError",
    "ConfigError",
    "CurrencyNotSupported",
    "DigestSigner",
    "DragonpayError",
    "ErrorCatalog",
    "ErrorInOperation",
    "ErrorKind",
    "GatewayClient",
    "GatewayConfig",
    "GatewayEnvironment",
    "GatewayError",
    "GatewayParameters",
    "IncorrectSecretKey",
    "InsufficientFunds",
    "InvalidChannel",
    "InvalidMerchantId",
    "InvalidMerchantPassword",
    "InvalidMode",
    "InvalidParameters",
    "InvalidPaymentGatewayId",
    "InvalidReferenceNumber",
    "InvalidToken",
    "MissingParameters",
    "ModeSwitch",
    "ParameterError",
    "ParameterSet",
    "PaymentChannel",
    "ProtocolMode",
    "RequestsSoapTransport",
    "Token",
    "TransactionCancelled",
    "TransactionLimitExceeded",
    "TransactionMode",
    "TransactionRequest",
    "Transport",
    "TransportFailure",
    "UnauthorizedAccess",
    "UnknownErrorCode",
    "build_environment",
    "load_env_file",
    "load_gateway_config",
    "message",
    "resolve",
]
