"""
Error taxonomy for the Dragonpay payment switch.

The PS answers a failed web-service call with one of a small, documented set
of numeric codes. Each code maps to exactly one :class:`ErrorKind`, one
canonical message and one exception class, so callers can ``except`` on the
kind they care about instead of comparing raw codes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Type, Union

__all__ = [
    "CATALOG",
    "ClientStateError",
    "ConfigError",
    "CurrencyNotSupported",
    "DragonpayError",
    "ErrorCatalog",
    "ErrorInOperation",
    "ErrorKind",
    "GatewayError",
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
    "ParameterError",
    "TransactionCancelled",
    "TransactionLimitExceeded",
    "TransportFailure",
    "BillingInfoRejected",
    "UnauthorizedAccess",
    "UnknownErrorCode",
    "is_known_code",
    "message",
    "resolve",
]

Code = Union[int, str]


class ErrorKind(Enum):
    INVALID_PAYMENT_GATEWAY_ID = "InvalidPaymentGatewayId"
    INCORRECT_SECRET_KEY = "IncorrectSecretKey"
    INVALID_REFERENCE_NUMBER = "InvalidReferenceNumber"
    UNAUTHORIZED_ACCESS = "UnauthorizedAccess"
    INVALID_TOKEN = "InvalidToken"
    CURRENCY_NOT_SUPPORTED = "CurrencyNotSupported"
    TRANSACTION_CANCELLED = "TransactionCancelled"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    TRANSACTION_LIMIT_EXCEEDED = "TransactionLimitExceeded"
    ERROR_IN_OPERATION = "ErrorInOperation"
    INVALID_PARAMETERS = "InvalidParameters"
    INVALID_MERCHANT_ID = "InvalidMerchantId"
    INVALID_MERCHANT_PASSWORD = "InvalidMerchantPassword"


@dataclass(frozen=True)
class CatalogEntry:
    code: int
    kind: ErrorKind
    message: str


CATALOG: Dict[int, CatalogEntry] = {
    entry.code: entry
    for entry in (
        CatalogEntry(101, ErrorKind.INVALID_PAYMENT_GATEWAY_ID, "Invalid payment gateway id"),
        CatalogEntry(102, ErrorKind.INCORRECT_SECRET_KEY, "Incorrect secret key"),
        CatalogEntry(103, ErrorKind.INVALID_REFERENCE_NUMBER, "Invalid reference number"),
        CatalogEntry(104, ErrorKind.UNAUTHORIZED_ACCESS, "Unauthorized access"),
        CatalogEntry(105, ErrorKind.INVALID_TOKEN, "Invalid token"),
        CatalogEntry(106, ErrorKind.CURRENCY_NOT_SUPPORTED, "Currency not supported"),
        CatalogEntry(107, ErrorKind.TRANSACTION_CANCELLED, "Transaction cancelled"),
        CatalogEntry(108, ErrorKind.INSUFFICIENT_FUNDS, "Insufficient funds"),
        CatalogEntry(109, ErrorKind.TRANSACTION_LIMIT_EXCEEDED, "Transaction limit exceeded"),
        CatalogEntry(110, ErrorKind.ERROR_IN_OPERATION, "Error in operation"),
        CatalogEntry(111, ErrorKind.INVALID_PARAMETERS, "Invalid parameters"),
        CatalogEntry(201, ErrorKind.INVALID_MERCHANT_ID, "Invalid merchant id"),
        CatalogEntry(202, ErrorKind.INVALID_MERCHANT_PASSWORD, "Invalid merchant password"),
    )
}


class DragonpayError(Exception):
    """Base class for everything this package raises."""


class ConfigError(DragonpayError):
    """Raised when the supplied configuration is invalid."""


class InvalidMode(ConfigError):
    """Raised when a payment mode other than sandbox/production is requested."""


class InvalidChannel(ConfigError):
    """Raised when a channel value contains bits outside the known flags."""


class ParameterError(DragonpayError):
    """Raised when a transaction parameter has an unusable value."""


class MissingParameters(ParameterError):
    """Raised when a transaction is signed before its required fields are set."""

    def __init__(self, missing) -> None:
        self.missing = tuple(missing)
        super().__init__(
            "Missing required parameter(s): " + ", ".join(self.missing)
        )


class ClientStateError(DragonpayError):
    """Raised when an operation is not allowed in the client's current state."""


class UnknownErrorCode(DragonpayError):
    def __init__(self, code: object) -> None:
        self.code = code
        super().__init__(f"Unknown Dragonpay error code: {code!r}")


class TransportFailure(DragonpayError):
    """
    Raised when the transport could not complete a call.

    The underlying exception is available as ``__cause__``.
    """


class BillingInfoRejected(DragonpayError):
    def __init__(self, result: object) -> None:
        self.result = result
        super().__init__(f"SendBillingInfo was rejected with result {result!r}")


class GatewayError(DragonpayError):
    """
    An error code returned by the payment switch.

    Subclasses exist for every :class:`ErrorKind`; ``kind`` is set on the
    class so ``except IncorrectSecretKey`` and ``exc.kind is
    ErrorKind.INCORRECT_SECRET_KEY`` are equivalent.
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class InvalidPaymentGatewayId(GatewayError):
    kind = ErrorKind.INVALID_PAYMENT_GATEWAY_ID


class IncorrectSecretKey(GatewayError):
    kind = ErrorKind.INCORRECT_SECRET_KEY


class InvalidReferenceNumber(GatewayError):
    kind = ErrorKind.INVALID_REFERENCE_NUMBER


class UnauthorizedAccess(GatewayError):
    kind = ErrorKind.UNAUTHORIZED_ACCESS


class InvalidToken(GatewayError):
    kind = ErrorKind.INVALID_TOKEN


class CurrencyNotSupported(GatewayError):
    kind = ErrorKind.CURRENCY_NOT_SUPPORTED


class TransactionCancelled(GatewayError):
    kind = ErrorKind.TRANSACTION_CANCELLED


class InsufficientFunds(GatewayError):
    kind = ErrorKind.INSUFFICIENT_FUNDS


class TransactionLimitExceeded(GatewayError):
    kind = ErrorKind.TRANSACTION_LIMIT_EXCEEDED


class ErrorInOperation(GatewayError):
    kind = ErrorKind.ERROR_IN_OPERATION


class InvalidParameters(GatewayError):
    kind = ErrorKind.INVALID_PARAMETERS


class InvalidMerchantId(GatewayError):
    kind = ErrorKind.INVALID_MERCHANT_ID


class InvalidMerchantPassword(GatewayError):
    kind = ErrorKind.INVALID_MERCHANT_PASSWORD


_EXCEPTIONS: Dict[ErrorKind, Type[GatewayError]] = {
    cls.kind: cls
    for cls in (
        InvalidPaymentGatewayId,
        IncorrectSecretKey,
        InvalidReferenceNumber,
        UnauthorizedAccess,
        InvalidToken,
        CurrencyNotSupported,
        TransactionCancelled,
        InsufficientFunds,
        TransactionLimitExceeded,
        ErrorInOperation,
        InvalidParameters,
        InvalidMerchantId,
        InvalidMerchantPassword,
    )
}


def _normalize_code(code: object) -> Optional[int]:
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, str):
        stripped = code.strip()
        if stripped.isdecimal():
            return int(stripped)
    return None


def is_known_code(code: object) -> bool:
    return _normalize_code(code) in CATALOG


def _entry(code: object) -> CatalogEntry:
    normalized = _normalize_code(code)
    if normalized not in CATALOG:
        raise UnknownErrorCode(code)
    return CATALOG[normalized]


def resolve(code: Code) -> ErrorKind:
    """Return the :class:`ErrorKind` for ``code`` or raise :class:`UnknownErrorCode`."""
    return _entry(code).kind


def message(code: Code) -> str:
    return _entry(code).message


class ErrorCatalog:
    """
    Per-client view of the catalog that remembers the last error raised.
    """

    def __init__(self) -> None:
        self.last_error: Optional[str] = None

    resolve = staticmethod(resolve)
    message = staticmethod(message)
    is_known = staticmethod(is_known_code)

    def build_error(self, code: Code) -> GatewayError:
        entry = _entry(code)
        return _EXCEPTIONS[entry.kind](entry.code, entry.message)

    def raise_for(self, code: Code) -> None:
        error = self.build_error(code)
        self.last_error = error.message
        logging.error(
            "Payment switch returned error %s (%s): %s",
            error.code,
            error.kind.value,
            error.message,
        )
        raise error
