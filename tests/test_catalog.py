import pytest

from dragonpay_payments.core.catalog import (
    CATALOG,
    ErrorCatalog,
    ErrorKind,
    GatewayError,
    IncorrectSecretKey,
    InvalidMerchantPassword,
    InvalidToken,
    UnknownErrorCode,
    message,
    resolve,
)

DOCUMENTED = [
    (101, "InvalidPaymentGatewayId", "Invalid payment gateway id"),
    (102, "IncorrectSecretKey", "Incorrect secret key"),
    (103, "InvalidReferenceNumber", "Invalid reference number"),
    (104, "UnauthorizedAccess", "Unauthorized access"),
    (105, "InvalidToken", "Invalid token"),
    (106, "CurrencyNotSupported", "Currency not supported"),
    (107, "TransactionCancelled", "Transaction cancelled"),
    (108, "InsufficientFunds", "Insufficient funds"),
    (109, "TransactionLimitExceeded", "Transaction limit exceeded"),
    (110, "ErrorInOperation", "Error in operation"),
    (111, "InvalidParameters", "Invalid parameters"),
    (201, "InvalidMerchantId", "Invalid merchant id"),
    (202, "InvalidMerchantPassword", "Invalid merchant password"),
]


@pytest.mark.parametrize("code,kind,text", DOCUMENTED)
def test_documented_codes(code, kind, text):
    assert resolve(code) is ErrorKind(kind)
    assert message(code) == text

    error = ErrorCatalog().build_error(code)
    assert type(error).__name__ == kind
    assert error.kind is ErrorKind(kind)
    assert error.code == code
    assert str(error) == text


def test_catalog_is_closed():
    assert sorted(CATALOG) == [code for code, _, _ in DOCUMENTED]
    assert len(ErrorKind) == 13


def test_codes_returned_as_strings_resolve():
    assert resolve("102") is ErrorKind.INCORRECT_SECRET_KEY
    assert resolve(" 201 ") is ErrorKind.INVALID_MERCHANT_ID


@pytest.mark.parametrize("code", [999, 0, "abc", "", None, True, 10.5])
def test_unknown_codes_raise(code):
    with pytest.raises(UnknownErrorCode) as exc_info:
        resolve(code)
    assert exc_info.value.code == code


def test_message_for_unknown_code_raises():
    with pytest.raises(UnknownErrorCode):
        message(999)


def test_raise_for_records_last_error():
    catalog = ErrorCatalog()
    assert catalog.last_error is None

    with pytest.raises(InvalidToken) as exc_info:
        catalog.raise_for(105)

    assert isinstance(exc_info.value, GatewayError)
    assert catalog.last_error == "Invalid token"


def test_raise_for_discriminates_by_kind():
    catalog = ErrorCatalog()
    with pytest.raises(GatewayError) as exc_info:
        catalog.raise_for("202")
    assert isinstance(exc_info.value, InvalidMerchantPassword)
    assert not isinstance(exc_info.value, IncorrectSecretKey)


def test_is_known():
    assert ErrorCatalog.is_known("110")
    assert not ErrorCatalog.is_known("TOKEN-110")
