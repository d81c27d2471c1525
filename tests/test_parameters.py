import hashlib
from urllib.parse import parse_qsl

import pytest

from dragonpay_payments.core.catalog import MissingParameters, ParameterError
from dragonpay_payments.core.digest import DigestSigner
from dragonpay_payments.core.parameters import ParameterSet


@pytest.fixture
def signer():
    return DigestSigner()


def _sha1(text):
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def test_query_uses_canonical_order_and_ends_signed_fields_with_digest(transaction, signer):
    params = ParameterSet(transaction)
    params.set_request_parameters({"param2": "two", "param1": "one", "procid": "BDO"})

    pairs = parse_qsl(params.query(signer, channel=64))

    assert [key for key, _ in pairs] == [
        "merchantid",
        "txnid",
        "amount",
        "ccy",
        "description",
        "email",
        "digest",
        "param1",
        "param2",
        "mode",
        "procid",
    ]
    values = dict(pairs)
    assert values["amount"] == "1000.00"
    assert values["mode"] == "64"
    assert values["digest"] == _sha1(
        "MERCHANT:TXN-0001:1000.00:PHP:Order 0001:buyer@example.com:s3cret"
    )


def test_query_never_leaks_the_secret_key(transaction, signer):
    query = ParameterSet(transaction).query(signer)
    assert "password" not in query
    assert "s3cret" not in query


def test_query_omits_unset_optional_fields(transaction, signer):
    keys = [key for key, _ in parse_qsl(ParameterSet(transaction).query(signer))]
    assert keys[-1] == "digest"
    assert "param1" not in keys
    assert "mode" not in keys


def test_digest_tracks_later_mutations(transaction, signer):
    params = ParameterSet(transaction)
    before = dict(parse_qsl(params.query(signer)))["digest"]

    params.set_request_parameters({"amount": "1000.01"})
    after = dict(parse_qsl(params.query(signer)))["digest"]

    assert before != after
    assert after == _sha1("MERCHANT:TXN-0001:1000.01:PHP:Order 0001:buyer@example.com:s3cret")


def test_keys_are_case_insensitive_and_last_write_wins(transaction):
    params = ParameterSet(transaction)
    params.set_request_parameters({"TxnId": "TXN-0002"})
    assert params.get("txnid") == "TXN-0002"
    assert params.to_request().txn_id == "TXN-0002"


def test_missing_fields_are_reported_at_signing_time(signer):
    params = ParameterSet({"merchantid": "MERCHANT", "amount": 10})
    with pytest.raises(MissingParameters) as exc_info:
        params.query(signer)
    assert exc_info.value.missing == ("txnid", "ccy", "description", "email", "password")


@pytest.mark.parametrize("amount", ["abc", 0, -5, "NaN", True])
def test_unusable_amounts_are_rejected(transaction, amount):
    params = ParameterSet(transaction)
    params.set_request_parameters({"amount": amount})
    with pytest.raises(ParameterError):
        params.to_request()


def test_amount_is_padded_to_cents(transaction):
    params = ParameterSet(transaction)
    params.set_request_parameters({"amount": "12.5"})
    assert params.to_request().amount_str == "12.50"


@pytest.mark.parametrize("amount", ["0.004", "10.125", "1e30"])
def test_amounts_that_do_not_fit_cents_are_rejected(transaction, signer, amount):
    params = ParameterSet(transaction)
    params.set_request_parameters({"amount": amount})
    with pytest.raises(ParameterError):
        params.query(signer)


def test_trailing_zero_digits_are_accepted(transaction):
    params = ParameterSet(transaction)
    params.set_request_parameters({"amount": "10.1200"})
    assert params.to_request().amount_str == "10.12"


def test_currency_is_upper_cased(transaction):
    params = ParameterSet(transaction)
    params.set_request_parameters({"ccy": "php"})
    assert params.to_request().currency == "PHP"


def test_tokenized_query_only_carries_token_and_filters(transaction, signer):
    params = ParameterSet(transaction)
    params.set_request_parameters({"procid": "GCSH"})
    assert params.query(signer, channel=128, token="TKN") == "tokenid=TKN&mode=128&procid=GCSH"


def test_prepare_request_token_parameters(transaction, signer):
    params = ParameterSet()
    body = params.prepare_request_token_parameters(dict(transaction, param1="x"), signer)

    assert list(body) == [
        "merchantId",
        "password",
        "merchantTxnId",
        "amount",
        "ccy",
        "description",
        "email",
        "digest",
        "param1",
    ]
    assert body["merchantTxnId"] == "TXN-0001"
    assert body["amount"] == "1000.00"
    assert body["digest"] == _sha1(
        "MERCHANT:TXN-0001:1000.00:PHP:Order 0001:buyer@example.com:s3cret"
    )


def test_billing_info_request(transaction, billing):
    params = ParameterSet(transaction)
    params.set_billing_info_parameters(dict(billing, ignored="value"))

    body = params.billing_info_request()

    assert body == {
        "merchantId": "MERCHANT",
        "merchantTxnId": "TXN-0001",
        "firstName": "Juan",
        "lastName": "Dela Cruz",
        "address1": "1 Ayala Ave",
        "address2": "",
        "city": "Makati",
        "state": "Metro Manila",
        "country": "PH",
        "zipCode": "1226",
        "telNo": "0281234567",
        "email": "buyer@example.com",
    }
    assert "ignored" not in params.billing_info()


def test_billing_info_request_requires_billing_fields(transaction):
    params = ParameterSet(transaction)
    params.set_billing_info_parameters({"firstname": "Juan"})
    with pytest.raises(MissingParameters) as exc_info:
        params.billing_info_request()
    assert "lastname" in exc_info.value.missing
    assert "firstname" not in exc_info.value.missing
