from unittest.mock import MagicMock

import pytest
import requests
from requests import Response

from dragonpay_payments.core.catalog import TransportFailure
from dragonpay_payments.core.transport import SOAP_NAMESPACE, RequestsSoapTransport

URL = "http://test.dragonpay.ph/DragonPayWebService/MerchantService.asmx"


def _soap_response(body, status_code=200):
    response = Response()
    response.status_code = status_code
    response._content = (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        f"<soap:Body>{body}</soap:Body>"
        "</soap:Envelope>"
    ).encode("utf-8")
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


def test_call_posts_envelope_and_returns_result(session):
    session.post.return_value = _soap_response(
        f'<GetTxnTokenResponse xmlns="{SOAP_NAMESPACE}">'
        "<GetTxnTokenResult>TOKEN-XYZ</GetTxnTokenResult>"
        "</GetTxnTokenResponse>"
    )
    transport = RequestsSoapTransport(session=session, timeout=5)

    result = transport.call(URL, "GetTxnToken", {"merchantId": "M&M", "amount": "10.00"})

    assert result == "TOKEN-XYZ"
    args, kwargs = session.post.call_args
    assert args == (URL,)
    assert kwargs["timeout"] == 5
    assert kwargs["headers"]["SOAPAction"] == '"http://api.dragonpay.ph/GetTxnToken"'
    envelope = kwargs["data"].decode("utf-8")
    assert f'<GetTxnToken xmlns="{SOAP_NAMESPACE}">' in envelope
    assert "<merchantId>M&amp;M</merchantId><amount>10.00</amount>" in envelope


def test_numeric_results_are_returned_as_text(session):
    session.post.return_value = _soap_response(
        f'<GetTxnTokenResponse xmlns="{SOAP_NAMESPACE}">'
        "<GetTxnTokenResult>102</GetTxnTokenResult>"
        "</GetTxnTokenResponse>"
    )
    assert RequestsSoapTransport(session=session).call(URL, "GetTxnToken", {}) == "102"


def test_connection_errors_become_transport_failures(session):
    cause = requests.ConnectionError("refused")
    session.post.side_effect = cause

    with pytest.raises(TransportFailure) as exc_info:
        RequestsSoapTransport(session=session).call(URL, "GetTxnToken", {})

    assert exc_info.value.__cause__ is cause


def test_http_errors_become_transport_failures(session):
    response = Response()
    response.status_code = 404
    response._content = b"not found"
    session.post.return_value = response

    with pytest.raises(TransportFailure):
        RequestsSoapTransport(session=session).call(URL, "GetTxnToken", {})


def test_soap_faults_become_transport_failures(session):
    session.post.return_value = _soap_response(
        "<soap:Fault><faultcode>soap:Server</faultcode>"
        "<faultstring>Server was unable to process request.</faultstring></soap:Fault>",
        status_code=500,
    )
    with pytest.raises(TransportFailure, match="unable to process"):
        RequestsSoapTransport(session=session).call(URL, "GetTxnToken", {})


def test_unparseable_bodies_become_transport_failures(session):
    response = Response()
    response.status_code = 200
    response._content = b"<html>maintenance"
    session.post.return_value = response

    with pytest.raises(TransportFailure) as exc_info:
        RequestsSoapTransport(session=session).call(URL, "GetTxnToken", {})
    assert exc_info.value.__cause__ is not None


def test_missing_result_element(session):
    session.post.return_value = _soap_response(f'<OtherResponse xmlns="{SOAP_NAMESPACE}"/>')
    with pytest.raises(TransportFailure):
        RequestsSoapTransport(session=session).call(URL, "GetTxnToken", {})
