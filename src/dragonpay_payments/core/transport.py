"""
SOAP-over-HTTP transport for the PS merchant web service.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Protocol
from xml.sax.saxutils import escape

import requests

from .catalog import BillingInfoRejected, TransportFailure

if TYPE_CHECKING:
    from .parameters import ParameterSet

__all__ = [
    "BillingInfoResult",
    "BillingInfoVerifier",
    "RequestsSoapTransport",
    "SOAP_NAMESPACE",
    "Transport",
]

SOAP_NAMESPACE = "http://api.dragonpay.ph/"
_ENVELOPE_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"


class Transport(Protocol):
    """Anything that can invoke a PS web-service operation and return its result."""

    def call(self, url: str, operation: str, parameters: Mapping[str, Any]) -> str:
        ...


def _build_envelope(operation: str, parameters: Mapping[str, Any]) -> str:
    body = "".join(
        f"<{name}>{escape(str(value))}</{name}>" for name, value in parameters.items()
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<soap:Envelope xmlns:soap="{_ENVELOPE_NAMESPACE}">'
        "<soap:Body>"
        f'<{operation} xmlns="{SOAP_NAMESPACE}">{body}</{operation}>'
        "</soap:Body>"
        "</soap:Envelope>"
    )


def _extract_result(operation: str, payload: bytes) -> str:
    root = ET.fromstring(payload)
    fault = root.find(f".//{{{_ENVELOPE_NAMESPACE}}}Fault")
    if fault is not None:
        reason = fault.findtext("faultstring") or "unknown fault"
        raise TransportFailure(f"{operation} returned a SOAP fault: {reason}")
    result = root.find(f".//{{{SOAP_NAMESPACE}}}{operation}Result")
    if result is None:
        raise TransportFailure(f"{operation} response did not contain {operation}Result")
    return (result.text or "").strip()


class RequestsSoapTransport:
    """
    Posts SOAP 1.1 envelopes with a :class:`requests.Session`.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def call(self, url: str, operation: str, parameters: Mapping[str, Any]) -> str:
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{SOAP_NAMESPACE}{operation}"',
        }
        envelope = _build_envelope(operation, parameters)
        logging.info("Calling %s on %s", operation, url)
        try:
            response = self.session.post(
                url,
                data=envelope.encode("utf-8"),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportFailure(f"{operation} request to {url} failed: {exc}") from exc

        # SOAP faults come back as HTTP 500 with a parseable body
        if response.status_code >= 400 and response.status_code != 500:
            raise TransportFailure(
                f"Payment switch responded with {response.status_code}: {response.text}"
            )
        try:
            return _extract_result(operation, response.content)
        except ET.ParseError as exc:
            raise TransportFailure(
                f"Failed to parse {operation} response from {url}: {response.text}"
            ) from exc


@dataclass(frozen=True)
class BillingInfoResult:
    success: bool
    result: int
    request: Dict[str, str]


class BillingInfoVerifier:
    """
    Sends the customer's billing details ahead of a credit-card payment.
    """

    operation = "SendBillingInfo"

    def send(
        self,
        parameters: "ParameterSet",
        transport: "Transport",
        url: str,
    ) -> BillingInfoResult:
        body = parameters.billing_info_request()
        logging.info("Submitting billing info for txn %s to %s", body["merchantTxnId"], url)
        try:
            raw = transport.call(url, self.operation, body)
        except TransportFailure:
            raise
        except Exception as exc:  # noqa: BLE001
            raise TransportFailure(f"{self.operation} failed: {exc}") from exc

        try:
            result = int(str(raw).strip())
        except ValueError as exc:
            raise BillingInfoRejected(raw) from exc
        if result != 0:
            logging.error("Billing info rejected for txn %s: %s", body["merchantTxnId"], result)
            raise BillingInfoRejected(result)
        return BillingInfoResult(success=True, result=result, request=body)
