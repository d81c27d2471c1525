"""
Transaction parameters and their canonical wire representations.

:class:`ParameterSet` is the mutable bag a merchant fills in over the course of
a request. Every time something is sent it is frozen into a
:class:`TransactionRequest`, so the digest is always computed over the values
that actually go out.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

from .catalog import MissingParameters, ParameterError

if TYPE_CHECKING:
    from .digest import DigestSigner

__all__ = [
    "BILLING_FIELDS",
    "REQUIRED_BILLING_FIELDS",
    "REQUIRED_FIELDS",
    "ParameterSet",
    "TransactionRequest",
]

REQUIRED_FIELDS = ("merchantid", "txnid", "amount", "ccy", "description", "email", "password")

BILLING_FIELDS = (
    "firstname",
    "lastname",
    "address1",
    "address2",
    "city",
    "state",
    "country",
    "zipcode",
    "telno",
    "email",
)
REQUIRED_BILLING_FIELDS = tuple(
    name for name in BILLING_FIELDS if name not in ("address2", "email")
)

_CENTS = Decimal("0.01")


def _normalize_key(key: str) -> str:
    return str(key).strip().lower()


def _format_amount(raw: Any) -> Decimal:
    if isinstance(raw, bool):
        raise ParameterError(f"amount must be numeric, got {raw!r}")
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation as exc:
        raise ParameterError(f"amount must be numeric, got {raw!r}") from exc
    if not amount.is_finite():
        raise ParameterError(f"amount must be numeric, got {raw!r}")
    try:
        cents = amount.quantize(_CENTS)
    except InvalidOperation as exc:
        raise ParameterError(f"amount {raw!r} is out of range") from exc
    if cents != amount:
        raise ParameterError(f"amount {raw!r} cannot be represented in whole cents")
    if cents <= 0:
        raise ParameterError(f"amount must be greater than zero, got {raw!r}")
    return cents


def _optional(values: Mapping[str, Any], key: str) -> Optional[str]:
    value = values.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _filter_items(channel: Optional[int], proc_id: Optional[str]) -> List[Tuple[str, str]]:
    items: List[Tuple[str, str]] = []
    if channel is not None:
        items.append(("mode", str(channel)))
    if proc_id is not None:
        items.append(("procid", proc_id))
    return items


@dataclass(frozen=True)
class TransactionRequest:
    merchant_id: str
    txn_id: str
    amount: Decimal
    currency: str
    description: str
    email: str
    password: str
    param1: Optional[str] = None
    param2: Optional[str] = None
    proc_id: Optional[str] = None
    channel: Optional[int] = None

    @property
    def amount_str(self) -> str:
        return f"{self.amount:.2f}"

    def canonical_string(self) -> str:
        """Digest input without the secret key, fields joined by ``:``."""
        return ":".join(
            (
                self.merchant_id,
                self.txn_id,
                self.amount_str,
                self.currency,
                self.description,
                self.email,
            )
        )

    def query_items(self, digest: str) -> List[Tuple[str, str]]:
        items = [
            ("merchantid", self.merchant_id),
            ("txnid", self.txn_id),
            ("amount", self.amount_str),
            ("ccy", self.currency),
            ("description", self.description),
            ("email", self.email),
            ("digest", digest),
        ]
        if self.param1 is not None:
            items.append(("param1", self.param1))
        if self.param2 is not None:
            items.append(("param2", self.param2))
        return items + _filter_items(self.channel, self.proc_id)

    def token_parameters(self, digest: str) -> Dict[str, str]:
        """The ``GetTxnToken`` body, keys in the order the PS documents them."""
        parameters = {
            "merchantId": self.merchant_id,
            "password": self.password,
            "merchantTxnId": self.txn_id,
            "amount": self.amount_str,
            "ccy": self.currency,
            "description": self.description,
            "email": self.email,
            "digest": digest,
        }
        if self.param1 is not None:
            parameters["param1"] = self.param1
        if self.param2 is not None:
            parameters["param2"] = self.param2
        return parameters


class ParameterSet:
    """
    Mutable, per-transaction field bag.

    Keys are case-insensitive; the last write wins. Nothing is validated until
    :meth:`to_request` is called.
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = {}
        self._billing: Dict[str, Any] = {}
        if defaults:
            self.set_request_parameters(defaults)

    def set_request_parameters(self, parameters: Mapping[str, Any]) -> None:
        for key, value in parameters.items():
            self._values[_normalize_key(key)] = value

    def set_billing_info_parameters(self, parameters: Mapping[str, Any]) -> None:
        for key, value in parameters.items():
            name = _normalize_key(key)
            if name in BILLING_FIELDS:
                self._billing[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(_normalize_key(key), default)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def billing_info(self) -> Dict[str, Any]:
        return dict(self._billing)

    def to_request(self, *, channel: Optional[int] = None) -> TransactionRequest:
        missing = [
            name
            for name in REQUIRED_FIELDS
            if self._values.get(name) is None or str(self._values[name]).strip() == ""
        ]
        if missing:
            raise MissingParameters(missing)

        values = self._values
        return TransactionRequest(
            merchant_id=str(values["merchantid"]),
            txn_id=str(values["txnid"]),
            amount=_format_amount(values["amount"]),
            currency=str(values["ccy"]).upper(),
            description=str(values["description"]),
            email=str(values["email"]),
            password=str(values["password"]),
            param1=_optional(values, "param1"),
            param2=_optional(values, "param2"),
            proc_id=_optional(values, "procid"),
            channel=channel,
        )

    def prepare_request_token_parameters(
        self,
        parameters: Mapping[str, Any],
        signer: "DigestSigner",
    ) -> Dict[str, str]:
        self.set_request_parameters(parameters)
        request = self.to_request()
        return request.token_parameters(signer.sign(request))

    def query(
        self,
        signer: "DigestSigner",
        *,
        channel: Optional[int] = None,
        token: Optional[str] = None,
    ) -> str:
        """
        Serialize the current state as a redirect query string.

        The digest is recomputed on every call. Once a token exists only
        ``tokenid`` and the optional channel/processor filters are sent.
        """
        if token is not None:
            proc_id = _optional(self._values, "procid")
            return urlencode([("tokenid", token)] + _filter_items(channel, proc_id))
        request = self.to_request(channel=channel)
        return urlencode(request.query_items(signer.sign(request)))

    def billing_info_request(self) -> Dict[str, str]:
        """The ``SendBillingInfo`` body."""
        missing = [
            name
            for name in ("merchantid", "txnid")
            if self._values.get(name) in (None, "")
        ]
        missing += [
            name for name in REQUIRED_BILLING_FIELDS if self._billing.get(name) in (None, "")
        ]
        email = self._billing.get("email") or self._values.get("email")
        if not email:
            missing.append("email")
        if missing:
            raise MissingParameters(missing)

        billing = self._billing
        return {
            "merchantId": str(self._values["merchantid"]),
            "merchantTxnId": str(self._values["txnid"]),
            "firstName": str(billing["firstname"]),
            "lastName": str(billing["lastname"]),
            "address1": str(billing["address1"]),
            "address2": str(billing.get("address2") or ""),
            "city": str(billing["city"]),
            "state": str(billing["state"]),
            "country": str(billing["country"]),
            "zipCode": str(billing["zipcode"]),
            "telNo": str(billing["telno"]),
            "email": str(email),
        }
