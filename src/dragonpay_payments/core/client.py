"""
Per-transaction client for the Dragonpay payment switch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, TypeVar, Union

from .catalog import ClientStateError, ErrorCatalog, TransportFailure
from .channels import ChannelSelector, PaymentChannel
from .digest import DigestSigner
from .modes import ModeSwitch, ProtocolMode, TransactionMode
from .parameters import ParameterSet
from .transport import BillingInfoVerifier, Transport

if TYPE_CHECKING:
    from .config import GatewayConfig

__all__ = [
    "ClientState",
    "GatewayClient",
    "Token",
]

T = TypeVar("T")


@dataclass(frozen=True)
class Token:
    value: str

    def __str__(self) -> str:
        return self.value


class ClientState(str, Enum):
    CONFIGURED = "configured"
    SIGNED = "signed"
    TOKEN_PENDING = "token_pending"
    TOKENIZED = "tokenized"
    FAILED = "failed"
    REDIRECTED = "redirected"
    BILLING_VERIFYING = "billing_verifying"


class GatewayClient:
    """
    Drives one transaction through the redirect, token or billing-info flow.

    An instance holds mutable per-transaction state (parameters, token,
    channel, mode) and must not be shared between concurrent transactions.
    Use :meth:`from_config` to build one per request from a shared
    :class:`~dragonpay_payments.core.config.GatewayConfig`.
    """

    def __init__(
        self,
        sandbox: bool = True,
        *,
        transport: Optional[Transport] = None,
        signer: Optional[DigestSigner] = None,
        modes: Optional[ModeSwitch] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.modes = modes or ModeSwitch(
            TransactionMode.SANDBOX if sandbox else TransactionMode.PRODUCTION
        )
        self.signer = signer or DigestSigner()
        self.transport = transport
        self.parameters = ParameterSet(defaults)
        self.channels = ChannelSelector()
        self.errors = ErrorCatalog()
        self.token: Optional[Token] = None
        self.state = ClientState.CONFIGURED

    @classmethod
    def from_config(
        cls,
        config: "GatewayConfig",
        *,
        transport: Optional[Transport] = None,
    ) -> "GatewayClient":
        return cls(
            transport=transport,
            signer=DigestSigner(config.digest_algorithm),
            modes=config.mode_switch(),
            defaults=config.default_parameters(),
        )

    def set_request_parameters(self, parameters: Mapping[str, Any]) -> "GatewayClient":
        self.parameters.set_request_parameters(parameters)
        return self

    def set_parameters(self, parameters: Mapping[str, Any]) -> "GatewayClient":
        """Alias of :meth:`set_request_parameters`."""
        return self.set_request_parameters(parameters)

    def query(self) -> str:
        token = self.token.value if self.token is not None else None
        query = self.parameters.query(
            self.signer,
            channel=self.channels.get_payment_channel(),
            token=token,
        )
        if self.state is ClientState.CONFIGURED:
            self.state = ClientState.SIGNED
        return query

    def redirect_url(self) -> str:
        return f"{self.modes.resolve_url(ProtocolMode.REDIRECT)}?{self.query()}"

    def away(self, redirect: Optional[Callable[[str], T]] = None) -> Union[str, T]:
        """
        Build the payment page URL.

        Without ``redirect`` the URL is returned. Otherwise ``redirect(url)``
        is returned, e.g. a web framework's 302 response.
        """
        if self.state is ClientState.FAILED:
            raise ClientStateError("Cannot redirect a transaction whose token request failed")
        url = self.redirect_url()
        self.state = ClientState.REDIRECTED
        logging.info("Redirecting to %s payment page", self.modes.payment_mode)
        if redirect is None:
            return url
        return redirect(url)

    def get_token(
        self,
        parameters: Mapping[str, Any],
        *,
        transport: Optional[Transport] = None,
    ) -> Token:
        """
        Request a transaction token through the XML web-service model.

        Raises the :class:`~dragonpay_payments.core.catalog.GatewayError`
        subclass matching the code when the PS answers with a known error.
        """
        if self.token is not None or self.state is ClientState.FAILED:
            raise ClientStateError("A token has already been requested for this transaction")
        if self.state is ClientState.REDIRECTED:
            raise ClientStateError("Cannot request a token after redirecting to the payment page")
        transport = transport or self.transport
        if transport is None:
            raise ClientStateError("get_token requires a transport")

        body = self.parameters.prepare_request_token_parameters(parameters, self.signer)
        url = self.get_webservice_url()
        self.state = ClientState.TOKEN_PENDING
        logging.info("Requesting token for txn %s from %s", body["merchantTxnId"], url)
        try:
            result = transport.call(url, "GetTxnToken", body)
        except TransportFailure:
            self.state = ClientState.FAILED
            raise
        except Exception as exc:  # noqa: BLE001
            self.state = ClientState.FAILED
            raise TransportFailure(f"GetTxnToken failed: {exc}") from exc

        if self.errors.is_known(result):
            self.state = ClientState.FAILED
            self.errors.raise_for(result)

        value = "" if result is None else str(result).strip()
        if not value:
            self.state = ClientState.FAILED
            raise TransportFailure("GetTxnToken returned an empty result")

        self.token = Token(value)
        self.state = ClientState.TOKENIZED
        logging.info("Received token for txn %s", body["merchantTxnId"])
        return self.token

    def use_credit_card(
        self,
        parameters: Mapping[str, Any],
        verifier: BillingInfoVerifier,
        transport: Transport,
    ) -> "GatewayClient":
        self.set_parameters(parameters)
        self.parameters.set_billing_info_parameters(parameters)
        self.filter_payment_channel(PaymentChannel.CREDIT_CARD)
        self.state = ClientState.BILLING_VERIFYING
        verifier.send(self.parameters, transport, self.get_billing_info_url())
        return self

    def filter_payment_channel(self, channel: int) -> "GatewayClient":
        self.channels.filter_payment_channel(channel)
        return self

    def get_payment_channel(self) -> Optional[int]:
        return self.channels.get_payment_channel()

    def resolve_url(self) -> str:
        protocol = ProtocolMode.WEBSERVICE if self.token is not None else ProtocolMode.REDIRECT
        return self.modes.resolve_url(protocol)

    def get_webservice_url(self) -> str:
        return self.modes.resolve_url(ProtocolMode.WEBSERVICE)

    def set_payment_url(
        self,
        url: str,
        mode: Union[str, TransactionMode],
        protocol: ProtocolMode = ProtocolMode.REDIRECT,
    ) -> None:
        self.modes.set_payment_url(url, mode, protocol)

    def get_payment_mode(self) -> str:
        return self.modes.payment_mode

    def set_billing_info_url(self, url: str) -> None:
        self.modes.set_billing_info_url(url)

    def get_billing_info_url(self) -> str:
        return self.modes.billing_info_url

    def see_error(self) -> Optional[str]:
        return self.errors.last_error
