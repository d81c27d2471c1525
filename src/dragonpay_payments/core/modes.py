"""
Endpoint resolution across operating mode and protocol.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .catalog import ConfigError, InvalidMode

__all__ = [
    "DEFAULT_BILLING_INFO_URL",
    "DEFAULT_URLS",
    "ModeSwitch",
    "ProtocolMode",
    "TransactionMode",
    "clean_url",
]


class TransactionMode(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value: Union[str, "TransactionMode"]) -> "TransactionMode":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise InvalidMode(
            f"Invalid mode '{value}'. Please select 'sandbox' or 'production' as payment mode."
        )


class ProtocolMode(str, Enum):
    REDIRECT = "redirect"
    WEBSERVICE = "webservice"

    @classmethod
    def parse(cls, value: Union[str, "ProtocolMode"]) -> "ProtocolMode":
        try:
            return cls(value)
        except ValueError as exc:
            raise ConfigError(
                f"Invalid protocol '{value}'. Expected 'redirect' or 'webservice'."
            ) from exc


DEFAULT_URLS: Dict[Tuple[TransactionMode, ProtocolMode], str] = {
    (TransactionMode.SANDBOX, ProtocolMode.REDIRECT): "http://test.dragonpay.ph/Pay.aspx",
    (TransactionMode.PRODUCTION, ProtocolMode.REDIRECT): "https://gw.dragonpay.ph/Pay.aspx",
    (
        TransactionMode.SANDBOX,
        ProtocolMode.WEBSERVICE,
    ): "http://test.dragonpay.ph/DragonPayWebService/MerchantService.asmx",
    (
        TransactionMode.PRODUCTION,
        ProtocolMode.WEBSERVICE,
    ): "https://secure.dragonpay.ph/DragonPayWebService/MerchantService.asmx",
}

# The PS has no sandbox endpoint for SendBillingInfo.
DEFAULT_BILLING_INFO_URL = "https://gw.dragonpay.ph/DragonPayWebService/MerchantService.asmx"


def clean_url(url: str) -> str:
    return url.strip().rstrip("/").rstrip("?")


class ModeSwitch:
    """
    Holds the four gateway endpoints plus the billing-info endpoint and knows
    which mode is active.
    """

    def __init__(
        self,
        mode: Union[str, TransactionMode] = TransactionMode.SANDBOX,
        *,
        urls: Optional[Dict[Tuple[TransactionMode, ProtocolMode], str]] = None,
        billing_info_url: Optional[str] = None,
    ) -> None:
        self.mode = TransactionMode.parse(mode)
        self._urls = dict(DEFAULT_URLS)
        for key, url in (urls or {}).items():
            self._urls[key] = clean_url(url)
        self._billing_info_url = clean_url(billing_info_url or DEFAULT_BILLING_INFO_URL)

    @property
    def payment_mode(self) -> str:
        return self.mode.value

    def resolve_url(self, protocol: ProtocolMode = ProtocolMode.REDIRECT) -> str:
        return self._urls[(self.mode, ProtocolMode.parse(protocol))]

    def set_payment_url(
        self,
        url: str,
        mode: Union[str, TransactionMode],
        protocol: ProtocolMode = ProtocolMode.REDIRECT,
    ) -> None:
        """
        Override the ``protocol`` endpoint for ``mode`` and make ``mode`` active.
        """
        resolved = TransactionMode.parse(mode)
        key = (resolved, ProtocolMode.parse(protocol))
        self._urls[key] = clean_url(url)
        self.mode = resolved

    @property
    def billing_info_url(self) -> str:
        return self._billing_info_url

    def set_billing_info_url(self, url: str) -> None:
        self._billing_info_url = clean_url(url)
