"""
Configuration objects and helpers for the Dragonpay client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from .catalog import ConfigError
from .digest import DEFAULT_DIGEST_ALGORITHM, DigestSigner
from .modes import (
    DEFAULT_BILLING_INFO_URL,
    DEFAULT_URLS,
    ModeSwitch,
    ProtocolMode,
    TransactionMode,
    clean_url,
)
from .environment import build_environment

__all__ = [
    "ConfigError",
    "GatewayConfig",
    "GatewayParameters",
    "load_gateway_config",
]

_PARAMETER_TO_ENV_KEY = {
    "merchant_id": "DRAGONPAY_MERCHANT_ID",
    "password": "DRAGONPAY_PASSWORD",
    "mode": "DRAGONPAY_MODE",
    "sandbox_url": "DRAGONPAY_SANDBOX_URL",
    "production_url": "DRAGONPAY_PRODUCTION_URL",
    "sandbox_webservice_url": "DRAGONPAY_SANDBOX_WEBSERVICE_URL",
    "production_webservice_url": "DRAGONPAY_PRODUCTION_WEBSERVICE_URL",
    "billing_info_url": "DRAGONPAY_BILLING_INFO_URL",
    "digest_algorithm": "DRAGONPAY_DIGEST_ALGORITHM",
    "currency": "DRAGONPAY_CURRENCY",
    "timeout_seconds": "DRAGONPAY_TIMEOUT_SECONDS",
}

_URL_FIELDS = {
    "sandbox_url": (TransactionMode.SANDBOX, ProtocolMode.REDIRECT),
    "production_url": (TransactionMode.PRODUCTION, ProtocolMode.REDIRECT),
    "sandbox_webservice_url": (TransactionMode.SANDBOX, ProtocolMode.WEBSERVICE),
    "production_webservice_url": (TransactionMode.PRODUCTION, ProtocolMode.WEBSERVICE),
}


@dataclass(frozen=True)
class GatewayParameters:
    """
    Keyword bundle for :func:`load_gateway_config`; ``None`` means "not given".
    """

    merchant_id: Optional[str] = None
    password: Optional[str] = None
    mode: Optional[str] = None
    sandbox_url: Optional[str] = None
    production_url: Optional[str] = None
    sandbox_webservice_url: Optional[str] = None
    production_webservice_url: Optional[str] = None
    billing_info_url: Optional[str] = None
    digest_algorithm: Optional[str] = None
    currency: Optional[str] = None
    timeout_seconds: Optional[Union[int, float, str]] = None

    def as_overrides(self) -> Dict[str, str]:
        return {
            env_key: str(getattr(self, field_name))
            for field_name, env_key in _PARAMETER_TO_ENV_KEY.items()
            if getattr(self, field_name) is not None
        }


def _required(values: Mapping[str, str], key: str) -> str:
    value = (values.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} must be provided")
    return value


def _timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"DRAGONPAY_TIMEOUT_SECONDS must be a number, got '{raw}'") from exc
    if timeout <= 0:
        raise ConfigError("DRAGONPAY_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class GatewayConfig:
    merchant_id: str
    password: str
    mode: TransactionMode = TransactionMode.SANDBOX
    sandbox_url: str = DEFAULT_URLS[(TransactionMode.SANDBOX, ProtocolMode.REDIRECT)]
    production_url: str = DEFAULT_URLS[(TransactionMode.PRODUCTION, ProtocolMode.REDIRECT)]
    sandbox_webservice_url: str = DEFAULT_URLS[(TransactionMode.SANDBOX, ProtocolMode.WEBSERVICE)]
    production_webservice_url: str = DEFAULT_URLS[
        (TransactionMode.PRODUCTION, ProtocolMode.WEBSERVICE)
    ]
    billing_info_url: str = DEFAULT_BILLING_INFO_URL
    digest_algorithm: str = DEFAULT_DIGEST_ALGORITHM
    currency: str = "PHP"
    timeout_seconds: float = 30.0

    def mode_switch(self) -> ModeSwitch:
        """A fresh :class:`ModeSwitch`; each client mutates its own copy."""
        return ModeSwitch(
            self.mode,
            urls={key: getattr(self, name) for name, key in _URL_FIELDS.items()},
            billing_info_url=self.billing_info_url,
        )

    def default_parameters(self) -> Dict[str, Any]:
        return {
            "merchantid": self.merchant_id,
            "password": self.password,
            "ccy": self.currency,
        }

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "GatewayConfig":
        def get(key: str, default: str) -> str:
            value = values.get(key)
            return value.strip() if value and value.strip() else default

        urls = {
            name: clean_url(get(_PARAMETER_TO_ENV_KEY[name], DEFAULT_URLS[key]))
            for name, key in _URL_FIELDS.items()
        }
        digest_algorithm = get("DRAGONPAY_DIGEST_ALGORITHM", DEFAULT_DIGEST_ALGORITHM)
        # fail on an unknown algorithm now rather than at the first signature
        DigestSigner(digest_algorithm)

        currency = get("DRAGONPAY_CURRENCY", "PHP").upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ConfigError(f"DRAGONPAY_CURRENCY must be an ISO 4217 code, got '{currency}'")

        return cls(
            merchant_id=_required(values, "DRAGONPAY_MERCHANT_ID"),
            password=_required(values, "DRAGONPAY_PASSWORD"),
            mode=TransactionMode.parse(get("DRAGONPAY_MODE", TransactionMode.SANDBOX.value)),
            billing_info_url=clean_url(
                get("DRAGONPAY_BILLING_INFO_URL", DEFAULT_BILLING_INFO_URL)
            ),
            digest_algorithm=digest_algorithm.lower(),
            currency=currency,
            timeout_seconds=_timeout(get("DRAGONPAY_TIMEOUT_SECONDS", "30")),
            **urls,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[GatewayParameters] = None,
        **explicit: Any,
    ) -> "GatewayConfig":
        unknown = sorted(set(explicit) - set(_PARAMETER_TO_ENV_KEY))
        if unknown:
            raise TypeError(f"Unknown gateway parameter(s): {', '.join(unknown)}")

        merged_overrides = dict(overrides or {})
        if parameters is not None:
            merged_overrides.update(parameters.as_overrides())
        merged_overrides.update(GatewayParameters(**explicit).as_overrides())

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_gateway_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    merchant_id: Optional[str] = None,
    password: Optional[str] = None,
    mode: Optional[str] = None,
    sandbox_url: Optional[str] = None,
    production_url: Optional[str] = None,
    sandbox_webservice_url: Optional[str] = None,
    production_webservice_url: Optional[str] = None,
    billing_info_url: Optional[str] = None,
    digest_algorithm: Optional[str] = None,
    currency: Optional[str] = None,
    timeout_seconds: Optional[Union[int, float, str]] = None,
) -> GatewayConfig:
    """
    Convenience wrapper that mirrors :meth:`GatewayConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, explicit
    ``DRAGONPAY_*`` overrides or keyword arguments; keyword arguments win.
    """
    return GatewayConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        merchant_id=merchant_id,
        password=password,
        mode=mode,
        sandbox_url=sandbox_url,
        production_url=production_url,
        sandbox_webservice_url=sandbox_webservice_url,
        production_webservice_url=production_webservice_url,
        billing_info_url=billing_info_url,
        digest_algorithm=digest_algorithm,
        currency=currency,
        timeout_seconds=timeout_seconds,
    )
