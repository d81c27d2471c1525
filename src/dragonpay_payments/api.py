"""
Public, high-level helpers for starting Dragonpay transactions.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from .core.catalog import ConfigError, DragonpayError
from .core.client import GatewayClient, Token
from .core.config import GatewayConfig, GatewayParameters, load_gateway_config
from .core.transport import RequestsSoapTransport, Transport

__all__ = [
    "ConfigError",
    "DragonpayError",
    "GatewayClient",
    "GatewayConfig",
    "GatewayParameters",
    "Token",
    "build_redirect_url",
    "create_gateway_client",
    "load_gateway_config",
    "request_token",
]


def create_gateway_client(
    *,
    config: Optional[GatewayConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
) -> GatewayClient:
    """
    Construct a :class:`GatewayClient` for a single transaction.

    Callers can either supply a ready-made :class:`GatewayConfig` or let the
    helper assemble one from environment data. Without an explicit
    ``transport`` a :class:`RequestsSoapTransport` is built over ``session``.
    """
    if config is not None:
        if any(item for item in (overrides, base, parameters)):
            raise ValueError(
                "Provide either a pre-built GatewayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_gateway_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
        )
    if transport is None:
        transport = RequestsSoapTransport(session=session, timeout=cfg.timeout_seconds)
    return GatewayClient.from_config(cfg, transport=transport)


def build_redirect_url(
    transaction: Mapping[str, Any],
    *,
    config: Optional[GatewayConfig] = None,
    channel: Optional[int] = None,
    env_file: Optional[str] = ".env",
) -> str:
    """
    Return the signed payment-page URL for ``transaction``.
    """
    cfg = config if config is not None else load_gateway_config(env_file=env_file)
    client = GatewayClient.from_config(cfg)
    client.set_request_parameters(transaction)
    if channel is not None:
        client.filter_payment_channel(channel)
    return client.away()


def request_token(
    transaction: Mapping[str, Any],
    *,
    config: Optional[GatewayConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
) -> Token:
    """
    Obtain a transaction token through the XML web-service model.
    """
    client = create_gateway_client(
        config=config,
        transport=transport,
        session=session,
        env_file=env_file,
    )
    return client.get_token(transaction)
