"""
Command-line interface for exercising the Dragonpay client.
"""

from __future__ import annotations

import argparse
import logging
from typing import Iterable, Sequence, Tuple

from .api import ConfigError, DragonpayError, create_gateway_client, load_gateway_config
from .core.channels import PaymentChannel


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _channel(value: str) -> int:
    """Accept ``65`` or ``ONLINE_BANK|CREDIT_CARD``."""
    if value.strip().isdigit():
        return int(value)
    channel = 0
    for name in value.split("|"):
        try:
            channel |= PaymentChannel[name.strip().upper()]
        except KeyError as exc:
            raise argparse.ArgumentTypeError(f"Unknown payment channel '{name}'") from exc
    return int(channel)


def _collect(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dragonpay-payments",
        description="Start a Dragonpay transaction from the command line",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DRAGONPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("redirect", "Print the signed payment-page URL"),
        ("token", "Request a transaction token via the web service and print it"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--param",
            action="append",
            type=_key_value,
            metavar="KEY=VALUE",
            default=None,
            help="Transaction field, e.g. txnid=ORDER-1 (repeatable)",
        )
        if name == "redirect":
            sub.add_argument(
                "--channel",
                type=_channel,
                default=None,
                help="Payment channel filter, e.g. 64 or ONLINE_BANK|CREDIT_CARD",
            )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect(args.set or ())
    transaction = _collect(args.param or ())

    try:
        config = load_gateway_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)

    if args.command == "redirect":
        try:
            client.set_request_parameters(transaction)
            if args.channel is not None:
                client.filter_payment_channel(args.channel)
            print(client.away())
        except DragonpayError as exc:
            logging.error("Could not build redirect URL: %s", exc)
            return 1
        return 0

    try:
        token = client.get_token(transaction)
    except DragonpayError as exc:
        logging.error("Token request failed: %s", exc)
        return 1

    logging.info("Token issued in %s mode", client.get_payment_mode())
    print(token)
    return 0


def main() -> int:
    return run_cli()
