"""
Minimal script that uses the public API to start a Dragonpay transaction.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from typing import Iterable, Tuple

from dragonpay_payments import (
    DragonpayError,
    PaymentChannel,
    create_gateway_client,
    load_gateway_config,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start a Dragonpay payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DRAGONPAY_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--amount", default="100.00", help="Amount to charge")
    parser.add_argument("--email", default="customer@example.com", help="Payer email")
    parser.add_argument(
        "--description",
        default="Example Dragonpay payment",
        help="Description shown on the payment page",
    )
    parser.add_argument(
        "--use-token",
        action="store_true",
        help="Request a token through the web service before redirecting",
    )
    parser.add_argument(
        "--online-bank-only",
        action="store_true",
        help="Only offer online banking channels",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_gateway_config(
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
        )
    except DragonpayError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)
    transaction = {
        "txnid": uuid.uuid4().hex[:12].upper(),
        "amount": args.amount,
        "description": args.description,
        "email": args.email,
    }
    if args.online_bank_only:
        client.filter_payment_channel(PaymentChannel.ONLINE_BANK)

    try:
        if args.use_token:
            token = client.get_token(transaction)
            logging.info("Obtained token %s", token)
        else:
            client.set_request_parameters(transaction)
        url = client.away()
    except DragonpayError as exc:
        logging.error("Could not start payment: %s (last PS error: %s)", exc, client.see_error())
        return 1

    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
