"""
Payment channel flags used to filter which payment methods the PS offers.
"""

from __future__ import annotations

import functools
import operator
from enum import IntFlag
from typing import Optional

from .catalog import InvalidChannel

__all__ = ["ALL_CHANNELS", "ChannelSelector", "PaymentChannel"]


class PaymentChannel(IntFlag):
    ONLINE_BANK = 1
    OTC_BANK = 2
    OTC_NON_BANK = 4
    PAYPAL = 32
    CREDIT_CARD = 64
    GCASH = 128
    INTL_OTC = 256


ALL_CHANNELS = functools.reduce(operator.or_, (int(flag) for flag in PaymentChannel))


class ChannelSelector:
    def __init__(self) -> None:
        self._channel: Optional[int] = None

    @staticmethod
    def validate(channel: object) -> int:
        # bool is an int subclass; True would otherwise pass as ONLINE_BANK
        if isinstance(channel, bool) or not isinstance(channel, int):
            raise InvalidChannel(f"Payment channel must be an integer, got {channel!r}")
        value = int(channel)
        if value <= 0 or value & ~ALL_CHANNELS:
            raise InvalidChannel(
                f"Payment channel {value} is not a combination of "
                f"{', '.join(f'{flag.name}={int(flag)}' for flag in PaymentChannel)}"
            )
        return value

    def filter_payment_channel(self, channel: int) -> "ChannelSelector":
        self._channel = self.validate(channel)
        return self

    def get_payment_channel(self) -> Optional[int]:
        return self._channel
