import pytest

from dragonpay_payments.core.catalog import InvalidChannel
from dragonpay_payments.core.channels import ALL_CHANNELS, ChannelSelector, PaymentChannel


def test_flag_values():
    assert PaymentChannel.ONLINE_BANK == 1
    assert PaymentChannel.OTC_BANK == 2
    assert PaymentChannel.OTC_NON_BANK == 4
    assert PaymentChannel.PAYPAL == 32
    assert PaymentChannel.CREDIT_CARD == 64
    assert PaymentChannel.GCASH == 128
    assert PaymentChannel.INTL_OTC == 256
    assert ALL_CHANNELS == 487


def test_combined_channels_are_accepted():
    selector = ChannelSelector()
    assert selector.get_payment_channel() is None

    selector.filter_payment_channel(PaymentChannel.ONLINE_BANK | PaymentChannel.CREDIT_CARD)

    assert selector.get_payment_channel() == 65


def test_plain_integers_are_accepted():
    selector = ChannelSelector().filter_payment_channel(65)
    assert selector.get_payment_channel() == 65
    assert type(selector.get_payment_channel()) is int


def test_every_defined_bit_together_is_accepted():
    assert ChannelSelector().filter_payment_channel(ALL_CHANNELS).get_payment_channel() == 487


@pytest.mark.parametrize("channel", [8, 16, 512, 65 | 8, 0, -1, "64", None, True, 64.0])
def test_invalid_channels_are_rejected(channel):
    selector = ChannelSelector()
    with pytest.raises(InvalidChannel):
        selector.filter_payment_channel(channel)
    assert selector.get_payment_channel() is None
