from decimal import Decimal

import pytest

from promptqr.promptpay import (
    can_generate_promptpay_qr,
    clean_promptpay_id,
    format_promptpay_id,
    is_valid_promptpay_id,
)
from promptqr.renderer import generate_promptpay_qr_url


def test_clean_strips_dashes_and_spaces() -> None:
    assert clean_promptpay_id("081-234 5678") == "0812345678"


def test_valid_ids() -> None:
    assert is_valid_promptpay_id("081-234-5678")
    assert is_valid_promptpay_id("1234567890123")
    assert is_valid_promptpay_id("123456789012345")
    assert not is_valid_promptpay_id("1812345678")
    assert not is_valid_promptpay_id("12345")


def test_ewallet_cannot_be_rendered() -> None:
    assert can_generate_promptpay_qr("0812345678")
    assert can_generate_promptpay_qr("1-2345-67890-12-3")
    assert not can_generate_promptpay_qr("123456789012345")


def test_format_for_display() -> None:
    assert format_promptpay_id("0812345678") == "081-234-5678"
    assert format_promptpay_id("1234567890123") == "1-2345-67890-12-3"
    assert format_promptpay_id("123456789012345") == "123456789012345"


def test_render_url_without_amount() -> None:
    assert generate_promptpay_qr_url("081-234-5678", base_url="https://promptpay.io") == "https://promptpay.io/0812345678.png"


def test_render_url_with_amount() -> None:
    base = "https://promptpay.io/"
    assert generate_promptpay_qr_url("0812345678", 10, base_url=base) == "https://promptpay.io/0812345678/10.png"
    assert generate_promptpay_qr_url("0812345678", Decimal("150.50"), base_url=base) == "https://promptpay.io/0812345678/150.5.png"
    assert generate_promptpay_qr_url("0812345678", 0, base_url=base) == "https://promptpay.io/0812345678.png"


def test_render_url_rejects_ewallet() -> None:
    with pytest.raises(ValueError):
        generate_promptpay_qr_url("123456789012345")
