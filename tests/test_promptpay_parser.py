from conftest import make_payload, merchant_block, static_payload

from promptqr.promptpay_parser import (
    BILL_PAYMENT_AID,
    PromptPayId,
    PromptPayIdKind,
    extract_promptpay_id,
)


def test_international_phone_is_converted_to_local(phone_payload: str) -> None:
    assert extract_promptpay_id(phone_payload) == PromptPayId(
        id="0812345678", kind=PromptPayIdKind.PHONE, qr_compatible=True
    )


def test_local_phone_is_kept() -> None:
    result = extract_promptpay_id(static_payload(("01", "0812345678")))
    assert result == PromptPayId(id="0812345678", kind=PromptPayIdKind.PHONE, qr_compatible=True)


def test_national_id(national_id_payload: str) -> None:
    assert extract_promptpay_id(national_id_payload) == PromptPayId(
        id="1234567890123", kind=PromptPayIdKind.NATIONAL_ID, qr_compatible=True
    )


def test_ewallet_is_not_qr_compatible(ewallet_payload: str) -> None:
    assert extract_promptpay_id(ewallet_payload) == PromptPayId(
        id="123456789012345", kind=PromptPayIdKind.EWALLET, qr_compatible=False
    )


def test_kind_serializes_as_plain_string(ewallet_payload: str) -> None:
    assert extract_promptpay_id(ewallet_payload).kind == "ewallet"


def test_phone_wins_over_national_id_and_ewallet() -> None:
    payload = static_payload(
        ("03", "123456789012345"),
        ("02", "1234567890123"),
        ("01", "0066812345678"),
    )
    assert extract_promptpay_id(payload).kind is PromptPayIdKind.PHONE


def test_national_id_wins_over_ewallet() -> None:
    payload = static_payload(("03", "123456789012345"), ("02", "1234567890123"))
    assert extract_promptpay_id(payload).kind is PromptPayIdKind.NATIONAL_ID


def test_unusable_phone_falls_through_to_next_sub_tag() -> None:
    payload = static_payload(("01", "12345"), ("02", "1234567890123"))
    assert extract_promptpay_id(payload).id == "1234567890123"


def test_non_digit_values_are_not_classified() -> None:
    payload = static_payload(("01", "0066ABCDEFGHI"), ("02", "12345678901X3"), ("03", "12345678901234X"))
    assert extract_promptpay_id(payload) is None


def test_foreign_aid_returns_none() -> None:
    payload = make_payload(
        ("00", "01"),
        ("01", "11"),
        ("29", merchant_block(("01", "0066812345678"), aid="A000000727")),
        ("53", "764"),
        ("58", "TH"),
    )
    assert extract_promptpay_id(payload) is None


def test_bill_payment_block_is_skipped() -> None:
    payload = make_payload(
        ("00", "01"),
        ("01", "11"),
        ("30", merchant_block(("01", "0066812345678"), aid=BILL_PAYMENT_AID)),
        ("53", "764"),
        ("58", "TH"),
    )
    assert extract_promptpay_id(payload) is None


def test_promptpay_block_found_after_other_merchant_blocks() -> None:
    payload = make_payload(
        ("00", "01"),
        ("01", "11"),
        ("26", merchant_block(("01", "0066899999999"), aid="A000000727")),
        ("30", merchant_block(("01", "0066812345678"))),
        ("53", "764"),
        ("58", "TH"),
    )
    assert extract_promptpay_id(payload).id == "0812345678"


def test_tags_outside_merchant_range_are_ignored() -> None:
    for tag in ("25", "52", "62"):
        assert extract_promptpay_id(static_payload(("01", "0066812345678"), tag=tag)) is None
    for tag in ("26", "51"):
        assert extract_promptpay_id(static_payload(("01", "0066812345678"), tag=tag)) is not None


def test_short_or_missing_payload_returns_none() -> None:
    assert extract_promptpay_id(None) is None
    assert extract_promptpay_id("") is None
    assert extract_promptpay_id("000201010211") is None


def test_unrelated_text_returns_none() -> None:
    assert extract_promptpay_id("https://example.com/not-a-payment") is None


def test_truncated_payload_keeps_leading_block(phone_payload: str) -> None:
    truncated = phone_payload[:-10]
    assert extract_promptpay_id(truncated).id == "0812345678"
