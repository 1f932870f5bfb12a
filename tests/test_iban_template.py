from __future__ import annotations

import pytest

import iban_template
from iban_errors import IbanFormatError, UnknownFieldError, UnsupportedCountryError
from iban_template import (
    ALL_FIELD_KEYS,
    FieldCode,
    FieldRun,
    code_for_key,
    field_codes,
    field_keys,
    field_run,
    field_runs,
    key_for_code,
    load_template,
    normalize_template,
    unsupported_characters,
)


def test_normalize_template_strips_whitespace() -> None:
    assert normalize_template("FRkk bbbb bsss sscc cccc cccc cxx") == "FRkkbbbbbssssscccccccccccxx"
    assert normalize_template(" DEkk\tbbbb\nbbbb ") == "DEkkbbbbbbbb"


def test_unsupported_characters_reports_each_unknown_once() -> None:
    assert unsupported_characters("DEkkbbbbcccc") == set()
    assert unsupported_characters("DEkkbbzzcccyy") == {"z", "y"}


def test_country_letters_are_not_treated_as_field_codes() -> None:
    # the literal prefix is dropped before validation, uppercase letters elsewhere are not codes
    assert unsupported_characters("ABkkbbbbcccc") == set()
    assert unsupported_characters("ABkkbbbbccccB") == {"B"}


def test_load_template_rejects_unknown_characters(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(iban_template, "lookup_format", lambda country: "ZZkk bbbb cccc yyyy")
    load_template.cache_clear()
    try:
        with pytest.raises(UnsupportedCountryError, match="unsupported characters: y"):
            load_template("ZZ")
    finally:
        load_template.cache_clear()


def test_load_template_requires_check_digits_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(iban_template, "lookup_format", lambda country: "ZZbb kkcc cccc")
    load_template.cache_clear()
    try:
        with pytest.raises(IbanFormatError):
            load_template("ZZ")
    finally:
        load_template.cache_clear()


def test_field_codes_in_first_seen_order() -> None:
    template = load_template("TR")

    assert field_codes(template) == [
        FieldCode.IBAN_CHECK_DIGITS,
        FieldCode.NATIONAL_BANK_CODE,
        FieldCode.ACCOUNT_NUMBER,
    ]
    assert field_codes(template, with_zero=True, without_check_digits=True) == [
        FieldCode.NATIONAL_BANK_CODE,
        FieldCode.ALWAYS_ZERO,
        FieldCode.ACCOUNT_NUMBER,
    ]


def test_field_runs_use_offsets_of_the_full_template() -> None:
    assert field_runs(load_template("FR")) == [
        FieldRun(FieldCode.IBAN_CHECK_DIGITS, 2, 2),
        FieldRun(FieldCode.NATIONAL_BANK_CODE, 4, 5),
        FieldRun(FieldCode.BRANCH_CODE, 9, 5),
        FieldRun(FieldCode.ACCOUNT_NUMBER, 14, 11),
        FieldRun(FieldCode.NATIONAL_CHECK_DIGITS, 25, 2),
    ]


def test_field_runs_reject_split_codes() -> None:
    with pytest.raises(IbanFormatError, match='"x" in more than one place'):
        field_runs("HUkkbbbxccccx")


def test_field_run_lookup() -> None:
    template = load_template("DE")
    assert field_run(template, FieldCode.ACCOUNT_NUMBER) == FieldRun(FieldCode.ACCOUNT_NUMBER, 12, 10)
    assert field_run(template, FieldCode.BRANCH_CODE) is None


@pytest.mark.parametrize(
    "code,key",
    [
        ("a", "balance-account-number"),
        ("b", "national-bank-code"),
        ("c", "account-number"),
        ("i", "national-identification-number"),
        ("k", "iban-check-digits"),
        ("m", "currency-code"),
        ("n", "owner-account-number"),
        ("p", "account-number-prefix"),
        ("q", "bic-bank-code"),
        ("s", "branch-code"),
        ("t", "account-type"),
        ("x", "national-check-digits"),
    ],
)
def test_key_and_code_mapping(code: str, key: str) -> None:
    assert key_for_code(code) == key
    assert code_for_key(key).value == code


def test_unknown_code_and_key() -> None:
    with pytest.raises(IbanFormatError, match='The given IBAN format code "z" is not supported yet.'):
        key_for_code("z")
    with pytest.raises(UnknownFieldError):
        code_for_key("iban-colour")


def test_field_keys() -> None:
    template = load_template("FR")
    assert field_keys(template) == [
        "national-bank-code",
        "branch-code",
        "account-number",
        "national-check-digits",
    ]
    assert field_keys(template, exclude=["national-bank-code", "account-number"]) == [
        "branch-code",
        "national-check-digits",
    ]


def test_all_field_keys_cover_every_data_code() -> None:
    data_keys = {code.key for code in FieldCode if code.is_data}
    assert set(ALL_FIELD_KEYS) == data_keys
    assert ALL_FIELD_KEYS[:2] == ("national-bank-code", "account-number")
