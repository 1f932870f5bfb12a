"""Template engine for the positional IBAN format language."""
from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Iterable, NamedTuple

from iban_errors import IbanFormatError, UnknownFieldError, UnsupportedCountryError
from iban_formats import lookup_format
from iban_utils import ascii_upper

KEY_COUNTRY_CODE = "country-code"

COUNTRY_PREFIX_LENGTH = 2
CHECK_DIGITS_PREFIX_LENGTH = 4


class FieldCode(Enum):
    """Single-character field tags used inside an IBAN format."""

    BALANCE_ACCOUNT_NUMBER = "a"
    NATIONAL_BANK_CODE = "b"
    ACCOUNT_NUMBER = "c"
    NATIONAL_IDENTIFICATION_NUMBER = "i"
    IBAN_CHECK_DIGITS = "k"
    CURRENCY_CODE = "m"
    OWNER_ACCOUNT_NUMBER = "n"
    ACCOUNT_NUMBER_PREFIX = "p"
    BIC_BANK_CODE = "q"
    BRANCH_CODE = "s"
    ACCOUNT_TYPE = "t"
    NATIONAL_CHECK_DIGITS = "x"
    ALWAYS_ZERO = "0"

    @property
    def key(self) -> str:
        return self.name.lower().replace("_", "-")

    @property
    def is_data(self) -> bool:
        """True for codes that carry account data (not check digits or filler)."""
        return self not in (FieldCode.IBAN_CHECK_DIGITS, FieldCode.ALWAYS_ZERO)


KEY_NATIONAL_BANK_CODE = FieldCode.NATIONAL_BANK_CODE.key
KEY_ACCOUNT_NUMBER = FieldCode.ACCOUNT_NUMBER.key
KEY_IBAN_CHECK_DIGITS = FieldCode.IBAN_CHECK_DIGITS.key

# Display order used by the front ends.
ALL_FIELD_KEYS: tuple[str, ...] = tuple(
    code.key
    for code in (
        FieldCode.NATIONAL_BANK_CODE,
        FieldCode.ACCOUNT_NUMBER,
        FieldCode.BALANCE_ACCOUNT_NUMBER,
        FieldCode.NATIONAL_IDENTIFICATION_NUMBER,
        FieldCode.CURRENCY_CODE,
        FieldCode.OWNER_ACCOUNT_NUMBER,
        FieldCode.ACCOUNT_NUMBER_PREFIX,
        FieldCode.BIC_BANK_CODE,
        FieldCode.BRANCH_CODE,
        FieldCode.ACCOUNT_TYPE,
        FieldCode.NATIONAL_CHECK_DIGITS,
    )
)

_CODES_BY_KEY = {code.key: code for code in FieldCode}
_KNOWN_CODES = frozenset(code.value for code in FieldCode)


class FieldRun(NamedTuple):
    """Maximal run of one field code inside a space-free template."""

    code: FieldCode
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


def normalize_template(raw: str) -> str:
    """Remove every whitespace character from a raw format."""
    return re.sub(r"\s+", "", raw)


def unsupported_characters(template: str) -> set[str]:
    """Return the characters of ``template`` that are not known field codes."""

    remainder = template[COUNTRY_PREFIX_LENGTH:]
    for code in _KNOWN_CODES:
        remainder = remainder.replace(code, "")
    return set(remainder)


@lru_cache(maxsize=None)
def load_template(country_code: str) -> str:
    """Look up, normalize and validate the format of ``country_code``.

    Raises:
        UnsupportedCountryError: the country is unknown or its format uses
            characters outside the known field codes.
    """

    country = ascii_upper(country_code[:2])
    template = normalize_template(lookup_format(country))

    unsupported = unsupported_characters(template)
    if unsupported:
        raise UnsupportedCountryError(
            f'The IBAN format of country "{country}" contains unsupported characters: '
            f'{", ".join(sorted(unsupported))}.',
            country,
        )

    check_digits = FieldCode.IBAN_CHECK_DIGITS.value * 2
    if template[COUNTRY_PREFIX_LENGTH:CHECK_DIGITS_PREFIX_LENGTH] != check_digits:
        raise IbanFormatError(f'The IBAN format "{template}" does not start with "{country}{check_digits}".')

    return template


def field_codes(
    template: str,
    *,
    with_zero: bool = False,
    without_check_digits: bool = False,
) -> list[FieldCode]:
    """Return the distinct field codes of ``template`` in first-seen order."""

    offset = CHECK_DIGITS_PREFIX_LENGTH if without_check_digits else COUNTRY_PREFIX_LENGTH

    codes: list[FieldCode] = []
    for char in template[offset:]:
        code = code_for_char(char)
        if code in codes:
            continue
        if code is FieldCode.ALWAYS_ZERO and not with_zero:
            continue
        codes.append(code)
    return codes


def field_runs(template: str) -> list[FieldRun]:
    """Split ``template`` (after the country prefix) into maximal field runs.

    Offsets are relative to the full template, so they apply unchanged to an
    IBAN of the same country.
    """

    runs: list[FieldRun] = []
    position = COUNTRY_PREFIX_LENGTH
    while position < len(template):
        char = template[position]
        end = position
        while end < len(template) and template[end] == char:
            end += 1

        code = code_for_char(char)
        if any(run.code is code for run in runs):
            raise IbanFormatError(
                f'The IBAN format "{template}" uses the field code "{char}" in more than one place.'
            )
        runs.append(FieldRun(code, position, end - position))
        position = end
    return runs


def field_run(template: str, code: FieldCode) -> FieldRun | None:
    for run in field_runs(template):
        if run.code is code:
            return run
    return None


def code_for_char(char: str) -> FieldCode:
    try:
        return FieldCode(char)
    except ValueError:
        raise IbanFormatError(f'The given IBAN format code "{char}" is not supported yet.') from None


def key_for_code(code: str | FieldCode) -> str:
    """Return the field key of a code, e.g. ``"b"`` -> ``"national-bank-code"``."""

    if isinstance(code, FieldCode):
        return code.key
    return code_for_char(code).key


def code_for_key(key: str) -> FieldCode:
    try:
        return _CODES_BY_KEY[key]
    except KeyError:
        raise UnknownFieldError(key) from None


def field_keys(template: str, exclude: Iterable[str] = ()) -> list[str]:
    """Return the keys of the data fields ``template`` uses, in template order."""

    excluded = set(exclude)
    return [
        code.key
        for code in field_codes(template, without_check_digits=True)
        if code.key not in excluded
    ]
