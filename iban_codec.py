"""Decode IBANs into their national fields and encode account data into IBANs."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from iban_errors import (
    IbanError,
    IbanFormatError,
    InvalidCharacterError,
    InvalidLengthError,
    MissingFieldError,
    UnknownFieldError,
    UnsupportedCountryError,
    ValueTooLongError,
)
from iban_formats import country_name
from iban_template import (
    KEY_ACCOUNT_NUMBER,
    KEY_COUNTRY_CODE,
    KEY_IBAN_CHECK_DIGITS,
    KEY_NATIONAL_BANK_CODE,
    FieldCode,
    code_for_key,
    field_keys,
    field_runs,
    load_template,
)
from iban_utils import (
    ascii_upper,
    compute_check_digits,
    format_iban,
    iban_to_numeric,
    mask_iban,
    rearranged_raw,
)

logger = logging.getLogger(__name__)

CHECKSUM_MISMATCH = "The checksum does not match."

_MANDATORY_KEYS = (KEY_NATIONAL_BANK_CODE, KEY_ACCOUNT_NUMBER)


@dataclass(frozen=True)
class AccountRecord:
    """Account data an IBAN is generated from.

    ``fields`` holds every optional field (branch code, national check digits,
    ...) keyed by its field key. Which keys are allowed depends on the country
    format and is checked when the record is encoded.
    """

    country_code: str
    national_bank_code: str
    account_number: str
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        duplicated = [key for key in _MANDATORY_KEYS if key in self.fields]
        if duplicated:
            raise IbanError(f'The field "{duplicated[0]}" must not be passed as an optional field.')

        object.__setattr__(self, "country_code", ascii_upper(self.country_code))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_parsed(cls, parsed: ParsedIban) -> AccountRecord:
        if parsed.country_code is None or parsed.national_bank_code is None or parsed.account_number is None:
            raise IbanError(f'The IBAN "{parsed.iban}" could not be parsed into an account.')

        optional = {key: value for key, value in parsed.fields.items() if key not in _MANDATORY_KEYS}
        return cls(parsed.country_code, parsed.national_bank_code, parsed.account_number, optional)

    def values(self) -> dict[str, str]:
        return {
            KEY_NATIONAL_BANK_CODE: self.national_bank_code,
            KEY_ACCOUNT_NUMBER: self.account_number,
            **self.fields,
        }

    def get(self, key: str) -> str | None:
        return self.values().get(key)

    def with_fields(self, fields: Mapping[str, str]) -> AccountRecord:
        """Return a copy with ``fields`` merged into the optional fields."""
        return replace(self, fields={**self.fields, **fields})

    @property
    def country_name(self) -> str | None:
        return country_name(self.country_code)

    @property
    def check_digits(self) -> str:
        return check_digits_for(self)

    @property
    def iban(self) -> str:
        return encode(self)

    @property
    def iban_formatted(self) -> str:
        return format_iban(self.iban)


@dataclass(frozen=True)
class ParsedIban:
    """Result of decoding an IBAN.

    ``iban`` is always the input exactly as given. ``fields`` only contains the
    fields the country format uses. ``valid`` is true iff ``last_error`` is unset.
    """

    iban: str
    country_code: str | None = None
    check_digits: str | None = None
    template: str | None = None
    fields: Mapping[str, str] = field(default_factory=dict)
    last_error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def valid(self) -> bool:
        return self.last_error is None

    @property
    def formatted(self) -> str:
        return format_iban(self.iban)

    @property
    def national_bank_code(self) -> str | None:
        return self.fields.get(KEY_NATIONAL_BANK_CODE)

    @property
    def account_number(self) -> str | None:
        return self.fields.get(KEY_ACCOUNT_NUMBER)

    @property
    def country_name(self) -> str | None:
        return country_name(self.country_code) if self.country_code else None

    def get(self, key: str) -> str | None:
        return self.fields.get(key)

    @property
    def parts(self) -> dict[str, str]:
        """Every decoded segment in template order, country code and check digits included."""
        if self.country_code is None:
            return {}
        return {
            KEY_COUNTRY_CODE: self.country_code,
            KEY_IBAN_CHECK_DIGITS: self.check_digits or "",
            **self.fields,
        }

    @property
    def account(self) -> AccountRecord | None:
        if self.country_code is None or self.national_bank_code is None or self.account_number is None:
            return None
        return AccountRecord.from_parsed(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "iban": self.iban,
            "valid": self.valid,
            "last_error": self.last_error,
            "country_code": self.country_code,
            "check_digits": self.check_digits,
            "template": self.template,
            "fields": dict(self.fields),
        }


def decode(iban: str) -> ParsedIban:
    """Split ``iban`` into its national fields and verify its check digits.

    A wrong checksum does not raise: the result carries ``valid=False`` and
    ``last_error`` instead.

    Raises:
        UnsupportedCountryError: unknown country or unusable format.
        InvalidLengthError: the length does not match the country format.
        InvalidCharacterError: a field contains a character outside A-Z/0-9.
        IbanFormatError: the country format lacks a bank code or account number.
    """

    country = ascii_upper(iban[:2])
    template = load_template(country)

    if len(iban) != len(template):
        raise InvalidLengthError(iban, template)

    check_digits = None
    fields: dict[str, str] = {}
    for run in field_runs(template):
        if run.code is FieldCode.IBAN_CHECK_DIGITS:
            check_digits = iban[run.start:run.end]
        elif run.code.is_data:
            fields[run.code.key] = iban[run.start:run.end]

    for key in _MANDATORY_KEYS:
        if key not in fields:
            raise IbanFormatError(f'The IBAN format "{template}" does not define the field "{key}".')

    record = AccountRecord(
        country,
        fields[KEY_NATIONAL_BANK_CODE],
        fields[KEY_ACCOUNT_NUMBER],
        {key: value for key, value in fields.items() if key not in _MANDATORY_KEYS},
    )

    last_error = None
    if not verify(record, check_digits or ""):
        logger.debug("Checksum mismatch for %s", mask_iban(iban))
        last_error = CHECKSUM_MISMATCH

    return ParsedIban(
        iban=iban,
        country_code=country,
        check_digits=check_digits,
        template=template,
        fields=fields,
        last_error=last_error,
    )


def parse_iban(iban: str) -> ParsedIban:
    """Like :func:`decode`, but report input errors on the result instead of raising."""

    try:
        return decode(iban)
    except (UnsupportedCountryError, InvalidLengthError, InvalidCharacterError) as exc:
        logger.debug("IBAN %s rejected: %s", mask_iban(iban), exc)
        return ParsedIban(iban=iban, last_error=str(exc))


def encode(record: AccountRecord) -> str:
    """Build the IBAN of ``record``, check digits included.

    Raises:
        UnsupportedCountryError: unknown country or unusable format.
        MissingFieldError: a field the format requires is missing.
        UnknownFieldError: a field is given that the format does not use.
        ValueTooLongError: a value does not fit its field.
    """

    template = load_template(record.country_code)
    filled = _fill_template(record, template)
    return filled[:2] + _check_digits(filled) + filled[4:]


def check_digits_for(record: AccountRecord) -> str:
    """Compute the two IBAN check digits for ``record``."""

    template = load_template(record.country_code)
    return _check_digits(_fill_template(record, template))


def verify(record: AccountRecord, claimed: str) -> bool:
    """Compare the check digits of ``record`` with ``claimed`` as text."""
    return check_digits_for(record) == claimed


def _required_values(record: AccountRecord, template: str) -> dict[str, str]:
    required = field_keys(template)
    for key in _MANDATORY_KEYS:
        if key not in required:
            raise IbanFormatError(f'The IBAN format "{template}" does not define the field "{key}".')

    values = record.values()
    for key in required:
        if values.get(key) is None:
            raise MissingFieldError(key, record.country_code)

    for key in values:
        if key not in required:
            code_for_key(key)
            raise UnknownFieldError(key, record.country_code)

    return values


def _fill_template(record: AccountRecord, template: str) -> str:
    """Substitute the zero-padded record values into the data runs of ``template``."""

    values = _required_values(record, template)

    chars = list(template)
    for run in field_runs(template):
        if not run.code.is_data:
            continue

        value = values[run.code.key]
        if len(value) > run.length:
            raise ValueTooLongError(run.code.key, value, run.length)

        chars[run.start:run.end] = value.rjust(run.length, "0")
    return "".join(chars)


def _check_digits(filled: str) -> str:
    raw = rearranged_raw(filled[4:], filled[:2])
    try:
        numeric = iban_to_numeric(raw)
    except ValueError as exc:
        raise InvalidCharacterError(str(exc)) from exc
    return compute_check_digits(numeric)
