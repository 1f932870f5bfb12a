"""Exceptions raised by the IBAN codec."""
from __future__ import annotations


class IbanError(ValueError):
    """Base class for every IBAN decode/encode failure."""


class UnsupportedCountryError(IbanError):
    """Raised when a country is missing from the registry or its format is unusable."""

    def __init__(self, message: str, country_code: str | None = None) -> None:
        super().__init__(message)
        self.country_code = country_code


class InvalidLengthError(IbanError):
    """Raised when an IBAN does not have the length its country format requires."""

    def __init__(self, iban: str, template: str) -> None:
        super().__init__(f'Invalid length of IBAN given: "{iban}" (expected: "{template}").')
        self.iban = iban
        self.template = template
        self.given_length = len(iban)
        self.expected_length = len(template)


class InvalidCharacterError(IbanError):
    """Raised when an IBAN or field value contains a character outside A-Z and 0-9."""


class IbanFormatError(IbanError):
    """Raised when a country format itself is malformed."""


class MissingFieldError(IbanError):
    """Raised when an account record lacks a field its country format requires."""

    def __init__(self, key: str, country_code: str) -> None:
        super().__init__(f'Missing value for "{key}" (required by the {country_code} IBAN format).')
        self.key = key
        self.country_code = country_code


class UnknownFieldError(IbanError):
    """Raised when an account record carries a field its country format does not define."""

    def __init__(self, key: str, country_code: str | None = None) -> None:
        if country_code is None:
            message = f'Unknown IBAN field "{key}".'
        else:
            message = f'The field "{key}" is not used by the {country_code} IBAN format.'
        super().__init__(message)
        self.key = key
        self.country_code = country_code


class ValueTooLongError(IbanError):
    """Raised when a field value does not fit the width allotted by the format."""

    def __init__(self, key: str, value: str, width: int) -> None:
        super().__init__(f'The given value "{value}" is too long ({key}: {width} characters allowed).')
        self.key = key
        self.value = value
        self.width = width
