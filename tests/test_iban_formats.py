from __future__ import annotations

import pytest

from iban_errors import UnsupportedCountryError
from iban_formats import COUNTRY_NAMES, IBAN_FORMATS, country_name, lookup_format, supported_countries
from iban_template import field_runs, load_template, unsupported_characters


@pytest.mark.parametrize("country", sorted(IBAN_FORMATS))
def test_every_registered_format_is_usable(country: str) -> None:
    template = load_template(country)

    assert template[:2] == country
    assert template[2:4] == "kk"
    assert unsupported_characters(template) == set()

    runs = field_runs(template)
    assert sum(run.length for run in runs) + 2 == len(template)
    codes = [run.code.value for run in runs]
    assert "b" in codes
    assert "c" in codes


@pytest.mark.parametrize("country", sorted(IBAN_FORMATS))
def test_formats_are_written_in_groups_of_four(country: str) -> None:
    groups = IBAN_FORMATS[country].split(" ")
    assert all(len(group) == 4 for group in groups[:-1])
    assert 1 <= len(groups[-1]) <= 4


def test_every_country_has_a_name() -> None:
    assert set(COUNTRY_NAMES) == set(IBAN_FORMATS)


def test_lookup_is_case_insensitive_on_the_prefix() -> None:
    assert lookup_format("de") == "DEkk bbbb bbbb cccc cccc cc"
    assert lookup_format("DE02120300000000202051") == lookup_format("DE")


def test_lookup_unknown_country() -> None:
    with pytest.raises(UnsupportedCountryError, match='The given country "XX" is not supported yet.') as info:
        lookup_format("xx")
    assert info.value.country_code == "XX"


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        IBAN_FORMATS["XX"] = "XXkk bbbb cccc"  # type: ignore[index]


def test_country_name_lookup() -> None:
    assert country_name("de") == "Germany"
    assert country_name("XX") is None
    assert supported_countries()[0] == "AD"
