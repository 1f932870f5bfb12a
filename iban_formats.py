"""Static IBAN format registry.

Each country maps to its IBAN layout written in 4-character groups. The first
two characters are the country code, ``kk`` marks the IBAN check digits and
every other character is a field code:

* ``a`` balance account number
* ``b`` national bank code
* ``c`` account number
* ``i`` national identification number
* ``m`` currency code
* ``n`` owner account number
* ``p`` account number prefix
* ``q`` BIC bank code
* ``s`` branch code
* ``t`` account type
* ``x`` national check digits
* ``0`` reserved, always zero

Adding a country is a data-only change.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from iban_errors import UnsupportedCountryError
from iban_utils import ascii_upper

IBAN_FORMATS: Mapping[str, str] = MappingProxyType({
    "AD": "ADkk bbbb ssss cccc cccc cccc",
    "AE": "AEkk bbbc cccc cccc cccc ccc",
    "AL": "ALkk bbbs sssx cccc cccc cccc cccc",
    "AT": "ATkk bbbb bccc cccc cccc",
    "AZ": "AZkk bbbb cccc cccc cccc cccc cccc",
    "BA": "BAkk bbbs sscc cccc ccxx",
    "BE": "BEkk bbbc cccc ccxx",
    "BG": "BGkk bbbb ssss ttcc cccc cc",
    "BH": "BHkk bbbb cccc cccc cccc cc",
    "BI": "BIkk bbbb bsss sscc cccc cccc cxx",
    "BR": "BRkk bbbb bbbb ssss sccc cccc ccct n",
    "BY": "BYkk bbbb aaaa cccc cccc cccc cccc",
    "CH": "CHkk bbbb bccc cccc cccc c",
    "CR": "CRkk 0bbb cccc cccc cccc cc",
    "CY": "CYkk bbbs ssss cccc cccc cccc cccc",
    "CZ": "CZkk bbbb pppp ppcc cccc cccc",
    "DE": "DEkk bbbb bbbb cccc cccc cc",
    "DK": "DKkk bbbb cccc cccc cc",
    "DO": "DOkk bbbb cccc cccc cccc cccc cccc",
    "EE": "EEkk bbss cccc cccc cccx",
    "EG": "EGkk bbbb ssss cccc cccc cccc cccc c",
    "ES": "ESkk bbbb ssss xxcc cccc cccc",
    "FI": "FIkk bbbb bbcc cccc cx",
    "FO": "FOkk bbbb cccc cccc cx",
    "FR": "FRkk bbbb bsss sscc cccc cccc cxx",
    "GB": "GBkk bbbb ssss sscc cccc cc",
    "GE": "GEkk bbcc cccc cccc cccc cc",
    "GI": "GIkk bbbb cccc cccc cccc ccc",
    "GL": "GLkk bbbb cccc cccc cc",
    "GR": "GRkk bbbs sssc cccc cccc cccc ccc",
    "GT": "GTkk bbbb mmtt cccc cccc cccc cccc",
    "HR": "HRkk bbbb bbbc cccc cccc c",
    "HU": "HUkk bbbs sssc cccc cccc cccc cccx",  # first national check digit folded into the account number
    "IE": "IEkk bbbb ssss sscc cccc cc",
    "IL": "ILkk bbbs sscc cccc cccc ccc",
    "IQ": "IQkk bbbb sssc cccc cccc ccc",
    "IS": "ISkk bbbb sscc cccc iiii iiii ii",
    "IT": "ITkk xbbb bbss sssc cccc cccc ccc",
    "JO": "JOkk bbbb ssss cccc cccc cccc cccc cc",
    "KW": "KWkk bbbb cccc cccc cccc cccc cccc cc",
    "KZ": "KZkk bbbc cccc cccc cccc",
    "LB": "LBkk bbbb cccc cccc cccc cccc cccc",
    "LC": "LCkk bbbb cccc cccc cccc cccc cccc cccc",
    "LI": "LIkk bbbb bccc cccc cccc c",
    "LT": "LTkk bbbb bccc cccc cccc",
    "LU": "LUkk bbbc cccc cccc cccc",
    "LV": "LVkk bbbb cccc cccc cccc c",
    "LY": "LYkk bbbs sscc cccc cccc cccc c",
    "MC": "MCkk bbbb bsss sscc cccc cccc cxx",
    "MD": "MDkk bbcc cccc cccc cccc cccc",
    "ME": "MEkk bbbc cccc cccc cccc xx",
    "MK": "MKkk bbbc cccc cccc cxx",
    "MR": "MRkk bbbb bsss sscc cccc cccc cxx",
    "MT": "MTkk bbbb ssss sccc cccc cccc cccc ccc",
    "MU": "MUkk bbbb bbss cccc cccc cccc 000m mm",
    "NL": "NLkk bbbb cccc cccc cc",
    "NO": "NOkk bbbb cccc ccx",
    "PK": "PKkk bbbb cccc cccc cccc cccc",
    "PL": "PLkk bbbs sssx cccc cccc cccc cccc",
    "PS": "PSkk bbbb cccc cccc cccc cccc cccc c",
    "PT": "PTkk bbbb ssss cccc cccc cccx x",
    "QA": "QAkk bbbb cccc cccc cccc cccc cccc c",
    "RO": "ROkk bbbb cccc cccc cccc cccc",
    "RS": "RSkk bbbc cccc cccc cccc xx",
    "SA": "SAkk bbcc cccc cccc cccc cccc",
    "SC": "SCkk bbbb bbss cccc cccc cccc cccc mmm",
    "SD": "SDkk bbcc cccc cccc cc",
    "SE": "SEkk bbbc cccc cccc cccc cccc",
    "SI": "SIkk bbss sccc cccc cxx",
    "SK": "SKkk bbbb pppp ppcc cccc cccc",
    "SM": "SMkk xbbb bbss sssc cccc cccc ccc",
    "ST": "STkk bbbb ssss cccc cccc cccc c",
    "SV": "SVkk bbbb cccc cccc cccc cccc cccc",
    "TL": "TLkk bbbc cccc cccc cccc cxx",
    "TN": "TNkk bbss sccc cccc cccc cccc",
    "TR": "TRkk bbbb b0cc cccc cccc cccc cc",
    "UA": "UAkk bbbb bbcc cccc cccc cccc cccc c",
    "VA": "VAkk bbbc cccc cccc cccc cc",
    "VG": "VGkk bbbb cccc cccc cccc cccc",
    "XK": "XKkk bbbb cccc cccc cccc",
})

COUNTRY_NAMES: Mapping[str, str] = MappingProxyType({
    "AD": "Andorra",
    "AE": "United Arab Emirates",
    "AL": "Albania",
    "AT": "Austria",
    "AZ": "Azerbaijan",
    "BA": "Bosnia and Herzegovina",
    "BE": "Belgium",
    "BG": "Bulgaria",
    "BH": "Bahrain",
    "BI": "Burundi",
    "BR": "Brazil",
    "BY": "Belarus",
    "CH": "Switzerland",
    "CR": "Costa Rica",
    "CY": "Cyprus",
    "CZ": "Czech Republic",
    "DE": "Germany",
    "DK": "Denmark",
    "DO": "Dominican Republic",
    "EE": "Estonia",
    "EG": "Egypt",
    "ES": "Spain",
    "FI": "Finland",
    "FO": "Faroe Islands",
    "FR": "France",
    "GB": "United Kingdom",
    "GE": "Georgia",
    "GI": "Gibraltar",
    "GL": "Greenland",
    "GR": "Greece",
    "GT": "Guatemala",
    "HR": "Croatia",
    "HU": "Hungary",
    "IE": "Ireland",
    "IL": "Israel",
    "IQ": "Iraq",
    "IS": "Iceland",
    "IT": "Italy",
    "JO": "Jordan",
    "KW": "Kuwait",
    "KZ": "Kazakhstan",
    "LB": "Lebanon",
    "LC": "Saint Lucia",
    "LI": "Liechtenstein",
    "LT": "Lithuania",
    "LU": "Luxembourg",
    "LV": "Latvia",
    "LY": "Libya",
    "MC": "Monaco",
    "MD": "Moldova",
    "ME": "Montenegro",
    "MK": "North Macedonia",
    "MR": "Mauritania",
    "MT": "Malta",
    "MU": "Mauritius",
    "NL": "Netherlands",
    "NO": "Norway",
    "PK": "Pakistan",
    "PL": "Poland",
    "PS": "Palestine",
    "PT": "Portugal",
    "QA": "Qatar",
    "RO": "Romania",
    "RS": "Serbia",
    "SA": "Saudi Arabia",
    "SC": "Seychelles",
    "SD": "Sudan",
    "SE": "Sweden",
    "SI": "Slovenia",
    "SK": "Slovakia",
    "SM": "San Marino",
    "ST": "Sao Tome and Principe",
    "SV": "El Salvador",
    "TL": "Timor-Leste",
    "TN": "Tunisia",
    "TR": "Turkey",
    "UA": "Ukraine",
    "VA": "Vatican City",
    "VG": "British Virgin Islands",
    "XK": "Kosovo",
})


def lookup_format(country_code: str) -> str:
    """Return the raw (grouped) format for ``country_code``."""

    country = ascii_upper((country_code or "")[:2])
    try:
        return IBAN_FORMATS[country]
    except KeyError:
        raise UnsupportedCountryError(
            f'The given country "{country}" is not supported yet.', country
        ) from None


def country_name(country_code: str) -> str | None:
    return COUNTRY_NAMES.get(ascii_upper(country_code or ""))


def supported_countries() -> list[str]:
    return sorted(IBAN_FORMATS)
