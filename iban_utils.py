# iban_utils.py
import re
import string

EMPTY_CHECK_DIGITS = "00"
GROUP_SIZE = 4

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def ascii_upper(value: str) -> str:
    """Upper-case ASCII letters only; every other character is left as is."""
    return value.translate(_ASCII_UPPER)


def normalize_iban(iban: str) -> str:
    """Remove spaces and make upper-case."""
    return ascii_upper(re.sub(r"\s+", "", iban or ""))


def iban_to_numeric(value: str) -> str:
    """
    Convert letters to numbers (A=10 ... Z=35, case-insensitive) for the MOD97 check.
    Digits pass through unchanged. Only ASCII letters and digits are accepted.
    """
    result = []
    for ch in value:
        if ch in string.digits:
            result.append(ch)
        elif ch in string.ascii_letters:
            result.append(str(ord(ch.upper()) - 55))  # A -> 10, B -> 11, ...
        else:
            raise ValueError(f"Invalid character in IBAN: {ch!r}")
    return "".join(result)


def iban_mod97(numeric_iban: str) -> int:
    """
    Compute numeric_iban % 97 using the official IBAN iterative algorithm.
    numeric_iban must be a string of digits.
    """
    remainder = 0
    for ch in numeric_iban:
        remainder = (remainder * 10 + int(ch)) % 97
    return remainder


def compute_check_digits(numeric_raw: str) -> str:
    """
    ISO 7064 MOD 97-10 check digits for a rearranged numeric string that
    ends with the "00" placeholder.
    """
    return f"{98 - iban_mod97(numeric_raw):02d}"


def rearranged_raw(bban: str, country_code: str) -> str:
    """BBAN followed by the country code and the check digit placeholder."""
    return f"{bban}{ascii_upper(country_code)}{EMPTY_CHECK_DIGITS}"


def format_iban(iban: str) -> str:
    """Group an IBAN into blocks of four characters."""
    return " ".join(iban[i:i + GROUP_SIZE] for i in range(0, len(iban), GROUP_SIZE))


def mask_iban(iban: str) -> str:
    """Keep the first and last four characters, mask the rest."""
    if len(iban) < 8:
        return iban
    return iban[:4] + "*" * (len(iban) - 8) + iban[-4:]


def mask_value(value: str, keep: int = 2) -> str:
    """Mask all but the last ``keep`` characters; short values are masked entirely."""
    if len(value) <= keep:
        return "*" * len(value)
    return "*" * (len(value) - keep) + value[-keep:]
