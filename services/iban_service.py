"""IBAN parse/generate service for MCP."""
from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel, Field

from iban_codec import AccountRecord, encode, parse_iban
from iban_formats import country_name, supported_countries
from iban_template import load_template
from iban_utils import format_iban, mask_value, normalize_iban
import mcp_framework


class IbanParseResult(BaseModel):
    valid: bool
    normalized_iban: str
    formatted_iban: str
    country: str | None = None
    country_name: str | None = None
    check_digits: str | None = None
    template: str | None = None
    fields: dict[str, str] = Field(default_factory=dict)
    reason: str | None = None


class IbanGenerateResult(BaseModel):
    iban: str
    formatted_iban: str
    country: str
    check_digits: str


class IbanCountry(BaseModel):
    country: str
    name: str | None = None
    template: str
    length: int


def parse(iban: str) -> IbanParseResult:
    """Normalize and decode ``iban``; input problems end up in ``reason``."""

    parsed = parse_iban(normalize_iban(iban))
    return IbanParseResult(
        valid=parsed.valid,
        normalized_iban=parsed.iban,
        formatted_iban=parsed.formatted,
        country=parsed.country_code,
        country_name=parsed.country_name,
        check_digits=parsed.check_digits,
        template=parsed.template,
        fields=dict(parsed.fields),
        reason=parsed.last_error,
    )


def generate(
    country_code: str,
    national_bank_code: str,
    account_number: str,
    fields: dict[str, str] | None = None,
) -> IbanGenerateResult:
    """Build an IBAN from account data; raises ``IbanError`` subclasses on bad input."""

    record = AccountRecord(country_code, national_bank_code, account_number, fields or {})
    iban = encode(record)
    return IbanGenerateResult(
        iban=iban,
        formatted_iban=format_iban(iban),
        country=record.country_code,
        check_digits=iban[2:4],
    )


def countries() -> list[IbanCountry]:
    result = []
    for code in supported_countries():
        template = load_template(code)
        result.append(
            IbanCountry(country=code, name=country_name(code), template=template, length=len(template))
        )
    return result


_ACCOUNT_DATA_KEYS = ("national_bank_code", "account_number")


def redact_account_data(payload: dict[str, Any]) -> dict[str, Any]:
    """Mask bank codes, account numbers and field values of a tool payload.

    IBAN-shaped strings are masked by ``log_interaction`` itself.
    """

    if not mcp_framework.MASK_IBANS:
        return payload

    redacted = dict(payload)
    for key in _ACCOUNT_DATA_KEYS:
        if isinstance(redacted.get(key), str):
            redacted[key] = mask_value(redacted[key])
    if redacted.get("fields"):
        redacted["fields"] = {key: mask_value(str(value)) for key, value in redacted["fields"].items()}
    return redacted


def log_tool_call(action: str, input_data: dict[str, Any], output_data: dict[str, Any]) -> None:
    mcp_framework.log_interaction(action, redact_account_data(input_data), redact_account_data(output_data))


def register_iban_service(mcp: FastMCP) -> None:
    """Register IBAN parse/generate tools on the provided MCP instance."""

    @mcp.tool()
    def iban_parse(iban: str) -> IbanParseResult:
        """
        Split an IBAN into its national fields and check its checksum.

        Args:
            iban: IBAN string (can contain spaces, lower/upper case)
        """

        try:
            result = parse(iban)
        except Exception as exc:
            log_tool_call(
                "iban_parse_error",
                {"iban": iban},
                {"error": str(exc), "type": exc.__class__.__name__},
            )
            raise

        log_tool_call("iban_parse", {"iban": iban}, result.model_dump())
        return result

    @mcp.tool()
    def iban_generate(
        country_code: str,
        national_bank_code: str,
        account_number: str,
        fields: dict[str, str] | None = None,
    ) -> IbanGenerateResult:
        """
        Generate an IBAN (check digits included) from account data.

        Args:
            country_code: two-letter country code, e.g. "DE"
            national_bank_code: national bank code (left-padded with zeros)
            account_number: account number (left-padded with zeros)
            fields: further fields the country uses, keyed like "branch-code"
                or "national-check-digits"
        """

        input_payload = {
            "country_code": country_code,
            "national_bank_code": national_bank_code,
            "account_number": account_number,
            "fields": fields or {},
        }

        try:
            result = generate(country_code, national_bank_code, account_number, fields)
        except Exception as exc:
            log_tool_call(
                "iban_generate_error",
                input_payload,
                {"error": str(exc), "type": exc.__class__.__name__},
            )
            raise

        log_tool_call("iban_generate", input_payload, result.model_dump())
        return result

    @mcp.tool()
    def iban_countries() -> list[IbanCountry]:
        """List every supported country with its IBAN format and length."""

        result = countries()
        log_tool_call("iban_countries", {}, {"count": len(result)})
        return result
