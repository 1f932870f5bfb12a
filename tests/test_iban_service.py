from __future__ import annotations

import json
import logging

import pytest

import mcp_framework
from iban_errors import MissingFieldError
from services.iban_service import countries, generate, log_tool_call, parse, redact_account_data


def test_parse_normalizes_input() -> None:
    result = parse(" at02 6000 0000 0134 9870 ")

    assert result.valid is True
    assert result.reason is None
    assert result.normalized_iban == "AT026000000001349870"
    assert result.formatted_iban == "AT02 6000 0000 0134 9870"
    assert result.country == "AT"
    assert result.country_name == "Austria"
    assert result.check_digits == "02"
    assert result.fields == {"national-bank-code": "60000", "account-number": "00001349870"}


def test_parse_reports_errors_as_reason() -> None:
    result = parse("DE0312030000000020205")

    assert result.valid is False
    assert result.reason.startswith("Invalid length of IBAN given")
    assert result.country is None
    assert result.fields == {}


def test_generate() -> None:
    result = generate(
        "FR", "30027", "00020053701", {"branch-code": "17533", "national-check-digits": "59"}
    )

    assert result.iban == "FR7630027175330002005370159"
    assert result.formatted_iban == "FR76 3002 7175 3300 0200 5370 159"
    assert result.check_digits == "76"
    assert result.country == "FR"


def test_generate_raises_codec_errors() -> None:
    with pytest.raises(MissingFieldError):
        generate("FR", "30027", "00020053701")


def test_countries() -> None:
    result = {country.country: country for country in countries()}

    assert result["DE"].length == 22
    assert result["DE"].template == "DEkkbbbbbbbbcccccccccc"
    assert result["DE"].name == "Germany"


@pytest.fixture
def masked_logs(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    monkeypatch.setattr(mcp_framework, "MASK_IBANS", True)
    caplog.set_level(logging.INFO, logger="uvicorn.error")
    return caplog


def test_logged_parse_result_hides_account_data(masked_logs: pytest.LogCaptureFixture) -> None:
    raw = "de89 3704 0044 0532 0130 00"

    log_tool_call("iban_parse", {"iban": raw}, parse(raw).model_dump())

    entry = json.loads(masked_logs.records[-1].getMessage())
    logged = json.dumps({key: value for key, value in entry.items() if key != "timestamp"})
    for secret in ("37040044", "0532013000", "3704 0044", "0532 0130"):
        assert secret not in logged

    assert entry["input"] == {"iban": "de89**************3000"}
    assert entry["output"]["valid"] is True
    assert entry["output"]["normalized_iban"] == "DE89**************3000"
    assert entry["output"]["formatted_iban"] == "DE89**************3000"
    assert entry["output"]["fields"] == {
        "national-bank-code": "******44",
        "account-number": "********00",
    }


def test_logged_generate_call_hides_account_data(masked_logs: pytest.LogCaptureFixture) -> None:
    fields = {"branch-code": "17533", "national-check-digits": "59"}
    input_payload = {
        "country_code": "FR",
        "national_bank_code": "30027",
        "account_number": "00020053701",
        "fields": fields,
    }

    log_tool_call("iban_generate", input_payload, generate("FR", "30027", "00020053701", fields).model_dump())

    entry = json.loads(masked_logs.records[-1].getMessage())
    logged = json.dumps({key: value for key, value in entry.items() if key != "timestamp"})
    for secret in ("30027", "00020053701", "17533", "FR7630027175330002005370159", "FR76 3002"):
        assert secret not in logged

    assert entry["input"] == {
        "country_code": "FR",
        "national_bank_code": "***27",
        "account_number": "*********01",
        "fields": {"branch-code": "***33", "national-check-digits": "**"},
    }
    assert entry["output"]["iban"] == "FR76*******************0159"
    assert entry["output"]["formatted_iban"] == "FR76*******************0159"
    assert entry["output"]["check_digits"] == "76"


def test_redact_account_data_is_off_without_masking(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(mcp_framework, "MASK_IBANS", False)
    payload = {"account_number": "0532013000", "fields": {"account-number": "0532013000"}}

    assert redact_account_data(payload) == payload
