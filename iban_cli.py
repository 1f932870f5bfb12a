"""Command line front end for the IBAN codec."""
from __future__ import annotations

import logging

import click

from iban_codec import AccountRecord, ParsedIban, encode, parse_iban
from iban_errors import IbanError
from iban_formats import IBAN_FORMATS, country_name, supported_countries
from iban_template import ALL_FIELD_KEYS
from iban_utils import normalize_iban

SUCCESS = 0
INVALID = 2

_LABEL_WIDTH = 33
_GIVEN_LABEL_WIDTH = 22


def _line(label: str, value: object, width: int = _LABEL_WIDTH) -> None:
    click.echo(f"{label + ':':<{width - 1}} {value}")


def _label(key: str) -> str:
    return key.replace("-", " ").capitalize()


def _print_error(message: str) -> None:
    click.secho(message, fg="red", err=True)


def print_iban(parsed: ParsedIban) -> None:
    account = parsed.account

    click.echo("")
    click.echo("Parsed IBAN")
    click.echo("-----------")
    _line("Valid", "YES" if parsed.valid else "NO")
    _line("Last error", parsed.last_error or "N/A")
    _line("IBAN", parsed.iban)
    _line("IBAN", parsed.formatted)
    _line("Checksum", parsed.check_digits or "N/A")
    _line("Format", parsed.template or "N/A")
    _line("Parts", ", ".join(f"{key}={value}" for key, value in parsed.parts.items()) or "N/A")

    click.echo("")
    click.echo("Account")
    click.echo("-------")
    _line("Country", f"{parsed.country_code or 'N/A'} ({parsed.country_name or 'N/A'})")
    _line("Checksum", account.check_digits if account else "N/A")
    for key in ALL_FIELD_KEYS:
        _line(_label(key), parsed.get(key) or "N/A")
    _line("IBAN (from account)", account.iban if account else "N/A")
    _line("IBAN (from account)", account.iban_formatted if account else "N/A")
    click.echo("")


def _parse_field_options(values: tuple[str, ...]) -> dict[str, str]:
    fields = {}
    for item in values:
        key, separator, value = item.partition("=")
        if not separator or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}.", param_hint="--field")
        fields[key.strip()] = value.strip()
    return fields


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log codec debug output to stderr.")
def cli(verbose: bool) -> None:
    """Parse, validate and generate IBANs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


@cli.command("validate")
@click.argument("iban")
def validate_command(iban: str) -> None:
    """Validate the given IBAN number."""

    click.echo("")
    _line("Given IBAN", iban, _GIVEN_LABEL_WIDTH)
    print_iban(parse_iban(normalize_iban(iban)))


@cli.command("generate")
@click.argument("account_number")
@click.argument("bank_code")
@click.argument("country_code", default="DE")
@click.option(
    "-f",
    "--field",
    "field_options",
    multiple=True,
    metavar="KEY=VALUE",
    help="Further field, e.g. branch-code=17533 (repeatable).",
)
@click.pass_context
def generate_command(
    ctx: click.Context,
    account_number: str,
    bank_code: str,
    country_code: str,
    field_options: tuple[str, ...],
) -> None:
    """Generate the IBAN of the given account number, bank and country code."""

    fields = _parse_field_options(field_options)

    click.echo("")
    _line("Given account number", account_number, _GIVEN_LABEL_WIDTH)
    _line("Given bank code", bank_code, _GIVEN_LABEL_WIDTH)
    _line("Given country code", country_code, _GIVEN_LABEL_WIDTH)
    for key, value in fields.items():
        _line(f"Given {_label(key).lower()}", value, _GIVEN_LABEL_WIDTH)

    try:
        iban = encode(AccountRecord(country_code, bank_code, account_number, fields))
    except IbanError as exc:
        _print_error(str(exc))
        ctx.exit(INVALID)

    print_iban(parse_iban(iban))


@cli.command("countries")
def countries_command() -> None:
    """List the supported countries and their IBAN formats."""

    for code in supported_countries():
        click.echo(f"{code}  {IBAN_FORMATS[code]:<40}  {country_name(code) or ''}")


def main() -> None:
    cli(prog_name="iban")


if __name__ == "__main__":
    main()
