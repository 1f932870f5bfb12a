"""MCP server exposing the IBAN codec over streamable HTTP.

Configuration (environment):

* ``IBAN_MCP_APP_NAME`` (defaults to ``"iban-codec"``)
* ``IBAN_MCP_HOST`` (defaults to ``"127.0.0.1"``)
* ``IBAN_MCP_PORT`` (defaults to ``8000``)
* ``IBAN_MCP_LOG_LEVEL`` (defaults to ``"info"``)
* ``IBAN_LOG_MASK`` (defaults to ``1``; ``0`` logs IBANs unmasked)
"""
from __future__ import annotations

import os

import uvicorn

from mcp_framework import ServiceDefinition, attach_request_logger, create_mcp_server, log_interaction
from services import register_iban_service

APP_NAME = os.getenv("IBAN_MCP_APP_NAME", "iban-codec")
HOST = os.getenv("IBAN_MCP_HOST", "127.0.0.1")
PORT = int(os.getenv("IBAN_MCP_PORT", "8000"))
LOG_LEVEL = os.getenv("IBAN_MCP_LOG_LEVEL", "info").lower()

services = [
    ServiceDefinition(
        name="iban",
        description="Parse IBANs into national fields and generate IBANs from account data.",
        register=register_iban_service,
    ),
]

mcp, http_app = create_mcp_server(services, app_name=APP_NAME, json_response=True)
attach_request_logger(http_app)

log_interaction("startup", {"services": [service.name for service in services]}, {"app": APP_NAME})


def main() -> None:
    # Streamable HTTP transport, served on http://<host>:<port>/mcp
    uvicorn.run(http_app, host=HOST, port=PORT, log_level=LOG_LEVEL)


if __name__ == "__main__":
    main()
