"""Utilities for composing the IBAN codec FastMCP server from services."""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from fastmcp import FastMCP
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from iban_utils import mask_iban

logger = logging.getLogger("uvicorn.error")

MASK_IBANS = os.getenv("IBAN_LOG_MASK", "1").strip().lower() not in {"0", "false", "no"}

# Compact or grouped ("DE02 1203 ..."), any case.
_IBAN_PATTERN = re.compile(
    r"\b[A-Z]{2}[0-9]{2}(?:(?: [A-Z0-9]{4})+(?: [A-Z0-9]{1,3})?|[A-Z0-9]{4,})\b",
    re.IGNORECASE,
)


@dataclass
class ServiceDefinition:
    """Describe a service that can register tools on a FastMCP instance."""

    name: str
    description: str
    register: Callable[[FastMCP], None]


def mask_payload(value: Any) -> Any:
    """Mask every IBAN-looking token inside strings, lists and dicts."""

    if isinstance(value, str):
        return _IBAN_PATTERN.sub(lambda m: mask_iban(m.group(0).replace(" ", "")), value)
    if isinstance(value, dict):
        return {key: mask_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [mask_payload(item) for item in value]
    return value


def log_interaction(action: str, input_data: Any, output_data: Any) -> None:
    """Emit a structured log entry via the standard uvicorn logger (JSON Lines)."""

    if MASK_IBANS:
        input_data = mask_payload(input_data)
        output_data = mask_payload(output_data)

    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "action": action,
        "input": input_data,
        "output": output_data,
    }

    try:
        serialized = json.dumps(entry, ensure_ascii=False)
    except TypeError:
        serialized = json.dumps(entry, ensure_ascii=False, default=str)

    logger.info(serialized)


def create_mcp_server(
    services: Iterable[ServiceDefinition],
    *,
    app_name: str = "iban-codec",
    json_response: bool = True,
):
    """Create an MCP server instance, register the services and build its HTTP app."""

    mcp = FastMCP(app_name)

    for service in services:
        service.register(mcp)

    app = mcp.http_app(json_response=json_response)
    return mcp, app


def attach_request_logger(app, *, action: str = "http_request") -> None:
    """Attach middleware that logs JSON-RPC calls reaching the HTTP app."""

    class RequestLoggerMiddleware(BaseHTTPMiddleware):
        async def dispatch(
            self, request: Request, call_next: RequestResponseEndpoint
        ) -> Response:
            request_body = await request.body()
            request_info: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            }

            if request_body:
                try:
                    payload = json.loads(request_body.decode("utf-8"))
                    if isinstance(payload, dict):
                        request_info["jsonrpc_method"] = payload.get("method")
                        params = payload.get("params")
                        if isinstance(params, dict):
                            request_info["tool"] = params.get("name")
                except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                    request_info["body_parse_error"] = str(exc)

            response: Response | None = None
            error_detail: dict[str, Any] | None = None

            try:
                response = await call_next(request)
                return response
            except Exception as exc:
                error_detail = {"error": str(exc), "type": exc.__class__.__name__}
                raise
            finally:
                output_data: dict[str, Any] = {
                    "status_code": response.status_code if response else None
                }
                if error_detail:
                    output_data.update(error_detail)
                log_interaction(action, request_info, output_data)

    app.add_middleware(RequestLoggerMiddleware)
