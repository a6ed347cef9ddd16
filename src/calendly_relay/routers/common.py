"""
Shared steps of the forwarding routes: session check, body parsing and
relaying the remote answer.
"""

from typing import Any, Awaitable, Dict, Union

from fastapi import Request
from fastapi.responses import JSONResponse

from calendly_relay.forwarding import UpstreamResponse
from calendly_relay.log_utils import LogRecord, LogEvent, warning
from calendly_relay.models import NO_TOKEN_MESSAGE, UpstreamError, error_response


def missing_token_response(request: Request) -> JSONResponse:
    warning(LogRecord(
        event=LogEvent.SESSION_MISSING.value,
        message=f"{request.method} {request.url.path} called before login",
        data={"method": request.method, "path": request.url.path}
    ))
    return error_response(401, NO_TOKEN_MESSAGE)


def missing_parameter_response(name: str, message: str) -> JSONResponse:
    warning(LogRecord(
        event=LogEvent.PARAMETER_MISSING.value,
        message=message,
        data={"parameter": name}
    ))
    return error_response(400, message)


async def read_json_object(request: Request) -> Union[Dict[str, Any], JSONResponse]:
    """Parse the inbound body as a JSON object, or return a 400 response."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        warning(LogRecord(
            event=LogEvent.INVALID_REQUEST_BODY.value,
            message=f"{request.method} {request.url.path} body is not a JSON object",
            data={"method": request.method, "path": request.url.path}
        ))
        return error_response(400, "Invalid JSON body")
    return body


async def relay(
    call: Awaitable[UpstreamResponse],
    failure_message: str,
    relay_errors: bool = True,
) -> JSONResponse:
    """
    Await one upstream call and mirror it back to the caller.

    With ``relay_errors`` a non-2xx remote status is passed through unchanged;
    without it the remote body always goes back with 200. Transport and parse
    failures become a 500 carrying ``failure_message``.
    """
    try:
        upstream = await call
    except UpstreamError:
        return error_response(500, failure_message)

    if relay_errors and not upstream.is_success:
        return JSONResponse(status_code=upstream.status_code, content=upstream.body)
    return JSONResponse(content=upstream.body)
