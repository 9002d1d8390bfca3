"""
Request-scoped client context (IP address, user agent).

Populated by an HTTP middleware for every request and read by components that
record who did something (audit log, login lockout), without threading the
request object through every use case.
"""

from contextvars import ContextVar
from typing import Awaitable, Callable

import attrs
from fastapi import Request
from starlette.responses import Response


@attrs.define(frozen=True)
class RequestContext:
    ip_address: str | None = None
    user_agent: str | None = None


_request_context_var: ContextVar[RequestContext] = ContextVar(
    'request_context_var', default=RequestContext()
)


def get_request_context() -> RequestContext:
    return _request_context_var.get()


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get('x-forwarded-for')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.client.host if request.client else None


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    token = _request_context_var.set(
        RequestContext(
            ip_address=client_ip(request),
            user_agent=request.headers.get('user-agent'),
        )
    )
    try:
        return await call_next(request)
    finally:
        _request_context_var.reset(token)
