"""Request id bookkeeping shared by the middleware, log lines and error payloads."""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"

_current_request_id: ContextVar[str | None] = ContextVar(
    "fishlog_request_id", default=None
)


def bind_request_id(request_id: str | None = None) -> Token[str | None]:
    """Attach ``request_id`` (or a fresh uuid4) to the running context."""

    return _current_request_id.set(request_id or str(uuid.uuid4()))


def current_request_id() -> str | None:
    return _current_request_id.get()


def release_request_id(token: Token[str | None]) -> None:
    _current_request_id.reset(token)


__all__ = [
    "REQUEST_ID_HEADER",
    "bind_request_id",
    "current_request_id",
    "release_request_id",
]
