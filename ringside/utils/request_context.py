"""Request-scoped correlation identifiers.

``ringside.main`` stamps each inbound request with an identifier that is echoed
back in the ``X-Request-ID`` header, embedded in structured error payloads and
included in transition log lines so a single booking change can be traced end
to end.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

__all__ = [
    "REQUEST_ID_CONTEXT",
    "clear_request_id",
    "get_request_id",
    "new_request_id",
    "set_request_id",
]

REQUEST_ID_CONTEXT: ContextVar[str] = ContextVar("ringside_request_id", default="")


def new_request_id() -> str:
    """Generate a fresh identifier for an inbound request."""

    return uuid.uuid4().hex


def set_request_id(request_id: str) -> Token[str]:
    """Bind ``request_id`` to the running task and return the reset token."""

    return REQUEST_ID_CONTEXT.set(request_id)


def get_request_id() -> str:
    return REQUEST_ID_CONTEXT.get()


def clear_request_id(token: Token[str] | None = None) -> None:
    """Restore the previous identifier, or blank it when no token is given."""

    if token is not None:
        REQUEST_ID_CONTEXT.reset(token)
    else:
        REQUEST_ID_CONTEXT.set("")
