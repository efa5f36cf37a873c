"""
Request context management using contextvars.

Holds request-scoped data such as the correlation ID. The context is
automatically scoped to the current async task, so every request sees
its own value.

Usage:
    # In middleware:
    set_correlation_id("7f0c...")

    # Anywhere during the request:
    correlation_id = get_correlation_id()  # "" outside a request
"""

from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Set the correlation ID for this request."""
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the value that was current before set_correlation_id()."""
    _correlation_id.reset(token)


def get_correlation_id() -> str:
    """Get the correlation ID for the current request, or "" outside one."""
    return _correlation_id.get()
