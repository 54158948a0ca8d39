"""Debug logging infrastructure for message and stream diagnostics.

Provides logger instances under the ``http_message.*`` hierarchy and
formatting helpers for headers and buffers.  Enabling
``logging.getLogger("http_message").setLevel(logging.DEBUG)`` shows every
header update, Host synchronisation and httpx conversion.

All formatting helpers return ``str`` and never log directly.
They are designed to be called inside ``isEnabledFor`` guards so
there is zero overhead when debug logging is disabled.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

# ---------------------------------------------------------------------------
# Logger hierarchy: http_message.*
# ---------------------------------------------------------------------------

message_logger = logging.getLogger("http_message.message")
"""Header updates and Host synchronisation."""

stream_logger = logging.getLogger("http_message.stream")
"""Stream lifecycle (close / detach)."""

httpx_logger = logging.getLogger("http_message.httpx")
"""Conversions to and from httpx objects."""

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

_MAX_VALUE_LEN = 80
"""Maximum length for individual values in fmt_headers / fmt_buffer."""


def _truncate(value: str) -> str:
    if len(value) > _MAX_VALUE_LEN:
        return value[:_MAX_VALUE_LEN] + "..."
    return value


def fmt_headers(headers: Mapping[str, Sequence[str]]) -> str:
    """Format a header mapping compactly, preserving order.

    Returns:
        ``"{Host=['example.com'], Accept=['a', 'b']}"`` or ``"{}"``.

    """
    parts = [f"{name}={[_truncate(v) for v in values]!r}" for name, values in headers.items()]
    return "{" + ", ".join(parts) + "}"


def fmt_buffer(buffer: str) -> str:
    """Format a stream buffer summary.

    Returns:
        ``"len=5, head='hello'"`` with long contents truncated.

    """
    return f"len={len(buffer)}, head={_truncate(buffer)!r}"
