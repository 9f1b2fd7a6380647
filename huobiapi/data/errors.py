"""Exceptions raised by the Huobi client."""

from __future__ import annotations

from typing import Any


class HuobiError(Exception):
    """Base class for all client errors."""


class HuobiTransportError(HuobiError):
    """Network, TLS or protocol failure while talking to the exchange."""

    def __init__(self, method: str, endpoint: str, reason: str):
        self.method = method
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"{method} {endpoint} failed: {reason}")


class HuobiDecodeError(HuobiError):
    """Response body is not a valid response envelope."""

    def __init__(self, body: str, reason: str):
        self.body = body
        self.reason = reason
        super().__init__(f"Cannot decode response envelope ({reason}): {body[:200]!r}")


class HuobiAPIError(HuobiError):
    """The exchange accepted the request but answered ``status: error``."""

    def __init__(self, code: Any, message: Any, envelope: dict[str, Any]):
        self.code = code
        self.message = message
        self.envelope = envelope
        super().__init__(f"Huobi API error [{code}]: {message}")
