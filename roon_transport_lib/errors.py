"""
roon_transport_lib/errors.py

Error types carried by Result.failure().

Commands never raise these across the client boundary; they are returned as
values. Result.unwrap() re-raises them for callers that prefer exceptions.
"""

from __future__ import annotations

from typing import Optional

from .const import REPLY_NETWORK_ERROR


class TransportClientError(Exception):
    """Base error for the transport client."""

    is_transient: bool = False

    def __init__(self, message: str = "", *, reply_name: Optional[str] = None) -> None:
        super().__init__(message or reply_name or type(self).__name__)
        self.reply_name = reply_name


class MissingTargetError(TransportClientError):
    """A required zone or output reference was missing. Nothing was sent."""

    def __init__(self, message: str = "A zone or output reference is required.") -> None:
        super().__init__(message)


class InvalidArgumentError(TransportClientError):
    """A request argument was rejected before sending. Nothing was sent."""


class RequestFailed(TransportClientError):
    """The service answered with a reply other than Success."""

    def __init__(self, reply_name: str, *, method: Optional[str] = None) -> None:
        super().__init__(reply_name, reply_name=reply_name)
        self.method = method


class NetworkError(TransportClientError):
    """The transport delivered no reply at all."""

    is_transient = True

    def __init__(self, message: str = "", *, method: Optional[str] = None) -> None:
        super().__init__(message or REPLY_NETWORK_ERROR, reply_name=REPLY_NETWORK_ERROR)
        self.method = method


__all__ = [
    "InvalidArgumentError",
    "MissingTargetError",
    "NetworkError",
    "RequestFailed",
    "TransportClientError",
]
