"""
Session Error Types

Errors raised while negotiating or tearing down a remote automation session.
The session itself never wraps an exception raised by the transport; these
types are what the bundled HTTP transport reports.
"""

from typing import Any, Optional


class SessionError(Exception):
    """Base class for all session lifecycle errors."""


class HandshakeError(SessionError):
    """
    Session creation was rejected or could not reach the driver.

    Attributes:
        error: The original error payload (exception, dict or message)
        status_code: HTTP status of the failed response, when there was one
    """

    def __init__(self, message: str, error: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_payload(cls, payload: Any) -> 'HandshakeError':
        """Build an error from a non-exception payload emitted by a transport."""
        if isinstance(payload, dict):
            message = payload.get('message') or payload.get('error') or str(payload)
        else:
            message = str(payload)
        return cls(message, error=payload)


class CloseError(SessionError):
    """The driver failed to end the session."""

    def __init__(self, message: str, session_id: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.session_id = session_id
        self.status_code = status_code
