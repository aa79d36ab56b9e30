"""
Transport Contract

What a session needs from the wire transport that talks to the driver.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol

from ..core.capabilities import ProtocolDialect

SESSION_CREATE = 'session:create'
SESSION_ERROR = 'session:error'
SESSION_FINISHED = 'session:finished'


@dataclass
class SessionRequest:
    """Capabilities handed to the transport for one session-creation request."""
    desired_capabilities: Dict[str, Any]
    wire_capabilities: Dict[str, Any] = field(default_factory=dict)
    dialect: ProtocolDialect = ProtocolDialect.LEGACY


class Transport(Protocol):
    """
    Wire transport shared by a session.

    ``create_session`` reports its outcome by emitting exactly one of
    ``session:create`` with ``(data, request, response)`` or ``session:error``
    with an error value. It may be a coroutine function.
    """

    def once(self, event: str, listener: Callable) -> Any:
        ...

    def off(self, event: str, listener: Callable) -> Any:
        ...

    def create_session(self, request: SessionRequest) -> Any:
        ...

    async def close_session(self, session_id: Optional[Any]) -> Any:
        ...
