import asyncio
from typing import Any, List, Optional, Tuple

import pytest

from wdsession.config.settings import SessionSettings
from wdsession.core.events import EventEmitter
from wdsession.transport.base import SESSION_CREATE, SESSION_ERROR


class FakeTransport:
    """In-memory transport that emits a scripted handshake outcome."""

    def __init__(self, outcome: Optional[Tuple[str, tuple]] = None, deferred: bool = False,
                 close_result: Any = None, close_error: Optional[BaseException] = None):
        self.events = EventEmitter()
        self.outcome = outcome
        self.deferred = deferred
        self.close_result = close_result
        self.close_error = close_error
        self.requests: List[Any] = []
        self.closed_ids: List[Any] = []

    def once(self, event, listener):
        self.events.once(event, listener)
        return self

    def off(self, event, listener):
        self.events.off(event, listener)
        return self

    def create_session(self, request):
        self.requests.append(request)
        if self.outcome is None:
            return
        event, args = self.outcome
        if self.deferred:
            asyncio.get_running_loop().call_soon(self.events.emit, event, *args)
        else:
            self.events.emit(event, *args)

    async def close_session(self, session_id):
        self.closed_ids.append(session_id)
        if self.close_error is not None:
            raise self.close_error
        return self.close_result


def created(session_id='abc123', capabilities=None):
    data = {
        'sessionId': session_id,
        'capabilities': capabilities if capabilities is not None else {
            'browserName': 'firefox', 'browserVersion': '121.0', 'platformName': 'linux',
        },
    }
    return SESSION_CREATE, (data, object(), object())


def failed(error):
    return SESSION_ERROR, (error,)


@pytest.fixture
def settings():
    return SessionSettings(output=False)


@pytest.fixture
def make_transport():
    return FakeTransport
