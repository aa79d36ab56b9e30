"""
HTTP WebDriver Transport

Creates and deletes sessions on a WebDriver endpoint over HTTP, speaking
either the legacy JSON wire protocol or W3C WebDriver.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from ..config.settings import WebdriverSettings
from ..core.capabilities import ProtocolDialect
from ..core.events import EventEmitter
from ..utils.errors import CloseError, HandshakeError
from .base import SESSION_CREATE, SESSION_ERROR, SessionRequest

logger = logging.getLogger(__name__)


def build_session_payload(request: SessionRequest) -> Dict[str, Any]:
    """Frame the new-session request body for the request's dialect."""
    payload: Dict[str, Any] = {'desiredCapabilities': request.desired_capabilities}
    if request.dialect is ProtocolDialect.W3C:
        payload['capabilities'] = {
            'alwaysMatch': request.wire_capabilities,
            'firstMatch': [{}],
        }
    return payload


def parse_session_response(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a new-session response to ``{'sessionId', 'capabilities'}``.

    W3C drivers nest both fields under ``value``; legacy drivers put
    ``sessionId`` at the top level and the capabilities in ``value``.
    """
    value = body.get('value')
    if isinstance(value, dict) and 'sessionId' in value:
        return {
            'sessionId': value['sessionId'],
            'capabilities': value.get('capabilities') or {},
        }
    return {
        'sessionId': body.get('sessionId'),
        'capabilities': value if isinstance(value, dict) else {},
    }


def extract_error(body: Dict[str, Any]) -> Optional[str]:
    """Return the driver's error message, or None if the body is not an error."""
    value = body.get('value')
    if isinstance(value, dict) and value.get('error'):
        return value.get('message') or value['error']

    status = body.get('status')
    if isinstance(status, int) and status != 0:
        if isinstance(value, dict) and value.get('message'):
            return value['message']
        return f"status {status}"

    return None


class HttpTransport:
    """
    Session transport backed by an ``httpx.AsyncClient``.

    Outcomes of ``create_session`` are reported through ``session:create``
    and ``session:error`` events rather than return values.
    """

    def __init__(self, webdriver: WebdriverSettings, client: Optional[httpx.AsyncClient] = None):
        self.webdriver = webdriver
        self.events = EventEmitter()
        self.client = client or httpx.AsyncClient(base_url=webdriver.base_url, timeout=webdriver.timeout)
        self.session_id: Optional[Any] = None

    def on(self, event: str, listener: Callable) -> 'HttpTransport':
        self.events.on(event, listener)
        return self

    def once(self, event: str, listener: Callable) -> 'HttpTransport':
        self.events.once(event, listener)
        return self

    def off(self, event: str, listener: Callable) -> 'HttpTransport':
        self.events.off(event, listener)
        return self

    async def create_session(self, request: SessionRequest) -> None:
        """POST /session and emit the outcome."""
        payload = build_session_payload(request)
        logger.debug(f"POST /session ({request.dialect.value}): {payload}")

        try:
            response = await self.client.post('/session', json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Session request to {self.webdriver.base_url} failed: {e}")
            self.events.emit(SESSION_ERROR, HandshakeError(str(e) or type(e).__name__, error=e))
            return

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = extract_error(body)
        if response.is_error or message:
            message = message or f"HTTP {response.status_code}"
            logger.error(f"Driver refused to create a session: {message}")
            self.events.emit(SESSION_ERROR, HandshakeError(
                message, error=body, status_code=response.status_code))
            return

        data = parse_session_response(body)
        if not data['sessionId']:
            self.events.emit(SESSION_ERROR, HandshakeError(
                'Driver response did not contain a sessionId', error=body,
                status_code=response.status_code))
            return

        self.session_id = data['sessionId']
        self.events.emit(SESSION_CREATE, data, response.request, response)

    async def close_session(self, session_id: Optional[Any] = None) -> Any:
        """
        DELETE /session/{id}.

        Returns:
            The ``value`` of the driver's response

        Raises:
            CloseError: if the request fails or the driver reports an error
        """
        if session_id is None:
            session_id = self.session_id
        # 0 marks a session that was never created
        if session_id is None or session_id == 0:
            raise CloseError('No session to close', session_id=session_id)

        try:
            response = await self.client.delete(f'/session/{session_id}')
        except httpx.HTTPError as e:
            raise CloseError(f"Failed to close session {session_id}: {e}", session_id=session_id) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = extract_error(body)
        if response.is_error or message:
            raise CloseError(
                f"Failed to close session {session_id}: {message or f'HTTP {response.status_code}'}",
                session_id=session_id, status_code=response.status_code)

        if session_id == self.session_id:
            self.session_id = None
        return body.get('value')

    async def aclose(self) -> None:
        await self.client.aclose()
