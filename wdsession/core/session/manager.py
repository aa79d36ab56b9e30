import asyncio
import copy
import inspect
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ...config.settings import SessionSettings
from ...transport.base import (
    SESSION_CREATE, SESSION_ERROR, SESSION_FINISHED, SessionRequest, Transport,
)
from ...utils.console import ConnectReporter
from ...utils.errors import HandshakeError
from ..capabilities import (
    DEFAULT_CAPABILITIES, BrowserFamily, ProtocolDialect,
    compute_desired_capabilities, deep_merge, detect_dialect,
)
from ..events import EventEmitter
from ..headless import apply_headless_mode
from ..queue import CommandQueue

logger = logging.getLogger(__name__)

# session_id before the first handshake; None means "cleared after finish"
NOT_CREATED = 0


class SessionState(Enum):
    """Lifecycle states of a session."""
    IDLE = "idle"
    CONNECTING = "connecting"
    ACTIVE = "active"
    CLOSING = "closing"
    FINISHED = "finished"


class Session:
    """
    Owns one remote automation session: its capabilities, its id and its
    command queue.

    The transport is shared and not owned. Only one ``create`` or ``close``
    may be in flight at a time; callers serialize them.
    """

    def __init__(self, settings: SessionSettings, transport: Transport,
                 reporter: Optional[ConnectReporter] = None):
        """
        Initialize the session and compute its first desired capabilities.

        Args:
            settings: Session settings
            transport: Wire transport shared with the rest of the client
            reporter: Console reporter, built from the settings when omitted
        """
        self.settings = settings
        self.session_id = NOT_CREATED
        self.capabilities: Dict[str, Any] = {}
        self.state = SessionState.IDLE
        self.events = EventEmitter()

        self._transport = transport
        self._reporter = reporter
        self._dialect = ProtocolDialect.LEGACY
        # set once a handshake has consumed the current desired capabilities
        self._capabilities_spent = False

        self.set_capabilities()
        self.create_command_queue()

    @property
    def command_queue(self) -> CommandQueue:
        return self._command_queue

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def start_session_enabled(self) -> bool:
        return self.settings.start_session

    @property
    def end_session_on_fail(self) -> bool:
        return self.settings.end_session_on_fail

    @property
    def output_enabled(self) -> bool:
        return self.settings.output

    @property
    def dialect(self) -> ProtocolDialect:
        return self._dialect

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def get_session_id(self) -> Optional[Any]:
        return self.session_id

    def on(self, event: str, listener: Callable) -> 'Session':
        """Subscribe to a lifecycle event such as ``session:finished``."""
        self.events.on(event, listener)
        return self

    def create_command_queue(self) -> None:
        self._command_queue = CommandQueue()

    def use_w3c_webdriver_protocol(self) -> bool:
        return detect_dialect(self.desired_capabilities) is ProtocolDialect.W3C

    def set_capabilities(self) -> None:
        """
        Compute the desired capabilities for a new session attempt.

        The wire capability block is reseeded from the settings and, when the
        W3C dialect is in effect, receives the full desired set.
        """
        self.desired_capabilities = compute_desired_capabilities(
            DEFAULT_CAPABILITIES, self.settings.desired_capabilities)
        self.wire_capabilities = copy.deepcopy(self.settings.capabilities or {})

        self._capabilities_spent = False
        self._dialect = detect_dialect(self.desired_capabilities)
        if self._dialect is ProtocolDialect.W3C:
            deep_merge(self.wire_capabilities, self.desired_capabilities)

        logger.debug(f"Desired capabilities ({self._dialect.value}): {self.desired_capabilities}")

    def set_headless_mode(self, launch_options: Optional[Dict[str, Any]] = None) -> bool:
        """
        Add the headless launch flag for the configured browser.

        Args:
            launch_options: Launch options, ``headless`` is the only key read

        Returns:
            True if the capabilities were changed
        """
        launch_options = launch_options or {}
        family = BrowserFamily.from_name(self.desired_capabilities.get('browserName'))
        return apply_headless_mode(
            self.desired_capabilities,
            family,
            bool(launch_options.get('headless')),
            self.wire_capabilities,
        )

    def _build_reporter(self) -> ConnectReporter:
        if self._reporter is not None:
            return self._reporter
        webdriver = self.settings.webdriver
        return ConnectReporter(
            webdriver.host, webdriver.port,
            enabled=self.start_session_enabled and self.output_enabled,
        )

    async def create(self, launch_options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Negotiate a new session with the driver.

        This does not consult ``start_session_enabled``; callers check it.

        Args:
            launch_options: Launch options such as ``{'headless': True}``

        Returns:
            The transport's session data, holding ``sessionId`` and ``capabilities``

        Raises:
            The error reported by the transport, unchanged. A non-exception
            error value is raised as ``HandshakeError`` with ``.error`` set to it.
        """
        start_time = time.monotonic()
        reporter = self._build_reporter()

        if self._capabilities_spent:
            self.set_capabilities()
        self.set_headless_mode(launch_options)
        self._capabilities_spent = True

        loop = asyncio.get_running_loop()
        pending = loop.create_future()

        def on_error(err):
            if pending.done():
                return
            self.transport.off(SESSION_CREATE, on_create)
            if not isinstance(err, BaseException):
                err = HandshakeError.from_payload(err)
            pending.set_exception(err)

        def on_create(data, request=None, response=None):
            if pending.done():
                return
            self.transport.off(SESSION_ERROR, on_error)
            pending.set_result(data)

        self.state = SessionState.CONNECTING
        reporter.start()
        webdriver = self.settings.webdriver
        logger.info(f"🔌 Connecting to {webdriver.host} on port {webdriver.port}...")

        request = SessionRequest(
            desired_capabilities=self.desired_capabilities,
            wire_capabilities=self.wire_capabilities,
            dialect=self._dialect,
        )

        try:
            # Listeners go in before the request is triggered
            self.transport.once(SESSION_ERROR, on_error)
            self.transport.once(SESSION_CREATE, on_create)

            triggered = self.transport.create_session(request)
            if inspect.isawaitable(triggered):
                await triggered

            data = await pending
        except BaseException:
            # a cancelled caller keeps its listeners so a late outcome is absorbed
            if not pending.cancelled():
                self.transport.off(SESSION_ERROR, on_error)
                self.transport.off(SESSION_CREATE, on_create)
                if pending.done():
                    pending.exception()
            self.state = SessionState.IDLE
            reporter.failed()
            logger.error(f"❌ Error connecting to {webdriver.host} on port {webdriver.port}")
            raise

        self.session_id = data['sessionId']
        self.capabilities = data['capabilities']
        self.state = SessionState.ACTIVE

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        reporter.connected(self.capabilities, elapsed_ms)
        logger.info(f"✅ Session {self.session_id} created ({elapsed_ms}ms)")

        return data

    async def close(self, reason: Any = None) -> Any:
        """
        End the session on the driver.

        Resolves immediately when session start is disabled. If the transport
        fails the error propagates and the session keeps its previous state.

        Args:
            reason: Passed on to ``session:finished`` listeners

        Returns:
            The transport's close response
        """
        if not self.start_session_enabled:
            return None

        previous_state = self.state
        self.state = SessionState.CLOSING

        try:
            data = await self.transport.close_session(self.session_id)
        except BaseException as e:
            self.state = previous_state
            logger.error(f"Failed to close session {self.session_id}: {e}")
            raise

        self.finished(reason)
        return data

    def finished(self, reason: Any = None) -> 'Session':
        """Clear the session and notify ``session:finished`` listeners."""
        session_id = self.session_id
        self.clear_session()
        self.state = SessionState.FINISHED

        logger.info(f"🏁 Session {session_id} finished" + (f": {reason}" if reason else ""))
        self.events.emit(SESSION_FINISHED, reason)

        return self

    def clear_session(self) -> None:
        self.session_id = None
        self.capabilities = {}
