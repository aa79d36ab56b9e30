"""
wdsession: WebDriver Session Lifecycle

Capability negotiation and session lifecycle management for remote browser
automation against a WebDriver endpoint.

Key Components:
- Core: Capability model, headless launch arguments, session state machine
- Transport: HTTP WebDriver transport
- Config: Settings loading
"""

from .core import (
    Session, SessionState, CommandQueue, EventEmitter,
    BrowserFamily, ProtocolDialect, compute_desired_capabilities, deep_merge, detect_dialect,
    apply_headless_mode,
)
from .config import SessionSettings, WebdriverSettings, load_settings
from .transport import HttpTransport, SessionRequest
from .utils.errors import SessionError, HandshakeError, CloseError

__version__ = "1.0.0"

__all__ = [
    # Core
    'Session', 'SessionState', 'CommandQueue', 'EventEmitter',
    'BrowserFamily', 'ProtocolDialect', 'compute_desired_capabilities', 'deep_merge', 'detect_dialect',
    'apply_headless_mode',

    # Configuration
    'SessionSettings', 'WebdriverSettings', 'load_settings',

    # Transport
    'HttpTransport', 'SessionRequest',

    # Errors
    'SessionError', 'HandshakeError', 'CloseError',
]
