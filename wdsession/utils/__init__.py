"""
Utilities for console output and error types.
"""

from .console import ConnectReporter, describe_browser
from .errors import SessionError, HandshakeError, CloseError

__all__ = ['ConnectReporter', 'describe_browser', 'SessionError', 'HandshakeError', 'CloseError']
