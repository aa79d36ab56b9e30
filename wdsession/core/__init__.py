"""
Core Session Components

This package contains the building blocks of a remote session:
- Capability model and protocol dialect detection
- Headless launch arguments
- Session lifecycle and command queue
"""

from .capabilities import (
    BrowserFamily, ProtocolDialect, ListMergeStrategy, DEFAULT_CAPABILITIES,
    compute_desired_capabilities, deep_merge, detect_dialect,
)
from .events import EventEmitter
from .headless import HeadlessAdapter, apply_headless_mode, register_headless_adapter
from .queue import CommandQueue
from .session import Session, SessionState

__all__ = [
    'BrowserFamily', 'ProtocolDialect', 'ListMergeStrategy', 'DEFAULT_CAPABILITIES',
    'compute_desired_capabilities', 'deep_merge', 'detect_dialect',
    'EventEmitter',
    'HeadlessAdapter', 'apply_headless_mode', 'register_headless_adapter',
    'CommandQueue',
    'Session', 'SessionState',
]
