"""
Session Management Module

Handles session creation, teardown and lifecycle notifications.
"""

from .manager import Session, SessionState, NOT_CREATED

__all__ = ['Session', 'SessionState', 'NOT_CREATED']
