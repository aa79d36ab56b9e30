"""
Transport Module

Wire transports that create and delete sessions on a driver.
"""

from .base import SESSION_CREATE, SESSION_ERROR, SESSION_FINISHED, SessionRequest, Transport
from .webdriver import HttpTransport

__all__ = [
    'SESSION_CREATE', 'SESSION_ERROR', 'SESSION_FINISHED',
    'SessionRequest', 'Transport', 'HttpTransport',
]
