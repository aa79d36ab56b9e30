"""
Configuration Management

Settings for the session lifecycle, loaded from YAML and the environment.
"""

from .settings import SessionSettings, WebdriverSettings, load_settings, DEFAULT_CONFIG_FILE

__all__ = ['SessionSettings', 'WebdriverSettings', 'load_settings', 'DEFAULT_CONFIG_FILE']
