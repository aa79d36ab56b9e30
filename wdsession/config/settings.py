"""
Session Settings

Parses wdsession.yml configuration files and applies environment overrides
to produce the settings a session is created with.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from dataclasses_json import config, dataclass_json
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "wdsession.yml"

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


@dataclass_json
@dataclass
class WebdriverSettings:
    """Where the driver endpoint lives."""
    host: str = 'localhost'
    port: int = 4444
    default_path_prefix: str = ''
    timeout: float = 60.0  # seconds

    @property
    def base_url(self) -> str:
        prefix = self.default_path_prefix.rstrip('/')
        return f"http://{self.host}:{self.port}{prefix}"


@dataclass_json
@dataclass
class SessionSettings:
    """Settings consumed by the session lifecycle."""
    start_session: bool = True
    end_session_on_fail: bool = True
    output: bool = True
    webdriver: WebdriverSettings = field(default_factory=WebdriverSettings)
    desired_capabilities: Dict[str, Any] = field(
        default_factory=dict, metadata=config(field_name='desiredCapabilities'))
    capabilities: Dict[str, Any] = field(default_factory=dict)


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES


def apply_env_overrides(settings: SessionSettings) -> SessionSettings:
    """Override settings from WDSESSION_* environment variables (and .env)."""
    load_dotenv()

    host = os.getenv('WDSESSION_HOST')
    if host:
        settings.webdriver.host = host

    port = os.getenv('WDSESSION_PORT')
    if port:
        try:
            settings.webdriver.port = int(port)
        except ValueError:
            logger.warning(f"Ignoring invalid WDSESSION_PORT value: {port!r}")

    start_session = _env_flag('WDSESSION_START_SESSION')
    if start_session is not None:
        settings.start_session = start_session

    output = _env_flag('WDSESSION_OUTPUT')
    if output is not None:
        settings.output = output

    return settings


def load_settings(config_path: str = DEFAULT_CONFIG_FILE, use_env: bool = True) -> SessionSettings:
    """
    Load session settings from a YAML file.

    Args:
        config_path: Path to the YAML configuration file
        use_env: Whether to apply WDSESSION_* environment overrides

    Returns:
        Parsed settings; defaults when the file does not exist
    """
    try:
        with open(config_path, 'r') as file:
            raw = yaml.safe_load(file) or {}
        logger.info(f"Loaded configuration from {config_path}")
    except FileNotFoundError:
        logger.warning(f"No {config_path} found, using defaults")
        raw = {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing {config_path}: {e}")
        raise

    settings = SessionSettings.from_dict(raw, infer_missing=True)
    if settings.webdriver is None:
        settings.webdriver = WebdriverSettings()
    if settings.desired_capabilities is None:
        settings.desired_capabilities = {}
    if settings.capabilities is None:
        settings.capabilities = {}

    if use_env:
        apply_env_overrides(settings)

    return settings
