#!/usr/bin/env python3
"""
wdsession command line

Opens a session against a WebDriver endpoint, reports what the driver
negotiated, and closes the session again. Useful to check that a driver and
a capability configuration work together.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config.settings import DEFAULT_CONFIG_FILE, SessionSettings, load_settings
from .core.session import Session
from .transport.webdriver import HttpTransport
from .utils.console import describe_browser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wdsession-cli',
        description='Open and close a WebDriver session to verify a driver setup',
    )
    parser.add_argument('--config', default=DEFAULT_CONFIG_FILE,
                        help=f'YAML settings file (default: {DEFAULT_CONFIG_FILE})')
    parser.add_argument('--host', help='WebDriver host (overrides settings)')
    parser.add_argument('--port', type=int, help='WebDriver port (overrides settings)')
    parser.add_argument('--browser', help='browserName capability (overrides settings)')
    parser.add_argument('--headless', action='store_true', help='Launch the browser headless')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def apply_arguments(settings: SessionSettings, args: argparse.Namespace) -> SessionSettings:
    """Apply command line overrides on top of loaded settings."""
    if args.host:
        settings.webdriver.host = args.host
    if args.port:
        settings.webdriver.port = args.port
    if args.browser:
        settings.desired_capabilities['browserName'] = args.browser
    return settings


async def check_session(settings: SessionSettings, headless: bool = False) -> int:
    """Create a session, print what was negotiated and close it."""
    transport = HttpTransport(settings.webdriver)
    session = Session(settings, transport)

    try:
        data = await session.create({'headless': headless})
        print(f"Session id: {data['sessionId']}")
        print(f"Browser: {describe_browser(session.capabilities)}")
        await session.close('session check complete')
        return 0
    except Exception as e:
        logger.error(f"Session check failed: {e}")
        return 1
    finally:
        await transport.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    settings = apply_arguments(load_settings(args.config), args)

    if not settings.start_session:
        logger.warning("Session start is disabled in settings, nothing to do")
        return 0

    return asyncio.run(check_session(settings, headless=args.headless))


if __name__ == '__main__':
    sys.exit(main())
