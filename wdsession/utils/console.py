"""
Connection Console Output

Spinner and status lines shown while a session is being negotiated.
"""

import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.status import Status

logger = logging.getLogger(__name__)


class ConnectReporter:
    """
    Reports connection progress to the console.

    Does nothing unless ``enabled``; sessions enable it when both session
    start and output are turned on.
    """

    def __init__(self, host: str, port: Any, enabled: bool = True, console: Optional[Console] = None):
        self.host = host
        self.port = port
        self.enabled = enabled
        self.console = console or Console()
        self._status: Optional[Status] = None

    def start(self) -> None:
        if not self.enabled:
            return
        self._status = self.console.status(f"[cyan]Connecting to {self.host} on port {self.port}...")
        self._status.start()

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def connected(self, capabilities: Dict[str, Any], elapsed_ms: int) -> None:
        """Report a successful handshake and the browser the driver started."""
        if not self.enabled:
            return
        self._stop()
        self.console.print(
            f"[blue]ℹ[/blue] Connected to [bold]{self.host}[/bold] on port [bold]{self.port}[/bold] "
            f"[dim]({elapsed_ms}ms)[/dim]."
        )
        self.console.print(f"  Using: {describe_browser(capabilities)}\n", highlight=False)

    def failed(self) -> None:
        if not self.enabled:
            return
        self._stop()
        self.console.print(f"[yellow]⚠[/yellow] [red]Error connecting to {self.host} on port {self.port}.[/red]")


def describe_browser(capabilities: Dict[str, Any]) -> str:
    """Summarize negotiated capabilities, e.g. ``chrome (120.0) on linux platform.``"""
    capabilities = capabilities or {}
    browser_name = capabilities.get('browserName')
    version = capabilities.get('version') or capabilities.get('browserVersion')
    platform = capabilities.get('platform') or capabilities.get('platformName')
    platform_version = capabilities.get('platformVersion')

    if platform_version:
        platform = f"{platform} {platform_version}"

    return f"{browser_name} ({version}) on {platform} platform."
