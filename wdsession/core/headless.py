"""
Headless Launch Arguments

Adds the browser-specific headless flag to a desired capability set. Each
browser family registers an adapter that knows where its launch arguments
live, so supporting another browser means registering one more adapter.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .capabilities import BrowserFamily, deep_merge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeadlessAdapter:
    """Where a browser family keeps its launch arguments, and its headless flag."""
    options_path: Tuple[str, ...]
    flag: str

    def options_block(self, capabilities: Dict[str, Any]) -> Dict[str, Any]:
        """Return the options mapping at ``options_path``, creating it if absent."""
        block = capabilities
        for key in self.options_path:
            if not isinstance(block.get(key), dict):
                block[key] = {}
            block = block[key]
        return block

    def apply(self, capabilities: Dict[str, Any]) -> None:
        """Append the headless flag to the ``args`` list of the options block."""
        options = self.options_block(capabilities)
        if isinstance(options.get('args'), list):
            options['args'].append(self.flag)
        else:
            options['args'] = [self.flag]


HEADLESS_ADAPTERS: Dict[BrowserFamily, HeadlessAdapter] = {
    BrowserFamily.FIREFOX: HeadlessAdapter(('alwaysMatch', 'moz:firefoxOptions'), '-headless'),
    BrowserFamily.CHROME: HeadlessAdapter(('chromeOptions',), '--headless'),
}


def register_headless_adapter(family: BrowserFamily, adapter: HeadlessAdapter) -> None:
    """Register (or replace) the headless adapter for a browser family."""
    HEADLESS_ADAPTERS[family] = adapter


def apply_headless_mode(desired_capabilities: Dict[str, Any], family: BrowserFamily,
                        headless_requested: bool,
                        wire_capabilities: Optional[Dict[str, Any]] = None) -> bool:
    """
    Request a headless launch for ``family``.

    The flag is appended on every call; repeated calls leave repeated flags.
    Families without an adapter are left untouched.

    Args:
        desired_capabilities: Capability set to mutate
        family: Browser family the capabilities target
        headless_requested: Whether headless mode was asked for at all
        wire_capabilities: Capability block that receives the full desired
            set once the flag has been added

    Returns:
        True if the capability set was changed
    """
    if not headless_requested:
        return False

    adapter = HEADLESS_ADAPTERS.get(family)
    if adapter is None:
        logger.debug(f"Headless mode not supported for browser family '{family.value}', ignoring")
        return False

    adapter.apply(desired_capabilities)

    if wire_capabilities is not None:
        deep_merge(wire_capabilities, desired_capabilities)

    logger.info(f"🕶️ Headless mode enabled ({adapter.flag})")
    return True
