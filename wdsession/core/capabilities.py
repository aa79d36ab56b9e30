"""
Capability Model

Default capabilities, the merge rules that produce the desired capability set
sent to the driver, and detection of the wire protocol dialect in effect.
"""

import copy
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class BrowserFamily(Enum):
    """Browser families that get family-specific capability handling."""
    CHROME = "chrome"
    FIREFOX = "firefox"
    OTHER = "other"

    @classmethod
    def from_name(cls, browser_name: Optional[str]) -> 'BrowserFamily':
        """Map a ``browserName`` capability value to its family."""
        for family in (cls.CHROME, cls.FIREFOX):
            if browser_name == family.value:
                return family
        return cls.OTHER


class ProtocolDialect(Enum):
    """Wire protocol variants a driver may speak."""
    LEGACY = "legacy"
    W3C = "w3c"


class ListMergeStrategy(Enum):
    """How ``deep_merge`` treats a list found in the source tree."""
    REPLACE = "replace"  # source list replaces the target list
    APPEND = "append"    # source items are appended to the target list


DEFAULT_CAPABILITIES: Mapping[str, Any] = MappingProxyType({
    'browserName': BrowserFamily.FIREFOX.value,
    'platform': 'ANY',
})


def compute_desired_capabilities(defaults: Optional[Mapping[str, Any]] = None,
                                 user_capabilities: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Build the desired capability set for a session attempt.

    Defaults are overlaid shallowly with the user capabilities: on a key
    collision the user value wins, and nested vendor blocks are taken
    wholesale rather than merged.

    Args:
        defaults: Base capabilities, ``DEFAULT_CAPABILITIES`` when omitted
        user_capabilities: Overrides from settings, may be empty or None

    Returns:
        A new dict owned by the caller
    """
    if defaults is None:
        defaults = DEFAULT_CAPABILITIES

    desired = copy.deepcopy(dict(defaults))
    desired.update(copy.deepcopy(dict(user_capabilities or {})))
    return desired


def deep_merge(target: Dict[str, Any], source: Mapping[str, Any],
               list_strategy: ListMergeStrategy = ListMergeStrategy.REPLACE) -> Dict[str, Any]:
    """
    Recursively merge ``source`` into ``target`` (last write wins per leaf).

    Mappings are merged key by key, so keys only present in ``target`` are
    kept. Any other value in ``source`` replaces the value in ``target``,
    except lists under ``ListMergeStrategy.APPEND`` which extend an existing
    target list. Values are deep-copied so ``target`` never aliases ``source``.

    Args:
        target: Mapping to update in place
        source: Mapping whose values take precedence
        list_strategy: Rule for list values

    Returns:
        ``target``
    """
    for key, value in source.items():
        current = target.get(key)

        if isinstance(value, Mapping):
            if not isinstance(current, dict):
                current = {}
                target[key] = current
            deep_merge(current, value, list_strategy)
        elif isinstance(value, list):
            if list_strategy is ListMergeStrategy.APPEND and isinstance(current, list):
                current.extend(copy.deepcopy(value))
            else:
                target[key] = copy.deepcopy(value)
        else:
            target[key] = value

    return target


def detect_dialect(desired_capabilities: Mapping[str, Any]) -> ProtocolDialect:
    """
    Decide which wire protocol dialect a capability set asks for.

    Only Chrome can opt into W3C here, through ``chromeOptions.w3c``; every
    other browser is treated as legacy.
    """
    family = BrowserFamily.from_name(desired_capabilities.get('browserName'))
    if family is not BrowserFamily.CHROME:
        return ProtocolDialect.LEGACY

    chrome_options = desired_capabilities.get('chromeOptions')
    if not isinstance(chrome_options, Mapping):
        return ProtocolDialect.LEGACY
    if chrome_options.get('w3c', False):
        return ProtocolDialect.W3C
    return ProtocolDialect.LEGACY
