"""
Platform capability interface used by the delivery dispatcher.

The dispatcher never touches a UI runtime directly. It asks a Platform to
detect the device class, create and click a hidden link for the deep link,
subscribe to visibility/blur signals, report focus, and navigate to the
fallback URL. Tests drive the race with a fake platform; the console entry
point uses ``BrowserPlatform``, which hands URIs to the system browser.
"""

import asyncio
import logging
import re
import sys
import webbrowser
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

MOBILE_USER_AGENT_PATTERN = re.compile(
    r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini",
    re.IGNORECASE,
)

SignalCallback = Callable[[], None]
Unsubscribe = Callable[[], None]


class DeviceClass(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"


def detect_device_class(user_agent: Optional[str]) -> DeviceClass:
    """Heuristic device detection from a user-agent string."""
    if user_agent and MOBILE_USER_AGENT_PATTERN.search(user_agent):
        return DeviceClass.MOBILE
    return DeviceClass.DESKTOP


class HiddenLink(Protocol):
    """A temporary, invisible navigational element."""

    def click(self) -> None: ...

    def remove(self) -> None: ...


class Platform(ABC):
    """Capabilities the dispatcher needs from its runtime environment."""

    @abstractmethod
    def detect_device_class(self) -> DeviceClass: ...

    @abstractmethod
    def create_hidden_link(self, uri: str) -> HiddenLink: ...

    @abstractmethod
    def on_visibility_or_blur(self, callback: SignalCallback) -> Unsubscribe:
        """Call ``callback`` when the page is hidden or loses focus."""

    @abstractmethod
    def has_focus(self) -> bool: ...

    @abstractmethod
    def is_hidden(self) -> bool: ...

    @abstractmethod
    def navigate(self, url: str) -> None: ...


class _BrowserLink:
    def __init__(self, platform: "BrowserPlatform", uri: str) -> None:
        self._platform = platform
        self._uri = uri
        self._attached = True

    def click(self) -> None:
        if not self._attached:
            return
        opened = webbrowser.open(self._uri)
        logger.debug("Handed deep link to system handler (accepted=%s)", opened)
        if opened:
            # The system handler took the URI; report it like a page blur.
            self._platform.emit_signal()

    def remove(self) -> None:
        self._attached = False


class BrowserPlatform(Platform):
    """Platform backed by the standard ``webbrowser`` module."""

    def __init__(self, user_agent: Optional[str] = None) -> None:
        self.user_agent = user_agent or f"Python-webbrowser ({sys.platform})"
        self._listeners: list[SignalCallback] = []

    def detect_device_class(self) -> DeviceClass:
        return detect_device_class(self.user_agent)

    def create_hidden_link(self, uri: str) -> HiddenLink:
        return _BrowserLink(self, uri)

    def on_visibility_or_blur(self, callback: SignalCallback) -> Unsubscribe:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def emit_signal(self) -> None:
        """Deliver a blur signal to current listeners on the event loop."""
        loop = asyncio.get_running_loop()
        for callback in list(self._listeners):
            loop.call_soon(callback)

    def has_focus(self) -> bool:
        return True

    def is_hidden(self) -> bool:
        return False

    def navigate(self, url: str) -> None:
        webbrowser.open(url)
