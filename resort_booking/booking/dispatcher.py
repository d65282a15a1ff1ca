"""
Delivery dispatcher: native deep link first, web fallback on timeout.

A dispatch attempt clicks a hidden link carrying the ``whatsapp://`` URI,
then races a fixed wait against a visibility/blur signal from the platform.
Both callbacks run on the same event loop; whichever runs first flips the
attempt's ``_should_fallback`` flag and resolves the outcome, and the other
becomes a no-op. Cleanup (timer, listeners, hidden link) runs on every
branch, including errors.

Usage:
    dispatcher = DeliveryDispatcher(BrowserPlatform())
    result = await dispatcher.dispatch("+94 77 503 0038", message)
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from resort_booking.booking.platform import DeviceClass, HiddenLink, Platform
from resort_booking.booking.state_machine import (
    DispatchStateMachine,
    DispatchTrigger,
)
from resort_booking.config import settings
from resort_booking.logging_context import get_booking_logger
from resort_booking.tools.whatsapp import (
    DeliveryConstructionError,
    WhatsAppLinkPair,
    build_links,
)

logger = get_booking_logger(__name__)


class DispatchOutcome(str, Enum):
    NATIVE = "native"
    FALLBACK = "fallback"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class DispatchResult:
    """Outcome of one dispatch attempt."""
    outcome: DispatchOutcome
    device_class: Optional[DeviceClass] = None
    app_uri: str = ""
    web_url: str = ""
    state_trace: list[str] = field(default_factory=list)


class DispatchAttempt:
    """A single native-handoff attempt with its timer/signal race."""

    def __init__(
        self,
        platform: Platform,
        links: WhatsAppLinkPair,
        device_class: DeviceClass,
        wait_seconds: float,
    ) -> None:
        self._platform = platform
        self._links = links
        self._device_class = device_class
        self._wait_seconds = wait_seconds
        self._sm = DispatchStateMachine()
        self._should_fallback = True
        self._done: Optional[asyncio.Future] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._unsubscribe = None
        self._link: Optional[HiddenLink] = None

    @property
    def state_machine(self) -> DispatchStateMachine:
        return self._sm

    async def run(self) -> DispatchOutcome:
        loop = asyncio.get_running_loop()
        self._done = loop.create_future()
        self._sm.transition(DispatchTrigger.SUBMIT)
        try:
            self._unsubscribe = self._platform.on_visibility_or_blur(self._on_signal)
            self._link = self._platform.create_hidden_link(self._links.app_uri)
            self._link.click()
            if not self._done.done():
                self._timer = loop.call_later(self._wait_seconds, self._on_timer)
            return await self._done
        except Exception:
            self._should_fallback = False
            if not self._sm.is_terminal():
                self._sm.transition(DispatchTrigger.PLATFORM_ERROR)
            raise
        finally:
            self._cleanup()

    def _on_signal(self) -> None:
        if not self._should_fallback:
            return
        self._should_fallback = False
        self._cleanup()
        self._sm.transition(DispatchTrigger.SIGNAL_OBSERVED)
        self._resolve(DispatchOutcome.NATIVE)

    def _on_timer(self) -> None:
        if not self._should_fallback:
            return
        self._should_fallback = False
        self._cleanup()

        if self._device_class == DeviceClass.DESKTOP and (
            not self._platform.has_focus() or self._platform.is_hidden()
        ):
            self._sm.transition(DispatchTrigger.FOCUS_LOST)
            self._resolve(DispatchOutcome.NATIVE)
            return

        self._sm.transition(DispatchTrigger.TIMER_ELAPSED)
        try:
            self._platform.navigate(self._links.web_url)
        except Exception as e:
            self._sm.transition(DispatchTrigger.PLATFORM_ERROR)
            if not self._done.done():
                self._done.set_exception(e)
            return
        self._sm.transition(DispatchTrigger.FALLBACK_NAVIGATED)
        self._resolve(DispatchOutcome.FALLBACK)

    def _resolve(self, outcome: DispatchOutcome) -> None:
        if self._done is not None and not self._done.done():
            self._done.set_result(outcome)

    def _cleanup(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._link is not None:
            self._link.remove()
            self._link = None


class DeliveryDispatcher:
    """
    Hands composed messages to the messaging app, with a web fallback.

    Wait windows default to the configured desktop/mobile values and can be
    injected (in seconds) to keep tests fast.
    """

    def __init__(
        self,
        platform: Platform,
        desktop_wait: Optional[float] = None,
        mobile_wait: Optional[float] = None,
    ) -> None:
        self._platform = platform
        self._desktop_wait = (
            desktop_wait if desktop_wait is not None
            else settings.dispatch.desktop_wait_ms / 1000
        )
        self._mobile_wait = (
            mobile_wait if mobile_wait is not None
            else settings.dispatch.mobile_wait_ms / 1000
        )

    def wait_for(self, device_class: DeviceClass) -> float:
        if device_class == DeviceClass.MOBILE:
            return self._mobile_wait
        return self._desktop_wait

    async def dispatch(self, phone: str, message: str) -> DispatchResult:
        """
        Attempt native delivery of ``message`` to ``phone``.

        Returns:
            DispatchResult describing which branch was taken. Unbuildable
            links produce a ``SKIPPED`` result instead of an exception.
        """
        try:
            links = build_links(phone, message)
        except DeliveryConstructionError as e:
            logger.warning("Dispatch skipped: %s", e)
            return DispatchResult(outcome=DispatchOutcome.SKIPPED)

        device_class = self._platform.detect_device_class()
        attempt = DispatchAttempt(
            self._platform, links, device_class, self.wait_for(device_class)
        )
        logger.info(
            "Dispatching to %s on %s (wait %.2fs)",
            links.phone, device_class.value, self.wait_for(device_class),
        )
        try:
            outcome = await attempt.run()
        except Exception:
            logger.exception("Dispatch to %s failed", links.phone)
            outcome = DispatchOutcome.FAILED

        logger.info("Dispatch finished: %s", outcome.value)
        return DispatchResult(
            outcome=outcome,
            device_class=device_class,
            app_uri=links.app_uri,
            web_url=links.web_url,
            state_trace=attempt.state_machine.get_state_trace(),
        )

    def dispatch_nowait(self, phone: str, message: str) -> asyncio.Task:
        """Fire-and-forget variant; must be called with a running loop."""
        return asyncio.get_running_loop().create_task(self.dispatch(phone, message))

