"""
Unlock component ports.

The controller talks to the network, the page region and the clock only
through these interfaces.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from longread.components.blocks import Block


class LockedContentFetcherPort(Protocol):
    """
    Port for the one-time locked content fetch.

    Implementations:
    - HttpLockedContentFetcher: httpx GET with same-origin cookies
    """

    async def fetch(self, address: str) -> list[Block]:
        """
        Fetch and validate the locked artifact.

        Raises:
            LockedContentFetchError: network failure, non-2xx status or an
                invalid body
        """
        ...


class PaywallViewPort(Protocol):
    """
    Port for the paywall region of the page.

    Implementations:
    - RegionView: in-memory region (tests, server-side preview)
    """

    def append_html(self, html: str) -> None:
        """Append block HTML verbatim to the visible content."""
        ...

    def remove_hint(self) -> None: ...

    def show_error(self, message: str) -> None:
        """Show (or replace) the single inline error message."""
        ...

    def show_end(self, message: str) -> None: ...

    def set_action(self, enabled: bool, label: str) -> None: ...

    def set_timer(self, active_segments: int) -> None: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerPort(Protocol):
    """
    Port for a repeating interval timer.

    Implementations:
    - AsyncioIntervalTimer: real one-second ticks on the running loop
    - ManualTimer: ticks driven by tests
    """

    def start(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Call `callback` every `interval` seconds until cancelled."""
        ...
