"""
Rate limit module interface.

The limiter only talks to its counters through IRateLimitStore, so the
in-memory default can be replaced by a shared counter service without
changing callers.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import WindowState


@runtime_checkable
class IRateLimitStore(Protocol):
    """
    Interface for window counter storage.

    ``increment`` is the only write used on the request path and must be
    atomic: read, expire-and-reset, add one and return happen as a single
    step per key.
    """

    async def get(self, key: str) -> Optional[WindowState]:
        """Return the current window for a key, if any."""
        ...

    async def set(self, state: WindowState) -> None:
        """Replace the window stored for ``state.key``."""
        ...

    async def reset(self, key: str) -> None:
        """Forget the window for a key."""
        ...

    async def increment(self, key: str, duration: float, now: float) -> WindowState:
        """
        Count one request for a key.

        Starts a fresh window when none exists or the current one has
        expired (``now >= reset_at``).

        Returns:
            Snapshot of the window after counting
        """
        ...

    async def decrement(self, key: str, window_started_at: float) -> None:
        """
        Undo one counted request.

        No-op if the window starting at ``window_started_at`` has since
        been replaced or the count is already zero.
        """
        ...
