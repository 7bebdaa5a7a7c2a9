"""Cancellation and deadline context carried into every API call.

A ``CallContext`` is created by the caller and passed to ``Client.do`` and
the resource adapters. The transport never cancels on its own; it only asks
the context whether it is done after a network failure, so a cancelled or
expired call reports the context's error instead of the raw socket error.

Call context:
    - Created by callers (CLI, use cases, tests).
    - Read by ``ckan_client.adapters.http_client.Client.do``.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from ckan_client.domain.errors import ContextError, DeadlineExceeded, RequestCancelled


class CallContext:
    """Cancellation token with an optional monotonic deadline.

    Contexts form a chain: a child is done when it is cancelled, when its
    own deadline passes, or when its parent is done.
    """

    def __init__(
        self,
        *,
        parent: Optional["CallContext"] = None,
        deadline: Optional[float] = None,
    ) -> None:
        self._parent = parent
        self._deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "CallContext":
        """Return a context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_cancel(cls, parent: Optional["CallContext"] = None) -> "CallContext":
        return cls(parent=parent)

    @classmethod
    def with_timeout(
        cls, seconds: float, parent: Optional["CallContext"] = None
    ) -> "CallContext":
        """Return a child context that expires ``seconds`` from now."""
        return cls(parent=parent, deadline=time.monotonic() + float(seconds))

    def cancel(self) -> None:
        self._cancelled.set()

    def deadline(self) -> Optional[float]:
        """Return the earliest monotonic deadline along the parent chain."""
        parent_deadline = self._parent.deadline() if self._parent is not None else None
        candidates = [d for d in (self._deadline, parent_deadline) if d is not None]
        return min(candidates) if candidates else None

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, ``None`` without one."""
        deadline = self.deadline()
        if deadline is None:
            return None
        return deadline - time.monotonic()

    def err(self) -> Optional[ContextError]:
        """Return the terminal error once the context is done, else ``None``.

        Cancellation wins over an expired deadline when both apply.
        """
        if self._cancelled.is_set():
            return RequestCancelled("context canceled")
        if self._parent is not None:
            parent_err = self._parent.err()
            if parent_err is not None:
                return parent_err
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceeded("context deadline exceeded")
        return None

    def done(self) -> bool:
        return self.err() is not None


__all__ = ["CallContext"]
