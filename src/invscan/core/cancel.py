# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cancellation token threaded through every scan phase and plugin call."""

from __future__ import annotations

import time

from invscan.core.exceptions import ScanCancelledError

CANCELED = "context canceled"
DEADLINE_EXCEEDED = "context deadline exceeded"


class CancelToken:
    """Cooperative cancellation signal.

    The scanner checks the token before every phase and between plugin
    invocations; plugins that block on I/O should check it too.  A token
    may carry a deadline, after which it reports itself cancelled.
    """

    __slots__ = ("_deadline", "_reason")

    def __init__(self, deadline: float | None = None) -> None:
        self._reason: str | None = None
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> CancelToken:
        """Return a token that cancels itself *seconds* from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self, reason: str = CANCELED) -> None:
        # First reason wins.
        if self._reason is None:
            self._reason = reason

    @property
    def cancelled(self) -> bool:
        return self.reason is not None

    @property
    def reason(self) -> str | None:
        if self._reason is None and self._deadline is not None:
            if time.monotonic() >= self._deadline:
                self._reason = DEADLINE_EXCEEDED
        return self._reason

    def raise_if_cancelled(self) -> None:
        reason = self.reason
        if reason is not None:
            raise ScanCancelledError(reason)
