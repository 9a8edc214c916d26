# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cancellable trailing-edge debouncer built on :class:`threading.Timer`."""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock, Timer
from typing import Generic, TypeVar

ArgT = TypeVar("ArgT")


class Debouncer(Generic[ArgT]):
    """Coalesce bursts of calls into one call after a quiet period.

    Each :meth:`trigger` restarts the quiet period and replaces the pending
    argument, so only the last trigger of a burst reaches ``callback``.
    """

    def __init__(self, callback: Callable[[ArgT], object], wait: float) -> None:
        """Initialise the debouncer.

        Args:
            callback: Callable receiving the argument of the last trigger.
            wait: Quiet period in seconds; ``0`` calls ``callback`` immediately.
        """

        self._callback = callback
        self._wait = wait
        self._lock = Lock()
        self._timer: Timer | None = None
        self._generation = 0

    @property
    def wait(self) -> float:
        """Return the quiet period in seconds."""

        return self._wait

    @wait.setter
    def wait(self, value: float) -> None:
        if value < 0:
            raise ValueError("debounce wait must be non-negative")
        self._wait = value

    @property
    def pending(self) -> bool:
        """Return ``True`` while a trigger is waiting for its quiet period."""

        with self._lock:
            return self._timer is not None

    def trigger(self, argument: ArgT) -> None:
        """Schedule ``callback(argument)`` after the quiet period."""

        with self._lock:
            self._cancel_locked()
            if self._wait == 0:
                run_now = True
            else:
                run_now = False
                timer = Timer(self._wait, self._fire, args=(self._generation, argument))
                timer.daemon = True
                self._timer = timer
                timer.start()
        if run_now:
            self._callback(argument)

    def cancel(self) -> None:
        """Drop the pending trigger, if any."""

        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        # A timer that already started firing is fenced off by the generation check.
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int, argument: ArgT) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        self._callback(argument)


__all__ = ["Debouncer"]
