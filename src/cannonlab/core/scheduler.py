"""
Host frame schedulers.

A scheduler is the "call me before the next repaint" primitive. The
animation core only ever calls ``request_frame``; the scheduler later
invokes the callback once with a timestamp in milliseconds.
"""
from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from typing import Protocol

from matplotlib.animation import FuncAnimation
from matplotlib.figure import Figure

FrameCallback = Callable[[float], None]

DEFAULT_FRAME_INTERVAL = 1000.0 / 60.0  # ms


class FrameScheduler(Protocol):
    """Protocol for frame-callback providers."""

    def request_frame(self, callback: FrameCallback) -> None:
        """Invoke ``callback(timestamp_ms)`` once, before the next frame."""
        ...


class ManualScheduler:
    """
    Deterministic scheduler driven by explicit ticks.

    Every ``tick`` runs the callbacks requested before it, each with the
    same timestamp. Callbacks requested during a tick wait for the next one.

    Parameters
    ----------
    start_time : float
        Clock value before the first tick [ms]

    Examples
    --------
    >>> scheduler = ManualScheduler()
    >>> handle = start_simulation(params, surface, scheduler)
    >>> scheduler.run(max_ticks=10_000)
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self.now = float(start_time)
        self.ticks = 0
        self._pending: list[FrameCallback] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def tick(self, timestamp: float | None = None) -> int:
        """
        Run pending callbacks once.

        Returns
        -------
        int
            Number of callbacks invoked
        """
        if timestamp is not None:
            self.now = float(timestamp)
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback(self.now)
        self.ticks += 1
        return len(callbacks)

    def run(
        self,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        max_ticks: int | None = None,
    ) -> int:
        """
        Tick at a fixed interval until nothing is pending.

        Parameters
        ----------
        frame_interval : float
            Clock advance per tick [ms]
        max_ticks : int | None
            Stop after this many ticks even if callbacks remain

        Returns
        -------
        int
            Ticks performed by this call
        """
        done = 0
        while self._pending and (max_ticks is None or done < max_ticks):
            self.tick(self.now + frame_interval)
            done += 1
        return done


class MatplotlibScheduler:
    """
    Scheduler backed by a matplotlib FuncAnimation timer.

    The animation runs while callbacks are pending and pauses its timer
    when the queue drains. Timestamps come from ``time.perf_counter``.

    Parameters
    ----------
    fig : Figure
        Figure whose canvas provides the timer
    interval : float
        Delay between frames [ms]
    """

    def __init__(self, fig: Figure, interval: float = DEFAULT_FRAME_INTERVAL) -> None:
        self.fig = fig
        self.interval = interval
        self.animation: FuncAnimation | None = None
        self._pending: list[FrameCallback] = []
        self._paused = False

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)
        if self.animation is None:
            self.animation = FuncAnimation(
                self.fig, self._on_frame,
                frames=itertools.count(),
                interval=self.interval,
                blit=False, repeat=False, cache_frame_data=False,
            )
        elif self._paused:
            self._paused = False
            self.animation.event_source.start()

    def _on_frame(self, frame: int) -> list:
        timestamp = time.perf_counter() * 1000.0
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback(timestamp)
        if not self._pending and self.animation is not None and not self._paused:
            self._paused = True
            self.animation.event_source.stop()
        return []
