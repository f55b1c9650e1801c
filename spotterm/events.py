"""Input and tick events delivered from a background reader thread."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from .key import Key

KeyReader = Callable[[float], Optional[Key]]
"""Waits up to the given number of seconds for a key; returns None if none came."""


@dataclass(frozen=True)
class EventConfig:
    """Configuration for event handling."""

    exit_key: Key = field(default_factory=lambda: Key.ctrl("c"))
    tick_rate: float = 0.25


@dataclass(frozen=True)
class Event:
    """An input event when ``key`` is set, otherwise a tick."""

    key: Key | None = None

    @property
    def is_tick(self) -> bool:
        return self.key is None


_FAILED = object()


class Events:
    """Polls a key reader in its own thread and queues input and tick events."""

    def __init__(self, reader: KeyReader, config: EventConfig | None = None) -> None:
        self.config = config if config is not None else EventConfig()
        self._reader = reader
        self._queue: queue.Queue = queue.Queue()
        self._stop = threading.Event()
        self._error: BaseException | None = None
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    @classmethod
    def with_tick_rate(cls, reader: KeyReader, tick_rate_ms: int) -> Events:
        return cls(reader, EventConfig(tick_rate=tick_rate_ms / 1000))

    def _run(self) -> None:
        try:
            while not self._stop.is_set():
                key = self._reader(self.config.tick_rate)
                if key is not None:
                    self._queue.put(Event(key))
                self._queue.put(Event())
        except Exception as exc:  # reported to the consumer by next()
            self._error = exc
            self._queue.put(_FAILED)

    def next(self, timeout: float | None = None) -> Event:
        """Block until the next event; raise TimeoutError if none arrives in time."""
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError("no event arrived in time") from None
        if item is _FAILED:
            self._queue.put(_FAILED)
            assert self._error is not None
            raise self._error
        return item

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=max(1.0, self.config.tick_rate * 4))

    def __enter__(self) -> Events:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()