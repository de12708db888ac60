"""Session driver for hosts without an event loop of their own.

Embedders (headless servers, the autoplay tool) run a session through `GameLoop`,
either threaded with `start()` or synchronously with `step()`. The pygame front end
in `tetris_ai.visualization.human_play` owns its frame loop and ticks the session
directly instead.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional, Union

from tetris_ai.game.intents import Intent

from .session import GameSession

logger = logging.getLogger(__name__)

COMMANDS = ("pause", "restart", "reset")


class GameLoop:
    """Ticks one session at a fixed interval on a dedicated thread.

    Intents and commands posted from other threads are queued and applied on the
    loop thread just before the next tick, so the session itself is only ever
    touched by one thread.
    """

    def __init__(self, session: GameSession, interval_ms: Optional[int] = None) -> None:
        self.session = session
        self.interval_ms = interval_ms if interval_ms is not None else session.settings.drop_interval_ms()
        self._inbox: "queue.Queue[Union[Intent, str]]" = queue.Queue()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def post(self, intent: Intent) -> None:
        self._inbox.put(Intent(intent))

    def post_command(self, command: str) -> None:
        if command not in COMMANDS:
            raise ValueError(f"unknown command {command!r}, expected one of {COMMANDS}")
        self._inbox.put(command)

    def _drain(self) -> None:
        while True:
            try:
                item = self._inbox.get_nowait()
            except queue.Empty:
                return
            if isinstance(item, Intent):
                self.session.handle(item)
            elif item == "pause":
                self.session.toggle_pause()
            elif item == "restart":
                self.session.restart()
            elif item == "reset":
                self.session.reset()

    def step(self) -> None:
        """One iteration: apply queued input, then tick."""
        self._drain()
        self.session.tick()
        self.ticks += 1

    def _run(self) -> None:
        logger.debug("game loop started, interval=%dms", self.interval_ms)
        while not self._stop.wait(self.interval_ms / 1000.0):
            self.step()
        logger.debug("game loop stopped after %d ticks", self.ticks)

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="game-loop", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
