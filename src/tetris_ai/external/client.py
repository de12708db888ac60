from __future__ import annotations

import logging
import socket
import time
from typing import Callable, Optional

from .protocol import AdvisorError, AdvisorRequest, OpMove, parse_move

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 2.0
READ_TIMEOUT = 5.0
RECONNECT_DELAY = 3.0


class AdvisorClient:
    """Asks an external advisor for a move over a fresh TCP connection per request.

    Any fault (refused, timeout, bad payload) marks the advisor unavailable and
    returns None. While unavailable, new attempts are spaced by `reconnect_delay`.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3000,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
        reconnect_delay: float = RECONNECT_DELAY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.host = host
        self.port = int(port)
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.reconnect_delay = reconnect_delay
        self._clock = clock
        self.available = False
        self._last_attempt: Optional[float] = None

    def _exchange(self, request: AdvisorRequest) -> OpMove:
        with socket.create_connection((self.host, self.port), timeout=self.connect_timeout) as sock:
            sock.settimeout(self.read_timeout)
            sock.sendall((request.to_json() + "\n").encode("utf-8"))
            with sock.makefile("r", encoding="utf-8") as reader:
                return parse_move(reader.readline())

    def request_move(self, request: AdvisorRequest) -> Optional[OpMove]:
        now = self._clock()
        if (
            not self.available
            and self._last_attempt is not None
            and now - self._last_attempt < self.reconnect_delay
        ):
            return None
        self._last_attempt = now

        try:
            move = self._exchange(request)
        except AdvisorError as exc:
            self._mark_unavailable(f"malformed response: {exc}")
            return None
        except (OSError, ValueError) as exc:
            self._mark_unavailable(f"{type(exc).__name__}: {exc}")
            return None

        if not self.available:
            logger.info("advisor at %s:%d available", self.host, self.port)
        self.available = True
        logger.debug("advisor move x=%d rotate=%d", move.op_x, move.op_rotate)
        return move

    def _mark_unavailable(self, reason: str) -> None:
        if self.available:
            logger.warning("advisor at %s:%d lost (%s)", self.host, self.port, reason)
        else:
            logger.debug("advisor at %s:%d unavailable (%s)", self.host, self.port, reason)
        self.available = False

    def reset(self) -> None:
        """Forget availability and allow an immediate attempt."""
        self._last_attempt = None
        self.available = False
