"""TCP reader for an SBS-1 feed (dump1090 and friends serve it on port 30003)."""

import logging
import socket
import threading

from ..errors import FeedError
from .sbs import parse_sbs_line

log = logging.getLogger("termtrack.sbs_client")


class SbsFeedClient:
    """Reads lines on a background thread and hands decoded updates to callbacks.

    ``on_update(update)`` is called for every useful line and ``on_lost(error)``
    once when the connection fails or ends. Both run on the reader thread
    and must only enqueue work for the consumer.
    """

    def __init__(self, host: str = "localhost", port: int = 30003,
                 connect_timeout: float = 5.0):
        self._on_update = None
        self._on_lost = None
        self._host = str(host)
        self._port = int(port)
        self._connect_timeout = connect_timeout
        self._sock = None
        self._thread = None
        self._stop = threading.Event()
        self.lines_read = 0

    @property
    def address(self) -> str:
        return f"{self._host}:{self._port}"

    def start(self, on_update, on_lost):
        self._on_update = on_update
        self._on_lost = on_lost
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="sbs-feed", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        sock = self._sock
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)
        log.info("SBS feed client stopped after %d lines", self.lines_read)

    def _run(self):
        try:
            sock = socket.create_connection((self._host, self._port),
                                            timeout=self._connect_timeout)
            sock.settimeout(None)
        except OSError as e:
            if not self._stop.is_set():
                self._lost(FeedError(f"sbs connect {self.address}: {e}"))
            return

        self._sock = sock
        # stop() may have run while the connection was still being made
        if self._stop.is_set():
            sock.close()
            return

        log.info("Connected to SBS feed at %s", self.address)
        try:
            with self._sock.makefile("r", encoding="ascii", errors="replace", newline="") as stream:
                for line in stream:
                    if self._stop.is_set():
                        return
                    self.lines_read += 1
                    update = parse_sbs_line(line)
                    if update is None:
                        log.debug("Dropped line: %r", line[:80])
                        continue
                    self._on_update(update)
        except OSError as e:
            if not self._stop.is_set():
                self._lost(FeedError(f"sbs read: {e}"))
            return

        if not self._stop.is_set():
            self._lost(FeedError("sbs feed disconnected"))

    def _lost(self, error: FeedError):
        log.error("%s", error)
        self._on_lost(error)
