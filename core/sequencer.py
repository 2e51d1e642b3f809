import itertools
import threading


class RequestSequencer:
    """
    Hands out increasing request ids for one view (clients list, payments list...).

    In-flight requests can't be cancelled, so a slow older load may finish after a
    newer one. Views tag each load with next() and drop any result for which
    is_current() is False, so the newest filter always wins on screen.
    """
    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, request_id: int) -> bool:
        with self._lock:
            return request_id == self._latest
