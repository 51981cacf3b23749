"""
Herald output channel: host-owned queue of renderables and deferred callbacks.

The interpreter never prints. Built-in commands and the shell push rich
renderables (Text, Diagnostic, plain strings) to a Channel; the host drains
it and prints wherever it wants, e.g.

    for entry in shell.channel.drain():
        console.print(entry)

Some output must appear after the line that produced it has been echoed.
Channel.defer(callback) schedules a callback for the next tick() and returns a
Deferred handle whose cancel() drops it. Callbacks scheduled while a tick runs
wait for the following tick.
"""
from collections import deque


class Deferred:
    """
    Handle of a callback scheduled with Channel.defer.
    """

    __slots__ = ("_callback", "_cancelled", "_done")

    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError("deferred callback must be callable")
        self._callback = callback
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self):
        return self._cancelled

    @property
    def done(self):
        return self._done

    @property
    def pending(self):
        return not (self._cancelled or self._done)

    def cancel(self):
        """
        prevent the callback from running; returns False if it already ran.
        """
        if self._done:
            return False
        self._cancelled = True
        return True

    def _fire(self):
        if not self.pending:
            return False
        self._done = True
        self._callback()
        return True

    def __repr__(self):
        state = "cancelled" if self._cancelled else "done" if self._done else "pending"
        return f"deferred({self._callback!r}, {state})"


class Channel:
    """
    FIFO of pending output entries plus a one-step callback queue.
    """

    def __init__(self):
        self._entries = deque()
        self._scheduled = deque()

    def print(self, *objects):
        """
        enqueue renderables in order; strings are kept as-is.
        """
        self._entries.extend(objects)

    def drain(self):
        """
        return every pending entry and empty the queue.
        """
        entries = list(self._entries)
        self._entries.clear()
        return entries

    def defer(self, callback, /):
        deferred = Deferred(callback)
        self._scheduled.append(deferred)
        return deferred

    def tick(self):
        """
        run the callbacks scheduled before this call; returns how many ran.
        """
        batch, self._scheduled = self._scheduled, deque()
        return sum(deferred._fire() for deferred in batch)

    @property
    def scheduled(self):
        return sum(deferred.pending for deferred in self._scheduled)

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))

    def __repr__(self):
        return f"channel({len(self._entries)} pending, {self.scheduled} scheduled)"


__all__ = (
    "Deferred",
    "Channel",
)
