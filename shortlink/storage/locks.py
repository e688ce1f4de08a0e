"""Async reader/writer lock used by the in-process stores."""

import asyncio
from collections import deque
from contextlib import asynccontextmanager
from typing import Deque, Tuple


class ReadWriteLock:
    """FIFO reader/writer lock for asyncio tasks.

    Any number of readers may hold the lock together; a writer holds it alone.
    Waiters are granted in arrival order, so a queued writer blocks readers that
    arrive after it and cannot be starved. Releasing never awaits, which keeps
    the lock consistent when the releasing task is being cancelled.
    """

    def __init__(self):
        self._readers = 0
        self._writer = False
        self._waiters: Deque[Tuple[asyncio.Future, bool]] = deque()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer

    @asynccontextmanager
    async def read(self):
        """Hold the lock in shared mode."""
        await self._acquire(exclusive=False)
        try:
            yield
        finally:
            self._release(exclusive=False)

    @asynccontextmanager
    async def write(self):
        """Hold the lock in exclusive mode."""
        await self._acquire(exclusive=True)
        try:
            yield
        finally:
            self._release(exclusive=True)

    def _can_grant(self, exclusive: bool) -> bool:
        if exclusive:
            return not self._writer and self._readers == 0
        return not self._writer

    def _grant(self, exclusive: bool) -> None:
        if exclusive:
            self._writer = True
        else:
            self._readers += 1

    async def _acquire(self, exclusive: bool) -> None:
        if not self._waiters and self._can_grant(exclusive):
            self._grant(exclusive)
            return

        waiter = (asyncio.get_running_loop().create_future(), exclusive)
        self._waiters.append(waiter)
        try:
            await waiter[0]
        except asyncio.CancelledError:
            fut = waiter[0]
            if fut.done() and not fut.cancelled():
                # Granted just before the cancellation arrived; hand it back
                self._release(exclusive)
            else:
                try:
                    self._waiters.remove(waiter)
                except ValueError:
                    pass
                self._wake()
            raise

    def _release(self, exclusive: bool) -> None:
        if exclusive:
            self._writer = False
        else:
            self._readers -= 1
        self._wake()

    def _wake(self) -> None:
        while self._waiters:
            fut, exclusive = self._waiters[0]
            if fut.done():
                self._waiters.popleft()
                continue
            if not self._can_grant(exclusive):
                break
            self._waiters.popleft()
            self._grant(exclusive)
            fut.set_result(None)
            if exclusive:
                break
