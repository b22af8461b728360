"""Pools of equally sized sample buffers handed between a producer and a consumer.

A pool owns a fixed number of buffers. Free buffers wait in a write queue;
a producer takes one, fills it and releases it into the read queue, where a
consumer picks it up and releases it back to the write queue once done.
"""

from __future__ import annotations

import array
from collections import deque
from enum import IntFlag
from typing import Generic, TypeVar

__all__ = [
    "DMABufferFlag",
    "ALL_FLAGS",
    "DEFAULT_ALIGNMENT",
    "SPSCQueue",
    "DMABuffer",
    "DMAPool",
]

T = TypeVar("T")

ALL_FLAGS = 0xFFFFFFFF
DEFAULT_ALIGNMENT = 4


class DMABufferFlag(IntFlag):
    """Flags carried by a buffer."""

    READ = 1 << 0
    WRITE = 1 << 1
    DISCONT = 1 << 2
    INTRLVD = 1 << 3


class SPSCQueue(Generic[T]):
    """A bounded first-in first-out queue for one producer and one consumer.

    A queue created with size 0 holds nothing and is falsy.
    """

    def __init__(self, size: int = 0) -> None:
        self._size = max(0, size)
        self._items: deque[T] = deque()

    @property
    def capacity(self) -> int:
        """The most items the queue can hold."""
        return self._size

    def reset(self) -> None:
        """Drop every queued item."""
        self._items.clear()

    def empty(self) -> bool:
        """Return True if nothing is queued."""
        return not self._items

    def __bool__(self) -> bool:
        return self._size > 0

    def push(self, item: T) -> bool:
        """Append an item; return False if the queue is full."""
        if len(self._items) >= self._size:
            return False
        self._items.append(item)
        return True

    def pop(self, peek: bool = False) -> T | None:
        """Remove and return the oldest item, or None if empty.

        With ``peek`` the item is returned but stays queued.
        """
        if not self._items:
            return None
        return self._items[0] if peek else self._items.popleft()


class DMABuffer:
    """A block of samples, interleaved over channels, that belongs to a pool."""

    def __init__(
        self,
        pool: "DMAPool | None" = None,
        samples: int = 0,
        channels: int = 0,
        data: memoryview | None = None,
        typecode: str = "H",
    ) -> None:
        self.pool = pool
        self.n_samples = samples
        self.n_channels = channels
        self.data = data
        self.itemsize = array.array(typecode).itemsize
        self.timestamp = 0
        self.flags = 0

    @property
    def channels(self) -> int:
        """Number of interleaved channels."""
        return self.n_channels

    def size(self) -> int:
        """Number of samples over all channels."""
        return self.n_samples * self.n_channels

    def nbytes(self) -> int:
        """Size of the sample data in bytes."""
        return self.size() * self.itemsize

    def release(self) -> None:
        """Hand the buffer back to its pool."""
        if self.pool is not None and self.data is not None:
            self.pool.free(self, self.flags)

    def set_flags(self, flags: int) -> None:
        """Set the given flag bits."""
        self.flags |= int(flags)

    def get_flags(self, mask: int = ALL_FLAGS) -> bool:
        """Return True if any flag bit in ``mask`` is set."""
        return bool(self.flags & int(mask))

    def clr_flags(self, mask: int = ALL_FLAGS) -> None:
        """Clear the flag bits in ``mask``."""
        self.flags &= ~int(mask)

    def _check_index(self, index: int) -> None:
        if self.data is None or not 0 <= index < self.size():
            raise IndexError(f"sample index out of range: {index}")

    def __getitem__(self, index: int):
        self._check_index(index)
        return self.data[index]

    def __setitem__(self, index: int, value) -> None:
        self._check_index(index)
        self.data[index] = value

    def __bool__(self) -> bool:
        return self.data is not None


class DMAPool:
    """A fixed set of sample buffers cut from one block of memory.

    Each buffer starts on a multiple of ``alignment`` bytes. ``memory`` may be
    a writable bytes-like object to carve the buffers from; otherwise the pool
    allocates its own.
    """

    def __init__(
        self,
        n_samples: int,
        n_channels: int,
        n_buffers: int,
        typecode: str = "H",
        alignment: int = DEFAULT_ALIGNMENT,
        memory=None,
    ) -> None:
        if alignment < 1 or alignment & (alignment - 1):
            raise ValueError(f"alignment must be a power of two, got {alignment}")
        itemsize = array.array(typecode).itemsize
        self.typecode = typecode
        self.alignment = alignment
        self._wqueue: SPSCQueue[DMABuffer] = SPSCQueue(n_buffers)
        self._rqueue: SPSCQueue[DMABuffer] = SPSCQueue(n_buffers)

        length = n_samples * n_channels * itemsize
        self.buffer_size = (length + alignment - 1) & ~(alignment - 1)

        if self.buffer_size and self._wqueue and self._rqueue:
            total = n_buffers * self.buffer_size
            if memory is None:
                memory = bytearray(total)
            view = memoryview(memory).cast("B")
            if view.readonly:
                raise ValueError("pool memory must be writable")
            if view.nbytes < total:
                raise ValueError(
                    f"pool memory holds {view.nbytes} bytes, {total} needed"
                )
            for i in range(n_buffers):
                start = i * self.buffer_size
                chunk = view[start:start + length].cast(typecode)
                self._wqueue.push(DMABuffer(self, n_samples, n_channels, chunk, typecode))
        self.memory = memory

    def writable(self) -> bool:
        """Return True if a free buffer is waiting to be filled."""
        return not self._wqueue.empty()

    def readable(self) -> bool:
        """Return True if a filled buffer is waiting to be read."""
        return not self._rqueue.empty()

    def flush(self) -> None:
        """Return every filled buffer to the free queue unread."""
        while self.readable():
            buf = self.alloc(DMABufferFlag.READ)
            if buf is not None:
                buf.release()

    def alloc(self, flags: int) -> DMABuffer | None:
        """Take a buffer: a filled one if ``flags`` has READ, else a free one.

        Returns None if the queue asked for is empty.
        """
        if flags & DMABufferFlag.READ:
            buf = self._rqueue.pop()
        else:
            buf = self._wqueue.pop()
        if buf is not None:
            buf.clr_flags(DMABufferFlag.READ | DMABufferFlag.WRITE)
            buf.set_flags(flags)
        return buf

    def free(self, buf: DMABuffer | None, flags: int = 0) -> None:
        """Give a buffer back.

        A buffer taken for reading goes to the free queue with its flags
        cleared; one taken for writing goes to the filled queue.
        """
        if buf is None:
            return
        if flags == 0:
            flags = buf.flags
        if flags & DMABufferFlag.READ:
            buf.clr_flags()
            self._wqueue.push(buf)
        else:
            self._rqueue.push(buf)