"""Line sinks: the append-only surfaces that receive rendered lines.

A sink only has to accept batches of lines in order. A surface is a sink that
also takes display-mode options once the last line has been appended.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable, Iterator, Mapping
from typing import Protocol, runtime_checkable

from rich.console import Console

DEFAULT_BATCH_SIZE = 64


@runtime_checkable
class LineSink(Protocol):
    def append(self, lines: list[str]) -> None: ...


@runtime_checkable
class Surface(LineSink, Protocol):
    def set_options(self, options: Mapping[str, str]) -> None: ...


class AsyncLineSink(Protocol):
    async def append(self, lines: list[str]) -> None: ...


class BufferSink:
    """In-memory surface. Keeps every appended line and the options applied last."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.options: dict[str, str] = {}
        self.appends = 0

    def append(self, lines: list[str]) -> None:
        self.lines.extend(lines)
        self.appends += 1

    def set_options(self, options: Mapping[str, str]) -> None:
        self.options.update(options)


class ConsoleSink:
    """Write lines to a rich console exactly as rendered."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def append(self, lines: list[str]) -> None:
        for line in lines:
            self._console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def set_options(self, options: Mapping[str, str]) -> None:
        # A terminal has no buffer to configure.
        pass


class QueueSink:
    """Async sink feeding an asyncio.Queue. ``None`` marks the end of the stream."""

    def __init__(self, maxsize: int = 0) -> None:
        self.queue: asyncio.Queue[list[str] | None] = asyncio.Queue(maxsize=maxsize)

    async def append(self, lines: list[str]) -> None:
        await self.queue.put(list(lines))

    async def close(self) -> None:
        await self.queue.put(None)

    async def batches(self) -> AsyncIterator[list[str]]:
        """Yield batches in the order they were appended until the sink is closed."""
        while True:
            batch = await self.queue.get()
            if batch is None:
                return
            yield batch


def batched(lines: Iterable[str], size: int = DEFAULT_BATCH_SIZE) -> Iterator[list[str]]:
    """Group lines into consecutive lists of at most ``size`` lines."""
    if size < 1:
        raise ValueError(f"batch size must be positive, got {size}")
    batch: list[str] = []
    for line in lines:
        batch.append(line)
        if len(batch) == size:
            yield batch
            batch = []
    if batch:
        yield batch


def deliver(lines: Iterable[str], sink: LineSink, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    """Append lines to the sink in order. Returns the number of lines delivered."""
    count = 0
    for batch in batched(lines, batch_size):
        sink.append(batch)
        count += len(batch)
    return count


async def adeliver(lines: Iterable[str], sink: AsyncLineSink, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    """Async counterpart of deliver: each batch is awaited before the next is produced."""
    count = 0
    for batch in batched(lines, batch_size):
        await sink.append(batch)
        count += len(batch)
    return count
