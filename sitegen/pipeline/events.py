"""
Pipeline event channel.

The orchestrator publishes progress events; the streaming adapter (or any
other observer) consumes them with `async for`. Publishing never blocks,
so stages can relay document deltas from synchronous callbacks.
"""

import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterator, List

from ..models import PipelineStageResult


@dataclass
class StageStarted:
    stage: str
    description: str


@dataclass
class StageCompleted:
    result: PipelineStageResult

    @property
    def stage(self) -> str:
        return self.result.stage


@dataclass
class StageFailed:
    stage: str
    error: str


@dataclass
class DocumentChunk:
    """One text delta from document generation, plus everything so far."""
    delta: str
    accumulated: str


@dataclass
class PipelineCancelled:
    """Run was cancelled; carries the stage results recorded before that."""
    stages: List[PipelineStageResult] = field(default_factory=list)


_CLOSED = object()


class EventChannel:
    """
    Single-consumer event channel backed by an unbounded asyncio.Queue.

    Usage:
        channel = EventChannel()
        channel.publish(StageStarted("intent", "Analyzing your request"))
        channel.close()

        async for event in channel:
            ...
    """

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, event) -> None:
        if self._closed:
            raise RuntimeError("Cannot publish to a closed event channel")
        self._queue.put_nowait(event)

    def close(self) -> None:
        """End the stream. Events already published are still delivered."""
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def __aiter__(self) -> AsyncIterator:
        while True:
            event = await self._queue.get()
            if event is _CLOSED:
                return
            yield event
