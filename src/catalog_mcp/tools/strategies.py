"""
Execution strategies.

A strategy decides how a tool invocation is carried out once the middleware
chain has run: directly, through a time-boxed result cache, or coalesced into
batches of concurrent calls.
"""

import asyncio
import json
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from catalog_mcp.tools.models import CallToolResult, ToolArgs, ToolExecutionContext, ToolImplementation, ToolMetadata

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 5 * 60.0


class ToolExecutionStrategy(Protocol):
    async def execute(
        self,
        tool: ToolImplementation,
        args: ToolArgs,
        context: ToolExecutionContext,
        metadata: ToolMetadata,
    ) -> CallToolResult:
        ...


class DirectExecutionStrategy:
    """Calls the tool immediately."""

    async def execute(
        self,
        tool: ToolImplementation,
        args: ToolArgs,
        context: ToolExecutionContext,
        metadata: ToolMetadata,
    ) -> CallToolResult:
        return await tool.execute(args, context)


class CachedExecutionStrategy:
    """
    Caches results of cacheable tools for a fixed time-to-live.

    Entries are keyed by tool name and the canonical JSON form of the arguments
    and expire once ttl seconds have passed. When max_entries is set the least
    recently used entry is evicted first.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_CACHE_TTL,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._cache: "OrderedDict[str, Tuple[CallToolResult, float]]" = OrderedDict()

    async def execute(
        self,
        tool: ToolImplementation,
        args: ToolArgs,
        context: ToolExecutionContext,
        metadata: ToolMetadata,
    ) -> CallToolResult:
        if not metadata.cacheable:
            return await tool.execute(args, context)

        key = self.cache_key(metadata.name, args)
        cached = self._cache.get(key)
        if cached is not None:
            result, timestamp = cached
            if self._clock() - timestamp < self.ttl:
                self._cache.move_to_end(key)
                logger.debug(f"Cache hit for tool {metadata.name}")
                return result
            del self._cache[key]

        result = await tool.execute(args, context)
        self._store(key, result)
        return result

    @staticmethod
    def cache_key(tool_name: str, args: ToolArgs) -> str:
        return f"{tool_name}:{json.dumps(args, sort_keys=True, default=str)}"

    def _store(self, key: str, result: CallToolResult) -> None:
        self._cache[key] = (result, self._clock())
        self._cache.move_to_end(key)
        if self.max_entries is not None:
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)

    def clear_cache(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


@dataclass
class _QueuedCall:
    args: ToolArgs
    context: ToolExecutionContext
    future: "asyncio.Future[CallToolResult]"


class BatchedExecutionStrategy:
    """
    Coalesces concurrent calls to the same tool into batches.

    Calls are queued per tool name. A queue is flushed on the next turn of the
    event loop (or flush_delay seconds later), or as soon as it reaches the
    tool's max_batch_size. Each queued call is still executed on its own; the
    outcome of one call never affects the others.
    """

    def __init__(self, flush_delay: float = 0.0):
        if flush_delay < 0:
            raise ValueError("flush_delay must not be negative")
        self.flush_delay = flush_delay
        self._queues: Dict[str, List[_QueuedCall]] = {}
        self._tasks: set = set()

    async def execute(
        self,
        tool: ToolImplementation,
        args: ToolArgs,
        context: ToolExecutionContext,
        metadata: ToolMetadata,
    ) -> CallToolResult:
        if not metadata.max_batch_size or metadata.max_batch_size <= 1:
            return await tool.execute(args, context)

        loop = asyncio.get_running_loop()
        key = metadata.name
        future: "asyncio.Future[CallToolResult]" = loop.create_future()

        queue = self._queues.get(key)
        if queue is None:
            queue = self._queues[key] = []
            if self.flush_delay > 0:
                loop.call_later(self.flush_delay, self._flush, key, queue, tool)
            else:
                loop.call_soon(self._flush, key, queue, tool)

        queue.append(_QueuedCall(args, context, future))

        if len(queue) >= metadata.max_batch_size:
            self._flush(key, queue, tool)

        return await future

    def pending(self, tool_name: str) -> int:
        return len(self._queues.get(tool_name, ()))

    def _flush(self, key: str, queue: List[_QueuedCall], tool: ToolImplementation) -> None:
        # A scheduled flush only applies to the queue it was scheduled for.
        if self._queues.get(key) is not queue:
            return
        del self._queues[key]
        if not queue:
            return

        logger.debug(f"Flushing batch of {len(queue)} calls for tool {key}")
        task = asyncio.ensure_future(self._run_batch(queue, tool))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_batch(self, queue: List[_QueuedCall], tool: ToolImplementation) -> None:
        async def invoke(call: _QueuedCall) -> CallToolResult:
            return await tool.execute(call.args, call.context)

        try:
            results = await asyncio.gather(*(invoke(call) for call in queue), return_exceptions=True)
        except Exception as e:
            logger.error(f"Batch of {len(queue)} calls failed: {e}")
            for call in queue:
                if not call.future.done():
                    call.future.set_exception(e)
            return

        for call, result in zip(queue, results):
            if call.future.done():
                continue
            if isinstance(result, BaseException):
                call.future.set_exception(result)
            else:
                call.future.set_result(result)
