"""
Request-scoped deadlines for blocking work.

A `RequestScope` starts its clock when the handler's dependencies resolve.
Work run through it is cancelled when the deadline passes or the client
disconnects, whichever comes first.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import Request

REQUEST_TIMEOUT_S = 60.0

T = TypeVar("T")

Receive = Callable[[], Awaitable[dict[str, Any]]]


class RequestTimeoutError(RuntimeError):
    pass


class RequestCancelledError(RuntimeError):
    pass


async def _wait_for_disconnect(receive: Receive) -> None:
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            return None


@dataclass
class RequestScope:
    receive: Receive
    deadline: float
    timeout_s: float = REQUEST_TIMEOUT_S

    @classmethod
    def start(cls, receive: Receive, *, timeout_s: float = REQUEST_TIMEOUT_S) -> RequestScope:
        loop = asyncio.get_running_loop()
        return cls(receive=receive, deadline=loop.time() + timeout_s, timeout_s=timeout_s)

    def remaining(self) -> float:
        return max(0.0, self.deadline - asyncio.get_running_loop().time())

    async def run(self, work: Awaitable[T]) -> T:
        """
        Await `work` within this scope.

        Raises RequestTimeoutError or RequestCancelledError after cancelling
        `work`; any exception raised by `work` itself propagates unchanged.
        """
        task = asyncio.ensure_future(work)
        watcher = asyncio.ensure_future(_wait_for_disconnect(self.receive))
        try:
            done, _ = await asyncio.wait(
                {task, watcher},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            task.cancel()
            watcher.cancel()
            await asyncio.gather(task, watcher, return_exceptions=True)

        if task in done:
            return task.result()
        if watcher in done:
            raise RequestCancelledError("request cancelled: client disconnected")
        raise RequestTimeoutError(f"request timed out after {self.timeout_s:g}s")


async def get_request_scope(request: Request) -> RequestScope:
    return RequestScope.start(request.receive, timeout_s=REQUEST_TIMEOUT_S)
