# clientauth/shared/utils/completion.py

"""Handle for the single eventual result of a background operation."""

import asyncio
from typing import Any, Callable, Generator, Generic, TypeVar

T = TypeVar("T")


class CompletionHandle(Generic[T]):
    """
    Awaitable view over a background task.

    Every await yields the same result (or raises the same exception).
    Awaiting goes through ``asyncio.shield``: cancelling the awaiting task
    does not cancel the operation, whose outcome stays available here.
    """

    def __init__(self, task: "asyncio.Task[T]"):
        self._task = task

    def __await__(self) -> Generator[Any, None, T]:
        return asyncio.shield(self._task).__await__()

    def done(self) -> bool:
        return self._task.done()

    def result(self) -> T:
        """Return the result; raises ``asyncio.InvalidStateError`` while pending."""
        return self._task.result()

    def add_done_callback(self, callback: Callable[["CompletionHandle[T]"], None]) -> None:
        self._task.add_done_callback(lambda _task: callback(self))

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"<CompletionHandle {self._task.get_name()} {state}>"
