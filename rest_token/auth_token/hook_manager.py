"""Hook management for token refresh notifications."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

UpdateHook = Callable[[str], Coroutine[Any, Any, None]]
FailureHook = Callable[[Exception], Coroutine[Any, Any, None]]


class HookManager:
    """Manages registration and firing of refresh hooks.

    Update hooks receive the new token after every successful refresh,
    failure hooks receive the error after every failed one. Hooks run as
    retained fire-and-forget tasks; their exceptions are logged only.
    """

    def __init__(self) -> None:
        self._update_hooks: list[UpdateHook] = []
        self._failure_hooks: list[FailureHook] = []
        # Retained background tasks to prevent premature GC.
        self._hook_tasks: set[asyncio.Task[Any]] = set()

    def register_update_hook(self, hook: UpdateHook) -> None:
        """Register a coroutine hook invoked after a successful refresh.

        Hooks are additive; each is scheduled fire-and-forget with the new token.
        """
        self._update_hooks.append(hook)

    def register_failure_hook(self, hook: FailureHook) -> None:
        """Register a coroutine hook invoked after a failed refresh."""
        self._failure_hooks.append(hook)

    @property
    def pending(self) -> int:
        return len(self._hook_tasks)

    def fire_update_hooks(self, token: str) -> None:
        for hook in list(self._update_hooks):
            self._schedule(hook, token, category="update_hook")

    def fire_failure_hooks(self, error: Exception) -> None:
        for hook in list(self._failure_hooks):
            self._schedule(hook, error, category="failure_hook")

    async def drain(self) -> None:
        """Wait for every scheduled hook task to finish."""
        if self._hook_tasks:
            await asyncio.gather(*list(self._hook_tasks), return_exceptions=True)

    def _schedule(self, hook: Callable[[Any], Any], arg: Any, *, category: str) -> None:
        try:
            task: asyncio.Task[Any] = asyncio.create_task(hook(arg))
        except Exception as e:  # noqa: BLE001
            logging.warning(
                f"⚠️ Hook scheduling error category={category} type={type(e).__name__} error={str(e)}"
            )
            return
        self._hook_tasks.add(task)
        task.add_done_callback(lambda t: self._on_hook_done(t, category))

    def _on_hook_done(self, t: asyncio.Task[Any], category: str) -> None:
        self._hook_tasks.discard(t)
        if t.cancelled():
            return
        exc = t.exception()
        if exc:
            logging.warning(
                f"⚠️ Hook task error category={category} type={type(exc).__name__} error={str(exc)}"
            )
