from __future__ import annotations

import asyncio
import inspect
import threading
from typing import (
    Any,
    Awaitable,
    Callable,
    Coroutine,
    List,
    Mapping,
    Optional,
    Protocol,
    Set,
    Union,
)

from .errors import report_errors
from .models import ExtensionContext, HookContext, Meta, merge_context


FilterHandler = Callable[[Meta, HookContext], Any]
ActionHandler = Callable[[Meta, HookContext], Optional[Awaitable[None]]]
ScheduleHandler = Callable[[ExtensionContext], Optional[Awaitable[None]]]

RawFilter = Callable[[Any, Mapping[str, Any], Any], Awaitable[Any]]
RawAction = Callable[[Mapping[str, Any], Any], None]
RawSchedule = Callable[[], None]


class RawRegister(Protocol):
    """Registration primitives exposed by the host framework."""

    def filter(self, event: str, handler: RawFilter) -> Any: ...

    def action(self, event: str, handler: RawAction) -> Any: ...

    def schedule(self, cron: str, handler: RawSchedule) -> Any: ...


async def _call(handler: Callable[..., Any], *args: Any) -> Any:
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _filter_keys(raw_meta: Mapping[str, Any]) -> List[Any]:
    keys = raw_meta.get("keys")
    return [] if keys is None else list(keys)


def _action_keys(raw_meta: Mapping[str, Any]) -> List[Any]:
    keys = _filter_keys(raw_meta)
    key = raw_meta.get("key")
    if key is not None:
        keys.append(key)
    return keys


class HookRegistrar:
    """Uniform ``filter``/``action``/``schedule`` surface over a host register.

    Every handler gets a fresh ``Meta`` and ``HookContext`` per firing and
    every failure is logged once through the base context's logger before it
    is re-raised. Filters re-raise to the host that fired them; actions and
    schedules run as detached tasks so the host never sees the failure.
    """

    def __init__(
        self,
        register: RawRegister,
        context: Union[ExtensionContext, Mapping[str, Any]],
    ) -> None:
        if not isinstance(context, ExtensionContext):
            context = ExtensionContext.model_validate(context)
        self._register = register
        self.context = context
        self._tasks: Set[asyncio.Task[None]] = set()

    @property
    def logger(self) -> Any:
        return self.context.logger

    def _spawn(self, coro: Callable[[], Coroutine[Any, Any, None]]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Fired from plain synchronous code: run on a loop of its own.
            thread = threading.Thread(target=lambda: asyncio.run(coro()), daemon=True)
            thread.start()
            return
        task = loop.create_task(coro())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def filter(self, event: str, handler: FilterHandler) -> None:
        async def on_filter(payload: Any, meta: Mapping[str, Any], context: Any) -> Any:
            with report_errors(self.logger, hook="filter", event=event):
                return await _call(
                    handler,
                    Meta.model_validate({**meta, "keys": _filter_keys(meta)}),
                    merge_context(self.context, context, payload),
                )

        self._register.filter(event, on_filter)

    def action(self, event: str, handler: ActionHandler) -> None:
        def on_action(meta: Mapping[str, Any], context: Any) -> None:
            async def run() -> None:
                with report_errors(self.logger, hook="action", event=event):
                    await _call(
                        handler,
                        Meta.model_validate({**meta, "keys": _action_keys(meta)}),
                        merge_context(self.context, context, meta.get("payload")),
                    )

            self._spawn(run)

        self._register.action(event, on_action)

    def schedule(self, cron: str, handler: ScheduleHandler) -> None:
        def on_schedule() -> None:
            async def run() -> None:
                with report_errors(self.logger, hook="schedule", event=cron):
                    await _call(handler, self.context)

            self._spawn(run)

        self._register.schedule(cron, on_schedule)

    async def wait_pending(self) -> None:
        """Wait for detached action and schedule handlers still running.

        Their failures were already logged, so they are not raised here.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


HookConfig = Callable[[RawRegister, Union[ExtensionContext, Mapping[str, Any]]], HookRegistrar]


def define_hook(fn: Callable[[HookRegistrar], None]) -> HookConfig:
    """Turn a function that registers handlers into a host hook entry point."""

    def config(
        register: RawRegister,
        context: Union[ExtensionContext, Mapping[str, Any]],
    ) -> HookRegistrar:
        registrar = HookRegistrar(register, context)
        fn(registrar)
        return registrar

    return config
