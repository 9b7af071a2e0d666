from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable, List, TypeVar, Union

from .errors import report_errors
from .models import OperationContext
from .payload import Schema, read_payload


Options = TypeVar("Options")

OperationHandler = Callable[[Options, OperationContext], Union[Any, Awaitable[Any]]]


def define_operation(
    fn: OperationHandler[Options],
) -> Callable[[Options, OperationContext], Awaitable[Any]]:
    """Wrap an operation handler so its failures are logged before they propagate."""

    @functools.wraps(fn)
    async def handler(options: Options, context: OperationContext) -> Any:
        with report_errors(
            context.logger,
            hook="operation",
            event=getattr(fn, "__name__", "operation"),
        ):
            result = fn(options, context)
            if inspect.isawaitable(result):
                result = await result
            return result

    return handler


def _trigger(context: OperationContext) -> dict:
    return context.data["$trigger"]


def read_trigger_payload(context: OperationContext, schema: Schema) -> Any:
    return read_payload(_trigger(context).get("payload"), schema)


def read_trigger_keys(context: OperationContext) -> List[Any]:
    keys = _trigger(context).get("keys")
    return [] if keys is None else list(keys)
