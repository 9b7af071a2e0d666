from __future__ import annotations

import types
from functools import lru_cache
from typing import Any, List, Sequence, Type, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import PayloadValidationError
from .models import HookContext


M = TypeVar("M", bound=BaseModel)

Schema = Union[Type[BaseModel], Sequence[Type[BaseModel]], Any]


@lru_cache(maxsize=None)
def passthrough(model: Type[M]) -> Type[M]:
    """Return ``model`` configured to keep undeclared fields.

    Only the top level changes: nested models keep whatever ``extra``
    setting they were declared with.
    """
    if model.model_config.get("extra") == "allow":
        return model
    return type(
        model.__name__,
        (model,),
        {
            "__module__": model.__module__,
            "__qualname__": model.__qualname__,
            "model_config": ConfigDict(extra="allow"),
        },
    )


def _is_model(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, BaseModel)


def alternatives(schema: Schema) -> List[Type[BaseModel]]:
    """Flatten a schema into its ordered list of object models."""
    if _is_model(schema):
        return [schema]
    if get_origin(schema) in (Union, types.UnionType):
        members = list(get_args(schema))
    elif isinstance(schema, (list, tuple)):
        members = list(schema)
    else:
        raise TypeError(f"unsupported payload schema: {schema!r}")

    if not members:
        raise TypeError("a schema union needs at least one member")
    for member in members:
        if not _is_model(member):
            raise TypeError(f"union member {member!r} is not a pydantic model")
    return members


def read_payload(value: Any, schema: Schema) -> Any:
    """Validate ``value`` against ``schema`` keeping undeclared fields.

    For a union the members are tried in declared order and the first one
    that accepts the value wins.
    """
    members = alternatives(schema)
    errors: List[ValidationError] = []
    for model in members:
        try:
            return passthrough(model).model_validate(value)
        except ValidationError as err:
            errors.append(err)
    raise PayloadValidationError(members, errors)


def read_hook_payload(context: HookContext, schema: Schema) -> Any:
    return read_payload(context.payload, schema)
