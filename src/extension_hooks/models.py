from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .log import get_logger
from .settings import get_settings


class Accountability(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    user: Optional[str] = None
    admin: bool = False
    app: bool = False
    ip: Optional[str] = None
    origin: Optional[str] = None

    @classmethod
    def for_operation(cls, operation: str) -> "Accountability":
        """Admin accountability tagged with the operation it acts for."""
        return cls(
            admin=True,
            app=False,
            origin=get_settings().operation_origin(operation),
        )


class Meta(BaseModel):
    """Event metadata handed to filter and action handlers.

    Fields the host sends beyond ``event``, ``collection`` and ``keys`` are
    kept as extras (``meta.model_extra``).
    """

    model_config = ConfigDict(extra="allow")

    event: str = ""
    collection: str = ""
    keys: List[Any] = Field(default_factory=list)


class ExtensionContext(BaseModel):
    """Base context the host supplies once per registration.

    ``database`` is whatever handle the host's services take, typically an
    SQLAlchemy ``AsyncEngine`` or connection.
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    services: Mapping[str, Any] = Field(default_factory=dict)
    database: Any = None
    get_schema: Optional[Callable[[], Awaitable[Any]]] = Field(
        default=None, alias="getSchema"
    )
    env: Dict[str, Any] = Field(default_factory=dict)
    logger: Any = Field(default_factory=get_logger)


class AccountableContext(ExtensionContext):
    accountability: Optional[Accountability] = None


class HookContext(AccountableContext):
    schema_overview: Any = Field(default=None, alias="schema")
    payload: Any = Field(default=None, alias="_payload")


class OperationContext(AccountableContext):
    data: Dict[str, Any] = Field(default_factory=dict)


def context_fields(context: Union[BaseModel, Mapping[str, Any], None]) -> Dict[str, Any]:
    if context is None:
        return {}
    return dict(context)


def merge_context(
    base: ExtensionContext,
    overlay: Union[BaseModel, Mapping[str, Any], None],
    payload: Any,
) -> HookContext:
    """Layer per-call fields and the payload over a copy of the base context."""
    fields = {**context_fields(base), **context_fields(overlay), "_payload": payload}
    return HookContext.model_validate(fields)
