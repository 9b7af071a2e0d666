from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ClassVar, Dict, Iterator, List, Sequence, Type

from fastapi import HTTPException, status
from pydantic import BaseModel, ValidationError


class HookError(HTTPException):
    """Coded error a hook or operation raises for the host to report to its caller."""

    code: ClassVar[str] = "INTERNAL"
    message: ClassVar[str] = "internal error"
    default_status: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, **extensions: Any) -> None:
        self.extensions: Dict[str, Any] = extensions
        super().__init__(
            status_code=self.default_status,
            detail={"code": self.code, "message": self.message, "extensions": extensions},
        )


class FailedValidationError(HookError):
    """A field failed a business rule the handler checked itself."""

    code = "FAILED_VALIDATION"
    message = "invalid field"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, collection: str, field: str, message: str) -> None:
        super().__init__(collection=collection, field=field, message=message)


class PayloadValidationError(ValueError):
    """No schema alternative accepted a payload.

    ``errors`` holds one pydantic diagnostic per alternative, in the order
    they were tried.
    """

    def __init__(
        self,
        alternatives: Sequence[Type[BaseModel]],
        errors: List[ValidationError],
    ) -> None:
        self.alternatives = list(alternatives)
        self.errors = errors
        names = " | ".join(model.__name__ for model in self.alternatives)
        details = "\n".join(str(err) for err in errors)
        super().__init__(f"payload does not match {names}\n{details}")


@contextmanager
def report_errors(logger: Any, **fields: Any) -> Iterator[None]:
    """Log any exception raised in the block once, then re-raise it."""
    try:
        yield
    except Exception as err:
        logger.error(err, exc_info=err, extra=fields)
        raise
