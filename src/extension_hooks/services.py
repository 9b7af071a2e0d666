from __future__ import annotations

from typing import Any

from .models import AccountableContext, Accountability, ExtensionContext


def _service_class(context: ExtensionContext, name: str) -> Any:
    try:
        return context.services[name]
    except KeyError:
        raise KeyError(f"host did not provide the {name} service") from None


async def _schema(context: ExtensionContext) -> Any:
    if context.get_schema is None:
        raise RuntimeError("context has no get_schema accessor")
    return await context.get_schema()


async def create_items_service(context: ExtensionContext, collection: str) -> Any:
    """Items service with no accountability, i.e. system-level access."""
    cls = _service_class(context, "ItemsService")
    return cls(collection, schema=await _schema(context), knex=context.database)


async def create_accountable_items_service(
    context: AccountableContext, collection: str
) -> Any:
    """Items service acting as whoever triggered the hook or operation."""
    cls = _service_class(context, "ItemsService")
    return cls(
        collection,
        schema=await _schema(context),
        knex=context.database,
        accountability=context.accountability,
    )


async def create_operation_items_service(
    context: ExtensionContext, collection: str, operation: str
) -> Any:
    """Items service acting as an admin on behalf of ``operation``."""
    cls = _service_class(context, "ItemsService")
    return cls(
        collection,
        schema=await _schema(context),
        knex=context.database,
        accountability=Accountability.for_operation(operation),
    )


async def get_files_service(context: ExtensionContext) -> Any:
    return _service_class(context, "FilesService")(schema=await _schema(context))


async def get_folders_service(context: ExtensionContext) -> Any:
    return _service_class(context, "FoldersService")(schema=await _schema(context))


async def get_notifications_service(context: ExtensionContext) -> Any:
    return _service_class(context, "NotificationsService")(schema=await _schema(context))


async def get_translations_service(context: ExtensionContext) -> Any:
    return _service_class(context, "TranslationsService")(schema=await _schema(context))
