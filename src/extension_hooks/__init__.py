from .errors import FailedValidationError, HookError, PayloadValidationError, report_errors
from .hooks import HookConfig, HookRegistrar, RawRegister, define_hook
from .models import (
    Accountability,
    AccountableContext,
    ExtensionContext,
    HookContext,
    Meta,
    OperationContext,
    merge_context,
)
from .operations import define_operation, read_trigger_keys, read_trigger_payload
from .payload import passthrough, read_hook_payload, read_payload
from .services import (
    create_accountable_items_service,
    create_items_service,
    create_operation_items_service,
    get_files_service,
    get_folders_service,
    get_notifications_service,
    get_translations_service,
)

__all__ = [
    "Accountability",
    "AccountableContext",
    "ExtensionContext",
    "FailedValidationError",
    "HookConfig",
    "HookContext",
    "HookError",
    "HookRegistrar",
    "Meta",
    "OperationContext",
    "PayloadValidationError",
    "RawRegister",
    "create_accountable_items_service",
    "create_items_service",
    "create_operation_items_service",
    "define_hook",
    "define_operation",
    "get_files_service",
    "get_folders_service",
    "get_notifications_service",
    "get_translations_service",
    "merge_context",
    "passthrough",
    "read_hook_payload",
    "read_payload",
    "read_trigger_keys",
    "read_trigger_payload",
    "report_errors",
]
