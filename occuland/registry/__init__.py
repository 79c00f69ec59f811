# Registry package
from .asset_registry import AssetRegistry
from .land import LandRegistry
from .tokens import TokenRegistry
from .roles import AccessControl, Role
from .receipts import Receipt
from .logger import EventLogger, get_event_logger, reset_event_loggers
from .constants import ZERO_ADDRESS
from .errors import (
    ErrorCategory, ErrorCode, ErrorResponse,
    RegistryError, Unauthorized, NotFound, AlreadyExists, InvalidArgument, IndexOutOfRange,
)

__all__ = [
    "AssetRegistry",
    "LandRegistry",
    "TokenRegistry",
    "AccessControl", "Role",
    "Receipt",
    "EventLogger", "get_event_logger", "reset_event_loggers",
    "ZERO_ADDRESS",
    "ErrorCategory", "ErrorCode", "ErrorResponse",
    "RegistryError", "Unauthorized", "NotFound", "AlreadyExists", "InvalidArgument",
    "IndexOutOfRange",
]
