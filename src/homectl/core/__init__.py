"""
Core components for the home controller.

Provides configuration, the device model and the device registry.
"""

from homectl.core.config import Config, load_config
from homectl.core.errors import (
    HomeCtlError,
    NotFoundError,
    OfflineError,
    ValidationError,
    validate_device_name,
)
from homectl.core.models import (
    ActionResult,
    AdjustableParam,
    Connectivity,
    Device,
    DeviceType,
    normalize_id,
)
from homectl.core.registry import DeviceRegistry, default_param

__all__ = [
    "Config",
    "load_config",
    "HomeCtlError",
    "NotFoundError",
    "OfflineError",
    "ValidationError",
    "validate_device_name",
    "ActionResult",
    "AdjustableParam",
    "Connectivity",
    "Device",
    "DeviceType",
    "normalize_id",
    "DeviceRegistry",
    "default_param",
]
