"""
Error types for the device core.

The core never raises these for expected conditions. They are carried
inside failure outcomes so callers can inspect what went wrong.
"""


class HomeCtlError(Exception):
    """Base class for homectl errors."""


class OfflineError(HomeCtlError):
    """State change attempted on a disconnected device."""

    def __init__(self, message: str = "Device is offline"):
        super().__init__(message)


class NotFoundError(HomeCtlError):
    """Operation referenced an id absent from the registry."""

    def __init__(self, device_id=None):
        self.device_id = device_id
        super().__init__(f"Device not found: {device_id}")


class ValidationError(HomeCtlError):
    """Caller-side input rejected before reaching the registry."""


def validate_device_name(name) -> str:
    """
    Validate and normalize a user-supplied device name.

    Args:
        name: Raw name from a form, CLI argument or JSON body

    Returns:
        Name with surrounding whitespace removed

    Raises:
        ValidationError: If the name is missing or blank
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Please enter a device name")
    return name.strip()
