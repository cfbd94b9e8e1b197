"""
Data models for the device core.

Defines the device dataclass, its optional adjustable parameter and the
outcome type returned by state-changing operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from homectl.core.errors import HomeCtlError, OfflineError

Number = Union[int, float]


class DeviceType(Enum):
    """Device type values."""

    LIGHT = "light"
    FAN = "fan"
    AC = "ac"
    THERMOSTAT = "thermostat"
    SECURITY = "security"
    OTHER = "other"

    @classmethod
    def from_value(cls, value: Union["DeviceType", str, None]) -> "DeviceType":
        """Parse a type, falling back to OTHER for anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class Connectivity(Enum):
    """Device connectivity values."""

    ONLINE = "online"
    OFFLINE = "offline"

    @classmethod
    def from_value(
        cls, value: Union["Connectivity", str, None]
    ) -> "Connectivity":
        """Parse a connectivity value, falling back to ONLINE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.ONLINE


@dataclass
class AdjustableParam:
    """A single bounded numeric setting (brightness, speed, temperature)."""

    label: str
    value: Number
    min: Number
    max: Number

    def clamp(self, requested: Number) -> Number:
        """Clamp a requested value into [min, max]."""
        return max(self.min, min(self.max, requested))

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "value": self.value,
            "min": self.min,
            "max": self.max,
        }


@dataclass
class ActionResult:
    """Outcome of a state-changing operation."""

    success: bool
    message: str
    power_state: Optional[bool] = None
    value: Optional[Number] = None
    error: Optional[HomeCtlError] = None

    @classmethod
    def ok(cls, message: str, **kwargs) -> "ActionResult":
        return cls(success=True, message=message, **kwargs)

    @classmethod
    def fail(cls, error: HomeCtlError) -> "ActionResult":
        return cls(success=False, message=str(error), error=error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
        }
        if self.power_state is not None:
            data["power_state"] = self.power_state
        if self.value is not None:
            data["value"] = self.value
        if self.error is not None:
            data["error"] = type(self.error).__name__
        return data


@dataclass
class Device:
    """
    Simulated appliance.

    Devices are created by DeviceRegistry.add_device and should not be
    constructed directly outside tests. Connectivity is fixed for the
    lifetime of the instance. When has_adjustable is False the parameter
    is kept but ignored.
    """

    id: int
    name: str
    type: DeviceType = DeviceType.OTHER
    connectivity: Connectivity = Connectivity.ONLINE
    power_state: bool = False
    adjustable: Optional[AdjustableParam] = field(default=None)
    has_adjustable: bool = True

    @property
    def is_online(self) -> bool:
        return self.connectivity == Connectivity.ONLINE

    @property
    def adjustable_enabled(self) -> bool:
        return self.has_adjustable and self.adjustable is not None

    @property
    def power_label(self) -> str:
        return "ON" if self.power_state else "OFF"

    def toggle_power(self) -> ActionResult:
        """
        Flip the power state.

        Returns:
            Success outcome with the new state, or a failure outcome
            carrying OfflineError when the device is disconnected
        """
        if not self.is_online:
            return ActionResult.fail(OfflineError())

        self.power_state = not self.power_state
        return ActionResult.ok(
            f"Device turned {self.power_label}",
            power_state=self.power_state,
        )

    def update_adjustable(self, requested_value: Number) -> ActionResult:
        """
        Write the adjustable parameter, clamping into its range.

        Args:
            requested_value: Raw value from the caller

        Returns:
            Success outcome naming the stored (clamped) value, or a
            failure outcome if the device is offline or has no parameter
        """
        if not self.is_online:
            return ActionResult.fail(OfflineError())

        if not self.adjustable_enabled:
            return ActionResult.fail(
                HomeCtlError("Device has no adjustable parameter")
            )

        clamped = self.adjustable.clamp(requested_value)
        self.adjustable.value = clamped
        return ActionResult.ok(
            f"{self.adjustable.label} set to {clamped}",
            value=clamped,
        )

    def get_status(self) -> dict[str, str]:
        """Get a read-only status summary."""
        return {
            "name": self.name,
            "type": self.type.value,
            "power": self.power_label,
            "connectivity": self.connectivity.value,
        }


def normalize_id(raw: Any) -> Optional[int]:
    """
    Normalize an identifier arriving from text input.

    Returns:
        Integer id, or None if the value cannot be an id
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None
