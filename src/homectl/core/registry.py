"""
Device registry for the home controller.

Owns the ordered device collection and the activity log, and is the
only place device state is changed from.
"""

import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, Union

from homectl.core.errors import NotFoundError
from homectl.core.models import (
    ActionResult,
    AdjustableParam,
    Connectivity,
    Device,
    DeviceType,
    Number,
    normalize_id,
)

logger = logging.getLogger(__name__)

DEFAULT_LOG_CAPACITY = 50

# label, default, min, max
PARAM_PROFILES: dict[DeviceType, tuple[str, Number, Number, Number]] = {
    DeviceType.LIGHT: ("Brightness", 50, 0, 100),
    DeviceType.FAN: ("Speed", 3, 0, 5),
    DeviceType.AC: ("Temperature", 24, 16, 30),
    DeviceType.THERMOSTAT: ("Temperature", 22, 16, 30),
}
DEFAULT_PROFILE = ("Level", 50, 0, 100)

# Carry the default profile but never accept adjustments
NON_ADJUSTABLE_TYPES = {DeviceType.SECURITY}

SAMPLE_DEVICES = [
    ("Living Room Light", DeviceType.LIGHT, Connectivity.ONLINE),
    ("Bedroom Fan", DeviceType.FAN, Connectivity.ONLINE),
    ("Main AC", DeviceType.AC, Connectivity.ONLINE),
    ("Main Thermostat", DeviceType.THERMOSTAT, Connectivity.OFFLINE),
]


def default_param(device_type: DeviceType) -> AdjustableParam:
    """
    Build the default adjustable parameter for a device type.

    Security and unlisted types get the generic Level profile.
    """
    label, value, low, high = PARAM_PROFILES.get(device_type, DEFAULT_PROFILE)
    return AdjustableParam(label=label, value=value, min=low, max=high)


@dataclass
class ActivityEntry:
    """One line of the activity log."""

    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self) -> str:
        """Format entry with a locale time-of-day stamp."""
        return f"[{self.timestamp.strftime('%X')}] {self.message}"


class DeviceRegistry:
    """Owner of the device collection and activity log."""

    def __init__(
        self,
        log_capacity: int = DEFAULT_LOG_CAPACITY,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize an empty registry.

        Args:
            log_capacity: Maximum number of activity entries retained
            clock: Source of timestamps for activity entries
        """
        if log_capacity < 1:
            raise ValueError("log_capacity must be at least 1")
        self._devices: list[Device] = []
        self._log: deque[ActivityEntry] = deque(maxlen=log_capacity)
        self._ids = itertools.count(1)
        self._clock = clock

    @property
    def log_capacity(self) -> int:
        return self._log.maxlen

    # --- Device Operations ---

    def add_device(
        self,
        name: str,
        device_type: Union[DeviceType, str],
        connectivity: Union[Connectivity, str] = Connectivity.ONLINE,
    ) -> Device:
        """
        Create a device and append it to the collection.

        The name is trusted; callers validate it beforehand.

        Args:
            name: Display label
            device_type: Device type (unknown values become OTHER)
            connectivity: Initial connectivity, fixed for the device

        Returns:
            Created Device instance
        """
        dtype = DeviceType.from_value(device_type)
        conn = Connectivity.from_value(connectivity)

        device = Device(
            id=next(self._ids),
            name=name,
            type=dtype,
            connectivity=conn,
            adjustable=default_param(dtype),
            has_adjustable=dtype not in NON_ADJUSTABLE_TYPES,
        )
        self._devices.append(device)

        logger.info(f"Added device {device.id}: {name} ({dtype.value}, {conn.value})")
        self.log_activity(f"Added new {dtype.value}: {name} ({conn.value})")
        return device

    def remove_device(self, device_id: Any) -> bool:
        """
        Remove a device.

        Returns:
            True if removed, False if not found
        """
        parsed = normalize_id(device_id)
        for index, device in enumerate(self._devices):
            if device.id == parsed:
                del self._devices[index]
                logger.info(f"Removed device {device.id}: {device.name}")
                self.log_activity(f"Removed device: {device.name}")
                return True

        logger.debug(f"Remove requested for unknown device: {device_id!r}")
        return False

    def get_device(self, device_id: Any) -> Optional[Device]:
        """Get device by id, accepting textual ids."""
        parsed = normalize_id(device_id)
        if parsed is None:
            return None
        for device in self._devices:
            if device.id == parsed:
                return device
        return None

    def get_all_devices(self) -> tuple[Device, ...]:
        """Get all devices in insertion (display) order."""
        return tuple(self._devices)

    def toggle_power(self, device_id: Any) -> ActionResult:
        """
        Toggle a device's power and record the outcome.

        Returns:
            The device's outcome, or a failure carrying NotFoundError
        """
        device = self.get_device(device_id)
        if device is None:
            return ActionResult.fail(NotFoundError(device_id))

        result = device.toggle_power()
        self._record(device, result)
        return result

    def update_adjustable(self, device_id: Any, value: Number) -> ActionResult:
        """
        Set a device's adjustable parameter and record the outcome.

        Returns:
            The device's outcome, or a failure carrying NotFoundError
        """
        device = self.get_device(device_id)
        if device is None:
            return ActionResult.fail(NotFoundError(device_id))

        result = device.update_adjustable(value)
        self._record(device, result)
        return result

    def _record(self, device: Device, result: ActionResult) -> None:
        if result.success:
            logger.info(f"{device.name}: {result.message}")
        else:
            logger.warning(f"{device.name}: {result.message}")
        self.log_activity(f"{device.name}: {result.message}")

    def seed_sample_devices(self) -> list[Device]:
        """Add the demonstration device set."""
        devices = [
            self.add_device(name, dtype, conn)
            for name, dtype, conn in SAMPLE_DEVICES
        ]
        self.log_activity("System initialized successfully")
        return devices

    # --- Activity Log ---

    def log_activity(self, message: str) -> None:
        """Push a timestamped entry to the front of the activity log."""
        # deque(maxlen) drops from the right on appendleft
        self._log.appendleft(ActivityEntry(message, timestamp=self._clock()))

    @property
    def activity_log(self) -> list[str]:
        """Activity entries, newest first."""
        return [entry.format() for entry in self._log]
