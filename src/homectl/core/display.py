"""
Display helpers shared by the CLI and web surfaces.
"""

from homectl.core.models import Device, DeviceType

DEVICE_ICONS = {
    DeviceType.LIGHT: "💡",
    DeviceType.FAN: "🌀",
    DeviceType.AC: "❄️",
    DeviceType.THERMOSTAT: "🌡️",
    DeviceType.SECURITY: "📹",
}
DEFAULT_ICON = "📱"


def device_icon(device_type: DeviceType) -> str:
    """Get icon for a device type."""
    return DEVICE_ICONS.get(device_type, DEFAULT_ICON)


def unit_for(label: str) -> str:
    """Get unit suffix for a parameter label."""
    return "°C" if label == "Temperature" else ""


def format_value(device: Device) -> str:
    """Format the adjustable value with its unit, or '-' if disabled."""
    if not device.adjustable_enabled:
        return "-"
    return f"{device.adjustable.value}{unit_for(device.adjustable.label)}"


def status_label(device: Device) -> str:
    """Get the card status label (OFFLINE overrides power)."""
    if not device.is_online:
        return "OFFLINE"
    return device.power_label
