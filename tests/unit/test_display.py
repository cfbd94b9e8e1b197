"""Unit tests for display helpers."""

from homectl.core.display import device_icon, format_value, status_label
from homectl.core.models import DeviceType
from homectl.core.registry import DeviceRegistry


class TestDisplay:
    """Tests for display formatting."""

    def test_icons(self):
        """Test icons per type with a generic fallback."""
        assert device_icon(DeviceType.LIGHT) == "💡"
        assert device_icon(DeviceType.OTHER) == "📱"

    def test_temperature_unit(self):
        """Test temperature values carry a unit."""
        registry = DeviceRegistry()
        ac = registry.add_device("AC", "ac", "online")
        fan = registry.add_device("Fan", "fan", "online")
        cam = registry.add_device("Cam", "security", "online")

        assert format_value(ac) == "24°C"
        assert format_value(fan) == "3"
        assert format_value(cam) == "-"

    def test_status_label(self):
        """Test offline overrides power label."""
        registry = DeviceRegistry()
        online = registry.add_device("A", "light", "online")
        offline = registry.add_device("B", "light", "offline")

        assert status_label(online) == "OFF"
        registry.toggle_power(online.id)
        assert status_label(online) == "ON"
        assert status_label(offline) == "OFFLINE"
