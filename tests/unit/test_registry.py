"""Unit tests for the device registry."""

from datetime import datetime

import pytest

from homectl.core.errors import NotFoundError, OfflineError
from homectl.core.models import Connectivity, DeviceType
from homectl.core.registry import DeviceRegistry, default_param


@pytest.fixture
def registry():
    """Create an empty registry with a fixed clock."""
    return DeviceRegistry(clock=lambda: datetime(2024, 1, 1, 9, 30, 15))


class TestAddDevice:
    """Tests for device creation."""

    @pytest.mark.parametrize(
        "device_type,label,value,low,high",
        [
            ("light", "Brightness", 50, 0, 100),
            ("fan", "Speed", 3, 0, 5),
            ("ac", "Temperature", 24, 16, 30),
            ("thermostat", "Temperature", 22, 16, 30),
            ("other", "Level", 50, 0, 100),
            ("security", "Level", 50, 0, 100),
            ("toaster", "Level", 50, 0, 100),
        ],
    )
    def test_default_profiles(self, registry, device_type, label, value, low, high):
        """Test each type gets its default parameter profile."""
        device = registry.add_device("Thing", device_type, "online")
        param = device.adjustable

        assert (param.label, param.value, param.min, param.max) == (label, value, low, high)

    def test_security_parameter_disabled(self, registry):
        """Test security devices keep the Level profile but ignore it."""
        device = registry.add_device("Door Cam", "security", "online")

        assert device.adjustable.to_dict() == {
            "label": "Level", "value": 50, "min": 0, "max": 100,
        }
        assert device.has_adjustable is False
        assert default_param(DeviceType.SECURITY).label == "Level"

    def test_other_types_adjustable(self, registry):
        """Test every non-security type accepts adjustments."""
        for device_type in ["light", "fan", "ac", "thermostat", "other"]:
            device = registry.add_device("X", device_type, "online")
            assert device.has_adjustable is True

    def test_profiles_are_independent(self, registry):
        """Test devices do not share parameter instances."""
        first = registry.add_device("A", "light", "online")
        second = registry.add_device("B", "light", "online")

        registry.update_adjustable(first.id, 10)
        assert second.adjustable.value == 50

    def test_living_room_light(self, registry):
        """Test the living room light scenario."""
        device = registry.add_device("Living Room Light", "light", "online")

        assert device.type == DeviceType.LIGHT
        assert device.connectivity == Connectivity.ONLINE
        assert device.power_state is False
        assert device.adjustable.to_dict() == {
            "label": "Brightness", "value": 50, "min": 0, "max": 100,
        }

    def test_insertion_order_and_unique_ids(self, registry):
        """Test devices keep insertion order with increasing ids."""
        names = ["One", "Two", "Three"]
        created = [registry.add_device(n, "fan", "online") for n in names]

        assert [d.name for d in registry.get_all_devices()] == names
        assert len({d.id for d in created}) == 3

    def test_add_logs_activity(self, registry):
        """Test creation appends an activity entry."""
        registry.add_device("Main AC", "ac", "offline")
        assert registry.activity_log == ["[09:30:15] Added new ac: Main AC (offline)"]

    def test_ids_not_reused(self, registry):
        """Test ids are not reused after removal."""
        first = registry.add_device("A", "fan", "online")
        registry.remove_device(first.id)
        second = registry.add_device("B", "fan", "online")

        assert second.id != first.id


class TestRemoveDevice:
    """Tests for device removal."""

    def test_remove_existing(self, registry):
        """Test removing a present device."""
        a = registry.add_device("A", "light", "online")
        b = registry.add_device("B", "light", "online")
        c = registry.add_device("C", "light", "online")

        assert registry.remove_device(b.id) is True
        assert registry.get_device(b.id) is None
        assert [d.id for d in registry.get_all_devices()] == [a.id, c.id]
        assert registry.activity_log[0].endswith("Removed device: B")

    def test_remove_by_text_id(self, registry):
        """Test removal accepts textual ids."""
        device = registry.add_device("A", "light", "online")
        assert registry.remove_device(str(device.id)) is True

    def test_remove_missing(self, registry):
        """Test removing an absent id changes nothing and logs nothing."""
        registry.add_device("A", "light", "online")
        log_before = registry.activity_log

        assert registry.remove_device(999) is False
        assert registry.remove_device("not-an-id") is False
        assert len(registry.get_all_devices()) == 1
        assert registry.activity_log == log_before


class TestLookup:
    """Tests for device lookup."""

    def test_get_device(self, registry):
        """Test lookup by int and text id."""
        device = registry.add_device("A", "fan", "online")
        assert registry.get_device(device.id) is device
        assert registry.get_device(f" {device.id} ") is device

    def test_get_missing_device(self, registry):
        """Test missing ids return None."""
        assert registry.get_device(42) is None
        assert registry.get_device("garbage") is None

    def test_get_all_devices_is_read_only(self, registry):
        """Test returned collection cannot mutate the registry."""
        registry.add_device("A", "fan", "online")
        devices = registry.get_all_devices()

        assert isinstance(devices, tuple)
        assert len(registry.get_all_devices()) == 1


class TestRegistryActions:
    """Tests for registry-mediated toggle and adjust."""

    def test_toggle_then_clamp(self, registry):
        """Test toggling a light then setting brightness out of range."""
        device = registry.add_device("Living Room Light", "light", "online")

        toggled = registry.toggle_power(device.id)
        assert toggled.success is True
        assert toggled.power_state is True

        adjusted = registry.update_adjustable(device.id, 150)
        assert adjusted.success is True
        assert device.adjustable.value == 100
        assert "100" in adjusted.message
        assert registry.activity_log[0].endswith(
            "Living Room Light: Brightness set to 100"
        )
        assert registry.activity_log[1].endswith("Living Room Light: Device turned ON")

    def test_offline_thermostat(self, registry):
        """Test offline thermostat rejects changes and logs the failure."""
        device = registry.add_device("Main Thermostat", "thermostat", "offline")

        result = registry.toggle_power(device.id)
        assert result.success is False
        assert isinstance(result.error, OfflineError)
        assert device.power_state is False

        result = registry.update_adjustable(device.id, 28)
        assert result.success is False
        assert device.adjustable.value == 22
        assert registry.activity_log[0].endswith("Main Thermostat: Device is offline")

    @pytest.mark.parametrize(
        "device_type,requested,stored",
        [
            ("ac", 10, 16),
            ("ac", 35, 30),
            ("ac", 20, 20),
            ("thermostat", 15.5, 16),
            ("thermostat", 30, 30),
            ("fan", -1, 0),
            ("fan", 4, 4),
            ("fan", 9, 5),
        ],
    )
    def test_clamp_per_range(self, registry, device_type, requested, stored):
        """Test stored values clamp to each type's own range."""
        device = registry.add_device("Unit", device_type, "online")

        result = registry.update_adjustable(device.id, requested)
        assert result.success is True
        assert device.adjustable.value == stored
        assert result.message.endswith(f"set to {stored}")

    def test_security_adjust_rejected(self, registry):
        """Test security devices reject adjustments and log the failure."""
        device = registry.add_device("Door Cam", "security", "online")

        result = registry.update_adjustable(device.id, 80)
        assert result.success is False
        assert device.adjustable.value == 50
        assert registry.activity_log[0].endswith(
            "Door Cam: Device has no adjustable parameter"
        )

    def test_missing_device(self, registry):
        """Test actions on unknown ids fail without logging."""
        result = registry.toggle_power(5)
        assert result.success is False
        assert isinstance(result.error, NotFoundError)

        result = registry.update_adjustable("x", 5)
        assert isinstance(result.error, NotFoundError)
        assert registry.activity_log == []


class TestActivityLog:
    """Tests for the bounded activity log."""

    def test_newest_first(self, registry):
        """Test entries are ordered newest first."""
        registry.log_activity("first")
        registry.log_activity("second")

        assert registry.activity_log == ["[09:30:15] second", "[09:30:15] first"]

    def test_cap(self, registry):
        """Test only the 50 most recent entries are kept."""
        for i in range(60):
            registry.log_activity(f"entry {i}")

        log = registry.activity_log
        assert len(log) == 50
        assert log[0].endswith("entry 59")
        assert log[-1].endswith("entry 10")

    def test_custom_capacity(self):
        """Test capacity is configurable."""
        registry = DeviceRegistry(log_capacity=3)
        for i in range(5):
            registry.log_activity(str(i))

        assert len(registry.activity_log) == 3
        assert registry.log_capacity == 3

    def test_invalid_capacity(self):
        """Test zero capacity is rejected."""
        with pytest.raises(ValueError, match="log_capacity"):
            DeviceRegistry(log_capacity=0)


class TestSeedSampleDevices:
    """Tests for the sample device set."""

    def test_seed(self, registry):
        """Test sample devices are added in order."""
        registry.seed_sample_devices()

        devices = registry.get_all_devices()
        assert [d.name for d in devices] == [
            "Living Room Light", "Bedroom Fan", "Main AC", "Main Thermostat",
        ]
        assert devices[3].connectivity == Connectivity.OFFLINE
        assert registry.activity_log[0].endswith("System initialized successfully")
        assert len(registry.activity_log) == 5
