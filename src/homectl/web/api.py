"""
REST API endpoints for the home controller.
"""

from flask import Blueprint, jsonify, request, g

from homectl import __version__
from homectl.core.display import device_icon, format_value, status_label
from homectl.core.errors import (
    NotFoundError,
    OfflineError,
    ValidationError,
    validate_device_name,
)
from homectl.core.models import ActionResult, Connectivity, DeviceType
from homectl.web.websocket import broadcast_changes

api_bp = Blueprint("api", __name__)


def device_to_dict(device) -> dict:
    """Convert Device model to JSON-serializable dict."""
    data = {
        "id": device.id,
        "name": device.name,
        "type": device.type.value,
        "power": device.power_label,
        "power_state": device.power_state,
        "connectivity": device.connectivity.value,
        "icon": device_icon(device.type),
        "status_label": status_label(device),
        "has_adjustable": device.adjustable_enabled,
        "adjustable": None,
    }

    if device.adjustable:
        data["adjustable"] = device.adjustable.to_dict()
        data["adjustable"]["display"] = format_value(device)

    return data


def _result_response(result: ActionResult):
    """Map an action outcome to a JSON response and status code."""
    if result.success:
        broadcast_changes(g.registry)
        return jsonify(result.to_dict())

    if isinstance(result.error, NotFoundError):
        return jsonify({"error": result.message}), 404

    # Rejections are still logged as activity
    broadcast_changes(g.registry)
    if isinstance(result.error, OfflineError):
        return jsonify(result.to_dict()), 409
    return jsonify(result.to_dict()), 400


# --- Device Endpoints ---

@api_bp.route("/devices", methods=["GET"])
def list_devices():
    """List all devices in display order."""
    devices = g.registry.get_all_devices()

    return jsonify({
        "devices": [device_to_dict(d) for d in devices],
        "count": len(devices),
    })


@api_bp.route("/devices/<device_id>", methods=["GET"])
def get_device(device_id: str):
    """Get device details."""
    device = g.registry.get_device(device_id)
    if not device:
        return jsonify({"error": f"Device '{device_id}' not found"}), 404

    return jsonify(device_to_dict(device))


@api_bp.route("/devices", methods=["POST"])
def create_device():
    """Create new device."""
    data = request.get_json(silent=True) or {}

    try:
        name = validate_device_name(data.get("name"))
    except ValidationError as e:
        return jsonify({"error": f"name is required: {e}"}), 400

    connectivity = data.get("connectivity", Connectivity.ONLINE.value)
    if connectivity not in [c.value for c in Connectivity]:
        return jsonify({"error": f"Invalid connectivity: {connectivity}"}), 400

    device = g.registry.add_device(
        name=name,
        device_type=data.get("type", DeviceType.OTHER.value),
        connectivity=connectivity,
    )
    broadcast_changes(g.registry)
    return jsonify(device_to_dict(device)), 201


@api_bp.route("/devices/<device_id>", methods=["DELETE"])
def delete_device(device_id: str):
    """Delete device."""
    device = g.registry.get_device(device_id)
    if not device:
        return jsonify({"error": f"Device '{device_id}' not found"}), 404

    g.registry.remove_device(device.id)
    broadcast_changes(g.registry)
    return jsonify({"message": f"Device '{device.name}' deleted"}), 200


@api_bp.route("/devices/<device_id>/power", methods=["POST"])
def toggle_power(device_id: str):
    """Toggle device power."""
    return _result_response(g.registry.toggle_power(device_id))


@api_bp.route("/devices/<device_id>/adjustable", methods=["PUT"])
def update_adjustable(device_id: str):
    """Set device adjustable parameter."""
    data = request.get_json(silent=True) or {}
    raw = data.get("value")

    if isinstance(raw, bool) or raw is None:
        return jsonify({"error": "value is required"}), 400
    try:
        value = int(raw) if isinstance(raw, str) else raw
        if not isinstance(value, (int, float)):
            raise ValueError(raw)
    except ValueError:
        return jsonify({"error": f"Invalid value: {raw}"}), 400

    return _result_response(g.registry.update_adjustable(device_id, value))


# --- Activity & Status Endpoints ---

@api_bp.route("/activity", methods=["GET"])
def get_activity():
    """Get activity log, newest first."""
    entries = g.registry.activity_log
    return jsonify({
        "entries": entries,
        "count": len(entries),
    })


@api_bp.route("/health", methods=["GET"])
def health_check():
    """System health check."""
    return jsonify({
        "status": "healthy",
        "version": __version__,
    })
