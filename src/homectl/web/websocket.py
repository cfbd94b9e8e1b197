"""
SocketIO push channel for device updates.

Connected browsers receive the full device list after every change so
they can redraw without polling.
"""

import logging

from flask import current_app, request
from flask_socketio import SocketIO, emit

from homectl.core.registry import DeviceRegistry

logger = logging.getLogger(__name__)

NAMESPACE = "/devices"


def init_socketio(app, **kwargs) -> SocketIO:
    """Initialize SocketIO with Flask app."""
    sio = SocketIO(app, **kwargs)
    register_handlers(sio)
    return sio


def register_handlers(sio: SocketIO):
    """Register SocketIO event handlers."""

    @sio.on("connect", namespace=NAMESPACE)
    def handle_connect():
        """Send the current device list to a new client."""
        logger.info(f"WebSocket client connected: {request.sid}")
        emit("devices_changed", _devices_payload(_registry()))

    @sio.on("disconnect", namespace=NAMESPACE)
    def handle_disconnect():
        logger.info(f"WebSocket client disconnected: {request.sid}")

    @sio.on("refresh", namespace=NAMESPACE)
    def handle_refresh():
        """Re-send the device list on request."""
        emit("devices_changed", _devices_payload(_registry()))


def _registry() -> DeviceRegistry:
    return current_app.extensions["homectl"]


def _devices_payload(registry: DeviceRegistry) -> dict:
    from homectl.web.api import device_to_dict

    devices = registry.get_all_devices()
    return {
        "devices": [device_to_dict(d) for d in devices],
        "count": len(devices),
    }


def broadcast_changes(registry: DeviceRegistry) -> None:
    """Push the device list and newest activity entry to all clients."""
    sio = current_app.extensions.get("socketio")
    if sio is None:
        return

    sio.emit("devices_changed", _devices_payload(registry), namespace=NAMESPACE)
    log = registry.activity_log
    if log:
        sio.emit("activity", {"entry": log[0]}, namespace=NAMESPACE)
