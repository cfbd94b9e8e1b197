"""
Web interface for the home controller.

Provides a REST API and a SocketIO push channel for device updates.
"""

from homectl.web.app import create_app

__all__ = ["create_app"]
