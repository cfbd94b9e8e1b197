"""
Flask application factory for the home controller web interface.
"""

import logging

from flask import Flask, g

from homectl.core.config import Config, load_config
from homectl.core.registry import DeviceRegistry

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    registry: DeviceRegistry | None = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Optional Config instance. If None, loads from default location.
        registry: Optional registry to serve. If None, a new one is built
            from the config and seeded with sample devices if enabled.

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    if config is None:
        config = load_config()

    if registry is None:
        registry = DeviceRegistry(log_capacity=config.registry.log_capacity)
        if config.registry.seed_samples:
            registry.seed_sample_devices()

    app.config["HOMECTL_CONFIG"] = config
    app.config["SECRET_KEY"] = "homectl-dev-key"  # Change in production
    app.extensions["homectl"] = registry

    from homectl.web.api import api_bp
    from homectl.web.websocket import init_socketio

    app.register_blueprint(api_bp, url_prefix="/api")
    init_socketio(app)

    @app.before_request
    def before_request():
        """Expose the registry for each request."""
        g.registry = app.extensions["homectl"]
        g.config = app.config["HOMECTL_CONFIG"]

    logger.debug(f"Created app with {len(registry.get_all_devices())} device(s)")
    return app
