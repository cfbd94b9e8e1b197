"""
Command-line interface for the home controller.

Provides commands for inspecting device profiles, running a scripted
demonstration session and serving the web interface.
"""

import logging
import sys
from pathlib import Path

import click

from homectl import __version__
from homectl.core.config import (
    DEFAULT_CONFIG_FILE,
    Config,
    get_default_config,
    load_config,
    save_config,
)
from homectl.core.display import device_icon, format_value, status_label
from homectl.core.models import DeviceType
from homectl.core.registry import NON_ADJUSTABLE_TYPES, DeviceRegistry, default_param

logger = logging.getLogger(__name__)


def _build_registry(ctx: click.Context, seed: bool) -> DeviceRegistry:
    """Create a registry from the configured settings."""
    config: Config = ctx.obj["config"]
    registry = DeviceRegistry(log_capacity=config.registry.log_capacity)
    if seed:
        registry.seed_sample_devices()
    return registry


def _print_devices(registry: DeviceRegistry) -> None:
    """Print device table."""
    devices = registry.get_all_devices()
    if not devices:
        click.echo("No devices added yet.")
        return

    click.echo(f"{'ID':<4} {'NAME':<20} {'TYPE':<14} {'STATUS':<9} {'SETTING':<20}")
    click.echo("-" * 70)

    for device in devices:
        kind = f"{device_icon(device.type)} {device.type.value}"
        setting = "-"
        if device.adjustable_enabled:
            setting = f"{device.adjustable.label}: {format_value(device)}"
        click.echo(
            f"{device.id:<4} {device.name:<20} {kind:<14} "
            f"{status_label(device):<9} {setting:<20}"
        )


def _print_activity(registry: DeviceRegistry) -> None:
    """Print activity log, newest first."""
    click.echo("Activity Log:")
    for entry in registry.activity_log:
        click.echo(f"  {entry}")


@click.group()
@click.version_option(version=__version__, prog_name="homectl")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "-c", "--config", "config_path", type=click.Path(exists=True, path_type=Path),
    help="Path to config file"
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Smart Home Controller - Simulate and control home devices."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = load_config(config_path)

    level = "DEBUG" if verbose else ctx.obj["config"].log_level
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command("profiles")
def profiles_cmd() -> None:
    """List default adjustable parameters per device type."""
    click.echo(
        f"{'TYPE':<12} {'LABEL':<12} {'DEFAULT':<8} {'MIN':<6} {'MAX':<6} {'ADJUSTABLE':<10}"
    )
    click.echo("-" * 57)

    for device_type in DeviceType:
        param = default_param(device_type)
        adjustable = "no" if device_type in NON_ADJUSTABLE_TYPES else "yes"
        click.echo(
            f"{device_type.value:<12} {param.label:<12} {param.value:<8} "
            f"{param.min:<6} {param.max:<6} {adjustable:<10}"
        )


@main.command("init")
@click.argument(
    "path", required=False, type=click.Path(dir_okay=False, path_type=Path)
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
def init_cmd(path: Path | None, force: bool) -> None:
    """Write a default config file (default: ~/.config/homectl/config.yaml)."""
    path = path or DEFAULT_CONFIG_FILE
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    save_config(get_default_config(), path)
    click.echo(f"Wrote default config to {path}")


@main.command("status")
@click.pass_context
def status_cmd(ctx: click.Context) -> None:
    """Show the configured starting device set."""
    config: Config = ctx.obj["config"]
    registry = _build_registry(ctx, seed=config.registry.seed_samples)
    _print_devices(registry)


@main.command("demo")
@click.option("--no-seed", is_flag=True, help="Start from an empty registry")
@click.pass_context
def demo_cmd(ctx: click.Context, no_seed: bool) -> None:
    """Run a scripted session against a fresh registry."""
    verbose = ctx.obj.get("verbose", False)
    registry = _build_registry(ctx, seed=not no_seed)

    light = registry.add_device("Porch Light", DeviceType.LIGHT, "online")
    camera = registry.add_device("Front Door Camera", DeviceType.SECURITY, "online")

    steps = [
        ("toggle", light.id, None),
        ("adjust", light.id, 150),
        ("toggle", camera.id, None),
    ]
    for device in registry.get_all_devices():
        if not device.is_online:
            steps.append(("toggle", device.id, None))

    for action, device_id, value in steps:
        if action == "toggle":
            result = registry.toggle_power(device_id)
        else:
            result = registry.update_adjustable(device_id, value)
        if verbose or not result.success:
            marker = "ok" if result.success else "failed"
            click.echo(f"[{marker}] {registry.get_device(device_id).name}: {result.message}")

    _print_devices(registry)
    click.echo()
    _print_activity(registry)


@main.command("serve")
@click.option("--host", "-h", help="Bind address (default from config)")
@click.option("--port", "-p", type=int, help="Port (default from config)")
@click.option("--debug", is_flag=True, help="Enable Flask debug mode")
@click.pass_context
def serve_cmd(ctx: click.Context, host: str | None, port: int | None, debug: bool) -> None:
    """Serve the REST API and device update channel."""
    from homectl.web import create_app

    config: Config = ctx.obj["config"]
    host = host or config.web.host
    port = port or config.web.port

    app = create_app(config)
    socketio = app.extensions["socketio"]
    logger.debug(f"Starting server on {host}:{port} (debug={debug})")

    click.echo(f"Serving homectl on http://{host}:{port}")
    try:
        socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
