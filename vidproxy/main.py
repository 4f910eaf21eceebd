"""Main entry point for the vidproxy application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from typing import Any, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from vidproxy.core.command_handler import CommandHandler
from vidproxy.core.services.video_page_service import VideoPageService

# --- Domain Layer ---
from vidproxy.domain.exceptions import CatalogError
from vidproxy.domain.interfaces.video_service import VideoService

# --- Infrastructure Layer ---
# Config
from vidproxy.infrastructure.config.settings import (
    get_catalog_file,
    get_config,
    get_invalidation_policy,
    get_simulated_latency,
    is_cache_enabled,
    load_configuration,
)
# UI
from vidproxy.infrastructure.cli.display import ConsoleDisplay
# Backend
from vidproxy.infrastructure.video.catalog import load_catalog
from vidproxy.infrastructure.video.simulated_service import SimulatedVideoService
# Cache
from vidproxy.infrastructure.cache.caching_proxy import CachingVideoServiceProxy, InvalidationPolicy
# Monitoring
from vidproxy.infrastructure.monitoring.event_sinks import CompositeEventSink, LoggingEventSink, RecordingEventSink
from vidproxy.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    use_cache: Optional[bool] = None,
    policy: Optional[InvalidationPolicy] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. Command-line overrides take
    precedence over configuration values.

    Raises:
        CatalogError: If a configured catalog file cannot be loaded.
    """
    dependencies: Dict[str, Any] = {}

    # 1. Configuration and logging
    load_configuration()
    log_level = "DEBUG" if verbose else get_config('logging.level', 'WARNING')
    setup_logging(
        log_level=log_level,
        log_file=get_config('logging.file'),
        log_format=get_config('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        max_bytes=int(get_config('logging.max_bytes', 1_000_000)),
        backup_count=int(get_config('logging.backup_count', 3)),
    )
    logger.info("Initializing application dependencies...")

    # 2. Observability
    dependencies['event_recorder'] = RecordingEventSink()
    dependencies['event_sink'] = CompositeEventSink([
        LoggingEventSink(logging.getLogger("vidproxy.events")),
        dependencies['event_recorder'],
    ])

    # 3. Upstream backend
    catalog = load_catalog(get_catalog_file())
    dependencies['backend'] = SimulatedVideoService(
        catalog=catalog,
        event_sink=dependencies['event_sink'],
        simulated_latency=get_simulated_latency(),
    )

    # 4. Select the VideoService variant the consumer is bound to
    cache_enabled = is_cache_enabled() if use_cache is None else use_cache
    video_service: VideoService = dependencies['backend']
    dependencies['cache_proxy'] = None
    if cache_enabled:
        dependencies['cache_proxy'] = CachingVideoServiceProxy(
            delegate=dependencies['backend'],
            policy=policy or InvalidationPolicy(get_invalidation_policy()),
            event_sink=dependencies['event_sink'],
        )
        video_service = dependencies['cache_proxy']
    else:
        logger.info("Caching disabled; consumer bound directly to the backend.")
    dependencies['video_service'] = video_service

    # 5. Core services and command handler
    dependencies['ui'] = ConsoleDisplay()
    dependencies['page_service'] = VideoPageService(video_service=video_service)
    dependencies['command_handler'] = CommandHandler(
        page_service=dependencies['page_service'],
        ui=dependencies['ui'],
        cache_proxy=dependencies['cache_proxy'],
    )
    logger.info("All dependencies initialized successfully.")
    return dependencies

# --- Typer App Definition ---
app = typer.Typer(
    name="vidproxy",
    help="vidproxy: browse a simulated video service through a caching proxy.",
    add_completion=False,
)

RepeatOption = Annotated[
    int,
    typer.Option("--repeat", "-r", min=1, help="Run the lookup this many times (repeats are served from cache).")
]

def _handler(ctx: typer.Context) -> CommandHandler:
    return ctx.obj['command_handler']

def _finish(ctx: typer.Context, succeeded: bool) -> None:
    """Prints cache stats and converts a failed command into exit code 1."""
    _handler(ctx).handle_cache_stats()
    if not succeeded:
        raise typer.Exit(code=1)

# --- CLI Commands ---

@app.command(name="list")
def list_command(ctx: typer.Context, repeat: RepeatOption = 1):
    """List the videos available upstream."""
    _finish(ctx, _handler(ctx).handle_list(repeat))

@app.command()
def info(
    ctx: typer.Context,
    video_id: Annotated[str, typer.Argument(help="Id of the video.")],
    repeat: RepeatOption = 1,
):
    """Show the page for one video."""
    _finish(ctx, _handler(ctx).handle_info(video_id, repeat))

@app.command()
def download(
    ctx: typer.Context,
    video_id: Annotated[str, typer.Argument(help="Id of the video.")],
    repeat: RepeatOption = 1,
):
    """Download one video and print its size and checksum."""
    _finish(ctx, _handler(ctx).handle_download(video_id, repeat))

@app.command()
def demo(
    ctx: typer.Context,
    video_id: Annotated[str, typer.Argument(help="Id of the video.")] = "42",
):
    """Show cache hits, misses and a forced refresh for one video."""
    _finish(ctx, _handler(ctx).handle_demo(video_id))

@app.callback()
def main_callback(
    ctx: typer.Context,
    no_cache: Annotated[
        bool,
        typer.Option("--no-cache", help="Bind the consumer directly to the backend, bypassing the proxy.")
    ] = False,
    policy: Annotated[
        Optional[InvalidationPolicy],
        typer.Option("--policy", case_sensitive=False, help="Invalidation policy used by force_refresh().")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every cache event at DEBUG level.")
    ] = False,
):
    """Wires dependencies before any command runs."""
    try:
        ctx.obj = create_dependencies(
            use_cache=False if no_cache else None,
            policy=policy,
            verbose=verbose,
        )
    except CatalogError as e:
        logger.error(f"Failed to load catalog: {e}")
        ConsoleDisplay().display_error(f"Failed to load catalog: {e}")
        raise typer.Exit(code=1)

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
