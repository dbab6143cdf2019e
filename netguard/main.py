"""Main entry point for the netguard application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Coroutine, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from netguard.core.command_handler import CommandHandler

# --- Infrastructure Layer ---
# Config
from netguard.infrastructure.config.settings import (
    load_configuration, get_config, get_base_url, get_api_timeout, get_api_token,
    get_backoff_delays, get_health_timeout, get_health_path, get_max_retries,
)
# UI
from netguard.infrastructure.cli.display import ConsoleDisplay
# HTTP
from netguard.infrastructure.http.api_client import ApiClient
# Network
from netguard.infrastructure.network.status_tracker import NetworkStatusTracker
from netguard.infrastructure.network.health_prober import HealthProber
# Resilience
from netguard.infrastructure.resilience.backoff import BackoffScheduler
from netguard.infrastructure.resilience.request_executor import RequestExecutor
# Monitoring
from netguard.infrastructure.monitoring.logger_setup import configure_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.
    """
    dependencies: Dict[str, Any] = {}
    try:
        # 1. Load Configuration First
        load_configuration()
        configure_logging(
            level=get_config('logging.level'),
            log_format=get_config('logging.format'),
            log_file=get_config('logging.file'),
        )
        logger.info("Configuration and logging initialized.")

        # 2. Instantiate Infrastructure Adapters & Services
        dependencies['ui'] = ConsoleDisplay()
        dependencies['tracker'] = NetworkStatusTracker()
        dependencies['prober'] = HealthProber(
            tracker=dependencies['tracker'],
            timeout_s=get_health_timeout(),
            health_path=get_health_path(),
        )
        base_delay_ms, max_delay_ms = get_backoff_delays()
        dependencies['executor'] = RequestExecutor(
            scheduler=BackoffScheduler(base_delay_ms=base_delay_ms, max_delay_ms=max_delay_ms),
        )
        base_url, api_timeout_s, api_token = get_base_url(), get_api_timeout(), get_api_token()
        # Opened only by commands that talk to the backend, closed when they finish.
        dependencies['api_client_factory'] = lambda: ApiClient(
            base_url=base_url, timeout_s=api_timeout_s, token=api_token,
        )

        # 3. Instantiate Command Handler
        dependencies['command_handler'] = CommandHandler(
            ui=dependencies['ui'],
            tracker=dependencies['tracker'],
            prober=dependencies['prober'],
            executor=dependencies['executor'],
            api_client_factory=dependencies['api_client_factory'],
            default_base_url=base_url,
        )
        logger.info("All dependencies initialized successfully.")
        return dependencies

    except Exception as e:
        logger.error(f"Fatal Error during application initialization: {e}", exc_info=True)
        if dependencies.get('ui'):
            dependencies['ui'].display_error(f"Application Initialization Failed: {e}")
        else:
            print(f"FATAL ERROR during initialization: {e}", file=sys.stderr)
        sys.exit(1)

_dependencies: Optional[Dict[str, Any]] = None

def get_dependencies() -> Dict[str, Any]:
    """Returns the wired-up dependencies, creating them on first use."""
    global _dependencies
    if _dependencies is None:
        _dependencies = create_dependencies()
    return _dependencies

def get_handler() -> CommandHandler:
    return get_dependencies()['command_handler']

# --- Typer App Definition ---
app = typer.Typer(
    name="netguard",
    help="netguard: retry, offline fallback and health probing for backend requests.",
    add_completion=False,
)

# --- Helper for Running Async Commands ---
def run_async(coro: Coroutine[Any, Any, Any]) -> Any:
    """Runs an async command handler from a sync Typer command."""
    try:
        return asyncio.run(coro)
    except Exception as e:
        logger.error(f"Error executing async command: {e}", exc_info=True)
        get_dependencies()['ui'].display_error(f"Command execution failed: {e}")
        raise typer.Exit(code=1)

def _parse_fallback(raw: Optional[str]) -> Any:
    """Fallback values are given as JSON; anything that is not valid JSON is kept as a string."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw

# --- CLI Commands ---

BaseUrlArgument = Annotated[
    Optional[str],
    typer.Argument(help="Server root URL. Uses api.base_url from configuration if omitted.")
]

@app.command()
def probe(base_url: BaseUrlArgument = None):
    """Run one health check against <base_url>/health."""
    healthy = run_async(get_handler().handle_probe(base_url))
    if not healthy:
        raise typer.Exit(code=1)

@app.command()
def watch(
    base_url: BaseUrlArgument = None,
    interval: Annotated[float, typer.Option("--interval", "-n", min=0.0, help="Seconds between probes.")] = 30.0,
    count: Annotated[int, typer.Option("--count", "-c", min=1, help="Number of probes to run.")] = 10,
):
    """Probe the server repeatedly and report reachability."""
    run_async(get_handler().handle_watch(base_url, interval, count))

@app.command()
def fetch(
    path: Annotated[str, typer.Argument(help="Backend path to GET, e.g. /api/posts.")],
    fallback: Annotated[Optional[str], typer.Option("--fallback", "-f", help="JSON value returned when offline.")] = None,
    max_retries: Annotated[Optional[int], typer.Option("--max-retries", "-r", min=0, help="Retry budget.")] = None,
):
    """GET a backend path with retries, falling back to --fallback when the server is down."""
    if max_retries is None:
        max_retries = get_max_retries()
    run_async(get_handler().handle_fetch(path, _parse_fallback(fallback), max_retries))

@app.command()
def backoff(
    attempts: Annotated[int, typer.Option("--attempts", "-a", min=0, help="Number of retries to show.")] = 5,
):
    """Print the wait before each retry attempt."""
    get_handler().handle_backoff(attempts)

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
