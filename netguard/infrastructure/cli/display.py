import logging
from typing import Any, List

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.box import ROUNDED
from rich.table import Table

from netguard.domain.interfaces.user_interface import UserInterface
from netguard.domain.models.network import NetworkStatus, RetryOutcome

logger = logging.getLogger(__name__)

def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[red]no[/red]"

def _renderable(data: Any) -> Any:
    """Structured data is pretty-printed as JSON; everything else as text."""
    if isinstance(data, (dict, list)):
        return JSON.from_data(data)
    return str(data)

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def display_output(self, output: Any, **kwargs: Any) -> None:
        title = kwargs.get("title")
        if title:
            self.console.print(Panel(_renderable(output), title=title, box=ROUNDED))
        else:
            self.console.print(_renderable(output))

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {error_message}")

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {warning_message}")

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(f"[blue]Info:[/blue] {info_message}")

    def display_status(self, status: NetworkStatus) -> None:
        table = Table(title="Network Status", box=ROUNDED, show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Connected", _yes_no(status.is_connected))
        table.add_row("Server reachable", _yes_no(status.is_server_reachable))
        table.add_row("Last checked", status.last_checked.isoformat(timespec="seconds"))
        self.console.print(table)

    def display_outcome(self, outcome: RetryOutcome) -> None:
        if outcome.is_offline:
            logger.debug("Rendering offline outcome")
            self.display_warning(f"Showing offline data. {outcome.error}")
            self.console.print(Panel(_renderable(outcome.data), title="Offline data", border_style="yellow", box=ROUNDED))
        else:
            self.console.print(Panel(_renderable(outcome.data), title="Response", border_style="green", box=ROUNDED))

    def display_backoff_schedule(self, delays_ms: List[int]) -> None:
        table = Table(title="Backoff Schedule", box=ROUNDED)
        table.add_column("Retry", justify="right")
        table.add_column("Wait (ms)", justify="right")
        for attempt, delay in enumerate(delays_ms):
            table.add_row(str(attempt + 1), str(delay))
        self.console.print(table)
