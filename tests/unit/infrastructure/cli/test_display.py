import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from netguard.domain.models.network import NetworkStatus, RetryOutcome
from netguard.infrastructure.cli.display import ConsoleDisplay

@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()

@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    return ConsoleDisplay(console=mock_console)

def test_display_error(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("Something went wrong")
    mock_console.print.assert_called_once_with("[bold red]Error:[/bold red] Something went wrong")

def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_info("Process completed")
    mock_console.print.assert_called_once_with("[blue]Info:[/blue] Process completed")

def test_display_warning(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_warning("Careful")
    mock_console.print.assert_called_once_with("[yellow]Warning:[/yellow] Careful")

def test_display_output_structured_data_as_json(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output({"a": 1})
    args, _ = mock_console.print.call_args
    assert isinstance(args[0], JSON)

def test_display_output_with_title_uses_panel(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output("plain", title="Result")
    args, _ = mock_console.print.call_args
    assert isinstance(args[0], Panel)

def test_display_status_renders_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    status = NetworkStatus(True, False, datetime(2024, 1, 1, tzinfo=timezone.utc))
    console_display.display_status(status)
    args, _ = mock_console.print.call_args
    assert isinstance(args[0], Table)
    assert args[0].row_count == 3

def test_display_online_outcome(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_outcome(RetryOutcome(data=[1, 2], is_offline=False))
    mock_console.print.assert_called_once()
    panel = mock_console.print.call_args.args[0]
    assert panel.title == "Response"

def test_display_offline_outcome_warns(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_outcome(RetryOutcome(data=[], is_offline=True, error="Server is down"))
    first_call, second_call = mock_console.print.call_args_list
    assert first_call.args[0] == "[yellow]Warning:[/yellow] Showing offline data. Server is down"
    assert second_call.args[0].title == "Offline data"

def test_display_backoff_schedule(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_backoff_schedule([1000, 2000, 4000])
    table = mock_console.print.call_args.args[0]
    assert isinstance(table, Table)
    assert table.row_count == 3
