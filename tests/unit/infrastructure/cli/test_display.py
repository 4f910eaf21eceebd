import pytest
from io import StringIO
from unittest.mock import MagicMock

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from vidproxy.infrastructure.cli.display import ConsoleDisplay

@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()

@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    return ConsoleDisplay(console=mock_console)

def test_display_output(console_display: ConsoleDisplay, mock_console: MagicMock):
    """Test that display_output prints a Panel wrapping Markdown."""
    console_display.display_output("Hello **World**", title="Greeting")
    mock_console.print.assert_called_once()
    args, _ = mock_console.print.call_args
    panel = args[0]
    assert isinstance(panel, Panel)
    assert isinstance(panel.renderable, Markdown)
    assert panel.renderable.markup == "Hello **World**"
    assert "Greeting" in panel.title

def test_display_error(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("Something went wrong")
    panel = mock_console.print.call_args.args[0]
    assert isinstance(panel, Panel)
    assert "Error" in panel.title
    assert panel.renderable.plain == "Something went wrong"

def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_info("Process completed")
    panel = mock_console.print.call_args.args[0]
    assert "Info" in panel.title
    assert panel.renderable.plain == "Process completed"

def test_display_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_table("Videos", ["ID", "Title"], [["42", "Demo"], ["intro", "Intro"]])
    table = mock_console.print.call_args.args[0]
    assert isinstance(table, Table)
    assert table.row_count == 2
    assert [c.header for c in table.columns] == ["ID", "Title"]

def test_rendered_text_reaches_console():
    buffer = StringIO()
    display = ConsoleDisplay(console=Console(file=buffer, width=100))
    display.display_stats({"hits": 3, "misses": 1})
    rendered = buffer.getvalue()
    assert "hits" in rendered
    assert "3" in rendered
    assert "misses" in rendered
