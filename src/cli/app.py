"""Read-eval-print loop around ContactService."""

import logging
from collections.abc import Callable

from rich.console import Console
from rich.markup import escape

from cli.render import help_panel, person_table
from rolodex.application import CommandResult, ContactService
from rolodex.domain.errors import RolodexError

logger = logging.getLogger(__name__)

PROMPT = "[bold cyan]rolodex>[/] "
EXPORT_PROMPT = "Export the displayed contacts to (CSV path, empty to cancel): "


def _run(service: ContactService, console: Console, line: str) -> CommandResult | None:
    try:
        return service.execute(line)
    except RolodexError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        return None


def handle_line(
    service: ContactService,
    console: Console,
    line: str,
    ask: Callable[[str], str] | None = None,
) -> bool:
    """Run one input line and render the outcome. Returns False when the user asked to exit."""
    if not line.strip():
        return True
    ask = ask or console.input
    result = _run(service, console, line)
    if result is None:
        return True
    console.print(escape(result.feedback))
    if result.show_help:
        console.print(help_panel(service.book.tag_types))
    if result.show_export_window:
        path = ask(EXPORT_PROMPT).strip()
        if path:
            exported = _run(service, console, f"export path/{path}")
            if exported is not None:
                console.print(escape(exported.feedback))
    if result.exit:
        return False
    console.print(person_table(result.persons))
    return True


def run(service: ContactService, console: Console) -> None:
    console.print(person_table(service.snapshot()))
    console.print("Type [bold]help[/] to see the commands.")
    while True:
        try:
            line = console.input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not handle_line(service, console, line):
            break
    logger.info("Session ended")
