"""Rich renderables for the contact list and help text."""

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rolodex.application import COMMAND_TYPES
from rolodex.domain import Person, TagTypeRegistry


def person_table(persons: tuple[Person, ...]) -> Table:
    table = Table(title=f"Contacts ({len(persons)})", show_lines=True, expand=True)
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Contact")
    table.add_column("Status")
    table.add_column("Tags")
    table.add_column("Rating", justify="right")
    table.add_column("Note / Links")
    for i, person in enumerate(persons, start=1):
        contact = f"{person.phone}\n{person.email}\n{person.address}"
        tags = "\n".join(f"{t.name}: {tag_list}" for t, tag_list in person.tags.items())
        extra = "\n".join([person.note.value, *(link.value for link in person.links)]).strip()
        cells = (person.name.value, contact, person.status.value, tags, person.rating.value, extra)
        table.add_row(str(i), *(escape(cell) for cell in cells))
    return table


def help_panel(tag_types: TagTypeRegistry) -> Panel:
    usages = "\n\n".join(command_type.USAGE for command_type in COMMAND_TYPES)
    prefixes = ", ".join(f"{t.prefix} {t.name}" for t in tag_types) or "none"
    return Panel(Text(f"{usages}\n\nTag prefixes: {prefixes}"), title="Help", expand=False)
