"""Application layer: record store, commands, parser, executor and ports. Depends only on domain."""

from rolodex.application.commands import COMMAND_TYPES, Command, CommandResult
from rolodex.application.contact_service import ContactService, load_initial_state
from rolodex.application.executor import execute
from rolodex.application.model import ContactBook
from rolodex.application.parser import parse_command
from rolodex.application.ports import ContactBookStorage, Exporter, PersonRepository
from rolodex.application.predicates import PersonMatcher
from rolodex.application.rows import person_to_rows, to_export_rows

__all__ = [
    "COMMAND_TYPES",
    "Command",
    "CommandResult",
    "ContactBook",
    "ContactBookStorage",
    "ContactService",
    "Exporter",
    "PersonMatcher",
    "PersonRepository",
    "execute",
    "load_initial_state",
    "parse_command",
    "person_to_rows",
    "to_export_rows",
]
