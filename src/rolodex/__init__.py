"""
Rolodex core: clean-architecture layout.

- domain: Person, value objects, tag types and the tag type registry. No outer dependencies.
- application: ContactBook (record store), commands, parser, executor, ContactService, ports.
- infrastructure: adapters (InMemoryPersonRepository, JsonContactBookStorage, CsvExporter,
  YAML tag type defaults).
"""

from rolodex.application import (
    CommandResult,
    ContactBook,
    ContactService,
    execute,
    load_initial_state,
    parse_command,
)
from rolodex.domain import Person, TagType, TagTypeRegistry, UniqueTagTypeMap
from rolodex.infrastructure import (
    CsvExporter,
    InMemoryPersonRepository,
    JsonContactBookStorage,
    load_tag_types,
)

__all__ = [
    "CommandResult",
    "ContactBook",
    "ContactService",
    "CsvExporter",
    "InMemoryPersonRepository",
    "JsonContactBookStorage",
    "Person",
    "TagType",
    "TagTypeRegistry",
    "UniqueTagTypeMap",
    "execute",
    "load_initial_state",
    "load_tag_types",
    "parse_command",
]
