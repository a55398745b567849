"""Infrastructure layer: concrete implementations of application ports."""

from rolodex.infrastructure.export import CsvExporter
from rolodex.infrastructure.json_storage import (
    JsonAdaptedPerson,
    JsonContactBookStorage,
    JsonSerializableContactBook,
)
from rolodex.infrastructure.memory_repository import InMemoryPersonRepository
from rolodex.infrastructure.tag_type_loader import get_tag_types_path, load_tag_types

__all__ = [
    "CsvExporter",
    "InMemoryPersonRepository",
    "JsonAdaptedPerson",
    "JsonContactBookStorage",
    "JsonSerializableContactBook",
    "get_tag_types_path",
    "load_tag_types",
]
