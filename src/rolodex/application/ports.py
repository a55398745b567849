"""Application ports (interfaces). Implemented by infrastructure adapters."""

from pathlib import Path
from typing import Protocol

from rolodex.domain import Person, TagTypeRegistry


class PersonRepository(Protocol):
    """Ordered collection of persons, unique by Person.is_same_person."""

    def add(self, person: Person) -> None:
        """Append a person. Raises DuplicatePersonError if the name is taken."""
        ...

    def set_person(self, target: Person, edited: Person) -> None:
        """Replace target with edited in place. Raises PersonNotFoundError / DuplicatePersonError."""
        ...

    def remove(self, person: Person) -> None:
        """Remove a person. Raises PersonNotFoundError if absent."""
        ...

    def contains(self, person: Person) -> bool:
        """True if a person with the same identity is stored."""
        ...

    def list_all(self) -> list[Person]:
        """Return every person in insertion order."""
        ...

    def set_all(self, persons: list[Person]) -> None:
        """Replace the whole collection. Nothing changes if the new list has duplicates."""
        ...


class ContactBookStorage(Protocol):
    """Loads and saves the persons and tag types of a contact book."""

    @property
    def path(self) -> Path: ...

    def load(self, default_tag_types: TagTypeRegistry) -> tuple[list[Person], TagTypeRegistry] | None:
        """Return (persons, tag types), or None if nothing has been saved yet.

        Raises DataLoadingError if the saved data cannot be read.
        """
        ...

    def save(self, persons: list[Person], tag_types: TagTypeRegistry) -> None:
        """Persist the book. Raises SaveFailedError; earlier saved data stays intact."""
        ...


class Exporter(Protocol):
    """Writes export rows to a user-chosen file."""

    def export(self, path: Path, rows: list[list[str]]) -> None:
        """Raises ExportFailedError if the file cannot be written."""
        ...
