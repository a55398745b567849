"""Logic facade: parse a line of input, run it against the book, save the result."""

import logging

from rolodex.application.commands import READ_ONLY_COMMANDS, CommandResult
from rolodex.application.executor import execute
from rolodex.application.model import ContactBook, Snapshot
from rolodex.application.parser import parse_command
from rolodex.application.ports import ContactBookStorage, Exporter
from rolodex.domain import Person, TagTypeRegistry
from rolodex.domain.errors import DataLoadingError, RolodexError

logger = logging.getLogger(__name__)


def load_initial_state(
    storage: ContactBookStorage, default_tag_types: TagTypeRegistry
) -> tuple[list[Person], TagTypeRegistry]:
    """Return saved persons and tag types, or an empty book with the defaults.

    A data file that cannot be read is reported and replaced by an empty book;
    it is only overwritten once a command changes the book.
    """
    try:
        loaded = storage.load(default_tag_types)
    except DataLoadingError as e:
        logger.warning(
            "Data file at %s could not be loaded (%s). Starting with an empty contact book.",
            storage.path,
            e,
        )
        return [], default_tag_types.copy()
    if loaded is None:
        logger.info("No saved contacts at %s. Starting with an empty contact book.", storage.path)
        return [], default_tag_types.copy()
    persons, tag_types = loaded
    logger.info("Loaded %d persons and %d tag types from %s", len(persons), len(tag_types), storage.path)
    return persons, tag_types


class ContactService:
    """Core flow: user input -> Command -> ContactBook -> saved. One command at a time."""

    def __init__(
        self,
        book: ContactBook,
        *,
        storage: ContactBookStorage | None = None,
        exporter: Exporter | None = None,
    ) -> None:
        self._book = book
        self._storage = storage
        self._exporter = exporter

    @property
    def book(self) -> ContactBook:
        return self._book

    def snapshot(self) -> Snapshot:
        return self._book.filtered()

    def execute(self, user_input: str) -> CommandResult:
        """Run one line of input. Errors propagate with the book unchanged."""
        logger.info("Command: %s", user_input.strip())
        try:
            command = parse_command(user_input, self._book.tag_types)
            result = execute(command, self._book, self._exporter)
        except RolodexError as e:
            logger.info("Command failed: %s", e)
            raise
        if self._storage is not None and not isinstance(command, READ_ONLY_COMMANDS):
            self.save()
        return result

    def save(self) -> None:
        if self._storage is None:
            return
        self._storage.save(list(self._book.persons()), self._book.tag_types)
        logger.debug("Saved contact book to %s", self._storage.path)
