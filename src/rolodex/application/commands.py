"""Command values produced by the parser and consumed by the executor.

Each command kind is a frozen dataclass carrying its already-validated
arguments; Command is the closed union of all of them.
"""

from dataclasses import dataclass, field
from pathlib import Path

from rolodex.application.predicates import PersonMatcher
from rolodex.domain import (
    Address,
    Email,
    Link,
    Name,
    Note,
    Person,
    Phone,
    Rating,
    Status,
    Tag,
    TagType,
)

# (tag type, tags) pairs, in the order given on the command line.
TagGroups = tuple[tuple[TagType, tuple[Tag, ...]], ...]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a successful command, consumed by the renderer."""

    feedback: str
    show_help: bool = False
    exit: bool = False
    show_export_window: bool = False
    persons: tuple[Person, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class TagEdit:
    """Tag changes requested by an edit command. Exactly one mode is used per command."""

    replacement: TagGroups | None = None
    to_add: TagGroups = ()
    to_delete: TagGroups = ()

    def is_empty(self) -> bool:
        return self.replacement is None and not self.to_add and not self.to_delete


@dataclass(frozen=True)
class EditPersonDescriptor:
    """Fields to change; None means keep the current value."""

    name: Name | None = None
    phone: Phone | None = None
    email: Email | None = None
    address: Address | None = None
    status: Status | None = None
    tags: TagEdit = field(default_factory=TagEdit)

    def is_any_field_edited(self) -> bool:
        scalars = (self.name, self.phone, self.email, self.address, self.status)
        return any(value is not None for value in scalars) or not self.tags.is_empty()


@dataclass(frozen=True)
class AddCommand:
    WORD = "add"
    USAGE = (
        "add: Adds a person to the contact book.\n"
        "Parameters: n/NAME p/PHONE e/EMAIL a/ADDRESS [st/STATUS] [note/NOTE] "
        "[TAG_PREFIX/TAG]... [l/LINK]...\n"
        "Example: add n/John Doe p/98765432 e/johnd@example.com a/311, Clementi Ave 2 "
        "s/Java s/Python l/https://github.com/johndoe"
    )
    person: Person


@dataclass(frozen=True)
class EditCommand:
    WORD = "edit"
    USAGE = (
        "edit: Edits the details of the person identified by the index number in the "
        "displayed list.\n"
        "Parameters: INDEX [n/NAME] [p/PHONE] [e/EMAIL] [a/ADDRESS] [st/STATUS] "
        "[TAG_PREFIX/TAG]... | [TAG_PREFIX/+TAG]... [TAG_PREFIX/-TAG]...\n"
        "Plain tags replace every tag; +TAG adds a tag and -TAG removes one.\n"
        "Example: edit 1 p/91234567 s/+Go"
    )
    index: int
    descriptor: EditPersonDescriptor


@dataclass(frozen=True)
class DeleteCommand:
    WORD = "delete"
    USAGE = (
        "delete: Deletes the person identified by the index number in the displayed list, "
        "or every displayed person matching the keywords.\n"
        "Parameters: INDEX | KEYWORD [MORE_KEYWORDS]... [PREFIX/KEYWORD]...\n"
        "Example: delete 1\n"
        "Example: delete n/Alex"
    )
    index: int | None = None
    matcher: PersonMatcher | None = None


@dataclass(frozen=True)
class FindCommand:
    WORD = "find"
    USAGE = (
        "find: Finds all persons with a field containing any of the keywords "
        "(case-insensitive). Prefixed keywords only search that field.\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]... [PREFIX/KEYWORD]...\n"
        "Example: find alice s/java"
    )
    matcher: PersonMatcher


@dataclass(frozen=True)
class ListCommand:
    WORD = "list"
    USAGE = "list: Lists all persons."


@dataclass(frozen=True)
class NoteCommand:
    WORD = "note"
    USAGE = (
        "note: Replaces the note of the person identified by the index number. "
        "An empty note clears it.\n"
        "Parameters: INDEX note/NOTE\n"
        "Example: note 1 note/Strong communicator"
    )
    index: int
    note: Note


@dataclass(frozen=True)
class RateCommand:
    WORD = "rate"
    USAGE = (
        "rate: Rates the person identified by the index number.\n"
        "Parameters: INDEX RATING (0 to 10)\n"
        "Example: rate 1 7"
    )
    index: int
    rating: Rating


@dataclass(frozen=True)
class LinkCommand:
    WORD = "link"
    USAGE = (
        "link: Adds links to the person identified by the index number.\n"
        "Parameters: INDEX l/LINK [l/LINK]...\n"
        "Example: link 1 l/https://linkedin.com/in/alex"
    )
    index: int
    links: tuple[Link, ...]


@dataclass(frozen=True)
class AddTagCommand:
    WORD = "addtag"
    USAGE = (
        "addtag: Adds tags to the person identified by the index number.\n"
        "Parameters: INDEX TAG_PREFIX/TAG [TAG_PREFIX/TAG]...\n"
        "Example: addtag 1 s/Java d/Bachelors"
    )
    index: int
    tags: TagGroups


@dataclass(frozen=True)
class DeleteTagCommand:
    WORD = "deletetag"
    USAGE = (
        "deletetag: Deletes tags from the person identified by the index number.\n"
        "Parameters: INDEX TAG_PREFIX/TAG [TAG_PREFIX/TAG]...\n"
        "Example: deletetag 1 s/Java"
    )
    index: int
    tags: TagGroups


@dataclass(frozen=True)
class CreateTagTypeCommand:
    WORD = "createtagtype"
    USAGE = (
        "createtagtype: Creates a new tag type with its prefix alias.\n"
        "Parameters: TAG_TYPE ALIAS\n"
        "Example: createtagtype Language lang"
    )
    tag_type: TagType


@dataclass(frozen=True)
class EditTagTypeCommand:
    WORD = "edittagtype"
    USAGE = (
        "edittagtype: Renames a tag type and changes its prefix alias.\n"
        "Parameters: OLD_TAG_TYPE-NEW_TAG_TYPE OLD_ALIAS-NEW_ALIAS\n"
        "Example: edittagtype Skill-Expertise s-ex"
    )
    old_name: str
    old_alias: str
    new_name: str
    new_alias: str


@dataclass(frozen=True)
class DeleteTagTypeCommand:
    WORD = "deletetagtype"
    USAGE = (
        "deletetagtype: Deletes a tag type and removes it from every person.\n"
        "Parameters: ALIAS\n"
        "Example: deletetagtype s"
    )
    tag_type: TagType


@dataclass(frozen=True)
class ClearCommand:
    WORD = "clear"
    USAGE = "clear: Deletes every person."


@dataclass(frozen=True)
class ExportCommand:
    WORD = "export"
    USAGE = (
        "export: Exports the displayed persons as CSV. Without a path, opens the export dialog.\n"
        "Parameters: [path/PATH]\n"
        "Example: export path/~/Desktop/contacts.csv"
    )
    path: Path | None = None


@dataclass(frozen=True)
class HelpCommand:
    WORD = "help"
    USAGE = "help: Shows the list of commands."


@dataclass(frozen=True)
class ExitCommand:
    WORD = "exit"
    USAGE = "exit: Saves and exits."


Command = (
    AddCommand
    | EditCommand
    | DeleteCommand
    | FindCommand
    | ListCommand
    | NoteCommand
    | RateCommand
    | LinkCommand
    | AddTagCommand
    | DeleteTagCommand
    | CreateTagTypeCommand
    | EditTagTypeCommand
    | DeleteTagTypeCommand
    | ClearCommand
    | ExportCommand
    | HelpCommand
    | ExitCommand
)

COMMAND_TYPES: tuple[type, ...] = Command.__args__

# Commands that never change the book, so the service need not save after them.
READ_ONLY_COMMANDS = (FindCommand, ListCommand, ExportCommand, HelpCommand, ExitCommand)
