"""Applies a Command to a ContactBook.

Every branch validates before it mutates: either the whole command takes
effect or the book and its tag type registry are left as they were.
"""

import dataclasses

from rolodex.application.commands import (
    AddCommand,
    AddTagCommand,
    ClearCommand,
    Command,
    CommandResult,
    CreateTagTypeCommand,
    DeleteCommand,
    DeleteTagCommand,
    DeleteTagTypeCommand,
    EditCommand,
    EditPersonDescriptor,
    EditTagTypeCommand,
    ExitCommand,
    ExportCommand,
    FindCommand,
    HelpCommand,
    LinkCommand,
    ListCommand,
    NoteCommand,
    RateCommand,
    TagGroups,
)
from rolodex.application.model import ContactBook
from rolodex.application.ports import Exporter
from rolodex.application.rows import to_export_rows
from rolodex.domain import Person, Prefix, TagType, UniqueTagTypeMap
from rolodex.domain.errors import (
    DuplicatePersonError,
    ExportFailedError,
    PersonNotFoundError,
    TagTypeNotFoundError,
)

MESSAGE_ADD_SUCCESS = "New person added: {}"
MESSAGE_EDIT_SUCCESS = "Edited Person: {}"
MESSAGE_DELETE_SUCCESS = "Deleted Person: {}"
MESSAGE_DELETE_MANY_SUCCESS = "Deleted {} persons: {}"
MESSAGE_NO_MATCH = "No displayed person matches the given keywords."
MESSAGE_PERSONS_LISTED = "{} persons listed!"
MESSAGE_LIST_SUCCESS = "Listed all persons"
MESSAGE_NOTE_ADDED = "Added note to Person: {}"
MESSAGE_NOTE_REMOVED = "Removed note from Person: {}"
MESSAGE_RATE_SUCCESS = "Rated Person: {}"
MESSAGE_LINK_SUCCESS = "Added links to Person: {}"
MESSAGE_ADD_TAG_SUCCESS = "Added tags to Person: {}"
MESSAGE_DELETE_TAG_SUCCESS = "Deleted tags from Person: {}"
MESSAGE_CREATE_TAG_TYPE_SUCCESS = "New tag type added: {} ({})"
MESSAGE_EDIT_TAG_TYPE_SUCCESS = "Tag type edited: {} ({}) -> {} ({})"
MESSAGE_DELETE_TAG_TYPE_SUCCESS = "Tag type deleted: {} ({})"
MESSAGE_CLEAR_SUCCESS = "Contact book has been cleared!"
MESSAGE_EXPORT_SUCCESS = "Contacts exported successfully to {}"
MESSAGE_EXPORT_WINDOW = "Opening Export Window..."
MESSAGE_HELP = "Opened help window."
MESSAGE_EXIT = "Exiting contact book as requested ..."


def _edited_tags(person: Person, descriptor: EditPersonDescriptor) -> UniqueTagTypeMap:
    edit = descriptor.tags
    if edit.replacement is not None:
        return UniqueTagTypeMap(dict(edit.replacement))
    tags = person.tag_map
    _add_tags(tags, edit.to_add)
    _remove_tags(tags, edit.to_delete)
    return tags


def _add_tags(tags: UniqueTagTypeMap, groups: TagGroups) -> None:
    for tag_type, group in groups:
        for tag in group:
            tags.add_tag(tag_type, tag)


def _remove_tags(tags: UniqueTagTypeMap, groups: TagGroups) -> None:
    for tag_type, group in groups:
        for tag in group:
            tags.remove_tag(tag_type, tag)


def _replace(book: ContactBook, person: Person, edited: Person) -> None:
    if not person.is_same_person(edited) and book.has_person(edited):
        raise DuplicatePersonError()
    book.set_person(person, edited)


def _edit(book: ContactBook, command: EditCommand) -> str:
    person = book.person_at(command.index)
    d = command.descriptor
    edited = person.with_changes(
        name=d.name or person.name,
        phone=d.phone or person.phone,
        email=d.email or person.email,
        address=d.address or person.address,
        status=d.status or person.status,
        tags=_edited_tags(person, d),
    )
    _replace(book, person, edited)
    return MESSAGE_EDIT_SUCCESS.format(edited)


def _delete(book: ContactBook, command: DeleteCommand) -> str:
    if command.matcher is None:
        person = book.person_at(command.index if command.index is not None else 0)
        book.delete_person(person)
        return MESSAGE_DELETE_SUCCESS.format(person)
    targets = [p for p in book.filtered() if command.matcher(p)]
    if not targets:
        raise PersonNotFoundError(MESSAGE_NO_MATCH)
    book.set_persons([p for p in book.persons() if p not in targets])
    if len(targets) == 1:
        return MESSAGE_DELETE_SUCCESS.format(targets[0])
    return MESSAGE_DELETE_MANY_SUCCESS.format(
        len(targets), ", ".join(str(p.name) for p in targets)
    )


def _edit_tag_type(book: ContactBook, command: EditTagTypeCommand) -> str:
    registry = book.tag_types
    old = registry.find(command.old_name)
    if old.prefix != Prefix(command.old_alias):
        raise TagTypeNotFoundError(
            f"Tag type {old.name} does not use the prefix {Prefix(command.old_alias)}."
        )
    # Stage every change first so a conflict leaves registry and persons untouched.
    staged = registry.copy()
    _, new = staged.rename(command.old_name, command.new_name, command.new_alias)
    updated = []
    for person in book.persons():
        if person.tags.contains(old):
            tags = person.tag_map
            tags.rename_tag_type(old, new)
            person = person.with_changes(tags=tags)
        updated.append(person)
    registry.reset(staged)
    book.set_persons(updated)
    return MESSAGE_EDIT_TAG_TYPE_SUCCESS.format(old.name, old.prefix, new.name, new.prefix)


def _delete_tag_type(book: ContactBook, tag_type: TagType) -> str:
    registry = book.tag_types
    if not registry.contains(tag_type):
        raise TagTypeNotFoundError(f"Tag type {tag_type.name} does not exist.")
    updated = []
    for person in book.persons():
        if person.tags.contains(tag_type):
            tags = person.tag_map
            tags.remove_tag_type(tag_type)
            person = person.with_changes(tags=tags)
        updated.append(person)
    registry.remove(tag_type)
    book.set_persons(updated)
    return MESSAGE_DELETE_TAG_TYPE_SUCCESS.format(tag_type.name, tag_type.prefix)


def _export(book: ContactBook, command: ExportCommand, exporter: Exporter | None) -> CommandResult:
    if command.path is None:
        return CommandResult(MESSAGE_EXPORT_WINDOW, show_export_window=True)
    if exporter is None:
        raise ExportFailedError("Exporting is not available.")
    exporter.export(command.path, to_export_rows(book.filtered()))
    return CommandResult(MESSAGE_EXPORT_SUCCESS.format(command.path))


def execute(command: Command, book: ContactBook, exporter: Exporter | None = None) -> CommandResult:
    """Run command against book and return its result with a snapshot of the filtered view."""
    match command:
        case AddCommand(person=person):
            if book.has_person(person):
                raise DuplicatePersonError()
            book.add_person(person)
            result = CommandResult(MESSAGE_ADD_SUCCESS.format(person))
        case EditCommand():
            result = CommandResult(_edit(book, command))
        case DeleteCommand():
            result = CommandResult(_delete(book, command))
        case FindCommand(matcher=matcher):
            book.update_filter(matcher)
            result = CommandResult(MESSAGE_PERSONS_LISTED.format(len(book.filtered())))
        case ListCommand():
            book.update_filter(None)
            result = CommandResult(MESSAGE_LIST_SUCCESS)
        case NoteCommand(index=index, note=note):
            person = book.person_at(index)
            edited = person.with_changes(note=note)
            book.set_person(person, edited)
            message = MESSAGE_NOTE_ADDED if note.value else MESSAGE_NOTE_REMOVED
            result = CommandResult(message.format(edited))
        case RateCommand(index=index, rating=rating):
            person = book.person_at(index)
            edited = person.with_changes(rating=rating)
            if edited != person:
                book.set_person(person, edited)
            result = CommandResult(MESSAGE_RATE_SUCCESS.format(edited))
        case LinkCommand(index=index, links=links):
            person = book.person_at(index)
            edited = person.with_changes(links=person.links + links)
            book.set_person(person, edited)
            result = CommandResult(MESSAGE_LINK_SUCCESS.format(edited))
        case AddTagCommand(index=index, tags=groups):
            person = book.person_at(index)
            tags = person.tag_map
            _add_tags(tags, groups)
            edited = person.with_changes(tags=tags)
            book.set_person(person, edited)
            result = CommandResult(MESSAGE_ADD_TAG_SUCCESS.format(edited))
        case DeleteTagCommand(index=index, tags=groups):
            person = book.person_at(index)
            tags = person.tag_map
            _remove_tags(tags, groups)
            edited = person.with_changes(tags=tags)
            book.set_person(person, edited)
            result = CommandResult(MESSAGE_DELETE_TAG_SUCCESS.format(edited))
        case CreateTagTypeCommand(tag_type=tag_type):
            book.tag_types.register(tag_type)
            result = CommandResult(
                MESSAGE_CREATE_TAG_TYPE_SUCCESS.format(tag_type.name, tag_type.prefix)
            )
        case EditTagTypeCommand():
            result = CommandResult(_edit_tag_type(book, command))
        case DeleteTagTypeCommand(tag_type=tag_type):
            result = CommandResult(_delete_tag_type(book, tag_type))
        case ClearCommand():
            book.set_persons([])
            book.update_filter(None)
            result = CommandResult(MESSAGE_CLEAR_SUCCESS)
        case ExportCommand():
            result = _export(book, command, exporter)
        case HelpCommand():
            result = CommandResult(MESSAGE_HELP, show_help=True)
        case ExitCommand():
            result = CommandResult(MESSAGE_EXIT, exit=True)
        case _:
            raise TypeError(f"Unhandled command: {command!r}")
    return dataclasses.replace(result, persons=book.filtered())
