"""Turns one line of user input into a validated Command.

Input is "COMMAND_WORD ARGUMENTS". Arguments are split into a preamble and
prefixed values ("n/Alex p/123"). Each command splits only on its own
prefixes and, where it takes tags, the registered tag type aliases. An unknown
alias left in the preamble or a tag value raises UnknownPrefixError.
Value objects are built here, so a command that parses is ready to execute.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from rolodex.application.commands import (
    AddCommand,
    AddTagCommand,
    ClearCommand,
    Command,
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
    TagEdit,
    TagGroups,
)
from rolodex.application.predicates import PersonMatcher
from rolodex.domain import (
    RESERVED_PREFIXES,
    Address,
    Email,
    Link,
    Name,
    Note,
    Person,
    Phone,
    Prefix,
    Rating,
    Status,
    Tag,
    TagType,
    TagTypeRegistry,
    UniqueTagList,
    UniqueTagTypeMap,
)
from rolodex.domain.errors import ParseError, UnknownPrefixError
from rolodex.domain.registry import (
    PREFIX_ADDRESS,
    PREFIX_EMAIL,
    PREFIX_LINK,
    PREFIX_NAME,
    PREFIX_NOTE,
    PREFIX_PATH,
    PREFIX_PHONE,
    PREFIX_STATUS,
)

MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n{}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command"
MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."
MESSAGE_NOT_EDITED = "At least one field to edit must be provided."
MESSAGE_MIXED_TAG_MODES = (
    "Tags can either be replaced (TAG_PREFIX/TAG) or changed (TAG_PREFIX/+TAG, "
    "TAG_PREFIX/-TAG) in one edit, not both."
)
MESSAGE_ADD_AND_DELETE = "Tag {} cannot be both added and deleted in the same command."
MESSAGE_MISSING_HYPHEN = (
    "Old and new tag types and tag prefixes must be separated by a hyphen!"
)

_BASIC_COMMAND_FORMAT = re.compile(r"(?P<word>\S+)(?P<arguments>.*)", re.DOTALL)
# Anything shaped like a prefix that the command did not split on.
_STRAY_PREFIX = re.compile(r"(?:(?<=\s)|^)([a-z][a-z0-9]*)/")

_FIELD_KEYS = {
    PREFIX_NAME: "name",
    PREFIX_PHONE: "phone",
    PREFIX_EMAIL: "email",
    PREFIX_ADDRESS: "address",
    PREFIX_STATUS: "status",
    PREFIX_NOTE: "note",
    PREFIX_LINK: "link",
}


@dataclass
class ArgumentMultimap:
    """Prefixed argument values in input order, plus the text before the first prefix."""

    preamble: str = ""
    entries: list[tuple[Prefix, str]] = field(default_factory=list)

    def get_value(self, prefix: Prefix) -> str | None:
        values = self.get_all(prefix)
        return values[-1] if values else None

    def get_all(self, prefix: Prefix) -> list[str]:
        return [value for p, value in self.entries if p == prefix]


def tokenize(arguments: str, prefixes: Iterable[Prefix]) -> ArgumentMultimap:
    """Split arguments on the given prefixes only.

    A prefix counts at the start of the arguments or after whitespace and is
    matched exactly, so "Unit A/B" or "and/or" inside a value stays part of it.
    """
    aliases = sorted({re.escape(p.alias) for p in prefixes}, key=len, reverse=True)
    if not aliases:
        return ArgumentMultimap(preamble=arguments.strip())
    token = re.compile(r"(?:(?<=\s)|^)(" + "|".join(aliases) + ")/")
    matches = list(token.finditer(arguments))
    if not matches:
        return ArgumentMultimap(preamble=arguments.strip())
    argmap = ArgumentMultimap(preamble=arguments[: matches[0].start()].strip())
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(arguments)
        argmap.entries.append((Prefix(match.group(1)), arguments[match.end() : end].strip()))
    return argmap


# --- shared helpers ---


def _invalid_format(usage: str) -> ParseError:
    return ParseError(MESSAGE_INVALID_COMMAND_FORMAT.format(usage))


def parse_index(raw: str) -> int:
    """Parse a one-based index. Raises ParseError unless it is a non-zero unsigned integer."""
    trimmed = raw.strip()
    if not trimmed.isascii() or not trimmed.isdigit() or int(trimmed) == 0:
        raise ParseError(MESSAGE_INVALID_INDEX)
    return int(trimmed)


def _reject_stray_prefix(text: str, usage: str, allow_tags: bool = True) -> None:
    """Raise if text holds a prefix the command does not accept.

    Reserved prefixes, and any prefix on a command without tags, are a format
    error. Other aliases are reported as unknown tag prefixes.
    """
    match = _STRAY_PREFIX.search(text)
    if match is None:
        return
    prefix = Prefix(match.group(1))
    if prefix in RESERVED_PREFIXES or not allow_tags:
        raise _invalid_format(usage)
    raise UnknownPrefixError(f"Unknown tag prefix: {prefix}")


def _index_from_preamble(argmap: ArgumentMultimap, usage: str, allow_tags: bool = True) -> int:
    parts = argmap.preamble.split(None, 1)
    if len(parts) > 1:
        _reject_stray_prefix(parts[1], usage, allow_tags)
        raise _invalid_format(usage)
    try:
        return parse_index(parts[0] if parts else "")
    except ParseError as e:
        raise _invalid_format(usage) from e


def _require_single(argmap: ArgumentMultimap, *prefixes: Prefix) -> None:
    repeated = [str(p) for p in prefixes if len(argmap.get_all(p)) > 1]
    if repeated:
        raise ParseError(
            "Multiple values specified for the following single-valued field(s): "
            + " ".join(repeated)
        )


def _tag_groups(
    entries: list[tuple[Prefix, str]], tag_types: TagTypeRegistry, usage: str
) -> TagGroups:
    """Group tag values by tag type, keeping input order. Raises DuplicateTagError on repeats."""
    groups: dict[TagType, UniqueTagList] = {}
    for prefix, value in entries:
        _reject_stray_prefix(value, usage)
        tag_type = tag_types.get_tag_type(prefix)
        groups.setdefault(tag_type, UniqueTagList()).add(Tag(value))
    return tuple((tag_type, tuple(tags)) for tag_type, tags in groups.items())


def _tag_entries(argmap: ArgumentMultimap, tag_types: TagTypeRegistry) -> list[tuple[Prefix, str]]:
    return [(p, value) for p, value in argmap.entries if tag_types.has_prefix(p)]


def _parse_matcher(arguments: str, tag_types: TagTypeRegistry, usage: str) -> PersonMatcher:
    argmap = tokenize(arguments, [*_FIELD_KEYS, *tag_types.prefixes()])
    _reject_stray_prefix(argmap.preamble, usage)
    criteria: dict[str, list[str]] = {}
    for prefix, value in argmap.entries:
        keywords = value.split()
        if not keywords:
            raise _invalid_format(usage)
        if prefix in _FIELD_KEYS:
            key = _FIELD_KEYS[prefix]
        else:
            _reject_stray_prefix(value, usage)
            key = "tag:" + tag_types.get_tag_type(prefix).key
        criteria.setdefault(key, []).extend(keywords)
    matcher = PersonMatcher(
        keywords=tuple(argmap.preamble.split()),
        criteria=tuple((key, tuple(words)) for key, words in criteria.items()),
    )
    if matcher.is_empty():
        raise _invalid_format(usage)
    return matcher


# --- per-command parsers ---


def _parse_add(arguments: str, tag_types: TagTypeRegistry) -> AddCommand:
    usage = AddCommand.USAGE
    fields = (PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS, PREFIX_STATUS, PREFIX_NOTE, PREFIX_LINK)
    argmap = tokenize(arguments, [*fields, *tag_types.prefixes()])
    required = (PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)
    if argmap.preamble:
        _reject_stray_prefix(argmap.preamble, usage)
        raise _invalid_format(usage)
    if any(argmap.get_value(p) is None for p in required):
        raise _invalid_format(usage)
    _require_single(argmap, *required, PREFIX_STATUS, PREFIX_NOTE)

    status = argmap.get_value(PREFIX_STATUS)
    person = Person(
        name=Name(argmap.get_value(PREFIX_NAME)),
        phone=Phone(argmap.get_value(PREFIX_PHONE)),
        email=Email(argmap.get_value(PREFIX_EMAIL)),
        address=Address(argmap.get_value(PREFIX_ADDRESS)),
        status=Status(status) if status is not None else Status(),
        note=Note(argmap.get_value(PREFIX_NOTE) or ""),
        tags=UniqueTagTypeMap(dict(_tag_groups(_tag_entries(argmap, tag_types), tag_types, usage))),
        links=tuple(Link(value) for value in argmap.get_all(PREFIX_LINK)),
    )
    return AddCommand(person)


def _parse_tag_edit(argmap: ArgumentMultimap, tag_types: TagTypeRegistry, usage: str) -> TagEdit:
    replace, add, delete = [], [], []
    for prefix, value in _tag_entries(argmap, tag_types):
        if value.startswith("+"):
            add.append((prefix, value[1:]))
        elif value.startswith("-"):
            delete.append((prefix, value[1:]))
        else:
            replace.append((prefix, value))
    if replace and (add or delete):
        raise ParseError(MESSAGE_MIXED_TAG_MODES)
    if replace:
        # An empty value ("s/") contributes no tag, so "edit 1 s/" clears every tag.
        return TagEdit(replacement=_tag_groups([(p, v) for p, v in replace if v], tag_types, usage))
    to_add = _tag_groups(add, tag_types, usage)
    to_delete = _tag_groups(delete, tag_types, usage)
    for tag_type, tags in to_add:
        for deleted_type, deleted_tags in to_delete:
            if deleted_type != tag_type:
                continue
            for tag in tags:
                if tag in deleted_tags:
                    raise ParseError(MESSAGE_ADD_AND_DELETE.format(tag))
    return TagEdit(to_add=to_add, to_delete=to_delete)


def _parse_edit(arguments: str, tag_types: TagTypeRegistry) -> EditCommand:
    usage = EditCommand.USAGE
    fields = (PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS, PREFIX_STATUS)
    argmap = tokenize(arguments, [*fields, *tag_types.prefixes()])
    index = _index_from_preamble(argmap, usage)
    _require_single(argmap, *fields)

    def _optional(prefix: Prefix, value_type: Callable):
        raw = argmap.get_value(prefix)
        return value_type(raw) if raw is not None else None

    descriptor = EditPersonDescriptor(
        name=_optional(PREFIX_NAME, Name),
        phone=_optional(PREFIX_PHONE, Phone),
        email=_optional(PREFIX_EMAIL, Email),
        address=_optional(PREFIX_ADDRESS, Address),
        status=_optional(PREFIX_STATUS, Status),
        tags=_parse_tag_edit(argmap, tag_types, usage),
    )
    if not descriptor.is_any_field_edited():
        raise ParseError(MESSAGE_NOT_EDITED)
    return EditCommand(index, descriptor)


def _parse_delete(arguments: str, tag_types: TagTypeRegistry) -> DeleteCommand:
    trimmed = arguments.strip()
    if not trimmed:
        raise _invalid_format(DeleteCommand.USAGE)
    if trimmed.isascii() and trimmed.isdigit():
        return DeleteCommand(index=parse_index(trimmed))
    return DeleteCommand(matcher=_parse_matcher(arguments, tag_types, DeleteCommand.USAGE))


def _parse_find(arguments: str, tag_types: TagTypeRegistry) -> FindCommand:
    return FindCommand(_parse_matcher(arguments, tag_types, FindCommand.USAGE))


def _parse_note(arguments: str, tag_types: TagTypeRegistry) -> NoteCommand:
    usage = NoteCommand.USAGE
    argmap = tokenize(arguments, [PREFIX_NOTE])
    index = _index_from_preamble(argmap, usage, allow_tags=False)
    note = argmap.get_value(PREFIX_NOTE)
    if note is None:
        raise _invalid_format(usage)
    _require_single(argmap, PREFIX_NOTE)
    return NoteCommand(index, Note(note))


def _parse_rate(arguments: str, tag_types: TagTypeRegistry) -> RateCommand:
    parts = arguments.split()
    if len(parts) != 2:
        raise _invalid_format(RateCommand.USAGE)
    try:
        index = parse_index(parts[0])
    except ParseError as e:
        raise _invalid_format(RateCommand.USAGE) from e
    return RateCommand(index, Rating(parts[1]))


def _parse_link(arguments: str, tag_types: TagTypeRegistry) -> LinkCommand:
    usage = LinkCommand.USAGE
    argmap = tokenize(arguments, [PREFIX_LINK])
    index = _index_from_preamble(argmap, usage, allow_tags=False)
    values = argmap.get_all(PREFIX_LINK)
    if not values:
        raise _invalid_format(usage)
    return LinkCommand(index, tuple(Link(value) for value in values))


def _parse_tag_command(arguments: str, tag_types: TagTypeRegistry, usage: str) -> tuple[int, TagGroups]:
    argmap = tokenize(arguments, tag_types.prefixes())
    index = _index_from_preamble(argmap, usage)
    groups = _tag_groups(argmap.entries, tag_types, usage)
    if not groups:
        raise _invalid_format(usage)
    return index, groups


def _parse_add_tag(arguments: str, tag_types: TagTypeRegistry) -> AddTagCommand:
    return AddTagCommand(*_parse_tag_command(arguments, tag_types, AddTagCommand.USAGE))


def _parse_delete_tag(arguments: str, tag_types: TagTypeRegistry) -> DeleteTagCommand:
    return DeleteTagCommand(*_parse_tag_command(arguments, tag_types, DeleteTagCommand.USAGE))


def _parse_prefix(alias: str) -> Prefix:
    prefix = Prefix(alias)
    if prefix in RESERVED_PREFIXES:
        raise ParseError(f"Prefix {prefix} is reserved for command arguments.")
    return prefix


def _parse_create_tag_type(arguments: str, tag_types: TagTypeRegistry) -> CreateTagTypeCommand:
    parts = arguments.split()
    if len(parts) < 2:
        raise _invalid_format(CreateTagTypeCommand.USAGE)
    return CreateTagTypeCommand(TagType(" ".join(parts[:-1]), _parse_prefix(parts[-1])))


def _split_hyphen(pair: str) -> tuple[str, str]:
    if "-" not in pair:
        raise ParseError(MESSAGE_MISSING_HYPHEN)
    old, new = pair.split("-", 1)
    return old.strip(), new.strip()


def _parse_edit_tag_type(arguments: str, tag_types: TagTypeRegistry) -> EditTagTypeCommand:
    parts = arguments.strip().rsplit(None, 1)
    if len(parts) != 2:
        raise _invalid_format(EditTagTypeCommand.USAGE)
    old_name, new_name = _split_hyphen(parts[0])
    old_alias, new_alias = _split_hyphen(parts[1])
    if not old_name or not old_alias:
        raise _invalid_format(EditTagTypeCommand.USAGE)
    # Validate the new pair now so execute only has registry conflicts left to check.
    new_tag_type = TagType(new_name, _parse_prefix(new_alias))
    return EditTagTypeCommand(
        old_name=old_name,
        old_alias=Prefix(old_alias).alias,
        new_name=new_tag_type.name,
        new_alias=new_tag_type.prefix.alias,
    )


def _parse_delete_tag_type(arguments: str, tag_types: TagTypeRegistry) -> DeleteTagTypeCommand:
    parts = arguments.split()
    if len(parts) != 1:
        raise _invalid_format(DeleteTagTypeCommand.USAGE)
    return DeleteTagTypeCommand(tag_types.get_tag_type(parts[0]))


def _parse_export(arguments: str, tag_types: TagTypeRegistry) -> ExportCommand:
    usage = ExportCommand.USAGE
    argmap = tokenize(arguments, [PREFIX_PATH])
    if not argmap.entries and not argmap.preamble:
        return ExportCommand()
    path = argmap.get_value(PREFIX_PATH)
    if argmap.preamble or not path:
        raise _invalid_format(usage)
    _require_single(argmap, PREFIX_PATH)
    return ExportCommand(Path(path).expanduser())


_PARSERS: dict[str, Callable[[str, TagTypeRegistry], Command]] = {
    AddCommand.WORD: _parse_add,
    EditCommand.WORD: _parse_edit,
    DeleteCommand.WORD: _parse_delete,
    FindCommand.WORD: _parse_find,
    ListCommand.WORD: lambda arguments, tag_types: ListCommand(),
    NoteCommand.WORD: _parse_note,
    RateCommand.WORD: _parse_rate,
    LinkCommand.WORD: _parse_link,
    AddTagCommand.WORD: _parse_add_tag,
    DeleteTagCommand.WORD: _parse_delete_tag,
    CreateTagTypeCommand.WORD: _parse_create_tag_type,
    EditTagTypeCommand.WORD: _parse_edit_tag_type,
    DeleteTagTypeCommand.WORD: _parse_delete_tag_type,
    ClearCommand.WORD: lambda arguments, tag_types: ClearCommand(),
    ExportCommand.WORD: _parse_export,
    HelpCommand.WORD: lambda arguments, tag_types: HelpCommand(),
    ExitCommand.WORD: lambda arguments, tag_types: ExitCommand(),
}


def parse_command(user_input: str, tag_types: TagTypeRegistry) -> Command:
    """Parse one line of input. Raises ParseError, ValidationError or a lookup/duplicate error."""
    match = _BASIC_COMMAND_FORMAT.fullmatch(user_input.strip())
    if not match:
        raise _invalid_format(HelpCommand.USAGE)
    parser = _PARSERS.get(match.group("word").lower())
    if parser is None:
        raise ParseError(MESSAGE_UNKNOWN_COMMAND)
    return parser(match.group("arguments"), tag_types)
