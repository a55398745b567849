"""Registry of known tag types, resolving command-line prefixes to TagTypes.

One registry is built at startup and passed to the parser and the executor;
there is no module-level instance.
"""

from collections.abc import Iterable, Iterator

from rolodex.domain.errors import (
    DuplicateTagTypeError,
    TagTypeNotFoundError,
    UnknownPrefixError,
    ValidationError,
)
from rolodex.domain.tags import Prefix, TagType

# Prefixes used by the command grammar itself; tag types may not claim them.
PREFIX_NAME = Prefix("n/")
PREFIX_PHONE = Prefix("p/")
PREFIX_EMAIL = Prefix("e/")
PREFIX_ADDRESS = Prefix("a/")
PREFIX_STATUS = Prefix("st/")
PREFIX_NOTE = Prefix("note/")
PREFIX_LINK = Prefix("l/")
PREFIX_PATH = Prefix("path/")

RESERVED_PREFIXES = frozenset(
    {
        PREFIX_NAME,
        PREFIX_PHONE,
        PREFIX_EMAIL,
        PREFIX_ADDRESS,
        PREFIX_STATUS,
        PREFIX_NOTE,
        PREFIX_LINK,
        PREFIX_PATH,
    }
)


class TagTypeRegistry:
    """Ordered set of TagTypes with unique names and unique, non-reserved prefixes."""

    def __init__(self, tag_types: Iterable[TagType] = ()) -> None:
        self._tag_types: list[TagType] = []
        self.reset(tag_types)

    def reset(self, tag_types: Iterable[TagType] = ()) -> None:
        """Replace every registration. Nothing changes if the new set conflicts."""
        staged = TagTypeRegistry.__new__(TagTypeRegistry)
        staged._tag_types = []
        for tag_type in tag_types:
            staged.register(tag_type)
        self._tag_types = staged._tag_types

    def _check_prefix_free(self, prefix: Prefix, ignore: TagType | None = None) -> None:
        if prefix in RESERVED_PREFIXES:
            raise ValidationError(f"Prefix {prefix} is reserved for command arguments.")
        for existing in self._tag_types:
            if existing.prefix == prefix and existing != ignore:
                raise DuplicateTagTypeError(
                    f"Prefix {prefix} is already used by tag type {existing.name}."
                )

    def register(self, tag_type: TagType) -> None:
        if tag_type in self._tag_types:
            raise DuplicateTagTypeError(f"Tag type {tag_type.name} already exists.")
        self._check_prefix_free(tag_type.prefix)
        self._tag_types.append(tag_type)

    def find(self, name: str) -> TagType:
        """Return the registered tag type with this name (ignoring case)."""
        wanted = " ".join(name.split()).casefold()
        for tag_type in self._tag_types:
            if tag_type.key == wanted:
                return tag_type
        raise TagTypeNotFoundError(f"Tag type {name} does not exist.")

    def contains(self, tag_type: TagType) -> bool:
        return tag_type in self._tag_types

    def get_tag_type(self, prefix: Prefix | str) -> TagType:
        """Resolve "s/" (or "s") to its TagType. Raises UnknownPrefixError if unregistered."""
        try:
            wanted = prefix if isinstance(prefix, Prefix) else Prefix(prefix)
        except ValidationError:
            raise UnknownPrefixError(f"Unknown tag prefix: {prefix}") from None
        for tag_type in self._tag_types:
            if tag_type.prefix == wanted:
                return tag_type
        raise UnknownPrefixError(f"Unknown tag prefix: {wanted}")

    def has_prefix(self, prefix: Prefix) -> bool:
        return any(tag_type.prefix == prefix for tag_type in self._tag_types)

    def rename(self, old_name: str, new_name: str, new_alias: str) -> tuple[TagType, TagType]:
        """Rename a tag type and/or change its prefix. Returns (old, new).

        Renaming onto another existing tag type is rejected; the two are not merged.
        """
        old = self.find(old_name)
        new = TagType(new_name, Prefix(new_alias))
        if new != old and new in self._tag_types:
            raise DuplicateTagTypeError(f"Tag type {new.name} already exists.")
        self._check_prefix_free(new.prefix, ignore=old)
        self._tag_types = [new if tag_type == old else tag_type for tag_type in self._tag_types]
        return old, new

    def remove(self, tag_type: TagType) -> None:
        if tag_type not in self._tag_types:
            raise TagTypeNotFoundError(f"Tag type {tag_type.name} does not exist.")
        self._tag_types.remove(tag_type)

    def prefixes(self) -> list[Prefix]:
        return [tag_type.prefix for tag_type in self._tag_types]

    def copy(self) -> "TagTypeRegistry":
        return TagTypeRegistry(self._tag_types)

    def __iter__(self) -> Iterator[TagType]:
        return iter(list(self._tag_types))

    def __len__(self) -> int:
        return len(self._tag_types)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagTypeRegistry):
            return NotImplemented
        return [(t.name, t.prefix) for t in self._tag_types] == [
            (t.name, t.prefix) for t in other._tag_types
        ]

    __hash__ = None
