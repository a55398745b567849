"""Tag categories and the per-person tag containers.

A TagType is a named category ("Skill") with the short prefix used to address it
on the command line ("s/"). A UniqueTagList holds the tags of one category, and a
UniqueTagTypeMap holds every category a person has. An empty category is never
stored: removing the last tag removes the category.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from rolodex.domain.errors import (
    DuplicateTagError,
    DuplicateTagTypeError,
    TagNotFoundError,
    TagTypeNotFoundError,
    ValidationError,
)
from rolodex.domain.values import Tag

TAG_TYPE_NAME_MAX_LENGTH = 30
PREFIX_DELIMITER = "/"


@dataclass(frozen=True)
class Prefix:
    """A command-line argument prefix such as "s/". Built from an alias with or without the slash."""

    value: str
    MESSAGE_CONSTRAINTS: ClassVar[str] = (
        "Prefixes should start with a letter and only contain letters and digits."
    )
    _ALIAS: ClassVar[re.Pattern] = re.compile(r"[A-Za-z][A-Za-z0-9]*")

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        alias = self.value.strip().removesuffix(PREFIX_DELIMITER)
        if not self.is_valid_alias(alias):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", alias.lower() + PREFIX_DELIMITER)

    @classmethod
    def is_valid_alias(cls, alias: str) -> bool:
        return cls._ALIAS.fullmatch(alias) is not None

    @property
    def alias(self) -> str:
        return self.value.removesuffix(PREFIX_DELIMITER)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TagType:
    """A tag category. Two tag types are equal when their names match ignoring case."""

    name: str = field(compare=False)
    prefix: Prefix = field(compare=False)
    key: str = field(init=False, repr=False)
    MESSAGE_CONSTRAINTS: ClassVar[str] = (
        "Tag type names should start with a letter or digit, only contain letters, "
        f"digits and spaces, and be at most {TAG_TYPE_NAME_MAX_LENGTH} characters long."
    )
    _PATTERN: ClassVar[re.Pattern] = re.compile(r"[A-Za-z0-9][A-Za-z0-9 ]*")

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        name = " ".join(self.name.split())
        if not self.is_valid_name(name):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        prefix = self.prefix if isinstance(self.prefix, Prefix) else Prefix(self.prefix)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "prefix", prefix)
        object.__setattr__(self, "key", name.casefold())

    @classmethod
    def is_valid_name(cls, name: str) -> bool:
        return len(name) <= TAG_TYPE_NAME_MAX_LENGTH and cls._PATTERN.fullmatch(name) is not None

    def __str__(self) -> str:
        return self.name


class UniqueTagList:
    """Ordered tags of one category, without duplicates."""

    def __init__(self, tags: Iterable[Tag] = ()) -> None:
        self._tags: list[Tag] = []
        for tag in tags:
            self.add(tag)

    def contains(self, tag: Tag) -> bool:
        return tag in self._tags

    def add(self, tag: Tag) -> None:
        if self.contains(tag):
            raise DuplicateTagError(f"Tag {tag} already exists.")
        self._tags.append(tag)

    def remove(self, tag: Tag) -> None:
        if not self.contains(tag):
            raise TagNotFoundError(f"Tag {tag} does not exist.")
        self._tags.remove(tag)

    def set_tags(self, tags: Iterable[Tag]) -> None:
        """Replace the contents. Validates the whole replacement before swapping."""
        self._tags = UniqueTagList(tags)._tags

    def as_list(self) -> list[str]:
        return [tag.value for tag in self._tags]

    def copy(self) -> "UniqueTagList":
        return UniqueTagList(self._tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniqueTagList):
            return NotImplemented
        return self._tags == other._tags

    __hash__ = None

    def __repr__(self) -> str:
        return f"UniqueTagList({self.as_list()!r})"

    def __str__(self) -> str:
        return ", ".join(self.as_list())


class UniqueTagTypeMap:
    """TagType -> UniqueTagList, in insertion order.

    Lists handed out by the map are copies; the map is only changed through its
    own methods so that no empty category can be left behind. A read-only copy
    raises TypeError from every mutator.
    """

    def __init__(self, groups: Mapping[TagType, Iterable[Tag]] | None = None) -> None:
        self._map: dict[TagType, UniqueTagList] = {}
        self._read_only = False
        if groups:
            self.set_tag_type_map(groups)

    def _check_writable(self) -> None:
        if self._read_only:
            raise TypeError("This tag map is read-only; change a copy instead.")

    def contains(self, tag_type: TagType) -> bool:
        return tag_type in self._map

    def _stored_type(self, tag_type: TagType) -> TagType:
        for stored in self._map:
            if stored == tag_type:
                return stored
        raise TagTypeNotFoundError(f"Tag type {tag_type} does not exist.")

    def get(self, tag_type: TagType) -> UniqueTagList:
        if tag_type not in self._map:
            raise TagTypeNotFoundError(f"Tag type {tag_type} does not exist.")
        return self._map[tag_type].copy()

    def add_tag(self, tag_type: TagType, tag: Tag) -> None:
        """Add a tag, creating the category if needed. Raises DuplicateTagError if present."""
        self._check_writable()
        if tag_type not in self._map:
            self._map[tag_type] = UniqueTagList([tag])
            return
        self._map[tag_type].add(tag)

    def remove_tag(self, tag_type: TagType, tag: Tag) -> None:
        """Remove a tag; drops the category when it was the last one."""
        self._check_writable()
        if tag_type not in self._map:
            raise TagNotFoundError(f"Tag type {tag_type} does not exist.")
        tags = self._map[tag_type]
        if not tags.contains(tag):
            raise TagNotFoundError(f"Tag {tag} does not exist under {tag_type}.")
        tags.remove(tag)
        if not tags:
            del self._map[tag_type]

    def remove_tag_type(self, tag_type: TagType) -> None:
        self._check_writable()
        if tag_type not in self._map:
            raise TagTypeNotFoundError(f"Tag type {tag_type} does not exist.")
        del self._map[tag_type]

    def rename_tag_type(self, old: TagType, new: TagType) -> None:
        """Re-key the old category under the new tag type, keeping its position.

        Raises DuplicateTagTypeError when a different category already has the new name;
        categories are never merged.
        """
        self._check_writable()
        self._stored_type(old)
        if new != old and new in self._map:
            raise DuplicateTagTypeError(f"Tag type {new} already exists.")
        self._map = {
            (new if tag_type == old else tag_type): tags for tag_type, tags in self._map.items()
        }

    def set_tag_type_map(self, groups: "Mapping[TagType, Iterable[Tag]] | UniqueTagTypeMap") -> None:
        """Replace every category at once. Nothing changes if any group is invalid."""
        self._check_writable()
        items = groups.items() if not isinstance(groups, UniqueTagTypeMap) else groups._map.items()
        replacement: dict[TagType, UniqueTagList] = {}
        for tag_type, tags in items:
            if tag_type in replacement:
                raise DuplicateTagTypeError(f"Tag type {tag_type} is given more than once.")
            tag_list = UniqueTagList(tags)
            if tag_list:
                replacement[tag_type] = tag_list
        self._map = replacement

    def tag_types(self) -> list[TagType]:
        return list(self._map)

    def items(self) -> list[tuple[TagType, UniqueTagList]]:
        return [(tag_type, tags.copy()) for tag_type, tags in self._map.items()]

    def tag_count(self) -> int:
        return sum(len(tags) for tags in self._map.values())

    def copy(self, read_only: bool = False) -> "UniqueTagTypeMap":
        clone = UniqueTagTypeMap()
        clone._map = {tag_type: tags.copy() for tag_type, tags in self._map.items()}
        clone._read_only = read_only
        return clone

    @property
    def read_only(self) -> bool:
        return self._read_only

    def __len__(self) -> int:
        return len(self._map)

    def __bool__(self) -> bool:
        return bool(self._map)

    def __iter__(self) -> Iterator[TagType]:
        return iter(list(self._map))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniqueTagTypeMap):
            return NotImplemented
        return self._map == other._map

    __hash__ = None

    def __repr__(self) -> str:
        inner = ", ".join(f"{t.name}: {tags.as_list()!r}" for t, tags in self._map.items())
        return f"UniqueTagTypeMap({{{inner}}})"

    def __str__(self) -> str:
        return "; ".join(f"{t.name}: {tags}" for t, tags in self._map.items())
