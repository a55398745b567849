"""JSON file storage for the contact book.

Document shape:
{"tagTypes": [{"name": "Skill", "prefix": "s/"}],
 "persons": [{"name": ..., "tags": [["Skill", "Java", "Go"]], ...}]}
Each tag group lists the tag type name first, then its tags.
"""

import contextlib
import logging
import os
from pathlib import Path

import pydantic
from pydantic import BaseModel, ConfigDict, Field

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
    UniqueTagTypeMap,
)
from rolodex.domain.errors import (
    DataLoadingError,
    DuplicatePersonError,
    MissingFieldError,
    RolodexError,
    SaveFailedError,
    TagTypeNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _derive_prefix(name: str, tag_types: TagTypeRegistry) -> Prefix:
    """Prefix for a tag type found in data but not registered: lowercase initials, numbered on clash."""
    initials = "".join(word[0] for word in name.split() if word[0].isalpha()).lower() or "t"
    candidate = Prefix(initials)
    n = 2
    while candidate in RESERVED_PREFIXES or tag_types.has_prefix(candidate):
        candidate = Prefix(f"{initials}{n}")
        n += 1
    return candidate


class JsonAdaptedTagType(BaseModel):
    name: str
    prefix: str

    @classmethod
    def from_model(cls, tag_type: TagType) -> "JsonAdaptedTagType":
        return cls(name=tag_type.name, prefix=str(tag_type.prefix))

    def to_model_type(self) -> TagType:
        return TagType(self.name, Prefix(self.prefix))


class JsonAdaptedPerson(BaseModel):
    """JSON-friendly version of Person. Required fields are checked in to_model_type."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    status: str | None = None
    note: str | None = None
    rating: str | None = None
    links: list[str] = Field(default_factory=list)
    tags: list[list[str]] = Field(default_factory=list)

    @classmethod
    def from_model(cls, person: Person) -> "JsonAdaptedPerson":
        return cls(
            name=person.name.value,
            phone=person.phone.value,
            email=person.email.value,
            address=person.address.value,
            status=person.status.value,
            note=person.note.value,
            rating=person.rating.value,
            links=[link.value for link in person.links],
            tags=[[tag_type.name, *tags.as_list()] for tag_type, tags in person.tags.items()],
        )

    def to_model_type(self, tag_types: TagTypeRegistry) -> Person:
        """Build the Person. Registers unknown tag type names in tag_types.

        Raises MissingFieldError for absent required fields and ValidationError for bad values.
        """
        required = (
            ("name", Name),
            ("phone", Phone),
            ("email", Email),
            ("address", Address),
            ("status", Status),
            ("note", Note),
        )
        values = {}
        for field_name, value_type in required:
            raw = getattr(self, field_name)
            if raw is None:
                raise MissingFieldError(value_type.__name__)
            values[field_name] = value_type(raw)

        tags = UniqueTagTypeMap()
        for group in self.tags:
            if not group:
                raise ValidationError("Tag groups should start with their tag type name.")
            type_name, *tag_values = group
            tag_type = self._resolve_tag_type(type_name, tag_types)
            for value in tag_values:
                tags.add_tag(tag_type, Tag(value))

        return Person(
            **values,
            rating=Rating(self.rating) if self.rating is not None else Rating(),
            tags=tags,
            links=tuple(Link(value) for value in self.links),
        )

    @staticmethod
    def _resolve_tag_type(name: str, tag_types: TagTypeRegistry) -> TagType:
        try:
            return tag_types.find(name)
        except TagTypeNotFoundError:
            pass
        tag_type = TagType(name, _derive_prefix(name, tag_types))
        tag_types.register(tag_type)
        logger.info("Registered tag type %s with prefix %s found in saved data", tag_type.name, tag_type.prefix)
        return tag_type


class JsonSerializableContactBook(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tag_types: list[JsonAdaptedTagType] | None = Field(default=None, alias="tagTypes")
    persons: list[JsonAdaptedPerson] = Field(default_factory=list)

    @classmethod
    def from_model(cls, persons: list[Person], tag_types: TagTypeRegistry) -> "JsonSerializableContactBook":
        return cls(
            tag_types=[JsonAdaptedTagType.from_model(t) for t in tag_types],
            persons=[JsonAdaptedPerson.from_model(p) for p in persons],
        )

    def to_model_type(self, default_tag_types: TagTypeRegistry) -> tuple[list[Person], TagTypeRegistry]:
        if self.tag_types is None:
            registry = default_tag_types.copy()
        else:
            registry = TagTypeRegistry(t.to_model_type() for t in self.tag_types)
        persons = [p.to_model_type(registry) for p in self.persons]
        for i, person in enumerate(persons):
            if any(person.is_same_person(other) for other in persons[:i]):
                raise DuplicatePersonError(
                    f"Persons list contains duplicate person(s): {person.name}"
                )
        return persons, registry


class JsonContactBookStorage:
    """Reads and writes the contact book as one JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, default_tag_types: TagTypeRegistry) -> tuple[list[Person], TagTypeRegistry] | None:
        if not self._path.exists():
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
            document = JsonSerializableContactBook.model_validate_json(raw)
            return document.to_model_type(default_tag_types)
        except (OSError, UnicodeDecodeError) as e:
            raise DataLoadingError(f"Could not read {self._path}: {e}") from e
        except pydantic.ValidationError as e:
            raise DataLoadingError(f"{self._path} is not a valid contact book file: {e}") from e
        except RolodexError as e:
            raise DataLoadingError(f"Illegal values in {self._path}: {e.message}") from e

    def save(self, persons: list[Person], tag_types: TagTypeRegistry) -> None:
        """Write to a sibling temporary file, then swap it in, so a failed save keeps the old file."""
        payload = JsonSerializableContactBook.from_model(persons, tag_types).model_dump_json(
            by_alias=True, indent=2
        )
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise SaveFailedError(f"Could not save data to file {self._path}: {e}") from e
