"""Shared fixtures: a small tag type registry and a book with two persons."""

import pytest

from rolodex.application import ContactBook
from rolodex.domain import (
    Address,
    Email,
    Name,
    Person,
    Phone,
    Prefix,
    Rating,
    Tag,
    TagType,
    TagTypeRegistry,
    UniqueTagTypeMap,
)
from rolodex.infrastructure import InMemoryPersonRepository

SKILL = TagType("Skill", Prefix("s/"))
DEGREE = TagType("Degree", Prefix("d/"))


def _make_person(
    name: str = "Alex Yeoh",
    phone: str = "87438807",
    email: str = "alexyeoh@example.com",
    address: str = "Blk 30 Geylang Street 29, #06-40",
    rating: str = "0",
    tags: dict[TagType, list[str]] | None = None,
) -> Person:
    tag_map = UniqueTagTypeMap(
        {tag_type: [Tag(t) for t in values] for tag_type, values in (tags or {}).items()}
    )
    return Person(
        name=Name(name),
        phone=Phone(phone),
        email=Email(email),
        address=Address(address),
        rating=Rating(rating),
        tags=tag_map,
    )


@pytest.fixture
def make_person():
    return _make_person


@pytest.fixture
def tag_types() -> TagTypeRegistry:
    return TagTypeRegistry([SKILL, DEGREE])


@pytest.fixture
def alex() -> Person:
    return _make_person(rating="3", tags={SKILL: ["Python"]})


@pytest.fixture
def bernice() -> Person:
    return _make_person(
        name="Bernice Yu",
        phone="99272758",
        email="berniceyu@example.com",
        address="Blk 30 Lorong 3 Serangoon Gardens, #07-18",
        tags={SKILL: ["Java", "Go"], DEGREE: ["Bachelors"]},
    )


@pytest.fixture
def book(tag_types: TagTypeRegistry, alex: Person, bernice: Person) -> ContactBook:
    return ContactBook(InMemoryPersonRepository([alex, bernice]), tag_types)
