"""Person identity, equality and immutability."""

import dataclasses

import pytest

from rolodex.application import ContactBook
from rolodex.domain import Link, Name, Note, Person, Rating, Status, Tag, TagTypeRegistry


def test_is_same_person_is_name_only(alex: Person, make_person) -> None:
    other = make_person(phone="99999999", email="other@example.com", address="Elsewhere")
    assert alex.is_same_person(other)
    assert other.is_same_person(alex)
    assert alex != other


def test_is_same_person_reflexive_and_case_sensitive(alex: Person, make_person) -> None:
    assert alex.is_same_person(alex)
    assert not alex.is_same_person(make_person(name="alex yeoh"))
    assert not alex.is_same_person(None)


def test_equality_compares_every_field(alex: Person) -> None:
    assert alex == alex.with_changes()
    assert alex != alex.with_changes(note=Note("met at career fair"))
    assert alex != alex.with_changes(rating=Rating("9"))


def test_defaults(make_person) -> None:
    person = make_person()
    assert person.status == Status()
    assert person.note.value == ""
    assert person.rating.value == "0"
    assert person.links == ()
    assert not person.tags


def test_person_is_frozen(alex: Person) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        alex.name = Name("Someone Else")


def test_tags_are_private_to_the_person(alex: Person, tag_types: TagTypeRegistry) -> None:
    skill = tag_types.find("Skill")
    tags = alex.tag_map
    tags.add_tag(skill, Tag("Go"))
    assert alex.tags.get(skill).as_list() == ["Python"]

    edited = alex.with_changes(tags=tags)
    tags.add_tag(skill, Tag("Rust"))
    assert edited.tags.get(skill).as_list() == ["Python", "Go"]


def test_tags_attribute_is_read_only(book: ContactBook, tag_types: TagTypeRegistry) -> None:
    skill = tag_types.find("Skill")
    alex = book.person_at(1)
    assert alex.tags.read_only
    with pytest.raises(TypeError, match="read-only"):
        alex.tags.add_tag(skill, Tag("Go"))
    with pytest.raises(TypeError):
        alex.tags.remove_tag_type(skill)
    assert book.person_at(1).tags.get(skill).as_list() == ["Python"]
    assert not alex.tag_map.read_only


def test_links_are_deduplicated(make_person) -> None:
    link = Link("https://github.com/alex")
    person = make_person().with_changes(links=(link, Link("https://example.com"), link))
    assert person.links == (link, Link("https://example.com"))


def test_searchable_fields(bernice: Person) -> None:
    fields = bernice.searchable_fields()
    assert fields["name"] == ["Bernice Yu"]
    assert fields["tag:skill"] == ["Java", "Go"]
    assert fields["tag:degree"] == ["Bachelors"]
    assert fields["link"] == []


def test_str_lists_fields(bernice: Person) -> None:
    text = str(bernice)
    assert text.startswith("Bernice Yu; Phone: 99272758")
    assert "Tags: Skill: Java, Go; Degree: Bachelors" in text
    assert "Rating: 0" in text
