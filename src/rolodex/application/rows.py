"""Export rows: each person becomes a block of label/value rows followed by an empty row."""

from collections.abc import Iterable

from rolodex.domain import Person

TAG_LABEL_PREFIX = "Tag:"


def person_to_rows(person: Person) -> list[list[str]]:
    rows = [
        ["Name", person.name.value],
        ["Phone", person.phone.value],
        ["Email", person.email.value],
        ["Address", person.address.value],
        ["Status", person.status.value],
        ["Note", person.note.value],
    ]
    for tag_type, tags in person.tags.items():
        rows.append([TAG_LABEL_PREFIX + tag_type.name, *tags.as_list()])
    rows.append(["Rating", person.rating.value])
    rows.append(["Links", *(link.value for link in person.links)])
    rows.append([])
    return rows


def to_export_rows(persons: Iterable[Person]) -> list[list[str]]:
    return [row for person in persons for row in person_to_rows(person)]
