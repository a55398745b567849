"""Domain entity: Person."""

import dataclasses
from dataclasses import dataclass, field

from rolodex.domain.tags import UniqueTagTypeMap
from rolodex.domain.values import Address, Email, Link, Name, Note, Phone, Rating, Status


@dataclass(frozen=True)
class Person:
    """
    A contact in the book. Identity is the name alone (see is_same_person);
    equality compares every field.
    Persons are never changed in place: edits build a new Person via with_changes.
    """

    name: Name
    phone: Phone
    email: Email
    address: Address
    status: Status = field(default_factory=Status)
    note: Note = field(default_factory=Note)
    rating: Rating = field(default_factory=Rating)
    tags: UniqueTagTypeMap = field(default_factory=UniqueTagTypeMap, hash=False)
    links: tuple[Link, ...] = ()

    def __post_init__(self):
        # Own a read-only copy so neither the caller nor a reader can change this person later.
        object.__setattr__(self, "tags", self.tags.copy(read_only=True))
        object.__setattr__(self, "links", tuple(dict.fromkeys(self.links)))

    def is_same_person(self, other: "Person | None") -> bool:
        """True when both persons have the same name. Weaker than ==."""
        if other is self:
            return True
        return other is not None and other.name == self.name

    def with_changes(self, **changes) -> "Person":
        return dataclasses.replace(self, **changes)

    @property
    def tag_map(self) -> UniqueTagTypeMap:
        """A copy of the tag map, safe to mutate."""
        return self.tags.copy()

    def searchable_fields(self) -> dict[str, list[str]]:
        """Field name -> texts, used by find and delete predicates."""
        fields = {
            "name": [self.name.value],
            "phone": [self.phone.value],
            "email": [self.email.value],
            "address": [self.address.value],
            "status": [self.status.value],
            "note": [self.note.value],
            "link": [link.value for link in self.links],
        }
        for tag_type, tag_list in self.tags.items():
            fields["tag:" + tag_type.key] = tag_list.as_list()
        return fields

    def __str__(self) -> str:
        parts = [
            str(self.name),
            f"Phone: {self.phone}",
            f"Email: {self.email}",
            f"Address: {self.address}",
        ]
        if self.tags:
            parts.append(f"Tags: {self.tags}")
        parts.append(f"Status: {self.status}")
        parts.append(f"Note: {self.note}")
        parts.append(f"Rating: {self.rating}")
        if self.links:
            parts.append("Links: " + " ".join(str(link) for link in self.links))
        return "; ".join(parts)
