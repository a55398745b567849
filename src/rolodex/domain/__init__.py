"""Domain layer: entities, value objects and tag structures. No dependencies on outer layers."""

from rolodex.domain.entities import Person
from rolodex.domain.registry import RESERVED_PREFIXES, TagTypeRegistry
from rolodex.domain.tags import Prefix, TagType, UniqueTagList, UniqueTagTypeMap
from rolodex.domain.values import (
    STATUSES,
    Address,
    Email,
    Link,
    Name,
    Note,
    Phone,
    Rating,
    Status,
    Tag,
)

__all__ = [
    "RESERVED_PREFIXES",
    "STATUSES",
    "Address",
    "Email",
    "Link",
    "Name",
    "Note",
    "Person",
    "Phone",
    "Prefix",
    "Rating",
    "Status",
    "Tag",
    "TagType",
    "TagTypeRegistry",
    "UniqueTagList",
    "UniqueTagTypeMap",
]
