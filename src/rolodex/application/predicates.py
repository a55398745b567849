"""Search predicates used by find and delete."""

from dataclasses import dataclass

from rolodex.domain import Person


def _any_contains(keywords: tuple[str, ...], texts: list[str]) -> bool:
    folded = [text.casefold() for text in texts]
    return any(keyword.casefold() in text for keyword in keywords for text in folded)


@dataclass(frozen=True)
class PersonMatcher:
    """Case-insensitive substring match.

    keywords: matched against every field; any hit is enough.
    criteria: (field key, keywords) pairs, e.g. ("name", ("alex",)) or
    ("tag:skill", ("java",)); every criterion must have a hit in its field.
    """

    keywords: tuple[str, ...] = ()
    criteria: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def __call__(self, person: Person) -> bool:
        fields = person.searchable_fields()
        if self.keywords:
            every_text = [text for texts in fields.values() for text in texts]
            if not _any_contains(self.keywords, every_text):
                return False
        for field_key, keywords in self.criteria:
            if not _any_contains(keywords, fields.get(field_key, [])):
                return False
        return True

    def is_empty(self) -> bool:
        return not self.keywords and not self.criteria


def show_all(person: Person) -> bool:
    return True
