"""In-memory implementation of PersonRepository."""

from rolodex.domain import Person
from rolodex.domain.errors import DuplicatePersonError, PersonNotFoundError


class InMemoryPersonRepository:
    """Stores persons in memory. Order preserved by insertion; unique by name."""

    def __init__(self, persons: list[Person] | None = None) -> None:
        self._persons: list[Person] = []
        if persons:
            self.set_all(persons)

    def _index_of(self, person: Person) -> int:
        for i, stored in enumerate(self._persons):
            if stored.is_same_person(person):
                return i
        raise PersonNotFoundError(f"{person.name} is not in the contact book.")

    def add(self, person: Person) -> None:
        if self.contains(person):
            raise DuplicatePersonError()
        self._persons.append(person)

    def set_person(self, target: Person, edited: Person) -> None:
        i = self._index_of(target)
        if not target.is_same_person(edited) and self.contains(edited):
            raise DuplicatePersonError()
        self._persons[i] = edited

    def remove(self, person: Person) -> None:
        # Exact match: a stale copy of an edited person must not delete the current one.
        for i, stored in enumerate(self._persons):
            if stored == person:
                del self._persons[i]
                return
        raise PersonNotFoundError(f"{person.name} is not in the contact book.")

    def contains(self, person: Person) -> bool:
        return any(stored.is_same_person(person) for stored in self._persons)

    def list_all(self) -> list[Person]:
        return list(self._persons)

    def set_all(self, persons: list[Person]) -> None:
        staged: list[Person] = []
        for person in persons:
            if any(existing.is_same_person(person) for existing in staged):
                raise DuplicatePersonError(
                    f"Persons list contains duplicate person(s): {person.name}"
                )
            staged.append(person)
        self._persons = staged
