"""ContactBook: the record store commands execute against.

Holds the persons (through a PersonRepository), the tag type registry and the
current filter. Index arguments always refer to the filtered view. After every
change, subscribers receive an immutable snapshot of the filtered view.
"""

from collections.abc import Callable

from rolodex.application.ports import PersonRepository
from rolodex.application.predicates import show_all
from rolodex.domain import Person, TagTypeRegistry
from rolodex.domain.errors import InvalidIndexError


Snapshot = tuple[Person, ...]
Listener = Callable[[Snapshot], None]
PersonPredicate = Callable[[Person], bool]


class ContactBook:
    def __init__(self, repository: PersonRepository, tag_types: TagTypeRegistry) -> None:
        self._repo = repository
        self._tag_types = tag_types
        self._predicate: PersonPredicate = show_all
        self._listeners: list[Listener] = []

    @property
    def tag_types(self) -> TagTypeRegistry:
        return self._tag_types

    # --- views ---

    def persons(self) -> Snapshot:
        return tuple(self._repo.list_all())

    def filtered(self) -> Snapshot:
        return tuple(p for p in self._repo.list_all() if self._predicate(p))

    def person_at(self, index: int) -> Person:
        """Resolve a one-based index against the filtered view."""
        view = self.filtered()
        if index < 1 or index > len(view):
            raise InvalidIndexError()
        return view[index - 1]

    def has_person(self, person: Person) -> bool:
        return self._repo.contains(person)

    # --- mutations ---

    def update_filter(self, predicate: PersonPredicate | None) -> None:
        self._predicate = predicate or show_all
        self._notify()

    def add_person(self, person: Person) -> None:
        self._repo.add(person)
        self._predicate = show_all
        self._notify()

    def set_person(self, target: Person, edited: Person) -> None:
        self._repo.set_person(target, edited)
        self._notify()

    def delete_person(self, target: Person) -> None:
        self._repo.remove(target)
        self._notify()

    def set_persons(self, persons: list[Person]) -> None:
        self._repo.set_all(persons)
        self._notify()

    # --- change notification ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.filtered()
        for listener in list(self._listeners):
            listener(snapshot)
