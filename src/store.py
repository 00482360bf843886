"""In-memory storage for people and relationships."""

import logging
import uuid
from collections.abc import Callable
from dataclasses import replace

from errors import InvalidIdError
from models import ChangeEvent, Person, Relationship

logger = logging.getLogger(__name__)

Listener = Callable[[ChangeEvent], None]

# Reserved for derived ids such as "sibling:{viewer}:{other}"
ID_SEPARATOR = ":"


def new_id(prefix: str = "") -> str:
    """Generate a unique opaque identifier."""
    return f"{prefix}{uuid.uuid4().hex[:12]}"


def check_id(kind: str, item_id: str, taken) -> None:
    if ID_SEPARATOR in item_id:
        raise InvalidIdError(f"{kind} id {item_id!r} may not contain {ID_SEPARATOR!r}")
    if item_id in taken:
        raise InvalidIdError(f"{kind} id {item_id!r} is already in use")


class FamilyStore:
    """
    Owns the person and relationship collections.

    Reads always return copies, so callers cannot change stored state except
    through the mutation methods. Every mutation is published to subscribers
    after it has completed.
    """

    def __init__(self):
        self._persons: dict[str, Person] = {}
        self._relationships: dict[str, Relationship] = {}
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, kind: str, *ids: str):
        event = ChangeEvent(kind=kind, ids=tuple(ids))
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def get_all(self) -> list[Person]:
        return [replace(p) for p in self._persons.values()]

    def get_by_id(self, person_id: str) -> Person | None:
        person = self._persons.get(person_id)
        return replace(person) if person else None

    def contains(self, person_id: str) -> bool:
        return person_id in self._persons

    def add(self, person: Person) -> str:
        """
        Store a new person, generating an id when it has none. Returns the id.

        Raises InvalidIdError when the given id is already in use or contains
        the reserved separator; stored people are never overwritten.
        """
        person = replace(person, id=person.id or new_id("p"))
        check_id("Person", person.id, self._persons)
        self._persons[person.id] = person
        logger.info(f"Added person {person.id} ({person.full_name})")
        self._publish("person_added", person.id)
        return person.id

    def update(self, person: Person) -> bool:
        """Replace a stored person. Unknown ids are a no-op and return False."""
        if person.id not in self._persons:
            logger.warning(f"Cannot update unknown person {person.id}")
            return False
        self._persons[person.id] = replace(person)
        logger.info(f"Updated person {person.id}")
        self._publish("person_updated", person.id)
        return True

    def delete(self, person_id: str) -> bool:
        """Delete a person and every relationship touching them."""
        if person_id not in self._persons:
            logger.debug(f"Delete of unknown person {person_id} ignored")
            return False
        del self._persons[person_id]
        dropped = [rid for rid, r in self._relationships.items() if r.touches(person_id)]
        for rid in dropped:
            del self._relationships[rid]
        logger.info(f"Deleted person {person_id} and {len(dropped)} relationships")
        self._publish("person_deleted", person_id, *dropped)
        return True

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def get_relationships(self) -> list[Relationship]:
        return [replace(r) for r in self._relationships.values()]

    def get_relationship(self, relationship_id: str) -> Relationship | None:
        rel = self._relationships.get(relationship_id)
        return replace(rel) if rel else None

    def relationships_between(self, a: str, b: str) -> list[Relationship]:
        return [
            replace(r)
            for r in self._relationships.values()
            if {r.source_id, r.target_id} == {a, b}
        ]

    def find_relationship(self, source_id: str, target_id: str, rel_type) -> Relationship | None:
        for r in self._relationships.values():
            if r.source_id == source_id and r.target_id == target_id and r.type == rel_type:
                return replace(r)
        return None

    def add_relationship(self, relationship: Relationship) -> str:
        """
        Store a relationship unless an identical (source, target, type) edge exists.

        Returns the id of the stored edge (the existing one for duplicates).
        A new edge whose id is already in use raises InvalidIdError.
        """
        existing = self.find_relationship(
            relationship.source_id, relationship.target_id, relationship.type
        )
        if existing:
            logger.debug(
                f"Relationship {relationship.source_id} -{relationship.type.value}-> "
                f"{relationship.target_id} already stored as {existing.id}"
            )
            return existing.id

        relationship = replace(relationship, id=relationship.id or new_id("r"))
        check_id("Relationship", relationship.id, self._relationships)
        self._relationships[relationship.id] = relationship
        logger.info(
            f"Added relationship {relationship.id}: {relationship.source_id} "
            f"-{relationship.type.value}-> {relationship.target_id}"
        )
        self._publish("relationship_added", relationship.id)
        return relationship.id

    def delete_relationships(self, relationship_ids: list[str]) -> int:
        """Delete several relationships with a single notification. Returns the count removed."""
        removed = [rid for rid in dict.fromkeys(relationship_ids) if rid in self._relationships]
        for rid in removed:
            del self._relationships[rid]
        if removed:
            logger.info(f"Deleted relationships {removed}")
            self._publish("relationship_deleted", *removed)
        return len(removed)

    def delete_relationship(self, relationship_id: str) -> bool:
        return self.delete_relationships([relationship_id]) == 1
