"""Family tree operations used by the UI layer."""

import logging
from collections.abc import Callable

from errors import InvalidRelationshipError, NotFoundError
from graph import build_graph, parent_child, parents_of
from models import (
    PARENT_TYPES,
    SIBLING_TYPES,
    ChangeEvent,
    Gender,
    Person,
    Relationship,
    RelationshipType,
    RelationshipView,
    TreeNode,
)
from semantics import (
    child_type,
    coerce_type,
    gender_for_role,
    parse_synthetic_sibling_id,
    relationships_for,
    shared_parent_edges,
    sibling_type,
)
from store import FamilyStore
from tree import build_tree

logger = logging.getLogger(__name__)

PERSON_FIELDS = (
    "id",
    "first_name",
    "last_name",
    "gender",
    "middle_name",
    "birth_date",
    "death_date",
    "photo_url",
    "biography",
    "occupation",
    "location",
)


def person_from_fields(fields: dict) -> Person:
    """Build a Person from form fields, ignoring keys that are not Person attributes."""
    values = {k: v for k, v in fields.items() if k in PERSON_FIELDS and v is not None}
    values.setdefault("id", "")
    values.setdefault("first_name", "")
    values.setdefault("last_name", "")
    if "gender" in values:
        values["gender"] = Gender(values["gender"])
    return Person(**values)


class FamilyTreeService:
    """Facade over a FamilyStore: queries, tree derivation and relationship editing."""

    def __init__(self, store: FamilyStore | None = None):
        self.store = store if store is not None else FamilyStore()
        self._selected_id: str | None = None

    def subscribe(self, listener: Callable[[ChangeEvent], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_people(self) -> list[Person]:
        return self.store.get_all()

    def list_relationships(self) -> list[Relationship]:
        return self.store.get_relationships()

    def get_person(self, person_id: str) -> Person | None:
        return self.store.get_by_id(person_id)

    def set_selected(self, person: Person | None):
        self._selected_id = person.id if person else None

    def get_selected(self) -> Person | None:
        if self._selected_id is None:
            return None
        return self.store.get_by_id(self._selected_id)

    def relationships_for(self, person_id: str) -> list[RelationshipView]:
        return relationships_for(self.store, person_id)

    def build_tree(self, root_hint_id: str) -> TreeNode | None:
        return build_tree(self.store, root_hint_id)

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def add_person(self, **fields) -> str:
        return self.store.add(person_from_fields(fields))

    def update_person(self, person: Person) -> bool:
        return self.store.update(person)

    def delete_person(self, person_id: str) -> bool:
        deleted = self.store.delete(person_id)
        if deleted and self._selected_id == person_id:
            self._selected_id = None
        return deleted

    def add_member(self, relative_id: str, intended_type: RelationshipType | str, **fields) -> str:
        """
        Add a new person related to an existing one, as the add-member dialog does.

        `intended_type` is the new person's role relative to `relative_id`
        (e.g. 'mother' means the new person is the relative's mother). When no
        gender is given it is taken from the role.
        """
        rel_type = coerce_type(intended_type)
        if not self.store.contains(relative_id):
            raise NotFoundError("Person", relative_id)
        if fields.get("gender") is None:
            fields["gender"] = gender_for_role(rel_type)
        new_id = self.add_person(**fields)
        self.add_relationship(relative_id, new_id, rel_type)
        return new_id

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def _require(self, person_id: str) -> Person:
        person = self.store.get_by_id(person_id)
        if person is None:
            raise NotFoundError("Person", person_id)
        return person

    def _store_edge(self, source: Person, target: Person, rel_type: RelationshipType) -> str:
        return self.store.add_relationship(
            Relationship(
                id="",
                source_id=source.id,
                target_id=target.id,
                type=rel_type,
                gender=source.gender,
            )
        )

    def add_relationship(
        self, source_id: str, target_id: str, intended_type: RelationshipType | str
    ) -> list[str]:
        """
        Record that `target_id` is the `intended_type` of `source_id`.

        Parent intents are stored as the canonical parent -> child edge. A
        sibling is attached to each of the source's parents; only when the
        source has no recorded parent is a mutual pair of sibling edges stored.
        Returns the ids of the stored edges.
        """
        rel_type = coerce_type(intended_type)
        if source_id == target_id:
            raise InvalidRelationshipError(f"Cannot relate {source_id!r} to themselves")
        source = self._require(source_id)
        target = self._require(target_id)

        if rel_type in PARENT_TYPES:
            return [self._store_edge(target, source, child_type(source.gender))]

        if rel_type in SIBLING_TYPES:
            parent_ids = parents_of(build_graph(self.store), source_id)
            if parent_ids:
                logger.info(f"Attaching {target_id} to the parents of {source_id}: {parent_ids}")
                return [
                    self._store_edge(self._require(pid), target, child_type(target.gender))
                    for pid in parent_ids
                    if pid != target_id
                ]
            return [
                self._store_edge(source, target, rel_type),
                self._store_edge(target, source, sibling_type(source.gender)),
            ]

        return [self._store_edge(source, target, rel_type)]

    def delete_relationship(self, relationship_id: str) -> int:
        """
        Delete a relationship by id. Returns the number of stored edges removed.

        A derived sibling id removes the shared-parent edges behind it. A
        parent/child edge removes every edge stored between that ordered pair,
        and an explicit sibling edge removes its mutual partner as well.
        Unknown ids are ignored.
        """
        synthetic = parse_synthetic_sibling_id(relationship_id)
        if synthetic:
            viewer_id, other_id = synthetic
            edges = shared_parent_edges(build_graph(self.store), viewer_id, other_id)
            logger.info(f"Removing derived sibling link {viewer_id} ~ {other_id}")
            return self.store.delete_relationships([r.id for r in edges])

        rel = self.store.get_relationship(relationship_id)
        if rel is None:
            logger.debug(f"Delete of unknown relationship {relationship_id} ignored")
            return 0

        if parent_child(rel):
            doomed = [
                r.id
                for r in self.store.relationships_between(rel.source_id, rel.target_id)
                if r.source_id == rel.source_id
            ]
        elif rel.type in SIBLING_TYPES:
            doomed = [
                r.id
                for r in self.store.relationships_between(rel.source_id, rel.target_id)
                if r.type in SIBLING_TYPES
            ]
        else:
            doomed = [rel.id]
        return self.store.delete_relationships(doomed)
