"""
Relationship semantics: how a stored edge reads from either party's side.

A stored edge's type describes the target as seen from the source, so
"A -daughter-> B" reads as "B is A's daughter". Seen from B the same edge
reads "A is B's father" or "A is B's mother", depending on A's gender.
"""

import logging
from dataclasses import replace

import networkx as nx

from errors import InvalidRelationshipError
from graph import build_graph, edges_touching, parent_child, parents_of, shared_parent_siblings
from models import (
    SPOUSE_TYPES,
    Gender,
    Person,
    Relationship,
    RelationshipType,
    RelationshipView,
)
from store import ID_SEPARATOR, FamilyStore

logger = logging.getLogger(__name__)

SYNTHETIC_SIBLING_PREFIX = f"sibling{ID_SEPARATOR}"

# Inverse of a directed type, keyed by the gender of the person being described
INVERSIONS: dict[RelationshipType, tuple[RelationshipType, RelationshipType]] = {
    # (male, female/other)
    RelationshipType.FATHER: (RelationshipType.SON, RelationshipType.DAUGHTER),
    RelationshipType.MOTHER: (RelationshipType.SON, RelationshipType.DAUGHTER),
    RelationshipType.SON: (RelationshipType.FATHER, RelationshipType.MOTHER),
    RelationshipType.DAUGHTER: (RelationshipType.FATHER, RelationshipType.MOTHER),
    RelationshipType.BROTHER: (RelationshipType.BROTHER, RelationshipType.SISTER),
    RelationshipType.SISTER: (RelationshipType.BROTHER, RelationshipType.SISTER),
}

ROLE_GENDERS = {
    RelationshipType.FATHER: Gender.MALE,
    RelationshipType.SON: Gender.MALE,
    RelationshipType.BROTHER: Gender.MALE,
    RelationshipType.MOTHER: Gender.FEMALE,
    RelationshipType.DAUGHTER: Gender.FEMALE,
    RelationshipType.SISTER: Gender.FEMALE,
}


def coerce_type(value: RelationshipType | str) -> RelationshipType:
    """Accept an enum member or its string value ('ex-spouse', 'son', ...)."""
    try:
        return RelationshipType(value)
    except ValueError:
        raise InvalidRelationshipError(f"Unknown relationship type: {value!r}") from None


def gender_for_role(rel_type: RelationshipType) -> Gender:
    """Default gender of a new person added in the given role."""
    return ROLE_GENDERS.get(rel_type, Gender.OTHER)


def child_type(gender: Gender | None) -> RelationshipType:
    return RelationshipType.SON if gender == Gender.MALE else RelationshipType.DAUGHTER


def sibling_type(gender: Gender | None) -> RelationshipType:
    return RelationshipType.BROTHER if gender == Gender.MALE else RelationshipType.SISTER


def perceived_type(
    edge: Relationship, viewer_id: str, other_gender: Gender | None = None
) -> RelationshipType:
    """
    The type of `edge` as perceived by `viewer_id`.

    `other_gender` is the gender of the party the viewer is looking at; it
    defaults to the edge's gender hint (the source's gender). Unknown gender
    leaves directed types unchanged.
    """
    if viewer_id == edge.source_id:
        return edge.type
    if viewer_id != edge.target_id:
        raise InvalidRelationshipError(
            f"{viewer_id!r} is not a party to relationship {edge.id!r}"
        )

    if edge.type in SPOUSE_TYPES:
        return edge.type

    gender = other_gender if other_gender is not None else edge.gender
    if gender is None:
        return edge.type
    male, female = INVERSIONS[edge.type]
    return male if gender == Gender.MALE else female


def synthetic_sibling_id(viewer_id: str, other_id: str) -> str:
    return f"{SYNTHETIC_SIBLING_PREFIX}{viewer_id}{ID_SEPARATOR}{other_id}"


def parse_synthetic_sibling_id(relationship_id: str) -> tuple[str, str] | None:
    """Return (viewer_id, other_id) for a derived sibling id, else None."""
    if not relationship_id.startswith(SYNTHETIC_SIBLING_PREFIX):
        return None
    viewer_id, sep, other_id = relationship_id[len(SYNTHETIC_SIBLING_PREFIX):].partition(ID_SEPARATOR)
    if not sep or not viewer_id or not other_id or ID_SEPARATOR in other_id:
        return None
    return viewer_id, other_id


def shared_parent_edges(G: nx.MultiDiGraph, viewer_id: str, other_id: str) -> list[Relationship]:
    """The parent -> other_id edges that make other_id a sibling of viewer_id."""
    shared = set(parents_of(G, viewer_id)) & set(parents_of(G, other_id))
    edges = []
    for rel in edges_touching(G, other_id):
        pair = parent_child(rel)
        if pair and pair[1] == other_id and pair[0] in shared:
            edges.append(rel)
    return edges


def relationships_for(store: FamilyStore, person_id: str) -> list[RelationshipView]:
    """
    Every relationship of a person, typed from their side.

    Direct edges come first, in storage order, followed by siblings derived
    from shared parents that have no direct edge to the person.
    """
    if not store.contains(person_id):
        logger.debug(f"No relationships for unknown person {person_id}")
        return []

    G = build_graph(store)
    views: list[RelationshipView] = []
    directly_related: set[str] = set()

    for rel in edges_touching(G, person_id):
        other_id = rel.other(person_id)
        other: Person = G.nodes[other_id]["person"]
        directly_related.add(other_id)
        rel_type = perceived_type(rel, person_id, other.gender)
        views.append(RelationshipView(relationship=replace(rel, type=rel_type), person=other))

    for other_id in shared_parent_siblings(G, person_id):
        if other_id in directly_related:
            continue
        other = G.nodes[other_id]["person"]
        views.append(
            RelationshipView(
                relationship=Relationship(
                    id=synthetic_sibling_id(person_id, other_id),
                    source_id=person_id,
                    target_id=other_id,
                    type=sibling_type(other.gender),
                    gender=G.nodes[person_id]["gender"],
                ),
                person=other,
            )
        )

    return views
