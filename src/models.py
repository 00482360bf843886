"""Data classes for family tree entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class RelationshipType(str, Enum):
    FATHER = "father"
    MOTHER = "mother"
    SON = "son"
    DAUGHTER = "daughter"
    BROTHER = "brother"
    SISTER = "sister"
    SPOUSE = "spouse"
    EX_SPOUSE = "ex-spouse"


# Canonical parent -> child storage types
CHILD_TYPES = frozenset({RelationshipType.SON, RelationshipType.DAUGHTER})
# Request-time intents meaning "the target is the source's parent"
PARENT_TYPES = frozenset({RelationshipType.FATHER, RelationshipType.MOTHER})
SIBLING_TYPES = frozenset({RelationshipType.BROTHER, RelationshipType.SISTER})
SPOUSE_TYPES = frozenset({RelationshipType.SPOUSE, RelationshipType.EX_SPOUSE})

GENDER_LABELS = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
    Gender.OTHER: "Other",
}

RELATIONSHIP_LABELS = {
    RelationshipType.FATHER: "Father",
    RelationshipType.MOTHER: "Mother",
    RelationshipType.SON: "Son",
    RelationshipType.DAUGHTER: "Daughter",
    RelationshipType.BROTHER: "Brother",
    RelationshipType.SISTER: "Sister",
    RelationshipType.SPOUSE: "Spouse",
    RelationshipType.EX_SPOUSE: "Former spouse",
}

# Material icon names for list views
RELATIONSHIP_ICONS = {
    RelationshipType.FATHER: "man",
    RelationshipType.MOTHER: "woman",
    RelationshipType.SON: "boy",
    RelationshipType.DAUGHTER: "girl",
    RelationshipType.BROTHER: "man",
    RelationshipType.SISTER: "woman",
    RelationshipType.SPOUSE: "favorite",
    RelationshipType.EX_SPOUSE: "heart_broken",
}


def gender_label(gender: Gender | str | None) -> str:
    try:
        return GENDER_LABELS[Gender(gender)]
    except ValueError:
        return "Not specified"


def relationship_label(rel_type: RelationshipType | str) -> str:
    """Display label for a relationship type; unknown values are shown as given."""
    try:
        return RELATIONSHIP_LABELS[RelationshipType(rel_type)]
    except ValueError:
        return str(rel_type)


def relationship_icon(rel_type: RelationshipType | str) -> str:
    try:
        return RELATIONSHIP_ICONS[RelationshipType(rel_type)]
    except ValueError:
        return "person"


@dataclass
class Person:
    id: str
    first_name: str
    last_name: str
    gender: Gender = Gender.OTHER
    middle_name: str | None = None
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    death_date: str | None = None  # ISO format YYYY-MM-DD or None
    photo_url: str | None = None
    biography: str = ""
    occupation: str = ""
    location: str = ""

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    def age(self, today: date | None = None) -> int | None:
        """
        Age in whole years on `today` (default: the current date), or at death
        for people with a death date. None when the birth date is unknown.
        """
        if not self.birth_date:
            return None
        birth = date.fromisoformat(self.birth_date)
        if self.death_date:
            today = date.fromisoformat(self.death_date)
        elif today is None:
            today = date.today()
        # One year less until the birthday has come round
        return today.year - birth.year - ((today.month, today.day) < (birth.month, birth.day))


@dataclass
class Relationship:
    """Directed, typed edge. The type describes the target as seen from the source."""

    id: str
    source_id: str
    target_id: str
    type: RelationshipType
    start_date: str | None = None
    end_date: str | None = None
    gender: Gender | None = None  # gender of the source person, when known

    def touches(self, person_id: str) -> bool:
        return person_id in (self.source_id, self.target_id)

    def other(self, person_id: str) -> str:
        return self.target_id if self.source_id == person_id else self.source_id


@dataclass
class RelationshipView:
    relationship: Relationship  # type adjusted for the viewer
    person: Person  # the other party

    @property
    def label(self) -> str:
        return relationship_label(self.relationship.type)

    @property
    def icon(self) -> str:
        return relationship_icon(self.relationship.type)


@dataclass
class TreeNode:
    person: Person
    children: list[TreeNode] = field(default_factory=list)
    parents: list[TreeNode] = field(default_factory=list)
    spouse: TreeNode | None = None
    siblings: list[TreeNode] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested, JSON-ready dict for web renderers."""
        p = self.person
        data: dict[str, Any] = {
            "id": p.id,
            "firstName": p.first_name,
            "lastName": p.last_name,
            "middleName": p.middle_name,
            "gender": p.gender.value,
            "birthDate": p.birth_date,
            "deathDate": p.death_date,
            "children": [c.to_dict() for c in self.children],
            "parents": [{"id": n.person.id, "name": n.person.full_name} for n in self.parents],
        }
        if self.spouse is not None:
            data["spouse"] = self.spouse.to_dict()
        if self.siblings is not None:
            data["siblings"] = [s.to_dict() for s in self.siblings]
        return data


@dataclass(frozen=True)
class ChangeEvent:
    kind: str  # person_added, person_updated, person_deleted, relationship_added, relationship_deleted
    ids: tuple[str, ...]
