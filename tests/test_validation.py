"""Tests for family data validation."""

from conftest import make_person
from models import Relationship, RelationshipType
from validation import validate_family

T = RelationshipType


def parent_and_kid(store, parent_birth, kid_birth):
    store.add(make_person("dad", birth_date=parent_birth))
    store.add(make_person("kid", birth_date=kid_birth))
    store.add_relationship(Relationship("r", "dad", "kid", T.SON))


class TestValidateFamily:
    """Tests for validate_family warnings."""

    def test_demo_family_is_clean(self, family):
        assert validate_family(family) == []

    def test_dangling_relationship(self, store):
        store.add(make_person("a"))
        store.add_relationship(Relationship("x", "a", "ghost", T.SON))
        [warning] = validate_family(store)
        assert warning.startswith("Dangling: relationship x")

    def test_self_relationship(self, store):
        store.add(make_person("a"))
        store.add_relationship(Relationship("x", "a", "a", T.SPOUSE))
        [warning] = validate_family(store)
        assert warning.startswith("Invalid: relationship x")

    def test_non_canonical_parent_edge(self, store):
        store.add(make_person("kid"))
        store.add(make_person("dad"))
        store.add_relationship(Relationship("x", "kid", "dad", T.FATHER))
        [warning] = validate_family(store)
        assert warning.startswith("Non-canonical: relationship x")

    def test_cycle(self, store):
        store.add(make_person("a"))
        store.add(make_person("b"))
        store.add_relationship(Relationship("ab", "a", "b", T.SON))
        store.add_relationship(Relationship("ba", "b", "a", T.SON))
        warnings = validate_family(store)
        assert any(w.startswith("Cycle detected") for w in warnings)

    def test_child_born_before_parent(self, store):
        parent_and_kid(store, "1950-01-01", "1940-01-01")
        assert validate_family(store) == ["Impossible: Kid Test born before parent Dad Test"]

    def test_very_young_parent(self, store):
        parent_and_kid(store, "1950-01-01", "1958-06-01")
        [warning] = validate_family(store)
        assert warning.startswith("Suspicious: Dad Test was less than 12")

    def test_missing_dates_are_not_checked(self, store):
        parent_and_kid(store, None, "1940-01-01")
        assert validate_family(store) == []

    def test_death_before_birth(self, store):
        person = make_person("a", birth_date="1950-01-01")
        person.death_date = "1949-01-01"
        store.add(person)
        assert validate_family(store) == ["Impossible: A Test died before being born"]
