"""Tests for display helpers on the data model."""

from datetime import date

import pytest

from conftest import make_person
from models import Gender, RelationshipType, gender_label, relationship_icon, relationship_label
from semantics import relationships_for

T = RelationshipType


class TestLabels:
    """Tests for relationship and gender label lookups."""

    @pytest.mark.parametrize(
        "rel_type, label, icon",
        [
            (T.FATHER, "Father", "man"),
            (T.DAUGHTER, "Daughter", "girl"),
            (T.SISTER, "Sister", "woman"),
            (T.SPOUSE, "Spouse", "favorite"),
            ("ex-spouse", "Former spouse", "heart_broken"),
        ],
    )
    def test_relationship_lookups(self, rel_type, label, icon):
        assert relationship_label(rel_type) == label
        assert relationship_icon(rel_type) == icon

    def test_unknown_relationship_type(self):
        assert relationship_label("cousin") == "cousin"
        assert relationship_icon("cousin") == "person"

    def test_gender_labels(self):
        assert gender_label(Gender.MALE) == "Male"
        assert gender_label("female") == "Female"
        assert gender_label(Gender.OTHER) == "Other"
        assert gender_label(None) == "Not specified"

    def test_views_carry_labels(self, family):
        views = {v.person.id: v for v in relationships_for(family, "1")}
        assert views["3"].label == "Father"
        assert views["4"].icon == "woman"
        assert views["9"].label == "Sister"


class TestAge:
    """Tests for Person.age."""

    def test_birthday_not_yet_reached(self):
        person = make_person("a", birth_date="1991-03-23")
        assert person.age(date(2024, 3, 22)) == 32
        assert person.age(date(2024, 3, 23)) == 33

    def test_unknown_birth_date(self):
        assert make_person("a").age(date(2024, 1, 1)) is None

    def test_age_at_death(self):
        person = make_person("a", birth_date="1900-06-01")
        person.death_date = "1950-05-31"
        assert person.age(date(2024, 1, 1)) == 49

    def test_defaults_to_today(self):
        person = make_person("a", birth_date="2000-01-01")
        assert person.age() == date.today().year - 2000
