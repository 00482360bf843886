"""Shared fixtures for family tree tests."""

import pytest

from models import Gender, Person
from sample_data import populate
from service import FamilyTreeService
from store import FamilyStore


def make_person(person_id: str, gender: Gender = Gender.MALE, birth_date: str | None = None) -> Person:
    return Person(
        id=person_id,
        first_name=person_id.capitalize(),
        last_name="Test",
        gender=gender,
        birth_date=birth_date,
    )


@pytest.fixture
def store():
    """An empty store."""
    return FamilyStore()


@pytest.fixture
def family():
    """Store loaded with the demo family (ids '1'..'12', relationships 'r1'..'r17')."""
    return populate(FamilyStore())


@pytest.fixture
def service(family):
    """Service over the demo family."""
    return FamilyTreeService(family)


@pytest.fixture
def empty_service(store):
    return FamilyTreeService(store)
