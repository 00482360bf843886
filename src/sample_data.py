"""Demo family used by the command line and the tests."""

from models import Gender, Person, Relationship, RelationshipType
from store import FamilyStore

M, F = Gender.MALE, Gender.FEMALE

PEOPLE = [
    # Current generation
    Person("1", "Dmitry", "Mogilevtsev", M, "Alexandrovich", "1991-03-23",
           occupation="Programmer", location="Tyumen"),
    Person("2", "Maria", "Sedletskaya", F, "Sergeevna", "1990-01-23",
           occupation="Psychologist", location="Tyumen"),
    # Parents
    Person("3", "Alexander", "Mogilevtsev", M, "Vasilievich", "1965-06-30",
           occupation="Forklift driver", location="Novorossiysk"),
    Person("4", "Irina", "Mogilevtseva", F, "Nikolaevna", "1971-01-09",
           occupation="Notary", location="Novorossiysk"),
    # Children
    Person("5", "Arina", "Mogilevtseva", F, birth_date="2019-09-03", location="Tyumen"),
    Person("6", "Ksenia", "Mogilevtseva", F, birth_date="2014-04-02", location="Tyumen"),
    # Grandparents
    Person("7", "Nikolai", "Beda", M, "Sergeevich", "1944-11-01",
           occupation="Civil engineer", location="Novorossiysk"),
    Person("8", "Valentina", "Beda", F, "Ivanovna", "1946-08-17",
           occupation="Civil engineer", location="Novorossiysk"),
    Person("9", "Alyona", "Balalaeva", F, "Alexandrovna", "1992-05-18", location="Novorossiysk"),
    Person("10", "Vasily", "Mogilevtsev", M),
    Person("11", "Zoya", "Mogilevtseva", F),
    # Valentina's sister
    Person("12", "Lyubov", "Baeva", F, "Ivanovna", "1948-04-15",
           occupation="Teacher", location="Novorossiysk"),
]

# (id, source, target, type)
RELATIONSHIPS = [
    ("r1", "1", "2", RelationshipType.SPOUSE),
    ("r2", "1", "5", RelationshipType.DAUGHTER),
    ("r3", "2", "5", RelationshipType.DAUGHTER),
    ("r4", "1", "6", RelationshipType.DAUGHTER),
    ("r5", "2", "6", RelationshipType.DAUGHTER),
    ("r6", "3", "1", RelationshipType.SON),
    ("r7", "4", "1", RelationshipType.SON),
    ("r8", "3", "4", RelationshipType.SPOUSE),
    ("r9", "3", "9", RelationshipType.DAUGHTER),
    ("r10", "4", "9", RelationshipType.DAUGHTER),
    ("r11", "7", "4", RelationshipType.DAUGHTER),
    ("r12", "8", "4", RelationshipType.DAUGHTER),
    ("r13", "7", "8", RelationshipType.SPOUSE),
    ("r14", "10", "3", RelationshipType.SON),
    ("r15", "11", "3", RelationshipType.SON),
    ("r16", "10", "11", RelationshipType.SPOUSE),
    ("r17", "8", "12", RelationshipType.SISTER),
]


def populate(store: FamilyStore) -> FamilyStore:
    """Load the demo family into a store and return it."""
    genders = {}
    for person in PEOPLE:
        store.add(person)
        genders[person.id] = person.gender
    for rel_id, source_id, target_id, rel_type in RELATIONSHIPS:
        store.add_relationship(
            Relationship(rel_id, source_id, target_id, rel_type, gender=genders[source_id])
        )
    return store
