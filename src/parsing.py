"""GEDCOM import and date handling utilities."""

import logging
import re
from pathlib import Path

from ged4py import GedcomReader

from models import Gender, Person, Relationship, RelationshipType
from semantics import child_type
from store import FamilyStore

logger = logging.getLogger(__name__)


# Month name mappings (abbreviations and full names)
MONTHS = [
    ("JAN", "JANUARY"),
    ("FEB", "FEBRUARY"),
    ("MAR", "MARCH"),
    ("APR", "APRIL"),
    ("MAY",),
    ("JUN", "JUNE"),
    ("JUL", "JULY"),
    ("AUG", "AUGUST"),
    ("SEP", "SEPT", "SEPTEMBER"),
    ("OCT", "OCTOBER"),
    ("NOV", "NOVEMBER"),
    ("DEC", "DECEMBER"),
]
MONTH_MAP = {name: number for number, names in enumerate(MONTHS, start=1) for name in names}

QUALIFIER_RE = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)

# (pattern, order of the captured groups); "M" groups may be month names
DATE_PATTERNS = [
    (re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), "YMD"),  # 1839-08-29
    (re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$"), "DMY"),  # 25 NOV 1954, 02 May1838
    (re.compile(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$"), "MDY"),  # April 17, 1850
    (re.compile(r"^([A-Za-z]+)\.?,?\s*(\d{4})$"), "MY"),  # NOV 1954, May, 1837
    (re.compile(r"^(\d{1,2})[-/\s](\d{1,2})[-/\s](\d{4})$"), "MDY"),  # 01-27-1920
    (re.compile(r"^(\d{4})$"), "Y"),  # 1698
]


def _month_number(value: str) -> int | None:
    if value.isdigit():
        return int(value)
    return MONTH_MAP.get(value.upper().rstrip("."))


def parse_date_string(date_str: str | None) -> str | None:
    """
    Parse a GEDCOM date string into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like "25 NOV 1954", "ABT 1905", "JAN 1905", "(05/15/1923)",
    "(April 17, 1850)" and "(About:1746-00-00)". Missing month or day parts
    default to 01.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = QUALIFIER_RE.sub("", s).strip()
    if not s:
        return None

    for pattern, order in DATE_PATTERNS:
        match = pattern.match(s)
        if not match:
            continue
        parts = dict(zip(order, match.groups()))
        year = int(parts["Y"])
        month = _month_number(parts["M"]) if "M" in parts else 1
        day = int(parts["D"]) if "D" in parts else 1
        if month is None:
            continue
        # Handle 00 month/day as defaults
        month = month or 1
        day = day or 1
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    return None


def parse_gedcom(filepath: Path) -> GedcomReader:
    """Parse a GEDCOM file and return the reader object."""
    return GedcomReader(str(filepath))


def extract_name_parts(indi) -> tuple[str, str | None, str]:
    """Extract first name, middle name(s) and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", None, "")

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        given, surname, _ = name_rec.value
    else:
        # Fallback: string format "Given /Surname/"
        given, _, rest = str(name_rec.value).partition("/")
        surname = rest.replace("/", "")

    given_parts = (given or "").split()
    first_name = given_parts[0] if given_parts else "Unknown"
    middle_name = " ".join(given_parts[1:]) or None
    return (first_name, middle_name, (surname or "").strip())


def extract_event_details(indi, tag: str) -> tuple[str | None, str | None]:
    """Extract date and place from an event tag (BIRT, DEAT, etc.)."""
    event = indi.sub_tag(tag)
    if event is None:
        return (None, None)

    date_rec = event.sub_tag("DATE")
    place_rec = event.sub_tag("PLAC")

    # Convert date value to string (ged4py may return DateValue objects)
    date_val = str(date_rec.value) if date_rec and date_rec.value else None
    place_val = str(place_rec.value) if place_rec and place_rec.value else None
    return (date_val, place_val)


def extract_gender(indi) -> Gender:
    sex_rec = indi.sub_tag("SEX")
    sex = sex_rec.value if sex_rec else None
    if sex == "M":
        return Gender.MALE
    if sex == "F":
        return Gender.FEMALE
    return Gender.OTHER


def load_gedcom(filepath: Path, store: FamilyStore) -> tuple[int, int]:
    """
    Import individuals and families from a GEDCOM file into the store.
    Ignores non-standard Ancestry-specific tags (starting with _).

    Returns the number of people and relationships added.
    """
    # GEDCOM xref -> store id, only needed while importing
    ids: dict[str, str] = {}
    genders: dict[str, Gender] = {}
    relationship_ids: set[str] = set()

    def add_edge(source_id: str, target_id: str, rel_type: RelationshipType):
        # Duplicate edges come back with the id already stored
        relationship_ids.add(
            store.add_relationship(
                Relationship(
                    id="",
                    source_id=source_id,
                    target_id=target_id,
                    type=rel_type,
                    gender=genders.get(source_id),
                )
            )
        )

    with parse_gedcom(filepath) as reader:
        # First pass: extract all individuals
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue

            first_name, middle_name, last_name = extract_name_parts(rec)
            birth_date_string, birth_place = extract_event_details(rec, "BIRT")
            death_date_string, _ = extract_event_details(rec, "DEAT")
            occupation = rec.sub_tag("OCCU")
            gender = extract_gender(rec)

            person_id = store.add(
                Person(
                    id="",
                    first_name=first_name,
                    middle_name=middle_name,
                    last_name=last_name,
                    gender=gender,
                    birth_date=parse_date_string(birth_date_string),
                    death_date=parse_date_string(death_date_string),
                    occupation=str(occupation.value) if occupation and occupation.value else "",
                    location=birth_place or "",
                )
            )
            ids[rec.xref_id] = person_id
            genders[person_id] = gender

        # Second pass: family records become spouse and parent -> child edges
        for rec in reader.records0("FAM"):
            if rec.xref_id is None:
                continue

            husb = rec.sub_tag("HUSB")
            wife = rec.sub_tag("WIFE")
            husb_id = ids.get(husb.xref_id) if husb and husb.xref_id else None
            wife_id = ids.get(wife.xref_id) if wife and wife.xref_id else None

            if husb_id and wife_id:
                divorced = rec.sub_tag("DIV") is not None
                add_edge(
                    husb_id,
                    wife_id,
                    RelationshipType.EX_SPOUSE if divorced else RelationshipType.SPOUSE,
                )

            for child in rec.sub_tags("CHIL"):
                child_id = ids.get(child.xref_id) if child.xref_id else None
                if child_id is None:
                    logger.warning(f"Family {rec.xref_id} lists an unknown child")
                    continue
                for parent_id in (husb_id, wife_id):
                    if parent_id:
                        add_edge(parent_id, child_id, child_type(genders[child_id]))

    logger.info(f"Imported {len(ids)} people and {len(relationship_ids)} relationships from {filepath}")
    return len(ids), len(relationship_ids)
