"""Graph validation for family tree data."""

import networkx as nx

from graph import build_graph, parent_child
from models import PARENT_TYPES
from store import FamilyStore

MIN_PARENT_AGE = 12


def validate_family(store: FamilyStore) -> list[str]:
    """
    Validate the family data for:
    - Relationships pointing at unknown people or at the same person
    - Non-canonical father/mother edges
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)
    - Date ordering issues

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    known = {p.id for p in store.get_all()}
    for rel in store.get_relationships():
        if rel.source_id not in known or rel.target_id not in known:
            warnings.append(f"Dangling: relationship {rel.id} refers to an unknown person")
        elif rel.source_id == rel.target_id:
            warnings.append(f"Invalid: relationship {rel.id} relates {rel.source_id} to themselves")
        if rel.type in PARENT_TYPES:
            warnings.append(
                f"Non-canonical: relationship {rel.id} is stored as '{rel.type.value}' "
                f"instead of a parent -> child edge"
            )

    G = build_graph(store)

    # Parent -> child edges only, for cycle detection
    parent_graph = nx.DiGraph()
    for _, _, rel in G.edges(data="relationship"):
        pair = parent_child(rel)
        if pair:
            parent_graph.add_edge(*pair)

    # Check for cycles
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # Impossible ages; ISO dates (YYYY-MM-DD) compare correctly as strings
    for parent_id, child_id in parent_graph.edges():
        parent = G.nodes[parent_id]["person"]
        child = G.nodes[child_id]["person"]
        if not (parent.birth_date and child.birth_date):
            continue

        if child.birth_date < parent.birth_date:
            warnings.append(f"Impossible: {child.full_name} born before parent {parent.full_name}")
            continue

        try:
            age = int(child.birth_date[:4]) - int(parent.birth_date[:4])
        except ValueError:
            continue
        if age < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {parent.full_name} was less than {MIN_PARENT_AGE} years "
                f"old when {child.full_name} was born"
            )

    for person in store.get_all():
        if person.birth_date and person.death_date and person.death_date < person.birth_date:
            warnings.append(f"Impossible: {person.full_name} died before being born")

    return warnings
